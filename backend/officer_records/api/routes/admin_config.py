"""Admin Config Routes — retirement ages and bulk recomputation of retirement fields.

Invariants:
    - GET always reads the config table (no caching), fallbacks applied for missing rows
    - PUT upserts only the ages present in the body; unknown keys → 400
    - Changing ages does not touch stored personnel rows; POST /refresh-bup does
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from officer_records.api.dependencies import get_user_id
from officer_records.core.domain_types import HistoryAction
from officer_records.infrastructure.database import get_db
from officer_records.schemas.admin_config import (
    BupAgesResponse, BupAgesUpdate, BupRefreshResponse,
)
from officer_records.services.config_store import load_retirement_config, save_bup_ages
from officer_records.services.history_logger import log_history
from officer_records.services.personnel_service import refresh_bup_statuses

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/admin/config", tags=["admin"])


@router.get("", response_model=BupAgesResponse)
async def get_bup_ages(db: AsyncSession = Depends(get_db)):
    config = await load_retirement_config(db)
    return BupAgesResponse(bup_ages=config.to_dict())


@router.put("")
async def update_bup_ages(
    body: BupAgesUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: int | None = Depends(get_user_id),
):
    ages = body.bup_ages.model_dump(exclude_none=True)
    written = await save_bup_ages(db, ages)
    if written:
        await log_history(
            db, user_id=user_id, action=HistoryAction.CONFIG_UPDATED,
            detail=f"Updated {', '.join(written)}", request_data=ages,
        )
    config = await load_retirement_config(db)
    return {
        "message": "BUP ages updated successfully",
        "bup_ages": config.to_dict(),
    }


@router.post("/refresh-bup", response_model=BupRefreshResponse)
async def refresh_bup(
    db: AsyncSession = Depends(get_db),
    user_id: int | None = Depends(get_user_id),
):
    """Recompute pensiun and status_bup for every personnel record."""
    updated, unchanged = await refresh_bup_statuses(db)
    await log_history(
        db, user_id=user_id, action=HistoryAction.BUP_REFRESHED,
        response_data={"updated": updated, "unchanged": unchanged},
    )
    return BupRefreshResponse(updated=updated, unchanged=unchanged)
