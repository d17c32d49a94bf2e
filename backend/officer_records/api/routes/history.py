"""History Routes — audit log listing, manual entries, deletion and retirement recap.

Invariants:
    - Listing is newest first and includes a personnel summary when the record still exists
    - POST validates that personnel_id, when given, refers to an existing record
    - /retirements is computed from the stored pensiun column; total counts only
      records with a retirement date, so it equals the sum of the monthly counts
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from officer_records.core.errors import ResourceNotFoundError
from officer_records.core.retirement_recap import build_retirement_recap
from officer_records.infrastructure.database import get_db
from officer_records.models.history import History
from officer_records.models.personnel import Personnel
from officer_records.schemas.history import HistoryCreate, HistoryResponse
from officer_records.services.personnel_service import get_personnel_or_404

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/history", tags=["history"])


@router.get("", response_model=list[HistoryResponse])
async def list_history(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(History)
        .order_by(History.created_at.desc(), History.id.desc())
        .limit(limit)
        .offset(offset),
    )
    return [HistoryResponse.model_validate(h) for h in result.scalars().all()]


@router.post(
    "", response_model=HistoryResponse, status_code=status.HTTP_201_CREATED,
)
async def create_history(
    body: HistoryCreate, db: AsyncSession = Depends(get_db),
):
    if body.personnel_id is not None:
        await get_personnel_or_404(db, body.personnel_id)
    entry = History(**body.model_dump())
    db.add(entry)
    await db.commit()
    await db.refresh(entry, ["personnel"])
    return HistoryResponse.model_validate(entry)


@router.get("/retirements")
async def retirement_recap(db: AsyncSession = Depends(get_db)):
    """Number of retirements per month, grouped by year."""
    result = await db.execute(
        select(Personnel.pensiun).where(Personnel.pensiun.is_not(None)),
    )
    dates = result.scalars().all()
    return {
        "data": build_retirement_recap(dates),
        "total": len(dates),
    }


@router.delete("/{history_id}")
async def delete_history(
    history_id: int, db: AsyncSession = Depends(get_db),
):
    entry = await db.get(History, history_id)
    if not entry:
        raise ResourceNotFoundError("History", str(history_id))
    await db.delete(entry)
    await db.commit()
    logger.info(f"History {history_id} deleted", extra={"history_id": history_id})
    return {"message": f"History {history_id} deleted"}
