"""Statistics Routes — head counts by rank and live BUP counts for general officers.

Invariants:
    - category=all → {total}; group → {pati, pamen, pama}; rank → ten known ranks, zero-filled
    - BUP figures are computed at request time from ttl/pangkat and the current config,
      not read from the stored status_bup
    - Only brigjen/mayjen/letjen have a BUP age; other general officers are not counted
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from officer_records.core.domain_types import BupStatus
from officer_records.core.errors import InvalidCategoryError
from officer_records.core.rank_statistics import tally_by_group, tally_by_rank
from officer_records.core.retirement import classify_bup_status
from officer_records.infrastructure.database import get_db
from officer_records.models.personnel import Personnel
from officer_records.schemas.personnel import PersonnelResponse
from officer_records.services.config_store import load_retirement_config

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/statistics", tags=["statistics"])

COUNT_CATEGORIES = ["all", "group", "rank"]


@router.get("/personnel")
async def count_personnel(
    category: str = Query("all"), db: AsyncSession = Depends(get_db),
):
    """Personnel totals by category."""
    if category not in COUNT_CATEGORIES:
        raise InvalidCategoryError(category, COUNT_CATEGORIES)

    if category == "all":
        total = await db.scalar(select(func.count()).select_from(Personnel))
        return {"total": total or 0}

    result = await db.execute(
        select(Personnel.pangkat, func.count()).group_by(Personnel.pangkat),
    )
    rank_counts = [(rank, count) for rank, count in result.all()]
    if category == "group":
        return tally_by_group(rank_counts)
    return tally_by_rank(rank_counts)


async def _classified_general_officers(
    db: AsyncSession,
) -> list[tuple[Personnel, BupStatus]]:
    """General officers (rank contains 'jen') with their live BUP status."""
    config = await load_retirement_config(db)
    result = await db.execute(
        select(Personnel)
        .where(Personnel.pangkat.ilike("%jen%"))
        .order_by(Personnel.nama),
    )
    return [
        (p, classify_bup_status(p.ttl, p.pangkat, config))
        for p in result.scalars().all()
    ]


@router.get("/bup/count")
async def count_bup(db: AsyncSession = Depends(get_db)):
    officers = await _classified_general_officers(db)
    statuses = [bup_status for _, bup_status in officers]
    return {
        "sudah_bup": statuses.count(BupStatus.MENCAPAI_BUP),
        "akan_bup": statuses.count(BupStatus.AKAN_BUP),
        "belum_bup": statuses.count(BupStatus.BELUM_BUP),
    }


@router.get("/bup/list")
async def list_bup(db: AsyncSession = Depends(get_db)):
    """General officers who have reached their BUP age."""
    officers = await _classified_general_officers(db)
    data = []
    for personnel, bup_status in officers:
        if bup_status != BupStatus.MENCAPAI_BUP:
            continue
        record = PersonnelResponse.model_validate(personnel)
        record.status_bup = bup_status.value
        data.append(record.model_dump(mode="json"))
    return {"data": data}
