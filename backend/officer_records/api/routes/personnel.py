"""Personnel Routes — CRUD, filtered listings and per-record pension for officer records.

Invariants:
    - Listing is paginated (page ≥ 1, limit 1..200) and ordered by nama
    - Text filters are case-insensitive "contains" matches
    - GET /{id} returns the age label and a BUP status computed with the current config,
      independent of the stored status_bup
    - Write operations go through services/personnel_service.py

Design Decisions:
    - /officers declared before /{personnel_id} so the static path wins
    - Group filters reuse the prefixes from core/rank_rules.py as substrings
"""

import logging
import math

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from officer_records.api.dependencies import get_user_id
from officer_records.core.domain_types import RankGroup
from officer_records.core.errors import InvalidCategoryError
from officer_records.core.pension import PensionInput, compute_pension
from officer_records.core.rank_rules import GROUP_RULES, rank_patterns_for_group
from officer_records.core.retirement import age_label, classify_bup_status
from officer_records.infrastructure.database import get_db
from officer_records.models.personnel import Personnel
from officer_records.schemas.pension import PensionResponse
from officer_records.schemas.personnel import (
    PersonnelCreate, PersonnelDetail, PersonnelPage, PersonnelResponse, PersonnelUpdate,
)
from officer_records.services.config_store import load_retirement_config
from officer_records.services.personnel_service import (
    create_personnel as create_personnel_record,
    delete_personnel as delete_personnel_record,
    get_personnel_or_404,
    update_personnel as update_personnel_record,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/personnel", tags=["personnel"])

OFFICER_CATEGORIES = ["all", "pati", "pamen", "pama"]


def _group_patterns(category: str) -> tuple[str, ...]:
    """Rank substrings for an officer category; 'all' is every officer group."""
    if category not in OFFICER_CATEGORIES:
        raise InvalidCategoryError(category, OFFICER_CATEGORIES)
    if category == "all":
        return tuple(p for prefixes, _ in GROUP_RULES for p in prefixes)
    return rank_patterns_for_group(RankGroup(category))


def _pangkat_matches_any(patterns: tuple[str, ...]):
    return or_(*(Personnel.pangkat.ilike(f"%{p}%") for p in patterns))


@router.get("", response_model=PersonnelPage)
async def list_personnel(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    nrp: str | None = Query(None),
    nama: str | None = Query(None),
    pangkat: str | None = Query(None),
    kesatuan: str | None = Query(None),
    group: str = Query("all"),
    db: AsyncSession = Depends(get_db),
):
    """List personnel with optional filters and pagination."""
    conditions = []
    for column, value in (
        (Personnel.nrp, nrp), (Personnel.nama, nama),
        (Personnel.pangkat, pangkat), (Personnel.kesatuan, kesatuan),
    ):
        if value and value.strip():
            conditions.append(column.ilike(f"%{value.strip()}%"))
    group = group.strip().lower()
    if group != "all":
        conditions.append(_pangkat_matches_any(_group_patterns(group)))

    total = await db.scalar(
        select(func.count()).select_from(Personnel).where(*conditions),
    )
    result = await db.execute(
        select(Personnel)
        .where(*conditions)
        .order_by(Personnel.nama)
        .limit(limit)
        .offset((page - 1) * limit),
    )
    return PersonnelPage(
        data=[PersonnelResponse.model_validate(p) for p in result.scalars().all()],
        page=page,
        limit=limit,
        total=total or 0,
        total_pages=math.ceil((total or 0) / limit),
    )


@router.get("/officers")
async def list_officers(
    category: str = Query("all"),
    pangkat: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
):
    """Officers of one rank category, newest records first."""
    category = category.strip().lower()
    conditions = [
        Personnel.pangkat.is_not(None),
        _pangkat_matches_any(_group_patterns(category)),
    ]
    if pangkat and pangkat.strip():
        conditions.append(Personnel.pangkat.ilike(f"%{pangkat.strip()}%"))

    result = await db.execute(
        select(Personnel)
        .where(*conditions)
        .order_by(Personnel.id.desc())
        .limit(limit)
        .offset((page - 1) * limit),
    )
    officers = [PersonnelResponse.model_validate(p) for p in result.scalars().all()]
    return {
        "data": [o.model_dump(mode="json") for o in officers],
        "category": category,
        "total": len(officers),
        "page": page,
        "limit": limit,
    }


@router.post(
    "", response_model=PersonnelResponse, status_code=status.HTTP_201_CREATED,
)
async def create_personnel(
    body: PersonnelCreate,
    db: AsyncSession = Depends(get_db),
    user_id: int | None = Depends(get_user_id),
):
    """Create a personnel record; pensiun and status_bup are computed."""
    personnel = await create_personnel_record(db, body, user_id)
    return PersonnelResponse.model_validate(personnel)


@router.get("/{personnel_id}", response_model=PersonnelDetail)
async def get_personnel(
    personnel_id: int, db: AsyncSession = Depends(get_db),
):
    """Personnel record with age label and live BUP status."""
    personnel = await get_personnel_or_404(db, personnel_id)
    config = await load_retirement_config(db)
    detail = PersonnelDetail.model_validate(personnel)
    detail.usia = age_label(personnel.ttl)
    detail.status_bup = classify_bup_status(
        personnel.ttl, personnel.pangkat, config,
    ).value
    return detail


@router.patch("/{personnel_id}", response_model=PersonnelResponse)
async def update_personnel(
    personnel_id: int,
    body: PersonnelUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: int | None = Depends(get_user_id),
):
    """Partial update. Retirement fields follow ttl/pangkat changes."""
    personnel = await get_personnel_or_404(db, personnel_id)
    personnel = await update_personnel_record(db, personnel, body, user_id)
    return PersonnelResponse.model_validate(personnel)


@router.delete("/{personnel_id}")
async def delete_personnel(
    personnel_id: int,
    db: AsyncSession = Depends(get_db),
    user_id: int | None = Depends(get_user_id),
):
    personnel = await get_personnel_or_404(db, personnel_id)
    await delete_personnel_record(db, personnel, user_id)
    return {"message": "Personnel deleted successfully"}


@router.get("/{personnel_id}/pension", response_model=PensionResponse)
async def get_personnel_pension(
    personnel_id: int, db: AsyncSession = Depends(get_db),
):
    """Pension breakdown from the stored record. 400 when inputs are missing."""
    personnel = await get_personnel_or_404(db, personnel_id)
    breakdown = compute_pension(PensionInput.from_record(personnel))
    return breakdown.to_dict()
