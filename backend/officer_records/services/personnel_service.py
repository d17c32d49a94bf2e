"""Personnel Service — write path for personnel records and their denormalized retirement fields.

Invariants:
    - pensiun is recomputed on create and whenever ttl or pangkat change on update
    - status_bup is recomputed together with pensiun, using the same config snapshot
    - NRP uniqueness checked before every write that sets it (DuplicateNrpError); a
      concurrent insert that wins the race is caught at commit and reported the same way
    - History entries are written after the record commit (history_logger)

Design Decisions:
    - Retirement config read fresh per operation via config_store, passed into core/ explicitly
    - refresh_bup_statuses only writes rows whose computed values differ
"""

import logging
from datetime import date

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from officer_records.core.domain_types import HistoryAction
from officer_records.core.errors import DuplicateNrpError, ResourceNotFoundError
from officer_records.core.retirement import (
    RetirementAgeConfig, classify_bup_status, compute_retirement_date,
)
from officer_records.models.history import History
from officer_records.models.personnel import Personnel
from officer_records.schemas.personnel import PersonnelCreate, PersonnelUpdate
from officer_records.services.config_store import load_retirement_config
from officer_records.services.history_logger import log_history

logger = logging.getLogger(__name__)

RETIREMENT_INPUT_FIELDS = frozenset({"ttl", "pangkat"})


def apply_retirement_fields(
    personnel: Personnel, config: RetirementAgeConfig, as_of: date | None = None,
) -> bool:
    """Set pensiun and status_bup from ttl/pangkat. Returns True if either changed."""
    pensiun = compute_retirement_date(personnel.ttl, personnel.pangkat, config)
    status_bup = classify_bup_status(
        personnel.ttl, personnel.pangkat, config, as_of,
    ).value
    changed = personnel.pensiun != pensiun or personnel.status_bup != status_bup
    personnel.pensiun = pensiun
    personnel.status_bup = status_bup
    return changed


async def get_personnel_or_404(db: AsyncSession, personnel_id: int) -> Personnel:
    personnel = await db.get(Personnel, personnel_id)
    if not personnel:
        raise ResourceNotFoundError("Personnel", str(personnel_id))
    return personnel


async def ensure_unique_nrp(
    db: AsyncSession, nrp: str, exclude_id: int | None = None,
) -> None:
    query = select(Personnel.id).where(Personnel.nrp == nrp)
    if exclude_id is not None:
        query = query.where(Personnel.id != exclude_id)
    result = await db.execute(query)
    if result.first() is not None:
        raise DuplicateNrpError(nrp)


async def commit_with_unique_nrp(db: AsyncSession, nrp: str) -> None:
    """Commit; a unique-constraint race on nrp surfaces as DuplicateNrpError."""
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"NRP {nrp} lost a concurrent insert: {e}")
        raise DuplicateNrpError(nrp) from e


async def create_personnel(
    db: AsyncSession, body: PersonnelCreate, user_id: int | None = None,
) -> Personnel:
    await ensure_unique_nrp(db, body.nrp)
    personnel = Personnel(**body.model_dump())
    apply_retirement_fields(personnel, await load_retirement_config(db))
    db.add(personnel)
    await commit_with_unique_nrp(db, personnel.nrp)
    await db.refresh(personnel)
    logger.info(
        f"Personnel {personnel.nrp} created", extra={"personnel_id": personnel.id},
    )
    await log_history(
        db, user_id=user_id, action=HistoryAction.PERSONIL_CREATED,
        personnel_id=personnel.id, detail=f"Created {personnel.nama}",
    )
    return personnel


async def update_personnel(
    db: AsyncSession,
    personnel: Personnel,
    body: PersonnelUpdate,
    user_id: int | None = None,
) -> Personnel:
    """Apply only the fields present in the request body."""
    changes = body.model_dump(exclude_unset=True)
    if changes.get("nrp") and changes["nrp"] != personnel.nrp:
        await ensure_unique_nrp(db, changes["nrp"], exclude_id=personnel.id)
    for name in ("nrp", "nama"):
        if name in changes and changes[name] is None:
            del changes[name]

    for name, value in changes.items():
        setattr(personnel, name, value)
    if RETIREMENT_INPUT_FIELDS & changes.keys():
        apply_retirement_fields(personnel, await load_retirement_config(db))

    await commit_with_unique_nrp(db, personnel.nrp)
    await db.refresh(personnel)
    await log_history(
        db, user_id=user_id, action=HistoryAction.PERSONIL_UPDATED,
        personnel_id=personnel.id, detail=f"Updated {personnel.nama}",
        request_data=body.model_dump(mode="json", exclude_unset=True),
    )
    return personnel


async def delete_personnel(
    db: AsyncSession, personnel: Personnel, user_id: int | None = None,
) -> None:
    personnel_id, label = personnel.id, f"{personnel.nama} ({personnel.nrp})"
    await db.execute(
        update(History)
        .where(History.personnel_id == personnel_id)
        .values(personnel_id=None),
    )
    await db.delete(personnel)
    await db.commit()
    logger.info(f"Personnel {personnel_id} deleted", extra={"personnel_id": personnel_id})
    await log_history(
        db, user_id=user_id, action=HistoryAction.PERSONIL_DELETED,
        detail=f"Deleted {label}",
    )


async def refresh_bup_statuses(
    db: AsyncSession, as_of: date | None = None,
) -> tuple[int, int]:
    """Recompute pensiun/status_bup for every record. Returns (updated, unchanged)."""
    config = await load_retirement_config(db)
    result = await db.execute(select(Personnel).order_by(Personnel.id))
    updated = unchanged = 0
    for personnel in result.scalars():
        if apply_retirement_fields(personnel, config, as_of):
            updated += 1
        else:
            unchanged += 1
    await db.commit()
    logger.info(
        f"BUP refresh complete: {updated} updated, {unchanged} unchanged",
        extra={"updated": updated, "unchanged": unchanged},
    )
    return updated, unchanged
