"""Config Store — reads and writes retirement ages in the config table.

Invariants:
    - load_retirement_config reads the table on every call (no caching); concurrent requests
      may observe different snapshots around an admin update
    - save_bup_ages upserts only the keys it is given and commits once
    - Missing/invalid rows fall back to the Settings defaults (58 PATI/PAMEN/PAMA, 53 OTHER)
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from officer_records.config import get_settings
from officer_records.core.domain_types import AGE_KEYS
from officer_records.core.retirement import RetirementAgeConfig
from officer_records.models.config_entry import ConfigEntry

logger = logging.getLogger(__name__)


async def load_config_entries(db: AsyncSession) -> dict[str, str]:
    keys = [key.value for key in AGE_KEYS.values()]
    result = await db.execute(select(ConfigEntry).where(ConfigEntry.key.in_(keys)))
    return {entry.key: entry.value for entry in result.scalars().all()}


async def load_retirement_config(db: AsyncSession) -> RetirementAgeConfig:
    """Fresh RetirementAgeConfig from the config table."""
    settings = get_settings()
    entries = await load_config_entries(db)
    return RetirementAgeConfig.from_entries(
        entries,
        pati_fallback=settings.default_pati_retirement_age,
        other_fallback=settings.default_other_retirement_age,
    )


async def save_bup_ages(db: AsyncSession, ages: dict[str, int]) -> list[str]:
    """Upsert the given ages (keys: brigjen, mayjen, ...). Returns the config keys written."""
    written = []
    for name, age in ages.items():
        config_key = AGE_KEYS.get(name)
        if config_key is None or age is None:
            continue
        entry = await db.get(ConfigEntry, config_key.value)
        if entry:
            entry.value = str(age)
        else:
            db.add(ConfigEntry(key=config_key.value, value=str(age)))
        written.append(config_key.value)
        logger.info(
            f"Retirement age {config_key.value} set to {age}",
            extra={"config_key": config_key.value},
        )
    await db.commit()
    return written


async def seed_default_config(db: AsyncSession) -> bool:
    """Insert the default ages when the config table has none. Returns True if seeded."""
    if await load_config_entries(db):
        return False
    defaults = RetirementAgeConfig().to_dict()
    for name, config_key in AGE_KEYS.items():
        db.add(ConfigEntry(key=config_key.value, value=str(defaults[name])))
    await db.commit()
    logger.info("Seeded default retirement ages")
    return True
