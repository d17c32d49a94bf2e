"""Retirement Rules — age, retirement-age lookup, retirement date and BUP classification.

Invariants:
    - All functions are pure; the reference date is injectable (as_of), defaulting to today
    - Missing/unparseable birth date: compute_age → 0, compute_retirement_date → None,
      classify_bup_status → Unknown. None of these raise
    - RetirementAgeConfig is immutable and passed explicitly into every call
    - Invalid / non-finite / non-positive configured ages are replaced by the fallback age

Design Decisions:
    - Config is a value object built by the caller from the config store on each request,
      the calculator never reads storage itself
    - Three-way BUP classification (belum / akan / mencapai); the binary Aktif/Pensiun
      status is a separate comparison against the stored retirement date
    - 29 February birthdays roll over to 1 March in non-leap retirement years
"""

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any

from officer_records.core.domain_types import (
    BupStatus, ConfigKey, PatiGrade, ServiceStatus,
)
from officer_records.core.rank_rules import detect_grade


DEFAULT_PATI_RETIREMENT_AGE: int = 58
DEFAULT_OTHER_RETIREMENT_AGE: int = 53


@dataclass(frozen=True)
class RetirementAgeConfig:
    """Retirement ages per PATI grade and rank group. Defaults are the seeded values."""
    brigjen: int = 60
    mayjen: int = 61
    letjen: int = 62
    pamen: int = 58
    pama: int = 58
    other: int = 53

    @classmethod
    def from_entries(
        cls,
        entries: Mapping[str, Any],
        pati_fallback: int = DEFAULT_PATI_RETIREMENT_AGE,
        other_fallback: int = DEFAULT_OTHER_RETIREMENT_AGE,
    ) -> "RetirementAgeConfig":
        """Build from config-table rows keyed by ConfigKey value.

        A missing or invalid row falls back to pati_fallback (PATI grades, PAMEN, PAMA)
        or other_fallback (OTHER).
        """
        def age(key: ConfigKey, fallback: int) -> int:
            return coerce_age(entries.get(key.value), fallback)

        return cls(
            brigjen=age(ConfigKey.BUP_BRIGJEN, pati_fallback),
            mayjen=age(ConfigKey.BUP_MAYJEN, pati_fallback),
            letjen=age(ConfigKey.BUP_LETJEN, pati_fallback),
            pamen=age(ConfigKey.PENSIUN_USIA_PAMEN, pati_fallback),
            pama=age(ConfigKey.PENSIUN_USIA_PAMA, pati_fallback),
            other=age(ConfigKey.PENSIUN_USIA_OTHER, other_fallback),
        )

    def age_for_grade(self, grade: PatiGrade | None) -> int | None:
        """Configured age for brigjen/mayjen/letjen; None for jenderal or no grade."""
        if grade == PatiGrade.BRIGJEN:
            return self.brigjen
        if grade == PatiGrade.MAYJEN:
            return self.mayjen
        if grade == PatiGrade.LETJEN:
            return self.letjen
        return None

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def coerce_age(value: Any, default: int) -> int:
    """Parse a stored age. Anything not a finite positive number yields default."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value > 0 else default
    try:
        number = float(str(value).strip())
    except ValueError:
        return default
    if not math.isfinite(number) or number < 1:
        return default
    return int(number)


def coerce_date(value: Any) -> date | None:
    """date, datetime or ISO string → date. Anything else → None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def compute_age(birth_date: Any, as_of: Any = None) -> int:
    """Whole years elapsed between birth_date and as_of (today by default)."""
    birth = coerce_date(birth_date)
    if birth is None:
        return 0
    reference = coerce_date(as_of) or date.today()
    age = reference.year - birth.year
    if (reference.month, reference.day) < (birth.month, birth.day):
        age -= 1
    return age


def age_label(birth_date: Any, as_of: Any = None) -> str | None:
    """Age formatted as '58 Tahun', None without a usable birth date."""
    if coerce_date(birth_date) is None:
        return None
    return f"{compute_age(birth_date, as_of)} Tahun"


def add_years(value: date, years: int) -> date:
    """Same month/day, `years` later. 29 Feb → 1 Mar when the target year is not leap."""
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        return date(value.year + years, 3, 1)


def resolve_retirement_age(
    rank: str | None, config: RetirementAgeConfig,
) -> int | None:
    """Retirement age for a rank: grade age for PATI, OTHER age when no grade matches.

    A matched grade without a configured age (jenderal) resolves to None.
    """
    grade = detect_grade(rank)
    if grade is None:
        return config.other
    return config.age_for_grade(grade)


def compute_retirement_date(
    birth_date: Any, rank: str | None, config: RetirementAgeConfig,
) -> date | None:
    """Birth date plus the resolved retirement age. None when either is unavailable."""
    birth = coerce_date(birth_date)
    if birth is None:
        return None
    retirement_age = resolve_retirement_age(rank, config)
    if retirement_age is None:
        return None
    return add_years(birth, retirement_age)


def classify_bup_status(
    birth_date: Any,
    rank: str | None,
    config: RetirementAgeConfig,
    as_of: Any = None,
) -> BupStatus:
    """Three-way BUP status for brigjen/mayjen/letjen, Unknown for everyone else."""
    if coerce_date(birth_date) is None:
        return BupStatus.UNKNOWN
    bup_age = config.age_for_grade(detect_grade(rank))
    if bup_age is None:
        return BupStatus.UNKNOWN

    age = compute_age(birth_date, as_of)
    if age >= bup_age:
        return BupStatus.MENCAPAI_BUP
    if age == bup_age - 1:
        return BupStatus.AKAN_BUP
    return BupStatus.BELUM_BUP


def classify_service_status(
    retirement_date: Any, as_of: Any = None,
) -> ServiceStatus | None:
    """Pensiun once the stored retirement date is reached, Aktif before. None without a date."""
    retirement = coerce_date(retirement_date)
    if retirement is None:
        return None
    reference = coerce_date(as_of) or date.today()
    return ServiceStatus.PENSIUN if retirement <= reference else ServiceStatus.AKTIF
