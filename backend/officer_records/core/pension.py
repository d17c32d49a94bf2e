"""Pension Rules — base pension, tier ceiling lookup, spouse and child allowances.

Invariants:
    - GPT, MDK, TMT_TNI and PENSIUN are required; missing ones raise MissingPensionInputError
      naming every missing field (never silently defaulted)
    - usia = PENSIUN.year - TMT_TNI.year (calendar years only)
    - Every fractional product is floored; all magnitudes are non-negative integers
    - Child allowance counts at most 2 slots whose status is exactly "AKTIF", in slot order 1..4
    - PENSION_TIERS is contiguous: each min == previous max + 1

Design Decisions:
    - Rates applied as integer fractions (3/4, 1/40, 35/100, 1/10) so flooring is exact
    - Amounts above the last bracket pass through unchanged (observed behaviour, kept as-is)
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, NamedTuple

from officer_records.core.errors import MissingPensionInputError
from officer_records.core.retirement import coerce_date


FULL_SERVICE_YEARS: int = 30
ACTIVE_CHILD_STATUS: str = "AKTIF"
MAX_ALLOWANCE_CHILDREN: int = 2


class PensionTier(NamedTuple):
    min: int
    max: int
    ceiling: int


PENSION_TIERS: tuple[PensionTier, ...] = (
    PensionTier(0, 1_775_000, 1_775_000),
    PensionTier(1_775_001, 1_901_300, 1_901_300),
    PensionTier(1_901_301, 2_027_500, 2_027_500),
    PensionTier(2_027_501, 2_153_700, 2_153_700),
    PensionTier(2_153_701, 2_279_900, 2_279_900),
    PensionTier(2_279_901, 2_406_100, 2_406_100),
    PensionTier(2_406_101, 2_532_300, 2_532_300),
    PensionTier(2_532_301, 2_658_600, 2_658_600),
    PensionTier(2_658_601, 2_784_800, 2_784_800),
    PensionTier(2_784_801, 2_911_000, 2_911_000),
    PensionTier(2_911_001, 3_037_200, 3_037_200),
    PensionTier(3_037_201, 3_163_400, 3_163_400),
    PensionTier(3_163_401, 3_289_600, 3_289_600),
    PensionTier(3_289_601, 3_415_900, 3_415_900),
    PensionTier(3_415_901, 3_542_100, 3_542_100),
    PensionTier(3_542_101, 3_668_300, 3_668_300),
    PensionTier(3_668_301, 3_794_500, 3_794_500),
    PensionTier(3_794_501, 3_920_700, 3_920_700),
    PensionTier(3_920_701, 4_046_900, 4_046_900),
    PensionTier(4_046_901, 4_173_200, 4_173_200),
    PensionTier(4_173_201, 4_299_400, 4_299_400),
    PensionTier(4_299_401, 4_425_600, 4_425_600),
    PensionTier(4_425_601, 4_551_800, 4_551_800),
    PensionTier(4_551_801, 4_678_000, 4_678_000),
    PensionTier(4_678_001, 4_804_200, 4_804_200),
)


@dataclass(frozen=True)
class PensionInput:
    """Fields of a personnel record the pension computation reads."""
    gpt: int | None
    mdk: int | None
    tmt_tni: date | None
    pensiun: date | None
    has_partner: bool = False
    child_statuses: tuple[str | None, ...] = ()

    @classmethod
    def from_record(cls, record: Any) -> "PensionInput":
        """Adapt an object with lower-case personnel attributes (ORM row, schema)."""
        return cls(
            gpt=coerce_amount(getattr(record, "gpt", None)),
            mdk=coerce_amount(getattr(record, "mdk", None)),
            tmt_tni=coerce_date(getattr(record, "tmt_tni", None)),
            pensiun=coerce_date(getattr(record, "pensiun", None)),
            has_partner=has_value(getattr(record, "pasangan", None)),
            child_statuses=tuple(
                getattr(record, f"sts_anak_{slot}", None) for slot in range(1, 5)
            ),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PensionInput":
        """Adapt a mapping keyed by the upper-case record fields (GPT, MDK, TMT_TNI, ...)."""
        return cls(
            gpt=coerce_amount(data.get("GPT")),
            mdk=coerce_amount(data.get("MDK")),
            tmt_tni=coerce_date(data.get("TMT_TNI")),
            pensiun=coerce_date(data.get("PENSIUN")),
            has_partner=has_value(data.get("PASANGAN")),
            child_statuses=tuple(data.get(f"STS_ANAK_{slot}") for slot in range(1, 5)),
        )


@dataclass(frozen=True)
class PensionBreakdown:
    usia: int
    penspok: int
    tunjangan_istri: int
    tunjangan_anak: int
    total_pensiun: int

    def to_dict(self) -> dict[str, int]:
        return {
            "usia": self.usia,
            "PENSPOK": self.penspok,
            "TUNJANGAN_ISTRI": self.tunjangan_istri,
            "TUNJANGAN_ANAK": self.tunjangan_anak,
            "TOTAL_PENSIUN": self.total_pensiun,
        }


def coerce_amount(value: Any) -> int | None:
    """Parse a salary factor. Non-numeric or non-finite → None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def has_value(value: Any) -> bool:
    """True for any non-null, non-empty value. Whitespace-only text counts as present."""
    return value is not None and value != ""


def apply_pension_tier(amount: int) -> int:
    """Ceiling of the bracket containing amount; amounts outside every bracket pass through."""
    for tier in PENSION_TIERS:
        if tier.min <= amount <= tier.max:
            return tier.ceiling
    return amount


def count_active_children(statuses: Sequence[str | None]) -> int:
    """Slots (first four, in order) with status exactly 'AKTIF', capped at 2."""
    active = [s for s in statuses[:4] if s == ACTIVE_CHILD_STATUS]
    return len(active[:MAX_ALLOWANCE_CHILDREN])


def missing_pension_fields(data: PensionInput) -> list[str]:
    missing = []
    if not data.gpt:
        missing.append("GPT")
    if not data.mdk:
        missing.append("MDK")
    if data.tmt_tni is None:
        missing.append("TMT_TNI")
    if data.pensiun is None:
        missing.append("PENSIUN")
    return missing


def compute_base_pension(service_years: int, gpt: int, mdk: int) -> int:
    """75% of GPT at 30+ years of service, otherwise 2.5% per MDK unit."""
    if service_years >= FULL_SERVICE_YEARS:
        return gpt * 3 // 4
    return mdk * gpt // 40


def compute_pension(data: PensionInput) -> PensionBreakdown:
    """Tiered base pension plus allowances. Raises MissingPensionInputError."""
    missing = missing_pension_fields(data)
    if missing:
        raise MissingPensionInputError(missing)

    usia = data.pensiun.year - data.tmt_tni.year
    penspok = apply_pension_tier(compute_base_pension(usia, data.gpt, data.mdk))

    tunjangan_istri = penspok * 35 // 100 if data.has_partner else 0
    children = count_active_children(data.child_statuses)
    tunjangan_anak = penspok * children // 10

    return PensionBreakdown(
        usia=usia,
        penspok=penspok,
        tunjangan_istri=tunjangan_istri,
        tunjangan_anak=tunjangan_anak,
        total_pensiun=penspok + tunjangan_istri + tunjangan_anak,
    )
