"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - All valid states encoded as Enums — no raw string matching outside core/
    - BupStatus / ServiceStatus values are the exact strings persisted in personnel.status_bup
    - ConfigKey values are the exact keys stored in the config table

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class RankGroup(str, Enum):
    """Officer rank groups used for statistics and filtering."""
    PATI = "pati"
    PAMEN = "pamen"
    PAMA = "pama"
    OTHER = "other"


class PatiGrade(str, Enum):
    """General-officer grades. JENDERAL has no configured retirement age."""
    BRIGJEN = "brigjen"
    MAYJEN = "mayjen"
    LETJEN = "letjen"
    JENDERAL = "jenderal"


class BupStatus(str, Enum):
    """Three-way BUP classification for PATI personnel."""
    UNKNOWN = "Unknown"
    BELUM_BUP = "belum bup"
    AKAN_BUP = "akan bup"
    MENCAPAI_BUP = "mencapai bup"


class ServiceStatus(str, Enum):
    """Binary status against the stored retirement date (all personnel)."""
    AKTIF = "Aktif"
    PENSIUN = "Pensiun"


class ConfigKey(str, Enum):
    """Keys of the retirement-age rows in the config table."""
    BUP_BRIGJEN = "BUP_BRIGJEN"
    BUP_MAYJEN = "BUP_MAYJEN"
    BUP_LETJEN = "BUP_LETJEN"
    PENSIUN_USIA_PAMEN = "PENSIUN_USIA_PAMEN"
    PENSIUN_USIA_PAMA = "PENSIUN_USIA_PAMA"
    PENSIUN_USIA_OTHER = "PENSIUN_USIA_OTHER"


class HistoryAction(str, Enum):
    """Action codes written to the history log."""
    PERSONIL_CREATED = "PERSONIL_CREATED"
    PERSONIL_UPDATED = "PERSONIL_UPDATED"
    PERSONIL_DELETED = "PERSONIL_DELETED"
    CONFIG_UPDATED = "CONFIG_UPDATED"
    BUP_REFRESHED = "BUP_REFRESHED"


# Age keys exposed through the admin config API, in display order.
AGE_KEYS: dict[str, ConfigKey] = {
    "brigjen": ConfigKey.BUP_BRIGJEN,
    "mayjen": ConfigKey.BUP_MAYJEN,
    "letjen": ConfigKey.BUP_LETJEN,
    "pamen": ConfigKey.PENSIUN_USIA_PAMEN,
    "pama": ConfigKey.PENSIUN_USIA_PAMA,
    "other": ConfigKey.PENSIUN_USIA_OTHER,
}
