"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Personnel is the aggregate root; history entries reference it optionally

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from officer_records.models.personnel import Personnel  # noqa: F401
from officer_records.models.config_entry import ConfigEntry  # noqa: F401
from officer_records.models.history import History  # noqa: F401
