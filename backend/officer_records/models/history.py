"""History ORM — audit trail of actions taken on personnel and configuration.

Invariants:
    - action is non-nullable (HistoryAction values, free text accepted)
    - personnel_id is nullable and set to NULL when the personnel record is deleted
    - user_id references the external auth service; no FK in this schema

Design Decisions:
    - personnel relationship loaded with selectin: history listings always show the summary
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from officer_records.db.base import Base


class History(Base):
    """History entry — who did what to which record."""
    __tablename__ = "history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    personnel_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("personnel.id", ondelete="SET NULL"), nullable=True,
    )
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    personnel: Mapped["Personnel | None"] = relationship(
        "Personnel", lazy="selectin",
    )
