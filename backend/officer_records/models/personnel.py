"""Personnel ORM — one officer record with service, salary and family data.

Invariants:
    - nrp (service number) is unique and non-nullable
    - pensiun and status_bup are denormalized: recomputed by the service layer whenever
      ttl or pangkat change, or on a bulk BUP refresh — never written by clients directly
    - sts_anak_1..4 hold the dependent status; only the literal "AKTIF" counts for allowances

Design Decisions:
    - Four fixed child slots mirror the paper personnel file (no child table)
    - Integer primary key: records are addressed by id in every route
"""

from datetime import date, datetime, timezone

from sqlalchemy import String, Text, Integer, Date, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from officer_records.db.base import Base


class Personnel(Base):
    """Officer personnel record."""
    __tablename__ = "personnel"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nrp: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    nama: Mapped[str] = mapped_column(String(200), nullable=False)
    pangkat: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    kesatuan: Mapped[str | None] = mapped_column(String(200), nullable=True)
    ttl: Mapped[date | None] = mapped_column(Date, nullable=True)
    tmt_tni: Mapped[date | None] = mapped_column(Date, nullable=True)
    npwp: Mapped[str | None] = mapped_column(String(30), nullable=True)
    alamat: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Salary factors
    gpt: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mdk: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mkg: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Family
    pasangan: Mapped[str | None] = mapped_column(String(200), nullable=True)
    ttl_pasangan: Mapped[date | None] = mapped_column(Date, nullable=True)
    anak_1: Mapped[str | None] = mapped_column(String(200), nullable=True)
    ttl_anak_1: Mapped[date | None] = mapped_column(Date, nullable=True)
    sts_anak_1: Mapped[str | None] = mapped_column(String(20), nullable=True)
    anak_2: Mapped[str | None] = mapped_column(String(200), nullable=True)
    ttl_anak_2: Mapped[date | None] = mapped_column(Date, nullable=True)
    sts_anak_2: Mapped[str | None] = mapped_column(String(20), nullable=True)
    anak_3: Mapped[str | None] = mapped_column(String(200), nullable=True)
    ttl_anak_3: Mapped[date | None] = mapped_column(Date, nullable=True)
    sts_anak_3: Mapped[str | None] = mapped_column(String(20), nullable=True)
    anak_4: Mapped[str | None] = mapped_column(String(200), nullable=True)
    ttl_anak_4: Mapped[date | None] = mapped_column(Date, nullable=True)
    sts_anak_4: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # Denormalized retirement data
    pensiun: Mapped[date | None] = mapped_column(Date, nullable=True)
    status_bup: Mapped[str | None] = mapped_column(String(20), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
