"""Initial schema — personnel, config (seeded retirement ages), history.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_AGES = {
    "BUP_BRIGJEN": "60",
    "BUP_MAYJEN": "61",
    "BUP_LETJEN": "62",
    "PENSIUN_USIA_PAMEN": "58",
    "PENSIUN_USIA_PAMA": "58",
    "PENSIUN_USIA_OTHER": "53",
}


def _child_columns(slot: int) -> list[sa.Column]:
    return [
        sa.Column(f"anak_{slot}", sa.String(200), nullable=True),
        sa.Column(f"ttl_anak_{slot}", sa.Date, nullable=True),
        sa.Column(f"sts_anak_{slot}", sa.String(20), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "personnel",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("nrp", sa.String(30), nullable=False, unique=True),
        sa.Column("nama", sa.String(200), nullable=False),
        sa.Column("pangkat", sa.String(100), nullable=True),
        sa.Column("kesatuan", sa.String(200), nullable=True),
        sa.Column("ttl", sa.Date, nullable=True),
        sa.Column("tmt_tni", sa.Date, nullable=True),
        sa.Column("npwp", sa.String(30), nullable=True),
        sa.Column("alamat", sa.Text, nullable=True),
        sa.Column("gpt", sa.Integer, nullable=True),
        sa.Column("mdk", sa.Integer, nullable=True),
        sa.Column("mkg", sa.Integer, nullable=True),
        sa.Column("pasangan", sa.String(200), nullable=True),
        sa.Column("ttl_pasangan", sa.Date, nullable=True),
        *_child_columns(1),
        *_child_columns(2),
        *_child_columns(3),
        *_child_columns(4),
        sa.Column("pensiun", sa.Date, nullable=True),
        sa.Column("status_bup", sa.String(20), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_personnel_pangkat", "personnel", ["pangkat"])

    config_table = op.create_table(
        "config",
        sa.Column("key", sa.String(50), primary_key=True),
        sa.Column("value", sa.String(100), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.bulk_insert(
        config_table,
        [{"key": key, "value": value} for key, value in DEFAULT_AGES.items()],
    )

    op.create_table(
        "history",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, nullable=True),
        sa.Column(
            "personnel_id", sa.Integer,
            sa.ForeignKey("personnel.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("detail", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_history_user_id", "history", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_history_user_id", table_name="history")
    op.drop_table("history")
    op.drop_table("config")
    op.drop_index("ix_personnel_pangkat", table_name="personnel")
    op.drop_table("personnel")
