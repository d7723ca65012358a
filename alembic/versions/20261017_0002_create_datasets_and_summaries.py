"""create datasets and summaries tables

Revision ID: 20261017_0002
Revises: 20261017_0001
Create Date: 2026-10-17 09:20:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261017_0002"
down_revision = "20261017_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "datasets",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("registry", sa.String(length=16), nullable=False),
        sa.Column("serial", sa.BigInteger(), nullable=False),
        sa.Column("version", sa.String(length=16), nullable=False),
        sa.Column("record_count", sa.BigInteger(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("utc_offset", sa.SmallInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["registry"], ["registries.short_name"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("registry", "serial", name="uq_datasets_registry_serial"),
    )
    op.create_index("ix_datasets_registry_end_date", "datasets", ["registry", "end_date"], unique=False)

    op.create_table(
        "summaries",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("dataset_id", sa.Uuid(), nullable=False),
        sa.Column("record_type", sa.String(length=8), nullable=False),
        sa.Column("count", sa.BigInteger(), nullable=False),
        sa.Column("as_of", sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(["dataset_id"], ["datasets.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("dataset_id", "record_type", name="uq_summaries_dataset_record_type"),
    )


def downgrade() -> None:
    op.drop_table("summaries")
    op.drop_index("ix_datasets_registry_end_date", table_name="datasets")
    op.drop_table("datasets")
