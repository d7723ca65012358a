"""create records_ipv4, records_ipv6 and records_asn tables

Revision ID: 20261017_0003
Revises: 20261017_0002
Create Date: 2026-10-17 09:30:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261017_0003"
down_revision = "20261017_0002"
branch_labels = None
depends_on = None

# table name -> (key columns, indexed start column)
RECORD_TABLES = {
    "records_ipv4": (
        [
            sa.Column("start_address", sa.BigInteger(), nullable=False),
            sa.Column("host_count", sa.BigInteger(), nullable=False),
        ],
        "start_address",
    ),
    "records_ipv6": (
        [
            sa.Column("start_address", sa.LargeBinary(length=16), nullable=False),
            sa.Column("prefix_length", sa.SmallInteger(), nullable=False),
        ],
        "start_address",
    ),
    "records_asn": (
        [
            sa.Column("start_asn", sa.BigInteger(), nullable=False),
            sa.Column("asn_count", sa.Integer(), nullable=False),
        ],
        "start_asn",
    ),
}


def _common_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("dataset_id", sa.Uuid(), nullable=True),
        sa.Column("registry", sa.String(length=16), nullable=False),
        sa.Column("country_code", sa.String(length=2), nullable=False),
        sa.Column("allocated_on", sa.Date(), nullable=False),
        sa.Column("state", sa.String(length=16), nullable=False),
        sa.Column("opaque_id", sa.String(length=255), nullable=False),
        sa.Column("extensions", sa.Text(), nullable=False),
        sa.Column("as_of", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    for table_name, (key_columns, start_column) in RECORD_TABLES.items():
        key_names = [column.name for column in key_columns]
        op.create_table(
            table_name,
            *_common_columns(),
            *key_columns,
            sa.ForeignKeyConstraint(["dataset_id"], ["datasets.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["registry"], ["registries.short_name"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint(
                "registry",
                "country_code",
                *key_names,
                "allocated_on",
                "state",
                name=f"uq_{table_name}_natural_key",
            ),
        )
        op.create_index(f"ix_{table_name}_{start_column}", table_name, [start_column], unique=False)
        op.create_index(f"ix_{table_name}_dataset_id", table_name, ["dataset_id"], unique=False)


def downgrade() -> None:
    for table_name, (_, start_column) in reversed(list(RECORD_TABLES.items())):
        op.drop_index(f"ix_{table_name}_dataset_id", table_name=table_name)
        op.drop_index(f"ix_{table_name}_{start_column}", table_name=table_name)
        op.drop_table(table_name)
