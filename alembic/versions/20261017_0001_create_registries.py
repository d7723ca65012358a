"""create registries table and seed the five RIRs

Revision ID: 20261017_0001
Revises:
Create Date: 2026-10-17 09:10:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None

REGISTRY_SEED = [
    {
        "short_name": "afrinic",
        "display_name": "African Network Information Centre",
        "latest_dataset_url": "https://ftp.afrinic.net/pub/stats/afrinic/delegated-afrinic-extended-latest",
    },
    {
        "short_name": "apnic",
        "display_name": "Asia-Pacific Network Information Centre",
        "latest_dataset_url": "https://ftp.apnic.net/stats/apnic/delegated-apnic-extended-latest",
    },
    {
        "short_name": "arin",
        "display_name": "American Registry for Internet Numbers",
        "latest_dataset_url": "https://ftp.arin.net/pub/stats/arin/delegated-arin-extended-latest",
    },
    {
        "short_name": "lacnic",
        "display_name": "Latin America and Caribbean Network Information Centre",
        "latest_dataset_url": "https://ftp.lacnic.net/pub/stats/lacnic/delegated-lacnic-extended-latest",
    },
    {
        "short_name": "ripencc",
        "display_name": "RIPE Network Coordination Centre",
        "latest_dataset_url": "https://ftp.ripe.net/pub/stats/ripencc/delegated-ripencc-extended-latest",
    },
]


def upgrade() -> None:
    registries = op.create_table(
        "registries",
        sa.Column("short_name", sa.String(length=16), nullable=False),
        sa.Column("display_name", sa.String(length=120), nullable=False),
        sa.Column("latest_dataset_url", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("short_name"),
    )
    op.bulk_insert(registries, REGISTRY_SEED)


def downgrade() -> None:
    op.drop_table("registries")
