"""
db/models/registry.py

Static reference table of the five Regional Internet Registries.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class Registry(Base):
    """
    One issuing authority. Seeded by migration; never written by ingestion.
    """

    __tablename__ = "registries"

    short_name: Mapped[str] = mapped_column(
        String(16),
        primary_key=True,
        comment="afrinic, apnic, arin, lacnic, ripencc",
    )
    display_name: Mapped[str] = mapped_column(String(120), nullable=False)
    latest_dataset_url: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Location of the registry's latest extended delegated-stats file",
    )

    def __repr__(self) -> str:
        return f"<Registry short_name={self.short_name!r}>"
