"""
db/models/dataset.py

Dataset model: one published delegated-stats file of one registry.
Owns the summaries and records ingested from that file.
"""

import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Date, ForeignKey, Index, SmallInteger, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, CreatedAtMixin

if TYPE_CHECKING:
    from db.models.summary import Summary

DATASET_UNIQUE_CONSTRAINT = "uq_datasets_registry_serial"


class Dataset(Base, CreatedAtMixin):
    """
    Header of one delegated-stats file.

    ``(registry, serial)`` identifies a publication; re-ingesting the same
    file must find this row instead of creating another.
    """

    __tablename__ = "datasets"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    registry_code: Mapped[str] = mapped_column(
        "registry",
        String(16),
        ForeignKey("registries.short_name"),
        nullable=False,
    )

    serial: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="Registry-assigned, monotonically increasing publication number",
    )

    version: Mapped[str] = mapped_column(String(16), nullable=False)

    record_count: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="Declared number of records, excluding header, summary and comment lines",
    )

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    utc_offset: Mapped[int] = mapped_column(
        SmallInteger,
        nullable=False,
        comment="Whole hours from UTC of the producing registry",
    )

    # ── Relationships ──────────────────────────────────────────────────────────

    summaries: Mapped[list["Summary"]] = relationship(
        "Summary",
        back_populates="dataset",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # ── Constraints ────────────────────────────────────────────────────────────

    __table_args__ = (
        UniqueConstraint("registry", "serial", name=DATASET_UNIQUE_CONSTRAINT),
        Index("ix_datasets_registry_end_date", "registry", "end_date"),
    )

    def __repr__(self) -> str:
        return f"<Dataset id={self.id} registry={self.registry_code!r} serial={self.serial}>"
