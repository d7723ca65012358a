"""
db/models/summary.py

Declared per-type record count of a dataset, taken from its summary lines.
"""

import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Date, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

if TYPE_CHECKING:
    from db.models.dataset import Dataset

SUMMARY_UNIQUE_CONSTRAINT = "uq_summaries_dataset_record_type"


class Summary(Base):
    __tablename__ = "summaries"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    dataset_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("datasets.id", ondelete="CASCADE"),
        nullable=False,
    )
    record_type: Mapped[str] = mapped_column(
        String(8),
        nullable=False,
        comment="asn, ipv4, ipv6",
    )
    count: Mapped[int] = mapped_column(BigInteger, nullable=False)
    as_of: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="End date of the owning dataset",
    )

    dataset: Mapped["Dataset"] = relationship("Dataset", back_populates="summaries")

    __table_args__ = (
        UniqueConstraint("dataset_id", "record_type", name=SUMMARY_UNIQUE_CONSTRAINT),
    )
