"""
db/models/records.py

The three sibling record tables. They share every column except the
type-specific key, and each is unique on
(registry, country_code, key..., allocated_on, state).
"""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import (
    BigInteger,
    Date,
    ForeignKey,
    Index,
    Integer,
    LargeBinary,
    SmallInteger,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CreatedAtMixin


class RecordColumnsMixin(CreatedAtMixin):
    """
    Columns common to every record table.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    dataset_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("datasets.id", ondelete="CASCADE"),
        nullable=True,
        comment="Null when the file header was invalid and tolerated",
    )
    registry_code: Mapped[str] = mapped_column(
        "registry",
        String(16),
        ForeignKey("registries.short_name"),
        nullable=False,
    )
    country_code: Mapped[str] = mapped_column(
        String(2),
        nullable=False,
        default="",
        comment="ISO 3166 alpha-2; empty when the registry publishes none",
    )
    allocated_on: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="1970-01-01 when the registry date is unknown",
    )
    state: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment="available, allocated, assigned, reserved",
    )
    opaque_id: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    extensions: Mapped[str] = mapped_column(Text, nullable=False, default="")
    as_of: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
        comment="End date of the dataset this row was first loaded from",
    )


class IPv4Record(Base, RecordColumnsMixin):
    __tablename__ = "records_ipv4"

    start_address: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="Unsigned 32-bit network-order address",
    )
    host_count: Mapped[int] = mapped_column(BigInteger, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "registry",
            "country_code",
            "start_address",
            "host_count",
            "allocated_on",
            "state",
            name="uq_records_ipv4_natural_key",
        ),
        Index("ix_records_ipv4_start_address", "start_address"),
        Index("ix_records_ipv4_dataset_id", "dataset_id"),
    )


class IPv6Record(Base, RecordColumnsMixin):
    __tablename__ = "records_ipv6"

    start_address: Mapped[bytes] = mapped_column(
        LargeBinary(16),
        nullable=False,
        comment="16-byte big-endian address",
    )
    prefix_length: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "registry",
            "country_code",
            "start_address",
            "prefix_length",
            "allocated_on",
            "state",
            name="uq_records_ipv6_natural_key",
        ),
        Index("ix_records_ipv6_start_address", "start_address"),
        Index("ix_records_ipv6_dataset_id", "dataset_id"),
    )


class ASNRecord(Base, RecordColumnsMixin):
    __tablename__ = "records_asn"

    start_asn: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="Unsigned 32-bit AS number",
    )
    asn_count: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "registry",
            "country_code",
            "start_asn",
            "asn_count",
            "allocated_on",
            "state",
            name="uq_records_asn_natural_key",
        ),
        Index("ix_records_asn_start_asn", "start_asn"),
        Index("ix_records_asn_dataset_id", "dataset_id"),
    )
