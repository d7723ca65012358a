"""
rirstats/domain/delegated_stats.py

Typed structures produced by the delegated-stats parsers and consumed by
the ingestion pipeline.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar, Union

# Registries publish an all-zero or empty date when the date is unknown.
EPOCH_DATE = date(1970, 1, 1)


class RecordType:
    """Record types carried by delegated-stats files."""

    ASN = "asn"
    IPV4 = "ipv4"
    IPV6 = "ipv6"

    ALL = (ASN, IPV4, IPV6)


class RecordState:
    """Lifecycle state of a resource block."""

    AVAILABLE = "available"
    ALLOCATED = "allocated"
    ASSIGNED = "assigned"
    RESERVED = "reserved"

    ALL = (AVAILABLE, ALLOCATED, ASSIGNED, RESERVED)


class IngestStage:
    """
    Progress of one ingest run. Fatal errors are raised instead of being
    recorded as a stage, so a returned report is always FINISHED.
    """

    START = "start"
    HEADER_PARSED = "header_parsed"
    DATASET_PERSISTED = "dataset_persisted"
    SUMMARIES_PERSISTED = "summaries_persisted"
    STREAMING_RECORDS = "streaming_records"
    FINISHED = "finished"


def _zero_counts() -> dict[str, int]:
    return {record_type: 0 for record_type in RecordType.ALL}


@dataclass
class DatasetDescriptor:
    """
    Header of one delegated-stats file.

    Defaults describe an unknown dataset; they are used as-is when an
    invalid header is tolerated.
    """

    version: str = ""
    registry: str = ""
    serial: int = 0
    record_count: int = 0
    start_date: date = EPOCH_DATE
    end_date: date = EPOCH_DATE
    utc_offset: int = 0
    declared_counts: dict[str, int] = field(default_factory=_zero_counts)


@dataclass(frozen=True, kw_only=True)
class _RecordBase:
    registry: str
    country_code: str
    allocated_on: date
    state: str
    opaque_id: str = ""
    extensions: str = ""


@dataclass(frozen=True, kw_only=True)
class AddressCountRecord(_RecordBase):
    """
    IPv4 block: start address plus a host count that need not be a power of two.
    """

    record_type: ClassVar[str] = RecordType.IPV4

    start_address: int
    host_count: int

    def natural_key(self) -> tuple:
        return (
            self.registry,
            self.country_code,
            self.start_address,
            self.host_count,
            self.allocated_on,
            self.state,
        )


@dataclass(frozen=True, kw_only=True)
class AddressPrefixRecord(_RecordBase):
    """
    IPv6 block: 16-byte big-endian start address plus prefix length.
    """

    record_type: ClassVar[str] = RecordType.IPV6

    start_address: bytes
    prefix_length: int

    def natural_key(self) -> tuple:
        return (
            self.registry,
            self.country_code,
            self.start_address,
            self.prefix_length,
            self.allocated_on,
            self.state,
        )


@dataclass(frozen=True, kw_only=True)
class ASRangeRecord(_RecordBase):
    """
    Consecutive AS numbers starting at ``start_asn``.
    """

    record_type: ClassVar[str] = RecordType.ASN

    start_asn: int
    asn_count: int

    def natural_key(self) -> tuple:
        return (
            self.registry,
            self.country_code,
            self.start_asn,
            self.asn_count,
            self.allocated_on,
            self.state,
        )


DelegatedRecord = Union[AddressCountRecord, AddressPrefixRecord, ASRangeRecord]


@dataclass
class IngestReport:
    """
    Running counters for one ingest run, finalized when the stream ends.

    ``total_lines`` counts every line read, header included.
    ``decoded`` and ``invalid_lines`` only cover lines streamed after the
    header that were neither comments, blanks nor stray summary lines.
    """

    registry: str | None = None
    serial: int | None = None
    dataset_id: uuid.UUID | None = None
    header_ok: bool = False
    stage: str = IngestStage.START
    total_lines: int = 0
    skipped_lines: int = 0
    invalid_lines: int = 0
    decoded: dict[str, int] = field(default_factory=_zero_counts)
    declared: dict[str, int] = field(default_factory=_zero_counts)
    records_inserted: int = 0
    duplicate_records: int = 0
    failed_records: int = 0

    @property
    def records_processed(self) -> int:
        return sum(self.decoded.values()) + self.invalid_lines

    @property
    def reconciliation(self) -> dict[str, int]:
        """
        Declared minus decoded count per record type.
        """

        return {
            record_type: self.declared.get(record_type, 0) - self.decoded.get(record_type, 0)
            for record_type in RecordType.ALL
        }

    @property
    def is_reconciled(self) -> bool:
        return not any(self.reconciliation.values())
