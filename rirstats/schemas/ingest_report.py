"""
rirstats/schemas/ingest_report.py

Serializable view of an ingest run for operators and scripts.
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, Field

from rirstats.domain.delegated_stats import IngestReport


class RecordTypeCounts(BaseModel):
    asn: int = Field(..., ge=0)
    ipv4: int = Field(..., ge=0)
    ipv6: int = Field(..., ge=0)


class IngestReportResponse(BaseModel):
    """
    Outcome of one delegated-stats ingest run.

    ``reconciliation`` is declared minus decoded per record type; non-zero
    values mean the registry's summary lines disagree with its records.
    """

    registry: str | None = None
    serial: int | None = None
    dataset_id: uuid.UUID | None = None
    header_ok: bool
    stage: str
    total_lines: int = Field(..., ge=0)
    skipped_lines: int = Field(..., ge=0)
    records_processed: int = Field(..., ge=0)
    invalid_lines: int = Field(..., ge=0)
    decoded: RecordTypeCounts
    declared: RecordTypeCounts
    reconciliation: dict[str, int]
    records_inserted: int = Field(..., ge=0)
    duplicate_records: int = Field(..., ge=0)
    failed_records: int = Field(..., ge=0)

    @classmethod
    def from_report(cls, report: IngestReport) -> "IngestReportResponse":
        return cls(
            registry=report.registry,
            serial=report.serial,
            dataset_id=report.dataset_id,
            header_ok=report.header_ok,
            stage=report.stage,
            total_lines=report.total_lines,
            skipped_lines=report.skipped_lines,
            records_processed=report.records_processed,
            invalid_lines=report.invalid_lines,
            decoded=RecordTypeCounts(**report.decoded),
            declared=RecordTypeCounts(**report.declared),
            reconciliation=report.reconciliation,
            records_inserted=report.records_inserted,
            duplicate_records=report.duplicate_records,
            failed_records=report.failed_records,
        )
