"""
tests/test_ingest_report_schema.py

Serialization contract of the ingest report.
"""

from __future__ import annotations

import uuid

import pytest
from pydantic import ValidationError

from rirstats.domain.delegated_stats import IngestReport, IngestStage
from rirstats.schemas.ingest_report import IngestReportResponse, RecordTypeCounts


def test_from_report() -> None:
    dataset_id = uuid.uuid4()
    report = IngestReport(
        registry="afrinic",
        serial=20261016,
        dataset_id=dataset_id,
        header_ok=True,
        stage=IngestStage.FINISHED,
        total_lines=9,
        invalid_lines=1,
        decoded={"asn": 1, "ipv4": 2, "ipv6": 1},
        declared={"asn": 1, "ipv4": 3, "ipv6": 1},
        records_inserted=4,
    )

    payload = IngestReportResponse.from_report(report).model_dump(mode="json")

    assert payload["dataset_id"] == str(dataset_id)
    assert payload["records_processed"] == 5
    assert payload["reconciliation"] == {"asn": 0, "ipv4": 1, "ipv6": 0}
    assert payload["declared"] == {"asn": 1, "ipv4": 3, "ipv6": 1}


def test_negative_counts_are_rejected() -> None:
    with pytest.raises(ValidationError):
        RecordTypeCounts(asn=-1, ipv4=0, ipv6=0)
