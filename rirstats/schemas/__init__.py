"""
rirstats/schemas package marker.
"""

from rirstats.schemas.ingest_report import IngestReportResponse, RecordTypeCounts

__all__ = [
    "IngestReportResponse",
    "RecordTypeCounts",
]
