"""
rirstats/services package marker.
"""

from rirstats.services.ingestion_service import DelegatedStatsIngestionService, iter_lines

__all__ = [
    "DelegatedStatsIngestionService",
    "iter_lines",
]
