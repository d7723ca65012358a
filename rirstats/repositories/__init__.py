"""
rirstats/repositories package marker.
"""

from rirstats.repositories.dataset_repository import DatasetRepository
from rirstats.repositories.errors import (
    DatasetPersistenceError,
    DelegatedStatsRepositoryError,
    DuplicateDatasetError,
    DuplicateRecordError,
    DuplicateSummaryError,
    RegistryNotFoundError,
)
from rirstats.repositories.record_repository import RECORD_MODELS, RecordRepository
from rirstats.repositories.registry_repository import RegistryRepository

__all__ = [
    "DatasetRepository",
    "RecordRepository",
    "RegistryRepository",
    "RECORD_MODELS",
    "DatasetPersistenceError",
    "DelegatedStatsRepositoryError",
    "DuplicateDatasetError",
    "DuplicateRecordError",
    "DuplicateSummaryError",
    "RegistryNotFoundError",
]
