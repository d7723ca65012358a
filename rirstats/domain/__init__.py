"""
rirstats/domain package marker.
"""

from rirstats.domain.delegated_stats import (
    EPOCH_DATE,
    AddressCountRecord,
    AddressPrefixRecord,
    ASRangeRecord,
    DatasetDescriptor,
    DelegatedRecord,
    IngestReport,
    IngestStage,
    RecordState,
    RecordType,
)
from rirstats.domain.registries import REGISTRIES, REGISTRY_CODES, RegistryInfo, get_registry

__all__ = [
    "EPOCH_DATE",
    "AddressCountRecord",
    "AddressPrefixRecord",
    "ASRangeRecord",
    "DatasetDescriptor",
    "DelegatedRecord",
    "IngestReport",
    "IngestStage",
    "RecordState",
    "RecordType",
    "REGISTRIES",
    "REGISTRY_CODES",
    "RegistryInfo",
    "get_registry",
]
