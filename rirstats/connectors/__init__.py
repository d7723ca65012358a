"""
rirstats/connectors package marker.
"""

from rirstats.connectors.registry_fetcher import RegistryFetcher, RegistryFetchError

__all__ = [
    "RegistryFetcher",
    "RegistryFetchError",
]
