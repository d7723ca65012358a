"""
rirstats/domain/registries.py

Static reference data for the five Regional Internet Registries.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RegistryInfo:
    """
    One issuing authority of delegated-stats files.
    """

    short_name: str
    display_name: str
    latest_dataset_url: str


REGISTRIES: dict[str, RegistryInfo] = {
    info.short_name: info
    for info in (
        RegistryInfo(
            short_name="afrinic",
            display_name="African Network Information Centre",
            latest_dataset_url="https://ftp.afrinic.net/pub/stats/afrinic/delegated-afrinic-extended-latest",
        ),
        RegistryInfo(
            short_name="apnic",
            display_name="Asia-Pacific Network Information Centre",
            latest_dataset_url="https://ftp.apnic.net/stats/apnic/delegated-apnic-extended-latest",
        ),
        RegistryInfo(
            short_name="arin",
            display_name="American Registry for Internet Numbers",
            latest_dataset_url="https://ftp.arin.net/pub/stats/arin/delegated-arin-extended-latest",
        ),
        RegistryInfo(
            short_name="lacnic",
            display_name="Latin America and Caribbean Network Information Centre",
            latest_dataset_url="https://ftp.lacnic.net/pub/stats/lacnic/delegated-lacnic-extended-latest",
        ),
        RegistryInfo(
            short_name="ripencc",
            display_name="RIPE Network Coordination Centre",
            latest_dataset_url="https://ftp.ripe.net/pub/stats/ripencc/delegated-ripencc-extended-latest",
        ),
    )
}

REGISTRY_CODES: tuple[str, ...] = tuple(REGISTRIES)


def get_registry(short_name: str) -> RegistryInfo:
    """
    Look up a registry by its short code.
    """

    normalized = short_name.strip().lower()
    info = REGISTRIES.get(normalized)
    if info is None:
        allowed = ", ".join(REGISTRY_CODES)
        raise ValueError(f"Unknown registry '{short_name}'. Allowed registries: {allowed}.")
    return info
