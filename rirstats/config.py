"""
rirstats/config.py

Environment-driven settings for delegated-stats ingestion.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files

DEFAULT_PROGRESS_INTERVAL = 5000


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


@dataclass(frozen=True)
class IngestSettings:
    """
    Runtime switches of one ingest invocation.

    force: tolerate duplicate datasets and records instead of failing/warning.
    invalid_header_ok: continue with default header values when the version
        line is malformed.
    verbosity: 0 errors only, 1 warnings, 2 progress, 3 and above debug.
    """

    force: bool = False
    invalid_header_ok: bool = False
    verbosity: int = 1
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL


@dataclass(frozen=True)
class RegistryHTTPSettings:
    """
    HTTP behavior of the registry file fetcher.
    """

    timeout_seconds: float = 120.0
    max_retries: int = 3
    backoff_initial_seconds: float = 1.0
    backoff_multiplier: float = 2.0
    rate_limit_per_second: float = 1.0


@lru_cache(maxsize=1)
def get_ingest_settings() -> IngestSettings:
    """
    Return cached ingest settings from environment variables.
    """

    return IngestSettings(
        force=_get_bool_env("RIR_INGEST_FORCE", False),
        invalid_header_ok=_get_bool_env("RIR_INGEST_INVALID_HEADER_OK", False),
        verbosity=max(0, _get_int_env("RIR_INGEST_VERBOSITY", 1)),
        progress_interval=max(1, _get_int_env("RIR_INGEST_PROGRESS_INTERVAL", DEFAULT_PROGRESS_INTERVAL)),
    )


@lru_cache(maxsize=1)
def get_registry_http_settings() -> RegistryHTTPSettings:
    """
    Return registry fetcher HTTP settings from environment variables.
    """

    return RegistryHTTPSettings(
        timeout_seconds=max(1.0, _get_float_env("RIR_HTTP_TIMEOUT_SECONDS", 120.0)),
        max_retries=max(0, _get_int_env("RIR_HTTP_MAX_RETRIES", 3)),
        backoff_initial_seconds=max(0.1, _get_float_env("RIR_HTTP_BACKOFF_INITIAL_SECONDS", 1.0)),
        backoff_multiplier=max(1.0, _get_float_env("RIR_HTTP_BACKOFF_MULTIPLIER", 2.0)),
        rate_limit_per_second=max(0.1, _get_float_env("RIR_HTTP_RATE_LIMIT_PER_SECOND", 1.0)),
    )
