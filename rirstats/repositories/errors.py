"""
Repository-layer exceptions for delegated-stats persistence.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

_UNIQUE_VIOLATION_SQLSTATE = "23505"
_UNIQUE_VIOLATION_MESSAGES = ("UNIQUE constraint failed", "Duplicate entry", "duplicate key value")


class DelegatedStatsRepositoryError(Exception):
    """Base exception for delegated-stats repository failures."""


class DuplicateDatasetError(DelegatedStatsRepositoryError):
    """Raised when a dataset with the same (registry, serial) already exists."""

    def __init__(self, registry: str, serial: int) -> None:
        super().__init__(f"Dataset already ingested: registry={registry} serial={serial}")
        self.registry = registry
        self.serial = serial


class DuplicateSummaryError(DelegatedStatsRepositoryError):
    """Raised when a dataset already has a summary row for a record type."""


class DuplicateRecordError(DelegatedStatsRepositoryError):
    """Raised when a record with the same natural key already exists."""


class DatasetPersistenceError(DelegatedStatsRepositoryError):
    """Raised when dataset metadata persistence fails."""


class RegistryNotFoundError(DelegatedStatsRepositoryError):
    """Raised when a registry short name is not present in the store."""


def is_unique_violation(exc: IntegrityError) -> bool:
    """
    True when the store rejected a write because of a unique constraint.

    PostgreSQL drivers expose the SQLSTATE; SQLite only reports it in the
    message text.
    """

    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == _UNIQUE_VIOLATION_SQLSTATE
    message = str(orig)
    return any(fragment in message for fragment in _UNIQUE_VIOLATION_MESSAGES)
