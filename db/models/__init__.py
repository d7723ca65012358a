"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.dataset import Dataset
from db.models.records import ASNRecord, IPv4Record, IPv6Record
from db.models.registry import Registry
from db.models.summary import Summary

__all__ = [
    "Registry",
    "Dataset",
    "Summary",
    "IPv4Record",
    "IPv6Record",
    "ASNRecord",
]
