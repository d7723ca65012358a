"""
rirstats/repositories/registry_repository.py

Lookup and seeding of the static registries table.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.registry import Registry
from rirstats.domain.registries import REGISTRIES
from rirstats.repositories.errors import RegistryNotFoundError


class RegistryRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def ensure_seeded(self) -> int:
        """
        Insert any of the five known registries missing from the table.
        """

        existing = set(self._session.scalars(select(Registry.short_name)).all())
        missing = [info for code, info in REGISTRIES.items() if code not in existing]
        for info in missing:
            self._session.add(
                Registry(
                    short_name=info.short_name,
                    display_name=info.display_name,
                    latest_dataset_url=info.latest_dataset_url,
                )
            )
        self._session.commit()
        return len(missing)

    def get_latest_dataset_url(self, short_name: str) -> str:
        url = self._session.scalar(
            select(Registry.latest_dataset_url).where(Registry.short_name == short_name)
        )
        if url is None:
            raise RegistryNotFoundError(f"Registry not found: {short_name}")
        return url
