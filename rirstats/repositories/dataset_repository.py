"""
rirstats/repositories/dataset_repository.py

Dataset and summary persistence. Every insert is committed on its own so an
interrupted ingest leaves a resumable partial state.
"""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from db.models.dataset import Dataset
from db.models.summary import Summary
from rirstats.domain.delegated_stats import DatasetDescriptor
from rirstats.repositories.errors import (
    DuplicateDatasetError,
    DuplicateSummaryError,
    is_unique_violation,
)


class DatasetRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create_dataset(self, descriptor: DatasetDescriptor) -> uuid.UUID:
        """
        Insert the dataset row and return its id.

        Raises DuplicateDatasetError when (registry, serial) already exists.
        """

        dataset_id = uuid.uuid4()
        stmt = insert(Dataset).values(
            id=dataset_id,
            registry_code=descriptor.registry,
            serial=descriptor.serial,
            version=descriptor.version,
            record_count=descriptor.record_count,
            start_date=descriptor.start_date,
            end_date=descriptor.end_date,
            utc_offset=descriptor.utc_offset,
        )
        try:
            self._session.execute(stmt)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            if isinstance(exc, IntegrityError) and is_unique_violation(exc):
                raise DuplicateDatasetError(descriptor.registry, descriptor.serial) from exc
            raise
        return dataset_id

    def find_dataset_id(self, *, registry: str, serial: int) -> uuid.UUID | None:
        return self._session.scalar(
            select(Dataset.id).where(Dataset.registry_code == registry, Dataset.serial == serial)
        )

    def create_summary(
        self,
        *,
        dataset_id: uuid.UUID,
        record_type: str,
        count: int,
        as_of: date,
    ) -> None:
        stmt = insert(Summary).values(
            id=uuid.uuid4(),
            dataset_id=dataset_id,
            record_type=record_type,
            count=count,
            as_of=as_of,
        )
        try:
            self._session.execute(stmt)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            if isinstance(exc, IntegrityError) and is_unique_violation(exc):
                raise DuplicateSummaryError(
                    f"Summary already recorded: dataset_id={dataset_id} record_type={record_type}"
                ) from exc
            raise
