"""
rirstats/repositories/record_repository.py

Persistence of decoded records into the per-type record tables.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any

from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from db.base import Base
from db.models.records import ASNRecord, IPv4Record, IPv6Record
from rirstats.domain.delegated_stats import (
    AddressCountRecord,
    AddressPrefixRecord,
    ASRangeRecord,
    DelegatedRecord,
    RecordType,
)
from rirstats.repositories.errors import DuplicateRecordError, is_unique_violation

RECORD_MODELS: dict[str, type[Base]] = {
    RecordType.IPV4: IPv4Record,
    RecordType.IPV6: IPv6Record,
    RecordType.ASN: ASNRecord,
}


def _key_columns(record: DelegatedRecord) -> dict[str, Any]:
    if isinstance(record, AddressCountRecord):
        return {"start_address": record.start_address, "host_count": record.host_count}
    if isinstance(record, AddressPrefixRecord):
        return {"start_address": record.start_address, "prefix_length": record.prefix_length}
    if isinstance(record, ASRangeRecord):
        return {"start_asn": record.start_asn, "asn_count": record.asn_count}
    raise TypeError(f"Unsupported record variant: {type(record).__name__}")


class RecordRepository:
    """
    One polymorphic insert path for the three sibling record tables.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def insert_record(
        self,
        record: DelegatedRecord,
        *,
        dataset_id: uuid.UUID | None,
        as_of: date | None,
    ) -> None:
        """
        Insert and commit one record.

        Raises DuplicateRecordError when the natural key already exists.
        """

        model = RECORD_MODELS[record.record_type]
        stmt = insert(model).values(
            id=uuid.uuid4(),
            dataset_id=dataset_id,
            registry_code=record.registry,
            country_code=record.country_code,
            allocated_on=record.allocated_on,
            state=record.state,
            opaque_id=record.opaque_id,
            extensions=record.extensions,
            as_of=as_of,
            **_key_columns(record),
        )
        try:
            self._session.execute(stmt)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            if isinstance(exc, IntegrityError) and is_unique_violation(exc):
                raise DuplicateRecordError(
                    f"Record already stored: {record.record_type} {record.natural_key()!r}"
                ) from exc
            raise
