"""
rirstats/services/ingestion_service.py

Reconciliation and persistence pipeline for delegated-stats files.

One run is a single pass over the line stream:

    start → header_parsed → dataset_persisted → summaries_persisted
          → streaming_records → finished

Only header and dataset failures abort a run. Once records are streaming,
a bad line or a rejected insert affects that line alone.
"""

from __future__ import annotations

import io
import logging
import uuid
from collections.abc import Iterable, Iterator, Sequence
from datetime import date
from typing import BinaryIO, Union

from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rirstats.config import DEFAULT_PROGRESS_INTERVAL
from rirstats.connectors.registry_fetcher import RegistryFetcher
from rirstats.domain.delegated_stats import (
    DatasetDescriptor,
    IngestReport,
    IngestStage,
    RecordType,
)
from rirstats.logging_utils import log_event
from rirstats.parsing.header import HeaderParseError, parse_header
from rirstats.parsing.line_classifier import LineKind, classify_line
from rirstats.parsing.records import decode_record
from rirstats.repositories.dataset_repository import DatasetRepository
from rirstats.repositories.errors import (
    DatasetPersistenceError,
    DelegatedStatsRepositoryError,
    DuplicateDatasetError,
    DuplicateRecordError,
)
from rirstats.repositories.record_repository import RecordRepository
from rirstats.repositories.registry_repository import RegistryRepository

logger = logging.getLogger(__name__)

ByteStream = Union[bytes, bytearray, BinaryIO, Iterable[str]]

_SKIPPED_KINDS = (LineKind.COMMENT, LineKind.BLANK, LineKind.SUMMARY, LineKind.VERSION)


def iter_lines(stream: ByteStream) -> Iterator[str]:
    """
    Wrap raw feed bytes (or already decoded lines) as a line sequence.

    Lines end at ``\\n`` only, whatever the input type. Bytes are decoded
    as UTF-8 line by line; undecodable bytes are replaced rather than
    failing the run. The caller keeps ownership of ``stream``; it is never
    closed here.
    """

    if isinstance(stream, (bytes, bytearray)):
        stream = io.BytesIO(stream)

    for line in stream:
        if isinstance(line, (bytes, bytearray)):
            line = bytes(line).decode("utf-8", errors="replace")
        yield line.rstrip("\r\n")


class DelegatedStatsIngestionService:
    """
    Loads one delegated-stats stream into the store.

    ``force`` turns duplicate datasets into a lookup of the existing row and
    silences duplicate records, which makes re-running an import safe.
    """

    def __init__(
        self,
        *,
        force: bool = False,
        invalid_header_ok: bool = False,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    ) -> None:
        self._force = force
        self._invalid_header_ok = invalid_header_ok
        self._progress_interval = max(1, progress_interval)

    def ingest(self, *, db: Session, stream: ByteStream) -> IngestReport:
        """
        Parse, persist and count every line of ``stream``.

        Raises HeaderParseError, DuplicateDatasetError or
        DatasetPersistenceError before record streaming starts, and any
        store error other than a per-record constraint or data error at
        any point. Every fatal error is logged as ``ingest_aborted`` first.
        """

        report = IngestReport()
        lines = iter_lines(stream)

        try:
            self._run(db, lines, report)
        except (HeaderParseError, DelegatedStatsRepositoryError, SQLAlchemyError) as exc:
            log_event(
                logger,
                logging.ERROR,
                "ingest_aborted",
                stage=report.stage,
                registry=report.registry,
                serial=report.serial,
                lines=report.total_lines,
                error=str(exc),
            )
            raise

        self._log_completion(report)
        return report

    def _run(self, db: Session, lines: Iterator[str], report: IngestReport) -> None:
        header = parse_header(lines, invalid_header_ok=self._invalid_header_ok)
        descriptor = header.descriptor
        report.total_lines = header.lines_consumed
        report.header_ok = header.ok
        report.stage = IngestStage.HEADER_PARSED

        if header.ok:
            report.registry = descriptor.registry
            report.serial = descriptor.serial
            report.declared = dict(descriptor.declared_counts)
            report.dataset_id = self._persist_dataset(db, descriptor)
            report.stage = IngestStage.DATASET_PERSISTED
            self._persist_summaries(db, descriptor, report.dataset_id)
            report.stage = IngestStage.SUMMARIES_PERSISTED
        else:
            logger.warning("Skipping dataset and summary persistence because the header is invalid")

        report.stage = IngestStage.STREAMING_RECORDS
        records = RecordRepository(db)
        as_of = descriptor.end_date if header.ok else None

        if header.rejected_line is not None:
            # The line that failed as a version line may still be a record.
            self._process_line(records, header.rejected_line, report, as_of=as_of, count_line=False)

        # Progress counts record-stream lines only, header excluded.
        for streamed, line in enumerate(lines, start=1):
            self._process_line(records, line, report, as_of=as_of)
            if streamed % self._progress_interval == 0:
                log_event(
                    logger,
                    logging.INFO,
                    "ingest_progress",
                    registry=report.registry,
                    lines=streamed,
                    decoded=report.decoded,
                    invalid=report.invalid_lines,
                )

        report.stage = IngestStage.FINISHED

    def ingest_registries(
        self,
        *,
        db: Session,
        fetcher: RegistryFetcher,
        registries: Sequence[str],
    ) -> list[IngestReport]:
        """
        Download and ingest each registry's latest file, one after another.

        Runs share nothing but the store; a fatal error stops the sequence.
        """

        registry_repository = RegistryRepository(db)
        reports: list[IngestReport] = []
        for registry in registries:
            logger.info("Processing registry=%s", registry)
            url = registry_repository.get_latest_dataset_url(registry)
            data = fetcher.fetch(url)
            reports.append(self.ingest(db=db, stream=data))
        return reports

    # ── Header persistence ────────────────────────────────────────────────────

    def _persist_dataset(self, db: Session, descriptor: DatasetDescriptor) -> uuid.UUID:
        repository = DatasetRepository(db)
        try:
            dataset_id = repository.create_dataset(descriptor)
        except DuplicateDatasetError:
            if not self._force:
                raise
            logger.warning(
                "Dataset already exists, reusing it because force is enabled registry=%s serial=%s",
                descriptor.registry,
                descriptor.serial,
            )
            dataset_id = repository.find_dataset_id(registry=descriptor.registry, serial=descriptor.serial)
            if dataset_id is None:
                raise DatasetPersistenceError(
                    "Dataset reported as duplicate but not found: "
                    f"registry={descriptor.registry} serial={descriptor.serial}"
                )
        except SQLAlchemyError as exc:
            raise DatasetPersistenceError(
                f"Cannot persist dataset registry={descriptor.registry} serial={descriptor.serial}: {exc}"
            ) from exc

        logger.info(
            "Dataset persisted dataset_id=%s registry=%s serial=%s",
            dataset_id,
            descriptor.registry,
            descriptor.serial,
        )
        return dataset_id

    def _persist_summaries(
        self,
        db: Session,
        descriptor: DatasetDescriptor,
        dataset_id: uuid.UUID,
    ) -> None:
        repository = DatasetRepository(db)
        for record_type in RecordType.ALL:
            try:
                repository.create_summary(
                    dataset_id=dataset_id,
                    record_type=record_type,
                    count=descriptor.declared_counts.get(record_type, 0),
                    as_of=descriptor.end_date,
                )
            except (DelegatedStatsRepositoryError, IntegrityError, DataError) as exc:
                logger.warning(
                    "Cannot record summary value record_type=%s dataset_id=%s error=%s",
                    record_type,
                    dataset_id,
                    exc,
                )

    # ── Record streaming ──────────────────────────────────────────────────────

    def _process_line(
        self,
        records: RecordRepository,
        line: str,
        report: IngestReport,
        *,
        as_of: date | None,
        count_line: bool = True,
    ) -> None:
        if count_line:
            report.total_lines += 1

        kind = classify_line(line)
        if kind in _SKIPPED_KINDS:
            if kind in (LineKind.SUMMARY, LineKind.VERSION):
                logger.debug("Skipping header line inside record stream line=%r", line)
            report.skipped_lines += 1
        else:
            self._process_record_line(records, line, report, as_of=as_of)

    def _process_record_line(
        self,
        records: RecordRepository,
        line: str,
        report: IngestReport,
        *,
        as_of: date | None,
    ) -> None:
        result = decode_record(line)
        if not result.ok or result.record is None:
            report.invalid_lines += 1
            logger.debug("Invalid record line=%r error=%s", line, result.error)
            return

        report.decoded[result.record_type] += 1
        try:
            records.insert_record(result.record, dataset_id=report.dataset_id, as_of=as_of)
        except DuplicateRecordError as exc:
            report.duplicate_records += 1
            if not self._force:
                logger.warning("Skipping duplicate record error=%s", exc)
        except (IntegrityError, DataError) as exc:
            report.failed_records += 1
            logger.warning(
                "Cannot insert record record_type=%s line=%r error=%s",
                result.record_type,
                line,
                exc,
            )
        else:
            report.records_inserted += 1

    def _log_completion(self, report: IngestReport) -> None:
        log_event(
            logger,
            logging.INFO,
            "ingest_finished",
            registry=report.registry,
            serial=report.serial,
            dataset_id=report.dataset_id,
            lines=report.total_lines,
            asn=report.decoded[RecordType.ASN],
            ipv4=report.decoded[RecordType.IPV4],
            ipv6=report.decoded[RecordType.IPV6],
            invalid=report.invalid_lines,
            inserted=report.records_inserted,
            duplicates=report.duplicate_records,
            failed=report.failed_records,
        )
        if report.header_ok and not report.is_reconciled:
            logger.warning(
                "Declared summary counts differ from decoded records registry=%s serial=%s declared=%s decoded=%s",
                report.registry,
                report.serial,
                report.declared,
                report.decoded,
            )
