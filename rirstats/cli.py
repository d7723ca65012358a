"""
Command-line entry point for delegated-stats imports.
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError

from db.base import Base
from db.session import SessionLocal, get_engine
from rirstats.config import get_ingest_settings, get_registry_http_settings
from rirstats.connectors.registry_fetcher import RegistryFetcher, RegistryFetchError
from rirstats.domain.delegated_stats import IngestReport
from rirstats.domain.registries import REGISTRY_CODES
from rirstats.logging_utils import configure_logging
from rirstats.parsing.header import HeaderParseError
from rirstats.repositories.errors import DelegatedStatsRepositoryError
from rirstats.repositories.registry_repository import RegistryRepository
from rirstats.schemas.ingest_report import IngestReportResponse
from rirstats.services.ingestion_service import DelegatedStatsIngestionService

logger = logging.getLogger(__name__)

SOURCE_FILE = "file"
SOURCE_DOWNLOAD = "download"
SOURCE_ALL = "all"
SOURCES = (SOURCE_ALL, *REGISTRY_CODES, SOURCE_FILE, SOURCE_DOWNLOAD)
DEBUG_VERBOSITY = 5


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import RIR delegated-stats files into the database.")
    parser.add_argument(
        "--in",
        dest="input_file",
        default=None,
        help="Use input file instead of downloading. Overrides --source registry.",
    )
    parser.add_argument(
        "--url",
        dest="url",
        default=None,
        help="URL to download the data from. Overrides --source registry.",
    )
    parser.add_argument(
        "--source",
        dest="source",
        choices=SOURCES,
        default=None,
        help="Registry to download from its default location, 'all', 'file' or 'download'.",
    )
    parser.add_argument(
        "--verbose",
        dest="verbose",
        type=int,
        default=None,
        help="Verbosity: 0 errors only, 1 normal, 2 progress, 3 debug.",
    )
    parser.add_argument("--debug", action="store_true", help="Maximum verbosity.")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Import even if the dataset and its records already exist.",
    )
    parser.add_argument(
        "--invalid-header-ok",
        dest="invalid_header_ok",
        action="store_true",
        help="Continue with default header values when the file header is invalid.",
    )
    parser.add_argument(
        "--init-db",
        dest="init_db",
        action="store_true",
        help="Create missing tables and seed the registries table before importing.",
    )
    return parser


def resolve_source(parser: argparse.ArgumentParser, args: argparse.Namespace) -> str:
    """
    Derive the effective source from --source/--in/--url.

    Calls ``parser.error`` (exit code 2) on inconsistent combinations.
    """

    source = args.source
    if args.url and args.input_file and source is None:
        parser.error("Only one of --url or --in can be set.")
    if source is None and args.input_file:
        source = SOURCE_FILE
    if source is None and args.url:
        source = SOURCE_DOWNLOAD
    if source is None:
        parser.error("Specify --source, --in or --url.")
    if source == SOURCE_FILE and not args.input_file:
        parser.error('Please specify a filename using "--in".')
    if source == SOURCE_DOWNLOAD and not args.url:
        parser.error('Please specify a web resource using "--url".')
    return source


def _run(
    *,
    source: str,
    args: argparse.Namespace,
    service: DelegatedStatsIngestionService,
) -> list[IngestReport]:
    fetcher = RegistryFetcher(http_settings=get_registry_http_settings())

    with SessionLocal() as db:
        registries = RegistryRepository(db)
        if args.init_db:
            Base.metadata.create_all(get_engine())
            seeded = registries.ensure_seeded()
            logger.info("Database initialized registries_seeded=%s", seeded)

        if source == SOURCE_FILE:
            logger.info("Reading delegated-stats file path=%s", args.input_file)
            with open(args.input_file, "rb") as handle:
                return [service.ingest(db=db, stream=handle)]

        if source == SOURCE_ALL:
            return service.ingest_registries(db=db, fetcher=fetcher, registries=REGISTRY_CODES)

        url = args.url if source == SOURCE_DOWNLOAD else registries.get_latest_dataset_url(source)
        return [service.ingest(db=db, stream=fetcher.fetch(url))]


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    source = resolve_source(parser, args)

    settings = get_ingest_settings()
    verbosity = settings.verbosity if args.verbose is None else args.verbose
    if args.debug:
        verbosity = DEBUG_VERBOSITY
    configure_logging(verbosity)

    service = DelegatedStatsIngestionService(
        force=args.force or settings.force,
        invalid_header_ok=args.invalid_header_ok or settings.invalid_header_ok,
        progress_interval=settings.progress_interval,
    )

    try:
        reports = _run(source=source, args=args, service=service)
    except (
        HeaderParseError,
        DelegatedStatsRepositoryError,
        RegistryFetchError,
        SQLAlchemyError,
        OSError,
    ) as exc:
        logger.error("Import failed source=%s error=%s", source, exc)
        return 1

    payload = [IngestReportResponse.from_report(report).model_dump(mode="json") for report in reports]
    print(json.dumps(payload, indent=2))
    return 0
