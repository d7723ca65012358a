"""
rirstats/parsing/header.py

Assembles the dataset descriptor from the version line and the summary
lines that follow it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime

from rirstats.domain.delegated_stats import EPOCH_DATE, DatasetDescriptor
from rirstats.parsing.line_classifier import (
    SUMMARY_LINE_PATTERN,
    VERSION_LINE_PATTERN,
    LineKind,
    classify_line,
    strip_line_ending,
)

logger = logging.getLogger(__name__)

SUMMARY_LINES_PER_HEADER = 3
UNKNOWN_DATE = "00000000"


class HeaderParseError(ValueError):
    """
    Raised when the version line is missing or malformed and invalid
    headers are not tolerated.
    """


@dataclass(frozen=True)
class HeaderParseResult:
    """
    Outcome of header parsing.

    ``rejected_line`` holds the line that failed to match the version
    pattern when an invalid header was tolerated, so the caller can route
    it to record decoding.
    """

    descriptor: DatasetDescriptor
    ok: bool
    lines_consumed: int
    rejected_line: str | None = None


def parse_feed_date(value: str) -> date:
    """
    Parse a YYYYMMDD field; empty or all-zero means unknown (epoch).

    Raises ValueError for anything else that is not a calendar date.
    """

    if not value or value == UNKNOWN_DATE:
        return EPOCH_DATE
    return datetime.strptime(value, "%Y%m%d").date()


def normalize_utc_offset(raw_offset: str) -> int:
    """
    Convert the feed's hundredths-of-hours offset to whole hours.

    Truncates toward zero, so half-hour offsets lose their fraction.
    """

    hundredths = int(raw_offset)
    hours = abs(hundredths) // 100
    return -hours if hundredths < 0 else hours


def parse_version_line(line: str) -> DatasetDescriptor | None:
    match = VERSION_LINE_PATTERN.match(strip_line_ending(line))
    if match is None:
        return None

    try:
        descriptor = DatasetDescriptor(
            version=match["version"],
            registry=match["registry"],
            serial=int(match["serial"]),
            record_count=int(match["records"]),
            start_date=parse_feed_date(match["start_date"]),
            end_date=parse_feed_date(match["end_date"]),
            utc_offset=normalize_utc_offset(match["utc_offset"]),
        )
    except ValueError as exc:
        logger.debug("Version line has unparseable fields line=%r error=%s", line, exc)
        return None

    logger.debug(
        "Version line parsed version=%s registry=%s serial=%s records=%s start=%s end=%s utc_offset=%s",
        descriptor.version,
        descriptor.registry,
        descriptor.serial,
        descriptor.record_count,
        descriptor.start_date,
        descriptor.end_date,
        descriptor.utc_offset,
    )
    return descriptor


def apply_summary_line(descriptor: DatasetDescriptor, line: str) -> bool:
    """
    Assign the declared count of one summary line; False if it does not match.
    """

    match = SUMMARY_LINE_PATTERN.match(strip_line_ending(line))
    if match is None:
        logger.debug("Expected summary line, ignoring line=%r", line)
        return False

    descriptor.declared_counts[match["record_type"]] = int(match["count"])
    logger.debug(
        "Summary line parsed record_type=%s count=%s",
        match["record_type"],
        match["count"],
    )
    return True


def parse_header(lines: Iterable[str], *, invalid_header_ok: bool = False) -> HeaderParseResult:
    """
    Consume the header of a delegated-stats stream.

    Leading comments and blank lines are skipped. The next line must be
    the version line; the three lines after it are read as summary lines.
    With ``invalid_header_ok`` a bad version line yields ``ok=False`` and
    default descriptor values instead of raising HeaderParseError.

    An iterator argument is advanced in place; record streaming continues
    from where the header ended.
    """

    lines = iter(lines)
    consumed = 0
    candidate: str | None = None
    for line in lines:
        consumed += 1
        if classify_line(line) in (LineKind.COMMENT, LineKind.BLANK):
            continue
        candidate = line
        break

    descriptor = parse_version_line(candidate) if candidate is not None else None
    if descriptor is None:
        if not invalid_header_ok:
            raise HeaderParseError(
                "Invalid delegated-stats header and invalid headers are not tolerated: "
                f"{candidate!r}"
            )
        logger.warning(
            "Dataset header missing or corrupt; continuing because invalid headers are tolerated line=%r",
            candidate,
        )
        return HeaderParseResult(
            descriptor=DatasetDescriptor(),
            ok=False,
            lines_consumed=consumed,
            rejected_line=candidate,
        )

    for _ in range(SUMMARY_LINES_PER_HEADER):
        line = next(lines, None)
        if line is None:
            break
        consumed += 1
        apply_summary_line(descriptor, line)

    return HeaderParseResult(descriptor=descriptor, ok=True, lines_consumed=consumed)
