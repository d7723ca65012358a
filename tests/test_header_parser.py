"""
tests/test_header_parser.py

Pytest unit tests for header assembly: version line, summary lines and
the strict/tolerant handling of broken headers.
"""

from __future__ import annotations

from datetime import date

import pytest

from rirstats.domain.delegated_stats import EPOCH_DATE, DatasetDescriptor
from rirstats.parsing.header import (
    HeaderParseError,
    normalize_utc_offset,
    parse_feed_date,
    parse_header,
    parse_version_line,
)

APNIC_HEADER = [
    "2.3|apnic|20261016|70000|19830613|20261015|+1000",
    "apnic|*|asn|*|10000|summary",
    "apnic|*|ipv4|*|50000|summary",
    "apnic|*|ipv6|*|10000|summary",
]


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


class TestFieldHelpers:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("+1000", 10),
            ("-0400", -4),
            ("0", 0),
            ("+0000", 0),
            ("+0930", 9),
            ("-0330", -3),
            ("100", 1),
        ],
    )
    def test_utc_offset_truncates_to_whole_hours(self, raw: str, expected: int) -> None:
        assert normalize_utc_offset(raw) == expected

    @pytest.mark.parametrize("raw", ["", "00000000"])
    def test_unknown_date_is_epoch(self, raw: str) -> None:
        assert parse_feed_date(raw) == EPOCH_DATE

    def test_date_is_parsed(self) -> None:
        assert parse_feed_date("20120101") == date(2012, 1, 1)

    def test_impossible_date_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_feed_date("20121345")


# ---------------------------------------------------------------------------
# Version line
# ---------------------------------------------------------------------------


class TestVersionLine:
    def test_all_fields(self) -> None:
        descriptor = parse_version_line(APNIC_HEADER[0])

        assert descriptor is not None
        assert descriptor.version == "2.3"
        assert descriptor.registry == "apnic"
        assert descriptor.serial == 20261016
        assert descriptor.record_count == 70000
        assert descriptor.start_date == date(1983, 6, 13)
        assert descriptor.end_date == date(2026, 10, 15)
        assert descriptor.utc_offset == 10

    def test_trailing_empty_field_and_unsigned_offset(self) -> None:
        descriptor = parse_version_line("2.3|apnic|20230101|3|20230101|20230101|900|")

        assert descriptor is not None
        assert descriptor.serial == 20230101
        assert descriptor.record_count == 3
        assert descriptor.start_date == date(2023, 1, 1)
        assert descriptor.end_date == date(2023, 1, 1)
        assert descriptor.utc_offset == 9

    def test_zero_dates_become_epoch(self) -> None:
        descriptor = parse_version_line("2|arin|1760572800|0|00000000|00000000|-0400")

        assert descriptor is not None
        assert descriptor.start_date == EPOCH_DATE
        assert descriptor.end_date == EPOCH_DATE
        assert descriptor.utc_offset == -4

    def test_impossible_date_is_rejected(self) -> None:
        assert parse_version_line("2.3|apnic|1|1|19831313|20261015|+1000") is None

    def test_non_version_line(self) -> None:
        assert parse_version_line("apnic|JP|ipv4|103.2.0.0|1024|20120101|allocated") is None


# ---------------------------------------------------------------------------
# parse_header
# ---------------------------------------------------------------------------


class TestParseHeader:
    def test_declared_counts_from_summaries(self) -> None:
        result = parse_header(APNIC_HEADER)

        assert result.ok is True
        assert result.lines_consumed == 4
        assert result.rejected_line is None
        assert result.descriptor.declared_counts == {"asn": 10000, "ipv4": 50000, "ipv6": 10000}

    def test_header_with_trailing_empty_field(self) -> None:
        result = parse_header(
            [
                "2.3|apnic|20230101|3|20230101|20230101|900|",
                "apnic|*|asn|*|1|summary",
                "apnic|*|ipv4|*|1|summary",
                "apnic|*|ipv6|*|1|summary",
            ]
        )

        assert result.ok is True
        assert result.descriptor.utc_offset == 9
        assert result.descriptor.declared_counts == {"asn": 1, "ipv4": 1, "ipv6": 1}

    def test_leading_comments_and_blanks_are_skipped(self) -> None:
        result = parse_header(["# header", "", *APNIC_HEADER])

        assert result.ok is True
        assert result.lines_consumed == 6
        assert result.descriptor.registry == "apnic"

    def test_stream_continues_after_header(self) -> None:
        lines = iter([*APNIC_HEADER, "apnic|JP|ipv4|103.2.0.0|1024|20120101|allocated"])

        parse_header(lines)

        assert list(lines) == ["apnic|JP|ipv4|103.2.0.0|1024|20120101|allocated"]

    def test_missing_summary_types_default_to_zero(self) -> None:
        result = parse_header([APNIC_HEADER[0], APNIC_HEADER[2]])

        assert result.ok is True
        assert result.descriptor.declared_counts == {"asn": 0, "ipv4": 50000, "ipv6": 0}

    def test_non_summary_line_in_summary_slot_is_ignored(self) -> None:
        result = parse_header([APNIC_HEADER[0], "# not a summary", APNIC_HEADER[1], APNIC_HEADER[3]])

        assert result.lines_consumed == 4
        assert result.descriptor.declared_counts == {"asn": 10000, "ipv4": 0, "ipv6": 10000}

    def test_strict_mode_raises_on_invalid_version_line(self) -> None:
        with pytest.raises(HeaderParseError):
            parse_header(["apnic|JP|ipv4|103.2.0.0|1024|20120101|allocated"])

    def test_strict_mode_raises_on_empty_stream(self) -> None:
        with pytest.raises(HeaderParseError):
            parse_header([])

    def test_tolerant_mode_returns_defaults(self) -> None:
        record_line = "apnic|JP|ipv4|103.2.0.0|1024|20120101|allocated"

        result = parse_header(["# comment", record_line], invalid_header_ok=True)

        assert result.ok is False
        assert result.lines_consumed == 2
        assert result.rejected_line == record_line
        assert result.descriptor == DatasetDescriptor()

    def test_tolerant_mode_on_empty_stream(self) -> None:
        result = parse_header([], invalid_header_ok=True)

        assert result.ok is False
        assert result.lines_consumed == 0
        assert result.rejected_line is None
