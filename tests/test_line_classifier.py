"""
tests/test_line_classifier.py

Pytest unit tests for the delegated-stats line classifier.

Pure string tests, no database.
"""

from __future__ import annotations

import pytest

from rirstats.parsing.line_classifier import LineKind, classify_line


# ---------------------------------------------------------------------------
# Header lines
# ---------------------------------------------------------------------------


class TestHeaderLines:
    @pytest.mark.parametrize(
        "line",
        [
            "2.3|apnic|20261016|70000|19830613|20261015|+1000",
            "2|ripencc|1760572800|120000|19830705|20261015|+0100",
            "2.3|lacnic|20261016|40000|19870101|20261015|-0300",
            "2|arin|1760572800|180000|00000000|00000000|-0400|extra",
        ],
    )
    def test_version_lines(self, line: str) -> None:
        assert classify_line(line) == LineKind.VERSION

    @pytest.mark.parametrize("record_type", ["asn", "ipv4", "ipv6"])
    def test_summary_lines(self, record_type: str) -> None:
        assert classify_line(f"afrinic|*|{record_type}|*|1234|summary") == LineKind.SUMMARY

    def test_version_line_with_unknown_registry_is_unrecognized(self) -> None:
        assert classify_line("2.3|iana|20261016|1|19830613|20261015|+0000") == LineKind.UNRECOGNIZED

    def test_version_line_with_short_date_is_unrecognized(self) -> None:
        assert classify_line("2.3|apnic|20261016|1|1983|20261015|+1000") == LineKind.UNRECOGNIZED


# ---------------------------------------------------------------------------
# Records, comments, blanks
# ---------------------------------------------------------------------------


class TestOtherLines:
    def test_record_line(self) -> None:
        assert classify_line("apnic|JP|ipv4|103.2.0.0|1024|20120101|allocated") == LineKind.RECORD

    def test_extended_record_line(self) -> None:
        line = "ripencc|NL|ipv6|2001:610::|32|19990819|allocated|c6b1e2a8|extra"
        assert classify_line(line) == LineKind.RECORD

    def test_record_shape_does_not_validate_fields(self) -> None:
        # Bad addresses are the decoder's concern; the shape still looks like a record.
        assert classify_line("apnic|JP|ipv4|bogus|1024|20120101|allocated") == LineKind.RECORD

    def test_too_few_fields_is_unrecognized(self) -> None:
        assert classify_line("apnic|JP|ipv4|103.2.0.0|1024") == LineKind.UNRECOGNIZED

    def test_comment(self) -> None:
        assert classify_line("# generated by apnic") == LineKind.COMMENT

    @pytest.mark.parametrize("line", ["", "   ", "\n", "\r\n", "\t"])
    def test_blank(self, line: str) -> None:
        assert classify_line(line) == LineKind.BLANK

    def test_trailing_line_ending_is_ignored(self) -> None:
        assert classify_line("apnic|*|asn|*|10|summary\r\n") == LineKind.SUMMARY

    def test_garbage(self) -> None:
        assert classify_line("not a delegated stats line") == LineKind.UNRECOGNIZED
