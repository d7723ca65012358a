"""
rirstats/parsing/line_classifier.py

Stateless, purely syntactic classification of delegated-stats lines.
"""

from __future__ import annotations

import re

from rirstats.domain.registries import REGISTRY_CODES

REGISTRY_ALTERNATION = "|".join(REGISTRY_CODES)

# version|registry|serial|records|startdate|enddate|UTCoffset[|extra]
VERSION_LINE_PATTERN = re.compile(
    r"^(?P<version>\d+(?:\.\d+)*)"
    rf"\|(?P<registry>{REGISTRY_ALTERNATION})"
    r"\|(?P<serial>\d+)"
    r"\|(?P<records>\d+)"
    r"\|(?P<start_date>\d{8})"
    r"\|(?P<end_date>\d{8})"
    r"\|(?P<utc_offset>[+-]?\d+)"
    r"(?:\|(?P<extra>.*))?$"
)

# registry|*|type|*|count|summary
SUMMARY_LINE_PATTERN = re.compile(
    rf"^(?P<registry>{REGISTRY_ALTERNATION})"
    r"\|\*\|(?P<record_type>asn|ipv4|ipv6)"
    r"\|\*\|(?P<count>\d+)"
    r"\|summary\s*$"
)

# At least seven fields, a known registry first and no summary wildcard.
# Field-level validation is the record decoder's job.
RECORD_LINE_SHAPE = re.compile(
    rf"^(?:{REGISTRY_ALTERNATION})\|(?!\*\|)[^|]*(?:\|[^|]*){{5}}"
)


class LineKind:
    COMMENT = "comment"
    VERSION = "version"
    SUMMARY = "summary"
    RECORD = "record"
    BLANK = "blank"
    UNRECOGNIZED = "unrecognized"


def strip_line_ending(line: str) -> str:
    return line.rstrip("\r\n")


def classify_line(line: str) -> str:
    """
    Return the LineKind of one raw line.
    """

    text = strip_line_ending(line)
    if not text.strip():
        return LineKind.BLANK
    if text.startswith("#"):
        return LineKind.COMMENT
    if SUMMARY_LINE_PATTERN.match(text):
        return LineKind.SUMMARY
    if VERSION_LINE_PATTERN.match(text):
        return LineKind.VERSION
    if RECORD_LINE_SHAPE.match(text):
        return LineKind.RECORD
    return LineKind.UNRECOGNIZED
