"""
rirstats/parsing package marker.
"""

from rirstats.parsing.header import HeaderParseError, HeaderParseResult, parse_header
from rirstats.parsing.line_classifier import LineKind, classify_line
from rirstats.parsing.records import DecodeResult, decode_record

__all__ = [
    "DecodeResult",
    "HeaderParseError",
    "HeaderParseResult",
    "LineKind",
    "classify_line",
    "decode_record",
    "parse_header",
]
