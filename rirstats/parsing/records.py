"""
rirstats/parsing/records.py

Decodes delegated-stats record lines into typed record variants.

Decoding is best effort per line: anything that does not fit the record
grammar, or whose numeric/address fields do not parse, is reported as
invalid and never raised.
"""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from rirstats.domain.delegated_stats import (
    AddressCountRecord,
    AddressPrefixRecord,
    ASRangeRecord,
    DelegatedRecord,
    RecordState,
    RecordType,
)
from rirstats.parsing.header import parse_feed_date
from rirstats.parsing.line_classifier import REGISTRY_ALTERNATION, strip_line_ending

# registry|cc|type|start|value|date|status[|opaque-id[|extensions...]]
RECORD_LINE_PATTERN = re.compile(
    rf"^(?P<registry>{REGISTRY_ALTERNATION})"
    r"\|(?P<country_code>[A-Z]{2}|)"
    r"\|(?P<record_type>asn|ipv4|ipv6)"
    r"\|(?P<value>[0-9A-Fa-f:.]+)"
    r"\|(?P<extra>\d+)"
    r"\|(?P<date>\d{8}|)"
    rf"\|(?P<state>{'|'.join(RecordState.ALL)})"
    r"(?:\|(?P<remainder>.*))?$"
)

UINT16_MAX = 0xFFFF
UINT32_MAX = 0xFFFFFFFF
IPV6_MAX_PREFIX = 128


@dataclass(frozen=True)
class DecodeResult:
    record: DelegatedRecord | None
    record_type: str | None
    ok: bool
    error: str | None = None


def _parse_unsigned(raw: str, *, maximum: int, field_name: str) -> int:
    value = int(raw)
    if value < 0 or value > maximum:
        raise ValueError(f"{field_name} {raw} out of range 0..{maximum}")
    return value


def _encode_ipv4(common: dict[str, Any], value: str, extra: str) -> AddressCountRecord:
    return AddressCountRecord(
        **common,
        start_address=int(ipaddress.IPv4Address(value)),
        host_count=_parse_unsigned(extra, maximum=UINT32_MAX, field_name="host count"),
    )


def _encode_ipv6(common: dict[str, Any], value: str, extra: str) -> AddressPrefixRecord:
    return AddressPrefixRecord(
        **common,
        start_address=ipaddress.IPv6Address(value).packed,
        prefix_length=_parse_unsigned(extra, maximum=IPV6_MAX_PREFIX, field_name="prefix length"),
    )


def _encode_asn(common: dict[str, Any], value: str, extra: str) -> ASRangeRecord:
    return ASRangeRecord(
        **common,
        start_asn=_parse_unsigned(value, maximum=UINT32_MAX, field_name="AS number"),
        asn_count=_parse_unsigned(extra, maximum=UINT16_MAX, field_name="AS count"),
    )


_ENCODERS: dict[str, Callable[[dict[str, Any], str, str], DelegatedRecord]] = {
    RecordType.IPV4: _encode_ipv4,
    RecordType.IPV6: _encode_ipv6,
    RecordType.ASN: _encode_asn,
}


def split_remainder(remainder: str | None) -> tuple[str, str]:
    """
    Split the extended-format tail into (opaque id, extension text).
    """

    if not remainder:
        return "", ""
    opaque_id, _, extensions = remainder.partition("|")
    return opaque_id, extensions


def decode_record(line: str) -> DecodeResult:
    """
    Decode one record line.
    """

    match = RECORD_LINE_PATTERN.match(strip_line_ending(line))
    if match is None:
        return DecodeResult(record=None, record_type=None, ok=False, error="line does not match record grammar")

    record_type = match["record_type"]
    opaque_id, extensions = split_remainder(match["remainder"])

    try:
        common: dict[str, Any] = {
            "registry": match["registry"],
            "country_code": match["country_code"],
            "allocated_on": parse_feed_date(match["date"]),
            "state": match["state"],
            "opaque_id": opaque_id,
            "extensions": extensions,
        }
        record = _ENCODERS[record_type](common, match["value"], match["extra"])
    except ValueError as exc:
        return DecodeResult(record=None, record_type=record_type, ok=False, error=str(exc))

    return DecodeResult(record=record, record_type=record_type, ok=True)
