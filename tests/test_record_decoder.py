"""
tests/test_record_decoder.py

Pytest unit tests for record line decoding.

Coverage
--------
- IPv4, IPv6 and ASN encodings
- Extended-format opaque id and extension fields
- Empty country codes and unknown dates
- Range checks on counts, prefixes and AS numbers
- Grammar rejections
"""

from __future__ import annotations

import ipaddress
from datetime import date

import pytest

from rirstats.domain.delegated_stats import (
    EPOCH_DATE,
    AddressCountRecord,
    AddressPrefixRecord,
    ASRangeRecord,
)
from rirstats.parsing.records import decode_record, split_remainder


# ---------------------------------------------------------------------------
# Valid records
# ---------------------------------------------------------------------------


class TestValidRecords:
    def test_ipv4(self) -> None:
        result = decode_record("apnic|JP|ipv4|103.2.0.0|1024|20120101|allocated")

        assert result.ok is True
        assert result.record_type == "ipv4"
        record = result.record
        assert isinstance(record, AddressCountRecord)
        assert record.registry == "apnic"
        assert record.country_code == "JP"
        assert record.start_address == int(ipaddress.IPv4Address("103.2.0.0"))
        assert record.start_address == 1728184320
        assert record.host_count == 1024
        assert record.allocated_on == date(2012, 1, 1)
        assert record.state == "allocated"
        assert record.opaque_id == ""
        assert record.extensions == ""

    def test_ipv4_host_count_need_not_be_power_of_two(self) -> None:
        result = decode_record("arin|US|ipv4|198.51.100.0|768|20000101|assigned")

        assert result.ok is True
        assert result.record.host_count == 768

    def test_ipv6(self) -> None:
        result = decode_record("ripencc|NL|ipv6|2001:610::|32|19990819|allocated")

        assert result.ok is True
        record = result.record
        assert isinstance(record, AddressPrefixRecord)
        assert record.start_address == ipaddress.IPv6Address("2001:610::").packed
        assert len(record.start_address) == 16
        assert record.start_address[:4] == bytes([0x20, 0x01, 0x06, 0x10])
        assert record.prefix_length == 32

    def test_asn(self) -> None:
        result = decode_record("apnic|AU|asn|173|1|20020801|allocated")

        assert result.ok is True
        record = result.record
        assert isinstance(record, ASRangeRecord)
        assert record.start_asn == 173
        assert record.asn_count == 1

    def test_four_byte_asn(self) -> None:
        result = decode_record("lacnic|BR|asn|4294967295|1|20200101|assigned")

        assert result.ok is True
        assert result.record.start_asn == 4294967295

    def test_extended_fields(self) -> None:
        result = decode_record("apnic|AU|asn|173|1|20020801|allocated|A91A7381|e-stats|more")

        assert result.ok is True
        assert result.record.opaque_id == "A91A7381"
        assert result.record.extensions == "e-stats|more"

    def test_empty_country_and_date(self) -> None:
        result = decode_record("arin||ipv4|192.0.2.0|256||available")

        assert result.ok is True
        assert result.record.country_code == ""
        assert result.record.allocated_on == EPOCH_DATE

    def test_zero_date_is_epoch(self) -> None:
        result = decode_record("afrinic|ZA|ipv4|196.0.0.0|256|00000000|reserved")

        assert result.ok is True
        assert result.record.allocated_on == EPOCH_DATE

    def test_natural_key_ignores_opaque_id(self) -> None:
        first = decode_record("apnic|AU|asn|173|1|20020801|allocated|A91A7381").record
        second = decode_record("apnic|AU|asn|173|1|20020801|allocated|OTHER").record

        assert first.natural_key() == second.natural_key()


# ---------------------------------------------------------------------------
# Invalid records
# ---------------------------------------------------------------------------


class TestInvalidRecords:
    @pytest.mark.parametrize(
        "line",
        [
            "apnic|JP|ipv4|103.2.0.0|1024",
            "apnic|*|ipv4|*|2|summary",
            "iana|JP|ipv4|103.2.0.0|1024|20120101|allocated",
            "apnic|jp|ipv4|103.2.0.0|1024|20120101|allocated",
            "apnic|JPN|ipv4|103.2.0.0|1024|20120101|allocated",
            "apnic|JP|ipv5|103.2.0.0|1024|20120101|allocated",
            "apnic|JP|ipv4|103.2.0.0|1024|20120101|revoked",
            "apnic|JP|ipv4|103.2.0.0|-1|20120101|allocated",
            "apnic|JP|ipv4|103.2.0.0|1024|2012|allocated",
        ],
    )
    def test_grammar_rejections(self, line: str) -> None:
        result = decode_record(line)

        assert result.ok is False
        assert result.record is None
        assert result.error

    @pytest.mark.parametrize(
        ("line", "record_type"),
        [
            ("apnic|JP|ipv4|103.2.0.256|1024|20120101|allocated", "ipv4"),
            ("apnic|JP|ipv4|103.2.0.0|4294967296|20120101|allocated", "ipv4"),
            ("apnic|JP|ipv6|2001:db8::|129|20120101|allocated", "ipv6"),
            ("apnic|JP|ipv6|2001:db8:::1|32|20120101|allocated", "ipv6"),
            ("apnic|JP|asn|65536|65536|20120101|allocated", "asn"),
            ("apnic|JP|asn|4294967296|1|20120101|allocated", "asn"),
            ("apnic|JP|asn|ab12|1|20120101|allocated", "asn"),
            ("apnic|JP|ipv4|103.2.0.0|1024|20121301|allocated", "ipv4"),
        ],
    )
    def test_field_rejections_keep_record_type(self, line: str, record_type: str) -> None:
        result = decode_record(line)

        assert result.ok is False
        assert result.record is None
        assert result.record_type == record_type

    def test_never_raises(self) -> None:
        assert decode_record("").ok is False


class TestSplitRemainder:
    @pytest.mark.parametrize(
        ("remainder", "expected"),
        [
            (None, ("", "")),
            ("", ("", "")),
            ("A91A7381", ("A91A7381", "")),
            ("A91A7381|e-stats", ("A91A7381", "e-stats")),
        ],
    )
    def test_split(self, remainder: str | None, expected: tuple[str, str]) -> None:
        assert split_remainder(remainder) == expected
