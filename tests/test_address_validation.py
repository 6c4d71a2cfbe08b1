"""Tests for checksum validation of metadata payloads."""

from conftest import checksum
from metadata.address_validation import get_metadata_invalid_addresses, is_address_like

ZERO = "0x0000000000000000000000000000000000000000"


def test_valid_payload_has_no_violations():
    address = checksum("ab")
    payload = {
        address: {"protocol_token": {"address": address, "decimals": 18}, "tags": ["a", ZERO]},
    }
    assert get_metadata_invalid_addresses(payload) == []


def test_lowercase_address_reported():
    lower = "0x" + "ab" * 20
    assert get_metadata_invalid_addresses({"token": {"address": lower}}) == [lower]


def test_reports_every_offender_once_in_order():
    first = "0x" + "ab" * 20
    second = "0x" + "CD" * 20
    payload = {
        "tokens": [{"address": first}, {"address": second}, {"address": first}],
    }
    assert get_metadata_invalid_addresses(payload) == [first, second]


def test_dict_keys_are_checked():
    lower = "0x" + "ef" * 20
    assert get_metadata_invalid_addresses({lower: {"decimals": 6}}) == [lower]


def test_non_address_strings_ignored():
    payload = {"name": "0xabc", "symbol": "USDC", "hash": "0x" + "ab" * 32, "n": 1, "flag": None}
    assert get_metadata_invalid_addresses(payload) == []


def test_is_address_like():
    assert is_address_like(checksum("12"))
    assert not is_address_like("0x1234")
    assert not is_address_like(" " + checksum("12"))
