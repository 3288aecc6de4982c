# tests/test_lookup.py
import pytest

from chainview.explorer.lookup import ByHash, ByHeight, parse_block_key


@pytest.mark.parametrize("value, expected", [
    (123, ByHeight(123)),
    ("123", ByHeight(123)),
    ("-5", ByHeight(-5)),
    ("+7", ByHeight(7)),
    ("0x1f", ByHash("0x1f")),
    ("not-a-number-or-hash", ByHash("not-a-number-or-hash")),
    ("", ByHash("")),
    (" 12", ByHash(" 12")),
    ("12.5", ByHash("12.5")),
    (True, ByHash("True")),
])
def test_parse_block_key(value, expected):
    assert parse_block_key(value) == expected


def test_string_and_int_heights_match():
    assert parse_block_key("1200050") == parse_block_key(1200050)


@pytest.mark.parametrize("value", ["9" * 30, "-" + "9" * 30, 2 ** 63, -2 ** 63 - 1])
def test_out_of_range_heights_are_hashes(value):
    assert parse_block_key(value) == ByHash(str(value))


def test_height_range_bounds():
    assert parse_block_key(str(2 ** 63 - 1)) == ByHeight(2 ** 63 - 1)
    assert parse_block_key(-2 ** 63) == ByHeight(-2 ** 63)
