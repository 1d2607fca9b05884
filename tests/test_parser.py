from __future__ import annotations

import pytest

from pycippath.errors import PathInputError, PathParseError, PathRangeError
from pycippath.parser import parse_path


def test_parse_numeric_path() -> None:
    assert parse_path("1,0,32,2,36,1") == bytes([0x01, 0x00, 0x20, 0x02, 0x24, 0x01])


def test_parse_embedded_ip_address() -> None:
    expected = bytes([0x01, 0x00, 0x12, 0x0C]) + b"172.25.58.11" + bytes([0x01, 0x01])
    assert parse_path("1,0,2,172.25.58.11,1,1") == expected


def test_parse_ignores_brackets_and_whitespace() -> None:
    assert parse_path("[1, 0,\t32 ]") == bytes([0x01, 0x00, 0x20])
    assert parse_path(" 1 , 2 , 10.0.0.1 ") == b"\x01\x12\x0810.0.0.1"


def test_parse_accepts_explicit_sign() -> None:
    assert parse_path("+5,0") == bytes([0x05, 0x00])


def test_parse_output_is_never_padded() -> None:
    assert parse_path("1,0,2") == bytes([0x01, 0x00, 0x02])
    assert len(parse_path("1,0,2,10.0.0.10")) == 13


@pytest.mark.parametrize("text", ["256", "-1", "1,0,1000"])
def test_parse_rejects_out_of_range(text: str) -> None:
    with pytest.raises(PathRangeError):
        parse_path(text)


@pytest.mark.parametrize("text", ["abc", "1,,2", "", "0x10", "1_0"])
def test_parse_rejects_non_decimal(text: str) -> None:
    with pytest.raises(PathParseError):
        parse_path(text)


def test_parse_rejects_leading_ip_address() -> None:
    with pytest.raises(PathInputError):
        parse_path("172.25.58.11,1,0")


def test_parse_flags_previous_address_for_back_to_back_ip_addresses() -> None:
    assert parse_path("1,10.0.0.1,10.0.0.2") == b"\x11\x0810.0.0.1\x0810.0.0.2"
    assert parse_path("1,10.0.0.a,10.0.0.2") == b"\x11\x0810.0.0.q\x0810.0.0.2"


def test_parse_rejects_oversized_ip_token() -> None:
    with pytest.raises(PathRangeError):
        parse_path("2," + "1." * 128)
