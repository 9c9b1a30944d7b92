import pytest

from cosmosgate.codec.wire import (
    b64decode_str,
    b64encode_str,
    bytes_to_hex,
    hex_to_bytes,
    index_map_to_bytes,
    reconstruct_bytes,
    strip_hex_prefix,
)
from cosmosgate.utils.exceptions import DecodeError


def test_hex_to_bytes_with_and_without_prefix():
    assert hex_to_bytes("0a8f01") == b"\x0a\x8f\x01"
    assert hex_to_bytes("0x0a8f01") == b"\x0a\x8f\x01"
    assert hex_to_bytes("0XFF") == b"\xff"


def test_bytes_to_hex_reverses_hex_to_bytes():
    raw = bytes(range(0, 256, 17))
    assert hex_to_bytes(bytes_to_hex(raw)) == raw
    assert bytes_to_hex(b"\xab", prefix=True, upper=True) == "0xAB"


@pytest.mark.parametrize("value", ["abc", "0xabc", "zz", "0a 8f0", " 0a8f0", "0a8f\n", "0x", ""])
def test_hex_to_bytes_rejects_malformed_input(value):
    with pytest.raises(DecodeError):
        hex_to_bytes(value)


def test_hex_to_bytes_rejects_non_string():
    with pytest.raises(DecodeError, match="must be a string"):
        hex_to_bytes(b"0a")


def test_strip_hex_prefix_leaves_plain_hex():
    assert strip_hex_prefix("0a") == "0a"
    assert strip_hex_prefix("0x0a") == "0a"


def test_index_map_sorted_numerically():
    """Keys "0".."10" keep numeric order, so "10" lands last."""
    mapping = {str(i): i + 1 for i in range(11)}
    data = index_map_to_bytes(mapping)
    assert len(data) == 11
    assert data[-1] == 11
    assert list(data) == list(range(1, 12))


def test_index_map_rejects_bad_key_and_value():
    with pytest.raises(DecodeError, match="decimal index"):
        index_map_to_bytes({"a": 1})
    with pytest.raises(DecodeError, match="out of range"):
        index_map_to_bytes({"0": 256})


def test_base64_helpers():
    assert b64encode_str(b"\x01\x02") == "AQI="
    assert b64decode_str("AQI=") == b"\x01\x02"
    assert b64decode_str(None) == b""
    assert b64decode_str("") == b""
    with pytest.raises(DecodeError):
        b64decode_str("not base64!")


def test_reconstruct_bytes_accepts_every_shape():
    assert reconstruct_bytes(b"\x01\x02") == b"\x01\x02"
    assert reconstruct_bytes(bytearray(b"\x01")) == b"\x01"
    assert reconstruct_bytes([1, 2]) == b"\x01\x02"
    assert reconstruct_bytes({"1": 2, "0": 1}) == b"\x01\x02"
    assert reconstruct_bytes("AQI=") == b"\x01\x02"
    assert reconstruct_bytes(None) == b""


def test_reconstruct_bytes_rejects_unknown_shape():
    with pytest.raises(DecodeError, match="Unsupported"):
        reconstruct_bytes(3.5)
    with pytest.raises(DecodeError):
        reconstruct_bytes([1, True])
