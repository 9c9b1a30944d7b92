"""Wire codec: hex strings, base64 strings and byte arrays in their JSON shapes.

Nodes and JavaScript clients hand binary payloads around in several shapes:
hex (signed transactions), base64 (CometBFT JSON-RPC), integer lists, and
objects keyed by decimal index strings ("0", "1", ...). Everything here
converts those shapes to and from ``bytes`` without ever truncating silently.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Any, Mapping

from cosmosgate.utils.exceptions import DecodeError

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def strip_hex_prefix(value: str) -> str:
    """Drop a leading 0x / 0X."""
    if value[:2] in ("0x", "0X"):
        return value[2:]
    return value


def hex_to_bytes(value: str) -> bytes:
    """Decode a hex string with an optional 0x prefix.

    Raises DecodeError for odd length, non-hex characters (whitespace included)
    or a prefix with nothing after it.
    """
    if not isinstance(value, str):
        raise DecodeError(f"Hex value must be a string, got {type(value).__name__}")
    digits = strip_hex_prefix(value)
    if not digits:
        raise DecodeError("Hex value is empty")
    if len(digits) % 2:
        raise DecodeError(f"Hex value has odd length ({len(digits)} digits)")
    if not _HEX_RE.fullmatch(digits):
        raise DecodeError("Hex value contains non-hex characters")
    return bytes.fromhex(digits)


def bytes_to_hex(data: bytes, *, prefix: bool = False, upper: bool = False) -> str:
    text = bytes(data).hex()
    if upper:
        text = text.upper()
    return f"0x{text}" if prefix else text


def b64encode_str(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def b64decode_str(value: str | None) -> bytes:
    """Decode standard base64; None and "" decode to b""."""
    if not value:
        return b""
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Invalid base64 payload: {exc}") from exc


def bytes_to_int_list(data: Any) -> list[int]:
    return list(bytes(data))


def index_map_to_bytes(mapping: Mapping[Any, Any]) -> bytes:
    """Rebuild bytes from an object keyed by decimal index strings.

    Keys are sorted numerically so "10" lands after "9".
    """
    indexed: list[tuple[int, Any]] = []
    for key, value in mapping.items():
        try:
            index = int(key)
        except (TypeError, ValueError):
            raise DecodeError(f"Byte map key is not a decimal index: {key!r}") from None
        indexed.append((index, value))
    indexed.sort(key=lambda item: item[0])
    return _int_values_to_bytes(value for _, value in indexed)


def _int_values_to_bytes(values: Any) -> bytes:
    out = bytearray()
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
            raise DecodeError(f"Byte value out of range: {value!r}")
        out.append(value)
    return bytes(out)


def reconstruct_bytes(value: Any) -> bytes:
    """Turn any supported binary representation into bytes."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, Mapping):
        return index_map_to_bytes(value)
    if isinstance(value, (list, tuple)):
        return _int_values_to_bytes(value)
    if isinstance(value, str):
        return b64decode_str(value)
    if value is None:
        return b""
    raise DecodeError(f"Unsupported binary representation: {type(value).__name__}")
