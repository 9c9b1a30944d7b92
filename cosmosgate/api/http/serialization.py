"""JSON encoding for gateway responses.

Integers outside the JavaScript safe range become decimal strings. Byte
payloads become index-keyed maps (`{"0": 10, "1": 143}`), the shape browser
clients already read for Uint8Array values.
"""

from __future__ import annotations

from typing import Any, Mapping

from google.protobuf.message import Message

from cosmosgate.codec.protobuf import message_to_dict

MAX_SAFE_INTEGER = 2**53 - 1


def to_jsonable(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return to_jsonable(value.to_dict())
    if isinstance(value, Message):
        return message_to_dict(value)
    if isinstance(value, bool) or value is None or isinstance(value, (str, float)):
        return value
    if isinstance(value, int):
        return str(value) if abs(value) > MAX_SAFE_INTEGER else value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return {str(i): b for i, b in enumerate(bytes(value))}
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    return str(value)
