"""Data model for broadcast results, decoded messages and pagination."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cosmosgate.codec.wire import b64encode_str


@dataclass(frozen=True)
class BroadcastOptions:
    """Caller metadata for a broadcast; descriptive only."""
    service: str
    action: str


@dataclass(frozen=True)
class DecodedMessage:
    """One embedded message response, in node order."""
    type_url: str
    decoded_value: Any

    def to_dict(self) -> dict[str, Any]:
        return {"typeUrl": self.type_url, "decodedValue": self.decoded_value}


@dataclass(frozen=True)
class BroadcastResult:
    """Outcome of a successful broadcast."""
    success: bool
    responses: dict[str, Any]
    tx_hash: str | None = None
    decoded_messages: tuple[DecodedMessage, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": self.success, "txHash": self.tx_hash}
        if self.decoded_messages is not None:
            payload["decodedMessages"] = [m.to_dict() for m in self.decoded_messages]
        payload["responses"] = self.responses
        return payload


@dataclass(frozen=True)
class PageRequest:
    """Cosmos pagination parameters, forwarded as-is."""
    key: bytes | None = None
    offset: int | None = None
    limit: int | None = None
    count_total: bool | None = None
    reverse: bool | None = None

    def to_proto_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.key is not None:
            payload["key"] = b64encode_str(self.key)
        if self.offset is not None:
            payload["offset"] = str(self.offset)
        if self.limit is not None:
            payload["limit"] = str(self.limit)
        if self.count_total is not None:
            payload["countTotal"] = self.count_total
        if self.reverse is not None:
            payload["reverse"] = self.reverse
        return payload
