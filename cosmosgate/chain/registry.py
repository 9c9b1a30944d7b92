"""Message decoder registry: typeUrl -> decode(bytes).

The registry is an immutable mapping built once at startup and handed to the
code that decodes message responses. ``decode`` is total: unknown type URLs
and failing decoders produce an ``{error, rawBytes}`` placeholder so one bad
message never aborts decoding of the rest of a batch.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, Mapping

from loguru import logger

from cosmosgate.codec.protobuf import make_decoder, type_url_of
from cosmosgate.proto import cosmos, elandnode

Decoder = Callable[[bytes], Any]


def _raw_bytes(data: Any) -> list[int]:
    try:
        return list(bytes(data))
    except (TypeError, ValueError):
        return []


def unknown_type_placeholder(type_url: str, data: Any) -> dict[str, Any]:
    return {"error": f"Unknown message type: {type_url}", "rawBytes": _raw_bytes(data)}


def decode_failure_placeholder(message: str, data: Any) -> dict[str, Any]:
    return {"error": f"Failed to decode: {message}", "rawBytes": _raw_bytes(data)}


class MessageRegistry(Mapping[str, Decoder]):
    """Read-only typeUrl -> decoder table."""

    def __init__(self, decoders: Mapping[str, Decoder] | Iterable[tuple[str, Decoder]] = ()):
        self._decoders: Mapping[str, Decoder] = MappingProxyType(dict(decoders))

    def __getitem__(self, type_url: str) -> Decoder:
        return self._decoders[type_url]

    def __iter__(self) -> Iterator[str]:
        return iter(self._decoders)

    def __len__(self) -> int:
        return len(self._decoders)

    def __repr__(self) -> str:
        return f"MessageRegistry({sorted(self._decoders)!r})"

    def with_decoders(self, extra: Mapping[str, Decoder] | Iterable[tuple[str, Decoder]]) -> "MessageRegistry":
        """Return a new registry with extra entries; this one is left untouched."""
        merged = dict(self._decoders)
        merged.update(dict(extra))
        return MessageRegistry(merged)

    def decode(self, type_url: str, data: bytes) -> Any:
        """Decode one message payload; never raises."""
        decoder = self._decoders.get(type_url)
        if decoder is None:
            logger.warning("No decoder found for {}, returning raw bytes", type_url)
            return unknown_type_placeholder(type_url, data)
        try:
            return decoder(bytes(data))
        except Exception as exc:
            logger.error("Error decoding {}: {}", type_url, exc)
            return decode_failure_placeholder(str(exc), data)


def decode_message(type_url: str, data: bytes, registry: MessageRegistry) -> Any:
    return registry.decode(type_url, data)


def build_default_registry() -> MessageRegistry:
    """Decoders for the message responses this gateway knows about."""
    message_types = [
        elandnode.MsgRegisterLandRegistryResponse,
        cosmos.MsgSendResponse,
        cosmos.MsgMultiSendResponse,
    ]
    return MessageRegistry((type_url_of(t), make_decoder(t)) for t in message_types)
