"""Chain access: broadcast pipeline, query dispatch and message decoding."""

from cosmosgate.chain.broadcast import broadcast_signed_tx, extract_and_decode_messages, extract_tx_hash
from cosmosgate.chain.dispatcher import dispatch, query_any
from cosmosgate.chain.gateway import query, submit
from cosmosgate.chain.registry import MessageRegistry, build_default_registry, decode_message
from cosmosgate.chain.types import BroadcastOptions, BroadcastResult, DecodedMessage, PageRequest

__all__ = [
    "BroadcastOptions",
    "BroadcastResult",
    "DecodedMessage",
    "MessageRegistry",
    "PageRequest",
    "broadcast_signed_tx",
    "build_default_registry",
    "decode_message",
    "dispatch",
    "extract_and_decode_messages",
    "extract_tx_hash",
    "query",
    "query_any",
    "submit",
]
