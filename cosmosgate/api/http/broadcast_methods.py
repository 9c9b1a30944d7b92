"""Helpers for the presigned transaction upload endpoint."""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from fastapi import HTTPException

from cosmosgate.api.http.serialization import to_jsonable
from cosmosgate.chain.gateway import submit
from cosmosgate.chain.registry import MessageRegistry
from cosmosgate.chain.types import BroadcastResult
from cosmosgate.config.schema import NodeConfig

SubmitFn = Callable[..., Awaitable[BroadcastResult]]


def read_signed_tx_hex(body: dict[str, Any]) -> str:
    """Pull signedTxHex out of the request body or answer 400."""
    signed_tx_hex = body.get("signedTxHex") if isinstance(body, dict) else None
    if not signed_tx_hex or not isinstance(signed_tx_hex, str):
        raise HTTPException(status_code=400, detail="signedTxHex required")
    return signed_tx_hex


async def create_presigned_response(
    *,
    body: dict[str, Any],
    registry: MessageRegistry | None,
    node: NodeConfig | None,
    submit_fn: SubmitFn = submit,
) -> dict[str, Any]:
    """Broadcast the body's signed tx and return the serialized BroadcastResult."""
    signed_tx_hex = read_signed_tx_hex(body)
    result = await submit_fn(signed_tx_hex, registry=registry, node=node)
    return to_jsonable(result)
