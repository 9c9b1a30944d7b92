"""The two entry points the HTTP boundary and CLI call into."""

from __future__ import annotations

from typing import Any, Sequence

from cosmosgate.chain.broadcast import BroadcastConnector, broadcast_signed_tx
from cosmosgate.chain.dispatcher import query_any
from cosmosgate.chain.query_services import resolve_query_service
from cosmosgate.chain.registry import MessageRegistry
from cosmosgate.chain.types import BroadcastOptions, BroadcastResult
from cosmosgate.config.schema import NodeConfig

DEFAULT_BROADCAST_OPTIONS = BroadcastOptions(
    service="upload-service",
    action="/elandnode.reg.v1.MsgRegisterLandRegistry",
)


async def submit(
    signed_tx_hex: str,
    *,
    registry: MessageRegistry | None,
    options: BroadcastOptions = DEFAULT_BROADCAST_OPTIONS,
    node: NodeConfig | None = None,
    connect: BroadcastConnector | None = None,
) -> BroadcastResult:
    return await broadcast_signed_tx(signed_tx_hex, options, registry, node=node, connect=connect)


async def query(
    service_name: str,
    method_name: str,
    candidates: Sequence[Any],
    *,
    node: NodeConfig | None = None,
) -> Any:
    service_cls = resolve_query_service(service_name)
    return await query_any(service_cls, method_name, candidates, node=node)
