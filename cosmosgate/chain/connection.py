"""Node connection manager for queries.

A fresh connection is opened for every query (no pooling) and released
exactly once, whatever happens while it is in use.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, TypeVar

import httpx
from loguru import logger

from cosmosgate.chain.query_services import QueryService
from cosmosgate.chain.rpc_client import CometRpcClient
from cosmosgate.config.schema import NodeConfig

S = TypeVar("S", bound=QueryService)

CloseFn = Callable[[], Awaitable[None]]


def _resolve_node(node: NodeConfig | None) -> NodeConfig:
    if node is not None:
        return node
    from cosmosgate.config.access import get_node_config

    return get_node_config()


async def open_query_service(
    service_cls: type[S],
    *,
    node: NodeConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[S, CloseFn]:
    """Connect and return (service, close). close is safe to await more than once."""
    node = _resolve_node(node)
    rpc = await CometRpcClient.connect(node.rpc_url, timeout=node.request_timeout, transport=transport)
    service = service_cls(rpc)

    async def close() -> None:
        if rpc.closed:
            return
        await rpc.close()
        logger.debug("Disconnected {} from {}", service_cls.service_name, node.rpc_url)

    return service, close


@asynccontextmanager
async def query_service(
    service_cls: type[S],
    *,
    node: NodeConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[S]:
    service, close = await open_query_service(service_cls, node=node, transport=transport)
    try:
        yield service
    finally:
        await close()
