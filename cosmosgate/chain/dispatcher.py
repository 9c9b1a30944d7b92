"""Generic query dispatcher with ordered request-shape fallback."""

from __future__ import annotations

from typing import Any, Sequence

import httpx
from loguru import logger

from cosmosgate.chain.connection import CloseFn, open_query_service
from cosmosgate.chain.query_services import QueryService, SupportsQueryMethods
from cosmosgate.config.schema import NodeConfig
from cosmosgate.utils.exceptions import GatewayError, MethodNotFoundError


async def dispatch(service: SupportsQueryMethods, method_name: str, candidates: Sequence[Any]) -> Any:
    """
    Call `method_name` with each candidate request until one succeeds.

    Candidates are tried strictly in order and the first success is returned.
    When all fail, the error of the last candidate propagates.
    """
    fn = service.get_method(method_name)
    if fn is None:
        raise MethodNotFoundError(method_name, service.available_methods())

    last_error: Exception | None = None
    for index, candidate in enumerate(candidates):
        try:
            return await fn(candidate)
        except Exception as exc:
            logger.debug("{} candidate #{} failed: {}", method_name, index, exc)
            last_error = exc
    if last_error is not None:
        raise last_error
    raise GatewayError("All request candidates failed.", code="NO_CANDIDATES")


async def dispatch_and_close(
    service: SupportsQueryMethods,
    close: CloseFn,
    method_name: str,
    candidates: Sequence[Any],
) -> Any:
    """dispatch(), then release the connection on every exit path."""
    try:
        return await dispatch(service, method_name, candidates)
    finally:
        await close()


async def query_any(
    service_cls: type[QueryService],
    method_name: str,
    candidates: Sequence[Any],
    *,
    node: NodeConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """Open a connection for `service_cls`, dispatch, disconnect."""
    service, close = await open_query_service(service_cls, node=node, transport=transport)
    return await dispatch_and_close(service, close, method_name, candidates)
