"""Cancel node calls when the HTTP client disconnects."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Protocol, TypeVar

from loguru import logger

from cosmosgate.utils.exceptions import RequestCancelledError

T = TypeVar("T")


class DisconnectAware(Protocol):
    async def is_disconnected(self) -> bool: ...


async def run_until_disconnected(
    request: DisconnectAware,
    awaitable: Awaitable[T],
    *,
    poll_interval: float = 0.5,
    path: str = "",
) -> T:
    """Await `awaitable`, cancelling it if the client goes away first."""
    task: asyncio.Future[Any] = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("Client disconnected from {}, cancelling node call", path or "request")
                task.cancel()
                await asyncio.wait({task})
                raise RequestCancelledError(path or "request")
    finally:
        if not task.done():
            task.cancel()
