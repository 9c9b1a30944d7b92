"""
CometBFT JSON-RPC client.

Talks to a node's RPC endpoint (default http://localhost:26657) over HTTP
POST with JSON-RPC 2.0 envelopes. Every call is bounded by the client's
timeout; nothing is retried.
"""

from __future__ import annotations

import itertools
from typing import Any

import httpx
from loguru import logger

from cosmosgate.codec.wire import b64encode_str, bytes_to_hex, hex_to_bytes
from cosmosgate.utils.exceptions import NodeConnectionError, NodeRpcError, TimeoutError


class CometRpcClient:
    """Async JSON-RPC client bound to one node endpoint."""

    def __init__(
        self,
        endpoint: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            endpoint: Node RPC URL
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.endpoint = endpoint.rstrip("/") or endpoint
        self.timeout = timeout
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._ids = itertools.count(1)
        self._closed = False

    @classmethod
    async def connect(
        cls,
        endpoint: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "CometRpcClient":
        """Open a client and verify the node answers `status`."""
        client = cls(endpoint, timeout=timeout, transport=transport)
        try:
            status = await client.status()
        except BaseException:
            await client.close()
            raise
        node_info = status.get("node_info") if isinstance(status, dict) else None
        network = node_info.get("network") if isinstance(node_info, dict) else None
        logger.debug("Connected to node {} (network={})", client.endpoint, network or "unknown")
        return client

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        """Close HTTP client"""
        if self._closed:
            return
        self._closed = True
        await self._client.aclose()

    async def __aenter__(self) -> "CometRpcClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def call(self, method: str, params: dict[str, Any] | None = None) -> Any:
        """Make one JSON-RPC request and return its `result`."""
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or {},
        }
        try:
            resp = await self._client.post(self.endpoint, json=payload)
        except httpx.TimeoutException as exc:
            raise TimeoutError(f"node rpc {method}", self.timeout) from exc
        except httpx.RequestError as exc:
            raise NodeConnectionError(self.endpoint, str(exc) or type(exc).__name__) from exc

        try:
            body = resp.json()
        except ValueError:
            raise NodeRpcError(method, f"invalid JSON response (HTTP {resp.status_code})") from None

        error = body.get("error") if isinstance(body, dict) else None
        if error:
            if isinstance(error, dict):
                raise NodeRpcError(
                    method,
                    str(error.get("message") or "rpc failed"),
                    rpc_code=error.get("code"),
                    data=error.get("data"),
                )
            raise NodeRpcError(method, str(error))
        if resp.status_code >= 400:
            raise NodeRpcError(method, f"HTTP {resp.status_code}")
        if not isinstance(body, dict) or "result" not in body:
            raise NodeRpcError(method, "response has no result")
        return body["result"]

    async def status(self) -> dict[str, Any]:
        return await self.call("status")

    async def broadcast_tx_sync(self, tx: bytes) -> dict[str, Any]:
        """Submit tx bytes and wait for CheckTx only."""
        return await self.call("broadcast_tx_sync", {"tx": b64encode_str(tx)})

    async def tx(self, tx_hash: str, *, prove: bool = False) -> dict[str, Any]:
        """Look up an included transaction by its hex hash."""
        return await self.call("tx", {"hash": b64encode_str(hex_to_bytes(tx_hash)), "prove": prove})

    async def abci_query(
        self,
        path: str,
        data: bytes,
        *,
        height: int | None = None,
        prove: bool = False,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"path": path, "data": bytes_to_hex(data), "prove": prove}
        if height:
            params["height"] = str(height)
        return await self.call("abci_query", params)
