"""Pytest hooks and fixtures."""

from __future__ import annotations

import json
import os
from typing import Any, Callable

import httpx
import pytest

from cosmosgate.config.schema import NodeConfig


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "requires_node: talks to a live CometBFT node (skipped in CI)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip requires_node tests when running in CI (no node available)."""
    if os.environ.get("CI") != "true":
        return
    skip = pytest.mark.skip(reason="Requires a live node (skipped in CI)")
    for item in items:
        if "requires_node" in item.keywords:
            item.add_marker(skip)


class NodeRpcFailure(Exception):
    """Raised by a FakeNode handler to answer with a JSON-RPC error."""

    def __init__(self, message: str, data: str = "", code: int = -32603):
        super().__init__(message)
        self.message = message
        self.data = data
        self.code = code


class FakeNode:
    """In-memory CometBFT JSON-RPC endpoint for httpx.MockTransport."""

    def __init__(self):
        self.handlers: dict[str, Callable[[dict[str, Any]], Any]] = {
            "status": lambda _params: {"node_info": {"network": "testnet-1"}},
        }
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def on(self, method: str, handler: Callable[[dict[str, Any]], Any]) -> None:
        self.handlers[method] = handler

    def methods_called(self) -> list[str]:
        return [method for method, _ in self.calls]

    def handle(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        method = payload["method"]
        params = payload.get("params") or {}
        self.calls.append((method, params))
        handler = self.handlers.get(method)
        if handler is None:
            return httpx.Response(
                500,
                json={"jsonrpc": "2.0", "id": payload["id"], "error": {"code": -32601, "message": "Method not found"}},
            )
        try:
            result = handler(params)
        except NodeRpcFailure as exc:
            return httpx.Response(
                500,
                json={
                    "jsonrpc": "2.0",
                    "id": payload["id"],
                    "error": {"code": exc.code, "message": exc.message, "data": exc.data},
                },
            )
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": result})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def fake_node() -> FakeNode:
    return FakeNode()


@pytest.fixture
def node_config() -> NodeConfig:
    return NodeConfig(
        rpc_url="http://node.test:26657",
        request_timeout=5.0,
        broadcast_timeout=1.0,
        broadcast_poll_interval=0.0,
    )
