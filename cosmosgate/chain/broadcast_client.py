"""
Broadcast client: submit signed tx bytes and wait for block inclusion.

Flow:
1. broadcast_tx_sync (CheckTx). A nonzero code comes back as a delivery
   response carrying that code so the caller can reject it.
2. Poll `tx` by hash until the transaction shows up in a block or the
   broadcast timeout expires.
"""

from __future__ import annotations

import asyncio
import hashlib
from typing import Any

import httpx
from loguru import logger

from cosmosgate.chain.rpc_client import CometRpcClient
from cosmosgate.codec.protobuf import parse_message
from cosmosgate.codec.wire import b64decode_str
from cosmosgate.config.schema import NodeConfig
from cosmosgate.proto.cosmos import TxMsgData
from cosmosgate.utils.exceptions import BroadcastTimeoutError, DecodeError, NodeRpcError


def _int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def tx_hash_of(tx: bytes) -> str:
    """CometBFT transaction hash: uppercase hex SHA-256 of the tx bytes."""
    return hashlib.sha256(tx).hexdigest().upper()


def msg_responses_from_data(data: str | None) -> list[dict[str, Any]]:
    """Extract [{typeUrl, value}] from a base64 TxMsgData payload."""
    if not data:
        return []
    try:
        tx_msg_data = parse_message(TxMsgData, b64decode_str(data))
    except DecodeError as exc:
        logger.warning("Cannot decode TxMsgData from tx result: {}", exc)
        return []
    responses = [{"typeUrl": any_msg.type_url, "value": bytes(any_msg.value)} for any_msg in tx_msg_data.msg_responses]
    if responses:
        return responses
    # Pre-0.46 SDK chains only fill the legacy `data` entries.
    return [{"typeUrl": item.msg_type, "value": bytes(item.data)} for item in tx_msg_data.data]


def delivery_response_from_tx(result: dict[str, Any]) -> dict[str, Any]:
    """Normalize a `tx` lookup result into a delivery response.

    Gas amounts are uint64 on the node and stay decimal strings here.
    """
    tx_result = result.get("tx_result") or {}
    return {
        "height": _int(result.get("height")),
        "txIndex": _int(result.get("index")),
        "code": _int(tx_result.get("code")),
        "codespace": tx_result.get("codespace") or "",
        "transactionHash": str(result.get("hash") or "").upper(),
        "events": tx_result.get("events") or [],
        "rawLog": tx_result.get("log") or "",
        "msgResponses": msg_responses_from_data(tx_result.get("data")),
        "gasUsed": str(_int(tx_result.get("gas_used"))),
        "gasWanted": str(_int(tx_result.get("gas_wanted"))),
    }


def rejected_check_response(check: dict[str, Any], tx_hash: str) -> dict[str, Any]:
    """Delivery response for a transaction refused at CheckTx."""
    return {
        "height": 0,
        "txIndex": 0,
        "code": _int(check.get("code")),
        "codespace": check.get("codespace") or "",
        "transactionHash": tx_hash,
        "events": [],
        "rawLog": check.get("log") or "",
        "msgResponses": [],
        "gasUsed": str(_int(check.get("gas_used"))),
        "gasWanted": str(_int(check.get("gas_wanted"))),
    }


class BroadcastClient:
    """Submits transactions over its own node connection."""

    def __init__(self, rpc: CometRpcClient, *, timeout: float = 60.0, poll_interval: float = 3.0):
        self.rpc = rpc
        self.timeout = timeout
        self.poll_interval = poll_interval

    @classmethod
    async def connect(
        cls,
        node: NodeConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "BroadcastClient":
        rpc = await CometRpcClient.connect(node.rpc_url, timeout=node.request_timeout, transport=transport)
        return cls(rpc, timeout=node.broadcast_timeout, poll_interval=node.broadcast_poll_interval)

    async def close(self) -> None:
        await self.rpc.close()

    async def __aenter__(self) -> "BroadcastClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def broadcast_tx(self, tx: bytes) -> dict[str, Any]:
        """Broadcast and wait for inclusion; returns a delivery response."""
        check = await self.rpc.broadcast_tx_sync(tx)
        tx_hash = str(check.get("hash") or tx_hash_of(tx)).upper()
        if _int(check.get("code")) != 0:
            logger.info("Transaction {} rejected at CheckTx with code {}", tx_hash, check.get("code"))
            return rejected_check_response(check, tx_hash)
        logger.info("Transaction {} accepted into mempool, waiting for inclusion", tx_hash)
        return await self.wait_for_inclusion(tx_hash)

    async def wait_for_inclusion(self, tx_hash: str) -> dict[str, Any]:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout
        while True:
            found = await self.get_tx(tx_hash)
            if found is not None:
                return found
            if loop.time() >= deadline:
                raise BroadcastTimeoutError(tx_hash, self.timeout)
            await asyncio.sleep(self.poll_interval)

    async def get_tx(self, tx_hash: str) -> dict[str, Any] | None:
        """Included tx as a delivery response, or None if not in a block yet."""
        try:
            result = await self.rpc.tx(tx_hash)
        except NodeRpcError as exc:
            if exc.is_not_found:
                return None
            raise
        return delivery_response_from_tx(result)
