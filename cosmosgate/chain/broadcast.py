"""
Broadcast pipeline for pre-signed transactions.

This module:
1. Validates and hex-decodes the signed transaction
2. Submits it to the node over a dedicated broadcast connection
3. Rejects nonzero result codes with the node's raw log
4. Extracts the transaction hash and decodes embedded message responses
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from loguru import logger

from cosmosgate.chain.broadcast_client import BroadcastClient
from cosmosgate.chain.registry import MessageRegistry
from cosmosgate.chain.types import BroadcastOptions, BroadcastResult, DecodedMessage
from cosmosgate.codec.wire import hex_to_bytes, reconstruct_bytes
from cosmosgate.config.schema import NodeConfig
from cosmosgate.utils.exceptions import BroadcastError, GatewayError, RpcRejectionError, ValidationError

TX_HASH_FIELDS = ("transactionHash", "txhash", "hash")

BroadcastConnector = Callable[[NodeConfig], Awaitable[BroadcastClient]]


def extract_tx_hash(result: dict[str, Any]) -> str:
    """First present hash field wins; empty string when none is present."""
    for key in TX_HASH_FIELDS:
        value = result.get(key)
        if value is not None:
            return str(value)
    return ""


def extract_and_decode_messages(result: dict[str, Any], registry: MessageRegistry) -> list[DecodedMessage]:
    """Decode every entry of result["msgResponses"] independently."""
    msg_responses = result.get("msgResponses")
    if not isinstance(msg_responses, (list, tuple)):
        logger.warning("No msgResponses found in transaction result")
        return []

    decoded: list[DecodedMessage] = []
    for item in msg_responses:
        type_url = "unknown"
        try:
            type_url = item.get("typeUrl") or item.get("type_url") or "unknown"
            message_bytes = reconstruct_bytes(item.get("value"))
            decoded.append(DecodedMessage(type_url, registry.decode(type_url, message_bytes)))
        except Exception as exc:
            logger.error("Error processing msgResponse {}: {}", type_url, exc)
            decoded.append(DecodedMessage(type_url, {"error": str(exc)}))
    return decoded


async def broadcast_signed_tx(
    signed_tx_hex: str,
    options: BroadcastOptions,
    message_registry: MessageRegistry | None = None,
    *,
    node: NodeConfig | None = None,
    connect: BroadcastConnector | None = None,
) -> BroadcastResult:
    """
    Broadcast a previously signed transaction.

    Args:
        signed_tx_hex: Hex of the signed tx bytes, 0x prefix optional
        options: Caller metadata (service / action), logged only
        message_registry: Decoders for msgResponses; skip decoding when None
        node: Node settings; cached config when omitted
        connect: Factory for the broadcast connection

    Raises:
        GatewayError subclasses; unexpected failures become BroadcastError.
    """
    try:
        if not signed_tx_hex:
            raise ValidationError("signedTxHex is required", field="signedTxHex")

        tx_bytes = hex_to_bytes(signed_tx_hex)

        if node is None:
            from cosmosgate.config.access import get_node_config

            node = get_node_config()
        connect = connect or BroadcastClient.connect

        logger.info(
            "Broadcasting {} byte tx for {} ({}) to {}",
            len(tx_bytes),
            options.service,
            options.action,
            node.rpc_url,
        )
        client = await connect(node)
        try:
            result = await client.broadcast_tx(tx_bytes)
        finally:
            await client.close()

        if not result:
            raise BroadcastError("Node returned an empty broadcast response")

        code = int(result.get("code") or 0)
        if code != 0:
            raise RpcRejectionError(code, str(result.get("rawLog") or ""), codespace=str(result.get("codespace") or ""))

        tx_hash = extract_tx_hash(result)
        decoded = (
            tuple(extract_and_decode_messages(result, message_registry))
            if message_registry is not None
            else None
        )
        return BroadcastResult(success=True, tx_hash=tx_hash, decoded_messages=decoded, responses=result)
    except GatewayError:
        raise
    except Exception as exc:
        raise BroadcastError(str(exc) or "Broadcast failed") from exc
