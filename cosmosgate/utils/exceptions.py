"""
Gateway error hierarchy.

Every error carries a stable ``code`` and an ``ErrorCategory``; subclasses
declare both as class attributes. ``classify_exception`` maps foreign
exceptions (httpx, asyncio, json) onto the same codes, and
``sanitize_error_message`` scrubs secrets before anything is logged or
returned to a client.
"""

from __future__ import annotations

import asyncio
import json
import re
from enum import Enum
from typing import Any

import httpx

_TX_NOT_FOUND = re.compile(r"\btx \([0-9A-Fa-f]*\) not found", re.IGNORECASE)


class ErrorCategory(Enum):
    RETRYABLE = "retryable"
    FATAL = "fatal"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"


class GatewayError(Exception):
    """Base exception for all cosmosgate errors."""

    code: str = "UNKNOWN_ERROR"
    category: ErrorCategory = ErrorCategory.FATAL

    def __init__(
        self,
        message: str,
        code: str | None = None,
        category: ErrorCategory | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if category is not None:
            self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


class ValidationError(GatewayError):
    """Caller input rejected before any node call."""

    code = "VALIDATION_ERROR"
    category = ErrorCategory.VALIDATION

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, details={"field": field} if field else None)


class DecodeError(GatewayError):
    """Malformed hex, byte map or protobuf payload."""

    code = "DECODE_ERROR"
    category = ErrorCategory.VALIDATION

    def __init__(self, message: str, type_url: str | None = None):
        super().__init__(message, details={"type_url": type_url} if type_url else None)


class NotFoundError(GatewayError):
    code = "NOT_FOUND"
    category = ErrorCategory.NOT_FOUND

    def __init__(self, resource_type: str, resource_id: str, available: list[str] | None = None):
        message = f"{resource_type} not found: {resource_id}"
        if available is not None:
            message += f". Available: {', '.join(available)}"
        super().__init__(
            message,
            details={"resource_type": resource_type, "resource_id": resource_id, "available": available or []},
        )


class MethodNotFoundError(GatewayError):
    """Query method missing from a service's method table."""

    code = "METHOD_NOT_FOUND"
    category = ErrorCategory.NOT_FOUND

    def __init__(self, method: str, available: list[str]):
        self.method = method
        self.available = list(available)
        super().__init__(
            f"Method '{method}' not found. Available: {', '.join(self.available)}",
            details={"method": method, "available": self.available},
        )


class NodeConnectionError(GatewayError):
    """Node RPC endpoint unreachable."""

    code = "CONNECTION_ERROR"
    category = ErrorCategory.RETRYABLE

    def __init__(self, endpoint: str, message: str):
        self.endpoint = endpoint
        super().__init__(f"Cannot reach node at {endpoint}: {message}", details={"endpoint": endpoint})


class NodeRpcError(GatewayError):
    """JSON-RPC level error returned by the node."""

    code = "NODE_RPC_ERROR"

    def __init__(self, method: str, message: str, rpc_code: int | None = None, data: Any = None):
        self.rpc_code = rpc_code
        self.data = data
        text = f"Node RPC '{method}' failed: {message}"
        if data:
            text += f" ({data})"
        super().__init__(text, details={"method": method, "rpc_code": rpc_code, "data": data})

    @property
    def is_not_found(self) -> bool:
        """True only for the node's `tx (<hash>) not found` lookup miss."""
        return bool(_TX_NOT_FOUND.search(str(self.data or "")))


class RpcRejectionError(GatewayError):
    """Nonzero ABCI result code (invalid signature, insufficient funds, ...)."""

    code = "RPC_REJECTED"

    def __init__(self, result_code: int, raw_log: str, codespace: str = "", prefix: str = "Broadcast failed"):
        self.result_code = result_code
        self.raw_log = raw_log
        self.codespace = codespace
        super().__init__(
            f"{prefix} (code {result_code}): {raw_log}",
            details={"result_code": result_code, "raw_log": raw_log, "codespace": codespace},
        )


class TimeoutError(GatewayError):
    code = "TIMEOUT"
    category = ErrorCategory.TIMEOUT

    def __init__(self, operation: str, timeout_seconds: float):
        super().__init__(
            f"Operation '{operation}' timed out after {timeout_seconds}s",
            details={"operation": operation, "timeout_seconds": timeout_seconds},
        )


class BroadcastTimeoutError(GatewayError):
    """Transaction accepted by the mempool but not seen in a block in time."""

    code = "BROADCAST_TIMEOUT"
    category = ErrorCategory.TIMEOUT

    def __init__(self, tx_hash: str, timeout_seconds: float):
        self.tx_hash = tx_hash
        super().__init__(
            f"Transaction with ID {tx_hash} was submitted but was not yet found on the chain "
            f"after {timeout_seconds}s. You might want to check later.",
            details={"tx_hash": tx_hash, "timeout_seconds": timeout_seconds},
        )


class BroadcastError(GatewayError):
    """Unexpected failure inside the broadcast pipeline."""

    code = "BROADCAST_FAILED"

    def __init__(self, message: str):
        super().__init__(message or "Broadcast failed")


class RequestCancelledError(GatewayError):
    """HTTP client went away while a node call was in flight."""

    code = "CLIENT_DISCONNECTED"

    def __init__(self, path: str):
        super().__init__(f"Request to {path} cancelled: client disconnected", details={"path": path})


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"(mnemonic|private[_-]?key|priv[_-]?key)[=:]\s*['\"]?([^'\"\n]+)['\"]?", re.IGNORECASE),
]

# (exception types, code, category, worth resubmitting); first match wins.
_FOREIGN_ERRORS: list[tuple[tuple[type[BaseException], ...], str, ErrorCategory, bool]] = [
    ((asyncio.TimeoutError, httpx.TimeoutException), "TIMEOUT", ErrorCategory.TIMEOUT, True),
    ((ConnectionError, httpx.TransportError), "CONNECTION_ERROR", ErrorCategory.RETRYABLE, True),
    ((json.JSONDecodeError,), "JSON_PARSE_ERROR", ErrorCategory.VALIDATION, False),
    ((ValueError,), "INVALID_VALUE", ErrorCategory.VALIDATION, False),
    ((KeyError,), "MISSING_KEY", ErrorCategory.VALIDATION, False),
    ((TypeError,), "TYPE_ERROR", ErrorCategory.VALIDATION, False),
]

_MESSAGE_HINTS: list[tuple[tuple[str, ...], str, ErrorCategory, bool]] = [
    (("timeout", "timed out"), "TIMEOUT", ErrorCategory.TIMEOUT, True),
    (("not found",), "NOT_FOUND", ErrorCategory.NOT_FOUND, False),
    (("connection", "network"), "CONNECTION_ERROR", ErrorCategory.RETRYABLE, True),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    for pattern in _SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def classify_exception(exc: BaseException) -> tuple[str, ErrorCategory, bool]:
    """
    Return (error_code, category, should_retry) for any exception.

    Nothing in cosmosgate retries automatically; should_retry is a hint for
    callers deciding whether to resubmit at a higher level.
    """
    if isinstance(exc, GatewayError):
        return exc.code, exc.category, exc.category == ErrorCategory.RETRYABLE

    for types, code, category, retry in _FOREIGN_ERRORS:
        if isinstance(exc, types):
            return code, category, retry

    text = str(exc).lower()
    for needles, code, category, retry in _MESSAGE_HINTS:
        if any(needle in text for needle in needles):
            return code, category, retry

    return "INTERNAL_ERROR", ErrorCategory.FATAL, False
