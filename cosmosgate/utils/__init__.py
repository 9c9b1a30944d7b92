"""Utility functions for cosmosgate."""

from cosmosgate.utils.exceptions import (
    GatewayError,
    ValidationError,
    DecodeError,
    NotFoundError,
    MethodNotFoundError,
    NodeConnectionError,
    NodeRpcError,
    RpcRejectionError,
    TimeoutError,
    BroadcastTimeoutError,
    BroadcastError,
    RequestCancelledError,
    ErrorCategory,
    classify_exception,
    sanitize_error_message,
)

__all__ = [
    "GatewayError",
    "ValidationError",
    "DecodeError",
    "NotFoundError",
    "MethodNotFoundError",
    "NodeConnectionError",
    "NodeRpcError",
    "RpcRejectionError",
    "TimeoutError",
    "BroadcastTimeoutError",
    "BroadcastError",
    "RequestCancelledError",
    "ErrorCategory",
    "classify_exception",
    "sanitize_error_message",
]
