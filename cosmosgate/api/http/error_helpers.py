"""Shared helpers for consistent HTTP error payloads."""

from __future__ import annotations

from typing import Any

from cosmosgate.utils.exceptions import GatewayError, classify_exception, sanitize_error_message


def unknown_error_detail(exc: BaseException | None) -> str:
    """Format generic unknown-error detail consistently across endpoints."""
    return str(exc) if exc else "Unknown error"


def error_envelope(exc: BaseException | str) -> dict[str, Any]:
    """{"status": "error", "message", "code"} body for failed requests."""
    if isinstance(exc, str):
        return {"status": "error", "message": exc}
    if isinstance(exc, GatewayError):
        return {"status": "error", "message": exc.message, "code": exc.code}
    code, _, _ = classify_exception(exc)
    return {"status": "error", "message": sanitize_error_message(unknown_error_detail(exc)), "code": code}
