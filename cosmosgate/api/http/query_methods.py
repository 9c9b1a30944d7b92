"""Helpers for query endpoints."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Sequence

from fastapi import HTTPException
from loguru import logger

from cosmosgate.api.http.serialization import to_jsonable
from cosmosgate.chain.gateway import query
from cosmosgate.chain.query_services import RegistryQueryService, describe_query_services
from cosmosgate.config.schema import NodeConfig

QueryFn = Callable[..., Awaitable[Any]]


def read_candidates(body: dict[str, Any]) -> list[Any]:
    """Candidates from {"candidates": [...]} or a single {"request": {...}}."""
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="request body must be a JSON object")
    candidates = body.get("candidates")
    if isinstance(candidates, list) and candidates:
        return candidates
    if "request" in body and isinstance(body["request"], dict):
        return [body["request"]]
    raise HTTPException(status_code=400, detail="candidates or request required")


async def get_registry_response(
    *,
    registry_id: str,
    node: NodeConfig | None,
    query_fn: QueryFn = query,
) -> dict[str, Any]:
    """Look up one land registry entry with a fixed example request."""
    request = {"registryId": registry_id}
    logger.info("Calling GetRegistry with request: {}", request)
    result = await query_fn(RegistryQueryService.service_name, "GetRegistry", [request], node=node)
    return {"status": "success", "data": to_jsonable(result)}


async def query_method_response(
    *,
    service_name: str,
    method_name: str,
    candidates: Sequence[Any],
    node: NodeConfig | None,
    query_fn: QueryFn = query,
) -> dict[str, Any]:
    result = await query_fn(service_name, method_name, list(candidates), node=node)
    return {"status": "success", "data": to_jsonable(result)}


def list_query_services_response() -> dict[str, Any]:
    return {"status": "success", "data": describe_query_services()}
