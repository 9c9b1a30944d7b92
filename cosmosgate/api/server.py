"""FastAPI server for cosmosgate.

Thin HTTP boundary: routes map onto the broadcast pipeline and the generic
query dispatcher. Config and the message registry are built once in the
lifespan and kept in app_state.
"""

import json
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import FormParser, MultiPartParser

from cosmosgate import __version__
from cosmosgate.api.http.broadcast_methods import create_presigned_response
from cosmosgate.api.http.cancellation import run_until_disconnected
from cosmosgate.api.http.error_helpers import error_envelope
from cosmosgate.api.http.query_methods import (
    get_registry_response,
    list_query_services_response,
    query_method_response,
    read_candidates,
)
from cosmosgate.chain.registry import MessageRegistry, build_default_registry
from cosmosgate.config.access import get_config as get_cached_config
from cosmosgate.config.schema import Config
from cosmosgate.utils.exceptions import GatewayError, classify_exception, sanitize_error_message

app_state: dict[str, Any] = {}

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _config() -> Config:
    config = app_state.get("config")
    if config is None:
        config = get_cached_config()
        app_state["config"] = config
    return config


def _registry() -> MessageRegistry:
    registry = app_state.get("message_registry")
    if registry is None:
        registry = build_default_registry()
        app_state["message_registry"] = registry
    return registry


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = _config()
    registry = _registry()
    logger.info(
        "cosmosgate API server starting (node={}, decoders={})",
        config.node.rpc_url,
        len(registry),
    )
    yield
    logger.info("cosmosgate API server stopped")


app = FastAPI(
    title="cosmosgate API",
    description="Broadcast presigned Cosmos transactions and proxy chain queries",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content=error_envelope(str(exc.detail)))


@app.exception_handler(GatewayError)
async def gateway_exception_handler(request: Request, exc: GatewayError):
    logger.error("{} {} failed [{}]: {}", request.method, request.url.path, exc.code, sanitize_error_message(exc.message))
    return JSONResponse(status_code=500, content=error_envelope(exc))


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    code, _, _ = classify_exception(exc)
    logger.exception(f"Unhandled exception [{code}]: {sanitize_error_message(str(exc))}")
    return JSONResponse(status_code=500, content=error_envelope(exc))


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    """Reject bodies declared larger than server.max_body_bytes."""
    limit = _config().server.max_body_bytes
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        return JSONResponse(
            status_code=413,
            content=error_envelope(f"request body exceeds {limit} bytes"),
        )
    return await call_next(request)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


async def _single_chunk(raw: bytes) -> AsyncGenerator[bytes, None]:
    yield raw
    yield b""  # end of body, lets the form parsers finalize


async def read_limited(request: Request, limit: int) -> bytes:
    """Read the body, counting bytes as they arrive; 413 once past `limit`."""
    received = bytearray()
    async for chunk in request.stream():
        received.extend(chunk)
        if len(received) > limit:
            raise HTTPException(status_code=413, detail=f"request body exceeds {limit} bytes")
    return bytes(received)


async def read_body(request: Request) -> dict[str, Any]:
    """JSON or form body as a dict; empty dict when there is none."""
    raw = await read_limited(request, _config().server.max_body_bytes)
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        if content_type.startswith("multipart/form-data"):
            form = await MultiPartParser(request.headers, _single_chunk(raw)).parse()
        else:
            form = await FormParser(request.headers, _single_chunk(raw)).parse()
        return {k: v for k, v in form.items() if isinstance(v, str)}
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="request body is not valid JSON") from None
    return data if isinstance(data, dict) else {}


async def _guarded(request: Request, awaitable):
    return await run_until_disconnected(
        request,
        awaitable,
        poll_interval=_config().server.disconnect_poll_interval,
        path=request.url.path,
    )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/api/upload/create-presigned")
async def create_presigned(request: Request):
    """Broadcast a hex-encoded presigned transaction; body {"signedTxHex": "0a8f01..."}."""
    body = await read_body(request)
    config = _config()
    payload = await _guarded(
        request,
        create_presigned_response(body=body, registry=_registry(), node=config.node),
    )
    return JSONResponse(content=payload)


@app.get("/get/create-presigned/GetRegistry")
async def get_registry(request: Request):
    """Query the configured land registry entry from the chain."""
    config = _config()
    return await _guarded(
        request,
        get_registry_response(registry_id=config.queries.registry_id, node=config.node),
    )


@app.get("/api/query/services")
async def list_query_services():
    """Query services and their methods."""
    return list_query_services_response()


@app.post("/api/query/{service_name}/{method_name}")
async def query_method(service_name: str, method_name: str, request: Request):
    """Generic query; body {"candidates": [...]} tried in order, or {"request": {...}}."""
    candidates = read_candidates(await read_body(request))
    config = _config()
    return await _guarded(
        request,
        query_method_response(
            service_name=service_name,
            method_name=method_name,
            candidates=candidates,
            node=config.node,
        ),
    )


def create_app() -> FastAPI:
    """Create and return the FastAPI application."""
    return app


def run_server(host: str = "0.0.0.0", port: int = 3001):
    """Run the API server."""
    uvicorn.run(
        app,
        host=host,
        port=port,
        timeout_keep_alive=30,
        timeout_graceful_shutdown=10,
        log_level="warning",
    )
