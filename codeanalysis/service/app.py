"""FastAPI application entrypoint for codeanalysis service mode."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from functools import partial
from typing import AsyncIterator, Callable, Optional, Type, TypeVar

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from pydantic import BaseModel, ValidationError

from .. import __version__
from ..config import ServerConfig
from ..logging import get_logger
from . import adapters
from .schemas import AstPayload, CommentPayload, FunctionPayload, MetricsPayload

logger = get_logger("service")

JSON_MEDIA_TYPE = "application/json"

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";")[0].strip().lower()


async def _read_body(request: Request, limit: int) -> bytes:
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise HTTPException(status_code=413, detail="Request body too large")
    body = bytearray()
    async for chunk in request.stream():
        body += chunk
        if len(body) > limit:
            raise HTTPException(status_code=413, detail="Request body too large")
    return bytes(body)


def _parse_payload(payload_type: Type[PayloadT], body: bytes) -> PayloadT:
    try:
        return payload_type.model_validate_json(body)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


def create_app(config: Optional[ServerConfig] = None) -> FastAPI:
    """Create the FastAPI application exposing the analysis capabilities."""

    server = config or ServerConfig()
    # Parsing is CPU bound; keep it off the event loop.
    executor = ThreadPoolExecutor(
        max_workers=server.workers, thread_name_prefix="codeanalysis"
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            executor.shutdown(wait=False)

    app = FastAPI(title="Code Analysis Service", version=__version__, lifespan=lifespan)
    app.state.config = server

    async def run(adapter: Callable[..., Response], *args: object) -> Response:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(executor, partial(adapter, *args))

    async def handle(
        request: Request,
        payload_type: Type[BaseModel],
        json_adapter: Callable[..., Response],
        raw_adapter: Optional[Callable[[bytes], Response]] = None,
    ) -> Response:
        media_type = _media_type(request)
        if media_type == JSON_MEDIA_TYPE:
            body = await _read_body(request, server.max_body_size)
            return await run(json_adapter, _parse_payload(payload_type, body))
        if media_type == adapters.RAW_MEDIA_TYPE and raw_adapter is not None:
            body = await _read_body(request, server.max_body_size)
            return await run(raw_adapter, body)
        raise HTTPException(
            status_code=415, detail=f"Unsupported content type: {media_type or 'none'}"
        )

    @app.get("/ping")
    async def ping() -> Response:
        return Response(status_code=200)

    @app.post("/ast")
    async def ast(request: Request) -> Response:
        return await handle(request, AstPayload, adapters.ast_json)

    @app.post("/comment")
    async def comment(request: Request, file_name: str = "") -> Response:
        return await handle(
            request,
            CommentPayload,
            adapters.comment_json,
            partial(adapters.comment_plain, file_name=file_name),
        )

    @app.post("/metrics")
    async def metrics(
        request: Request, file_name: str = "", unit: Optional[str] = None
    ) -> Response:
        return await handle(
            request,
            MetricsPayload,
            adapters.metrics_json,
            partial(adapters.metrics_plain, file_name=file_name, unit=unit),
        )

    @app.post("/function")
    async def function(request: Request, file_name: str = "") -> Response:
        return await handle(
            request,
            FunctionPayload,
            adapters.function_json,
            partial(adapters.function_plain, file_name=file_name),
        )

    return app


def run_service(config: Optional[ServerConfig] = None) -> None:  # pragma: no cover - integration path
    import uvicorn

    server = config or ServerConfig()
    logger.info("Serving on %s:%d with %d workers", server.host, server.port, server.workers)
    uvicorn.run(create_app(server), host=server.host, port=server.port)


__all__ = ["create_app", "run_service"]
