"""Request adapters: decode a request, identify the language, dispatch, encode.

Each adapter is a plain synchronous function so the service can run it on its
worker pool. Structured (JSON) adapters answer errors with an ``{id, error}``
body; raw adapters answer with a ``text/plain`` ``error: <message>`` body.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type

from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ..action import action
from ..capabilities.ast import AstCallback, AstCfg
from ..capabilities.base import Capability, CapabilityError, ConfigT
from ..capabilities.comment import CommentCallback, CommentCfg, comment_dialect
from ..capabilities.function import FunctionCallback, FunctionCfg
from ..capabilities.metrics import MetricsCallback, MetricsCfg
from ..guess import guess_language
from ..languages import Lang
from ..logging import get_logger
from ..models import INVALID_LANGUAGE, ErrorResponse
from .schemas import AstPayload, CommentPayload, FunctionPayload, MetricsPayload

logger = get_logger("service")

RAW_MEDIA_TYPE = "application/octet-stream"

# Raw requests carry no id of their own.
RAW_ID = ""


def _identify(code: bytes, file_name: str) -> Tuple[Optional[Lang], str]:
    lang, name = guess_language(code, Path(file_name))
    if lang is None:
        logger.debug("No supported language for %r", file_name)
    return lang, name


def _json_error(id: str, message: str, status_code: int = 404) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(id=id, error=message).to_dict()
    )


def _plain_error(message: str, status_code: int = 404) -> PlainTextResponse:
    return PlainTextResponse(f"error: {message}", status_code=status_code)


def _dispatch(
    capability: Type[Capability[ConfigT, Any]], lang: Lang, code: bytes, cfg: ConfigT
) -> Any:
    return action(capability, lang, code, Path(""), None, cfg)


def _as_json(result: Any) -> JSONResponse:
    content: Dict[str, Any] = result.to_dict()
    return JSONResponse(content=content)


def ast_json(payload: AstPayload) -> Response:
    code = payload.code.encode("utf-8")
    lang, _ = _identify(code, payload.file_name)
    if lang is None:
        return _json_error(payload.id, INVALID_LANGUAGE)
    cfg = AstCfg(id=payload.id, comment=payload.comment, span=payload.span)
    try:
        return _as_json(_dispatch(AstCallback, lang, code, cfg))
    except CapabilityError as exc:
        return _json_error(payload.id, str(exc), 422)


def comment_json(payload: CommentPayload) -> Response:
    code = payload.code.encode("utf-8")
    lang, _ = _identify(code, payload.file_name)
    if lang is None:
        return _json_error(payload.id, INVALID_LANGUAGE)
    cfg = CommentCfg(id=payload.id)
    try:
        return _as_json(_dispatch(CommentCallback, comment_dialect(lang), code, cfg))
    except CapabilityError as exc:
        return _json_error(payload.id, str(exc), 422)


def comment_plain(code: bytes, file_name: str) -> Response:
    lang, _ = _identify(code, file_name)
    if lang is None:
        return _plain_error(INVALID_LANGUAGE)
    try:
        result = _dispatch(CommentCallback, comment_dialect(lang), code, CommentCfg(id=RAW_ID))
    except CapabilityError as exc:
        return _plain_error(str(exc), 422)
    if result.code is None:
        return Response(status_code=204)
    return Response(content=result.code, media_type=RAW_MEDIA_TYPE)


def metrics_json(payload: MetricsPayload) -> Response:
    code = payload.code.encode("utf-8")
    lang, name = _identify(code, payload.file_name)
    if lang is None:
        return _json_error(payload.id, INVALID_LANGUAGE)
    cfg = MetricsCfg(
        id=payload.id, path=Path(payload.file_name), unit=payload.unit, language=name
    )
    try:
        return _as_json(_dispatch(MetricsCallback, lang, code, cfg))
    except CapabilityError as exc:
        return _json_error(payload.id, str(exc), 422)


def unit_flag(value: Optional[str]) -> bool:
    """Interpret the raw ``unit`` query parameter."""
    return value in ("1", "true")


def metrics_plain(code: bytes, file_name: str, unit: Optional[str] = None) -> Response:
    lang, name = _identify(code, file_name)
    if lang is None:
        return _plain_error(INVALID_LANGUAGE)
    cfg = MetricsCfg(id=RAW_ID, path=Path(file_name), unit=unit_flag(unit), language=name)
    try:
        return _as_json(_dispatch(MetricsCallback, lang, code, cfg))
    except CapabilityError as exc:
        return _plain_error(str(exc), 422)


def function_json(payload: FunctionPayload) -> Response:
    code = payload.code.encode("utf-8")
    lang, _ = _identify(code, payload.file_name)
    if lang is None:
        return _json_error(payload.id, INVALID_LANGUAGE)
    try:
        return _as_json(_dispatch(FunctionCallback, lang, code, FunctionCfg(id=payload.id)))
    except CapabilityError as exc:
        return _json_error(payload.id, str(exc), 422)


def function_plain(code: bytes, file_name: str) -> Response:
    lang, _ = _identify(code, file_name)
    if lang is None:
        return _plain_error(INVALID_LANGUAGE)
    try:
        return _as_json(_dispatch(FunctionCallback, lang, code, FunctionCfg(id=RAW_ID)))
    except CapabilityError as exc:
        return _plain_error(str(exc), 422)


__all__ = [
    "INVALID_LANGUAGE",
    "RAW_MEDIA_TYPE",
    "ast_json",
    "comment_json",
    "comment_plain",
    "function_json",
    "function_plain",
    "metrics_json",
    "metrics_plain",
    "unit_flag",
]
