"""Request payloads accepted by the HTTP service."""

from __future__ import annotations

from pydantic import BaseModel


class AstPayload(BaseModel):
    id: str = ""
    file_name: str
    code: str
    comment: bool = False
    span: bool = False


class CommentPayload(BaseModel):
    id: str = ""
    file_name: str
    code: str


class MetricsPayload(BaseModel):
    id: str = ""
    file_name: str
    code: str
    unit: bool = False


class FunctionPayload(BaseModel):
    id: str = ""
    file_name: str
    code: str


__all__ = ["AstPayload", "CommentPayload", "FunctionPayload", "MetricsPayload"]
