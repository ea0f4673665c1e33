"""Function span extraction capability."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from ..parser import function_name, walk
from .base import Capability, ParsedSource

ANONYMOUS = "<anonymous>"


@dataclass(frozen=True)
class FunctionCfg:
    id: str


@dataclass(frozen=True)
class FunctionSpan:
    name: str
    start_line: int
    end_line: int
    # The parser recovered from a malformed construct inside this function.
    error: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "error": self.error,
        }


@dataclass
class FunctionResponse:
    id: str
    spans: List[FunctionSpan]

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "spans": [span.to_dict() for span in self.spans]}


def function(source: ParsedSource) -> List[FunctionSpan]:
    """Return every function-like definition in source order."""
    spec = source.spec
    spans: List[FunctionSpan] = []
    for node in walk(source.root):
        if not spec.is_function(node):
            continue
        name = function_name(node, source.code, spec)
        spans.append(
            FunctionSpan(
                name=name or ANONYMOUS,
                start_line=node.start_point[0] + 1,
                end_line=node.end_point[0] + 1,
                error=node.has_error or node.is_missing,
            )
        )
    return spans


class FunctionCallback(Capability[FunctionCfg, FunctionResponse]):
    """Lists function spans."""

    configuration = FunctionCfg

    @classmethod
    def call(cls, cfg: FunctionCfg, source: ParsedSource) -> FunctionResponse:
        return FunctionResponse(id=cfg.id, spans=function(source))


__all__ = ["FunctionCallback", "FunctionCfg", "FunctionResponse", "FunctionSpan", "function"]
