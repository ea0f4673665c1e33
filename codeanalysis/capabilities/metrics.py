"""Code metrics capability."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..spaces import FuncSpace, metrics
from .base import Capability, ParsedSource


@dataclass(frozen=True)
class MetricsCfg:
    id: str
    path: Path
    # Report only the compilation unit, without nested spaces.
    unit: bool
    language: str


@dataclass
class MetricsResponse:
    id: str
    language: str
    spaces: FuncSpace

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "language": self.language, "spaces": self.spaces.to_dict()}


class MetricsCallback(Capability[MetricsCfg, MetricsResponse]):
    """Computes the metrics space tree of a source buffer."""

    configuration = MetricsCfg

    @classmethod
    def call(cls, cfg: MetricsCfg, source: ParsedSource) -> MetricsResponse:
        space = metrics(source, cfg.path)
        if cfg.unit:
            space.spaces = []
        return MetricsResponse(id=cfg.id, language=cfg.language, spaces=space)


__all__ = ["MetricsCallback", "MetricsCfg", "MetricsResponse"]
