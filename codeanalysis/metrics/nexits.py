"""Number of exit points."""

from __future__ import annotations

from typing import Dict

from tree_sitter import Node

from ..languages import LanguageSpec
from .stats import Aggregate, ratio


class Nexits:
    def __init__(self) -> None:
        self.stats = Aggregate()

    def compute(self, node: Node, spec: LanguageSpec) -> None:
        if not node.is_named and node.type in spec.exit_tokens:
            self.stats.value += 1

    def close(self) -> None:
        self.stats.close()

    def merge(self, other: "Nexits") -> None:
        self.stats.merge(other.stats)

    def to_dict(self, functions: float) -> Dict[str, float]:
        return {
            "sum": self.stats.total,
            "average": ratio(self.stats.total, functions),
            "min": self.stats.min,
            "max": self.stats.max,
        }


__all__ = ["Nexits"]
