"""McCabe cyclomatic complexity."""

from __future__ import annotations

from typing import Dict

from tree_sitter import Node

from ..languages import LanguageSpec
from .stats import Aggregate


class Cyclomatic:
    """One plus the number of decision points of a space."""

    def __init__(self) -> None:
        self.stats = Aggregate(value=1.0)

    def compute(self, node: Node, spec: LanguageSpec) -> None:
        if node.is_named:
            decision = node.type in spec.cyclomatic_nodes
        else:
            decision = node.type in spec.cyclomatic_tokens
        if decision:
            self.stats.value += 1

    def close(self) -> None:
        self.stats.close()

    def merge(self, other: "Cyclomatic") -> None:
        self.stats.merge(other.stats)

    @property
    def sum(self) -> float:
        return self.stats.total

    def to_dict(self) -> Dict[str, float]:
        return {
            "sum": self.stats.total,
            "average": self.stats.average,
            "min": self.stats.min,
            "max": self.stats.max,
        }
