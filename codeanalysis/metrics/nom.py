"""Number of methods: functions and closures declared in a space."""

from __future__ import annotations

from typing import Dict

from tree_sitter import Node

from ..languages import LanguageSpec
from .stats import Aggregate, ratio


class Nom:
    def __init__(self) -> None:
        self.functions = Aggregate()
        self.closures = Aggregate()

    def compute(self, node: Node, spec: LanguageSpec) -> None:
        if spec.is_function(node):
            self.functions.value += 1
        elif spec.is_closure(node):
            self.closures.value += 1

    def close(self) -> None:
        self.functions.close()
        self.closures.close()

    def merge(self, other: "Nom") -> None:
        self.functions.merge(other.functions)
        self.closures.merge(other.closures)

    @property
    def total(self) -> float:
        return self.functions.total + self.closures.total

    def to_dict(self) -> Dict[str, float]:
        spaces = self.functions.spaces
        return {
            "functions": self.functions.total,
            "closures": self.closures.total,
            "functions_average": self.functions.average,
            "closures_average": self.closures.average,
            "total": self.total,
            "average": ratio(self.total, spaces),
            "functions_min": self.functions.min,
            "functions_max": self.functions.max,
            "closures_min": self.closures.min,
            "closures_max": self.closures.max,
        }


__all__ = ["Nom"]
