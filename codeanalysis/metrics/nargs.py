"""Number of arguments of functions and closures."""

from __future__ import annotations

from typing import Dict

from tree_sitter import Node

from ..languages import LanguageSpec
from ..parser import parameter_count
from .nom import Nom
from .stats import Aggregate, ratio


class Nargs:
    def __init__(self) -> None:
        self.functions = Aggregate()
        self.closures = Aggregate()

    def compute(self, node: Node, spec: LanguageSpec) -> None:
        if spec.is_function(node):
            self.functions.value += parameter_count(node, spec)
        elif spec.is_closure(node):
            self.closures.value += parameter_count(node, spec)

    def close(self) -> None:
        self.functions.close()
        self.closures.close()

    def merge(self, other: "Nargs") -> None:
        self.functions.merge(other.functions)
        self.closures.merge(other.closures)

    def to_dict(self, nom: Nom) -> Dict[str, float]:
        total = self.functions.total + self.closures.total
        return {
            "total_functions": self.functions.total,
            "average_functions": ratio(self.functions.total, nom.functions.total),
            "total_closures": self.closures.total,
            "average_closures": ratio(self.closures.total, nom.closures.total),
            "total": total,
            "average": ratio(total, nom.total),
            "functions_min": self.functions.min,
            "functions_max": self.functions.max,
            "closures_min": self.closures.min,
            "closures_max": self.closures.max,
        }


__all__ = ["Nargs"]
