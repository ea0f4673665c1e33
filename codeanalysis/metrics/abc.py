"""ABC size metric: assignments, branches (calls) and conditions."""

from __future__ import annotations

import math
from typing import Dict

from tree_sitter import Node

from ..languages import LanguageSpec
from .stats import Aggregate


class Abc:
    def __init__(self) -> None:
        self.assignments = Aggregate()
        self.branches = Aggregate()
        self.conditions = Aggregate()

    def compute(self, node: Node, spec: LanguageSpec) -> None:
        if node.is_named:
            if node.type in spec.assignment_types:
                self.assignments.value += 1
            elif node.type in spec.branch_types:
                self.branches.value += 1
        elif node.type in spec.condition_tokens:
            self.conditions.value += 1

    def close(self) -> None:
        self.assignments.close()
        self.branches.close()
        self.conditions.close()

    def merge(self, other: "Abc") -> None:
        self.assignments.merge(other.assignments)
        self.branches.merge(other.branches)
        self.conditions.merge(other.conditions)

    @property
    def magnitude(self) -> float:
        return math.sqrt(
            self.assignments.total ** 2 + self.branches.total ** 2 + self.conditions.total ** 2
        )

    def to_dict(self) -> Dict[str, float]:
        result: Dict[str, float] = {
            "assignments": self.assignments.total,
            "branches": self.branches.total,
            "conditions": self.conditions.total,
            "magnitude": self.magnitude,
        }
        parts = (
            ("assignments", self.assignments),
            ("branches", self.branches),
            ("conditions", self.conditions),
        )
        for key, stats in parts:
            result[f"{key}_average"] = stats.average
            result[f"{key}_min"] = stats.min
            result[f"{key}_max"] = stats.max
        return result


__all__ = ["Abc"]
