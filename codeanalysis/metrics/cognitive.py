"""Cognitive complexity.

Structural constructs (``if``, loops, ``catch``, ternaries) cost one plus
their nesting level, ``else``/``elif`` branches and jumps cost one, and every
sequence of mixed boolean operators costs one per operator change. Nested
functions and closures raise the nesting level of their bodies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from tree_sitter import Node

from ..languages import LanguageSpec
from .stats import Aggregate, ratio


@dataclass(frozen=True)
class Nesting:
    """Nesting context inherited by the children of a node."""

    level: int = 0
    in_function: bool = False


def _boolean_operator(node: Optional[Node], spec: LanguageSpec) -> Optional[str]:
    if node is None or node.type not in spec.boolean_types:
        return None
    for child in node.children:
        if not child.is_named and child.type in spec.boolean_operators:
            return child.type
    return None


def _is_else_if(node: Node) -> bool:
    parent = node.parent
    if parent is not None and parent.type == "else_clause":
        return True
    previous = node.prev_sibling
    return previous is not None and previous.type == "else"


class Cognitive:
    def __init__(self) -> None:
        self.stats = Aggregate()

    def compute(self, node: Node, spec: LanguageSpec, nesting: Nesting) -> Nesting:
        """Account for ``node`` and return the nesting its children inherit."""
        kind = node.type
        if kind in spec.flat_types:
            self.stats.value += 1
            return nesting
        if not node.is_named:
            return nesting

        if kind in spec.nesting_types:
            if _is_else_if(node):
                # Already paid for by the else branch.
                return nesting
            self.stats.value += 1 + nesting.level
            return Nesting(nesting.level + 1, nesting.in_function)

        if kind in spec.boolean_types:
            operator = _boolean_operator(node, spec)
            if operator is not None and operator != _boolean_operator(node.parent, spec):
                self.stats.value += 1
            return nesting

        if spec.is_function(node) or spec.is_closure(node):
            if nesting.in_function:
                return Nesting(nesting.level + 1, True)
            return Nesting(nesting.level, True)

        return nesting

    def close(self) -> None:
        self.stats.close()

    def merge(self, other: "Cognitive") -> None:
        self.stats.merge(other.stats)

    def to_dict(self, functions: float) -> Dict[str, float]:
        return {
            "sum": self.stats.total,
            "average": ratio(self.stats.total, functions),
            "min": self.stats.min,
            "max": self.stats.max,
        }
