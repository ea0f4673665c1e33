"""Halstead software science metrics."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import Dict

from tree_sitter import Node

from ..languages import HALSTEAD_IGNORED, LanguageSpec
from ..parser import node_text
from .stats import ratio


class HalsteadMaps:
    """Distinct operators and operands seen in a space, with occurrence counts.

    Operands are keyed by their source text. Operators are the anonymous leaf
    tokens of the grammar plus a few named leaves such as primitive types.
    """

    def __init__(self) -> None:
        self.operators: Counter = Counter()
        self.operands: Counter = Counter()

    def compute(self, node: Node, code: bytes, spec: LanguageSpec) -> None:
        if node.start_byte == node.end_byte:
            return
        if node.is_named:
            if node.type in spec.operand_types:
                self.operands[node_text(node, code)] += 1
            elif node.child_count == 0 and node.type in spec.operator_types:
                self.operators[node_text(node, code)] += 1
        elif node.child_count == 0 and node.type not in HALSTEAD_IGNORED:
            self.operators[node.type.encode("utf-8")] += 1

    def merge(self, other: "HalsteadMaps") -> None:
        self.operators.update(other.operators)
        self.operands.update(other.operands)

    def finalize(self) -> "Halstead":
        return Halstead(
            u_operators=len(self.operators),
            operators=sum(self.operators.values()),
            u_operands=len(self.operands),
            operands=sum(self.operands.values()),
        )


def _log2_term(count: float) -> float:
    return count * math.log2(count) if count > 0 else 0.0


@dataclass(frozen=True)
class Halstead:
    u_operators: int = 0
    operators: int = 0
    u_operands: int = 0
    operands: int = 0

    @property
    def length(self) -> float:
        return float(self.operators + self.operands)

    @property
    def vocabulary(self) -> float:
        return float(self.u_operators + self.u_operands)

    @property
    def estimated_program_length(self) -> float:
        return _log2_term(self.u_operators) + _log2_term(self.u_operands)

    @property
    def purity_ratio(self) -> float:
        return ratio(self.estimated_program_length, self.length)

    @property
    def volume(self) -> float:
        if self.vocabulary <= 0:
            return 0.0
        return self.length * math.log2(self.vocabulary)

    @property
    def difficulty(self) -> float:
        return self.u_operators / 2.0 * ratio(self.operands, self.u_operands)

    @property
    def level(self) -> float:
        return ratio(1.0, self.difficulty)

    @property
    def effort(self) -> float:
        return self.difficulty * self.volume

    @property
    def time(self) -> float:
        # Stroud number: 18 elementary mental discriminations per second.
        return self.effort / 18.0

    @property
    def bugs(self) -> float:
        return self.effort ** (2.0 / 3.0) / 3000.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "n1": float(self.u_operators),
            "N1": float(self.operators),
            "n2": float(self.u_operands),
            "N2": float(self.operands),
            "length": self.length,
            "estimated_program_length": self.estimated_program_length,
            "purity_ratio": self.purity_ratio,
            "vocabulary": self.vocabulary,
            "volume": self.volume,
            "difficulty": self.difficulty,
            "level": self.level,
            "effort": self.effort,
            "time": self.time,
            "bugs": self.bugs,
        }


__all__ = ["Halstead", "HalsteadMaps"]
