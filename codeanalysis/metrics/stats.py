"""Aggregation helpers shared by the metric implementations."""

from __future__ import annotations

import math
from dataclasses import dataclass


def ratio(numerator: float, denominator: float) -> float:
    """Divide, mapping an undefined ratio to 0.0 so results stay JSON-safe."""
    return numerator / denominator if denominator else 0.0


@dataclass
class Aggregate:
    """Own value of one space plus statistics over it and its nested spaces.

    ``value`` accumulates while the space is traversed. :meth:`close` folds it
    into the totals exactly once, and :meth:`merge` folds a closed nested
    space in, so ``total``, ``minimum`` and ``maximum`` always cover the space
    and all of its descendants.
    """

    value: float = 0.0
    total: float = 0.0
    minimum: float = math.inf
    maximum: float = -math.inf
    spaces: int = 0

    def close(self) -> None:
        self.total += self.value
        self.minimum = min(self.minimum, self.value)
        self.maximum = max(self.maximum, self.value)
        self.spaces += 1

    def merge(self, other: "Aggregate") -> None:
        self.total += other.total
        self.minimum = min(self.minimum, other.minimum)
        self.maximum = max(self.maximum, other.maximum)
        self.spaces += other.spaces

    @property
    def min(self) -> float:
        return self.minimum if self.spaces else 0.0

    @property
    def max(self) -> float:
        return self.maximum if self.spaces else 0.0

    @property
    def average(self) -> float:
        return ratio(self.total, self.spaces)


__all__ = ["Aggregate", "ratio"]
