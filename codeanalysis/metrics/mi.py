"""Maintainability index, in its original, SEI and Visual Studio variants."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict

from .stats import ratio


def _guarded(log: Callable[[float], float], value: float) -> float:
    return log(value) if value > 0 else 0.0


@dataclass(frozen=True)
class Mi:
    mi_original: float = 0.0
    mi_sei: float = 0.0
    mi_visual_studio: float = 0.0

    @classmethod
    def compute(cls, sloc: float, cloc: float, cyclomatic: float, volume: float) -> "Mi":
        original = (
            171.0
            - 5.2 * _guarded(math.log, volume)
            - 0.23 * cyclomatic
            - 16.2 * _guarded(math.log, sloc)
        )
        sei = (
            171.0
            - 5.2 * _guarded(math.log2, volume)
            - 0.23 * cyclomatic
            - 16.2 * _guarded(math.log2, sloc)
            + 50.0 * math.sin(math.sqrt(2.4 * ratio(cloc, sloc)))
        )
        visual_studio = max(0.0, original * 100.0 / 171.0)
        return cls(mi_original=original, mi_sei=sei, mi_visual_studio=visual_studio)

    def to_dict(self) -> Dict[str, float]:
        return {
            "mi_original": self.mi_original,
            "mi_sei": self.mi_sei,
            "mi_visual_studio": self.mi_visual_studio,
        }


__all__ = ["Mi"]
