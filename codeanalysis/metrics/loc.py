"""Lines-of-code metrics.

* ``sloc``: source lines spanned by the space.
* ``ploc``: lines holding at least one code token.
* ``lloc``: logical lines, i.e. statements.
* ``cloc``: lines touched by a comment.
* ``blank``: spanned lines holding neither code nor comment.
"""

from __future__ import annotations

import math
from typing import Dict, Set

from tree_sitter import Node

from ..languages import LanguageSpec
from .stats import ratio

_KEYS = ("sloc", "ploc", "lloc", "cloc", "blank")


class Loc:
    def __init__(self, start_line: int, end_line: int) -> None:
        self.start_line = start_line
        self.end_line = end_line
        self.code_lines: Set[int] = set()
        self.comment_lines: Set[int] = set()
        self.logical = 0
        self.spaces = 0
        self._min: Dict[str, float] = {key: math.inf for key in _KEYS}
        self._max: Dict[str, float] = {key: -math.inf for key in _KEYS}

    def compute(self, node: Node, spec: LanguageSpec) -> None:
        if node.start_byte == node.end_byte:
            return
        rows = range(node.start_point[0], node.end_point[0] + 1)
        if spec.is_comment(node):
            self.comment_lines.update(rows)
            return
        if node.is_named and node.type in spec.statement_types:
            self.logical += 1
        if node.child_count == 0:
            self.code_lines.update(rows)

    @property
    def sloc(self) -> int:
        if self.start_line <= 0 or self.end_line < self.start_line:
            return 0
        return self.end_line - self.start_line + 1

    @property
    def cloc(self) -> int:
        return len(self.comment_lines)

    def values(self) -> Dict[str, float]:
        sloc = self.sloc
        covered = len(self.code_lines | self.comment_lines)
        return {
            "sloc": float(sloc),
            "ploc": float(len(self.code_lines)),
            "lloc": float(self.logical),
            "cloc": float(len(self.comment_lines)),
            "blank": float(max(0, sloc - covered)),
        }

    def close(self) -> None:
        for key, value in self.values().items():
            self._min[key] = min(self._min[key], value)
            self._max[key] = max(self._max[key], value)
        self.spaces += 1

    def merge(self, other: "Loc") -> None:
        self.code_lines |= other.code_lines
        self.comment_lines |= other.comment_lines
        self.logical += other.logical
        self.spaces += other.spaces
        for key in _KEYS:
            self._min[key] = min(self._min[key], other._min[key])
            self._max[key] = max(self._max[key], other._max[key])

    def to_dict(self) -> Dict[str, float]:
        values = self.values()
        result: Dict[str, float] = {}
        for key in _KEYS:
            result[key] = values[key]
        for key in _KEYS:
            result[f"{key}_average"] = ratio(values[key], self.spaces)
            result[f"{key}_min"] = self._min[key] if self.spaces else 0.0
            result[f"{key}_max"] = self._max[key] if self.spaces else 0.0
        return result


__all__ = ["Loc"]
