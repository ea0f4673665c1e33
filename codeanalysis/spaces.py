"""Space tree construction for the metrics capability.

A *space* is a region of code that owns metrics: the compilation unit, and
inside it every function, class, struct, trait, impl, interface or namespace.
The syntax tree is walked once with an explicit stack. Each node is charged to
the innermost open space, and a space is closed (its nested spaces merged in
and its composite metrics derived) as soon as the walk leaves it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from tree_sitter import Node

from .languages import LanguageSpec, SpaceKind
from .logging import get_logger
from .metrics import CodeMetrics, Nesting
from .parser import function_name

if TYPE_CHECKING:
    from .capabilities.base import ParsedSource

logger = get_logger("spaces")


@dataclass
class FuncSpace:
    name: Optional[str]
    start_line: int
    end_line: int
    kind: SpaceKind
    metrics: CodeMetrics
    spaces: List["FuncSpace"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "kind": self.kind.value,
            "spaces": [space.to_dict() for space in self.spaces],
            "metrics": self.metrics.to_dict(),
        }


def _unit_lines(node: Node) -> Tuple[int, int]:
    if node.child_count == 0:
        return 0, 0
    start_row = node.start_point[0]
    end_row, end_column = node.end_point
    # A trailing newline leaves the root ending at column 0 of an empty row.
    if end_column == 0 and end_row > start_row:
        return start_row + 1, end_row
    return start_row + 1, end_row + 1


def _has_body(node: Node) -> bool:
    if node.child_by_field_name("body") is not None:
        return True
    return any(child.type.endswith("body") for child in node.named_children)


def _space_kind(node: Node, spec: LanguageSpec) -> Optional[SpaceKind]:
    if not node.is_named:
        return None
    kind = spec.space_kinds.get(node.type)
    if kind is None:
        return None
    # Forward declarations such as ``struct foo;`` do not open a space.
    if kind is not SpaceKind.FUNCTION and not _has_body(node):
        return None
    return kind


def _open(node: Node, code: bytes, spec: LanguageSpec, kind: SpaceKind) -> FuncSpace:
    if kind is SpaceKind.UNIT:
        start_line, end_line = _unit_lines(node)
        name = None
    else:
        start_line, end_line = node.start_point[0] + 1, node.end_point[0] + 1
        name = function_name(node, code, spec)
    return FuncSpace(
        name=name,
        start_line=start_line,
        end_line=end_line,
        kind=kind,
        metrics=CodeMetrics(start_line, end_line),
    )


def _close_innermost(states: List[FuncSpace], count: int) -> None:
    # The unit is only closed once the whole tree has been walked.
    for _ in range(count):
        if len(states) == 1:
            break
        space = states.pop()
        space.metrics.close()
        parent = states[-1]
        parent.metrics.merge(space.metrics)
        parent.spaces.append(space)


def metrics(source: ParsedSource, path: Path) -> FuncSpace:
    """Compute the space tree of ``source``, naming the unit after ``path``."""
    spec = source.spec
    code = source.code
    root = source.root

    unit = _open(root, code, spec, SpaceKind.UNIT)
    unit.name = str(path)
    states: List[FuncSpace] = [unit]

    # (node, depth in spaces, nesting inherited from the parent node)
    stack: List[Tuple[Node, int, Nesting]] = [(root, 1, Nesting())]
    last_level = 1
    while stack:
        node, level, nesting = stack.pop()
        if level < last_level:
            _close_innermost(states, last_level - level)
            last_level = level

        child_level = level
        if node.id != root.id:
            kind = _space_kind(node, spec)
            if kind is not None:
                states.append(_open(node, code, spec, kind))
                child_level = level + 1
                last_level = child_level

        child_nesting = states[-1].metrics.compute(node, code, spec, nesting)
        if spec.is_comment(node):
            continue
        stack.extend((child, child_level, child_nesting) for child in reversed(node.children))

    _close_innermost(states, len(states))
    unit.metrics.close()
    logger.debug("Computed %d top-level spaces for %s", len(unit.spaces), path)
    return unit


__all__ = ["FuncSpace", "metrics"]
