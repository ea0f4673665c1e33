"""Syntax tree dump capability."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from tree_sitter import Node

from ..parser import node_str
from .base import Capability, ParsedSource

Span = Tuple[int, int, int, int]


@dataclass(frozen=True)
class AstCfg:
    id: str
    comment: bool = False
    span: bool = False


@dataclass
class AstNode:
    """Language-independent syntax tree node."""

    type: str
    value: str
    span: Optional[Span]
    children: List["AstNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        # Iterative so deeply nested trees do not hit the recursion limit.
        root: Dict[str, Any] = {}
        stack: List[Tuple[AstNode, Dict[str, Any]]] = [(self, root)]
        while stack:
            node, target = stack.pop()
            target["Type"] = node.type
            target["TextValue"] = node.value
            target["Span"] = list(node.span) if node.span is not None else None
            children: List[Dict[str, Any]] = [{} for _ in node.children]
            target["Children"] = children
            stack.extend(zip(node.children, children))
        return root


@dataclass
class AstResponse:
    id: str
    root: Optional[AstNode]

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "root": self.root.to_dict() if self.root else None}


def _span(node: Node) -> Span:
    start_row, start_column = node.start_point
    end_row, end_column = node.end_point
    return (start_row + 1, start_column + 1, end_row + 1, end_column + 1)


def build(source: ParsedSource, *, span: bool, comment: bool) -> AstNode:
    """Convert the parse tree into :class:`AstNode` values.

    Only leaves carry their text; comments are dropped unless ``comment``.
    """
    spec = source.spec

    def convert(node: Node) -> AstNode:
        value = ""
        if node.child_count == 0:
            value = node_str(node, source.code) or ""
        return AstNode(
            type=node.type,
            value=value,
            span=_span(node) if span else None,
        )

    root = convert(source.root)
    stack: List[Tuple[Node, AstNode]] = [(source.root, root)]
    while stack:
        node, converted = stack.pop()
        for child in node.children:
            if not comment and spec.is_comment(child):
                continue
            converted_child = convert(child)
            converted.children.append(converted_child)
            stack.append((child, converted_child))
    return root


class AstCallback(Capability[AstCfg, AstResponse]):
    """Dumps the full syntax tree with optional spans."""

    configuration = AstCfg

    @classmethod
    def call(cls, cfg: AstCfg, source: ParsedSource) -> AstResponse:
        root = build(source, span=cfg.span, comment=cfg.comment)
        return AstResponse(id=cfg.id, root=root)


__all__ = ["AstCallback", "AstCfg", "AstNode", "AstResponse", "build"]
