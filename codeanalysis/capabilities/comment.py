"""Comment removal capability."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from tree_sitter import Node

from ..languages import LanguageSpec, Lang
from ..parser import node_text
from .base import Capability, ParsedSource

# Grammars whose comments are recognised more reliably by a dedicated dialect.
COMMENT_DIALECTS: Mapping[Lang, Lang] = {Lang.CPP: Lang.CCOMMENT}


def comment_dialect(lang: Lang) -> Lang:
    """Return the grammar comment removal should parse ``lang`` sources with."""
    return COMMENT_DIALECTS.get(lang, lang)


@dataclass(frozen=True)
class CommentCfg:
    id: str


@dataclass
class CommentResponse:
    id: str
    # None means the source had no removable comment.
    code: Optional[bytes]

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "code": list(self.code) if self.code is not None else None}


def _is_useful(node: Node, code: bytes, spec: LanguageSpec) -> bool:
    if spec.useful_comment is None:
        return False
    if spec.useful_comment_rows is not None and node.start_point[0] >= spec.useful_comment_rows:
        return False
    return spec.useful_comment.search(node_text(node, code)) is not None


def comment_spans(source: ParsedSource) -> List[Tuple[int, int, int]]:
    """Return ``(start_byte, end_byte, lines)`` for every removable comment, in order."""
    spec = source.spec
    spans: List[Tuple[int, int, int]] = []
    stack = [source.root]
    while stack:
        node = stack.pop()
        if spec.is_comment(node):
            if not _is_useful(node, source.code, spec):
                lines = node.end_point[0] - node.start_point[0]
                spans.append((node.start_byte, node.end_byte, lines))
            continue
        stack.extend(reversed(node.children))
    spans.sort()
    return spans


def rm_comments(source: ParsedSource) -> Optional[bytes]:
    """Strip comments, keeping every other byte and the line count."""
    spans = comment_spans(source)
    if not spans:
        return None

    code = source.code
    stripped = bytearray()
    position = 0
    for start, end, lines in spans:
        if start < position:
            continue
        stripped += code[position:start]
        # Keep line numbering stable for multi-line comments.
        stripped += b"\n" * lines
        position = end
    stripped += code[position:]
    return bytes(stripped)


class CommentCallback(Capability[CommentCfg, CommentResponse]):
    """Removes comments from the source buffer."""

    configuration = CommentCfg

    @classmethod
    def call(cls, cfg: CommentCfg, source: ParsedSource) -> CommentResponse:
        return CommentResponse(id=cfg.id, code=rm_comments(source))


__all__ = [
    "COMMENT_DIALECTS",
    "CommentCallback",
    "CommentCfg",
    "CommentResponse",
    "comment_dialect",
    "comment_spans",
    "rm_comments",
]
