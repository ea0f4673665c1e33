"""Tree-sitter parsing engine adapter."""

from __future__ import annotations

from functools import lru_cache
from typing import Iterator, Optional

from tree_sitter import Language, Node, Parser, Tree
from tree_sitter_language_pack import get_language

from .languages import LanguageSpec, Lang, get_spec


class GrammarError(LookupError):
    """Raised when a grammar cannot be loaded from the language pack."""


@lru_cache(maxsize=None)
def _grammar(name: str) -> Language:
    # Language objects are immutable and shareable between threads.
    try:
        return get_language(name)  # type: ignore[arg-type]
    except Exception as exc:
        raise GrammarError(f"grammar {name!r} is unavailable: {exc}") from exc


def parse(lang: Lang, code: bytes) -> Tree:
    """Parse ``code`` with the grammar registered for ``lang``.

    A fresh :class:`Parser` is created per call because parsers are not
    thread-safe; the returned tree may contain ``ERROR``/``MISSING`` nodes.
    """
    parser = Parser(_grammar(get_spec(lang).grammar))
    return parser.parse(code)


def node_text(node: Node, code: bytes) -> bytes:
    return code[node.start_byte : node.end_byte]


def node_str(node: Node, code: bytes) -> Optional[str]:
    """Return the node text as UTF-8, or None when the bytes are not valid text."""
    try:
        return node_text(node, code).decode("utf-8")
    except UnicodeDecodeError:
        return None


def walk(root: Node) -> Iterator[Node]:
    """Yield ``root`` and its descendants in pre-order (source order)."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def function_name(node: Node, code: bytes, spec: LanguageSpec) -> Optional[str]:
    """Resolve the declared name of a function- or class-like ``node``."""
    for field_name in ("name", "declarator", "type"):
        target = node.child_by_field_name(field_name)
        if target is None:
            continue
        # C-family declarators nest: pointer_declarator -> function_declarator -> identifier.
        while target.child_by_field_name("declarator") is not None:
            target = target.child_by_field_name("declarator")
        name = node_str(target, code)
        if name:
            return name

    for child in node.named_children:
        if child.type in spec.identifier_types:
            return node_str(child, code)

    return _binding_name(node, code)


def _binding_name(node: Node, code: bytes) -> Optional[str]:
    # const handler = function () {}; {key: () => {}}; obj.prop = function () {}
    parent = node.parent
    if parent is None:
        return None
    for field_name in ("name", "key", "left", "property"):
        target = parent.child_by_field_name(field_name)
        if target is not None and target.id != node.id:
            return node_str(target, code)
    return None


def parameter_count(node: Node, spec: LanguageSpec) -> int:
    """Number of declared parameters of a function or closure ``node``."""
    single = node.child_by_field_name("parameter")
    if single is not None:
        return 1

    params = _parameter_list(node, spec)
    if params is None:
        return 0
    if params.type in spec.identifier_types:
        # Java/Kotlin lambdas may declare a bare identifier.
        return 1
    ignored = spec.parameter_ignored | spec.comment_types
    return sum(1 for child in params.named_children if child.type not in ignored)


def _parameter_list(node: Node, spec: LanguageSpec) -> Optional[Node]:
    target: Optional[Node] = node
    while target is not None:
        params = target.child_by_field_name("parameters")
        if params is not None:
            return params
        target = target.child_by_field_name("declarator")

    for child in node.named_children:
        if child.type in spec.parameter_list_types:
            return child
    return None


__all__ = [
    "GrammarError",
    "function_name",
    "node_str",
    "node_text",
    "parameter_count",
    "parse",
    "walk",
]
