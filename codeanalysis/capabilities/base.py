"""Base classes for analysis capabilities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Generic, Optional, Type, TypeVar

from tree_sitter import Node, Tree

from ..languages import LanguageSpec, Lang, get_spec
from ..models import PreprocData

ConfigT = TypeVar("ConfigT")
ResultT = TypeVar("ResultT")


class CapabilityError(RuntimeError):
    """Raised when a capability cannot produce a result for a recognised language."""


@dataclass(frozen=True)
class ParsedSource:
    """Everything a capability may read: grammar, bytes, tree and context."""

    lang: Lang
    code: bytes
    tree: Tree
    path: Path
    preproc: Optional[PreprocData] = None

    @property
    def spec(self) -> LanguageSpec:
        return get_spec(self.lang)

    @property
    def root(self) -> Node:
        return self.tree.root_node


class Capability(ABC, Generic[ConfigT, ResultT]):
    """Contract every analysis plugged into :func:`codeanalysis.action.action` satisfies.

    A capability owns one configuration type and one result type. It must be
    deterministic, must not touch the filesystem or network, and must accept
    ``preproc=None`` as a fully supported input.
    """

    configuration: ClassVar[Type[object]]

    @classmethod
    @abstractmethod
    def call(cls, cfg: ConfigT, source: ParsedSource) -> ResultT:
        """Run the analysis against an already parsed source."""
