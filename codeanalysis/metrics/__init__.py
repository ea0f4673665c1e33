"""Per-space code metrics."""

from __future__ import annotations

from typing import Any, Dict

from tree_sitter import Node

from ..languages import LanguageSpec
from .abc import Abc
from .cognitive import Cognitive, Nesting
from .cyclomatic import Cyclomatic
from .halstead import Halstead, HalsteadMaps
from .loc import Loc
from .mi import Mi
from .nargs import Nargs
from .nexits import Nexits
from .nom import Nom


class CodeMetrics:
    """Every metric of one space.

    Nodes are fed to :meth:`compute` while the space is open. Once its nested
    spaces have been merged in, :meth:`close` derives the totals and the
    composite metrics (Halstead, maintainability index).
    """

    def __init__(self, start_line: int, end_line: int) -> None:
        self.cyclomatic = Cyclomatic()
        self.cognitive = Cognitive()
        self.halstead_maps = HalsteadMaps()
        self.halstead = Halstead()
        self.loc = Loc(start_line, end_line)
        self.nom = Nom()
        self.nargs = Nargs()
        self.nexits = Nexits()
        self.abc = Abc()
        self.mi = Mi()

    def compute(self, node: Node, code: bytes, spec: LanguageSpec, nesting: Nesting) -> Nesting:
        self.cyclomatic.compute(node, spec)
        self.halstead_maps.compute(node, code, spec)
        self.loc.compute(node, spec)
        self.nom.compute(node, spec)
        self.nargs.compute(node, spec)
        self.nexits.compute(node, spec)
        self.abc.compute(node, spec)
        return self.cognitive.compute(node, spec, nesting)

    def merge(self, other: "CodeMetrics") -> None:
        self.cyclomatic.merge(other.cyclomatic)
        self.cognitive.merge(other.cognitive)
        self.halstead_maps.merge(other.halstead_maps)
        self.loc.merge(other.loc)
        self.nom.merge(other.nom)
        self.nargs.merge(other.nargs)
        self.nexits.merge(other.nexits)
        self.abc.merge(other.abc)

    def close(self) -> None:
        self.cyclomatic.close()
        self.cognitive.close()
        self.loc.close()
        self.nom.close()
        self.nargs.close()
        self.nexits.close()
        self.abc.close()
        self.halstead = self.halstead_maps.finalize()
        self.mi = Mi.compute(
            sloc=self.loc.sloc,
            cloc=self.loc.cloc,
            cyclomatic=self.cyclomatic.sum,
            volume=self.halstead.volume,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nargs": self.nargs.to_dict(self.nom),
            "nexits": self.nexits.to_dict(self.nom.total),
            "cognitive": self.cognitive.to_dict(self.nom.total),
            "cyclomatic": self.cyclomatic.to_dict(),
            "halstead": self.halstead.to_dict(),
            "loc": self.loc.to_dict(),
            "nom": self.nom.to_dict(),
            "mi": self.mi.to_dict(),
            "abc": self.abc.to_dict(),
        }


__all__ = ["CodeMetrics", "Nesting"]
