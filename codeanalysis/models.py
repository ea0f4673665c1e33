"""Core data models shared across codeanalysis components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping


@dataclass(frozen=True)
class PreprocFile:
    """Preprocessor facts collected for one file."""

    direct_includes: FrozenSet[str] = frozenset()
    indirect_includes: FrozenSet[str] = frozenset()
    macros: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class PreprocData:
    """Cross-file preprocessing context a capability may consume."""

    files: Mapping[Path, PreprocFile] = field(default_factory=dict)


INVALID_LANGUAGE = "The file extension doesn't correspond to a valid language"


@dataclass(frozen=True)
class ErrorResponse:
    """Envelope returned when a request cannot be analysed."""

    id: str
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "error": self.error}
