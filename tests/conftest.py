from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from codeanalysis.capabilities.base import ParsedSource
from codeanalysis.languages import Lang
from codeanalysis.parser import parse

SourceFactory = Callable[..., ParsedSource]


@pytest.fixture
def make_source() -> SourceFactory:
    """Parse a buffer into the value capabilities consume."""

    def _make(lang: Lang, code: bytes, path: str = "") -> ParsedSource:
        return ParsedSource(lang=lang, code=code, tree=parse(lang, code), path=Path(path))

    return _make
