"""Generic action dispatcher shared by every capability."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Type

from .capabilities.base import Capability, CapabilityError, ConfigT, ParsedSource, ResultT
from .languages import Lang
from .logging import get_logger
from .models import PreprocData
from .parser import parse

logger = get_logger("action")


def action(
    capability: Type[Capability[ConfigT, ResultT]],
    lang: Lang,
    code: bytes,
    path: Path,
    preproc: Optional[PreprocData],
    cfg: ConfigT,
) -> ResultT:
    """Parse ``code`` as ``lang`` and run ``capability`` over the tree.

    Language detection happens before this call and response formatting
    after it; the dispatcher only materialises the tree and threads it into
    the capability.
    """
    if not isinstance(cfg, capability.configuration):
        raise TypeError(
            f"{capability.__name__} expects {capability.configuration.__name__}, "
            f"got {type(cfg).__name__}"
        )
    logger.debug(
        "Dispatching %s for %s (%d bytes)", capability.__name__, lang.value, len(code)
    )
    try:
        tree = parse(lang, code)
    except (ValueError, LookupError) as exc:
        raise CapabilityError(f"Unable to parse {lang.value} source: {exc}") from exc
    if tree is None:
        raise CapabilityError(f"Unable to parse {lang.value} source")

    source = ParsedSource(lang=lang, code=code, tree=tree, path=path, preproc=preproc)
    return capability.call(cfg, source)


__all__ = ["action"]
