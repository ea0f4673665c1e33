"""Language identification from a file name and its content."""

from __future__ import annotations

import re
from os import PathLike
from pathlib import PurePath
from typing import Dict, Optional, Tuple, Union

from .languages import LANGUAGES, Lang

_EMACS_MODE_LINE = re.compile(rb"-\*-(?P<body>.*?)-\*-")
_EMACS_MODE_FIELD = re.compile(rb"(?:^|;)\s*mode\s*:\s*(?P<mode>[^;\s]+)", re.IGNORECASE)
_VIM_MODELINE = re.compile(
    rb"(?:^|\s)(?:vi|vim|ex)(?:[<=>]?\d+)?:.*?\b(?:ft|filetype|syntax)=(?P<mode>[\w+-]+)"
)
_SHEBANG = re.compile(rb"^#!\s*(?P<command>\S+)(?:\s+(?P<argument>\S+))?")

_VIM_LINES = 5

# Grammar lookups are derived once from the grammar table.
_BY_EXTENSION: Dict[str, Lang] = {
    extension: spec.lang
    for spec in LANGUAGES.values()
    for extension in spec.extensions
}
_BY_MODE: Dict[str, Lang] = {
    mode: spec.lang for spec in LANGUAGES.values() for mode in spec.modes
}
_BY_INTERPRETER: Dict[str, Lang] = {
    interpreter: spec.lang
    for spec in LANGUAGES.values()
    for interpreter in spec.interpreters
}

# Display names that differ from the grammar's own name.
_DISPLAY_BY_EXTENSION = {"c": "c", "m": "obj-c/c++", "mm": "obj-c/c++"}
_DISPLAY_BY_MODE = {"c": "c", "objective-c": "obj-c/c++", "objective-c++": "obj-c/c++"}

PathInput = Union[str, "PathLike[str]"]


def guess_language(buf: bytes, path: PathInput) -> Tuple[Optional[Lang], str]:
    """Return the grammar for ``path``/``buf`` and a display name.

    The extension is authoritative; content hints (Emacs mode line, Vim
    modeline, shebang) are only consulted when the extension is unknown or
    agree with it. ``None`` means the language is not supported; the display
    name is then whatever hint was found, or an empty string.
    """
    extension = _extension(path)
    mode = _content_mode(buf)

    from_extension = _BY_EXTENSION.get(extension)
    from_mode = _BY_MODE.get(mode) if mode else None
    if from_mode is None and not extension:
        from_mode = _from_shebang(buf)

    if from_extension is not None:
        if from_mode is not None and from_mode != from_extension:
            return from_extension, LANGUAGES[from_extension].name
        return from_extension, _display_name(from_extension, extension, mode)
    if from_mode is not None:
        return from_mode, _display_name(from_mode, extension, mode)
    return None, _DISPLAY_BY_EXTENSION.get(extension) or _DISPLAY_BY_MODE.get(mode, "")


def _extension(path: PathInput) -> str:
    suffix = PurePath(path).suffix
    return suffix[1:].lower() if suffix else ""


def _display_name(lang: Lang, extension: str, mode: str) -> str:
    return (
        _DISPLAY_BY_EXTENSION.get(extension)
        or _DISPLAY_BY_MODE.get(mode)
        or LANGUAGES[lang].name
    )


def _content_mode(buf: bytes) -> str:
    """Return the lower-cased editor mode declared in ``buf``, or ``""``."""
    lines = buf.splitlines()
    for line in lines[:2]:
        mode = _emacs_mode(line)
        if mode:
            return mode
    candidates = lines[:_VIM_LINES] + lines[-_VIM_LINES:]
    for line in candidates:
        match = _VIM_MODELINE.search(line)
        if match:
            return _decode(match.group("mode"))
    return ""


def _emacs_mode(line: bytes) -> str:
    match = _EMACS_MODE_LINE.search(line)
    if match is None:
        return ""
    body = match.group("body").strip()
    field = _EMACS_MODE_FIELD.search(body)
    if field is not None:
        return _decode(field.group("mode"))
    # "-*- C++ -*-" is shorthand for the mode alone.
    if b":" not in body and body:
        return _decode(body)
    return ""


def _from_shebang(buf: bytes) -> Optional[Lang]:
    first_line = buf.split(b"\n", 1)[0]
    match = _SHEBANG.match(first_line)
    if match is None:
        return None
    command = PurePath(_decode(match.group("command"))).name
    if command == "env" and match.group("argument"):
        command = _decode(match.group("argument"))
    lang = _BY_INTERPRETER.get(command)
    if lang is None:
        # python3.11 -> python3
        lang = _BY_INTERPRETER.get(re.sub(r"[\d.]+$", "", command) or command)
    return lang


def _decode(value: bytes) -> str:
    return value.decode("latin-1").strip().lower()


__all__ = ["guess_language"]
