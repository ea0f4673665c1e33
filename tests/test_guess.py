"""Tests for codeanalysis.guess."""

from __future__ import annotations

from pathlib import Path

import pytest

from codeanalysis.guess import guess_language
from codeanalysis.languages import LANGUAGES, Lang


@pytest.mark.parametrize(
    ("file_name", "expected"),
    [
        ("foo.c", (Lang.CPP, "c")),
        ("foo.cpp", (Lang.CPP, "c/c++")),
        ("foo.mm", (Lang.CPP, "obj-c/c++")),
        ("Foo.JAVA", (Lang.JAVA, "java")),
        ("app.mjs", (Lang.JAVASCRIPT, "javascript")),
        ("app.ts", (Lang.TYPESCRIPT, "typescript")),
        ("view.tsx", (Lang.TSX, "tsx")),
        ("test.py", (Lang.PYTHON, "python")),
        ("lib.rs", (Lang.RUST, "rust")),
        ("Main.kt", (Lang.KOTLIN, "kotlin")),
    ],
)
def test_guess_language_by_extension(file_name: str, expected: tuple) -> None:
    assert guess_language(b"", Path(file_name)) == expected


def test_guess_language_unknown_extension() -> None:
    assert guess_language(b"int x = 1; // hello", "foo.unexisting_extension") == (None, "")


def test_guess_language_never_yields_comment_dialect() -> None:
    assert LANGUAGES[Lang.CCOMMENT].extensions == frozenset()
    assert guess_language(b"int x;", "foo.h")[0] is Lang.CPP


def test_extension_wins_over_emacs_mode() -> None:
    code = (
        b"# -*- Mode: Objective-C++; tab-width: 2; indent-tabs-mode: nil; c-basic-offset: 2 -*-\n"
        b"\ndef foo():\n    pass\n"
    )

    assert guess_language(code, "test.py") == (Lang.PYTHON, "python")


def test_emacs_mode_without_extension() -> None:
    assert guess_language(b"// -*- mode: c++ -*-\nint x;\n", "Makefile.inc2") == (
        Lang.CPP,
        "c/c++",
    )


def test_emacs_shorthand_mode() -> None:
    lang, _ = guess_language(b"/* -*- C++ -*- */\nint x;\n", "header")
    assert lang is Lang.CPP


def test_vim_modeline_without_extension() -> None:
    code = b"x = 1\n# vim: set ft=python:\n"

    assert guess_language(code, "script") == (Lang.PYTHON, "python")


@pytest.mark.parametrize(
    ("shebang", "expected"),
    [
        (b"#!/usr/bin/env python3\n", Lang.PYTHON),
        (b"#!/usr/bin/python3.11\n", Lang.PYTHON),
        (b"#!/usr/bin/env node\n", Lang.JAVASCRIPT),
    ],
)
def test_shebang_without_extension(shebang: bytes, expected: Lang) -> None:
    lang, _ = guess_language(shebang + b"print(1)\n", "tool")
    assert lang is expected


def test_shebang_ignored_when_extension_present() -> None:
    assert guess_language(b"#!/usr/bin/env python3\n", "tool.txt")[0] is None


def test_unknown_content_without_extension() -> None:
    assert guess_language(b"hello world\n", "README") == (None, "")
