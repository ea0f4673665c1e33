"""Tests for the comment removal capability."""

from __future__ import annotations

from codeanalysis.capabilities.comment import (
    CommentCallback,
    CommentCfg,
    comment_dialect,
    rm_comments,
)
from codeanalysis.languages import Lang

BAD_BYTES = bytes([142, 137, 138, 136, 140, 141, 10])


def test_removes_line_comment(make_source) -> None:
    source = make_source(comment_dialect(Lang.CPP), b"int x = 1; // hello")

    assert rm_comments(source) == b"int x = 1; "


def test_no_comment_yields_none(make_source) -> None:
    source = make_source(comment_dialect(Lang.CPP), b"int x = 1;")

    result = CommentCallback.call(CommentCfg(id="1234"), source)

    assert result.code is None
    assert result.to_dict() == {"id": "1234", "code": None}


def test_json_shape_is_byte_list(make_source) -> None:
    source = make_source(Lang.CCOMMENT, b"int x = 1; // hello")

    result = CommentCallback.call(CommentCfg(id="1234"), source)

    assert result.to_dict() == {"id": "1234", "code": list(b"int x = 1; ")}


def test_multi_line_comment_keeps_line_numbers(make_source) -> None:
    code = b"int a;\n/* one\n two\n three */\nint b;\n"
    source = make_source(Lang.CCOMMENT, code)

    stripped = rm_comments(source)

    assert stripped == b"int a;\n\n\n\nint b;\n"
    assert stripped.count(b"\n") == code.count(b"\n")


def test_arbitrary_bytes_survive(make_source) -> None:
    source = make_source(Lang.JAVA, b"/*char*/s: " + BAD_BYTES)

    assert rm_comments(source) == b"s: " + BAD_BYTES


def test_python_encoding_cookie_is_kept(make_source) -> None:
    code = b"# -*- coding: utf-8 -*-\n# drop me\nx = 1  # and me\n"
    source = make_source(Lang.PYTHON, code)

    assert rm_comments(source) == b"# -*- coding: utf-8 -*-\n\nx = 1  \n"


def test_rust_bindgen_annotation_is_kept(make_source) -> None:
    code = b"// cbindgen:ignore\nfn f() {} // drop\n"
    source = make_source(Lang.RUST, code)

    assert rm_comments(source) == b"// cbindgen:ignore\nfn f() {} \n"


def test_removal_is_idempotent(make_source) -> None:
    source = make_source(Lang.JAVASCRIPT, b"/** doc */\nfunction f() { return 1; } // tail\n")

    once = rm_comments(source)

    assert once is not None
    assert rm_comments(make_source(Lang.JAVASCRIPT, once)) is None


def test_cpp_raw_strings_are_not_comments(make_source) -> None:
    code = b'const char *s = R"(\n// keep me /* and me */\n)";\nint y; // drop\n'
    source = make_source(comment_dialect(Lang.CPP), code)

    assert rm_comments(source) == b'const char *s = R"(\n// keep me /* and me */\n)";\nint y; \n'
