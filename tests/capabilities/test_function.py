"""Tests for the function span capability."""

from __future__ import annotations

from codeanalysis.capabilities.function import (
    FunctionCallback,
    FunctionCfg,
    FunctionSpan,
    function,
)
from codeanalysis.languages import Lang


def test_python_functions_in_source_order(make_source) -> None:
    source = make_source(Lang.PYTHON, b"def foo():\n    pass\n\ndef bar():\n    pass")

    result = FunctionCallback.call(FunctionCfg(id="1234"), source)

    assert result.to_dict() == {
        "id": "1234",
        "spans": [
            {"name": "foo", "start_line": 1, "end_line": 2, "error": False},
            {"name": "bar", "start_line": 4, "end_line": 5, "error": False},
        ],
    }


def test_nested_functions_are_listed_pre_order(make_source) -> None:
    code = b"def outer():\n    def inner():\n        pass\n    return inner\n\ndef last():\n    pass\n"
    spans = function(make_source(Lang.PYTHON, code))

    assert [span.name for span in spans] == ["outer", "inner", "last"]


def test_closures_are_not_functions(make_source) -> None:
    spans = function(make_source(Lang.PYTHON, b"f = lambda x: x\n"))

    assert spans == []


def test_javascript_names(make_source) -> None:
    code = b"const f = function () {};\nsetTimeout(function () {}, 1);\nclass A { run() {} }\n"
    spans = function(make_source(Lang.JAVASCRIPT, code))

    assert [span.name for span in spans] == ["f", "<anonymous>", "run"]
    assert [span.start_line for span in spans] == [1, 2, 3]


def test_cpp_declarator_names(make_source) -> None:
    code = b"int *make(void) {\n  return 0;\n}\nvoid Widget::draw() {}\n"
    spans = function(make_source(Lang.CPP, code))

    assert spans == [
        FunctionSpan(name="make", start_line=1, end_line=3, error=False),
        FunctionSpan(name="Widget::draw", start_line=4, end_line=4, error=False),
    ]


def test_rust_and_java(make_source) -> None:
    rust = function(make_source(Lang.RUST, b"fn main() {}\n"))
    java = function(make_source(Lang.JAVA, b"class A {\n  A() {}\n  void run() {}\n}\n"))

    assert [span.name for span in rust] == ["main"]
    assert [span.name for span in java] == ["A", "run"]


def test_parse_errors_are_flagged(make_source) -> None:
    code = b"int f() {\n  return 1 +;\n}\n"
    spans = function(make_source(Lang.CPP, code))

    assert [span.name for span in spans] == ["f"]
    assert spans[0].error is True
