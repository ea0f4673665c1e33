"""Tests for the metrics capability and the space tree."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from codeanalysis.capabilities.metrics import MetricsCallback, MetricsCfg
from codeanalysis.languages import Lang
from codeanalysis.spaces import metrics

FOO = b"def foo():\n    pass\n"

FOO_HALSTEAD = {
    "n1": 2.0,
    "N1": 2.0,
    "n2": 1.0,
    "N2": 1.0,
    "length": 3.0,
    "estimated_program_length": 2.0,
    "purity_ratio": 0.6666666666666666,
    "vocabulary": 3.0,
    "volume": 4.754887502163468,
    "difficulty": 1.0,
    "level": 1.0,
    "effort": 4.754887502163468,
    "time": 0.26416041678685936,
    "bugs": 0.0009425525573729414,
}

ZERO_ABC = {
    "assignments": 0.0,
    "branches": 0.0,
    "conditions": 0.0,
    "magnitude": 0.0,
    "assignments_average": 0.0,
    "branches_average": 0.0,
    "conditions_average": 0.0,
    "assignments_min": 0.0,
    "assignments_max": 0.0,
    "branches_min": 0.0,
    "branches_max": 0.0,
    "conditions_min": 0.0,
    "conditions_max": 0.0,
}

ZERO_NARGS = {
    "total_functions": 0.0,
    "average_functions": 0.0,
    "total_closures": 0.0,
    "average_closures": 0.0,
    "total": 0.0,
    "average": 0.0,
    "functions_min": 0.0,
    "functions_max": 0.0,
    "closures_min": 0.0,
    "closures_max": 0.0,
}


def _run(make_source, lang: Lang, code: bytes, name: str, unit: bool = False) -> dict:
    source = make_source(lang, code)
    cfg = MetricsCfg(id="1234", path=Path(name), unit=unit, language=lang.value)
    return MetricsCallback.call(cfg, source).to_dict()


def test_unit_metrics_for_single_function(make_source) -> None:
    result = _run(make_source, Lang.PYTHON, FOO, "test.py", unit=True)

    assert result["id"] == "1234"
    assert result["language"] == "python"
    space = result["spaces"]
    assert (space["name"], space["kind"]) == ("test.py", "unit")
    assert (space["start_line"], space["end_line"]) == (1, 2)
    assert space["spaces"] == []

    values = space["metrics"]
    assert values["cyclomatic"] == {"sum": 2.0, "average": 1.0, "min": 1.0, "max": 1.0}
    assert values["cognitive"] == {"sum": 0.0, "average": 0.0, "min": 0.0, "max": 0.0}
    assert values["nexits"] == {"sum": 0.0, "average": 0.0, "min": 0.0, "max": 0.0}
    assert values["nargs"] == ZERO_NARGS
    assert values["abc"] == ZERO_ABC
    assert values["halstead"] == pytest.approx(FOO_HALSTEAD)
    assert values["loc"] == {
        "sloc": 2.0,
        "ploc": 2.0,
        "lloc": 1.0,
        "cloc": 0.0,
        "blank": 0.0,
        "sloc_average": 1.0,
        "sloc_min": 2.0,
        "sloc_max": 2.0,
        "ploc_average": 1.0,
        "ploc_min": 2.0,
        "ploc_max": 2.0,
        "lloc_average": 0.5,
        "lloc_min": 1.0,
        "lloc_max": 1.0,
        "cloc_average": 0.0,
        "cloc_min": 0.0,
        "cloc_max": 0.0,
        "blank_average": 0.0,
        "blank_min": 0.0,
        "blank_max": 0.0,
    }
    assert values["nom"] == {
        "functions": 1.0,
        "closures": 0.0,
        "functions_average": 0.5,
        "closures_average": 0.0,
        "total": 1.0,
        "average": 0.5,
        "functions_min": 0.0,
        "functions_max": 1.0,
        "closures_min": 0.0,
        "closures_max": 0.0,
    }
    assert values["mi"] == pytest.approx(
        {
            "mi_original": 151.2033158832232,
            "mi_sei": 142.64306171748976,
            "mi_visual_studio": 88.42299174457497,
        }
    )


def test_function_space_metrics(make_source) -> None:
    result = _run(make_source, Lang.PYTHON, FOO, "test.py")

    (foo,) = result["spaces"]["spaces"]
    assert (foo["name"], foo["kind"]) == ("foo", "function")
    assert (foo["start_line"], foo["end_line"]) == (1, 2)
    assert foo["spaces"] == []
    values = foo["metrics"]
    assert values["cyclomatic"] == {"sum": 1.0, "average": 1.0, "min": 1.0, "max": 1.0}
    assert values["halstead"] == pytest.approx(FOO_HALSTEAD)
    assert values["nom"]["functions"] == 1.0
    assert values["nom"]["functions_average"] == 1.0
    assert values["mi"] == pytest.approx(
        {
            "mi_original": 151.43331588322323,
            "mi_sei": 142.87306171748978,
            "mi_visual_studio": 88.5574946685516,
        }
    )


def test_unit_lines_and_comment_lines(make_source) -> None:
    code = (
        b"# -*- Mode: Objective-C++; tab-width: 2; indent-tabs-mode: nil; c-basic-offset: 2 -*-\n"
        b"\ndef foo():\n    pass\n"
    )
    space = _run(make_source, Lang.PYTHON, code, "test.py")["spaces"]

    assert (space["start_line"], space["end_line"]) == (1, 4)
    loc = space["metrics"]["loc"]
    assert (loc["sloc"], loc["ploc"], loc["cloc"], loc["blank"]) == (4.0, 2.0, 1.0, 1.0)
    assert space["metrics"]["mi"]["mi_original"] == pytest.approx(139.9743315581521)
    assert space["metrics"]["mi"]["mi_sei"] == pytest.approx(161.41445524066222)
    (foo,) = space["spaces"]
    assert (foo["start_line"], foo["end_line"]) == (3, 4)


def test_cognitive_nexits_and_nargs(make_source) -> None:
    code = (
        b"def f(a, b):\n"
        b"    if a:\n"
        b"        for x in b:\n"
        b"            if x and a or b:\n"
        b"                return x\n"
        b"    else:\n"
        b"        return None\n"
    )
    space = _run(make_source, Lang.PYTHON, code, "f.py")["spaces"]
    (f,) = space["spaces"]

    # if (1) + for (2) + nested if (3) + and/or sequence (2) + else (1)
    assert f["metrics"]["cognitive"]["sum"] == 9.0
    assert f["metrics"]["cyclomatic"]["sum"] == 6.0
    assert f["metrics"]["nexits"]["sum"] == 2.0
    assert f["metrics"]["nargs"]["total_functions"] == 2.0
    assert space["metrics"]["cyclomatic"]["sum"] == 7.0
    assert space["metrics"]["cyclomatic"]["average"] == 3.5
    assert space["metrics"]["cognitive"]["average"] == 9.0


def test_closures_do_not_open_spaces(make_source) -> None:
    code = b"const add = (a, b) => a + b;\nconst inc = x => x + 1;\n"
    space = _run(make_source, Lang.JAVASCRIPT, code, "add.js")["spaces"]

    assert space["spaces"] == []
    nom = space["metrics"]["nom"]
    assert (nom["functions"], nom["closures"], nom["total"]) == (0.0, 2.0, 2.0)
    nargs = space["metrics"]["nargs"]
    assert nargs["total_closures"] == 3.0
    assert nargs["average_closures"] == 1.5


def test_class_spaces_nest_methods(make_source) -> None:
    code = b"class A {\n    int f(int x) {\n        return x;\n    }\n}\n"
    space = _run(make_source, Lang.JAVA, code, "A.java")["spaces"]

    (cls,) = space["spaces"]
    assert (cls["name"], cls["kind"], cls["start_line"], cls["end_line"]) == ("A", "class", 1, 5)
    (method,) = cls["spaces"]
    assert (method["name"], method["kind"]) == ("f", "function")
    assert (method["start_line"], method["end_line"]) == (2, 4)
    assert method["metrics"]["nargs"]["total_functions"] == 1.0
    assert method["metrics"]["nexits"]["sum"] == 1.0
    assert space["metrics"]["nexits"]["sum"] == 1.0


def test_forward_declarations_do_not_open_spaces(make_source) -> None:
    code = b"struct s;\nstruct t { int a; };\nint g(void) { return 0; }\n"
    space = _run(make_source, Lang.CPP, code, "g.c")["spaces"]

    assert [(child["name"], child["kind"]) for child in space["spaces"]] == [
        ("t", "struct"),
        ("g", "function"),
    ]


def test_unit_flag_keeps_aggregates(make_source) -> None:
    full = _run(make_source, Lang.PYTHON, FOO, "test.py")["spaces"]
    unit = _run(make_source, Lang.PYTHON, FOO, "test.py", unit=True)["spaces"]

    assert unit["spaces"] == []
    assert unit["metrics"] == full["metrics"]


def test_empty_source(make_source) -> None:
    space = metrics(make_source(Lang.RUST, b""), Path("empty.rs"))

    assert (space.name, space.start_line, space.end_line) == ("empty.rs", 0, 0)
    assert space.spaces == []
    values = space.to_dict()["metrics"]
    assert values["loc"]["sloc"] == 0.0
    assert values["nom"]["total"] == 0.0
    json.dumps(values, allow_nan=False)


def test_unit_aggregates_span_every_function(make_source) -> None:
    code = (
        b"def a(x):\n"
        b"    if x:\n"
        b"        return 1\n"
        b"    return 2\n"
        b"\n"
        b"def b(y):\n"
        b"    for i in y:\n"
        b"        if i:\n"
        b"            return i\n"
        b"\n"
        b"def c():\n"
        b"    pass\n"
    )
    space = _run(make_source, Lang.PYTHON, code, "abc.py")["spaces"]
    children = space["spaces"]
    unit = space["metrics"]

    assert [child["name"] for child in children] == ["a", "b", "c"]
    own = [child["metrics"]["cyclomatic"]["sum"] for child in children]
    assert own == [2.0, 3.0, 1.0]

    # The unit contributes its own base complexity of one.
    cyclomatic = unit["cyclomatic"]
    assert cyclomatic["sum"] == 1.0 + sum(own)
    assert cyclomatic["min"] == min([1.0] + own)
    assert cyclomatic["max"] == max(own)
    assert cyclomatic["average"] == pytest.approx((1.0 + sum(own)) / 4)

    exits = [child["metrics"]["nexits"]["sum"] for child in children]
    assert exits == [2.0, 1.0, 0.0]
    assert unit["nexits"]["sum"] == sum(exits)
    assert (unit["nexits"]["min"], unit["nexits"]["max"]) == (0.0, 2.0)
    assert unit["nexits"]["average"] == pytest.approx(sum(exits) / 3)

    cognitive = [child["metrics"]["cognitive"]["sum"] for child in children]
    assert unit["cognitive"]["sum"] == sum(cognitive)
    assert unit["cognitive"]["max"] == max(cognitive)
    assert unit["nom"]["functions"] == 3.0
