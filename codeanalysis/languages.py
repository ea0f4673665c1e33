"""Grammar table: the closed set of supported languages and their tree-sitter node tables.

Every :class:`Lang` has exactly one :class:`LanguageSpec`. Each entry carries the
tree-sitter grammar key used by the parsing engine, the detection hints used by
:mod:`codeanalysis.guess`, and the node-kind tables each capability reads. The
table is built once at import time and never mutated afterwards, so it is safe
to share between worker threads.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Optional, Pattern


class Lang(str, Enum):
    """Grammar tags known to the parsing engine."""

    CPP = "cpp"
    CCOMMENT = "ccomment"
    JAVA = "java"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"
    PYTHON = "python"
    RUST = "rust"
    KOTLIN = "kotlin"


class SpaceKind(str, Enum):
    """Kind of a metrics space."""

    UNKNOWN = "unknown"
    FUNCTION = "function"
    CLASS = "class"
    STRUCT = "struct"
    TRAIT = "trait"
    IMPL = "impl"
    UNIT = "unit"
    NAMESPACE = "namespace"
    INTERFACE = "interface"


_COMPARISONS = frozenset({"==", "!=", "<", ">", "<=", ">="})

# Punctuation that never counts as a Halstead operator.
HALSTEAD_IGNORED = frozenset(
    {"(", ")", "[", "]", "{", "}", ":", ";", '"', "'", "`", "${", "$", '"""', "'''"}
)


@dataclass(frozen=True)
class LanguageSpec:
    """Complete tree-sitter configuration for a single grammar tag."""

    # -- Identity --
    lang: Lang
    grammar: str  # tree-sitter-language-pack key
    name: str  # human readable name used in reports

    # -- Detection --
    extensions: FrozenSet[str] = frozenset()
    modes: FrozenSet[str] = frozenset()  # Emacs / Vim mode names
    interpreters: FrozenSet[str] = frozenset()  # shebang interpreters

    # -- Comments --
    comment_types: FrozenSet[str] = frozenset({"comment"})
    useful_comment: Optional[Pattern[bytes]] = None
    useful_comment_rows: Optional[int] = None

    # -- Spaces and functions --
    function_types: FrozenSet[str] = frozenset()
    closure_types: FrozenSet[str] = frozenset()
    space_kinds: Mapping[str, SpaceKind] = field(default_factory=dict)
    identifier_types: FrozenSet[str] = frozenset({"identifier"})
    parameter_list_types: FrozenSet[str] = frozenset()
    parameter_ignored: FrozenSet[str] = frozenset()

    # -- Complexity --
    cyclomatic_tokens: FrozenSet[str] = frozenset()
    cyclomatic_nodes: FrozenSet[str] = frozenset()
    nesting_types: FrozenSet[str] = frozenset()
    flat_types: FrozenSet[str] = frozenset()
    boolean_types: FrozenSet[str] = frozenset()
    boolean_operators: FrozenSet[str] = frozenset()
    exit_tokens: FrozenSet[str] = frozenset({"return"})

    # -- Size --
    statement_types: FrozenSet[str] = frozenset()

    # -- Halstead --
    operand_types: FrozenSet[str] = frozenset()
    operator_types: FrozenSet[str] = frozenset()

    # -- ABC --
    assignment_types: FrozenSet[str] = frozenset()
    branch_types: FrozenSet[str] = frozenset()
    condition_tokens: FrozenSet[str] = frozenset()

    def is_comment(self, node) -> bool:  # type: ignore[no-untyped-def]
        return node.type in self.comment_types

    def is_function(self, node) -> bool:  # type: ignore[no-untyped-def]
        return node.is_named and node.type in self.function_types

    def is_closure(self, node) -> bool:  # type: ignore[no-untyped-def]
        return node.is_named and node.type in self.closure_types


_C_FAMILY_BOOLEANS = frozenset({"&&", "||"})

_CPP = LanguageSpec(
    lang=Lang.CPP,
    grammar="cpp",
    name="c/c++",
    extensions=frozenset(
        {"c", "h", "cc", "cpp", "cxx", "c++", "hh", "hpp", "hxx", "inc", "m", "mm"}
    ),
    modes=frozenset({"c", "c++", "cpp", "objective-c", "objective-c++", "mozilla/c++"}),
    useful_comment=re.compile(rb"<div\s+rustbindgen"),
    function_types=frozenset({"function_definition"}),
    closure_types=frozenset({"lambda_expression"}),
    space_kinds={
        "function_definition": SpaceKind.FUNCTION,
        "class_specifier": SpaceKind.CLASS,
        "struct_specifier": SpaceKind.STRUCT,
        "union_specifier": SpaceKind.STRUCT,
        "namespace_definition": SpaceKind.NAMESPACE,
    },
    identifier_types=frozenset(
        {
            "identifier",
            "field_identifier",
            "type_identifier",
            "qualified_identifier",
            "destructor_name",
            "operator_name",
            "namespace_identifier",
        }
    ),
    parameter_ignored=frozenset({"comment", "variadic_parameter"}),
    cyclomatic_tokens=frozenset({"if", "for", "while", "case", "catch", "?", "and", "or"})
    | _C_FAMILY_BOOLEANS,
    nesting_types=frozenset(
        {
            "if_statement",
            "for_statement",
            "for_range_loop",
            "while_statement",
            "do_statement",
            "switch_statement",
            "catch_clause",
            "conditional_expression",
        }
    ),
    flat_types=frozenset({"else_clause", "goto_statement"}),
    boolean_types=frozenset({"binary_expression"}),
    boolean_operators=_C_FAMILY_BOOLEANS | {"and", "or"},
    statement_types=frozenset(
        {
            "expression_statement",
            "declaration",
            "field_declaration",
            "return_statement",
            "if_statement",
            "for_statement",
            "for_range_loop",
            "while_statement",
            "do_statement",
            "switch_statement",
            "break_statement",
            "continue_statement",
            "goto_statement",
            "throw_statement",
            "try_statement",
            "co_return_statement",
        }
    ),
    operand_types=frozenset(
        {
            "identifier",
            "field_identifier",
            "namespace_identifier",
            "type_identifier",
            "number_literal",
            "string_literal",
            "raw_string_literal",
            "char_literal",
            "user_defined_literal",
            "true",
            "false",
            "null",
            "nullptr",
            "this",
        }
    ),
    operator_types=frozenset({"primitive_type"}),
    assignment_types=frozenset(
        {"assignment_expression", "update_expression", "init_declarator"}
    ),
    branch_types=frozenset({"call_expression", "new_expression", "delete_expression"}),
    condition_tokens=_COMPARISONS | {"else", "case", "?"},
)

# Only ever produced by the comment-removal dialect remap. Parsed with the
# C++ grammar so raw string literals are lexed as strings.
_CCOMMENT = LanguageSpec(
    lang=Lang.CCOMMENT,
    grammar="cpp",
    name="ccomment",
    useful_comment=re.compile(rb"<div\s+rustbindgen"),
)

_JAVA = LanguageSpec(
    lang=Lang.JAVA,
    grammar="java",
    name="java",
    extensions=frozenset({"java"}),
    modes=frozenset({"java"}),
    comment_types=frozenset({"line_comment", "block_comment", "comment"}),
    function_types=frozenset(
        {"method_declaration", "constructor_declaration", "compact_constructor_declaration"}
    ),
    closure_types=frozenset({"lambda_expression"}),
    space_kinds={
        "method_declaration": SpaceKind.FUNCTION,
        "constructor_declaration": SpaceKind.FUNCTION,
        "compact_constructor_declaration": SpaceKind.FUNCTION,
        "class_declaration": SpaceKind.CLASS,
        "enum_declaration": SpaceKind.CLASS,
        "record_declaration": SpaceKind.CLASS,
        "interface_declaration": SpaceKind.INTERFACE,
        "annotation_type_declaration": SpaceKind.INTERFACE,
    },
    identifier_types=frozenset({"identifier", "type_identifier"}),
    parameter_ignored=frozenset({"line_comment", "block_comment", "receiver_parameter"}),
    cyclomatic_tokens=frozenset({"if", "for", "while", "case", "catch", "?"})
    | _C_FAMILY_BOOLEANS,
    nesting_types=frozenset(
        {
            "if_statement",
            "for_statement",
            "enhanced_for_statement",
            "while_statement",
            "do_statement",
            "switch_expression",
            "switch_statement",
            "catch_clause",
            "ternary_expression",
        }
    ),
    flat_types=frozenset({"else"}),
    boolean_types=frozenset({"binary_expression"}),
    boolean_operators=_C_FAMILY_BOOLEANS,
    statement_types=frozenset(
        {
            "expression_statement",
            "local_variable_declaration",
            "field_declaration",
            "return_statement",
            "if_statement",
            "for_statement",
            "enhanced_for_statement",
            "while_statement",
            "do_statement",
            "switch_expression",
            "break_statement",
            "continue_statement",
            "throw_statement",
            "try_statement",
            "try_with_resources_statement",
            "assert_statement",
            "yield_statement",
            "synchronized_statement",
        }
    ),
    operand_types=frozenset(
        {
            "identifier",
            "type_identifier",
            "decimal_integer_literal",
            "hex_integer_literal",
            "octal_integer_literal",
            "binary_integer_literal",
            "decimal_floating_point_literal",
            "hex_floating_point_literal",
            "string_literal",
            "character_literal",
            "true",
            "false",
            "null_literal",
            "this",
            "super",
        }
    ),
    operator_types=frozenset({"void_type", "boolean_type"}),
    assignment_types=frozenset(
        {"assignment_expression", "update_expression", "variable_declarator"}
    ),
    branch_types=frozenset(
        {"method_invocation", "object_creation_expression", "explicit_constructor_invocation"}
    ),
    condition_tokens=_COMPARISONS | {"else", "case", "default", "?", "try", "catch"},
)

_JS_FUNCTIONS = frozenset(
    {
        "function_declaration",
        "function_expression",
        "generator_function_declaration",
        "generator_function",
        "method_definition",
    }
)

_JS_STATEMENTS = frozenset(
    {
        "expression_statement",
        "variable_declaration",
        "lexical_declaration",
        "return_statement",
        "if_statement",
        "for_statement",
        "for_in_statement",
        "while_statement",
        "do_statement",
        "switch_statement",
        "break_statement",
        "continue_statement",
        "throw_statement",
        "try_statement",
        "import_statement",
        "export_statement",
        "debugger_statement",
    }
)

_JS_OPERANDS = frozenset(
    {
        "identifier",
        "property_identifier",
        "private_property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "number",
        "string",
        "template_string",
        "regex",
        "true",
        "false",
        "null",
        "undefined",
        "this",
        "super",
    }
)

_JAVASCRIPT = LanguageSpec(
    lang=Lang.JAVASCRIPT,
    grammar="javascript",
    name="javascript",
    extensions=frozenset({"js", "jsm", "mjs", "cjs", "jsx"}),
    modes=frozenset({"js", "js2", "javascript"}),
    interpreters=frozenset({"node", "nodejs"}),
    function_types=_JS_FUNCTIONS,
    closure_types=frozenset({"arrow_function"}),
    space_kinds={
        **{kind: SpaceKind.FUNCTION for kind in _JS_FUNCTIONS},
        "class_declaration": SpaceKind.CLASS,
        "class": SpaceKind.CLASS,
    },
    identifier_types=frozenset(
        {"identifier", "property_identifier", "private_property_identifier"}
    ),
    parameter_ignored=frozenset({"comment"}),
    cyclomatic_tokens=frozenset({"if", "for", "while", "case", "catch", "?", "??"})
    | _C_FAMILY_BOOLEANS,
    nesting_types=frozenset(
        {
            "if_statement",
            "for_statement",
            "for_in_statement",
            "while_statement",
            "do_statement",
            "switch_statement",
            "catch_clause",
            "ternary_expression",
        }
    ),
    flat_types=frozenset({"else_clause"}),
    boolean_types=frozenset({"binary_expression"}),
    boolean_operators=_C_FAMILY_BOOLEANS | {"??"},
    statement_types=_JS_STATEMENTS,
    operand_types=_JS_OPERANDS,
    assignment_types=frozenset(
        {
            "assignment_expression",
            "augmented_assignment_expression",
            "update_expression",
            "variable_declarator",
        }
    ),
    branch_types=frozenset({"call_expression", "new_expression"}),
    condition_tokens=_COMPARISONS | {"===", "!==", "else", "case", "default", "?"},
)

_TS_EXTRA_SPACES: Dict[str, SpaceKind] = {
    "abstract_class_declaration": SpaceKind.CLASS,
    "interface_declaration": SpaceKind.INTERFACE,
    "internal_module": SpaceKind.NAMESPACE,
    "module": SpaceKind.NAMESPACE,
}

_TYPESCRIPT = LanguageSpec(
    lang=Lang.TYPESCRIPT,
    grammar="typescript",
    name="typescript",
    extensions=frozenset({"ts", "mts", "cts"}),
    modes=frozenset({"typescript"}),
    interpreters=frozenset({"ts-node", "deno"}),
    function_types=_JS_FUNCTIONS,
    closure_types=frozenset({"arrow_function"}),
    space_kinds={**_JAVASCRIPT.space_kinds, **_TS_EXTRA_SPACES},
    identifier_types=_JAVASCRIPT.identifier_types | {"type_identifier"},
    parameter_ignored=_JAVASCRIPT.parameter_ignored,
    cyclomatic_tokens=_JAVASCRIPT.cyclomatic_tokens,
    nesting_types=_JAVASCRIPT.nesting_types,
    flat_types=_JAVASCRIPT.flat_types,
    boolean_types=_JAVASCRIPT.boolean_types,
    boolean_operators=_JAVASCRIPT.boolean_operators,
    statement_types=_JS_STATEMENTS,
    operand_types=_JS_OPERANDS | {"type_identifier"},
    operator_types=frozenset({"predefined_type"}),
    assignment_types=_JAVASCRIPT.assignment_types,
    branch_types=_JAVASCRIPT.branch_types,
    condition_tokens=_JAVASCRIPT.condition_tokens,
)

_TSX = LanguageSpec(
    lang=Lang.TSX,
    grammar="tsx",
    name="tsx",
    extensions=frozenset({"tsx"}),
    modes=frozenset({"tsx"}),
    function_types=_TYPESCRIPT.function_types,
    closure_types=_TYPESCRIPT.closure_types,
    space_kinds=_TYPESCRIPT.space_kinds,
    identifier_types=_TYPESCRIPT.identifier_types,
    parameter_ignored=_TYPESCRIPT.parameter_ignored,
    cyclomatic_tokens=_TYPESCRIPT.cyclomatic_tokens,
    nesting_types=_TYPESCRIPT.nesting_types,
    flat_types=_TYPESCRIPT.flat_types,
    boolean_types=_TYPESCRIPT.boolean_types,
    boolean_operators=_TYPESCRIPT.boolean_operators,
    statement_types=_TYPESCRIPT.statement_types,
    operand_types=_TYPESCRIPT.operand_types,
    operator_types=_TYPESCRIPT.operator_types,
    assignment_types=_TYPESCRIPT.assignment_types,
    branch_types=_TYPESCRIPT.branch_types,
    condition_tokens=_TYPESCRIPT.condition_tokens,
)

_PYTHON = LanguageSpec(
    lang=Lang.PYTHON,
    grammar="python",
    name="python",
    extensions=frozenset({"py", "pyw", "pyi"}),
    modes=frozenset({"python"}),
    interpreters=frozenset({"python", "python2", "python3", "pypy", "pypy3"}),
    # PEP 263 encoding declarations must survive comment removal.
    useful_comment=re.compile(rb"^#.*?coding[:=][ \t]*[-_.a-zA-Z0-9]+"),
    useful_comment_rows=2,
    function_types=frozenset({"function_definition"}),
    closure_types=frozenset({"lambda"}),
    space_kinds={
        "function_definition": SpaceKind.FUNCTION,
        "class_definition": SpaceKind.CLASS,
    },
    parameter_ignored=frozenset({"comment", "positional_separator", "keyword_separator"}),
    cyclomatic_tokens=frozenset(
        {"if", "elif", "for", "while", "except", "with", "assert", "and", "or"}
    ),
    nesting_types=frozenset(
        {
            "if_statement",
            "for_statement",
            "while_statement",
            "except_clause",
            "conditional_expression",
            "match_statement",
        }
    ),
    flat_types=frozenset({"elif_clause", "else_clause"}),
    boolean_types=frozenset({"boolean_operator"}),
    boolean_operators=frozenset({"and", "or"}),
    statement_types=frozenset(
        {
            "expression_statement",
            "return_statement",
            "pass_statement",
            "import_statement",
            "import_from_statement",
            "future_import_statement",
            "assert_statement",
            "delete_statement",
            "raise_statement",
            "break_statement",
            "continue_statement",
            "if_statement",
            "for_statement",
            "while_statement",
            "try_statement",
            "with_statement",
            "global_statement",
            "nonlocal_statement",
            "print_statement",
            "exec_statement",
            "match_statement",
        }
    ),
    operand_types=frozenset(
        {"identifier", "integer", "float", "string", "true", "false", "none"}
    ),
    assignment_types=frozenset({"assignment", "augmented_assignment", "named_expression"}),
    branch_types=frozenset({"call"}),
    condition_tokens=_COMPARISONS | {"<>", "else", "elif", "except"},
)

_RUST = LanguageSpec(
    lang=Lang.RUST,
    grammar="rust",
    name="rust",
    extensions=frozenset({"rs"}),
    modes=frozenset({"rust"}),
    comment_types=frozenset({"line_comment", "block_comment"}),
    useful_comment=re.compile(rb"cbindgen:"),
    function_types=frozenset({"function_item"}),
    closure_types=frozenset({"closure_expression"}),
    space_kinds={
        "function_item": SpaceKind.FUNCTION,
        "impl_item": SpaceKind.IMPL,
        "trait_item": SpaceKind.TRAIT,
        "struct_item": SpaceKind.STRUCT,
        "mod_item": SpaceKind.NAMESPACE,
    },
    identifier_types=frozenset({"identifier", "type_identifier", "field_identifier"}),
    parameter_ignored=frozenset({"line_comment", "block_comment", "attribute_item"}),
    cyclomatic_tokens=frozenset({"if", "for", "while", "loop", "?"}) | _C_FAMILY_BOOLEANS,
    cyclomatic_nodes=frozenset({"match_arm"}),
    nesting_types=frozenset(
        {
            "if_expression",
            "for_expression",
            "while_expression",
            "loop_expression",
            "match_expression",
        }
    ),
    flat_types=frozenset({"else_clause"}),
    boolean_types=frozenset({"binary_expression"}),
    boolean_operators=_C_FAMILY_BOOLEANS,
    statement_types=frozenset(
        {
            "expression_statement",
            "let_declaration",
            "const_item",
            "static_item",
            "use_declaration",
        }
    ),
    operand_types=frozenset(
        {
            "identifier",
            "field_identifier",
            "type_identifier",
            "integer_literal",
            "float_literal",
            "string_literal",
            "raw_string_literal",
            "char_literal",
            "boolean_literal",
            "self",
            "crate",
            "super",
        }
    ),
    operator_types=frozenset({"primitive_type", "mutable_specifier"}),
    assignment_types=frozenset(
        {"assignment_expression", "compound_assignment_expr", "let_declaration"}
    ),
    branch_types=frozenset({"call_expression", "macro_invocation"}),
    condition_tokens=_COMPARISONS | {"else"},
)

_KOTLIN = LanguageSpec(
    lang=Lang.KOTLIN,
    grammar="kotlin",
    name="kotlin",
    extensions=frozenset({"kt", "kts"}),
    modes=frozenset({"kotlin"}),
    comment_types=frozenset({"line_comment", "multiline_comment", "comment"}),
    function_types=frozenset({"function_declaration", "secondary_constructor"}),
    closure_types=frozenset({"lambda_literal", "anonymous_function"}),
    space_kinds={
        "function_declaration": SpaceKind.FUNCTION,
        "secondary_constructor": SpaceKind.FUNCTION,
        "class_declaration": SpaceKind.CLASS,
        "object_declaration": SpaceKind.CLASS,
        "companion_object": SpaceKind.CLASS,
    },
    identifier_types=frozenset({"simple_identifier", "type_identifier", "identifier"}),
    parameter_list_types=frozenset({"function_value_parameters", "lambda_parameters"}),
    parameter_ignored=frozenset(
        {"line_comment", "multiline_comment", "comment", "parameter_modifiers"}
    ),
    cyclomatic_tokens=frozenset({"if", "for", "while", "?:"}) | _C_FAMILY_BOOLEANS,
    cyclomatic_nodes=frozenset({"when_entry", "catch_block"}),
    nesting_types=frozenset(
        {
            "if_expression",
            "for_statement",
            "while_statement",
            "do_while_statement",
            "when_expression",
            "catch_block",
        }
    ),
    flat_types=frozenset({"else"}),
    boolean_types=frozenset({"conjunction_expression", "disjunction_expression"}),
    boolean_operators=_C_FAMILY_BOOLEANS,
    statement_types=frozenset(
        {
            "property_declaration",
            "assignment",
            "jump_expression",
            "for_statement",
            "while_statement",
            "do_while_statement",
        }
    ),
    operand_types=frozenset(
        {
            "simple_identifier",
            "type_identifier",
            "integer_literal",
            "long_literal",
            "hex_literal",
            "bin_literal",
            "real_literal",
            "string_literal",
            "character_literal",
            "boolean_literal",
            "null_literal",
            "this_expression",
        }
    ),
    assignment_types=frozenset({"assignment", "property_declaration"}),
    branch_types=frozenset({"call_expression"}),
    condition_tokens=_COMPARISONS | {"else", "?:"},
)

LANGUAGES: Mapping[Lang, LanguageSpec] = {
    spec.lang: spec
    for spec in (
        _CPP,
        _CCOMMENT,
        _JAVA,
        _JAVASCRIPT,
        _TYPESCRIPT,
        _TSX,
        _PYTHON,
        _RUST,
        _KOTLIN,
    )
}


def get_spec(lang: Lang) -> LanguageSpec:
    """Return the table entry for ``lang``."""
    return LANGUAGES[lang]


__all__ = ["HALSTEAD_IGNORED", "LANGUAGES", "Lang", "LanguageSpec", "SpaceKind", "get_spec"]
