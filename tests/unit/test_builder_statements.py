#!/usr/bin/env python3
"""
Tests for the AST builder: statements, definitions and the fail-fast contract.
"""

import pytest

from tests.test_utils import (
    annotated, assign, binary, block, build_program, call, default_parameter,
    function, ident, integer, klass, module, returns, statement, string, tok,
    tree, typed_default_parameter, typed_parameter,
)
from py2ts.frontend.builder import build
from py2ts.shared.errors import UnsupportedConstruct
from py2ts.shared.nodes import (
    Assignment, BinaryOperator, BreakStatement, Call, ClassDefinition, Comment,
    DefaultParameter, ForStatement, FunctionDefinition, IfChoice, IfStatement,
    IntegerLiteral, PassStatement, Program, RaiseStatement, Reference,
    ReturnStatement, StringLiteral, TypedDefaultParameter, TypedParameter,
    WhileStatement,
)
from py2ts.shared.types import BinaryOp, SplatKind


class TestAssignments:
    """Assignment shapes"""

    def test_plain_assignment(self):
        program = build_program(module(assign(ident("x"), integer("1"))))
        assert program == Program([Assignment(Reference("x"), IntegerLiteral("1"))])

    def test_augmented_assignment_keeps_operator(self):
        program = build_program(module(assign(ident("x"), integer("1"), "+=")))
        assert program.body[0].operator == "+="

    def test_annotated_assignment(self):
        program = build_program(module(annotated(ident("count"), "int", integer("0"))))
        assert program.body == [Assignment(Reference("count"), IntegerLiteral("0"), "=", "int")]

    def test_bare_annotation_has_no_value(self):
        program = build_program(module(annotated(ident("count"), "int")))
        assert program.body[0].right is None
        assert program.body[0].type_name == "int"


class TestDocstrings:
    """Triple-quoted strings in statement position become comments"""

    def test_module_docstring_is_comment(self):
        program = build_program(module(statement(string('"""Module doc."""'))))
        assert program.body == [Comment('"""Module doc."""')]

    def test_function_docstring_is_comment(self):
        cst = module(function("f", [], statement(string('"""Doc."""')), tree("pass_statement", tok("pass"))))
        body = build_program(cst).body[0].body
        assert body == [Comment('"""Doc."""'), PassStatement()]

    def test_triple_quoted_argument_stays_string(self):
        cst = module(statement(call(ident("f"), string('"""text"""'))))
        assert build_program(cst).body == [Call(Reference("f"), [StringLiteral('"""text"""')])]

    def test_triple_quoted_assignment_stays_string(self):
        cst = module(assign(ident("s"), string('"""text"""')))
        assert build_program(cst).body[0].right == StringLiteral('"""text"""')

    def test_single_quoted_statement_stays_string(self):
        program = build_program(module(statement(string('"not a doc"'))))
        assert program.body == [StringLiteral('"not a doc"')]


class TestDefinitions:
    """Functions, parameters and classes"""

    def test_function_with_default(self):
        cst = module(function(
            "add", [ident("a"), default_parameter("b", integer("1"))],
            returns(binary(ident("a"), "+", ident("b"))),
        ))
        assert build_program(cst).body == [FunctionDefinition(
            "add",
            [Reference("a"), DefaultParameter("b", IntegerLiteral("1"))],
            [ReturnStatement(BinaryOperator(Reference("a"), BinaryOp.ADD, Reference("b")))],
        )]

    def test_five_parameter_shapes(self):
        cst = module(function(
            "f",
            [
                ident("a"),
                default_parameter("b", integer("1")),
                typed_parameter("c", "int"),
                typed_default_parameter("d", "str", string('"x"')),
                tree("list_splat_pattern", tok("*"), ident("args")),
                tree("dictionary_splat_pattern", tok("**"), ident("kwargs")),
            ],
            tree("pass_statement", tok("pass")),
        ))
        assert build_program(cst).body[0].parameters == [
            Reference("a"),
            DefaultParameter("b", IntegerLiteral("1")),
            TypedParameter("c", "int"),
            TypedDefaultParameter("d", "str", StringLiteral('"x"')),
            Reference("args", SplatKind.LIST),
            Reference("kwargs", SplatKind.DICTIONARY),
        ]

    def test_typed_splat_parameter(self):
        splat = tree("typed_parameter", tree("list_splat_pattern", tok("*"), ident("args")),
                     tok(":"), tok("type", "int"))
        cst = module(function("f", [splat], tree("pass_statement", tok("pass"))))
        assert build_program(cst).body[0].parameters == [TypedParameter("args", "int", SplatKind.LIST)]

    def test_keyword_separator_skipped(self):
        cst = module(function(
            "f", [ident("a"), tok("keyword_separator", "*"), default_parameter("b", integer("2"))],
            tree("pass_statement", tok("pass")),
        ))
        assert build_program(cst).body[0].parameters == [
            Reference("a"), DefaultParameter("b", IntegerLiteral("2")),
        ]

    def test_return_type_kept_as_spelling(self):
        cst = module(function("f", [], returns(integer("1")), returns="int"))
        assert build_program(cst).body[0].return_type == "int"

    def test_decorators_carried_as_text(self):
        decorated = tree("decorated_definition", tok("decorator", "@staticmethod\n"),
                         function("f", [], tree("pass_statement", tok("pass"))))
        function_node = build_program(module(decorated)).body[0]
        assert function_node.decorators == ["@staticmethod"]

    def test_class_with_base(self):
        cst = module(klass("Point", tree("pass_statement", tok("pass")), bases=[ident("Base")]))
        assert build_program(cst).body == [
            ClassDefinition("Point", [PassStatement()], [Reference("Base")])
        ]


class TestControlFlow:
    """if / for / while / return / raise"""

    def test_if_elif_else_choices_in_order(self):
        cst = module(tree(
            "if_statement",
            tok("if"), ident("a"), tok(":"), block(statement(call(ident("f")))),
            tree("elif_clause", tok("elif"), ident("b"), tok(":"), block(statement(call(ident("g"))))),
            tree("else_clause", tok("else"), tok(":"), block(statement(call(ident("h"))))),
        ))
        assert build_program(cst).body == [IfStatement([
            IfChoice(Reference("a"), [Call(Reference("f"), [])]),
            IfChoice(Reference("b"), [Call(Reference("g"), [])]),
            IfChoice(None, [Call(Reference("h"), [])]),
        ])]

    def test_for_loop(self):
        cst = module(tree(
            "for_statement", tok("for"), ident("item"), tok("in"), ident("items"), tok(":"),
            block(tree("break_statement", tok("break"))),
        ))
        assert build_program(cst).body == [
            ForStatement(Reference("item"), Reference("items"), [BreakStatement()])
        ]

    def test_while_loop(self):
        cst = module(tree(
            "while_statement", tok("while"), ident("running"), tok(":"),
            block(tree("pass_statement", tok("pass"))),
        ))
        assert build_program(cst).body == [WhileStatement(Reference("running"), [PassStatement()])]

    def test_while_else_is_unsupported(self):
        cst = module(tree(
            "while_statement", tok("while"), ident("running"), tok(":"),
            block(tree("pass_statement", tok("pass"))),
            tree("else_clause", tok("else"), tok(":"), block(tree("pass_statement", tok("pass")))),
        ))
        with pytest.raises(UnsupportedConstruct) as exc:
            build_program(cst)
        assert exc.value.node_kind == "else_clause"
        assert exc.value.context_kind == "while_statement"

    def test_bare_return(self):
        cst = module(function("f", [], returns()))
        assert build_program(cst).body[0].body == [ReturnStatement()]

    def test_raise_call(self):
        cst = module(tree("raise_statement", tok("raise"), call(ident("ValueError"), string('"bad"'))))
        assert build_program(cst).body == [
            RaiseStatement(Call(Reference("ValueError"), [StringLiteral('"bad"')]))
        ]

    def test_bare_raise_is_unsupported(self):
        with pytest.raises(UnsupportedConstruct) as exc:
            build_program(module(tree("raise_statement", tok("raise"))))
        assert exc.value.node_kind == "raise_statement"


class TestFailFast:
    """Unknown kinds abort the whole build"""

    def test_unknown_statement_names_kind_and_context(self):
        cst = module(assign(ident("x"), integer("1")), tree("with_statement", tok("with")))
        with pytest.raises(UnsupportedConstruct) as exc:
            build_program(cst)
        assert exc.value.node_kind == "with_statement"
        assert exc.value.context_kind == "module"
        assert str(exc.value) == "Unhandled node type 'with_statement' in context 'module'"

    def test_unknown_statement_in_function_body(self):
        cst = module(function("f", [], tree("try_statement", tok("try"))))
        with pytest.raises(UnsupportedConstruct) as exc:
            build_program(cst)
        assert exc.value.node_kind == "try_statement"
        assert exc.value.context_kind == "block"

    def test_error_carries_token_location(self):
        cst = module(statement(tok("ellipsis", "...", line=3, column=5)))
        with pytest.raises(UnsupportedConstruct) as exc:
            build_program(cst, "example.py")
        location = exc.value.location
        assert (location.file, location.line, location.column) == ("example.py", 3, 5)
        assert location.end_column == 8

    def test_build_returns_failure_value(self):
        outcome = build(module(tree("with_statement", tok("with"))))
        assert outcome.is_err()
        assert isinstance(outcome.error, UnsupportedConstruct)
        assert outcome.value is None

    def test_build_success_value(self):
        outcome = build(module(assign(ident("x"), integer("1"))))
        assert outcome.success
        assert outcome.unwrap().body == [Assignment(Reference("x"), IntegerLiteral("1"))]

    def test_root_must_be_module(self):
        with pytest.raises(UnsupportedConstruct) as exc:
            build_program(block())
        assert exc.value.node_kind == "block"
        assert exc.value.context_kind == "file"

    def test_imports_and_comments_are_dropped(self):
        cst = module(
            tree("import_statement", tok("import"), tree("dotted_name", ident("os"))),
            tok("comment", "# note"),
            assign(ident("x"), integer("1")),
        )
        assert build_program(cst).body == [Assignment(Reference("x"), IntegerLiteral("1"))]
