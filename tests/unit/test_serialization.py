#!/usr/bin/env python3
"""
Tests for S-expression dumps of the AST.
"""

from py2ts.shared.nodes import (
    Assignment, BinaryOperator, FunctionDefinition, IfChoice, IfStatement,
    IntegerLiteral, ListLiteral, PassStatement, Program, Reference,
)
from py2ts.shared.serialization import serialize_ast
from py2ts.shared.source_location import SourceLocation
from py2ts.shared.types import BinaryOp


class TestSerialization:
    """Structural dumps used by --dump-ast"""

    def test_sparse_hole_prints_nil(self):
        assert serialize_ast(ListLiteral([None, Reference("a")])) == '(list (:items (nil (reference (:name "a")))))'

    def test_operator_is_symbol(self):
        out = serialize_ast(BinaryOperator(Reference("a"), BinaryOp.ADD, IntegerLiteral("1")))
        assert "(:operator +)" in out
        assert '(integer (:value "1"))' in out

    def test_empty_optionals_omitted(self):
        out = serialize_ast(FunctionDefinition("f", [], [PassStatement()]))
        assert ":decorators" not in out
        assert ":return_type" not in out
        assert "(pass_statement)" in out

    def test_if_choices(self):
        node = IfStatement([IfChoice(Reference("a"), []), IfChoice(None, [])])
        out = serialize_ast(node, pretty=False)
        assert "choice" in out
        assert "else" in out

    def test_location_included_on_request(self):
        node = Program([Assignment(Reference("x"), IntegerLiteral("1"), location=SourceLocation("m.py", 1, 1))])
        assert '(:at "m.py:1:1")' in serialize_ast(node, include_location=True)
        assert ":at" not in serialize_ast(node)
