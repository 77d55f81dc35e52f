#!/usr/bin/env python3
"""
Tests for expression and literal building: access chains, operator
normalization, calls and sparse collections.
"""

import pytest

from tests.test_utils import (
    assign, attribute, binary, build_program, call, ident, integer, keyword,
    module, statement, string, tok, tree,
)
from py2ts.shared.errors import UnsupportedConstruct
from py2ts.shared.nodes import (
    BinaryOperator, BooleanLiteral, Call, ConditionalExpression, Dictionary,
    FloatLiteral, IntegerLiteral, KeywordArgument, Lambda, ListLiteral,
    MemberExpression, NotOperator, NullLiteral, Pair, ParenthesizedExpression,
    PatternList, Reference, Slice, StringLiteral, Subscript, TupleLiteral,
    UnaryOperator,
)
from py2ts.shared.types import BinaryOp, SplatKind, UnaryOp


def expression_of(cst_expression):
    return build_program(module(statement(cst_expression))).body[0]


class TestAccessChains:
    """Attribute access and calls fold to the left"""

    def test_attribute_chain_left_folded(self):
        node = expression_of(attribute(attribute(ident("a"), "b"), "c"))
        assert node == MemberExpression(
            MemberExpression(Reference("a"), Reference("b")), Reference("c")
        )

    def test_method_call_on_chain(self):
        node = expression_of(call(attribute(ident("obj"), "run"), integer("1")))
        assert node == Call(MemberExpression(Reference("obj"), Reference("run")), [IntegerLiteral("1")])

    def test_call_arguments_in_source_order(self):
        node = expression_of(call(
            ident("f"),
            integer("1"),
            keyword("key", integer("2")),
            tree("list_splat", tok("*"), ident("rest")),
            tree("dictionary_splat", tok("**"), ident("options")),
        ))
        assert node.arguments == [
            IntegerLiteral("1"),
            KeywordArgument("key", IntegerLiteral("2")),
            Reference("rest", SplatKind.LIST),
            Reference("options", SplatKind.DICTIONARY),
        ]

    def test_generator_argument_is_unsupported(self):
        node = tree("call", ident("f"), tree("generator_expression", tok("(")))
        with pytest.raises(UnsupportedConstruct) as exc:
            expression_of(node)
        assert exc.value.node_kind == "generator_expression"
        assert exc.value.context_kind == "call"

    def test_subscript_index(self):
        node = expression_of(tree("subscript", ident("xs"), tok("["), integer("0"), tok("]")))
        assert node == Subscript(Reference("xs"), IntegerLiteral("0"))

    def test_subscript_slice_bounds(self):
        sliced = tree("slice", tok(":"), integer("2"))
        node = expression_of(tree("subscript", ident("xs"), tok("["), sliced, tok("]")))
        assert node == Subscript(Reference("xs"), Slice(None, IntegerLiteral("2"), None))

    def test_multiple_indices_become_tuple(self):
        node = expression_of(tree("subscript", ident("m"), tok("["), ident("i"), tok(","), ident("j"), tok("]")))
        assert node.index == TupleLiteral([Reference("i"), Reference("j")])


class TestOperatorNormalization:
    """Keyword operators map to the symbolic vocabulary at build time"""

    @pytest.mark.parametrize("spelling,expected", [
        ("and", BinaryOp.AND),
        ("or", BinaryOp.OR),
    ])
    def test_boolean_keywords(self, spelling, expected):
        node = expression_of(binary(ident("a"), spelling, ident("b"), kind="boolean_operator"))
        assert node == BinaryOperator(Reference("a"), expected, Reference("b"))

    def test_is_becomes_equality(self):
        node = expression_of(binary(ident("a"), "is", tok("none", "None"), kind="comparison_operator"))
        assert node == BinaryOperator(Reference("a"), BinaryOp.EQ, NullLiteral())

    def test_is_not_becomes_inequality(self):
        is_not = tree("is not", tok("is"), tok("not"))
        node = expression_of(tree("comparison_operator", ident("a"), is_not, ident("b")))
        assert node.operator is BinaryOp.NE

    def test_comparison_chain_folds_with_and(self):
        node = expression_of(tree(
            "comparison_operator", ident("a"), tok("<"), ident("b"), tok("<="), ident("c"),
        ))
        assert node == BinaryOperator(
            BinaryOperator(Reference("a"), BinaryOp.LT, Reference("b")),
            BinaryOp.AND,
            BinaryOperator(Reference("b"), BinaryOp.LE, Reference("c")),
        )

    def test_membership_is_unsupported(self):
        node = tree("comparison_operator", ident("a"), tok("in"), ident("xs"))
        with pytest.raises(UnsupportedConstruct) as exc:
            expression_of(node)
        assert exc.value.node_kind == "in"
        assert exc.value.context_kind == "comparison_operator"

    def test_matrix_multiply_is_unsupported(self):
        with pytest.raises(UnsupportedConstruct) as exc:
            expression_of(binary(ident("a"), "@", ident("b")))
        assert exc.value.node_kind == "@"

    def test_not_and_unary(self):
        assert expression_of(tree("not_operator", tok("not"), ident("done"))) == NotOperator(Reference("done"))
        assert expression_of(tree("unary_operator", tok("-"), ident("x"))) == UnaryOperator(UnaryOp.NEG, Reference("x"))

    def test_conditional_expression(self):
        node = expression_of(tree("conditional_expression", ident("a"), tok("if"), ident("ok"), tok("else"), ident("b")))
        assert node == ConditionalExpression(Reference("ok"), Reference("a"), Reference("b"))

    def test_parentheses_recorded(self):
        node = expression_of(tree("parenthesized_expression", tok("("), binary(ident("a"), "+", ident("b")), tok(")")))
        assert node == ParenthesizedExpression(BinaryOperator(Reference("a"), BinaryOp.ADD, Reference("b")))

    def test_lambda(self):
        node = expression_of(tree(
            "lambda", tok("lambda"), tree("lambda_parameters", ident("x")), tok(":"),
            binary(ident("x"), "*", integer("2")),
        ))
        assert node == Lambda([Reference("x")], BinaryOperator(Reference("x"), BinaryOp.MUL, IntegerLiteral("2")))


class TestLiterals:
    """Scalar literals and sparse collections"""

    def test_scalars(self):
        assert expression_of(integer("0x1F")) == IntegerLiteral("0x1F")
        assert expression_of(tok("float", "1.5")) == FloatLiteral("1.5")
        assert expression_of(tok("true", "True")) == BooleanLiteral(True)
        assert expression_of(tok("false", "False")) == BooleanLiteral(False)
        assert expression_of(tok("none", "None")) == NullLiteral()

    def test_interpolated_string_is_unsupported(self):
        with pytest.raises(UnsupportedConstruct) as exc:
            expression_of(string('f"{name}"'))
        assert exc.value.node_kind == "interpolation"
        assert exc.value.context_kind == "string"

    def test_leading_hole_preserved(self):
        node = expression_of(tree("list", tok("["), tok(","), ident("a"), tok("]")))
        assert node == ListLiteral([None, Reference("a")])
        assert len(node.items) == 2

    def test_trailing_separator_leaves_hole(self):
        node = expression_of(tree("list", tok("["), ident("a"), tok(","), ident("b"), tok(","), tok("]")))
        assert node.items == [Reference("a"), Reference("b"), None]

    def test_element_splat(self):
        node = expression_of(tree("list", tok("["), tree("list_splat", tok("*"), ident("xs")), tok("]")))
        assert node.items == [Reference("xs", SplatKind.LIST)]

    def test_dictionary_pairs_and_splat(self):
        node = expression_of(tree(
            "dictionary", tok("{"),
            tree("pair", string('"a"'), tok(":"), integer("1")), tok(","),
            tree("dictionary_splat", tok("**"), ident("rest")),
            tok("}"),
        ))
        assert node == Dictionary([
            Pair(StringLiteral('"a"'), IntegerLiteral("1")),
            Reference("rest", SplatKind.DICTIONARY),
        ])

    def test_set_literal_is_unsupported(self):
        with pytest.raises(UnsupportedConstruct) as exc:
            expression_of(tree("set", tok("{"), integer("1"), tok("}")))
        assert exc.value.node_kind == "set"

    def test_comprehension_is_unsupported(self):
        with pytest.raises(UnsupportedConstruct) as exc:
            build_program(module(assign(ident("xs"), tree("list_comprehension", tok("[")))))
        assert exc.value.node_kind == "list_comprehension"
        assert exc.value.context_kind == "assignment"


class TestTargets:
    """Assignment targets"""

    def test_pattern_list_target(self):
        cst = module(assign(
            tree("pattern_list", ident("a"), tok(","), ident("b")),
            tree("expression_list", ident("b"), tok(","), ident("a")),
        ))
        node = build_program(cst).body[0]
        assert node.left == PatternList([Reference("a"), Reference("b")])
        assert node.right == TupleLiteral([Reference("b"), Reference("a")])

    def test_call_is_not_a_target(self):
        cst = module(assign(call(ident("f")), integer("1")))
        with pytest.raises(UnsupportedConstruct) as exc:
            build_program(cst)
        assert exc.value.node_kind == "call"
