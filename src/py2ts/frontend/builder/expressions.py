"""
Expression Builder - references, access chains, calls and operators
"""

from typing import TYPE_CHECKING, List, Optional

from ...shared.nodes import (
    BinaryOperator, Call, ConditionalExpression, Expression, KeywordArgument,
    MemberExpression, NotOperator, ParenthesizedExpression, Reference, Slice,
    Subscript, TupleLiteral, UnaryOperator,
)
from ...shared.types import BinaryOp, SplatKind, binary_op, unary_op
from .context import BuildContext, CSTNode, children_of, kind_of, text_of

if TYPE_CHECKING:
    from .base import ASTBuilder

# Punctuation inside argument lists and subscripts
ARGUMENT_TOKENS = frozenset({"(", ")", ","})
SUBSCRIPT_TOKENS = frozenset({"[", "]", ","})
SPLAT_TOKENS = {"*": SplatKind.LIST, "**": SplatKind.DICTIONARY}


class ExpressionBuilder:
    """Dedicated builder for expressions"""

    def __init__(self, builder: 'ASTBuilder') -> None:
        self.builder = builder
        self.location = builder.location

    def reference(self, node: CSTNode, ctx: BuildContext) -> Reference:
        return Reference(text_of(node), location=self.location(node))

    def attribute(self, node: CSTNode, ctx: BuildContext) -> MemberExpression:
        """
        `a.b.c` -> member(member(a, b), c).

        The grammar nests attribute chains to the left, so recursing on the
        object segment yields the left fold: the first segment ends up as the
        innermost object.
        """
        inner = ctx.within(node)
        parts = [child for child in children_of(node) if kind_of(child) != "."]
        if len(parts) != 2 or kind_of(parts[1]) != "identifier":
            raise self.builder.unsupported(node, ctx)
        obj = self.builder.expression(parts[0], inner)
        prop = self.reference(parts[1], inner)
        return MemberExpression(obj, prop, location=self.location(node))

    # ------------------------------------------------------------------
    # Calls
    # ------------------------------------------------------------------

    def call(self, node: CSTNode, ctx: BuildContext) -> Call:
        inner = ctx.within(node)
        parts = children_of(node)
        if len(parts) != 2 or kind_of(parts[1]) != "argument_list":
            # generator_expression arguments: `f(x for x in xs)`
            raise self.builder.unsupported(parts[-1], inner)
        callee = self.builder.expression(parts[0], inner)
        return Call(callee, self.arguments(parts[1], inner), location=self.location(node))

    def arguments(self, node: CSTNode, ctx: BuildContext) -> List[Expression]:
        """Positional, keyword and splat arguments in source order."""
        inner = ctx.within(node, "argument_list")
        return [
            self.builder.argument(child, inner)
            for child in children_of(node)
            if kind_of(child) not in ARGUMENT_TOKENS
        ]

    def keyword_argument(self, node: CSTNode, ctx: BuildContext) -> KeywordArgument:
        inner = ctx.within(node)
        parts = [child for child in children_of(node) if kind_of(child) != "="]
        if len(parts) != 2 or kind_of(parts[0]) != "identifier":
            raise self.builder.unsupported(node, ctx)
        value = self.builder.expression(parts[1], inner)
        return KeywordArgument(text_of(parts[0]), value, location=self.location(node))

    def splat(self, node: CSTNode, ctx: BuildContext) -> Reference:
        """`*xs` / `**kw` as a splat reference; only plain names can be spread."""
        inner = ctx.within(node)
        parts = children_of(node)
        if len(parts) != 2 or kind_of(parts[0]) not in SPLAT_TOKENS:
            raise self.builder.unsupported(node, ctx)
        if kind_of(parts[1]) != "identifier":
            raise self.builder.unsupported(parts[1], inner)
        return Reference(text_of(parts[1]), SPLAT_TOKENS[kind_of(parts[0])], location=self.location(node))

    # ------------------------------------------------------------------
    # Subscripts
    # ------------------------------------------------------------------

    def subscript(self, node: CSTNode, ctx: BuildContext) -> Subscript:
        inner = ctx.within(node)
        parts = children_of(node)
        value = self.builder.expression(parts[0], inner)
        indices: List[Expression] = []
        for child in parts[1:]:
            if kind_of(child) in SUBSCRIPT_TOKENS:
                continue
            if kind_of(child) == "slice":
                indices.append(self.slice(child, inner))
            else:
                indices.append(self.builder.expression(child, inner))
        if not indices:
            raise self.builder.unsupported(node, ctx)
        # `m[i, j]` indexes with a tuple
        index = indices[0] if len(indices) == 1 else TupleLiteral(list(indices))
        return Subscript(value, index, location=self.location(node))

    def slice(self, node: CSTNode, ctx: BuildContext) -> Slice:
        inner = ctx.within(node)
        bounds: List[Optional[Expression]] = [None, None, None]
        position = 0
        for child in children_of(node):
            if kind_of(child) == ":":
                position += 1
                continue
            bounds[position] = self.builder.expression(child, inner)
        return Slice(*bounds, location=self.location(node))

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def _operator(self, token: CSTNode, ctx: BuildContext) -> BinaryOp:
        op = binary_op(kind_of(token))
        if op is None:
            raise self.builder.unsupported(token, ctx)
        return op

    def binary_operator(self, node: CSTNode, ctx: BuildContext) -> BinaryOperator:
        """Arithmetic, bitwise and boolean (`and`/`or`) operators."""
        inner = ctx.within(node, "binary")
        parts = children_of(node)
        if len(parts) != 3:
            raise self.builder.unsupported(node, ctx)
        left = self.builder.expression(parts[0], inner)
        operator = self._operator(parts[1], inner)
        right = self.builder.expression(parts[2], inner)
        return BinaryOperator(left, operator, right, location=self.location(node))

    def comparison_operator(self, node: CSTNode, ctx: BuildContext) -> BinaryOperator:
        """
        Comparisons, with chains folded: `a < b <= c` -> `a < b && b <= c`.

        The middle operand is built once per comparison it takes part in so
        the resulting tree stays acyclic.
        """
        inner = ctx.within(node, "binary")
        parts = children_of(node)
        operands = parts[0::2]
        operators = parts[1::2]
        if not operators or len(operands) != len(operators) + 1:
            raise self.builder.unsupported(node, ctx)

        result: Optional[BinaryOperator] = None
        for i, token in enumerate(operators):
            comparison = BinaryOperator(
                self.builder.expression(operands[i], inner),
                self._operator(token, inner),
                self.builder.expression(operands[i + 1], inner),
                location=self.location(node),
            )
            result = comparison if result is None else BinaryOperator(
                result, BinaryOp.AND, comparison, location=self.location(node)
            )
        return result

    def not_operator(self, node: CSTNode, ctx: BuildContext) -> NotOperator:
        inner = ctx.within(node)
        parts = [child for child in children_of(node) if kind_of(child) != "not"]
        if len(parts) != 1:
            raise self.builder.unsupported(node, ctx)
        return NotOperator(self.builder.expression(parts[0], inner), location=self.location(node))

    def unary_operator(self, node: CSTNode, ctx: BuildContext) -> UnaryOperator:
        inner = ctx.within(node)
        parts = children_of(node)
        if len(parts) != 2:
            raise self.builder.unsupported(node, ctx)
        op = unary_op(kind_of(parts[0]))
        if op is None:
            raise self.builder.unsupported(parts[0], inner)
        operand = self.builder.expression(parts[1], inner)
        return UnaryOperator(op, operand, location=self.location(node))

    def conditional_expression(self, node: CSTNode, ctx: BuildContext) -> ConditionalExpression:
        """`a if test else b`"""
        inner = ctx.within(node)
        parts = [child for child in children_of(node) if kind_of(child) not in ("if", "else")]
        if len(parts) != 3:
            raise self.builder.unsupported(node, ctx)
        consequence, test, alternative = (self.builder.expression(part, inner) for part in parts)
        return ConditionalExpression(test, consequence, alternative, location=self.location(node))

    def parenthesized_expression(self, node: CSTNode, ctx: BuildContext) -> ParenthesizedExpression:
        inner = ctx.within(node)
        parts = [child for child in children_of(node) if kind_of(child) not in ("(", ")")]
        if len(parts) != 1:
            raise self.builder.unsupported(node, ctx)
        return ParenthesizedExpression(self.builder.expression(parts[0], inner), location=self.location(node))
