"""
Statement Builder - assignments, control flow, and statement-position strings
"""

from typing import TYPE_CHECKING, Optional

from ...shared.errors import UnsupportedConstruct
from ...shared.nodes import (
    Assignment, BodyItem, BreakStatement, Comment, ContinueStatement, ForStatement,
    IfChoice, IfStatement, PassStatement, RaiseStatement, ReturnStatement,
    TupleLiteral, WhileStatement,
)
from ...shared.types import ASSIGNMENT_OPERATORS
from .context import BuildContext, CSTNode, children_of, is_triple_quoted, kind_of, text_of

if TYPE_CHECKING:
    from .base import ASTBuilder

IF_TOKENS = frozenset({"if", "elif", "else", ":"})
CLAUSE_KINDS = frozenset({"elif_clause", "else_clause"})
SIMPLE_STATEMENTS = {
    "pass_statement": PassStatement,
    "break_statement": BreakStatement,
    "continue_statement": ContinueStatement,
}


class StatementBuilder:
    """Dedicated builder for statements"""

    def __init__(self, builder: 'ASTBuilder') -> None:
        self.builder = builder
        self.location = builder.location

    def expression_statement(self, node: CSTNode, ctx: BuildContext) -> BodyItem:
        """
        Expression in statement position.

        Assignments arrive wrapped in an expression statement. A triple-quoted
        string alone in a statement-bearing scope is a docstring and becomes a
        comment; anywhere else it stays a string value.
        """
        inner = ctx.within(node)
        parts = children_of(node)
        if len(parts) != 1:
            # `a, b` evaluated for effect
            return TupleLiteral(self.builder.literals.items(node, ctx, self.builder.element),
                                location=self.location(node))
        child = parts[0]
        kind = kind_of(child)
        if kind in ("assignment", "augmented_assignment"):
            return self.assignment(child, inner)
        if kind == "string" and ctx.is_statement_scope and is_triple_quoted(text_of(child)):
            return Comment(text_of(child), location=self.location(child))
        return self.builder.expression(child, inner)

    def assignment(self, node: CSTNode, ctx: BuildContext) -> Assignment:
        """`x = 1`, `x += 1`, `x: int = 1`, `x: int`, `a, b = b, a`"""
        inner = ctx.within(node)
        parts = children_of(node)
        left = self.builder.target(parts[0], inner)
        operator = "="
        type_name: Optional[str] = None
        right = None
        for child in parts[1:]:
            kind = kind_of(child)
            if kind == ":":
                continue
            if kind == "type":
                type_name = text_of(child)
            elif kind in ASSIGNMENT_OPERATORS:
                operator = kind
            else:
                right = self.builder.expression(child, inner)
        return Assignment(left, right, operator, type_name, location=self.location(node))

    # ------------------------------------------------------------------
    # Control flow
    # ------------------------------------------------------------------

    def if_statement(self, node: CSTNode, ctx: BuildContext) -> IfStatement:
        """if / elif / else as ordered choices; only `else` has no test."""
        inner = ctx.within(node, "if_statement")
        choices = [self._choice(node, inner)]
        for child in children_of(node):
            if kind_of(child) in CLAUSE_KINDS:
                choices.append(self._choice(child, inner.within(child)))
        return IfStatement(choices, location=self.location(node))

    def _choice(self, node: CSTNode, ctx: BuildContext) -> IfChoice:
        test = None
        body = []
        for child in children_of(node):
            kind = kind_of(child)
            if kind in IF_TOKENS or kind in CLAUSE_KINDS:
                continue
            if kind == "block":
                body = self.builder.block(child, ctx)
            elif test is None:
                test = self.builder.expression(child, ctx)
            else:
                raise self.builder.unsupported(child, ctx)
        return IfChoice(test, body)

    def for_statement(self, node: CSTNode, ctx: BuildContext) -> ForStatement:
        inner = ctx.within(node, "for_statement")
        left = right = None
        body = []
        after_in = False
        for child in children_of(node):
            kind = kind_of(child)
            if kind in ("for", ":"):
                continue
            if kind == "in" and not after_in:
                after_in = True
            elif kind == "block":
                body = self.builder.block(child, inner)
            elif not after_in and left is None:
                left = self.builder.target(child, inner)
            elif after_in and right is None:
                right = self.builder.expression(child, inner)
            else:
                # async for, for ... else
                raise self.builder.unsupported(child, inner)
        if left is None or right is None:
            raise self.builder.unsupported(node, ctx)
        return ForStatement(left, right, body, location=self.location(node))

    def while_statement(self, node: CSTNode, ctx: BuildContext) -> WhileStatement:
        inner = ctx.within(node, "while_statement")
        test = None
        body = []
        for child in children_of(node):
            kind = kind_of(child)
            if kind in ("while", ":"):
                continue
            if kind == "block":
                body = self.builder.block(child, inner)
            elif test is None:
                test = self.builder.expression(child, inner)
            else:
                # while ... else
                raise self.builder.unsupported(child, inner)
        if test is None:
            raise self.builder.unsupported(node, ctx)
        return WhileStatement(test, body, location=self.location(node))

    def return_statement(self, node: CSTNode, ctx: BuildContext) -> ReturnStatement:
        inner = ctx.within(node)
        values = [child for child in children_of(node) if kind_of(child) != "return"]
        if len(values) > 1:
            raise self.builder.unsupported(values[1], inner)
        expression = self.builder.expression(values[0], inner) if values else None
        return ReturnStatement(expression, location=self.location(node))

    def raise_statement(self, node: CSTNode, ctx: BuildContext) -> RaiseStatement:
        """`raise X(...)`; bare re-raise and `raise ... from ...` are not translated."""
        inner = ctx.within(node)
        values = [child for child in children_of(node) if kind_of(child) != "raise"]
        if not values:
            raise UnsupportedConstruct(kind_of(node), ctx.parent_kind, self.location(node))
        if len(values) > 1:
            raise self.builder.unsupported(values[1], inner)
        return RaiseStatement(self.builder.expression(values[0], inner), location=self.location(node))

    def simple_statement(self, node: CSTNode, ctx: BuildContext) -> BodyItem:
        return SIMPLE_STATEMENTS[kind_of(node)](location=self.location(node))
