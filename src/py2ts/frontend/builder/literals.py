"""
Literal Builder - scalar literals and collection literals
"""

from typing import TYPE_CHECKING, Callable, List, Optional

from ...shared.errors import UnsupportedConstruct
from ...shared.types import string_prefix
from ...shared.nodes import (
    BooleanLiteral, Dictionary, Expression, FloatLiteral, IntegerLiteral,
    ListLiteral, NullLiteral, Pair, PatternList, StringLiteral, TupleLiteral,
)
from .context import BuildContext, CSTNode, children_of, kind_of, text_of

if TYPE_CHECKING:
    from .base import ASTBuilder

BRACKETS = frozenset({"(", ")", "[", "]", "{", "}"})
SEPARATOR = ","


class LiteralBuilder:
    """Builds literals; collection items may be sparse."""

    def __init__(self, builder: 'ASTBuilder') -> None:
        self.builder = builder
        self.location = builder.location

    def string(self, node: CSTNode, ctx: BuildContext) -> StringLiteral:
        text = text_of(node)
        if "f" in string_prefix(text).lower():
            raise UnsupportedConstruct("interpolation", kind_of(node), self.location(node))
        return StringLiteral(text, location=self.location(node))

    def integer(self, node: CSTNode, ctx: BuildContext) -> IntegerLiteral:
        return IntegerLiteral(text_of(node), location=self.location(node))

    def float(self, node: CSTNode, ctx: BuildContext) -> FloatLiteral:
        return FloatLiteral(text_of(node), location=self.location(node))

    def boolean(self, node: CSTNode, ctx: BuildContext) -> BooleanLiteral:
        return BooleanLiteral(kind_of(node) == "true", location=self.location(node))

    def none(self, node: CSTNode, ctx: BuildContext) -> NullLiteral:
        return NullLiteral(location=self.location(node))

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def items(self, node: CSTNode, ctx: BuildContext,
              build_item: Callable[[CSTNode, BuildContext], Expression]) -> List[Optional[Expression]]:
        """
        Ordered items with positional holes.

        Each separator advances the running index whether or not an item
        followed it, so `[, a]` keeps a hole at position 0 and a trailing
        separator leaves a trailing hole.
        """
        inner = ctx.within(node)
        items: List[Optional[Expression]] = []
        index = 0
        for child in children_of(node):
            kind = kind_of(child)
            if kind in BRACKETS:
                continue
            if kind == SEPARATOR:
                index += 1
                while len(items) <= index:
                    items.append(None)
                continue
            while len(items) <= index:
                items.append(None)
            items[index] = build_item(child, inner)
        return items

    def list(self, node: CSTNode, ctx: BuildContext) -> ListLiteral:
        build_item = self.builder.target if kind_of(node) == "list_pattern" else self.builder.element
        return ListLiteral(self.items(node, ctx, build_item), location=self.location(node))

    def tuple(self, node: CSTNode, ctx: BuildContext) -> TupleLiteral:
        build_item = self.builder.target if kind_of(node) == "tuple_pattern" else self.builder.element
        return TupleLiteral(self.items(node, ctx, build_item), location=self.location(node))

    def pattern_list(self, node: CSTNode, ctx: BuildContext) -> PatternList:
        inner = BuildContext("pattern_list", ctx.parent)
        return PatternList(self.items(node, inner, self.builder.target), location=self.location(node))

    def dictionary(self, node: CSTNode, ctx: BuildContext) -> Dictionary:
        inner = ctx.within(node)
        entries = []
        for child in children_of(node):
            kind = kind_of(child)
            if kind in BRACKETS or kind == SEPARATOR:
                continue
            if kind == "pair":
                entries.append(self.pair(child, inner))
            elif kind == "dictionary_splat":
                entries.append(self.builder.expressions.splat(child, inner))
            else:
                raise self.builder.unsupported(child, inner)
        return Dictionary(entries, location=self.location(node))

    def pair(self, node: CSTNode, ctx: BuildContext) -> Pair:
        inner = ctx.within(node)
        parts = [child for child in children_of(node) if kind_of(child) != ":"]
        if len(parts) != 2:
            raise self.builder.unsupported(node, ctx)
        key, value = (self.builder.expression(part, inner) for part in parts)
        return Pair(key, value, location=self.location(node))
