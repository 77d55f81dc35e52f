"""
AST Builder

Walks the concrete syntax tree (lark Tree/Token, see frontend.parser) top-down
and produces the intermediate AST. Every syntactic context has its own
handler table:

- statement level (module and block bodies)
- expression level
- argument level (expressions plus keyword arguments and splats)
- element level (collection items: expressions plus `*splat`)
- parameter level
- assignment-target level

A kind missing from the table of the context it appears in raises
UnsupportedConstruct naming the kind and the enclosing concrete kind. Nothing
is skipped silently except imports and comments, and no partial AST escapes a
failed build.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from lark import Token
from typing_extensions import TypeAlias

from ...shared.errors import UnsupportedConstruct
from ...shared.nodes import BodyItem, Expression, Program
from ...shared.source_location import SourceLocation
from ...utils.base import Outcome
from ...utils.config import DEFAULT_SOURCE_NAME

from .context import BuildContext, CSTNode, children_of, kind_of
from .definitions import DefinitionBuilder
from .expressions import ExpressionBuilder
from .literals import LiteralBuilder
from .statements import StatementBuilder

Handler: TypeAlias = Callable[[CSTNode, BuildContext], Any]

logger: logging.Logger = logging.getLogger(__name__)


class ASTBuilder:
    """
    Concrete syntax tree -> intermediate AST.

    Construct-specific logic lives in helper builders composed here; they call
    back into statement()/expression()/... for recursion so that every child
    goes through the handler table of its context.
    """

    def __init__(self, source_file: str = DEFAULT_SOURCE_NAME) -> None:
        self.source_file = source_file
        self.literals = LiteralBuilder(self)
        self.expressions = ExpressionBuilder(self)
        self.definitions = DefinitionBuilder(self)
        self.statements = StatementBuilder(self)

        self.statement_handlers: Dict[str, Handler] = {
            "expression_statement": self.statements.expression_statement,
            "function_definition": self.definitions.function_definition,
            "class_definition": self.definitions.class_definition,
            "decorated_definition": self.definitions.decorated_definition,
            "if_statement": self.statements.if_statement,
            "for_statement": self.statements.for_statement,
            "while_statement": self.statements.while_statement,
            "return_statement": self.statements.return_statement,
            "raise_statement": self.statements.raise_statement,
            "pass_statement": self.statements.simple_statement,
            "break_statement": self.statements.simple_statement,
            "continue_statement": self.statements.simple_statement,
            "import_statement": self._skip,
            "import_from_statement": self._skip,
            "future_import_statement": self._skip,
        }
        self.expression_handlers: Dict[str, Handler] = {
            "identifier": self.expressions.reference,
            "attribute": self.expressions.attribute,
            "call": self.expressions.call,
            "subscript": self.expressions.subscript,
            "binary_operator": self.expressions.binary_operator,
            "boolean_operator": self.expressions.binary_operator,
            "comparison_operator": self.expressions.comparison_operator,
            "not_operator": self.expressions.not_operator,
            "unary_operator": self.expressions.unary_operator,
            "conditional_expression": self.expressions.conditional_expression,
            "parenthesized_expression": self.expressions.parenthesized_expression,
            "lambda": self.definitions.lambda_expression,
            "string": self.literals.string,
            "integer": self.literals.integer,
            "float": self.literals.float,
            "true": self.literals.boolean,
            "false": self.literals.boolean,
            "none": self.literals.none,
            "list": self.literals.list,
            "tuple": self.literals.tuple,
            "expression_list": self.literals.tuple,
            "dictionary": self.literals.dictionary,
        }
        self.argument_handlers: Dict[str, Handler] = {
            **self.expression_handlers,
            "keyword_argument": self.expressions.keyword_argument,
            "list_splat": self.expressions.splat,
            "dictionary_splat": self.expressions.splat,
        }
        self.element_handlers: Dict[str, Handler] = {
            **self.expression_handlers,
            "list_splat": self.expressions.splat,
        }
        self.parameter_handlers: Dict[str, Handler] = {
            "identifier": self.expressions.reference,
            "default_parameter": self.definitions.default_parameter,
            "typed_parameter": self.definitions.typed_parameter,
            "typed_default_parameter": self.definitions.typed_default_parameter,
            "list_splat_pattern": self.definitions.splat_pattern,
            "dictionary_splat_pattern": self.definitions.splat_pattern,
            "keyword_separator": self._skip,
            "positional_separator": self._skip,
        }
        self.target_handlers: Dict[str, Handler] = {
            "identifier": self.expressions.reference,
            "attribute": self.expressions.attribute,
            "subscript": self.expressions.subscript,
            "pattern_list": self.literals.pattern_list,
            "tuple_pattern": self.literals.tuple,
            "list_pattern": self.literals.list,
            "list_splat_pattern": self.definitions.splat_pattern,
        }

    def build(self, cst: CSTNode) -> Program:
        """Build the Program for a `module` root; raises UnsupportedConstruct."""
        ctx = BuildContext("module")
        if kind_of(cst) != "module":
            raise self.unsupported(cst, ctx)
        body = self.block(cst, ctx)
        logger.debug("built %s: %d top-level items", self.source_file, len(body))
        return Program(body, location=self.location(cst))

    # ------------------------------------------------------------------
    # Context dispatch
    # ------------------------------------------------------------------

    def _dispatch(self, table: Dict[str, Handler], node: CSTNode, ctx: BuildContext) -> Any:
        handler = table.get(kind_of(node))
        if handler is None:
            raise self.unsupported(node, ctx)
        return handler(node, ctx)

    def block(self, node: CSTNode, ctx: BuildContext) -> List[BodyItem]:
        """Statements of a module or block body, in source order."""
        inner = ctx.within(node)
        body: List[BodyItem] = []
        for child in children_of(node):
            item = self.statement(child, inner)
            if item is not None:
                body.append(item)
        return body

    def statement(self, node: CSTNode, ctx: BuildContext) -> Optional[BodyItem]:
        return self._dispatch(self.statement_handlers, node, ctx)

    def expression(self, node: CSTNode, ctx: BuildContext) -> Expression:
        return self._dispatch(self.expression_handlers, node, ctx)

    def argument(self, node: CSTNode, ctx: BuildContext) -> Expression:
        return self._dispatch(self.argument_handlers, node, ctx)

    def element(self, node: CSTNode, ctx: BuildContext) -> Expression:
        return self._dispatch(self.element_handlers, node, ctx)

    def parameter(self, node: CSTNode, ctx: BuildContext):
        return self._dispatch(self.parameter_handlers, node, ctx)

    def target(self, node: CSTNode, ctx: BuildContext) -> Expression:
        return self._dispatch(self.target_handlers, node, ctx)

    def _skip(self, node: CSTNode, ctx: BuildContext) -> None:
        logger.debug("skipping %s", kind_of(node))
        return None

    # ------------------------------------------------------------------
    # Locations and errors
    # ------------------------------------------------------------------

    def location(self, node: CSTNode) -> Optional[SourceLocation]:
        """Location from token attributes or Tree.meta; None when the CST has none."""
        if isinstance(node, Token):
            if node.line is None:
                return None
            return SourceLocation(
                file=self.source_file,
                line=node.line,
                column=node.column or 0,
                start=node.start_pos or 0,
                end=node.end_pos or 0,
                end_line=node.end_line or 0,
                end_column=node.end_column or 0,
            )
        meta = node.meta
        if meta.empty:
            return None
        return SourceLocation(
            file=self.source_file,
            line=meta.line,
            column=meta.column,
            start=getattr(meta, 'start_pos', 0),
            end=getattr(meta, 'end_pos', 0),
            end_line=getattr(meta, 'end_line', 0),
            end_column=getattr(meta, 'end_column', 0),
        )

    def unsupported(self, node: CSTNode, ctx: BuildContext) -> UnsupportedConstruct:
        return UnsupportedConstruct(kind_of(node), ctx.parent_kind, self.location(node))


def build(cst: CSTNode, source_file: str = DEFAULT_SOURCE_NAME) -> Outcome[Program]:
    """Build the AST, returning the failure as a value instead of raising."""
    try:
        return Outcome.ok(ASTBuilder(source_file).build(cst))
    except UnsupportedConstruct as e:
        logger.debug("build failed: %s", e)
        return Outcome.err(e)
