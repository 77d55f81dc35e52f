"""
py2ts AST (Abstract Syntax Tree) Definitions

Closed, language-neutral intermediate tree produced by the AST builder and
consumed by the code generator. Each node kind has exactly one class; children
are typed by position except where the source syntax is variadic (bodies,
parameter and argument lists, collection literals).

Visitor Pattern Support:
- All nodes implement accept(visitor, context) dispatching to visit_<kind>
- ASTVisitor declares every visit_<kind> abstract, so a visitor that forgets a
  node kind cannot be instantiated
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional, TypeVar, Union

from .source_location import SourceLocation
from .types import BinaryOp, SplatKind, UnaryOp

if TYPE_CHECKING:
    from .ast_visitor import ASTVisitor

T = TypeVar('T')


class NodeType(Enum):
    """AST node kinds"""
    PROGRAM = "program"
    FUNCTION_DEFINITION = "function_definition"
    CLASS_DEFINITION = "class_definition"
    ASSIGNMENT = "assignment"
    REFERENCE = "reference"
    DEFAULT_PARAMETER = "default_parameter"
    TYPED_PARAMETER = "typed_parameter"
    TYPED_DEFAULT_PARAMETER = "typed_default_parameter"
    CALL = "call"
    KEYWORD_ARGUMENT = "keyword_argument"
    MEMBER_EXPRESSION = "member_expression"
    SUBSCRIPT = "subscript"
    SLICE = "slice"
    BINARY_OPERATOR = "binary_operator"
    NOT_OPERATOR = "not_operator"
    UNARY_OPERATOR = "unary_operator"
    CONDITIONAL_EXPRESSION = "conditional_expression"
    PARENTHESIZED_EXPRESSION = "parenthesized_expression"
    LAMBDA = "lambda"
    IF_STATEMENT = "if_statement"
    FOR_STATEMENT = "for_statement"
    WHILE_STATEMENT = "while_statement"
    RETURN_STATEMENT = "return_statement"
    RAISE_STATEMENT = "raise_statement"
    PASS_STATEMENT = "pass_statement"
    BREAK_STATEMENT = "break_statement"
    CONTINUE_STATEMENT = "continue_statement"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    NULL = "null"
    COMMENT = "comment"
    LIST = "list"
    TUPLE = "tuple"
    DICTIONARY = "dictionary"
    PAIR = "pair"
    PATTERN_LIST = "pattern_list"


class ASTNode:
    """
    Base class for all AST nodes

    - node_type: the closed kind tag
    - location: where the construct came from (None for synthesized nodes)
    """
    __slots__ = ('node_type', 'location')

    def __init__(self, node_type: NodeType, location: Optional[SourceLocation] = None):
        self.node_type = node_type
        self.location = location

    def accept(self, visitor: 'ASTVisitor[T]', context: Any) -> T:
        raise NotImplementedError(f"accept() not implemented for {self.__class__.__name__}")


class Expression(ASTNode):
    """Base class for expressions"""
    __slots__ = ()


class Statement(ASTNode):
    """Base class for statements"""
    __slots__ = ()


# Parameters are references, default/typed parameters, or splat references
Parameter = Union['Reference', 'DefaultParameter', 'TypedParameter', 'TypedDefaultParameter']
# Block bodies hold statements and bare expressions in statement position
BodyItem = Union[Statement, Expression]


# =========================================================================
# PROGRAM STRUCTURE
# =========================================================================

@dataclass
class Program(ASTNode):
    """Program root node"""
    body: List[BodyItem]

    def __init__(self, body: List[BodyItem], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.PROGRAM, location)
        self.body = body

    def accept(self, visitor, context):
        return visitor.visit_program(self, context)


@dataclass
class FunctionDefinition(Statement):
    """Function definition; decorators are kept as their source text"""
    name: str
    parameters: List[Parameter]
    body: List[BodyItem]
    return_type: Optional[str] = None
    decorators: Optional[List[str]] = None

    def __init__(self, name: str, parameters: List[Parameter], body: List[BodyItem],
                 return_type: Optional[str] = None, decorators: Optional[List[str]] = None,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.FUNCTION_DEFINITION, location)
        self.name = name
        self.parameters = parameters
        self.body = body
        self.return_type = return_type
        self.decorators = decorators or []

    def accept(self, visitor, context):
        return visitor.visit_function_definition(self, context)


@dataclass
class ClassDefinition(Statement):
    """Class definition; arguments are the base-class list when present"""
    name: str
    body: List[BodyItem]
    arguments: Optional[List[Expression]] = None
    decorators: Optional[List[str]] = None

    def __init__(self, name: str, body: List[BodyItem], arguments: Optional[List[Expression]] = None,
                 decorators: Optional[List[str]] = None, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.CLASS_DEFINITION, location)
        self.name = name
        self.body = body
        self.arguments = arguments
        self.decorators = decorators or []

    def accept(self, visitor, context):
        return visitor.visit_class_definition(self, context)


@dataclass
class Assignment(Statement):
    """
    Assignment `left <operator> right`.

    left is a reference, member expression, subscript, pattern list or tuple.
    type_name is set for annotated assignments (`x: int = 0`); right is None
    only for a bare annotation (`x: int`).
    """
    left: Expression
    right: Optional[Expression]
    operator: str = "="
    type_name: Optional[str] = None

    def __init__(self, left: Expression, right: Optional[Expression], operator: str = "=",
                 type_name: Optional[str] = None, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.ASSIGNMENT, location)
        self.left = left
        self.right = right
        self.operator = operator
        self.type_name = type_name

    def accept(self, visitor, context):
        return visitor.visit_assignment(self, context)


# =========================================================================
# REFERENCES AND PARAMETERS
# =========================================================================

@dataclass
class Reference(Expression):
    """Name reference; splat marks `*name` / `**name` parameters and arguments"""
    name: str
    splat: Optional[SplatKind] = None

    def __init__(self, name: str, splat: Optional[SplatKind] = None, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.REFERENCE, location)
        self.name = name
        self.splat = splat

    def __str__(self) -> str:
        return self.name

    def accept(self, visitor, context):
        return visitor.visit_reference(self, context)


@dataclass
class DefaultParameter(ASTNode):
    """Parameter with a default value: `name=default`"""
    name: str
    default: Expression

    def __init__(self, name: str, default: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.DEFAULT_PARAMETER, location)
        self.name = name
        self.default = default

    def accept(self, visitor, context):
        return visitor.visit_default_parameter(self, context)


@dataclass
class TypedParameter(ASTNode):
    """Parameter with a type annotation: `name: type` (possibly a splat)"""
    name: str
    type_name: str
    splat: Optional[SplatKind] = None

    def __init__(self, name: str, type_name: str, splat: Optional[SplatKind] = None,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.TYPED_PARAMETER, location)
        self.name = name
        self.type_name = type_name
        self.splat = splat

    def accept(self, visitor, context):
        return visitor.visit_typed_parameter(self, context)


@dataclass
class TypedDefaultParameter(ASTNode):
    """Parameter with both: `name: type = default`"""
    name: str
    type_name: str
    default: Expression

    def __init__(self, name: str, type_name: str, default: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.TYPED_DEFAULT_PARAMETER, location)
        self.name = name
        self.type_name = type_name
        self.default = default

    def accept(self, visitor, context):
        return visitor.visit_typed_default_parameter(self, context)


# =========================================================================
# CALLS AND ACCESS
# =========================================================================

@dataclass
class Call(Expression):
    """Call; arguments mix positional expressions, keyword arguments and splats"""
    callee: Expression
    arguments: List[Expression]

    def __init__(self, callee: Expression, arguments: List[Expression], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.CALL, location)
        self.callee = callee
        self.arguments = arguments

    def accept(self, visitor, context):
        return visitor.visit_call(self, context)


@dataclass
class KeywordArgument(Expression):
    """Keyword argument `name=value`, only valid inside a call"""
    name: str
    value: Expression

    def __init__(self, name: str, value: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.KEYWORD_ARGUMENT, location)
        self.name = name
        self.value = value

    def accept(self, visitor, context):
        return visitor.visit_keyword_argument(self, context)


@dataclass
class MemberExpression(Expression):
    """Attribute access, produced only by attribute-chain flattening"""
    object: Expression
    property: Expression

    def __init__(self, object: Expression, property: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.MEMBER_EXPRESSION, location)
        self.object = object
        self.property = property

    def accept(self, visitor, context):
        return visitor.visit_member_expression(self, context)


@dataclass
class Subscript(Expression):
    """Index access `value[index]`"""
    value: Expression
    index: Expression

    def __init__(self, value: Expression, index: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.SUBSCRIPT, location)
        self.value = value
        self.index = index

    def accept(self, visitor, context):
        return visitor.visit_subscript(self, context)


@dataclass
class Slice(Expression):
    """Slice `start:stop:step`, any part optional"""
    start: Optional[Expression] = None
    stop: Optional[Expression] = None
    step: Optional[Expression] = None

    def __init__(self, start: Optional[Expression] = None, stop: Optional[Expression] = None,
                 step: Optional[Expression] = None, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.SLICE, location)
        self.start = start
        self.stop = stop
        self.step = step

    def accept(self, visitor, context):
        return visitor.visit_slice(self, context)


# =========================================================================
# OPERATORS
# =========================================================================

@dataclass
class BinaryOperator(Expression):
    """Binary arithmetic, comparison or boolean connective"""
    left: Expression
    operator: BinaryOp
    right: Expression

    def __init__(self, left: Expression, operator: BinaryOp, right: Expression,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.BINARY_OPERATOR, location)
        self.left = left
        self.operator = operator
        self.right = right

    def accept(self, visitor, context):
        return visitor.visit_binary_operator(self, context)


@dataclass
class NotOperator(Expression):
    """Boolean negation `not expression`"""
    expression: Expression

    def __init__(self, expression: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.NOT_OPERATOR, location)
        self.expression = expression

    def accept(self, visitor, context):
        return visitor.visit_not_operator(self, context)


@dataclass
class UnaryOperator(Expression):
    """Prefix `+x`, `-x`, `~x`"""
    operator: UnaryOp
    operand: Expression

    def __init__(self, operator: UnaryOp, operand: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.UNARY_OPERATOR, location)
        self.operator = operator
        self.operand = operand

    def accept(self, visitor, context):
        return visitor.visit_unary_operator(self, context)


@dataclass
class ConditionalExpression(Expression):
    """`consequence if test else alternative`"""
    test: Expression
    consequence: Expression
    alternative: Expression

    def __init__(self, test: Expression, consequence: Expression, alternative: Expression,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.CONDITIONAL_EXPRESSION, location)
        self.test = test
        self.consequence = consequence
        self.alternative = alternative

    def accept(self, visitor, context):
        return visitor.visit_conditional_expression(self, context)


@dataclass
class ParenthesizedExpression(Expression):
    """Explicit source grouping; the only place grouping is emitted"""
    expression: Expression

    def __init__(self, expression: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.PARENTHESIZED_EXPRESSION, location)
        self.expression = expression

    def accept(self, visitor, context):
        return visitor.visit_parenthesized_expression(self, context)


@dataclass
class Lambda(Expression):
    """`lambda parameters: body`"""
    parameters: List[Parameter]
    body: Expression

    def __init__(self, parameters: List[Parameter], body: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.LAMBDA, location)
        self.parameters = parameters
        self.body = body

    def accept(self, visitor, context):
        return visitor.visit_lambda(self, context)


# =========================================================================
# CONTROL FLOW
# =========================================================================

@dataclass
class IfChoice:
    """One branch of an if statement; test is None for the else branch"""
    test: Optional[Expression]
    body: List[BodyItem]


@dataclass
class IfStatement(Statement):
    """
    if / elif / else as an ordered list of choices.

    The first true choice wins; only the trailing choice may omit its test.
    """
    choices: List[IfChoice]

    def __init__(self, choices: List[IfChoice], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.IF_STATEMENT, location)
        self.choices = choices

    def accept(self, visitor, context):
        return visitor.visit_if_statement(self, context)


@dataclass
class ForStatement(Statement):
    """for-each loop binding left against the right iterable"""
    left: Expression
    right: Expression
    body: List[BodyItem]

    def __init__(self, left: Expression, right: Expression, body: List[BodyItem],
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.FOR_STATEMENT, location)
        self.left = left
        self.right = right
        self.body = body

    def accept(self, visitor, context):
        return visitor.visit_for_statement(self, context)


@dataclass
class WhileStatement(Statement):
    test: Expression
    body: List[BodyItem]

    def __init__(self, test: Expression, body: List[BodyItem], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.WHILE_STATEMENT, location)
        self.test = test
        self.body = body

    def accept(self, visitor, context):
        return visitor.visit_while_statement(self, context)


@dataclass
class ReturnStatement(Statement):
    """`return` with an optional expression"""
    expression: Optional[Expression] = None

    def __init__(self, expression: Optional[Expression] = None, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.RETURN_STATEMENT, location)
        self.expression = expression

    def accept(self, visitor, context):
        return visitor.visit_return_statement(self, context)


@dataclass
class RaiseStatement(Statement):
    """`raise expression`; re-raise without an expression is not represented"""
    expression: Expression

    def __init__(self, expression: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.RAISE_STATEMENT, location)
        self.expression = expression

    def accept(self, visitor, context):
        return visitor.visit_raise_statement(self, context)


class PassStatement(Statement):
    __slots__ = ()

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.PASS_STATEMENT, location)

    def __eq__(self, other):
        return isinstance(other, PassStatement)

    def __repr__(self) -> str:
        return "PassStatement()"

    def accept(self, visitor, context):
        return visitor.visit_pass_statement(self, context)


class BreakStatement(Statement):
    __slots__ = ()

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.BREAK_STATEMENT, location)

    def __eq__(self, other):
        return isinstance(other, BreakStatement)

    def __repr__(self) -> str:
        return "BreakStatement()"

    def accept(self, visitor, context):
        return visitor.visit_break_statement(self, context)


class ContinueStatement(Statement):
    __slots__ = ()

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.CONTINUE_STATEMENT, location)

    def __eq__(self, other):
        return isinstance(other, ContinueStatement)

    def __repr__(self) -> str:
        return "ContinueStatement()"

    def accept(self, visitor, context):
        return visitor.visit_continue_statement(self, context)


# =========================================================================
# LITERALS
# =========================================================================

@dataclass
class StringLiteral(Expression):
    """String literal; value is the raw source text including quotes and prefix"""
    value: str

    def __init__(self, value: str, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.STRING, location)
        self.value = value

    def accept(self, visitor, context):
        return visitor.visit_string(self, context)


@dataclass
class IntegerLiteral(Expression):
    """Integer literal; raw source text"""
    value: str

    def __init__(self, value: str, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.INTEGER, location)
        self.value = value

    def accept(self, visitor, context):
        return visitor.visit_integer(self, context)


@dataclass
class FloatLiteral(Expression):
    """Float literal; raw source text"""
    value: str

    def __init__(self, value: str, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.FLOAT, location)
        self.value = value

    def accept(self, visitor, context):
        return visitor.visit_float(self, context)


@dataclass
class BooleanLiteral(Expression):
    value: bool

    def __init__(self, value: bool, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.BOOLEAN, location)
        self.value = value

    def accept(self, visitor, context):
        return visitor.visit_boolean(self, context)


class NullLiteral(Expression):
    """`None`"""
    __slots__ = ()

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.NULL, location)

    def __eq__(self, other):
        return isinstance(other, NullLiteral)

    def __repr__(self) -> str:
        return "NullLiteral()"

    def accept(self, visitor, context):
        return visitor.visit_null(self, context)


@dataclass
class Comment(Statement):
    """
    Triple-quoted string found in statement position.

    text is the raw literal (quotes included); the generator turns it into a
    doc comment.
    """
    text: str

    def __init__(self, text: str, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.COMMENT, location)
        self.text = text

    def accept(self, visitor, context):
        return visitor.visit_comment(self, context)


# =========================================================================
# COLLECTIONS
# =========================================================================

@dataclass
class ListLiteral(Expression):
    """List literal; None items are positional holes, never compacted"""
    items: List[Optional[Expression]]

    def __init__(self, items: List[Optional[Expression]], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.LIST, location)
        self.items = items

    def accept(self, visitor, context):
        return visitor.visit_list(self, context)


@dataclass
class TupleLiteral(Expression):
    """Tuple literal or tuple pattern; None items are positional holes"""
    items: List[Optional[Expression]]

    def __init__(self, items: List[Optional[Expression]], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.TUPLE, location)
        self.items = items

    def accept(self, visitor, context):
        return visitor.visit_tuple(self, context)


@dataclass
class Pair(ASTNode):
    """Dictionary entry `key: value`"""
    key: Expression
    value: Expression

    def __init__(self, key: Expression, value: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.PAIR, location)
        self.key = key
        self.value = value

    def accept(self, visitor, context):
        return visitor.visit_pair(self, context)


@dataclass
class Dictionary(Expression):
    """Dictionary literal; entries are pairs or `**splat` references"""
    entries: List[Union[Pair, Reference]]

    def __init__(self, entries: List[Union[Pair, Reference]], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.DICTIONARY, location)
        self.entries = entries

    def accept(self, visitor, context):
        return visitor.visit_dictionary(self, context)


@dataclass
class PatternList(Expression):
    """Unparenthesized unpacking target `a, b = ...`; None items are holes"""
    items: List[Optional[Expression]]

    def __init__(self, items: List[Optional[Expression]], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.PATTERN_LIST, location)
        self.items = items

    def accept(self, visitor, context):
        return visitor.visit_pattern_list(self, context)
