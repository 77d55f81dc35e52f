"""
Shared components: AST vocabulary, operators, naming, errors.
"""

from .source_location import SourceLocation
from .errors import Py2TsError, UnsupportedConstruct, ParseError, FormatterError, format_diagnostic
from .types import BinaryOp, UnaryOp, SplatKind, binary_op, unary_op
from .nodes import (
    ASTNode, Expression, Statement, NodeType, Program,
    FunctionDefinition, ClassDefinition, Assignment,
    Reference, DefaultParameter, TypedParameter, TypedDefaultParameter,
    Call, KeywordArgument, MemberExpression, Subscript, Slice,
    BinaryOperator, NotOperator, UnaryOperator, ConditionalExpression,
    ParenthesizedExpression, Lambda,
    IfChoice, IfStatement, ForStatement, WhileStatement,
    ReturnStatement, RaiseStatement, PassStatement, BreakStatement, ContinueStatement,
    StringLiteral, IntegerLiteral, FloatLiteral, BooleanLiteral, NullLiteral, Comment,
    ListLiteral, TupleLiteral, Dictionary, Pair, PatternList,
)
from .naming import to_camel, to_pascal, type_name
from .ast_visitor import ASTVisitor
