"""
AST Visitor Pattern

Design:
- Abstract base class with one visit_* method per AST node kind
- Every method is abstract: a visitor that misses a kind fails at
  instantiation, not halfway through a conversion
- A context value is threaded through every call; visitors decide what it is
  (the TypeScript generator passes an immutable GenContext)
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

T = TypeVar('T')


class ASTVisitor(ABC, Generic[T]):
    """
    Abstract visitor for the py2ts AST.

    Usage:
        class MyPass(ASTVisitor[str]):
            def visit_program(self, node, context) -> str:
                return "\\n".join(item.accept(self, context) for item in node.body)
            ...

        result = program.accept(MyPass(), None)
    """

    # Program structure

    @abstractmethod
    def visit_program(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_function_definition(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_class_definition(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_assignment(self, node, context: Any) -> T:
        pass

    # References and parameters

    @abstractmethod
    def visit_reference(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_default_parameter(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_typed_parameter(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_typed_default_parameter(self, node, context: Any) -> T:
        pass

    # Calls and access

    @abstractmethod
    def visit_call(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_keyword_argument(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_member_expression(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_subscript(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_slice(self, node, context: Any) -> T:
        pass

    # Operators

    @abstractmethod
    def visit_binary_operator(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_not_operator(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_unary_operator(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_conditional_expression(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_parenthesized_expression(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_lambda(self, node, context: Any) -> T:
        pass

    # Control flow

    @abstractmethod
    def visit_if_statement(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_for_statement(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_while_statement(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_return_statement(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_raise_statement(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_pass_statement(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_break_statement(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_continue_statement(self, node, context: Any) -> T:
        pass

    # Literals

    @abstractmethod
    def visit_string(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_integer(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_float(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_boolean(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_null(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_comment(self, node, context: Any) -> T:
        pass

    # Collections

    @abstractmethod
    def visit_list(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_tuple(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_dictionary(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_pair(self, node, context: Any) -> T:
        pass

    @abstractmethod
    def visit_pattern_list(self, node, context: Any) -> T:
        pass
