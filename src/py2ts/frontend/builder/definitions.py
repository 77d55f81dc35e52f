"""
Definition Builder - functions, classes, lambdas and their parameters
"""

from typing import TYPE_CHECKING, List, Optional, Union

from ...shared.nodes import (
    ClassDefinition, DefaultParameter, FunctionDefinition, Lambda, Parameter,
    Reference, TypedDefaultParameter, TypedParameter,
)
from ...shared.types import SplatKind
from .context import BuildContext, CSTNode, children_of, kind_of, text_of

if TYPE_CHECKING:
    from .base import ASTBuilder

FUNCTION_TOKENS = frozenset({"def", ":", "->"})
CLASS_TOKENS = frozenset({"class", ":"})
PARAMETER_TOKENS = frozenset({"(", ")", ","})
SPLAT_PATTERNS = {
    "list_splat_pattern": SplatKind.LIST,
    "dictionary_splat_pattern": SplatKind.DICTIONARY,
}


class DefinitionBuilder:
    """
    Dedicated builder for definitions.

    Parameters are split into their five shapes (plain, default, typed,
    typed-default, splat) exactly as written; reshaping them for the target
    language is the generator's job.
    """

    def __init__(self, builder: 'ASTBuilder') -> None:
        self.builder = builder
        self.location = builder.location

    def function_definition(self, node: CSTNode, ctx: BuildContext,
                            decorators: Optional[List[str]] = None) -> FunctionDefinition:
        inner = ctx.within(node, "function")
        name = ""
        parameters: List[Parameter] = []
        return_type: Optional[str] = None
        body = []
        for child in children_of(node):
            kind = kind_of(child)
            if kind in FUNCTION_TOKENS:
                continue
            if kind == "identifier":
                name = text_of(child)
            elif kind == "parameters":
                parameters = self.parameters(child, inner)
            elif kind == "type":
                return_type = text_of(child)
            elif kind == "block":
                body = self.builder.block(child, inner)
            else:
                # async, type parameters
                raise self.builder.unsupported(child, inner)
        return FunctionDefinition(
            name=name,
            parameters=parameters,
            body=body,
            return_type=return_type,
            decorators=decorators,
            location=self.location(node),
        )

    def class_definition(self, node: CSTNode, ctx: BuildContext,
                         decorators: Optional[List[str]] = None) -> ClassDefinition:
        inner = ctx.within(node, "class")
        name = ""
        arguments = None
        body = []
        for child in children_of(node):
            kind = kind_of(child)
            if kind in CLASS_TOKENS:
                continue
            if kind == "identifier":
                name = text_of(child)
            elif kind == "argument_list":
                arguments = self.builder.expressions.arguments(child, inner)
            elif kind == "block":
                body = self.builder.block(child, inner)
            else:
                raise self.builder.unsupported(child, inner)
        return ClassDefinition(
            name=name,
            body=body,
            arguments=arguments,
            decorators=decorators,
            location=self.location(node),
        )

    def decorated_definition(self, node: CSTNode, ctx: BuildContext) -> Union[FunctionDefinition, ClassDefinition]:
        """Decorators are carried as source text on the definition they wrap."""
        decorators: List[str] = []
        for child in children_of(node):
            kind = kind_of(child)
            if kind == "decorator":
                decorators.append(text_of(child).strip())
            elif kind == "function_definition":
                return self.function_definition(child, ctx, decorators)
            elif kind == "class_definition":
                return self.class_definition(child, ctx, decorators)
            else:
                raise self.builder.unsupported(child, ctx.within(node))
        raise self.builder.unsupported(node, ctx)

    def lambda_expression(self, node: CSTNode, ctx: BuildContext) -> Lambda:
        inner = ctx.within(node)
        parameters: List[Parameter] = []
        body = None
        for child in children_of(node):
            kind = kind_of(child)
            if kind in ("lambda", ":"):
                continue
            if kind == "lambda_parameters":
                parameters = self.parameters(child, inner)
            elif body is None:
                body = self.builder.expression(child, inner)
            else:
                raise self.builder.unsupported(child, inner)
        if body is None:
            raise self.builder.unsupported(node, ctx)
        return Lambda(parameters, body, location=self.location(node))

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def parameters(self, node: CSTNode, ctx: BuildContext) -> List[Parameter]:
        inner = ctx.within(node, "parameters")
        result: List[Parameter] = []
        for child in children_of(node):
            if kind_of(child) in PARAMETER_TOKENS:
                continue
            parameter = self.builder.parameter(child, inner)
            if parameter is not None:
                result.append(parameter)
        return result

    def _name(self, node: CSTNode, ctx: BuildContext) -> str:
        if kind_of(node) != "identifier":
            raise self.builder.unsupported(node, ctx)
        return text_of(node)

    def default_parameter(self, node: CSTNode, ctx: BuildContext) -> DefaultParameter:
        """`name=default`"""
        inner = ctx.within(node)
        parts = [child for child in children_of(node) if kind_of(child) != "="]
        if len(parts) != 2:
            raise self.builder.unsupported(node, ctx)
        default = self.builder.expression(parts[1], inner)
        return DefaultParameter(self._name(parts[0], inner), default, location=self.location(node))

    def typed_parameter(self, node: CSTNode, ctx: BuildContext) -> TypedParameter:
        """`name: type`, `*args: type`, `**kwargs: type`"""
        inner = ctx.within(node)
        parts = [child for child in children_of(node) if kind_of(child) != ":"]
        if len(parts) != 2 or kind_of(parts[1]) != "type":
            raise self.builder.unsupported(node, ctx)
        target, type_node = parts
        splat = None
        if kind_of(target) in SPLAT_PATTERNS:
            splat_ref = self.splat_pattern(target, inner)
            name, splat = splat_ref.name, splat_ref.splat
        else:
            name = self._name(target, inner)
        return TypedParameter(name, text_of(type_node), splat, location=self.location(node))

    def typed_default_parameter(self, node: CSTNode, ctx: BuildContext) -> TypedDefaultParameter:
        """`name: type = default`"""
        inner = ctx.within(node)
        parts = [child for child in children_of(node) if kind_of(child) not in (":", "=")]
        if len(parts) != 3 or kind_of(parts[1]) != "type":
            raise self.builder.unsupported(node, ctx)
        default = self.builder.expression(parts[2], inner)
        return TypedDefaultParameter(
            self._name(parts[0], inner), text_of(parts[1]), default, location=self.location(node)
        )

    def splat_pattern(self, node: CSTNode, ctx: BuildContext) -> Reference:
        """`*args` / `**kwargs`; splat references never carry a default."""
        inner = ctx.within(node)
        names = [child for child in children_of(node) if kind_of(child) not in ("*", "**")]
        if len(names) != 1:
            raise self.builder.unsupported(node, ctx)
        return Reference(self._name(names[0], inner), SPLAT_PATTERNS[kind_of(node)], location=self.location(node))
