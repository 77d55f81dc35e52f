"""
TypeScript Code Generator

Emits TypeScript text blocks from the intermediate AST, one block per
top-level statement in source order. Along the way it:

- converts identifiers to camelCase and type names to PascalCase
- hoists assigned names to `let` declarations at the top of their function
- reshapes defaulted parameters into one destructured options object, with a
  synthesized options type alias when any of them is typed
- emits `raise` as `throw new`, and statement-position triple-quoted strings
  as doc comments

Expressions are emitted as written: there is no precedence analysis, and
grouping parentheses appear only where the source had them.
"""

import inspect
import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from ..shared.ast_visitor import ASTVisitor
from ..shared.errors import UnsupportedConstruct
from ..shared.naming import to_camel, to_pascal, type_name
from ..shared.nodes import (
    ASTNode, Assignment, BodyItem, Call, ClassDefinition, Comment, DefaultParameter,
    Dictionary, FunctionDefinition, IntegerLiteral, KeywordArgument, MemberExpression,
    Parameter, PassStatement, Program, Reference, Slice, StringLiteral,
    TypedDefaultParameter, TypedParameter,
)
from ..shared.types import BinaryOp, SplatKind, string_prefix
from ..utils.base import Outcome
from ..utils.config import BLOCK_SEPARATOR, CONSTRUCTOR_NAME, OPTIONS_ALIAS_SUFFIX
from .context import LITERAL_NEWLINE, Fragment, GenContext, Initialized, assemble, indent
from .formatter import Formatter, format_blocks

logger = logging.getLogger(__name__)

STATIC_DECORATORS = ("@staticmethod", "@classmethod")

# Statement lines starting with these would continue the previous line
# in semicolon-free output
_ASI_HAZARDS = ("[", "(")


def _unsupported(node: ASTNode, context_kind: str) -> UnsupportedConstruct:
    return UnsupportedConstruct(node.node_type.value, context_kind, node.location)


def _is_super_call(node: ASTNode) -> bool:
    """`super()` with no arguments"""
    return (isinstance(node, Call) and isinstance(node.callee, Reference)
            and node.callee.name == "super" and not node.arguments)


def _triple_quoted_body(text: str) -> str:
    body = text[len(string_prefix(text)):]
    return body[3:-3]


def _template_literal(text: str) -> str:
    """Triple-quoted string -> template literal; raw strings keep their backslashes literal."""
    body = _triple_quoted_body(text)
    if "r" in string_prefix(text).lower():
        body = body.replace("\\", "\\\\")
    body = body.replace("`", "\\`").replace("${", "\\${")
    return "`" + body.replace("\n", LITERAL_NEWLINE) + "`"


def _declared_names(items: Sequence[BodyItem]) -> List[str]:
    """Names bound by `function`/`class` declarations, which must not also get a `let`."""
    names: List[str] = []
    for item in items:
        if isinstance(item, FunctionDefinition):
            names.append(to_camel(item.name))
        elif isinstance(item, ClassDefinition):
            names.append(to_pascal(item.name))
    return names


def _statement_lines(text: str) -> List[str]:
    if text.startswith(_ASI_HAZARDS):
        text = ";" + text
    return text.split("\n")


class TypeScriptGenerator(ASTVisitor[Any]):
    """
    AST -> TypeScript blocks.

    Statement visits return a Fragment (lines plus pending prologue blocks);
    expression visits return their text. The generator never mutates the AST.
    """

    def generate(self, program: Program) -> List[str]:
        """Unformatted blocks; raises UnsupportedConstruct."""
        blocks = program.accept(self, GenContext())
        logger.debug("generated %d blocks", len(blocks))
        return blocks

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _expression(self, node: ASTNode, context: GenContext) -> str:
        return node.accept(self, context)

    def _statement(self, node: BodyItem, context: GenContext) -> Fragment:
        result = node.accept(self, context)
        if isinstance(result, Fragment):
            return result
        # bare expression in statement position
        return Fragment(_statement_lines(result))

    def _body(self, items: Sequence[BodyItem], context: GenContext) -> Fragment:
        fragment = Fragment()
        for item in items:
            fragment.extend(self._statement(item, context))
        return fragment

    def _declarations(self, initialized: Initialized, exclude: Iterable[str] = ()) -> List[str]:
        """`let` lines for every hoisted name, in first-assignment order."""
        skip = set(exclude)
        return [
            f"let {name}: {ts_type}" if ts_type else f"let {name}"
            for name, ts_type in initialized.items()
            if name not in skip
        ]

    def _items(self, items: Sequence[Optional[ASTNode]], context: GenContext) -> str:
        # holes stay holes: `[, a]`
        return ", ".join("" if item is None else self._expression(item, context) for item in items)

    # ------------------------------------------------------------------
    # Program structure
    # ------------------------------------------------------------------

    def visit_program(self, node: Program, context: GenContext) -> List[str]:
        initialized: Initialized = {}
        module = GenContext(scope="module", initialized=initialized)
        blocks: List[str] = []
        for item in node.body:
            fragment = self._statement(item, module)
            blocks.extend(assemble([block]) for block in fragment.prologue)
            if fragment.lines:
                blocks.append(assemble(fragment.lines))
        declarations = self._declarations(initialized, _declared_names(node.body))
        if declarations:
            blocks.insert(0, "\n".join(declarations))
        return blocks

    def visit_function_definition(self, node: FunctionDefinition, context: GenContext) -> Fragment:
        in_class = context.scope == "class"
        static = in_class and any(d.startswith(STATIC_DECORATORS) for d in node.decorators)
        constructor = in_class and node.name == CONSTRUCTOR_NAME

        parameters = list(node.parameters)
        receiver = context.receiver
        if in_class:
            receiver = None
            if parameters and not any(d.startswith("@staticmethod") for d in node.decorators):
                first = parameters[0]
                if isinstance(first, (Reference, TypedParameter)) and first.splat is None:
                    receiver = first.name
                    parameters = parameters[1:]

        alias_name = self._alias_name(node.name, context.class_name if in_class else None, constructor)
        params, alias = self._parameters(parameters, context.reading(), alias_name)

        initialized: Initialized = {}
        inner = context.enter_function(initialized, receiver)
        body = self._body(node.body, inner)
        bound = [to_camel(p.name) for p in parameters] + _declared_names(node.body)
        declarations = self._declarations(initialized, bound)

        signature = f"({', '.join(params)})"
        returns = f": {type_name(node.return_type)}" if node.return_type and not constructor else ""
        if constructor:
            header = f"constructor{signature} {{"
        elif in_class:
            header = f"{'static ' if static else ''}{to_camel(node.name, reserved=False)}{signature}{returns} {{"
        else:
            header = f"function {to_camel(node.name)}{signature}{returns} {{"

        lines = [f"// {decorator}" for decorator in node.decorators]
        lines.append(header)
        lines.extend(indent(declarations + body.lines))
        lines.append("}")
        prologue = ([alias] if alias else []) + body.prologue
        return Fragment(lines, prologue)

    def _alias_name(self, name: str, class_name: Optional[str], constructor: bool) -> str:
        if class_name is None:
            return to_pascal(name) + OPTIONS_ALIAS_SUFFIX
        if constructor:
            return to_pascal(class_name) + OPTIONS_ALIAS_SUFFIX
        return to_pascal(class_name) + to_pascal(name) + OPTIONS_ALIAS_SUFFIX

    def _parameters(self, parameters: Sequence[Parameter], context: GenContext,
                    alias_name: Optional[str]) -> Tuple[List[str], Optional[str]]:
        """
        Reshape parameters for TypeScript.

        Plain and typed parameters stay positional. Defaulted parameters (and a
        `**kwargs` tail) are bundled into one destructured options object that
        defaults to `{}`. If any defaulted parameter is typed, an options type
        alias is returned alongside: untyped members become `any`, and
        `**kwargs` adds an index signature. `*args` becomes a trailing rest
        parameter.
        """
        positional: List[str] = []
        bundled: List[str] = []
        members: List[str] = []
        rest: List[str] = []
        kwargs: Optional[Parameter] = None
        typed = False

        for parameter in parameters:
            text = parameter.accept(self, context)
            splat = getattr(parameter, "splat", None)
            if splat is SplatKind.LIST:
                rest.append(text)
            elif splat is SplatKind.DICTIONARY:
                kwargs = parameter
            elif isinstance(parameter, (DefaultParameter, TypedDefaultParameter)):
                key = to_camel(parameter.name, reserved=False)
                if key != to_camel(parameter.name):
                    # reserved word: bind the option under a safe local name
                    text = f"{key}: {text}"
                bundled.append(text)
                if isinstance(parameter, TypedDefaultParameter):
                    typed = True
                    members.append(f"{key}?: {type_name(parameter.type_name)}")
                else:
                    members.append(f"{key}?: any")
            elif isinstance(parameter, (Reference, TypedParameter)):
                positional.append(text)
            else:
                raise _unsupported(parameter, "parameters")

        params = positional
        alias = None
        if bundled or kwargs is not None:
            entries = bundled + ([f"...{to_camel(kwargs.name)}"] if kwargs is not None else [])
            pattern = "{ " + ", ".join(entries) + " }"
            if typed and alias_name:
                if kwargs is not None:
                    value_type = type_name(kwargs.type_name) if isinstance(kwargs, TypedParameter) else "any"
                    members.append(f"[key: string]: {value_type}")
                alias = f"type {alias_name} = {{ {', '.join(members)} }}"
                pattern += f": {alias_name}"
            params = params + [pattern + " = {}"]
        return params + rest, alias

    def visit_class_definition(self, node: ClassDefinition, context: GenContext) -> Fragment:
        header = f"class {to_pascal(node.name)}"
        bases = []
        for base in node.arguments or []:
            if isinstance(base, KeywordArgument) or (isinstance(base, Reference) and base.splat):
                raise _unsupported(base, "class_definition")
            if isinstance(base, Reference) and base.name == "object":
                continue
            bases.append(base)
        if len(bases) > 1:
            raise _unsupported(bases[1], "class_definition")
        if bases:
            header += f" extends {self._expression(bases[0], context.reading())}"

        inner = context.enter_class(node.name)
        members = Fragment()
        for item in node.body:
            if not isinstance(item, (FunctionDefinition, Assignment, Comment, PassStatement)):
                raise _unsupported(item, "class_definition")
            members.extend(self._statement(item, inner))

        lines = [f"// {decorator}" for decorator in node.decorators]
        lines.append(header + " {")
        lines.extend(indent(members.lines))
        lines.append("}")
        return Fragment(lines, members.prologue)

    def visit_assignment(self, node: Assignment, context: GenContext) -> Fragment:
        if context.scope == "class":
            return self._field(node, context)

        annotated = type_name(node.type_name) if node.type_name else None
        if isinstance(node.left, Reference) and annotated:
            context.record(to_camel(node.left.name), annotated)
        if node.right is None:
            # `x: int` only declares
            return Fragment()
        left = self._expression(node.left, context.assigning())
        right = self._expression(node.right, context.reading())
        return Fragment(_statement_lines(f"{left} {node.operator} {right}"))

    def _field(self, node: Assignment, context: GenContext) -> Fragment:
        """Class-level assignment: a field declaration, never hoisted."""
        if not isinstance(node.left, Reference) or node.operator != "=":
            raise _unsupported(node.left, "class_definition")
        text = to_camel(node.left.name, reserved=False)
        if node.type_name:
            text += f": {type_name(node.type_name)}"
        if node.right is not None:
            text += f" = {self._expression(node.right, context.reading())}"
        return Fragment(text.split("\n"))

    # ------------------------------------------------------------------
    # References and parameters
    # ------------------------------------------------------------------

    def visit_reference(self, node: Reference, context: GenContext) -> str:
        if node.splat is not None:
            return f"...{to_camel(node.name)}"
        if context.receiver is not None and node.name == context.receiver:
            return "this"
        name = to_camel(node.name)
        if context.target:
            context.record(name)
        return name

    def visit_default_parameter(self, node: DefaultParameter, context: GenContext) -> str:
        return f"{to_camel(node.name)} = {self._expression(node.default, context)}"

    def visit_typed_parameter(self, node: TypedParameter, context: GenContext) -> str:
        name = to_camel(node.name)
        if node.splat is SplatKind.LIST:
            return f"...{name}: Array<{type_name(node.type_name)}>"
        if node.splat is SplatKind.DICTIONARY:
            return f"...{name}"
        return f"{name}: {type_name(node.type_name)}"

    def visit_typed_default_parameter(self, node: TypedDefaultParameter, context: GenContext) -> str:
        return f"{to_camel(node.name)} = {self._expression(node.default, context)}"

    # ------------------------------------------------------------------
    # Calls and access
    # ------------------------------------------------------------------

    def visit_call(self, node: Call, context: GenContext) -> str:
        inner = context.reading()
        callee = node.callee
        if (isinstance(callee, MemberExpression) and _is_super_call(callee.object)
                and isinstance(callee.property, Reference) and callee.property.name == CONSTRUCTOR_NAME):
            callee_text = "super"
        else:
            callee_text = self._expression(callee, inner)

        positional: List[str] = []
        named: List[str] = []
        for argument in node.arguments:
            text = self._expression(argument, inner)
            if isinstance(argument, KeywordArgument) or (
                    isinstance(argument, Reference) and argument.splat is SplatKind.DICTIONARY):
                named.append(text)
            else:
                positional.append(text)
        if named:
            positional.append("{ " + ", ".join(named) + " }")
        return f"{callee_text}({', '.join(positional)})"

    def visit_keyword_argument(self, node: KeywordArgument, context: GenContext) -> str:
        return f"{to_camel(node.name, reserved=False)}: {self._expression(node.value, context)}"

    def visit_member_expression(self, node: MemberExpression, context: GenContext) -> str:
        inner = context.reading()
        obj = "super" if _is_super_call(node.object) else self._expression(node.object, inner)
        prop = node.property
        prop_text = to_camel(prop.name, reserved=False) if isinstance(prop, Reference) else self._expression(prop, inner)
        return f"{obj}.{prop_text}"

    def visit_subscript(self, node, context: GenContext) -> str:
        inner = context.reading()
        value = self._expression(node.value, inner)
        index = node.index
        if isinstance(index, Slice):
            if index.step is not None or context.target:
                raise _unsupported(index, "subscript")
            start = self._expression(index.start, inner) if index.start is not None else None
            stop = self._expression(index.stop, inner) if index.stop is not None else None
            if stop is not None and start is None:
                start = "0"
            bounds = [bound for bound in (start, stop) if bound is not None]
            return f"{value}.slice({', '.join(bounds)})"
        return f"{value}[{self._expression(index, inner)}]"

    def visit_slice(self, node: Slice, context: GenContext) -> str:
        # slices only exist as subscript indices, handled there
        raise _unsupported(node, "expression")

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def visit_binary_operator(self, node, context: GenContext) -> str:
        inner = context.reading()
        left = self._expression(node.left, inner)
        right = self._expression(node.right, inner)
        if node.operator is BinaryOp.FLOOR_DIV:
            return f"Math.floor({left} / {right})"
        return f"{left} {node.operator.value} {right}"

    def visit_not_operator(self, node, context: GenContext) -> str:
        return f"!{self._expression(node.expression, context.reading())}"

    def visit_unary_operator(self, node, context: GenContext) -> str:
        return f"{node.operator.value}{self._expression(node.operand, context.reading())}"

    def visit_conditional_expression(self, node, context: GenContext) -> str:
        inner = context.reading()
        test = self._expression(node.test, inner)
        consequence = self._expression(node.consequence, inner)
        alternative = self._expression(node.alternative, inner)
        return f"{test} ? {consequence} : {alternative}"

    def visit_parenthesized_expression(self, node, context: GenContext) -> str:
        return f"({self._expression(node.expression, context.reading())})"

    def visit_lambda(self, node, context: GenContext) -> str:
        params, _ = self._parameters(node.parameters, context.reading(), None)
        body = self._expression(node.body, context.reading())
        if body.startswith("{"):
            # an object literal body would parse as a block
            body = f"({body})"
        return f"({', '.join(params)}) => {body}"

    # ------------------------------------------------------------------
    # Control flow
    # ------------------------------------------------------------------

    def visit_if_statement(self, node, context: GenContext) -> Fragment:
        fragment = Fragment()
        for i, choice in enumerate(node.choices):
            if choice.test is None and (i == 0 or i != len(node.choices) - 1):
                raise _unsupported(node, "if_statement")
            if i == 0:
                opener = f"if ({self._expression(choice.test, context.reading())}) {{"
            elif choice.test is not None:
                opener = f"}} else if ({self._expression(choice.test, context.reading())}) {{"
            else:
                opener = "} else {"
            body = self._body(choice.body, context)
            fragment.lines.append(opener)
            fragment.lines.extend(indent(body.lines))
            fragment.prologue.extend(body.prologue)
        fragment.lines.append("}")
        return fragment

    def visit_for_statement(self, node, context: GenContext) -> Fragment:
        left = self._expression(node.left, context.assigning())
        right = self._expression(node.right, context.reading())
        body = self._body(node.body, context)
        lines = [f"for ({left} of {right}) {{"] + indent(body.lines) + ["}"]
        return Fragment(lines, body.prologue)

    def visit_while_statement(self, node, context: GenContext) -> Fragment:
        test = self._expression(node.test, context.reading())
        body = self._body(node.body, context)
        lines = [f"while ({test}) {{"] + indent(body.lines) + ["}"]
        return Fragment(lines, body.prologue)

    def visit_return_statement(self, node, context: GenContext) -> Fragment:
        if node.expression is None:
            return Fragment(["return"])
        value = self._expression(node.expression, context.reading()).split("\n")
        if len(value) == 1:
            return Fragment([f"return {value[0]}"])
        return Fragment(["return ("] + indent(value) + [")"])

    def visit_raise_statement(self, node, context: GenContext) -> Fragment:
        expression = node.expression
        text = self._expression(expression, context.reading())
        if isinstance(expression, Call):
            return Fragment(f"throw new {text}".split("\n"))
        if isinstance(expression, (Reference, MemberExpression)):
            return Fragment([f"throw new {text}()"])
        raise _unsupported(expression, "raise_statement")

    def visit_pass_statement(self, node, context: GenContext) -> Fragment:
        return Fragment()

    def visit_break_statement(self, node, context: GenContext) -> Fragment:
        return Fragment(["break"])

    def visit_continue_statement(self, node, context: GenContext) -> Fragment:
        return Fragment(["continue"])

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def visit_string(self, node: StringLiteral, context: GenContext) -> str:
        text = node.value
        prefix = string_prefix(text)
        body = text[len(prefix):]
        if body.startswith(("\"\"\"", "'''")):
            return _template_literal(text)
        if "r" in prefix.lower():
            body = body[0] + body[1:-1].replace("\\", "\\\\") + body[-1]
        return body

    def visit_integer(self, node: IntegerLiteral, context: GenContext) -> str:
        return node.value

    def visit_float(self, node, context: GenContext) -> str:
        return node.value

    def visit_boolean(self, node, context: GenContext) -> str:
        return "true" if node.value else "false"

    def visit_null(self, node, context: GenContext) -> str:
        return "null"

    def visit_comment(self, node: Comment, context: GenContext) -> Fragment:
        """Docstring -> `/** ... */`"""
        text = inspect.cleandoc(_triple_quoted_body(node.text)).replace("*/", "*\\/")
        lines = [f" * {line}".rstrip() for line in text.split("\n")]
        return Fragment(["/**"] + lines + [" */"])

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def visit_list(self, node, context: GenContext) -> str:
        return f"[{self._items(node.items, context)}]"

    def visit_tuple(self, node, context: GenContext) -> str:
        return f"[{self._items(node.items, context)}]"

    def visit_pattern_list(self, node, context: GenContext) -> str:
        return f"[{self._items(node.items, context)}]"

    def visit_dictionary(self, node: Dictionary, context: GenContext) -> str:
        if not node.entries:
            return "{}"
        inner = context.reading()
        entries = [f"{self._expression(entry, inner)}," for entry in node.entries]
        return "\n".join(["{"] + indent(entries) + ["}"])

    def visit_pair(self, node, context: GenContext) -> str:
        key = node.key
        if isinstance(key, (StringLiteral, IntegerLiteral)):
            key_text = self._expression(key, context)
        else:
            # computed key
            key_text = f"[{self._expression(key, context)}]"
        return f"{key_text}: {self._expression(node.value, context)}"


def generate(program: Program, formatter: Optional[Formatter] = None) -> Outcome[List[str]]:
    """
    Generate TypeScript blocks, optionally formatting each one.

    Generation is all-or-nothing: an UnsupportedConstruct comes back as the
    error of the Outcome. Formatting never fails the Outcome.
    """
    try:
        blocks = TypeScriptGenerator().generate(program)
    except UnsupportedConstruct as e:
        logger.debug("generate failed: %s", e)
        return Outcome.err(e)
    if formatter is not None:
        blocks = format_blocks(blocks, formatter)
    return Outcome.ok(blocks)


def join_blocks(blocks: Sequence[str]) -> str:
    """Blocks separated by one blank line, ending with a newline."""
    return BLOCK_SEPARATOR.join(block.strip("\n") for block in blocks) + "\n"
