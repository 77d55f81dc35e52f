"""
AST Serialization to S-Expressions
==================================

Renders the intermediate AST as an S-expression for `--dump-ast` and for
structural assertions in tests. Node kinds and field keywords are symbols;
names and raw literal text are quoted strings; sparse holes print as `nil`.

Uses structured sexpr (nested lists + sexpdata.Symbol), then pretty-prints
for readable output.
"""

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

import sexpdata

from .nodes import ASTNode, IfChoice

_NIL = sexpdata.Symbol("nil")


def _pretty_dumps(sexpr: Any, indent: int = 0, indent_str: str = "  ", max_line: int = 80) -> str:
    """
    Pretty-print structured sexpr. Keeps short forms on one line; breaks only when needed.
    """
    if isinstance(sexpr, bool):
        return "true" if sexpr else "false"
    if isinstance(sexpr, (int, float)):
        return str(sexpr)
    # Check Symbol before str (sexpdata.Symbol subclasses str)
    if isinstance(sexpr, sexpdata.Symbol):
        return sexpr.value()
    if isinstance(sexpr, str):
        escaped = sexpr.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(sexpr, list):
        if not sexpr:
            return "()"
        parts = [_pretty_dumps(e, indent + 1, indent_str, max_line) for e in sexpr]
        one_line = "(" + " ".join(parts) + ")"
        if len(one_line) + len(indent_str) * indent <= max_line and "\n" not in one_line:
            return one_line
        prefix = indent_str * indent
        next_prefix = indent_str * (indent + 1)
        rest = "\n".join(next_prefix + p for p in parts[1:])
        inner = parts[0] + ("\n" + rest if rest else "")
        return f"({inner}\n{prefix})"
    return str(sexpr)


class ASTSerializer:
    """
    AST to structured S-expression serializer.

    Fields are emitted in declaration order as `(:field value)` pairs; empty
    optional fields are omitted so dumps stay short.
    """

    def __init__(self, include_location: bool = False):
        self.include_location = include_location

    def _sym(self, s: str) -> sexpdata.Symbol:
        return sexpdata.Symbol(s)

    def serialize(self, value: Any) -> Any:
        if value is None:
            return _NIL
        if isinstance(value, Enum):
            return self._sym(value.value)
        if isinstance(value, IfChoice):
            test = self._sym("else") if value.test is None else self.serialize(value.test)
            return [self._sym("choice"), test, [self.serialize(item) for item in value.body]]
        if isinstance(value, ASTNode):
            return self._serialize_node(value)
        if isinstance(value, list):
            return [self.serialize(item) for item in value]
        return value

    def _serialize_node(self, node: ASTNode) -> list:
        sexpr: list = [self._sym(node.node_type.value)]
        if is_dataclass(node):
            for f in fields(node):
                value = getattr(node, f.name)
                if value is None or (f.name == "decorators" and not value):
                    continue
                sexpr.append([self._sym(":" + f.name), self.serialize(value)])
        if self.include_location and node.location is not None:
            sexpr.append([self._sym(":at"), str(node.location)])
        return sexpr


def serialize_ast(node: ASTNode, include_location: bool = False, pretty: bool = True) -> str:
    """
    Serialize an AST node to an S-expression string.

    Args:
        node: AST node to serialize
        include_location: Append `(:at file:line:column)` to located nodes
        pretty: Use pretty-printed format (default True). Set False for compact single-line.
    """
    sexpr = ASTSerializer(include_location=include_location).serialize(node)
    if pretty:
        return _pretty_dumps(sexpr)
    return sexpdata.dumps(sexpr)
