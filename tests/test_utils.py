"""
Test utilities for the py2ts test suite.

Hand-built concrete syntax trees in the shape the tree-sitter Python grammar
produces, so the builder can be exercised without the grammar installed.
"""

import sys
from pathlib import Path
from typing import List, Optional

from lark import Token, Tree

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from py2ts.backend.typescript import TypeScriptGenerator
from py2ts.frontend.builder import ASTBuilder
from py2ts.shared.nodes import Program


def tok(kind: str, text: Optional[str] = None, line: Optional[int] = None, column: int = 1) -> Token:
    """Leaf; punctuation and keywords use their kind as text."""
    text = kind if text is None else text
    if line is None:
        return Token(kind, text)
    return Token(kind, text, line=line, column=column, end_line=line, end_column=column + len(text))


def tree(kind: str, *children) -> Tree:
    return Tree(kind, list(children))


def ident(name: str) -> Token:
    return tok("identifier", name)


def integer(text: str) -> Token:
    return tok("integer", text)


def string(text: str) -> Token:
    return tok("string", text)


def separated(items: List, open_: str, close: str) -> List:
    """`( a , b )` token sequence"""
    result = [tok(open_)]
    for i, item in enumerate(items):
        if i:
            result.append(tok(","))
        result.append(item)
    result.append(tok(close))
    return result


def module(*statements) -> Tree:
    return tree("module", *statements)


def block(*statements) -> Tree:
    return tree("block", *statements)


def statement(expression) -> Tree:
    return tree("expression_statement", expression)


def assign(left, right, operator: str = "=") -> Tree:
    kind = "assignment" if operator == "=" else "augmented_assignment"
    return statement(tree(kind, left, tok(operator), right))


def annotated(left, type_text: str, right=None) -> Tree:
    children = [left, tok(":"), tok("type", type_text)]
    if right is not None:
        children += [tok("="), right]
    return statement(tree("assignment", *children))


def binary(left, operator: str, right, kind: str = "binary_operator") -> Tree:
    return tree(kind, left, tok(operator), right)


def call(callee, *arguments) -> Tree:
    return tree("call", callee, tree("argument_list", *separated(list(arguments), "(", ")")))


def attribute(obj, name: str) -> Tree:
    return tree("attribute", obj, tok("."), ident(name))


def keyword(name: str, value) -> Tree:
    return tree("keyword_argument", ident(name), tok("="), value)


def default_parameter(name: str, value) -> Tree:
    return tree("default_parameter", ident(name), tok("="), value)


def typed_parameter(name: str, type_text: str) -> Tree:
    return tree("typed_parameter", ident(name), tok(":"), tok("type", type_text))


def typed_default_parameter(name: str, type_text: str, value) -> Tree:
    return tree("typed_default_parameter", ident(name), tok(":"), tok("type", type_text), tok("="), value)


def function(name: str, parameters: List, *body, returns: Optional[str] = None) -> Tree:
    children = [tok("def"), ident(name), tree("parameters", *separated(parameters, "(", ")"))]
    if returns is not None:
        children += [tok("->"), tok("type", returns)]
    children += [tok(":"), block(*body)]
    return tree("function_definition", *children)


def klass(name: str, *body, bases: Optional[List] = None) -> Tree:
    children = [tok("class"), ident(name)]
    if bases is not None:
        children.append(tree("argument_list", *separated(bases, "(", ")")))
    children += [tok(":"), block(*body)]
    return tree("class_definition", *children)


def returns(value=None) -> Tree:
    return tree("return_statement", tok("return"), *([] if value is None else [value]))


def build_program(cst: Tree, source_file: str = "<test>") -> Program:
    return ASTBuilder(source_file).build(cst)


def generate_blocks(cst: Tree) -> List[str]:
    return TypeScriptGenerator().generate(build_program(cst))


def generate_text(cst: Tree) -> str:
    return "\n\n".join(generate_blocks(cst))
