"""
Parser

Wraps the tree-sitter Python grammar and converts its syntax tree into the
concrete syntax tree shape the AST builder reads: lark `Tree` for interior
nodes and lark `Token` for leaves, with positions carried on `Tree.meta` and
the token line/column attributes (1-based, like lark's own parsers).
"""

import logging
from typing import Iterator, Optional, Union

import tree_sitter_python
from lark import Token, Tree
from lark.tree import Meta
from tree_sitter import Language, Node
from tree_sitter import Parser as TreeSitterParser

from ..shared.errors import ParseError
from ..shared.source_location import SourceLocation
from ..utils.config import DEFAULT_FILE_ENCODING, DEFAULT_SOURCE_NAME

logger = logging.getLogger(__name__)

# Kinds that become leaves carrying their full source text, even when the
# grammar gives them children (string parts, the expression inside a type)
ATOMIC_KINDS = frozenset({
    "identifier", "string", "integer", "float", "true", "false", "none",
    "type", "decorator", "comment", "line_continuation", "ellipsis",
    "pass_statement", "break_statement", "continue_statement",
    "keyword_separator", "positional_separator",
})

CST = Union[Tree, Token]


class Parser:
    """
    Python source -> concrete syntax tree.

    - Raises ParseError at the first ERROR or MISSING node; tree-sitter
      recovers from syntax errors but a recovered tree is not a faithful
      translation input
    - Keeps anonymous tokens (`=`, `,`, `def`, operators) as leaves: the
      builder relies on them for operator spelling and sparse separators
    """

    def __init__(self):
        self.language = Language(tree_sitter_python.language())
        self.parser = TreeSitterParser(self.language)

    def parse(self, source: str, source_file: str = DEFAULT_SOURCE_NAME) -> Tree:
        data = source.encode(DEFAULT_FILE_ENCODING)
        tree = self.parser.parse(data)
        root = tree.root_node
        if root.has_error:
            bad = next(_error_nodes(root), root)
            location = _location(bad, source_file)
            raise ParseError(f"Parse error: invalid syntax near {bad.type!r}", location)
        logger.debug("parsed %s: %d bytes", source_file, len(data))
        return to_cst(root, data)


def _error_nodes(node: Node) -> Iterator[Node]:
    if node.type == "ERROR" or node.is_missing:
        yield node
        return
    for child in node.children:
        if child.has_error or child.is_missing:
            yield from _error_nodes(child)


def _location(node: Node, source_file: str) -> SourceLocation:
    (line, column), (end_line, end_column) = node.start_point, node.end_point
    return SourceLocation(
        file=source_file,
        line=line + 1,
        column=column + 1,
        start=node.start_byte,
        end=node.end_byte,
        end_line=end_line + 1,
        end_column=end_column + 1,
    )


def to_cst(node: Node, data: bytes) -> CST:
    """Convert a tree-sitter node (and its subtree) to lark Tree/Token form."""
    (line, column), (end_line, end_column) = node.start_point, node.end_point
    if node.type in ATOMIC_KINDS or node.child_count == 0:
        text = data[node.start_byte:node.end_byte].decode(DEFAULT_FILE_ENCODING)
        return Token(
            node.type, text,
            start_pos=node.start_byte,
            line=line + 1,
            column=column + 1,
            end_line=end_line + 1,
            end_column=end_column + 1,
            end_pos=node.end_byte,
        )

    meta = Meta()
    meta.empty = False
    meta.line = line + 1
    meta.column = column + 1
    meta.end_line = end_line + 1
    meta.end_column = end_column + 1
    meta.start_pos = node.start_byte
    meta.end_pos = node.end_byte
    return Tree(node.type, [to_cst(child, data) for child in node.children], meta)


_default_parser: Optional[Parser] = None


def parse(source: str, source_file: str = DEFAULT_SOURCE_NAME) -> Tree:
    """Parse with a lazily created, shared Parser."""
    global _default_parser
    if _default_parser is None:
        _default_parser = Parser()
    return _default_parser.parse(source, source_file)
