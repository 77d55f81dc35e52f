"""
Build context and concrete syntax tree accessors.

The builder only reads three things from a CST node: its kind, its ordered
children and, for leaves, its text. These helpers are the whole contract.
"""

from dataclasses import dataclass
from typing import List, Optional, Union

from lark import Token, Tree
from typing_extensions import TypeAlias

from ...utils.config import TRIPLE_QUOTE_PREFIXES

CSTNode: TypeAlias = Union[Tree, Token]

# Extras: legal anywhere, never translated
IGNORED_KINDS = frozenset({"comment", "line_continuation"})

# Scopes whose bodies are statement lists; a lone triple-quoted string there
# is documentation, not a value
STATEMENT_SCOPES = frozenset({
    "module", "function", "class", "if_statement", "for_statement", "while_statement",
})


def kind_of(node: CSTNode) -> str:
    """Node kind: Tree.data for interior nodes, Token.type for leaves."""
    if isinstance(node, Token):
        return node.type
    return str(node.data)


def text_of(node: CSTNode) -> str:
    if isinstance(node, Token):
        return str(node)
    return " ".join(text_of(child) for child in node.children)


def children_of(node: CSTNode) -> List[CSTNode]:
    """Ordered children with extras (comments, line continuations) removed."""
    if isinstance(node, Token):
        return []
    return [child for child in node.children if kind_of(child) not in IGNORED_KINDS]


def is_triple_quoted(text: str) -> bool:
    return text.startswith(TRIPLE_QUOTE_PREFIXES)


@dataclass(frozen=True)
class BuildContext:
    """
    Immutable traversal context threaded top-down.

    scope: syntactic scope tag (module, function, class, if_statement, ...)
    parent: the enclosing concrete node, None at the root
    """
    scope: str
    parent: Optional[CSTNode] = None

    @property
    def parent_kind(self) -> str:
        return "file" if self.parent is None else kind_of(self.parent)

    @property
    def is_statement_scope(self) -> bool:
        return self.scope in STATEMENT_SCOPES

    def within(self, node: CSTNode, scope: Optional[str] = None) -> 'BuildContext':
        """Context for the children of `node`, optionally entering a new scope."""
        return BuildContext(scope or self.scope, node)
