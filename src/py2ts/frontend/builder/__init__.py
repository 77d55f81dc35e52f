"""
AST builder: concrete syntax tree (lark Tree/Token) -> intermediate AST.
"""

from .context import BuildContext, kind_of, children_of, text_of
from .base import ASTBuilder, build
