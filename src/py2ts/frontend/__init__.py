"""
Frontend: source text -> concrete syntax tree -> intermediate AST.
"""

from .builder import ASTBuilder, BuildContext, build
