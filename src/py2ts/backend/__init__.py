"""
Backend: intermediate AST -> TypeScript blocks, plus block formatting.
"""

from .context import GenContext, Fragment
from .formatter import Formatter, PrettierFormatter, format_blocks
from .typescript import TypeScriptGenerator, generate, join_blocks
