"""
py2ts: Python source -> TypeScript source.

    from py2ts import convert
    print(convert("def add(a, b=1):\n    return a + b\n"))
"""

from typing import Optional

from .backend.formatter import Formatter, PrettierFormatter
from .backend.typescript import TypeScriptGenerator, generate, join_blocks
from .frontend.builder import ASTBuilder, build
from .shared.errors import FormatterError, ParseError, Py2TsError, UnsupportedConstruct
from .utils.base import Outcome
from .utils.config import DEFAULT_SOURCE_NAME

__version__ = "0.1.0"


def convert(source: str, source_file: str = DEFAULT_SOURCE_NAME, formatter: Optional[Formatter] = None) -> str:
    """Translate a whole module; raises the stage error on failure."""
    from .compiler.driver import Translator

    result = Translator(formatter=formatter).translate(source, source_file)
    return result.outcome().unwrap()
