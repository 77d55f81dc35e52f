"""
Translation Driver

Orchestrates the strictly ordered stages:
parse (tree-sitter) -> build (AST) -> generate (TypeScript blocks) -> format.
"""

import logging
from typing import List, Optional

from lark import Tree

from ..backend.formatter import Formatter
from ..backend.typescript import generate, join_blocks
from ..frontend.builder import build
from ..frontend.parser import Parser
from ..shared.errors import ParseError, Py2TsError
from ..shared.nodes import Program
from ..utils.base import Outcome
from ..utils.config import DEFAULT_SOURCE_NAME

logger = logging.getLogger(__name__)


class TranslationResult:
    """Translation result"""
    def __init__(
        self,
        blocks: Optional[List[str]] = None,
        error: Optional[Py2TsError] = None,
        cst: Optional[Tree] = None,
        program: Optional[Program] = None,
        success: bool = False,
    ):
        self.blocks = blocks or []
        self.error = error
        self.cst = cst
        self.program = program
        self.success = success

    @property
    def text(self) -> str:
        """The translated module: blocks separated by blank lines."""
        return join_blocks(self.blocks) if self.blocks else ""

    def outcome(self) -> Outcome[str]:
        return Outcome.ok(self.text) if self.success else Outcome.err(self.error)


class Translator:
    """
    Python source -> TypeScript source.

    - parser: defaults to the tree-sitter backed Parser
    - formatter: applied per block; None leaves blocks as generated
    """

    def __init__(self, formatter: Optional[Formatter] = None, parser: Optional[Parser] = None):
        self.formatter = formatter
        self.parser = parser if parser is not None else Parser()

    def translate(self, source: str, source_file: str = DEFAULT_SOURCE_NAME) -> TranslationResult:
        # Phase 1: Parsing (source -> CST)
        try:
            cst = self.parser.parse(source, source_file)
        except ParseError as e:
            logger.debug("parse failed: %s", e)
            return TranslationResult(error=e)

        # Phase 2: Build (CST -> AST)
        built = build(cst, source_file)
        if not built.success:
            return TranslationResult(error=built.error, cst=cst)
        program = built.value

        # Phase 3-4: Generate and format (AST -> blocks)
        generated = generate(program, self.formatter)
        if not generated.success:
            return TranslationResult(error=generated.error, cst=cst, program=program)

        logger.debug("translated %s: %d blocks", source_file, len(generated.value))
        return TranslationResult(blocks=generated.value, cst=cst, program=program, success=True)
