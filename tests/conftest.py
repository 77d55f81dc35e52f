"""
Pytest configuration and shared fixtures for all py2ts tests.

The builder and generator are stateless, so one instance is shared per
session. The translator fixture needs the tree-sitter grammar and skips
when it is not installed.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT))

from py2ts.backend.typescript import TypeScriptGenerator
from py2ts.frontend.builder import ASTBuilder


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def builder():
    """Shared AST builder; builds keep no state between calls."""
    return ASTBuilder("<test>")


@pytest.fixture(scope="session")
def generator():
    """Shared TypeScript generator; hoisting maps are per call."""
    return TypeScriptGenerator()


@pytest.fixture(scope="session")
def translator():
    """Unformatted end-to-end translator backed by tree-sitter."""
    pytest.importorskip("tree_sitter")
    pytest.importorskip("tree_sitter_python")
    from py2ts.compiler.driver import Translator
    return Translator(formatter=None)


@pytest.fixture
def translate(translator):
    """Translate source and return the joined text, failing on error."""
    def _translate(source: str) -> str:
        result = translator.translate(source, "<test>")
        assert result.success, f"Translation failed: {result.error}"
        return result.text
    return _translate
