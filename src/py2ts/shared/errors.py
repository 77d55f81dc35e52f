"""
Error Reporting

Both pipeline stages share one fatal error kind, UnsupportedConstruct. It names
the node kind that has no handler and the syntactic context it was found in, so
the handler tables can be extended instead of debugging a silently wrong
translation.
"""

import os
from typing import List, Optional

from .source_location import SourceLocation


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get("PY2TS_COLOR", "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ============================================================================
# Exception Classes
# ============================================================================

class Py2TsError(Exception):
    """Base exception for all py2ts errors"""
    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self):
        if self.location:
            return f"{self.message} at {self.location}"
        return self.message


class UnsupportedConstruct(Py2TsError):
    """
    A node kind without a handler in its context.

    Raised by the AST builder for concrete syntax tree nodes and by the code
    generator for AST nodes. Fatal: the whole build or generate call fails and
    no partial output is returned.
    """
    def __init__(self, node_kind: str, context_kind: str, location: Optional[SourceLocation] = None):
        super().__init__(
            f"Unhandled node type '{node_kind}' in context '{context_kind}'",
            location,
        )
        self.node_kind = node_kind
        self.context_kind = context_kind


class ParseError(Py2TsError):
    """The parser collaborator rejected the input text."""


class FormatterError(Py2TsError):
    """The formatter collaborator could not improve a block. Always recovered."""


# ---------------------------------------------------------------------------
# Diagnostic rendering
# ---------------------------------------------------------------------------

def format_diagnostic(error: Py2TsError, source: Optional[str] = None, color: Optional[bool] = None) -> str:
    """
    Render an error with the offending source line underlined.

    Example output (plain, no color)::

        error: Unhandled node type 'with_statement' in context 'module'
         --> example.py:3:1
          |
        3 | with open(path) as f:
          | ^^^^
    """
    use_color = _use_color() if color is None else color
    out: List[str] = [
        _style("error", _BOLD, _RED, color=use_color)
        + _style(f": {error.message}", _BOLD, color=use_color)
    ]
    loc = error.location
    if loc is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=use_color) + "<unknown location>")
        return "\n".join(out)

    gw = max(len(str(loc.line)), 1)
    out.append(_style(" " * gw + "--> ", _BOLD, _BLUE, color=use_color) + str(loc))
    if source is None:
        return "\n".join(out)

    src_lines = source.split("\n")
    idx = loc.line - 1
    code_line = src_lines[idx] if 0 <= idx < len(src_lines) else ""
    gutter = _style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=use_color)
    out.append(gutter)
    out.append(_style(str(loc.line).rjust(gw) + " | ", _BOLD, _BLUE, color=use_color) + code_line)

    col_start = max(loc.column, 1) - 1
    if loc.end_line == loc.line and loc.end_column > loc.column:
        span_len = loc.end_column - loc.column
    else:
        span_len = _guess_span(code_line, col_start)
    carets = " " * col_start + "^" * max(1, span_len)
    out.append(gutter + " " + _style(carets, _BOLD, _RED, color=use_color))
    return "\n".join(out)


def _guess_span(code_line: str, col_start: int) -> int:
    """Guess token length when end_column is unavailable."""
    if col_start >= len(code_line):
        return 1
    length = 0
    for ch in code_line[col_start:]:
        if ch in (" ", "\t", ":", ",", "(", ")", "[", "]"):
            break
        length += 1
    return max(1, length)
