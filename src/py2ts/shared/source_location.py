"""
Source Location (Span)

Positions are 1-based and refer to the Python input, so diagnostics can point
back at the construct that stopped a translation.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Source location of a concrete or abstract node.

    - file, line, column of the first character
    - optional byte offsets and end position when the parser supplies them
    - immutable (frozen) so nodes can share locations safely
    """
    file: str
    line: int
    column: int
    start: int = 0
    end: int = 0
    end_line: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        """Format as file:line:column"""
        return f"{self.file}:{self.line}:{self.column}"
