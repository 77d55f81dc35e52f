"""
Generation context and output fragments.

GenContext is immutable and threaded top-down. The one piece of mutable state
it carries, the ordered "initialized identifiers" map, is created fresh for
each function (and for the module) and is never visible to sibling or
enclosing functions.

Fragment is what statement generation returns: the statement's own lines plus
the prologue blocks (parameter option aliases) its definitions need. Callers
merge fragments upward; the module level turns prologues into blocks placed
right before the block that needed them.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional

from ..utils.config import INDENT_UNIT

# Ordered map: converted identifier -> TypeScript type (None when unannotated)
Initialized = Dict[str, Optional[str]]

# Stands in for a newline inside a template literal until the block is
# assembled, so line splitting and indentation leave the literal alone.
# Python source cannot contain NUL.
LITERAL_NEWLINE = "\x00"


@dataclass(frozen=True)
class GenContext:
    """
    scope: module | function | class
    target: True while generating an assignment or loop target
    initialized: hoisting map of the enclosing function; None in class bodies
    receiver: source name of the method receiver (`self`), emitted as `this`
    class_name: enclosing class, for method option aliases
    """
    scope: str = "module"
    target: bool = False
    initialized: Optional[Initialized] = None
    receiver: Optional[str] = None
    class_name: Optional[str] = None

    def assigning(self) -> 'GenContext':
        return replace(self, target=True)

    def reading(self) -> 'GenContext':
        return replace(self, target=False) if self.target else self

    def enter_function(self, initialized: Initialized, receiver: Optional[str] = None) -> 'GenContext':
        return replace(self, scope="function", target=False, initialized=initialized, receiver=receiver)

    def enter_class(self, class_name: str) -> 'GenContext':
        return replace(self, scope="class", target=False, initialized=None, receiver=None, class_name=class_name)

    def record(self, name: str, type_name: Optional[str] = None) -> None:
        """Note an assigned identifier for hoisting; a later annotation wins over none."""
        if self.initialized is None:
            return
        if type_name is not None or name not in self.initialized:
            self.initialized[name] = type_name


@dataclass
class Fragment:
    """Generated statement lines plus the prologue blocks they depend on."""
    lines: List[str] = field(default_factory=list)
    prologue: List[str] = field(default_factory=list)

    def extend(self, other: 'Fragment') -> None:
        self.lines.extend(other.lines)
        self.prologue.extend(other.prologue)


def indent(lines: Iterable[str], depth: int = 1) -> List[str]:
    """Indent non-empty lines; nested multi-line text is split first."""
    prefix = INDENT_UNIT * depth
    result: List[str] = []
    for line in lines:
        for part in line.split("\n"):
            result.append(prefix + part if part else part)
    return result


def assemble(lines: Iterable[str]) -> str:
    """Join lines into one block, restoring template literal newlines."""
    return "\n".join(lines).replace(LITERAL_NEWLINE, "\n")
