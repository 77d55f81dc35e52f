"""
Result Types

Fail-fast stages return an Outcome instead of letting errors escape, so the
possibility of failure shows up in the signature of build(), generate() and
Translator.translate().
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

from ..shared.errors import Py2TsError

T = TypeVar('T')
U = TypeVar('U')


class OutcomeTag(Enum):
    """Outcome discriminant"""
    OK = "ok"
    ERR = "err"


@dataclass
class Outcome(Generic[T]):
    """Outcome type: Ok(value) | Err(Py2TsError)"""
    tag: OutcomeTag
    value: Optional[T] = None
    error: Optional[Py2TsError] = None

    @classmethod
    def ok(cls, value: T) -> 'Outcome[T]':
        """Create successful outcome"""
        return cls(OutcomeTag.OK, value=value)

    @classmethod
    def err(cls, error: Py2TsError) -> 'Outcome[T]':
        """Create failed outcome"""
        return cls(OutcomeTag.ERR, error=error)

    @property
    def success(self) -> bool:
        return self.tag == OutcomeTag.OK

    def is_ok(self) -> bool:
        return self.tag == OutcomeTag.OK

    def is_err(self) -> bool:
        return self.tag == OutcomeTag.ERR

    def unwrap(self) -> T:
        """Extract the value; re-raises the stored error on failure"""
        if self.is_err():
            raise self.error
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value if self.is_ok() else default

    def map(self, func: Callable[[T], U]) -> 'Outcome[U]':
        """Transform Ok value, leave Err unchanged"""
        if self.is_ok():
            return Outcome.ok(func(self.value))
        return Outcome.err(self.error)

    def and_then(self, func: Callable[[T], 'Outcome[U]']) -> 'Outcome[U]':
        """Monadic bind - chain stages"""
        if self.is_ok():
            return func(self.value)
        return Outcome.err(self.error)

    def __str__(self) -> str:
        if self.is_ok():
            return f"Ok({self.value})"
        return f"Err({self.error})"

    def __repr__(self) -> str:
        return self.__str__()
