"""
Operator and Type Vocabulary

One operator vocabulary for the whole pipeline: the builder normalizes Python
spellings into BinaryOp members, the generator only ever sees these.
"""

from enum import Enum
from typing import Dict, Optional


class BinaryOp(Enum):
    """Binary and comparison operators, as spelled in the emitted TypeScript."""
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    FLOOR_DIV = "//"
    MOD = "%"
    POW = "**"
    BIT_AND = "&"
    BIT_OR = "|"
    BIT_XOR = "^"
    LSHIFT = "<<"
    RSHIFT = ">>"
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    EQ = "=="
    NE = "!="
    AND = "&&"
    OR = "||"


class UnaryOp(Enum):
    """Prefix arithmetic operators (`not` has its own node kind)."""
    POS = "+"
    NEG = "-"
    INVERT = "~"


class SplatKind(Enum):
    """Variadic tail collected by a splat parameter or argument."""
    LIST = "list"
    DICTIONARY = "dictionary"


# Python keyword spellings folded into the symbolic vocabulary at build time
_OPERATOR_SPELLINGS: Dict[str, BinaryOp] = {
    "and": BinaryOp.AND,
    "or": BinaryOp.OR,
    "is": BinaryOp.EQ,
    "is not": BinaryOp.NE,
    "<>": BinaryOp.NE,
}

# Augmented assignment operators accepted as-is
ASSIGNMENT_OPERATORS = frozenset({
    "=", "+=", "-=", "*=", "/=", "%=", "**=", "&=", "|=", "^=", "<<=", ">>=",
})


def binary_op(spelling: str) -> Optional[BinaryOp]:
    """Normalize an operator token, or None when it is outside the vocabulary."""
    if spelling in _OPERATOR_SPELLINGS:
        return _OPERATOR_SPELLINGS[spelling]
    try:
        return BinaryOp(spelling)
    except ValueError:
        return None


def unary_op(spelling: str) -> Optional[UnaryOp]:
    try:
        return UnaryOp(spelling)
    except ValueError:
        return None


# Recognized source type spellings and their TypeScript equivalents.
# Anything else is a nominal type and goes through Pascal-casing.
TYPE_NAMES: Dict[str, str] = {
    "int": "number",
    "float": "number",
    "complex": "number",
    "number": "number",
    "bool": "boolean",
    "boolean": "boolean",
    "str": "string",
    "string": "string",
    "bytes": "Uint8Array",
    "None": "void",
    "void": "void",
    "Any": "any",
    "any": "any",
    "object": "unknown",
}

# Generic containers: source spelling -> TypeScript generic
GENERIC_TYPE_NAMES: Dict[str, str] = {
    "list": "Array",
    "List": "Array",
    "Sequence": "Array",
    "Iterable": "Iterable",
    "set": "Set",
    "Set": "Set",
    "dict": "Record",
    "Dict": "Record",
    "Mapping": "Record",
}


def string_prefix(text: str) -> str:
    """Prefix letters of a string literal: `rb'x'` -> `rb`."""
    for i, ch in enumerate(text):
        if ch in "'\"":
            return text[:i]
    return ""
