"""
Naming Conversion

Identifiers are camel-cased and type names Pascal-cased at the point of
reference, so declarations and uses always agree. Leading underscores are a
privacy convention and are carried through unchanged.
"""

import re
from typing import List

from .types import GENERIC_TYPE_NAMES, TYPE_NAMES

_WORD = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")
_GENERIC = re.compile(r"^([\w.]+)\[(.*)\]$", re.DOTALL)

TS_RESERVED = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "new",
    "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with", "let", "static", "yield",
    "await", "implements", "interface", "package", "private", "protected",
    "public",
})


def _split_affixes(name: str):
    """`__name__` -> (`__`, `name`, `__`)"""
    stripped = name.strip("_")
    if not stripped:
        return "", name, ""
    start = name.index(stripped)
    return name[:start], stripped, name[start + len(stripped):]


def _words(name: str) -> List[str]:
    words: List[str] = []
    for part in name.split("_"):
        words.extend(_WORD.findall(part))
    return words


def _is_cap_words(name: str) -> bool:
    """CapWords (class naming convention): already a type-like name."""
    return bool(name) and name[0].isupper() and "_" not in name and any(c.islower() for c in name)


def to_camel(name: str, reserved: bool = True) -> str:
    """
    Convert an identifier to camelCase.

    `my_value` -> `myValue`, `MAX_SIZE` -> `maxSize`, `_private_x` -> `_privateX`.
    CapWords names (`HttpServer`) are class references and keep their form so
    they match the Pascal-cased declaration. Leading and trailing underscores
    are kept (`__str__` stays `__str__`).

    A bare name that collides with a TypeScript reserved word gets a `_`
    suffix. Property positions (attributes, keyword names, methods, fields)
    pass `reserved=False`: reserved words are valid property names there.
    """
    prefix, rest, suffix = _split_affixes(name)
    if _is_cap_words(rest):
        return name
    words = _words(rest)
    if not words:
        return name
    result = words[0].lower() + "".join(w[0].upper() + w[1:].lower() for w in words[1:])
    if reserved and not prefix and not suffix and result in TS_RESERVED:
        return result + "_"
    return prefix + result + suffix


def to_pascal(name: str) -> str:
    """Convert an identifier to PascalCase, keeping leading and trailing underscores."""
    prefix, rest, suffix = _split_affixes(name)
    if _is_cap_words(rest):
        return name
    words = _words(rest)
    if not words:
        return name
    return prefix + "".join(w[0].upper() + w[1:].lower() for w in words) + suffix


def _split_arguments(text: str) -> List[str]:
    """Split `a, b[c, d]` on top-level commas."""
    parts: List[str] = []
    depth = 0
    current = ""
    for ch in text:
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append(current.strip())
            current = ""
        else:
            current += ch
    if current.strip():
        parts.append(current.strip())
    return parts


def _split_union(text: str) -> List[str]:
    parts: List[str] = []
    depth = 0
    current = ""
    for ch in text:
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
        if ch == "|" and depth == 0:
            parts.append(current.strip())
            current = ""
        else:
            current += ch
    parts.append(current.strip())
    return parts


def _member_type(spelling: str) -> str:
    # None inside a union is a value, not a return type
    return "null" if spelling == "None" else type_name(spelling)


def type_name(spelling: str) -> str:
    """
    Map a source type spelling to its TypeScript equivalent.

    The recognized names come from TYPE_NAMES; generic containers, Optional,
    Union and PEP 604 unions are mapped structurally; everything else is
    treated as a nominal type and Pascal-cased.
    """
    spelling = spelling.strip().strip("'\"")
    if spelling in TYPE_NAMES:
        return TYPE_NAMES[spelling]

    members = _split_union(spelling)
    if len(members) > 1:
        return " | ".join(_member_type(m) for m in members)

    match = _GENERIC.match(spelling)
    if match:
        outer = match.group(1).split(".")[-1]
        args = _split_arguments(match.group(2))
        if outer == "Optional":
            return f"{type_name(args[0])} | null"
        if outer == "Union":
            return " | ".join(_member_type(a) for a in args)
        if outer in ("tuple", "Tuple"):
            return "[" + ", ".join(type_name(a) for a in args if a != "...") + "]"
        generic = GENERIC_TYPE_NAMES.get(outer, to_pascal(outer))
        return f"{generic}<{', '.join(type_name(a) for a in args)}>"

    if spelling in GENERIC_TYPE_NAMES:
        generic = GENERIC_TYPE_NAMES[spelling]
        return "Record<string, any>" if generic == "Record" else f"{generic}<any>"
    return to_pascal(spelling.split(".")[-1])
