"""Naming utilities for code generation."""

from __future__ import annotations

import json
import re
from functools import lru_cache
from typing import Any, Sequence

JS_RESERVED_WORDS: frozenset[str] = frozenset({
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "import",
    "in",
    "instanceof",
    "new",
    "null",
    "return",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
})

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_ENUM_NAME_STRIP_RE = re.compile(r"[^A-Za-z0-9_$]")


def literal_text(value: Any) -> str:
    """Return the spelling of an enum literal used for name derivation."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def generate_enum_name(literals: Sequence[Any]) -> str:
    """Derive an enum identifier from its literal values.

    The literals are concatenated in order and every character that cannot
    appear in an identifier is dropped.

    Examples:
        >>> generate_enum_name(["RED", "GREEN"])
        'REDGREEN'
        >>> generate_enum_name(["image/png", "image/jpeg"])
        'imagepngimagejpeg'
        >>> generate_enum_name([1, 2, 3])
        '_123'
    """
    name = _ENUM_NAME_STRIP_RE.sub("", "".join(literal_text(v) for v in literals))
    if not name:
        return "Enum"
    if name[0].isdigit():
        return f"_{name}"
    return name


@lru_cache(maxsize=1024)
def ref_name(ref: str) -> str:
    """Return the trailing path segment of a ``$ref``."""
    return ref.rstrip("/").split("/")[-1]


@lru_cache(maxsize=512)
def slugify(value: str, *, fallback: str = "operation") -> str:
    """Convert a string to a slug suitable for function names. Cached."""
    value = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", value)
    value = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", value)
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "_", value)
    cleaned = re.sub(r"_+", "_", cleaned)
    cleaned = cleaned.strip("_")
    return cleaned.lower() or fallback


@lru_cache(maxsize=512)
def to_camel_case(value: str) -> str:
    """Convert a snake_case string to camelCase. Cached."""
    parts = value.split("_")
    if not parts:
        return value
    first, *rest = parts
    return first + "".join(segment.capitalize() for segment in rest)


@lru_cache(maxsize=1024)
def to_pascal_case(value: str) -> str:
    """Convert a string to PascalCase.

    Examples:
        >>> to_pascal_case("pet_store")
        'PetStore'
        >>> to_pascal_case("pet-store")
        'PetStore'
        >>> to_pascal_case("petStore")
        'PetStore'
    """
    value = re.sub(r"([a-z])([A-Z])", r"\1_\2", value)
    parts = [part for part in re.split(r"[^A-Za-z0-9]+", value.replace("-", "_")) if part]
    return "".join(part[:1].upper() + part[1:].lower() for part in parts)


@lru_cache(maxsize=1024)
def quote_property_name(name: str) -> str:
    """Quote a property name unless it is a plain identifier."""
    if _IDENTIFIER_RE.match(name):
        return name
    escaped = name.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


@lru_cache(maxsize=1024)
def safe_identifier(name: str) -> str:
    """Make a parameter name usable as a JS binding."""
    cleaned = re.sub(r"[^A-Za-z0-9_$]", "_", name)
    if not cleaned or cleaned[0].isdigit():
        cleaned = f"_{cleaned}"
    if cleaned in JS_RESERVED_WORDS:
        return f"{cleaned}_"
    return cleaned
