"""Tagged variants for the schema nodes of an API description.

Raw documents are plain mappings whose meaning depends on which keys are
present. :func:`classify` turns one mapping into exactly one variant so the
renderers can dispatch on the variant type instead of probing keys.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Union

from ..shared.naming import ref_name

DATE_FORMATS: Final[frozenset[str]] = frozenset({"date", "date-time"})
NUMERIC_TYPES: Final[frozenset[str]] = frozenset({"integer", "number"})


class EnumKind(Enum):
    """How the literals of an enum are rendered."""

    STRING = "string"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"

    @classmethod
    def for_type(cls, declared: str | None) -> EnumKind:
        if declared in NUMERIC_TYPES:
            return cls.NUMERIC
        if declared == "boolean":
            return cls.BOOLEAN
        return cls.STRING


@dataclass(frozen=True, slots=True)
class AbsentNode:
    pass


@dataclass(frozen=True, slots=True)
class EnumNode:
    literals: tuple[Any, ...]
    kind: EnumKind
    type: str | None = None
    format: str | None = None


@dataclass(frozen=True, slots=True)
class ReferenceNode:
    ref: str

    @property
    def name(self) -> str:
        return ref_name(self.ref)


@dataclass(frozen=True, slots=True)
class WrappedNode:
    """A parameter or response that carries its body type under ``schema``."""

    schema: Any


@dataclass(frozen=True, slots=True)
class ArrayNode:
    items: Any

    @property
    def items_typed(self) -> bool:
        """Whether the items carry enough information to be resolved."""
        items = self.items
        if not isinstance(items, Mapping):
            return False
        return bool(items.get("type") or items.get("$ref"))


@dataclass(frozen=True, slots=True)
class MapNode:
    """An object whose ``additionalProperties`` gives the value schema."""

    values: Any


@dataclass(frozen=True, slots=True)
class ObjectNode:
    pass


@dataclass(frozen=True, slots=True)
class PrimitiveNode:
    type: str
    format: str | None = None

    @property
    def is_numeric(self) -> bool:
        return self.type in NUMERIC_TYPES

    @property
    def is_date(self) -> bool:
        return self.type == "string" and self.format in DATE_FORMATS


@dataclass(frozen=True, slots=True)
class UntypedNode:
    pass


SchemaNode = Union[
    AbsentNode,
    EnumNode,
    ReferenceNode,
    WrappedNode,
    ArrayNode,
    MapNode,
    ObjectNode,
    PrimitiveNode,
    UntypedNode,
]


def declared_type(raw: Mapping[str, Any]) -> str | None:
    """Return the ``type`` token of a node.

    A list of types (``["string", "null"]``) is narrowed to its first
    non-null entry.
    """
    value = raw.get("type")
    if isinstance(value, (list, tuple)):
        value = next((t for t in value if t != "null"), None)
    if value is None or value == "":
        return None
    return str(value)


def classify(raw: Any) -> SchemaNode:
    """Classify a raw schema node into exactly one variant.

    Priority: absent, enum, reference, wrapper, array, object, primitive.
    """
    if raw is None or raw is False:
        return AbsentNode()
    if not isinstance(raw, Mapping):
        return UntypedNode()

    type_ = declared_type(raw)
    fmt = raw.get("format")

    literals = raw.get("enum")
    if isinstance(literals, (list, tuple)) and literals:
        return EnumNode(
            literals=tuple(literals),
            kind=EnumKind.for_type(type_),
            type=type_,
            format=fmt,
        )

    ref = raw.get("$ref")
    if isinstance(ref, str) and ref:
        return ReferenceNode(ref)

    if raw.get("schema") is not None:
        return WrappedNode(raw["schema"])

    if type_ == "array":
        return ArrayNode(raw.get("items"))

    if type_ == "object":
        extra = raw.get("additionalProperties")
        if extra is not None and extra is not False:
            return MapNode(extra)
        return ObjectNode()

    if type_ is not None:
        return PrimitiveNode(type_, fmt)

    return UntypedNode()
