"""
Schema-to-type resolution.

Walks one schema node depth-first and renders a TypeScript type expression
for it, registering any inline enum it meets. A reduced renderer over the
same dispatch table produces the JSDoc type used in doc comments.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final

from ..shared.errors import CyclicSchemaError, UnresolvableSchemaError
from ..shared.naming import generate_enum_name
from .nodes import (
    AbsentNode,
    ArrayNode,
    EnumKind,
    EnumNode,
    MapNode,
    ObjectNode,
    PrimitiveNode,
    ReferenceNode,
    UntypedNode,
    WrappedNode,
    classify,
)
from .registry import EnumRegistry

logger = logging.getLogger(__name__)

ARRAY_SUFFIX: Final[str] = "[]"


class ResolutionMode(Enum):
    """Where the resolved expression will be embedded."""

    DEFAULT = "default"
    TYPES_MODULE = "types"


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    types_namespace: str = "api"
    enums_namespace: str = "enums"
    doc_types_namespace: str = "module:types"
    strict: bool = False
    max_depth: int = 64


def qualify(namespace: str, name: str) -> str:
    return f"{namespace}.{name}" if namespace else name


@dataclass(slots=True)
class _Walk:
    """State of one top-level render call."""

    renderer: SchemaRenderer
    mode: ResolutionMode
    active: set[int] = field(default_factory=set)
    depth: int = 0

    def descend(self, raw: Any) -> str:
        child = _Walk(self.renderer, self.mode, self.active, self.depth + 1)
        return self.renderer.visit(raw, child)


class SchemaRenderer:
    """Base renderer: one hook per schema variant.

    Subclasses override the hooks; :meth:`visit` owns classification, the
    depth limit and the cycle guard.
    """

    generic_object = "Object"
    array_fallback = "Object[]"
    untyped_name = "any"

    def __init__(self, config: ResolverConfig) -> None:
        self.config = config

    def render(self, raw: Any, mode: ResolutionMode = ResolutionMode.DEFAULT) -> str:
        return self.visit(raw, _Walk(self, mode))

    def visit(self, raw: Any, walk: _Walk) -> str:
        if walk.depth > self.config.max_depth:
            raise CyclicSchemaError(walk.depth)

        tracked = isinstance(raw, Mapping)
        if tracked:
            if id(raw) in walk.active:
                raise CyclicSchemaError(walk.depth)
            walk.active.add(id(raw))
        try:
            node = classify(raw)
            hook = getattr(self, _HOOKS[type(node)])
            return hook(node, walk)
        finally:
            if tracked:
                walk.active.discard(id(raw))

    def absent(self, node: AbsentNode, walk: _Walk) -> str:
        raise NotImplementedError

    def enum(self, node: EnumNode, walk: _Walk) -> str:
        raise NotImplementedError

    def reference(self, node: ReferenceNode, walk: _Walk) -> str:
        raise NotImplementedError

    def wrapped(self, node: WrappedNode, walk: _Walk) -> str:
        return walk.descend(node.schema)

    def array(self, node: ArrayNode, walk: _Walk) -> str:
        if node.items_typed:
            return walk.descend(node.items) + ARRAY_SUFFIX
        if self.config.strict:
            raise UnresolvableSchemaError("array items declare neither type nor $ref", node.items)
        logger.debug("Array items %r carry no type, using fallback", node.items)
        return self.array_fallback

    def open_map(self, node: MapNode, walk: _Walk) -> str:
        raise NotImplementedError

    def opaque(self, node: ObjectNode, walk: _Walk) -> str:
        return self.generic_object

    def primitive(self, node: PrimitiveNode, walk: _Walk) -> str:
        if node.is_numeric:
            return "Number"
        if node.is_date:
            return "Date"
        if node.type == "string":
            return "String"
        if node.type == "boolean":
            return "Boolean"
        return node.type

    def untyped(self, node: UntypedNode, walk: _Walk) -> str:
        return self.untyped_name


# Variant -> renderer hook. Every SchemaNode variant has exactly one entry.
_HOOKS: Final[dict[type, str]] = {
    AbsentNode: "absent",
    EnumNode: "enum",
    ReferenceNode: "reference",
    WrappedNode: "wrapped",
    ArrayNode: "array",
    MapNode: "open_map",
    ObjectNode: "opaque",
    PrimitiveNode: "primitive",
    UntypedNode: "untyped",
}


def render_literal(value: Any, kind: EnumKind) -> str:
    """Render one enum literal for a declaration.

    ``null`` stays bare in every kind; strings are always quoted.
    """
    if value is None:
        return "null"
    if kind is EnumKind.STRING or isinstance(value, str):
        text = value if isinstance(value, str) else json.dumps(value)
        escaped = text.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"
    return json.dumps(value)


def enum_declaration(name: str, node: EnumNode) -> str:
    """Render the declaration of an enum as a literal union type."""
    members = " | ".join(render_literal(v, node.kind) for v in node.literals)
    return f"export type {name} = {members}"


class TsTypeRenderer(SchemaRenderer):
    """Renders TypeScript type expressions and registers inline enums."""

    def __init__(self, registry: EnumRegistry, config: ResolverConfig) -> None:
        super().__init__(config)
        self.registry = registry

    def absent(self, node: AbsentNode, walk: _Walk) -> str:
        return self.generic_object

    def enum(self, node: EnumNode, walk: _Walk) -> str:
        name = generate_enum_name(node.literals)
        self.registry.insert(name, enum_declaration(name, node))
        return qualify(self.config.enums_namespace, name)

    def reference(self, node: ReferenceNode, walk: _Walk) -> str:
        if walk.mode is ResolutionMode.TYPES_MODULE:
            return node.name
        return qualify(self.config.types_namespace, node.name)

    def open_map(self, node: MapNode, walk: _Walk) -> str:
        return f"{{[key: string]: {walk.descend(node.values)}}}"


class DocTypeRenderer(SchemaRenderer):
    """Renders JSDoc type names. Never touches the enum registry."""

    array_fallback = "object[]"
    untyped_name = "object"

    def absent(self, node: AbsentNode, walk: _Walk) -> str:
        return self.generic_object

    def enum(self, node: EnumNode, walk: _Walk) -> str:
        if node.type is None:
            return self.untyped(UntypedNode(), walk)
        return self.primitive(PrimitiveNode(node.type, node.format), walk)

    def reference(self, node: ReferenceNode, walk: _Walk) -> str:
        return qualify(self.config.doc_types_namespace, node.name)

    def open_map(self, node: MapNode, walk: _Walk) -> str:
        return self.untyped_name

    def opaque(self, node: ObjectNode, walk: _Walk) -> str:
        return self.untyped_name

    def primitive(self, node: PrimitiveNode, walk: _Walk) -> str:
        # Only integers and strings get class names; other tokens pass through
        if node.type == "integer":
            return "Number"
        if node.type == "string":
            return super().primitive(node, walk)
        return node.type


class TypeResolver:
    """Resolves schema nodes for one generation run.

    Owns the enum registry it writes to; pass a registry explicitly to
    share it between resolvers of the same run.
    """

    def __init__(
        self,
        registry: EnumRegistry | None = None,
        config: ResolverConfig | None = None,
    ) -> None:
        self.config = config or ResolverConfig()
        self.registry = registry if registry is not None else EnumRegistry()
        self._types = TsTypeRenderer(self.registry, self.config)
        self._docs = DocTypeRenderer(self.config)

    def resolve(self, node: Any, mode: ResolutionMode = ResolutionMode.DEFAULT) -> str:
        """Return the type expression for ``node``.

        Raises:
            CyclicSchemaError: If the node contains itself.
            EnumCollisionError: If a strict registry sees two literal sets
                with the same derived name.
            UnresolvableSchemaError: In strict mode, for untyped array items.
        """
        return self._types.render(node, mode)

    def doc_type(self, node: Any) -> str:
        """Return the JSDoc type name for ``node``."""
        return self._docs.render(node)

    def enum_declarations(self) -> list[str]:
        return self.registry.all_declarations()

    def reset(self) -> None:
        self.registry.reset()
