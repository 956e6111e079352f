"""Schema-to-type resolution engine."""

from .nodes import EnumKind, classify
from .registry import EnumRegistry
from .resolver import (
    DocTypeRenderer,
    ResolutionMode,
    ResolverConfig,
    TsTypeRenderer,
    TypeResolver,
    enum_declaration,
)

__all__ = [
    "DocTypeRenderer",
    "EnumKind",
    "EnumRegistry",
    "ResolutionMode",
    "ResolverConfig",
    "TsTypeRenderer",
    "TypeResolver",
    "classify",
    "enum_declaration",
]
