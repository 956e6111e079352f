"""Shared utilities for the client generator."""

from .schema_loader import (
    fetch_schema,
    load_document,
    load_schema,
)
from .naming import (
    generate_enum_name,
    quote_property_name,
    ref_name,
    safe_identifier,
    slugify,
    to_camel_case,
    to_pascal_case,
    JS_RESERVED_WORDS,
)
from .errors import (
    CyclicSchemaError,
    EnumCollisionError,
    OptionsError,
    SchemaError,
    SchemaValidationError,
    UnresolvableSchemaError,
)

__all__ = [
    # Document loading
    "fetch_schema",
    "load_document",
    "load_schema",
    # Naming utilities
    "generate_enum_name",
    "quote_property_name",
    "ref_name",
    "safe_identifier",
    "slugify",
    "to_camel_case",
    "to_pascal_case",
    "JS_RESERVED_WORDS",
    # Exceptions
    "CyclicSchemaError",
    "EnumCollisionError",
    "OptionsError",
    "SchemaError",
    "SchemaValidationError",
    "UnresolvableSchemaError",
]
