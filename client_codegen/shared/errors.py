"""Custom exceptions for the client generator."""

from __future__ import annotations


class SchemaError(Exception):
    """Base exception for schema-related errors."""

    def __init__(self, message: str, schema_path: str | None = None) -> None:
        self.schema_path = schema_path
        full_message = f"{message}" if not schema_path else f"[{schema_path}] {message}"
        super().__init__(full_message)


class SchemaValidationError(SchemaError):
    """Raised when a document does not have the shape the generator reads."""

    def __init__(
        self,
        message: str,
        schema_path: str | None = None,
        field: str | None = None,
    ) -> None:
        self.field = field
        if field:
            message = f"Field '{field}': {message}"
        super().__init__(message, schema_path)


class UnresolvableSchemaError(SchemaError):
    """Raised in strict mode when a schema node has no usable type information."""

    def __init__(
        self,
        message: str,
        node: object = None,
        schema_path: str | None = None,
    ) -> None:
        self.node = node
        super().__init__(f"Unresolvable schema: {message}", schema_path)


class CyclicSchemaError(SchemaError):
    """Raised when resolution re-enters a node already on the current path."""

    def __init__(self, depth: int, schema_path: str | None = None) -> None:
        self.depth = depth
        super().__init__(f"Cyclic schema detected at depth {depth}", schema_path)


class EnumCollisionError(SchemaError):
    """Raised when two different literal sets derive the same enum name."""

    def __init__(
        self,
        name: str,
        existing: str,
        incoming: str,
        schema_path: str | None = None,
    ) -> None:
        self.name = name
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Enum '{name}' already declared as {existing!r}, refusing {incoming!r}",
            schema_path,
        )


class OptionsError(Exception):
    """Raised for invalid generator options."""

    def __init__(self, option: str, value: object, expected: str) -> None:
        self.option = option
        self.value = value
        super().__init__(f"Option '{option}': got {value!r}, expected {expected}")
