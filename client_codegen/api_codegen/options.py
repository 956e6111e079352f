"""Generator options and output formatting."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Mapping

from ..shared.errors import OptionsError
from ..shared.naming import slugify
from ..shared.schema_loader import load_schema

LANGUAGES: Final[frozenset[str]] = frozenset({"ts", "js"})
DOC: Final[str] = " * "
DEFAULT_SP: Final[str] = "  "

INDENTS: Final[dict[str, str]] = {
    "tab": "\t",
    "\t": "\t",
    "4": "    ",
    "2": "  ",
    "spaces": DEFAULT_SP,
}

DEFAULT_GET_AUTHORIZATION: Final[str] = (
    "function getAuthorization(security, securityDefinitions, op) {\n"
    "  return Promise.resolve(null)\n"
    "}"
)
DEFAULT_APPLY_AUTHORIZATION: Final[str] = (
    "function applyAuthorization(req, auth) {\n"
    "  return req\n"
    "}"
)


@dataclass
class ClientOptions:
    """Options for one generation run."""

    src: str | None = None
    out_dir: Path = Path("generated")
    language: str = "ts"
    indent: str = "spaces"
    semicolon: bool = False
    host: str | None = None
    schemes: list[str] | None = None
    security_definitions: dict[str, Any] | None = None
    timeout: int | None = None
    get_authorization: str = DEFAULT_GET_AUTHORIZATION
    apply_authorization: str = DEFAULT_APPLY_AUTHORIZATION
    strict: bool = False

    def __post_init__(self) -> None:
        self.out_dir = Path(self.out_dir)
        self.indent = str(self.indent)
        self.validate()

    def validate(self) -> None:
        if self.language not in LANGUAGES:
            raise OptionsError("language", self.language, "one of " + ", ".join(sorted(LANGUAGES)))
        if self.indent not in INDENTS:
            raise OptionsError("indent", self.indent, "one of 2, 4, tab, spaces")
        if self.timeout is not None and (not isinstance(self.timeout, int) or self.timeout < 0):
            raise OptionsError("timeout", self.timeout, "a non-negative integer")
        if self.schemes is not None and not isinstance(self.schemes, list):
            raise OptionsError("schemes", self.schemes, "a list of strings")

    @property
    def is_typescript(self) -> bool:
        return self.language == "ts"


_FIELDS: Final[frozenset[str]] = frozenset(f.name for f in dataclasses.fields(ClientOptions))


def options_from_mapping(data: Mapping[str, Any], **overrides: Any) -> ClientOptions:
    """Build options from a mapping with snake_case or camelCase keys.

    ``overrides`` win over ``data``; ``None`` overrides are ignored.
    """
    values: dict[str, Any] = {}
    for key, value in data.items():
        name = slugify(str(key), fallback=str(key))
        if name not in _FIELDS:
            raise OptionsError(str(key), value, "a known option")
        values[name] = value
    values.update({k: v for k, v in overrides.items() if v is not None})
    return ClientOptions(**values)


def load_options(path: Path, **overrides: Any) -> ClientOptions:
    """Load options from a YAML or JSON file."""
    return options_from_mapping(load_schema(path), **overrides)


@dataclass(frozen=True, slots=True)
class Formatting:
    """Indentation unit and statement terminator of the generated code."""

    sp: str = DEFAULT_SP
    st: str = ""


def apply_format_options(options: ClientOptions) -> Formatting:
    return Formatting(
        sp=INDENTS.get(options.indent, DEFAULT_SP),
        st=";" if options.semicolon else "",
    )


def format_doc_description(description: str | None, fmt: Formatting) -> str:
    """Continue a multi-line description inside a doc comment."""
    return (description or "").strip().replace("\n", f"\n{DOC}{fmt.sp}")
