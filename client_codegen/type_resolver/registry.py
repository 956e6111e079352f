"""Deduplicating store of enum declarations for one generation run."""

from __future__ import annotations

import logging
from typing import Iterator

from ..shared.errors import EnumCollisionError

logger = logging.getLogger(__name__)


class EnumRegistry:
    """Enum declarations keyed by their derived name.

    Entries are only ever added; :meth:`reset` clears everything before an
    independent run. Inserting a key that already holds the same
    declaration is a no-op. Inserting a key that holds a *different*
    declaration raises :class:`EnumCollisionError` when ``strict`` is set,
    otherwise the first declaration is kept and a warning is logged.
    """

    __slots__ = ("_entries", "strict")

    def __init__(self, *, strict: bool = True) -> None:
        self._entries: dict[str, str] = {}
        self.strict = strict

    def lookup(self, key: str) -> str | None:
        return self._entries.get(key)

    def insert(self, key: str, declaration: str) -> None:
        existing = self._entries.get(key)
        if existing is None:
            logger.debug("Registered enum %s", key)
            self._entries[key] = declaration
            return
        if existing == declaration:
            return
        if self.strict:
            raise EnumCollisionError(key, existing, declaration)
        logger.warning(
            "Enum name collision on %s, keeping %r and dropping %r",
            key,
            existing,
            declaration,
        )

    def reset(self) -> None:
        self._entries.clear()

    def all_declarations(self) -> list[str]:
        """Return every declaration once, in insertion order."""
        return list(self._entries.values())

    def keys(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
