"""Supported source ecosystems."""

from __future__ import annotations

from enum import Enum

from cbom_scanner.exceptions import ConfigurationError


class Language(Enum):
    """Closed set of scannable languages.

    Member order is the default orchestration order.
    """

    JAVA = "java"
    PYTHON = "python"
    GO = "go"

    @classmethod
    def parse(cls, name: str) -> Language:
        """Look up a language by name, ignoring case and surrounding whitespace."""
        key = (name or "").strip().upper()
        try:
            return cls[key]
        except KeyError:
            known = ", ".join(m.name for m in cls)
            raise ConfigurationError(
                f"Unknown language '{name}' (expected one of: {known})"
            ) from None

    def __str__(self) -> str:
        return self.value
