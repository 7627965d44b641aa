"""Exception types raised at schemalint boundaries."""

from __future__ import annotations

from pathlib import Path


class SchemalintError(Exception):
    """Base class for errors surfaced to the CLI."""


class ConfigError(SchemalintError, ValueError):
    """Configuration could not be read or failed validation.

    ``key`` names the offending option when the failure is tied to one value,
    so the CLI can point the user at the exact table entry.
    """

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class SourceParseError(SchemalintError):
    def __init__(self, path: Path | str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = Path(path)
        self.reason = message


class UnknownSourceError(SchemalintError, LookupError):
    def __init__(self, language_id: str) -> None:
        super().__init__(f"unknown field source: {language_id}")
        self.language_id = language_id
