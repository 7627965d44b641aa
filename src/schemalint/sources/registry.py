from __future__ import annotations

from pathlib import Path

from schemalint.exceptions import UnknownSourceError
from schemalint.sources.contract import FieldSource
from schemalint.sources.python_source import PythonFieldSource


_SOURCES_BY_LANGUAGE: dict[str, FieldSource] = {}
_SOURCES_BY_EXTENSION: dict[str, FieldSource] = {}


def register_source(source: FieldSource) -> None:
    _SOURCES_BY_LANGUAGE[source.language_id.lower()] = source
    for extension in source.file_extensions:
        _SOURCES_BY_EXTENSION[extension.lower()] = source


def source_for_language(language_id: str) -> FieldSource | None:
    return _SOURCES_BY_LANGUAGE.get(language_id.lower())


def source_for_extension(extension: str) -> FieldSource | None:
    return _SOURCES_BY_EXTENSION.get(extension.lower())


def known_extensions() -> tuple[str, ...]:
    return tuple(sorted(_SOURCES_BY_EXTENSION))


def resolve_source(path: Path, *, language_id: str | None = None) -> FieldSource | None:
    if language_id is not None:
        source = source_for_language(language_id)
        if source is None:
            raise UnknownSourceError(language_id)
        return source
    return source_for_extension(path.suffix)


register_source(PythonFieldSource())
