from schemalint.sources.contract import FieldSource
from schemalint.sources.python_source import PythonFieldSource, underscore
from schemalint.sources.registry import (
    known_extensions,
    register_source,
    resolve_source,
    source_for_extension,
    source_for_language,
)

__all__ = [
    "FieldSource",
    "PythonFieldSource",
    "known_extensions",
    "register_source",
    "resolve_source",
    "source_for_extension",
    "source_for_language",
    "underscore",
]
