"""schemalint package root."""

from schemalint.exceptions import (
    ConfigError,
    SchemalintError,
    SourceParseError,
    UnknownSourceError,
)

__all__ = [
    "__version__",
    "ConfigError",
    "SchemalintError",
    "SourceParseError",
    "UnknownSourceError",
]

__version__ = "0.1.0"
