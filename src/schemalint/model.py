from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

DEFAULT_PREFIXES: Tuple[str, ...] = ("is", "with", "avg", "min", "max")
DEFAULT_MAX_FIELDS = 2


@dataclass(frozen=True)
class DeclarationRef:
    path: Path
    line: int
    column: int
    type_name: str = ""


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    declaration_ref: object = None


@dataclass(frozen=True)
class TypeDefinition:
    name: str
    ref: DeclarationRef
    fields: Tuple[FieldDescriptor, ...] = ()


@dataclass(frozen=True)
class PrefixGroup:
    prefix: str
    fields: Tuple[FieldDescriptor, ...]

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(item.name for item in self.fields)


@dataclass(frozen=True)
class Diagnostic:
    message: str
    location: object
    rule: str
    prefix: str = ""
    field_names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ExtractTypeConfig:
    max_fields: int = DEFAULT_MAX_FIELDS
    prefixes: frozenset[str] = field(default_factory=lambda: frozenset(DEFAULT_PREFIXES))
    enabled: bool = True
