from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Protocol, runtime_checkable

from schemalint.model import TypeDefinition

if TYPE_CHECKING:
    from schemalint.config import LintSettings


@runtime_checkable
class FieldSource(Protocol):
    language_id: str
    file_extensions: tuple[str, ...]

    def iter_types(
        self,
        path: Path,
        source: str,
        *,
        settings: LintSettings,
    ) -> Iterator[TypeDefinition]: ...
