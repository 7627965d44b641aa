from __future__ import annotations

import sys
import textwrap
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))


import pytest

from schemalint.model import DeclarationRef, FieldDescriptor


@pytest.fixture
def make_fields():
    def _make(*names: str, path: str = "types.py") -> list[FieldDescriptor]:
        return [
            FieldDescriptor(
                name=name,
                declaration_ref=DeclarationRef(path=Path(path), line=index + 1, column=5),
            )
            for index, name in enumerate(names)
        ]

    return _make


@pytest.fixture
def write_source():
    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text).strip() + "\n", encoding="utf-8")
        return path

    return _write
