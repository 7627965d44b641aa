from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from schemalint.config import LintSettings
from schemalint.exceptions import SourceParseError
from schemalint.model import DeclarationRef, Diagnostic, TypeDefinition
from schemalint.rules.extract_type import RULE_ID, check_fields
from schemalint.sources.registry import resolve_source

_SUPPRESS_RE = re.compile(r"#\s*schemalint:\s*ignore(?:\[(?P<rules>[^\]]*)\])?")


@dataclass(frozen=True)
class ParseFailure:
    path: Path
    error: str


@dataclass
class LintResult:
    diagnostics: list[Diagnostic] = field(default_factory=list)
    parse_failures: list[ParseFailure] = field(default_factory=list)
    files: int = 0
    types: int = 0


def iter_source_paths(paths: Iterable[Path | str], *, settings: LintSettings) -> list[Path]:
    """Expand input paths to lintable files, pruning excluded directories early."""
    out: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            for root, dirnames, filenames in os.walk(path, topdown=True):
                dirnames[:] = sorted(d for d in dirnames if d not in settings.exclude_dirs)
                for filename in sorted(filenames):
                    candidate = Path(root) / filename
                    if resolve_source(candidate) is None:
                        continue
                    out.append(candidate)
        else:
            if settings.is_ignored_path(path):
                continue
            out.append(path)
    return sorted(set(out))


def _suppressed_rules(line: str) -> set[str] | None:
    """Return the rules silenced on ``line``; an empty set silences every rule."""
    match = _SUPPRESS_RE.search(line)
    if match is None:
        return None
    rules = match.group("rules")
    if rules is None:
        return set()
    return {rule.strip() for rule in rules.split(",") if rule.strip()}


def _is_suppressed(lines: list[str], line_no: int, rule: str) -> bool:
    if not 1 <= line_no <= len(lines):
        return False
    rules = _suppressed_rules(lines[line_no - 1])
    if rules is None:
        return False
    return not rules or rule in rules


def lint_type(
    definition: TypeDefinition,
    settings: LintSettings,
    *,
    source_lines: list[str] | None = None,
) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    check_fields(definition.fields, settings.extract_type, diagnostics.append)
    if not source_lines:
        return diagnostics
    if _is_suppressed(source_lines, definition.ref.line, RULE_ID):
        return []
    return [
        diagnostic
        for diagnostic in diagnostics
        if not (
            isinstance(diagnostic.location, DeclarationRef)
            and _is_suppressed(source_lines, diagnostic.location.line, diagnostic.rule)
        )
    ]


def lint_file(path: Path, settings: LintSettings, result: LintResult) -> None:
    source = resolve_source(path)
    if source is None:
        return
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        result.parse_failures.append(ParseFailure(path=path, error=str(exc)))
        return
    try:
        definitions = list(source.iter_types(path, text, settings=settings))
    except SourceParseError as exc:
        result.parse_failures.append(ParseFailure(path=path, error=exc.reason))
        return
    result.files += 1
    lines = text.splitlines()
    for definition in definitions:
        result.types += 1
        result.diagnostics.extend(lint_type(definition, settings, source_lines=lines))


def lint_paths(paths: Iterable[Path | str], settings: LintSettings) -> LintResult:
    result = LintResult()
    for path in iter_source_paths(paths, settings=settings):
        lint_file(path, settings, result)
    return result


def render_lint_line(diagnostic: Diagnostic) -> str:
    location = diagnostic.location
    if isinstance(location, DeclarationRef):
        return f"{location.path}:{location.line}:{location.column}: {diagnostic.rule} {diagnostic.message}"
    return f"{location}: {diagnostic.rule} {diagnostic.message}"
