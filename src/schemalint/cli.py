from __future__ import annotations

from pathlib import Path
from typing import List, Optional
import inspect

import typer

from schemalint import __version__
from schemalint.config import LintSettings, TomlTable, build_settings, load_config
from schemalint.exceptions import ConfigError
from schemalint.rules import extract_type
from schemalint.runner import LintResult, lint_paths, render_lint_line
from schemalint.schema import CheckResponse, ParseFailureDTO, diagnostic_dto

app = typer.Typer(add_completion=False)

_OUTPUT_FORMATS = ("text", "json")
_EXIT_VIOLATIONS = 1
_EXIT_USAGE = 2


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"schemalint {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Lint GraphQL schema types for fields that belong in a nested type."""


def _rule_overrides(
    max_fields: int | None,
    prefixes: list[str] | None,
    clear_prefixes: bool,
) -> TomlTable:
    overrides: TomlTable = {"MaxFields": max_fields, "Prefixes": None}
    if clear_prefixes:
        overrides["Prefixes"] = list(prefixes or [])
    return overrides


def _load_settings(
    *,
    root: Path,
    config: Path | None,
    overrides: TomlTable | None = None,
    extra_prefixes: list[str] | None = None,
) -> LintSettings:
    try:
        return build_settings(
            load_config(root=root, config_path=config),
            overrides,
            extra_prefixes=extra_prefixes or (),
        )
    except ConfigError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(code=_EXIT_USAGE) from exc


def _check_response(result: LintResult) -> CheckResponse:
    return CheckResponse(
        diagnostics=[diagnostic_dto(diagnostic) for diagnostic in result.diagnostics],
        parse_failures=[
            ParseFailureDTO(path=str(failure.path), error=failure.error)
            for failure in result.parse_failures
        ],
        stats={
            "files": result.files,
            "types": result.types,
            "diagnostics": len(result.diagnostics),
        },
    )


def _emit_text(result: LintResult) -> None:
    for diagnostic in result.diagnostics:
        typer.echo(render_lint_line(diagnostic))
    for failure in result.parse_failures:
        typer.echo(f"{failure.path}: skipped: {failure.error}", err=True)
    if result.diagnostics:
        typer.echo(
            f"Found {len(result.diagnostics)} violation(s) in {result.files} file(s).",
            err=True,
        )


@app.command("check")
def check(
    paths: Optional[List[Path]] = typer.Argument(
        None, help="Files or directories to lint (defaults to --root)."
    ),
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
    max_fields: Optional[int] = typer.Option(
        None, "--max-fields", min=1, help="Minimum group size that triggers a report."
    ),
    prefix: Optional[List[str]] = typer.Option(
        None, "--prefix", help="Add an allow-listed prefix to the configured ones; repeatable."
    ),
    clear_prefixes: bool = typer.Option(
        False, "--clear-prefixes", help="Ignore configured prefixes; only --prefix values are allow-listed."
    ),
    output_format: str = typer.Option("text", "--format"),
    fail_on_violations: bool = typer.Option(
        True, "--fail-on-violations/--no-fail-on-violations"
    ),
) -> None:
    """Report same-prefix field groups that should become a nested type."""
    if output_format not in _OUTPUT_FORMATS:
        typer.echo(
            f"Unknown format {output_format!r}; expected one of {', '.join(_OUTPUT_FORMATS)}.",
            err=True,
        )
        raise typer.Exit(code=_EXIT_USAGE)
    settings = _load_settings(
        root=root,
        config=config,
        overrides=_rule_overrides(max_fields, prefix, clear_prefixes),
        extra_prefixes=None if clear_prefixes else prefix,
    )
    result = lint_paths(paths or [root], settings)
    if output_format == "json":
        typer.echo(_check_response(result).model_dump_json(indent=2))
    else:
        _emit_text(result)
    if result.diagnostics and fail_on_violations:
        raise typer.Exit(code=_EXIT_VIOLATIONS)


@app.command("explain")
def explain(
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
) -> None:
    """Describe the extract-type rule and its effective configuration."""
    settings = _load_settings(root=root, config=config)
    rule = settings.extract_type
    typer.echo(f"{extract_type.RULE_ID}: {inspect.getdoc(extract_type)}")
    typer.echo("")
    typer.echo(f"Enabled: {str(rule.enabled).lower()}")
    typer.echo(f"MaxFields: {rule.max_fields}")
    typer.echo(f"Prefixes: {', '.join(sorted(rule.prefixes)) or '(none)'}")
