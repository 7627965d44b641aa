from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from schemalint import __version__, cli

SCHEMA = """
import graphene


class UserType(graphene.ObjectType):
    registered_at = graphene.String()
    contact_phone = graphene.String()
    contact_email = graphene.String()
"""


def _invoke(args: list[str]):
    return CliRunner().invoke(cli.app, args)


def test_cli_version() -> None:
    result = _invoke(["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_check_reports_violations(tmp_path: Path, write_source) -> None:
    path = write_source(tmp_path / "user.py", SCHEMA)
    result = _invoke(["check", str(path), "--root", str(tmp_path)])
    assert result.exit_code == 1
    assert f"{path}:7:5: extract-type Consider moving contact_phone, contact_email" in result.output


def test_check_clean_tree_exits_zero(tmp_path: Path, write_source) -> None:
    write_source(tmp_path / "user.py", SCHEMA)
    result = _invoke(["check", "--root", str(tmp_path), "--max-fields", "3"])
    assert result.exit_code == 0
    assert "extract-type" not in result.output


def test_check_prefix_option_allow_lists(tmp_path: Path, write_source) -> None:
    write_source(tmp_path / "user.py", SCHEMA)
    result = _invoke(["check", "--root", str(tmp_path), "--prefix", "contact"])
    assert result.exit_code == 0


def test_check_clear_prefixes_reports_default_prefix(tmp_path: Path, write_source) -> None:
    write_source(
        tmp_path / "flags.py",
        """
        class Flags(ObjectType):
            is_active = Boolean()
            is_admin = Boolean()
        """,
    )
    assert _invoke(["check", "--root", str(tmp_path)]).exit_code == 0
    result = _invoke(["check", "--root", str(tmp_path), "--clear-prefixes"])
    assert result.exit_code == 1
    assert "adding the 'is' field" in result.output


def test_check_no_fail_on_violations(tmp_path: Path, write_source) -> None:
    write_source(tmp_path / "user.py", SCHEMA)
    result = _invoke(
        ["check", "--root", str(tmp_path), "--no-fail-on-violations"]
    )
    assert result.exit_code == 0
    assert "extract-type" in result.output


def test_check_json_output(tmp_path: Path, write_source) -> None:
    write_source(tmp_path / "user.py", SCHEMA)
    write_source(tmp_path / "broken.py", "class Broken(ObjectType:\n    pass")
    result = _invoke(["check", "--root", str(tmp_path), "--format", "json"])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["stats"] == {"files": 1, "types": 1, "diagnostics": 1}
    diagnostic = payload["diagnostics"][0]
    assert diagnostic["prefix"] == "contact"
    assert diagnostic["fields"] == ["contact_phone", "contact_email"]
    assert diagnostic["line"] == 7
    assert diagnostic["type_name"] == "UserType"
    assert payload["parse_failures"][0]["path"].endswith("broken.py")


def test_check_reads_config_file(tmp_path: Path, write_source) -> None:
    write_source(tmp_path / "user.py", SCHEMA)
    write_source(tmp_path / "schemalint.toml", "[extract_type]\nMaxFields = 3\n")
    assert _invoke(["check", "--root", str(tmp_path)]).exit_code == 0


def test_check_invalid_config_exits_two(tmp_path: Path, write_source) -> None:
    write_source(tmp_path / "user.py", SCHEMA)
    write_source(tmp_path / "schemalint.toml", "[extract_type]\nMaxFields = 0\n")
    result = _invoke(["check", "--root", str(tmp_path)])
    assert result.exit_code == 2
    assert "MaxFields" in result.output


def test_check_unknown_format_exits_two(tmp_path: Path) -> None:
    result = _invoke(["check", "--root", str(tmp_path), "--format", "xml"])
    assert result.exit_code == 2


def test_explain_shows_effective_configuration(tmp_path: Path, write_source) -> None:
    write_source(tmp_path / "schemalint.toml", "[extract_type]\nPrefixes = []\n")
    result = _invoke(["explain", "--root", str(tmp_path)])
    assert result.exit_code == 0
    assert "extract-type:" in result.output
    assert "MaxFields: 2" in result.output
    assert "Prefixes: (none)" in result.output


def test_check_prefix_option_extends_configured_prefixes(tmp_path: Path, write_source) -> None:
    write_source(
        tmp_path / "account.py",
        """
        class Account(ObjectType):
            is_active = Boolean()
            is_admin = Boolean()
            contact_phone = String()
            contact_email = String()
        """,
    )
    write_source(tmp_path / "schemalint.toml", '[extract_type]\nPrefixes = ["is"]\n')
    result = _invoke(["check", "--root", str(tmp_path), "--prefix", "contact"])
    assert result.exit_code == 0
    assert "extract-type" not in result.output


def test_check_clear_prefixes_keeps_only_given_prefixes(tmp_path: Path, write_source) -> None:
    write_source(
        tmp_path / "account.py",
        """
        class Account(ObjectType):
            is_active = Boolean()
            is_admin = Boolean()
            contact_phone = String()
            contact_email = String()
        """,
    )
    write_source(tmp_path / "schemalint.toml", '[extract_type]\nPrefixes = ["is"]\n')
    result = _invoke(
        ["check", "--root", str(tmp_path), "--clear-prefixes", "--prefix", "contact"]
    )
    assert result.exit_code == 1
    assert "adding the 'is' field" in result.output
    assert "adding the 'contact' field" not in result.output
