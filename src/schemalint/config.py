from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from pathlib import Path
from typing import Iterable, TypeAlias
import tomllib

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from schemalint.exceptions import ConfigError
from schemalint.model import DEFAULT_MAX_FIELDS, DEFAULT_PREFIXES, ExtractTypeConfig

DEFAULT_CONFIG_NAME = "schemalint.toml"
PYPROJECT_NAME = "pyproject.toml"
RULE_SECTION_NAMES = ("extract_type", "GraphQL/ExtractType")

DEFAULT_EXCLUDE_DIRS = (".git", ".venv", "venv", "__pycache__", "node_modules", "build", "dist")
DEFAULT_BASE_CLASSES = ("ObjectType", "InputObjectType", "Interface", "BaseObject")
DEFAULT_DECORATORS = (
    "strawberry.type",
    "strawberry.input",
    "strawberry.interface",
    "strawberry.federation.type",
    "type",
    "input",
    "interface",
)

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


class ExtractTypeOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    enabled: bool = Field(True, alias="Enabled")
    max_fields: int = Field(DEFAULT_MAX_FIELDS, ge=1, strict=True, alias="MaxFields")
    prefixes: list[str] = Field(default_factory=lambda: list(DEFAULT_PREFIXES), alias="Prefixes")

    @field_validator("prefixes", mode="before")
    @classmethod
    def _split_prefixes(cls, value: object) -> object:
        if isinstance(value, str):
            return _normalize_name_list(value)
        return value

    @field_validator("prefixes")
    @classmethod
    def _strip_prefixes(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item.strip()]


@dataclass(frozen=True)
class LintSettings:
    extract_type: ExtractTypeConfig = field(default_factory=ExtractTypeConfig)
    exclude_dirs: frozenset[str] = frozenset(DEFAULT_EXCLUDE_DIRS)
    base_classes: tuple[str, ...] = DEFAULT_BASE_CLASSES
    decorators: tuple[str, ...] = DEFAULT_DECORATORS

    def is_ignored_path(self, path: Path) -> bool:
        return bool(self.exclude_dirs & set(path.parts))


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML: {exc}") from exc
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    """Read the schemalint table from an explicit file or from ``root``.

    ``schemalint.toml`` wins over ``[tool.schemalint]`` in ``pyproject.toml``.
    """
    if config_path is not None:
        data = _load_toml(config_path)
        if config_path.name == PYPROJECT_NAME:
            return _tool_table(data)
        return data
    base = root if root is not None else Path.cwd()
    dedicated = base / DEFAULT_CONFIG_NAME
    if dedicated.is_file():
        return _load_toml(dedicated)
    return _tool_table(_load_toml(base / PYPROJECT_NAME))


def _tool_table(data: TomlTable) -> TomlTable:
    tool = data.get("tool", {})
    if not isinstance(tool, dict):
        return {}
    section = tool.get("schemalint", {})
    return section if isinstance(section, dict) else {}


def extract_type_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    return rule_section(data)


def rule_section(data: TomlTable) -> TomlTable:
    for name in RULE_SECTION_NAMES:
        section = data.get(name)
        if isinstance(section, dict):
            return section
    return {}


def _normalize_name_list(value: TomlValue) -> list[str]:
    items: list[str] = []
    if value is None:
        return items
    if isinstance(value, str):
        items = [part.strip() for part in value.split(",") if part.strip()]
    elif isinstance(value, (list, tuple, set)):
        for item in value:
            if isinstance(item, str):
                items.extend([part.strip() for part in item.split(",") if part.strip()])
    return [item for item in items if item]


def _name_tuple(data: TomlTable, key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    if key not in data:
        return default
    value = data[key]
    if not isinstance(value, (str, list)) or (
        isinstance(value, list) and not all(isinstance(item, str) for item in value)
    ):
        raise ConfigError(f"'{key}' must be a list of strings", key=key)
    return tuple(_normalize_name_list(value))


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def extract_type_config(section: TomlTable | None) -> ExtractTypeConfig:
    if section is None:
        return ExtractTypeConfig()
    if not isinstance(section, dict):
        raise ConfigError("rule configuration must be a table")
    try:
        options = ExtractTypeOptions.model_validate(section)
    except ValidationError as exc:
        error = exc.errors()[0]
        key = str(error["loc"][0]) if error.get("loc") else None
        raise ConfigError(f"invalid value for '{key}': {error['msg']}", key=key) from exc
    return ExtractTypeConfig(
        max_fields=options.max_fields,
        prefixes=frozenset(options.prefixes),
        enabled=options.enabled,
    )


def build_settings(
    data: TomlTable,
    overrides: TomlTable | None = None,
    *,
    extra_prefixes: Iterable[str] = (),
) -> LintSettings:
    """Validate a loaded config table, applying CLI ``overrides`` to the rule table.

    Override keys use the rule table spelling (``MaxFields``, ``Prefixes``);
    a ``None`` override means the option was not given. ``extra_prefixes``
    are added to the configured allow-list rather than replacing it.
    """
    section = rule_section(data)
    if overrides:
        section = merge_payload(overrides, _canonical_rule_keys(section))
    rule = extract_type_config(section)
    extra = frozenset(prefix.strip() for prefix in extra_prefixes if prefix.strip())
    if extra:
        rule = replace(rule, prefixes=rule.prefixes | extra)
    return LintSettings(
        extract_type=rule,
        exclude_dirs=frozenset(_name_tuple(data, "exclude", DEFAULT_EXCLUDE_DIRS)),
        base_classes=_name_tuple(data, "base_classes", DEFAULT_BASE_CLASSES),
        decorators=_name_tuple(data, "decorators", DEFAULT_DECORATORS),
    )


def _canonical_rule_keys(section: TomlTable) -> TomlTable:
    aliases = {
        "enabled": "Enabled",
        "max_fields": "MaxFields",
        "prefixes": "Prefixes",
    }
    return {aliases.get(key, key): value for key, value in section.items()}
