"""Lint rules for schema-object type definitions."""

from schemalint.rules.extract_type import (
    RULE_ID,
    check_fields,
    collect_diagnostics,
    fractured_prefixes,
    select_groups,
)

__all__ = [
    "RULE_ID",
    "check_fields",
    "collect_diagnostics",
    "fractured_prefixes",
    "select_groups",
]
