"""Suggest extracting same-prefix fields of a schema type into a nested type.

Bad::

    class UserType(graphene.ObjectType):
        registered_at = graphene.String()
        contact_phone = graphene.String()
        contact_first_name = graphene.String()
        contact_last_name = graphene.String()

Good::

    class ContactType(graphene.ObjectType):
        phone = graphene.String()
        first_name = graphene.String()
        last_name = graphene.String()

    class UserType(graphene.ObjectType):
        registered_at = graphene.String()
        contact = graphene.Field(ContactType)
"""

from __future__ import annotations

from typing import Callable, Collection, Dict, Iterable, Iterator, List, Mapping, Sequence

from schemalint.model import Diagnostic, ExtractTypeConfig, FieldDescriptor, PrefixGroup

RULE_ID = "extract-type"
SEPARATOR = "_"
MESSAGE = "Consider moving {field_names} to a new type and adding the '{prefix}' field instead"

Sink = Callable[[Diagnostic], None]


def fractured_prefixes(
    fields: Iterable[FieldDescriptor],
    prefixes: Collection[str] = (),
) -> Dict[str, List[FieldDescriptor]]:
    """Map every candidate prefix to the fields declared under it.

    A field named ``contact_home_phone`` lands under both ``contact`` and
    ``contact_home``. Allow-listed prefixes are not recorded, but longer
    prefixes built on top of them still are.
    """
    groups: Dict[str, List[FieldDescriptor]] = {}
    for item in fields:
        if SEPARATOR not in item.name:
            continue
        segments = item.name.split(SEPARATOR)[:-1]
        accumulated = ""
        for index, segment in enumerate(segments):
            accumulated = segment if index == 0 else f"{accumulated}{SEPARATOR}{segment}"
            if accumulated in prefixes:
                continue
            groups.setdefault(accumulated, []).append(item)
    return groups


def select_groups(
    prefix_map: Mapping[str, Sequence[FieldDescriptor]],
    max_fields: int,
) -> Iterator[PrefixGroup]:
    # sorted() is stable, so equal-length prefixes keep first-discovered order.
    ordered = sorted(prefix_map.items(), key=lambda pair: len(pair[0]), reverse=True)
    # Claimed by identity: declaration refs are opaque and need not be hashable.
    claimed: set[int] = set()
    for prefix, fields in ordered:
        remaining = tuple(item for item in fields if id(item) not in claimed)
        if len(remaining) < max_fields:
            continue
        claimed.update(id(item) for item in remaining)
        yield PrefixGroup(prefix=prefix, fields=remaining)


def message_for(group: PrefixGroup) -> str:
    return MESSAGE.format(field_names=", ".join(group.field_names), prefix=group.prefix)


def diagnostic_for(group: PrefixGroup) -> Diagnostic:
    return Diagnostic(
        message=message_for(group),
        location=group.fields[-1].declaration_ref,
        rule=RULE_ID,
        prefix=group.prefix,
        field_names=group.field_names,
    )


def check_fields(
    fields: Sequence[FieldDescriptor],
    config: ExtractTypeConfig,
    sink: Sink,
) -> None:
    """Report every extractable prefix group of one type body to ``sink``."""
    if not config.enabled:
        return
    prefix_map = fractured_prefixes(fields, config.prefixes)
    for group in select_groups(prefix_map, config.max_fields):
        sink(diagnostic_for(group))


def collect_diagnostics(
    fields: Sequence[FieldDescriptor],
    config: ExtractTypeConfig,
) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    check_fields(fields, config, diagnostics.append)
    return diagnostics
