from __future__ import annotations

from pathlib import Path
import textwrap

import pytest

from schemalint.config import LintSettings
from schemalint.exceptions import SourceParseError
from schemalint.model import DeclarationRef
from schemalint.sources import PythonFieldSource, underscore


def _types(text: str, settings: LintSettings | None = None):
    source = textwrap.dedent(text).strip() + "\n"
    return list(
        PythonFieldSource().iter_types(
            Path("schema.py"), source, settings=settings or LintSettings()
        )
    )


def test_graphene_fields_in_declaration_order() -> None:
    types = _types(
        """
        import graphene
        from typing import ClassVar


        class UserType(graphene.ObjectType):
            registered_at = graphene.String()
            contact_phone = graphene.String()
            contactFirstName = graphene.String()
            last = graphene.String(name="contactLastName")
            _cache = graphene.String()
            LIMIT: ClassVar[int] = 3
            label = "user"

            class Meta:
                description = "User"

            def resolve_contact_phone(self, info):
                return ""
        """
    )
    assert [t.name for t in types] == ["UserType"]
    user = types[0]
    assert user.ref == DeclarationRef(Path("schema.py"), 5, 7, "UserType")
    assert [f.name for f in user.fields] == [
        "registered_at",
        "contact_phone",
        "contact_first_name",
        "contact_last_name",
    ]
    assert user.fields[1].declaration_ref == DeclarationRef(
        Path("schema.py"), 7, 5, "UserType"
    )


def test_strawberry_annotated_fields() -> None:
    types = _types(
        """
        import strawberry


        @strawberry.type
        class Query:
            contact_phone: str
            contact_email: str = strawberry.field(name="contactMail")

            @strawberry.field
            def contact_fax(self) -> str:
                return ""
        """
    )
    assert [f.name for f in types[0].fields] == ["contact_phone", "contact_mail"]


def test_decorator_call_marks_schema_type() -> None:
    types = _types(
        """
        import strawberry


        @strawberry.input(name="UserInput")
        class UserInput:
            contact_phone: str
        """
    )
    assert [t.name for t in types] == ["UserInput"]


def test_plain_classes_are_ignored() -> None:
    assert _types(
        """
        class Settings:
            contact_phone: str
            contact_email: str
        """
    ) == []


def test_nested_schema_types_are_qualified() -> None:
    types = _types(
        """
        class Outer(ObjectType):
            outer_a = Field(String)

            class Inner(graphene.InputObjectType):
                inner_a = String()
        """
    )
    assert [t.name for t in types] == ["Outer", "Outer.Inner"]
    assert [f.name for f in types[0].fields] == ["outer_a"]
    assert [f.name for f in types[1].fields] == ["inner_a"]


def test_configured_base_classes_are_honored() -> None:
    settings = LintSettings(base_classes=("Node",), decorators=())
    types = _types(
        """
        class Account(relay.Node):
            owner_name = String()


        class Skipped(graphene.ObjectType):
            owner_name = String()
        """,
        settings,
    )
    assert [t.name for t in types] == ["Account"]


def test_single_line_class_body() -> None:
    types = _types("class Tiny(ObjectType): tiny_a = String(); tiny_b = String()")
    assert [f.name for f in types[0].fields] == ["tiny_a", "tiny_b"]


def test_syntax_error_raises_source_parse_error() -> None:
    with pytest.raises(SourceParseError) as excinfo:
        _types("class Broken(ObjectType:\n    pass")
    assert excinfo.value.path == Path("schema.py")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("contactPhone", "contact_phone"),
        ("HTTPResponseCode", "http_response_code"),
        ("already_snake", "already_snake"),
        ("avgRating2", "avg_rating2"),
        ("dash-name", "dash_name"),
    ],
)
def test_underscore(value: str, expected: str) -> None:
    assert underscore(value) == expected


def test_private_name_override_is_skipped() -> None:
    types = _types(
        """
        class Hidden(ObjectType):
            contact_phone = String(name="_contact_phone")
            contact_email = String()
        """
    )
    assert [f.name for f in types[0].fields] == ["contact_email"]
