from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Sequence

import libcst as cst
from libcst.metadata import MetadataWrapper, PositionProvider

from schemalint.exceptions import SourceParseError
from schemalint.model import DeclarationRef, FieldDescriptor, TypeDefinition

if TYPE_CHECKING:
    from schemalint.config import LintSettings

_ACRONYM_RE = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_CAMEL_RE = re.compile(r"([a-z\d])([A-Z])")
_CLASSVAR_NAMES = frozenset({"ClassVar", "typing.ClassVar"})


def underscore(name: str) -> str:
    """Normalize a declared name to snake_case (``contactPhone`` -> ``contact_phone``)."""
    value = _ACRONYM_RE.sub(r"\1_\2", name)
    value = _CAMEL_RE.sub(r"\1_\2", value)
    return value.replace("-", "_").lower()


def _dotted_name(node: cst.BaseExpression) -> str | None:
    if isinstance(node, cst.Name):
        return node.value
    if isinstance(node, cst.Attribute):
        owner = _dotted_name(node.value)
        if owner is None:
            return None
        return f"{owner}.{node.attr.value}"
    if isinstance(node, cst.Call):
        return _dotted_name(node.func)
    if isinstance(node, cst.Subscript):
        return _dotted_name(node.value)
    return None


def _matches_suffix(dotted: str | None, candidates: Sequence[str]) -> bool:
    if dotted is None:
        return False
    return any(dotted == name or dotted.endswith(f".{name}") for name in candidates)


def _declared_name_override(value: cst.BaseExpression | None) -> str | None:
    if not isinstance(value, cst.Call):
        return None
    for arg in value.args:
        if arg.keyword is None or arg.keyword.value != "name":
            continue
        if isinstance(arg.value, cst.SimpleString):
            evaluated = arg.value.evaluated_value
            if isinstance(evaluated, str) and evaluated:
                return evaluated
    return None


def _small_statements(body: cst.BaseSuite) -> Iterator[cst.BaseSmallStatement]:
    if isinstance(body, cst.SimpleStatementSuite):
        yield from body.body
        return
    for statement in body.body:
        if isinstance(statement, cst.SimpleStatementLine):
            yield from statement.body


class _TypeCollector(cst.CSTVisitor):
    METADATA_DEPENDENCIES = (PositionProvider,)

    def __init__(self, path: Path, settings: LintSettings) -> None:
        super().__init__()
        self.path = path
        self.settings = settings
        self.scope: list[str] = []
        self.types: list[TypeDefinition] = []

    def visit_ClassDef(self, node: cst.ClassDef) -> bool:
        self.scope.append(node.name.value)
        if self._is_schema_type(node):
            qualified = ".".join(self.scope)
            self.types.append(
                TypeDefinition(
                    name=qualified,
                    ref=self._ref(node.name, qualified),
                    fields=tuple(self._fields(node, qualified)),
                )
            )
        return True

    def leave_ClassDef(self, original_node: cst.ClassDef) -> None:
        self.scope.pop()

    def _is_schema_type(self, node: cst.ClassDef) -> bool:
        for base in node.bases:
            if base.keyword is None and _matches_suffix(
                _dotted_name(base.value), self.settings.base_classes
            ):
                return True
        decorators = set(self.settings.decorators)
        return any(
            _dotted_name(decorator.decorator) in decorators
            for decorator in node.decorators
        )

    def _fields(self, node: cst.ClassDef, type_name: str) -> Iterator[FieldDescriptor]:
        for statement in _small_statements(node.body):
            target: cst.BaseExpression | None = None
            value: cst.BaseExpression | None = None
            if isinstance(statement, cst.Assign):
                if len(statement.targets) != 1 or not isinstance(statement.value, cst.Call):
                    continue
                target = statement.targets[0].target
                value = statement.value
            elif isinstance(statement, cst.AnnAssign):
                annotation = _dotted_name(statement.annotation.annotation)
                if annotation in _CLASSVAR_NAMES:
                    continue
                target = statement.target
                value = statement.value
            if not isinstance(target, cst.Name) or target.value.startswith("_"):
                continue
            declared = _declared_name_override(value) or target.value
            if declared.startswith("_"):
                continue
            yield FieldDescriptor(
                name=underscore(declared),
                declaration_ref=self._ref(target, type_name),
            )

    def _ref(self, node: cst.CSTNode, type_name: str) -> DeclarationRef:
        start = self.get_metadata(PositionProvider, node).start
        return DeclarationRef(
            path=self.path,
            line=start.line,
            column=start.column + 1,
            type_name=type_name,
        )


class PythonFieldSource:
    language_id = "python"
    file_extensions = (".py", ".pyi")

    def iter_types(
        self,
        path: Path,
        source: str,
        *,
        settings: LintSettings,
    ) -> Iterator[TypeDefinition]:
        try:
            module = cst.parse_module(source)
        except cst.ParserSyntaxError as exc:
            raise SourceParseError(path, f"LibCST parse failed: {exc.message}") from exc
        wrapper = MetadataWrapper(module)
        collector = _TypeCollector(path, settings)
        wrapper.visit(collector)
        yield from collector.types
