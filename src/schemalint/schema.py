from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel

from schemalint.model import DeclarationRef, Diagnostic


class DiagnosticDTO(BaseModel):
    path: str
    line: int
    column: int
    type_name: str = ""
    rule: str
    prefix: str
    fields: List[str]
    message: str


class ParseFailureDTO(BaseModel):
    path: str
    error: str


class CheckResponse(BaseModel):
    diagnostics: List[DiagnosticDTO] = []
    parse_failures: List[ParseFailureDTO] = []
    stats: Dict[str, int] = {}


def diagnostic_dto(diagnostic: Diagnostic) -> DiagnosticDTO:
    location = diagnostic.location
    if isinstance(location, DeclarationRef):
        path, line, column, type_name = str(location.path), location.line, location.column, location.type_name
    else:
        path, line, column, type_name = str(location), 0, 0, ""
    return DiagnosticDTO(
        path=path,
        line=line,
        column=column,
        type_name=type_name,
        rule=diagnostic.rule,
        prefix=diagnostic.prefix,
        fields=list(diagnostic.field_names),
        message=diagnostic.message,
    )
