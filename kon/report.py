"""
JSON-отчёт о прогоне (флаг --json).

Pydantic-модели описывают результат: значение либо список диагностик.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .errors import KonError
from .interpreter.errors import InterpreterError, InterpreterErrors
from .interpreter.values import Value

FORMAT_VERSION = 1


class DiagnosticEntry(BaseModel):
    kind: str
    message: str
    line: Optional[int] = None
    column: Optional[int] = None
    text: str


class RunReport(BaseModel):
    formatVersion: int = FORMAT_VERSION
    source: str
    ok: bool
    value: Optional[str] = None
    valueType: Optional[str] = None
    summary: Optional[str] = None
    errors: List[DiagnosticEntry] = Field(default_factory=list)
    tokens: Optional[str] = None
    ast: Optional[str] = None


def diagnostic_entry(error: InterpreterError) -> DiagnosticEntry:
    return DiagnosticEntry(
        kind=error.kind.value,
        message=error.message,
        line=error.position.line if error.position else None,
        column=error.position.column if error.position else None,
        text=str(error),
    )


def success_report(source: str, value: Value, *, tokens: Optional[str] = None, ast: Optional[str] = None) -> RunReport:
    return RunReport(
        source=source,
        ok=True,
        value=str(value),
        valueType=value.type.value,
        tokens=tokens,
        ast=ast,
    )


def failure_report(source: str, error: KonError, *, tokens: Optional[str] = None, ast: Optional[str] = None) -> RunReport:
    """
    Отчёт о неудачном прогоне.

    InterpreterErrors раскрывается в список диагностик со сводкой,
    одиночная InterpreterError даёт одну запись, прочие KonError - только сводку.
    """
    if isinstance(error, InterpreterErrors):
        entries = [diagnostic_entry(e) for e in error.errors]
    elif isinstance(error, InterpreterError):
        entries = [diagnostic_entry(error)]
    else:
        entries = []

    return RunReport(
        source=source,
        ok=False,
        summary=str(error),
        errors=entries,
        tokens=tokens,
        ast=ast,
    )


__all__ = ["DiagnosticEntry", "RunReport", "diagnostic_entry", "success_report", "failure_report"]
