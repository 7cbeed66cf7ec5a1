"""
Диагностики интерпретатора.

InterpreterError - одна позиционированная диагностика. Лексер и парсер
накапливают их в ErrorHandler, вычислитель поднимает их немедленно.
InterpreterErrors - сводная ошибка прогона с накопленным списком.
"""

from __future__ import annotations

import enum
from typing import List, Optional, Sequence

from ..errors import KonError
from .tokens import Position


class DiagnosticKind(enum.Enum):
    """Замкнутый набор видов диагностик."""
    UNKNOWN_TOKEN = "UnknownToken"
    SYNTAX_ERROR = "SyntaxError"
    UNTERMINATED_STRING = "UnterminatedString"
    PARSE_ERROR = "ParseError"
    UNMATCHED_DELIMITER = "UnmatchedDelimiter"
    UNKNOWN_OPERATOR = "UnknownOperator"
    OTHER = "Other"


class InterpreterError(KonError):
    """
    Структурированная диагностика с позицией и контекстным текстом.

    Attributes:
        kind: Вид диагностики
        position: Позиция в исходнике (None только для OTHER)
        message: Текст без позиции
        subject: Лексема, о которой идёт речь (токен, разделитель, оператор)
    """

    def __init__(
        self,
        kind: DiagnosticKind,
        message: str,
        position: Optional[Position] = None,
        subject: Optional[str] = None,
    ):
        self.kind = kind
        self.message = message
        self.position = position
        self.subject = subject
        super().__init__(self._render())

    def _render(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} {self.position}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InterpreterError):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.message == other.message
            and self.position == other.position
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.message, self.position))

    def __repr__(self) -> str:
        return f"InterpreterError({self.kind.value}, {str(self)!r})"

    # ---- Конструкторы по видам ----

    @classmethod
    def unknown_token(cls, position: Position, token: str) -> "InterpreterError":
        return cls(DiagnosticKind.UNKNOWN_TOKEN, f"Unknown token `{token}`", position, token)

    @classmethod
    def syntax_error(cls, position: Position, message: str) -> "InterpreterError":
        return cls(DiagnosticKind.SYNTAX_ERROR, message, position)

    @classmethod
    def unterminated_string(cls, position: Position) -> "InterpreterError":
        return cls(DiagnosticKind.UNTERMINATED_STRING, "Unterminated string", position)

    @classmethod
    def parse_error(cls, position: Position, message: str, token: Optional[str] = None) -> "InterpreterError":
        return cls(DiagnosticKind.PARSE_ERROR, message, position, token)

    @classmethod
    def unmatched_delimiter(cls, position: Position, delimiter: str) -> "InterpreterError":
        return cls(DiagnosticKind.UNMATCHED_DELIMITER, f"Unmatched `{delimiter}`", position, delimiter)

    @classmethod
    def unknown_operator(cls, position: Position, operator: str) -> "InterpreterError":
        return cls(DiagnosticKind.UNKNOWN_OPERATOR, f"Unknown operator `{operator}`", position, operator)

    @classmethod
    def other(cls, message: str) -> "InterpreterError":
        return cls(DiagnosticKind.OTHER, message)


class InterpreterErrors(KonError):
    """Сводная ошибка: лексер и/или парсер нашли хотя бы одну проблему."""

    def __init__(self, errors: Sequence[InterpreterError]):
        self.errors: List[InterpreterError] = list(errors)
        super().__init__(f"interpreter caught {len(self.errors)} error(s)")

    def report_lines(self) -> List[str]:
        """Все диагностики по строке на каждую, затем сводка."""
        return [str(e) for e in self.errors] + [str(self)]


__all__ = ["DiagnosticKind", "InterpreterError", "InterpreterErrors"]
