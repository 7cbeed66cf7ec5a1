from __future__ import annotations

import logging
from typing import List

from .errors import DiagnosticKind, InterpreterError, InterpreterErrors

logger = logging.getLogger(__name__)


class ErrorHandler:
    """
    Упорядоченный сборщик диагностик одного прогона.

    Общий для лексера и парсера; владеет им Interpreter,
    который очищает его перед каждым новым прогоном.
    """

    def __init__(self):
        self._errors: List[InterpreterError] = []

    def push(self, error: InterpreterError) -> None:
        logger.debug(f"Recorded {error.kind.value}: {error}")
        self._errors.append(error)

    def had_error(self) -> bool:
        return bool(self._errors)

    @property
    def errors(self) -> List[InterpreterError]:
        return list(self._errors)

    def count(self, kind: DiagnosticKind) -> int:
        """Количество диагностик указанного вида."""
        return sum(1 for e in self._errors if e.kind == kind)

    def clear(self) -> None:
        self._errors.clear()

    def report_errors(self) -> InterpreterErrors:
        """Упаковывает накопленные диагностики в сводную ошибку (не поднимает её)."""
        return InterpreterErrors(self._errors)

    def try_report_errors(self) -> None:
        """
        Поднимает InterpreterErrors, если была хотя бы одна диагностика.

        Raises:
            InterpreterErrors: При непустом списке диагностик
        """
        if self.had_error():
            raise self.report_errors()

    def __len__(self) -> int:
        return len(self._errors)


__all__ = ["ErrorHandler"]
