from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .error_handler import ErrorHandler
from .evaluator import Evaluator
from .lexer import Lexer
from .parser import Parser
from .tokens import Token
from .values import Value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunOptions:
    """Отладочные переключатели прогона."""
    show_tokens: bool = False
    show_ast: bool = False


def dump_tokens(tokens: List[Token]) -> str:
    """Дамп токенов: по одному на строку."""
    return "".join(f"{token.describe()}\n" for token in tokens)


class Interpreter:
    """
    Оркестратор прогона: scan → parse → evaluate, строго последовательно.

    Владеет ErrorHandler и очищает его в начале каждого прогона.
    Вычисление выполняется, только если лексер и парсер не нашли ошибок.
    """

    def __init__(self, options: Optional[RunOptions] = None):
        self.options = options or RunOptions()
        self.error_handler = ErrorHandler()

        # Дампы последнего прогона (заполняются по отладочным флагам)
        self.token_dump: Optional[str] = None
        self.tree_dump: Optional[str] = None

    def run(self, source: str, name: str = "stdio") -> Value:
        """
        Выполняет исходный текст.

        Args:
            source: Исходный текст
            name: Имя источника для логов (файл или stdio)

        Returns:
            Значение выражения

        Raises:
            InterpreterErrors: Если лексер или парсер записали диагностики
            InterpreterError: При ошибке вычисления
        """
        self.error_handler.clear()
        self.token_dump = None
        self.tree_dump = None

        logger.debug(f"Running '{name}' ({len(source)} chars)")

        tokens = Lexer(self.error_handler).scan(source)
        if self.options.show_tokens:
            self.token_dump = dump_tokens(tokens)

        tree = Parser(self.error_handler).parse(tokens)
        if self.options.show_ast:
            self.tree_dump = tree.root.pretty_print()

        self.error_handler.try_report_errors()

        value = Evaluator().evaluate(tree.root)
        logger.debug(f"'{name}' evaluated to {value.type.value} {value}")
        return value


__all__ = ["RunOptions", "Interpreter", "dump_tokens"]
