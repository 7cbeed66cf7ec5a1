"""
Модели дерева выражений.

Неизменяемые узлы AST: литерал, унарная и бинарная операции, группировка.
Узлы принадлежат дереву целиком, не разделяются и не образуют циклов.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List

from .tokens import LiteralToken, Literal, Position, SymbolToken, Token

INDENT_STEP = 2


class ExpressionType(Enum):
    """Типы узлов выражения."""
    LITERAL = "Literal"
    UNARY = "Unary"
    BINARY = "Binary"
    GROUPING = "Grouping"


@dataclass(frozen=True)
class Expression(ABC):
    """Базовый абстрактный класс для всех узлов выражения."""

    @abstractmethod
    def get_type(self) -> ExpressionType:
        """Возвращает тип узла."""
        pass

    def __str__(self) -> str:
        """Компактное представление: Binary(+, Literal(1), Literal(2))."""
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass

    def pretty_print(self, indent: int = 0) -> str:
        """Многострочный дамп с отступами - по узлу на строку."""
        return "\n".join(self._pretty_lines(indent)) + "\n"

    @abstractmethod
    def _pretty_lines(self, indent: int) -> List[str]:
        pass


@dataclass(frozen=True)
class LiteralExpression(Expression):
    """
    Литерал: число, строка, идентификатор или Void.

    Также служит заглушкой, которую парсер подставляет на место
    отсутствующего операнда.
    """
    token: LiteralToken

    def get_type(self) -> ExpressionType:
        return ExpressionType.LITERAL

    def _to_string(self) -> str:
        return f"Literal({self.token.literal.source_text})"

    def _pretty_lines(self, indent: int) -> List[str]:
        return [f"{' ' * indent}Literal: {self.token.literal.source_text}"]

    @classmethod
    def placeholder(cls, position: Position) -> "LiteralExpression":
        return cls(LiteralToken(Literal.void(), position))


@dataclass(frozen=True)
class UnaryExpression(Expression):
    """Префиксная операция: `-x`, `!x`."""
    operator: SymbolToken
    operand: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.UNARY

    def _to_string(self) -> str:
        return f"Unary({self.operator.lexeme}, {self.operand})"

    def _pretty_lines(self, indent: int) -> List[str]:
        return [f"{' ' * indent}Unary: {self.operator.lexeme}"] + self.operand._pretty_lines(indent + INDENT_STEP)


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """
    Бинарная операция: left op right

    Все бинарные уровни грамматики левоассоциативны.
    """
    operator: SymbolToken
    left: Expression
    right: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.BINARY

    def _to_string(self) -> str:
        return f"Binary({self.operator.lexeme}, {self.left}, {self.right})"

    def _pretty_lines(self, indent: int) -> List[str]:
        return (
            [f"{' ' * indent}Binary: {self.operator.lexeme}"]
            + self.left._pretty_lines(indent + INDENT_STEP)
            + self.right._pretty_lines(indent + INDENT_STEP)
        )


@dataclass(frozen=True)
class GroupingExpression(Expression):
    """Группа в скобках `(...)` или `{...}`; значение равно значению операнда."""
    operand: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.GROUPING

    def _to_string(self) -> str:
        return f"Grouping({self.operand})"

    def _pretty_lines(self, indent: int) -> List[str]:
        return [f"{' ' * indent}Grouping"] + self.operand._pretty_lines(indent + INDENT_STEP)


@dataclass(frozen=True)
class SyntaxTree:
    """Результат парсинга: корень и EndOfFile-токен прогона."""
    root: Expression
    eof: Token

    def __str__(self) -> str:
        return self.root.pretty_print()


__all__ = [
    "ExpressionType",
    "Expression",
    "LiteralExpression",
    "UnaryExpression",
    "BinaryExpression",
    "GroupingExpression",
    "SyntaxTree",
]
