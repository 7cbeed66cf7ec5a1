"""
Вычислитель выражений.

Сначала всё дерево связывается (Binder), затем вычисляется связанное
дерево. Поэтому ошибка типа в любом месте выражения сообщается раньше
ошибки вычисления (деление на ноль, переполнение), даже если та стоит
левее: `(1 / 0) + ("a" - "b")` даёт ошибку про `-`. Внутри каждой фазы
обход идёт слева направо, и первая ошибка прерывает его.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, cast

from .binder import (
    Binder,
    BoundBinary,
    BoundBinaryOperatorKind,
    BoundExpression,
    BoundGrouping,
    BoundLiteral,
    BoundUnary,
    BoundUnaryOperatorKind,
)
from .errors import InterpreterError
from .model import Expression
from .tokens import SymbolToken
from .values import Value

_COMPARISONS: Dict[BoundBinaryOperatorKind, Callable[[object, object], bool]] = {
    BoundBinaryOperatorKind.LESS_THAN: lambda a, b: a < b,  # type: ignore[operator]
    BoundBinaryOperatorKind.GREATER_THAN: lambda a, b: a > b,  # type: ignore[operator]
    BoundBinaryOperatorKind.LESS_THAN_EQUALS: lambda a, b: a <= b,  # type: ignore[operator]
    BoundBinaryOperatorKind.GREATER_THAN_EQUALS: lambda a, b: a >= b,  # type: ignore[operator]
    BoundBinaryOperatorKind.EQUALS: lambda a, b: a == b,
    BoundBinaryOperatorKind.NOT_EQUALS: lambda a, b: a != b,
}


class Evaluator:
    """
    Вычислитель выражений по связанному дереву.

    Операнды вычисляются слева направо, без короткого замыкания.
    Арифметика, давшая бесконечность из конечных операндов, считается
    переполнением.
    """

    def __init__(self):
        self.binder = Binder()

    def evaluate(self, expression: Expression) -> Value:
        """
        Вычисляет значение выражения.

        Args:
            expression: Корень дерева выражения

        Returns:
            Значение результата

        Raises:
            InterpreterError: При несовпадении типов, неизвестном операторе,
                делении на ноль или переполнении
        """
        return self.evaluate_bound(self.binder.bind(expression))

    def evaluate_bound(self, node: BoundExpression) -> Value:
        if isinstance(node, BoundLiteral):
            return node.value
        elif isinstance(node, BoundGrouping):
            return self.evaluate_bound(node.operand)
        elif isinstance(node, BoundUnary):
            return self._evaluate_unary(node)
        elif isinstance(node, BoundBinary):
            return self._evaluate_binary(node)
        else:
            raise InterpreterError.other(f"Unknown bound node: {type(node).__name__}")

    def _evaluate_unary(self, node: BoundUnary) -> Value:
        operand = self.evaluate_bound(node.operand)
        kind = node.operator.kind

        if kind == BoundUnaryOperatorKind.NEGATION:
            return Value.number(-cast(float, operand.data))
        if kind == BoundUnaryOperatorKind.LOGICAL_NOT:
            return Value.boolean(not operand.data)

        raise InterpreterError.unknown_operator(node.token.position, node.token.lexeme)

    def _evaluate_binary(self, node: BoundBinary) -> Value:
        left = self.evaluate_bound(node.left)
        right = self.evaluate_bound(node.right)
        kind = node.operator.kind

        if kind == BoundBinaryOperatorKind.CONCATENATION:
            return Value.string(cast(str, left.data) + cast(str, right.data))

        if kind in _COMPARISONS:
            return Value.boolean(_COMPARISONS[kind](left.data, right.data))

        a, b = cast(float, left.data), cast(float, right.data)
        if kind == BoundBinaryOperatorKind.ADDITION:
            return Value.number(_checked(a + b, a, b, node.token))
        if kind == BoundBinaryOperatorKind.SUBTRACTION:
            return Value.number(_checked(a - b, a, b, node.token))
        if kind == BoundBinaryOperatorKind.MULTIPLICATION:
            return Value.number(_checked(a * b, a, b, node.token))
        if kind == BoundBinaryOperatorKind.DIVISION:
            if b == 0:
                raise InterpreterError.syntax_error(node.token.position, "cannot divide by zero")
            return Value.number(_checked(a / b, a, b, node.token))
        if kind == BoundBinaryOperatorKind.EXPONENTIATION:
            return Value.number(_power(a, b, node.token))

        raise InterpreterError.unknown_operator(node.token.position, node.token.lexeme)


def _overflow(token: SymbolToken) -> InterpreterError:
    return InterpreterError.syntax_error(token.position, f"numeric overflow in `{token.lexeme}`")


def _checked(result: float, a: float, b: float, token: SymbolToken) -> float:
    # Бесконечность из бесконечного операнда - не переполнение
    if math.isinf(result) and math.isfinite(a) and math.isfinite(b):
        raise _overflow(token)
    return result


def _power(base: float, exponent: float, token: SymbolToken) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        raise _overflow(token)
    except ValueError:
        if base == 0:
            return math.inf
        # Нет вещественного результата: отрицательное основание и дробная степень
        return math.nan


def evaluate_source(source: str) -> Value:
    """
    Удобная функция: парсинг и вычисление строки.

    Raises:
        InterpreterErrors: При лексических/синтаксических ошибках
        InterpreterError: При ошибке вычисления
    """
    from .error_handler import ErrorHandler
    from .parser import parse_source

    handler = ErrorHandler()
    tree = parse_source(source, handler)
    handler.try_report_errors()
    return Evaluator().evaluate(tree.root)


__all__ = ["Evaluator", "evaluate_source"]
