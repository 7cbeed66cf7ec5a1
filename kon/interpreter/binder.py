"""
Связывание дерева выражений с типами.

Binder проходит по синтаксическому дереву и строит типизированное
связанное дерево. Каждый оператор разрешается по таблице
(символ, типы операндов). Неизвестный оператор и несовпадение типов
становятся явными проверяемыми случаями: поднимается InterpreterError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, cast

from .errors import InterpreterError
from .model import (
    BinaryExpression,
    Expression,
    ExpressionType,
    GroupingExpression,
    LiteralExpression,
    UnaryExpression,
)
from .tokens import LiteralKind, Symbol, SymbolToken
from .values import DataType, Value


class BoundUnaryOperatorKind(Enum):
    NEGATION = "negation"
    LOGICAL_NOT = "logical_not"


class BoundBinaryOperatorKind(Enum):
    ADDITION = "addition"
    CONCATENATION = "concatenation"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"
    DIVISION = "division"
    EXPONENTIATION = "exponentiation"
    LESS_THAN = "less_than"
    GREATER_THAN = "greater_than"
    LESS_THAN_EQUALS = "less_than_equals"
    GREATER_THAN_EQUALS = "greater_than_equals"
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"


@dataclass(frozen=True)
class BoundUnaryOperator:
    kind: BoundUnaryOperatorKind
    symbol: Symbol
    operand_type: DataType
    result_type: DataType


@dataclass(frozen=True)
class BoundBinaryOperator:
    kind: BoundBinaryOperatorKind
    symbol: Symbol
    left_type: DataType
    right_type: DataType
    result_type: DataType


_N, _S, _B = DataType.NUMBER, DataType.STRING, DataType.BOOLEAN

_UNARY_OPERATORS: List[BoundUnaryOperator] = [
    BoundUnaryOperator(BoundUnaryOperatorKind.NEGATION, Symbol.MINUS, _N, _N),
    BoundUnaryOperator(BoundUnaryOperatorKind.LOGICAL_NOT, Symbol.EXCLAMATION, _B, _B),
]

_BINARY_OPERATORS: List[BoundBinaryOperator] = [
    BoundBinaryOperator(BoundBinaryOperatorKind.ADDITION, Symbol.PLUS, _N, _N, _N),
    BoundBinaryOperator(BoundBinaryOperatorKind.SUBTRACTION, Symbol.MINUS, _N, _N, _N),
    BoundBinaryOperator(BoundBinaryOperatorKind.MULTIPLICATION, Symbol.ASTERISK, _N, _N, _N),
    BoundBinaryOperator(BoundBinaryOperatorKind.DIVISION, Symbol.FORWARD_SLASH, _N, _N, _N),
    BoundBinaryOperator(BoundBinaryOperatorKind.EXPONENTIATION, Symbol.CARET, _N, _N, _N),
    BoundBinaryOperator(BoundBinaryOperatorKind.LESS_THAN, Symbol.LEFT_ANGLED, _N, _N, _B),
    BoundBinaryOperator(BoundBinaryOperatorKind.GREATER_THAN, Symbol.RIGHT_ANGLED, _N, _N, _B),
    BoundBinaryOperator(BoundBinaryOperatorKind.LESS_THAN_EQUALS, Symbol.LEFT_ANGLED_EQUALS, _N, _N, _B),
    BoundBinaryOperator(BoundBinaryOperatorKind.GREATER_THAN_EQUALS, Symbol.RIGHT_ANGLED_EQUALS, _N, _N, _B),
    BoundBinaryOperator(BoundBinaryOperatorKind.EQUALS, Symbol.DOUBLE_EQUALS, _N, _N, _B),
    BoundBinaryOperator(BoundBinaryOperatorKind.NOT_EQUALS, Symbol.EXCLAMATION_EQUALS, _N, _N, _B),
    # Строки поддерживают только конкатенацию
    BoundBinaryOperator(BoundBinaryOperatorKind.CONCATENATION, Symbol.PLUS, _S, _S, _S),
    BoundBinaryOperator(BoundBinaryOperatorKind.EQUALS, Symbol.DOUBLE_EQUALS, _B, _B, _B),
    BoundBinaryOperator(BoundBinaryOperatorKind.NOT_EQUALS, Symbol.EXCLAMATION_EQUALS, _B, _B, _B),
]

_UNARY_TABLE: Dict[Tuple[Symbol, DataType], BoundUnaryOperator] = {
    (op.symbol, op.operand_type): op for op in _UNARY_OPERATORS
}
_BINARY_TABLE: Dict[Tuple[Symbol, DataType, DataType], BoundBinaryOperator] = {
    (op.symbol, op.left_type, op.right_type): op for op in _BINARY_OPERATORS
}
_UNARY_SYMBOLS = frozenset(op.symbol for op in _UNARY_OPERATORS)
_BINARY_SYMBOLS = frozenset(op.symbol for op in _BINARY_OPERATORS)


# ---- Связанное дерево ----

@dataclass(frozen=True)
class BoundExpression(ABC):
    """Узел связанного дерева; тип результата известен до вычисления."""

    @property
    @abstractmethod
    def type(self) -> DataType:
        pass


@dataclass(frozen=True)
class BoundLiteral(BoundExpression):
    value: Value

    @property
    def type(self) -> DataType:
        return self.value.type


@dataclass(frozen=True)
class BoundUnary(BoundExpression):
    operator: BoundUnaryOperator
    token: SymbolToken
    operand: BoundExpression

    @property
    def type(self) -> DataType:
        return self.operator.result_type


@dataclass(frozen=True)
class BoundBinary(BoundExpression):
    operator: BoundBinaryOperator
    token: SymbolToken
    left: BoundExpression
    right: BoundExpression

    @property
    def type(self) -> DataType:
        return self.operator.result_type


@dataclass(frozen=True)
class BoundGrouping(BoundExpression):
    operand: BoundExpression

    @property
    def type(self) -> DataType:
        return self.operand.type


def lookup_unary(symbol: Symbol, operand_type: DataType) -> Optional[BoundUnaryOperator]:
    return _UNARY_TABLE.get((symbol, operand_type))


def lookup_binary(symbol: Symbol, left_type: DataType, right_type: DataType) -> Optional[BoundBinaryOperator]:
    return _BINARY_TABLE.get((symbol, left_type, right_type))


class Binder:
    """
    Строит связанное дерево.

    Левый операнд связывается полностью до правого; первая ошибка
    прерывает обход.
    """

    def bind(self, expression: Expression) -> BoundExpression:
        """
        Связывает выражение.

        Raises:
            InterpreterError: SyntaxError при несовпадении типов,
                UnknownOperator при неизвестном операторе
        """
        expression_type = expression.get_type()

        if expression_type == ExpressionType.LITERAL:
            return self._bind_literal(cast(LiteralExpression, expression))
        elif expression_type == ExpressionType.UNARY:
            return self._bind_unary(cast(UnaryExpression, expression))
        elif expression_type == ExpressionType.BINARY:
            return self._bind_binary(cast(BinaryExpression, expression))
        elif expression_type == ExpressionType.GROUPING:
            return BoundGrouping(self.bind(cast(GroupingExpression, expression).operand))
        else:
            raise InterpreterError.other(f"Unknown expression type: {expression_type}")

    def _bind_literal(self, expression: LiteralExpression) -> BoundLiteral:
        literal = expression.token.literal
        if literal.kind == LiteralKind.NUMBER:
            return BoundLiteral(Value.number(literal.value))  # type: ignore[arg-type]
        if literal.kind == LiteralKind.STRING:
            return BoundLiteral(Value.string(literal.value))  # type: ignore[arg-type]
        if literal.kind == LiteralKind.IDENTIFIER:
            # Идентификатор проецируется в свой текст
            return BoundLiteral(Value.string(literal.value))  # type: ignore[arg-type]
        return BoundLiteral(Value.void())

    def _bind_unary(self, expression: UnaryExpression) -> BoundUnary:
        token = expression.operator
        operand = self.bind(expression.operand)

        if token.symbol not in _UNARY_SYMBOLS:
            raise InterpreterError.unknown_operator(token.position, token.lexeme)

        operator = lookup_unary(token.symbol, operand.type)
        if operator is None:
            raise InterpreterError.syntax_error(
                token.position,
                f"cannot perform `{token.lexeme}` on {operand.type.value}",
            )

        return BoundUnary(operator=operator, token=token, operand=operand)

    def _bind_binary(self, expression: BinaryExpression) -> BoundBinary:
        token = expression.operator
        left = self.bind(expression.left)
        right = self.bind(expression.right)

        if token.symbol not in _BINARY_SYMBOLS:
            raise InterpreterError.unknown_operator(token.position, token.lexeme)

        operator = lookup_binary(token.symbol, left.type, right.type)
        if operator is None:
            if left.type == right.type:
                operands = left.type.value
            else:
                operands = f"{left.type.value} and {right.type.value}"
            raise InterpreterError.syntax_error(
                token.position,
                f"cannot perform `{token.lexeme}` on {operands}",
            )

        return BoundBinary(operator=operator, token=token, left=left, right=right)


__all__ = [
    "BoundUnaryOperatorKind",
    "BoundBinaryOperatorKind",
    "BoundUnaryOperator",
    "BoundBinaryOperator",
    "BoundExpression",
    "BoundLiteral",
    "BoundUnary",
    "BoundBinary",
    "BoundGrouping",
    "lookup_unary",
    "lookup_binary",
    "Binder",
]
