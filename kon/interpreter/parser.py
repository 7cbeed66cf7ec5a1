"""
Парсер выражений Kon с рекурсивным спуском.

Строит дерево выражений из последовательности токенов, соблюдая приоритеты
операторов (precedence climbing) и баланс разделителей.

Грамматика (по возрастанию приоритета):
expression  → equality
equality    → comparison (("==" | "!=") comparison)*
comparison  → term (("<" | ">" | "<=" | ">=") term)*
term        → factor (("+" | "-") factor)*
factor      → power (("*" | "/") power)*
power       → unary ("^" unary)*
unary       → ("!" | "-") unary | primary
primary     → NUMBER | STRING | VOID | "(" expression ")" | "{" expression "}"

Парсер никогда не прерывается: ошибки записываются в ErrorHandler,
а на место отсутствующего операнда подставляется литерал Void.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence

from .error_handler import ErrorHandler
from .errors import InterpreterError
from .model import (
    BinaryExpression,
    Expression,
    GroupingExpression,
    LiteralExpression,
    SyntaxTree,
    UnaryExpression,
)
from .token_provider import Next, NextKind, TokenProvider
from .tokens import (
    EndOfFileToken,
    InvalidToken,
    LiteralKind,
    LiteralToken,
    Symbol,
    SymbolToken,
    Token,
)

logger = logging.getLogger(__name__)


class DelimiterKind(enum.Enum):
    """Виды парных разделителей: (открывающий, закрывающий)."""
    PAREN = (Symbol.LEFT_PAREN, Symbol.RIGHT_PAREN)
    CURLY = (Symbol.LEFT_CURLY, Symbol.RIGHT_CURLY)
    ANGLED = (Symbol.LEFT_ANGLED, Symbol.RIGHT_ANGLED)
    SQUARE = (Symbol.LEFT_SQUARE, Symbol.RIGHT_SQUARE)

    @property
    def opening(self) -> Symbol:
        return self.value[0]

    @property
    def closing(self) -> Symbol:
        return self.value[1]


# Разделители, открывающие группировку в primary
_GROUP_OPENERS: Dict[Symbol, DelimiterKind] = {
    Symbol.LEFT_PAREN: DelimiterKind.PAREN,
    Symbol.LEFT_CURLY: DelimiterKind.CURLY,
}

# Закрывающие разделители, которые могут оказаться «бродячими».
# `>` сюда не входит: это оператор сравнения.
_ROGUE_CANDIDATES: Dict[Symbol, DelimiterKind] = {
    Symbol.RIGHT_PAREN: DelimiterKind.PAREN,
    Symbol.RIGHT_CURLY: DelimiterKind.CURLY,
    Symbol.RIGHT_SQUARE: DelimiterKind.SQUARE,
}

_EQUALITY: FrozenSet[Symbol] = frozenset({Symbol.DOUBLE_EQUALS, Symbol.EXCLAMATION_EQUALS})
_COMPARISON: FrozenSet[Symbol] = frozenset({
    Symbol.LEFT_ANGLED,
    Symbol.RIGHT_ANGLED,
    Symbol.LEFT_ANGLED_EQUALS,
    Symbol.RIGHT_ANGLED_EQUALS,
})
_TERM: FrozenSet[Symbol] = frozenset({Symbol.PLUS, Symbol.MINUS})
_FACTOR: FrozenSet[Symbol] = frozenset({Symbol.ASTERISK, Symbol.FORWARD_SLASH})
_POWER: FrozenSet[Symbol] = frozenset({Symbol.CARET})
_UNARY: FrozenSet[Symbol] = frozenset({Symbol.EXCLAMATION, Symbol.MINUS})

# Бинарные операторы всех уровней: их подберёт цикл одного из уровней выше
_BINARY: FrozenSet[Symbol] = _EQUALITY | _COMPARISON | _TERM | _FACTOR | _POWER

_OPERAND_LITERALS = frozenset({LiteralKind.NUMBER, LiteralKind.STRING, LiteralKind.VOID})


@dataclass(frozen=True)
class _OpenDelimiter:
    kind: DelimiterKind
    token: SymbolToken


class Parser:
    """
    Парсер выражений с рекурсивным спуском.

    Ведёт явный стек открытых разделителей, чтобы ловить несовпадающие
    закрывающие скобки, и накапливает ошибки вместо немедленного отказа.
    """

    def __init__(self, error_handler: ErrorHandler):
        self.error_handler = error_handler
        self._tokens = TokenProvider([])
        self._delimiters: List[_OpenDelimiter] = []

    def parse(self, tokens: Sequence[Token]) -> SyntaxTree:
        """
        Парсит токены в дерево выражения.

        Args:
            tokens: Последовательность токенов (обычно завершённая EndOfFile)

        Returns:
            Корень дерева и EndOfFile-токен. Наличие ошибок нужно
            проверять через error_handler.had_error().
        """
        self._tokens = TokenProvider(tokens)
        self._delimiters = []

        root = self._expression()
        eof = self._finish()

        logger.debug(f"Parsed {root} with {len(self.error_handler)} error(s) recorded")
        return SyntaxTree(root=root, eof=eof)

    # ---- Правила грамматики ----

    def _expression(self) -> Expression:
        """Полное выражение (начальный символ грамматики)."""
        return self._equality()

    def _equality(self) -> Expression:
        return self._left_associative(self._comparison, _EQUALITY)

    def _comparison(self) -> Expression:
        return self._left_associative(self._term, _COMPARISON)

    def _term(self) -> Expression:
        return self._left_associative(self._factor, _TERM)

    def _factor(self) -> Expression:
        return self._left_associative(self._power, _FACTOR)

    def _power(self) -> Expression:
        return self._left_associative(self._unary, _POWER)

    def _left_associative(self, operand: Callable[[], Expression], operators: FrozenSet[Symbol]) -> Expression:
        """Один уровень приоритета: операнд, затем свёртка влево, пока виден оператор уровня."""
        expression = operand()

        while True:
            operator = self._match(operators)
            if operator is None:
                break
            right = operand()
            expression = BinaryExpression(operator=operator, left=expression, right=right)

        return expression

    def _unary(self) -> Expression:
        """Префиксные операторы; правая рекурсия."""
        operator = self._match(_UNARY)
        if operator is not None:
            return UnaryExpression(operator=operator, operand=self._unary())

        return self._primary()

    def _primary(self) -> Expression:
        """Литералы и группы в скобках."""
        lookahead = self._peek()

        if lookahead.kind != NextKind.TOKEN:
            self._expected_expression(lookahead)
            return LiteralExpression.placeholder(lookahead.position)

        token = lookahead.token
        if isinstance(token, LiteralToken) and token.literal.kind in _OPERAND_LITERALS:
            self._tokens.next()
            return LiteralExpression(token)

        if isinstance(token, SymbolToken) and token.symbol in _GROUP_OPENERS:
            self._tokens.next()
            return self._grouping(token, _GROUP_OPENERS[token.symbol])

        if isinstance(token, InvalidToken):
            # Ошибка уже записана лексером
            self._tokens.next()
            return LiteralExpression.placeholder(lookahead.position)

        self._expected_expression(lookahead)
        if not self._is_expected_closer(token) and not _is_binary_operator(token):
            self._tokens.next()
        return LiteralExpression.placeholder(lookahead.position)

    def _grouping(self, opening: SymbolToken, kind: DelimiterKind) -> Expression:
        """Группировка: открывающий токен уже потреблён."""
        self._delimiters.append(_OpenDelimiter(kind, opening))

        operand = self._expression()

        lookahead = self._peek()
        closer = lookahead.token
        if isinstance(closer, SymbolToken) and closer.symbol == kind.closing:
            self._tokens.next()
        else:
            self._error(InterpreterError.unmatched_delimiter(opening.position, opening.lexeme))

        self._delimiters.pop()
        return GroupingExpression(operand=operand)

    def _finish(self) -> Token:
        """Проверяет, что после выражения остался только EndOfFile."""
        reported = False
        while True:
            lookahead = self._peek() if not reported else self._tokens.peek()

            if lookahead.kind == NextKind.END_OF_FILE:
                return lookahead.token  # type: ignore[return-value]
            if lookahead.kind == NextKind.END_OF_STREAM:
                return EndOfFileToken(lookahead.position)

            token = lookahead.token
            if not reported and not isinstance(token, InvalidToken):
                self._error(InterpreterError.parse_error(
                    lookahead.position,
                    f"unexpected token `{token.lexeme}`",
                    token.lexeme,
                ))
                reported = True
            self._tokens.next()

    # ---- Вспомогательные методы для работы с токенами ----

    def _peek(self) -> Next:
        """
        Просмотр вперёд с отсевом «бродячих» закрывающих разделителей.

        Закрывающий разделитель, не совпадающий с вершиной стека,
        порождает UnmatchedDelimiter, потребляется, и просмотр повторяется.
        """
        while True:
            lookahead = self._tokens.peek()
            token = lookahead.token
            if (
                lookahead.kind == NextKind.TOKEN
                and isinstance(token, SymbolToken)
                and token.symbol in _ROGUE_CANDIDATES
                and not self._is_expected_closer(token)
            ):
                self._error(InterpreterError.unmatched_delimiter(token.position, token.lexeme))
                self._tokens.next()
                continue
            return lookahead

    def _match(self, symbols: FrozenSet[Symbol]) -> Optional[SymbolToken]:
        """Проверяет и потребляет оператор из указанного набора."""
        lookahead = self._peek()
        token = lookahead.token
        if lookahead.kind == NextKind.TOKEN and isinstance(token, SymbolToken) and token.symbol in symbols:
            self._tokens.next()
            return token
        return None

    def _is_expected_closer(self, token: Optional[Token]) -> bool:
        if not self._delimiters or not isinstance(token, SymbolToken):
            return False
        return token.symbol == self._delimiters[-1].kind.closing

    def _expected_expression(self, lookahead: Next) -> None:
        previous = self._tokens.previous_valid_token
        message = "expected expression"
        if previous is not None:
            message += f" after `{previous.lexeme}`"

        found: Optional[str] = None
        if lookahead.kind == NextKind.TOKEN and lookahead.token is not None:
            found = lookahead.token.lexeme
            message += f", found `{found}`"

        self._error(InterpreterError.parse_error(lookahead.position, message, found))

    def _error(self, error: InterpreterError) -> None:
        self.error_handler.push(error)


def _is_binary_operator(token: Optional[Token]) -> bool:
    return isinstance(token, SymbolToken) and token.symbol in _BINARY


def parse_source(source: str, error_handler: Optional[ErrorHandler] = None) -> SyntaxTree:
    """
    Удобная функция: токенизация и парсинг строки.

    Args:
        source: Исходный текст
        error_handler: Сборщик диагностик (по умолчанию - новый)
    """
    from .lexer import Lexer

    handler = error_handler if error_handler is not None else ErrorHandler()
    tokens = Lexer(handler).scan(source)
    return Parser(handler).parse(tokens)


__all__ = ["DelimiterKind", "Parser", "parse_source"]
