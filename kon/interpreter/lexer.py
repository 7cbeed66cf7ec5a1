"""
Лексер Kon.

Потребляет поток символов CharacterProvider и выдаёт конечную
последовательность токенов, завершённую ровно одним EndOfFile:
- идентификаторы и ключевые слова
- числа (64-битные float)
- строки в двойных кавычках
- пунктуация и операторы (двухсимвольные - по просмотру вперёд)

Лексические ошибки не прерывают сканирование: для каждой создаётся
Invalid-токен, а его диагностика сразу попадает в ErrorHandler.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .chars import CharacterProvider
from .error_handler import ErrorHandler
from .errors import InterpreterError
from .tokens import (
    EndOfFileToken,
    InvalidToken,
    Literal,
    LiteralToken,
    Position,
    STRING_ESCAPES,
    Symbol,
    SymbolToken,
    Token,
    reserved_word,
)

logger = logging.getLogger(__name__)


# Односимвольная пунктуация без двухсимвольных продолжений
_SINGLE_SYMBOLS: Dict[str, Symbol] = {
    ";": Symbol.SEMICOLON,
    ",": Symbol.COMMA,
    ".": Symbol.PERIOD,
    ":": Symbol.COLON,
    ")": Symbol.RIGHT_PAREN,
    "{": Symbol.LEFT_CURLY,
    "}": Symbol.RIGHT_CURLY,
    "[": Symbol.LEFT_SQUARE,
    "]": Symbol.RIGHT_SQUARE,
    "'": Symbol.APOSTROPHE,
}

# Символ -> (одиночный вариант, [(следующий символ, двухсимвольный вариант), ...])
_COMPOUND_SYMBOLS: Dict[str, Tuple[Symbol, List[Tuple[str, Symbol]]]] = {
    "!": (Symbol.EXCLAMATION, [("=", Symbol.EXCLAMATION_EQUALS)]),
    "=": (Symbol.EQUALS, [("=", Symbol.DOUBLE_EQUALS)]),
    "+": (Symbol.PLUS, [("=", Symbol.PLUS_EQUALS)]),
    "-": (Symbol.MINUS, [(">", Symbol.RIGHT_ARROW), ("=", Symbol.MINUS_EQUALS)]),
    "*": (Symbol.ASTERISK, [("=", Symbol.ASTERISK_EQUALS)]),
    "/": (Symbol.FORWARD_SLASH, [("=", Symbol.FORWARD_SLASH_EQUALS)]),
    "^": (Symbol.CARET, [("=", Symbol.CARET_EQUALS)]),
    "&": (Symbol.AMPERSAND, [("=", Symbol.AMPERSAND_EQUALS)]),
    "<": (Symbol.LEFT_ANGLED, [("=", Symbol.LEFT_ANGLED_EQUALS)]),
    ">": (Symbol.RIGHT_ANGLED, [("=", Symbol.RIGHT_ANGLED_EQUALS)]),
}


def _is_word_start(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalpha())


def _is_word_part(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


def _is_digit(ch: str) -> bool:
    return ch.isascii() and ch.isdigit()


class Lexer:
    """
    Лексер с восстановлением после ошибок.

    Никогда не прерывается: после ошибочного символа продолжает
    со следующего, что гарантирует завершение на любом вводе.
    """

    def __init__(self, error_handler: ErrorHandler):
        self.error_handler = error_handler

    def scan(self, source: str) -> List[Token]:
        """
        Разбивает исходный текст на токены.

        Args:
            source: Исходный текст

        Returns:
            Список токенов, последний - EndOfFile
        """
        tokens = list(self.scan_stream(source))
        logger.debug(f"Scanned source of length {len(source)} into {len(tokens)} tokens")
        return tokens

    def scan_stream(self, source: str) -> Iterator[Token]:
        """
        Генератор для ленивой токенизации.

        Yields:
            Token: Очередной токен; последним всегда идёт EndOfFile
        """
        characters = CharacterProvider(source)

        while True:
            token = self._build_token(characters)
            if token is None:
                break
            if isinstance(token, InvalidToken):
                self.error_handler.push(token.error)
            logger.debug(f"Token: {token.describe()}")
            yield token

        eof = EndOfFileToken(characters.cursor)
        logger.debug(f"Token: {eof.describe()}")
        yield eof

    def _build_token(self, characters: CharacterProvider) -> Optional[Token]:
        ch = characters.next()
        if ch is None:
            return None
        start = characters.position

        if _is_word_start(ch):
            return self._word(ch, start, characters)

        if _is_digit(ch):
            return self._number(ch, start, characters)

        if ch == '"':
            return self._string(start, characters)

        if ch == "(":
            # `()` без содержимого - единый литерал Void
            if self._next_char_is(characters, ")"):
                return LiteralToken(Literal.void(), start)
            return SymbolToken(Symbol.LEFT_PAREN, start)

        if ch in _SINGLE_SYMBOLS:
            return SymbolToken(_SINGLE_SYMBOLS[ch], start)

        if ch in _COMPOUND_SYMBOLS:
            single, pairs = _COMPOUND_SYMBOLS[ch]
            for follower, compound in pairs:
                if self._next_char_is(characters, follower):
                    return SymbolToken(compound, start)
            return SymbolToken(single, start)

        return InvalidToken(InterpreterError.unknown_token(start, ch))

    def _word(self, first: str, start: Position, characters: CharacterProvider) -> Token:
        lexeme = first + self._read_while(characters, _is_word_part)
        reserved = reserved_word(lexeme, start)
        if reserved is not None:
            return reserved
        return LiteralToken(Literal.identifier(lexeme), start)

    def _number(self, first: str, start: Position, characters: CharacterProvider) -> Token:
        lexeme = first + self._read_while(characters, _is_digit)
        try:
            value = float(lexeme)
        except ValueError:
            value = math.nan
        if not math.isfinite(value):
            return InvalidToken(InterpreterError.syntax_error(start, "Failed to parse number"))
        return LiteralToken(Literal.number(value), start)

    def _string(self, start: Position, characters: CharacterProvider) -> Token:
        chunks: List[str] = []
        while True:
            ch = characters.next_raw()
            if ch is None:
                break
            if ch == '"':
                return LiteralToken(Literal.string("".join(chunks)), start)
            if ch == "\\":
                escaped = characters.next_raw()
                if escaped is None:
                    break
                chunks.append(STRING_ESCAPES.get(escaped, "\\" + escaped))
                continue
            chunks.append(ch)

        return InvalidToken(InterpreterError.unterminated_string(characters.cursor))

    @staticmethod
    def _next_char_is(characters: CharacterProvider, expected: str) -> bool:
        """Потребляет следующий сырой символ, только если он совпадает с ожидаемым."""
        if characters.peek() == expected:
            characters.next_raw()
            return True
        return False

    @staticmethod
    def _read_while(characters: CharacterProvider, condition: Callable[[str], bool]) -> str:
        lexeme = ""
        while True:
            ch = characters.peek()
            if ch is None or not condition(ch):
                break
            lexeme += characters.next_raw()  # type: ignore[operator]
        return lexeme


def scan(source: str, error_handler: Optional[ErrorHandler] = None) -> List[Token]:
    """
    Удобная функция для токенизации строки.

    Args:
        source: Исходный текст
        error_handler: Сборщик диагностик (по умолчанию - новый)
    """
    return Lexer(error_handler if error_handler is not None else ErrorHandler()).scan(source)


__all__ = ["Lexer", "scan"]
