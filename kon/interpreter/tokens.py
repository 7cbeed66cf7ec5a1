"""
Лексические типы интерпретатора Kon.

Определяет позиции в исходном тексте, полезные нагрузки токенов
(символы, ключевые слова, литералы) и замкнутый набор вариантов токенов.
"""

from __future__ import annotations

import enum
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import InterpreterError


@dataclass(frozen=True)
class Position:
    """Позиция в исходном тексте: строка и колонка, обе с единицы."""
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"({self.line}, {self.column})"


class Symbol(enum.Enum):
    """Пунктуация и операторы. В грамматике выражений участвует только часть из них."""

    # Односимвольные
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_SQUARE = "["
    RIGHT_SQUARE = "]"
    LEFT_CURLY = "{"
    RIGHT_CURLY = "}"
    HASHTAG = "#"
    COMMA = ","
    PERIOD = "."
    COLON = ":"
    SEMICOLON = ";"
    QUOTATION_MARK = '"'
    APOSTROPHE = "'"

    # Одно- или двухсимвольные
    PLUS = "+"
    MINUS = "-"
    ASTERISK = "*"
    FORWARD_SLASH = "/"
    EXCLAMATION = "!"
    LEFT_ANGLED = "<"
    RIGHT_ANGLED = ">"
    EQUALS = "="
    DOUBLE_EQUALS = "=="
    PLUS_EQUALS = "+="
    MINUS_EQUALS = "-="
    ASTERISK_EQUALS = "*="
    FORWARD_SLASH_EQUALS = "/="
    EXCLAMATION_EQUALS = "!="
    LEFT_ANGLED_EQUALS = "<="
    RIGHT_ANGLED_EQUALS = ">="
    RIGHT_ARROW = "->"
    AMPERSAND = "&"
    DOUBLE_AMPERSAND = "&&"
    AMPERSAND_EQUALS = "&="
    PIPE = "|"
    DOUBLE_PIPE = "||"
    PIPE_EQUALS = "|="
    CARET = "^"
    CARET_EQUALS = "^="
    TILDE = "~"
    TILDE_EQUALS = "~="
    PERCENT = "%"
    PERCENT_EQUALS = "%="

    @property
    def lexeme(self) -> str:
        return self.value


class Keyword(enum.Enum):
    """Зарезервированные слова. Значение элемента совпадает с текстом в исходнике."""
    IF = "if"
    ELSE = "else"
    FOR = "for"
    WHILE = "while"
    LOOP = "loop"
    RETURN = "return"
    SELF = "self"
    SELF_TYPE = "Self"
    SUPER = "super"
    EXPORT = "export"
    IMPORT = "import"
    PUBLIC = "pub"
    TYPE = "type"
    IMPL = "impl"
    AS = "as"
    TRAIT = "trait"

    @property
    def lexeme(self) -> str:
        return self.value


# Слово, которое лексер превращает в литерал Void, а не в ключевое слово
VOID_WORD = "void"

KEYWORDS: Dict[str, Keyword] = {kw.value: kw for kw in Keyword}

# Escape-последовательности строковых литералов: символ после `\` -> значение
STRING_ESCAPES: Dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
}

_QUOTED: Dict[str, str] = {value: "\\" + ch for ch, value in STRING_ESCAPES.items()}


class LiteralKind(enum.Enum):
    IDENTIFIER = "identifier"
    STRING = "string"
    NUMBER = "number"
    VOID = "void"


@dataclass(frozen=True)
class Literal:
    """
    Полезная нагрузка литерала.

    Attributes:
        kind: Вид литерала
        value: Текст (идентификатор, строка), число или None для Void
    """
    kind: LiteralKind
    value: Union[str, float, None] = None

    @classmethod
    def identifier(cls, text: str) -> "Literal":
        return cls(LiteralKind.IDENTIFIER, text)

    @classmethod
    def string(cls, text: str) -> "Literal":
        return cls(LiteralKind.STRING, text)

    @classmethod
    def number(cls, value: float) -> "Literal":
        return cls(LiteralKind.NUMBER, float(value))

    @classmethod
    def void(cls) -> "Literal":
        return cls(LiteralKind.VOID, None)

    @property
    def lexeme(self) -> str:
        if self.kind == LiteralKind.VOID:
            return "()"
        if self.kind == LiteralKind.NUMBER:
            return format_number(self.value)  # type: ignore[arg-type]
        return str(self.value)

    @property
    def source_text(self) -> str:
        """Текст для дампов дерева: строки в кавычках и с escape-последовательностями."""
        if self.kind == LiteralKind.STRING:
            return quote_string(self.value)  # type: ignore[arg-type]
        return self.lexeme


def format_number(value: float) -> str:
    """Печатает число без хвоста '.0' у целых значений: 7, 2.5, inf, NaN."""
    if value != value:
        return "NaN"
    if value in (float("inf"), float("-inf")):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    return repr(value)


def quote_string(text: str) -> str:
    """Строка в кавычках; непечатаемые символы без собственного escape - как \\uXXXX."""
    parts = []
    for ch in text:
        if ch in _QUOTED:
            parts.append(_QUOTED[ch])
        elif not ch.isprintable():
            parts.append(f"\\u{ord(ch):04x}")
        else:
            parts.append(ch)
    return '"' + "".join(parts) + '"'


class TokenKind(enum.Enum):
    """Варианты токенов."""
    SYMBOL = "Symbol"
    KEYWORD = "Keyword"
    LITERAL = "Literal"
    END_OF_FILE = "EndOfFile"
    INVALID = "Invalid"


@dataclass(frozen=True)
class Token(ABC):
    """Базовый класс токена. Все варианты, кроме Invalid, несут позицию."""

    @property
    @abstractmethod
    def kind(self) -> TokenKind:
        """Возвращает вариант токена."""
        pass

    @property
    @abstractmethod
    def lexeme(self) -> str:
        """Текст токена в том виде, в каком он встречается в исходнике."""
        pass

    @property
    def position(self) -> Optional[Position]:
        return None

    @property
    def line(self) -> int:
        return self.position.line if self.position else 0

    @property
    def column(self) -> int:
        return self.position.column if self.position else 0

    def describe(self) -> str:
        """Строка для отладочного дампа токенов."""
        return f"{self.kind.value} `{self.lexeme}` {self.position}"

    def __str__(self) -> str:
        return self.lexeme


@dataclass(frozen=True)
class SymbolToken(Token):
    symbol: Symbol
    at: Position

    @property
    def kind(self) -> TokenKind:
        return TokenKind.SYMBOL

    @property
    def lexeme(self) -> str:
        return self.symbol.lexeme

    @property
    def position(self) -> Position:
        return self.at


@dataclass(frozen=True)
class KeywordToken(Token):
    keyword: Keyword
    at: Position

    @property
    def kind(self) -> TokenKind:
        return TokenKind.KEYWORD

    @property
    def lexeme(self) -> str:
        return self.keyword.lexeme

    @property
    def position(self) -> Position:
        return self.at


@dataclass(frozen=True)
class LiteralToken(Token):
    literal: Literal
    at: Position

    @property
    def kind(self) -> TokenKind:
        return TokenKind.LITERAL

    @property
    def lexeme(self) -> str:
        return self.literal.lexeme

    @property
    def position(self) -> Position:
        return self.at

    def describe(self) -> str:
        return f"Literal({self.literal.kind.value}) `{self.lexeme}` {self.at}"


@dataclass(frozen=True)
class EndOfFileToken(Token):
    at: Position

    @property
    def kind(self) -> TokenKind:
        return TokenKind.END_OF_FILE

    @property
    def lexeme(self) -> str:
        return "[EOF]"

    @property
    def position(self) -> Position:
        return self.at

    def describe(self) -> str:
        return f"EndOfFile {self.at}"


@dataclass(frozen=True)
class InvalidToken(Token):
    error: "InterpreterError"

    @property
    def kind(self) -> TokenKind:
        return TokenKind.INVALID

    @property
    def lexeme(self) -> str:
        return "[INV]"

    def describe(self) -> str:
        return f"Invalid: {self.error}"


def reserved_word(text: str, at: Position) -> Optional[Token]:
    """Сопоставляет слово с таблицей ключевых слов; None - это обычный идентификатор."""
    if text == VOID_WORD:
        return LiteralToken(Literal.void(), at)
    keyword = KEYWORDS.get(text)
    if keyword is None:
        return None
    return KeywordToken(keyword, at)


__all__ = [
    "Position",
    "Symbol",
    "Keyword",
    "KEYWORDS",
    "LiteralKind",
    "Literal",
    "format_number",
    "quote_string",
    "STRING_ESCAPES",
    "TokenKind",
    "Token",
    "SymbolToken",
    "KeywordToken",
    "LiteralToken",
    "EndOfFileToken",
    "InvalidToken",
    "reserved_word",
]
