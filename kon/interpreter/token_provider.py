"""
Курсор по последовательности токенов для парсера.

peek/next возвращают Next - результат из трёх вариантов:
живой токен, EndOfFile (терминальный) и EndOfStream (поток исчерпан
без сентинела; используется последняя известная позиция).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Sequence

from .tokens import EndOfFileToken, Position, Token


class NextKind(enum.Enum):
    TOKEN = "token"
    END_OF_FILE = "end_of_file"
    END_OF_STREAM = "end_of_stream"


@dataclass(frozen=True)
class Next:
    """Результат peek/next."""
    kind: NextKind
    position: Position
    token: Optional[Token] = None

    @property
    def is_token(self) -> bool:
        return self.kind == NextKind.TOKEN

    @property
    def is_end(self) -> bool:
        return self.kind != NextKind.TOKEN


class TokenProvider:
    """
    Обёртка над списком токенов.

    После сентинела EndOfFile курсор не продвигается:
    повторные вызовы продолжают его возвращать.
    """

    def __init__(self, tokens: Sequence[Token]):
        self._tokens = tokens
        self._index = 0
        self._last_position = Position(0, 0)
        self.previous_valid_token: Optional[Token] = None

    def peek(self) -> Next:
        """Текущий токен без продвижения."""
        return self._at(self._index)

    def next(self) -> Next:
        """Возвращает текущий токен и продвигает курсор (кроме EndOfFile)."""
        result = self._at(self._index)
        if result.kind == NextKind.TOKEN:
            self._index += 1
            self.previous_valid_token = result.token
        return result

    def _at(self, index: int) -> Next:
        if index >= len(self._tokens):
            return Next(NextKind.END_OF_STREAM, self._last_position)

        token = self._tokens[index]
        if token.position is not None:
            self._last_position = token.position
        if isinstance(token, EndOfFileToken):
            return Next(NextKind.END_OF_FILE, token.position, token)
        return Next(NextKind.TOKEN, token.position or self._last_position, token)


__all__ = ["NextKind", "Next", "TokenProvider"]
