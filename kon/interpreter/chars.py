"""
Поток символов исходного текста с отслеживанием позиции.

Фильтрует пробельные символы и строчные комментарии `//`,
предоставляет просмотр одного символа вперёд. Ошибок не обнаруживает -
это ответственность лексера.
"""

from __future__ import annotations

from typing import Iterator, Optional

from .tokens import Position


class CharacterProvider:
    """
    Курсор по исходному тексту.

    line/column - позиция последнего выданного символа,
    cursor - позиция следующего непрочитанного.
    """

    def __init__(self, source: str):
        self._text = source
        self._index = 0
        self._length = len(source)

        # Позиция следующего символа
        self._cursor_line = 1
        self._cursor_column = 1

        # Позиция последнего выданного символа
        self._line = 1
        self._column = 1

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._column

    @property
    def position(self) -> Position:
        """Позиция последнего выданного символа."""
        return Position(self._line, self._column)

    @property
    def cursor(self) -> Position:
        """Позиция следующего символа (за концом ввода - сразу после последнего)."""
        return Position(self._cursor_line, self._cursor_column)

    def at_end(self) -> bool:
        return self._index >= self._length

    def peek(self) -> Optional[str]:
        """Следующий сырой символ без потребления; None в конце ввода."""
        if self._index >= self._length:
            return None
        return self._text[self._index]

    def next(self) -> Optional[str]:
        """
        Потребляет один отфильтрованный символ.

        Пропускает пробелы, затем комментарий `//` вместе с завершающим
        переводом строки, затем снова пробелы.

        Returns:
            Символ или None в конце ввода
        """
        self._skip_whitespace()
        while self._at_comment():
            self._skip_comment()
            self._skip_whitespace()
        return self.next_raw()

    def next_raw(self) -> Optional[str]:
        """Потребляет следующий символ без какой-либо фильтрации (для строк)."""
        if self._index >= self._length:
            return None
        self._line, self._column = self._cursor_line, self._cursor_column
        return self._advance()

    def _advance(self) -> str:
        ch = self._text[self._index]
        self._index += 1
        if ch == "\n":
            self._cursor_line += 1
            self._cursor_column = 1
        else:
            self._cursor_column += 1
        return ch

    def _skip_whitespace(self) -> None:
        while self._index < self._length and self._text[self._index].isspace():
            self._advance()

    def _at_comment(self) -> bool:
        return self._text.startswith("//", self._index)

    def _skip_comment(self) -> None:
        # Комментарий заканчивается переводом строки (он тоже потребляется) или концом ввода
        while self._index < self._length:
            if self._advance() == "\n":
                break

    def __iter__(self) -> Iterator[str]:
        while True:
            ch = self.next()
            if ch is None:
                return
            yield ch


__all__ = ["CharacterProvider"]
