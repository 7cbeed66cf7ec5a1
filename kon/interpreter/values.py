"""
Значения времени выполнения.

Замкнутое размеченное объединение: число, строка, логическое значение, Void.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .tokens import format_number


class DataType(Enum):
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    VOID = "void"


@dataclass(frozen=True)
class Value:
    """
    Значение с тегом типа.

    Attributes:
        type: Тег варианта
        data: float для NUMBER, str для STRING, bool для BOOLEAN, None для VOID
    """
    type: DataType
    data: Union[float, str, bool, None] = None

    @classmethod
    def number(cls, value: float) -> "Value":
        return cls(DataType.NUMBER, float(value))

    @classmethod
    def string(cls, text: str) -> "Value":
        return cls(DataType.STRING, text)

    @classmethod
    def boolean(cls, flag: bool) -> "Value":
        return cls(DataType.BOOLEAN, bool(flag))

    @classmethod
    def void(cls) -> "Value":
        return cls(DataType.VOID, None)

    def __str__(self) -> str:
        """Печатное представление результата прогона."""
        if self.type == DataType.NUMBER:
            return format_number(self.data)  # type: ignore[arg-type]
        if self.type == DataType.BOOLEAN:
            return "true" if self.data else "false"
        if self.type == DataType.VOID:
            return "()"
        return str(self.data)


__all__ = ["DataType", "Value"]
