"""
Формы деревьев выражений для сравнения без учёта значений литералов.

Форма узла - кортеж (вид, оператор или None, дочерние формы).
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from kon.interpreter.model import (
    BinaryExpression,
    Expression,
    GroupingExpression,
    LiteralExpression,
    UnaryExpression,
)

Shape = Tuple[str, Optional[str], tuple]

_ARITY = {"Literal": 0, "Unary": 1, "Binary": 2, "Grouping": 1}


def shape_of(expression: Expression) -> Shape:
    if isinstance(expression, LiteralExpression):
        return ("Literal", None, ())
    if isinstance(expression, UnaryExpression):
        return ("Unary", expression.operator.lexeme, (shape_of(expression.operand),))
    if isinstance(expression, BinaryExpression):
        return (
            "Binary",
            expression.operator.lexeme,
            (shape_of(expression.left), shape_of(expression.right)),
        )
    if isinstance(expression, GroupingExpression):
        return ("Grouping", None, (shape_of(expression.operand),))
    raise TypeError(f"unexpected node {expression!r}")


def shape_of_dump(dump: str, indent_step: int = 2) -> Shape:
    """Восстанавливает форму дерева из многострочного дампа pretty_print()."""
    lines: List[str] = [line for line in dump.splitlines() if line.strip()]
    pos = 0

    def node(depth: int) -> Shape:
        nonlocal pos
        line = lines[pos]
        pos += 1

        indent = len(line) - len(line.lstrip(" "))
        assert indent == depth * indent_step, f"bad indent in {line!r}"

        kind, _, operator = line.strip().partition(": ")
        children = []
        for _ in range(_ARITY[kind]):
            children.append(node(depth + 1))
        return (kind, operator if kind in ("Unary", "Binary") else None, tuple(children))

    shape = node(0)
    assert pos == len(lines), "trailing lines in dump"
    return shape


__all__ = ["shape_of", "shape_of_dump"]
