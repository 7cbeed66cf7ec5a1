"""
Ядро интерпретатора Kon: лексер, парсер, связывание и вычисление выражений.
"""

from __future__ import annotations

from .error_handler import ErrorHandler
from .errors import DiagnosticKind, InterpreterError, InterpreterErrors
from .evaluator import Evaluator, evaluate_source
from .lexer import Lexer, scan
from .model import (
    BinaryExpression,
    Expression,
    ExpressionType,
    GroupingExpression,
    LiteralExpression,
    SyntaxTree,
    UnaryExpression,
)
from .parser import Parser, parse_source
from .runner import Interpreter, RunOptions
from .tokens import Position, Token
from .values import DataType, Value

__all__ = [
    "ErrorHandler",
    "DiagnosticKind",
    "InterpreterError",
    "InterpreterErrors",
    "Evaluator",
    "evaluate_source",
    "Lexer",
    "scan",
    "Expression",
    "ExpressionType",
    "LiteralExpression",
    "UnaryExpression",
    "BinaryExpression",
    "GroupingExpression",
    "SyntaxTree",
    "Parser",
    "parse_source",
    "Interpreter",
    "RunOptions",
    "Position",
    "Token",
    "DataType",
    "Value",
]
