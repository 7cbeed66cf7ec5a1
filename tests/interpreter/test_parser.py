"""
Tests for the Kon expression parser.
"""

import pytest

from kon.interpreter.error_handler import ErrorHandler
from kon.interpreter.errors import DiagnosticKind
from kon.interpreter.model import (
    BinaryExpression,
    ExpressionType,
    GroupingExpression,
    LiteralExpression,
    UnaryExpression,
)
from kon.interpreter.parser import Parser, parse_source
from kon.interpreter.tokens import EndOfFileToken, Literal, LiteralToken, Position
from tests.infrastructure import shape_of, shape_of_dump


class TestParser:

    def setup_method(self):
        self.handler = ErrorHandler()

    def parse(self, source: str):
        return parse_source(source, self.handler)

    def parse_str(self, source: str) -> str:
        return str(self.parse(source).root)

    # ---- Успешный разбор ----

    def test_single_literal(self):
        tree = self.parse("42")
        assert isinstance(tree.root, LiteralExpression)
        assert tree.root.get_type() == ExpressionType.LITERAL
        assert str(tree.root) == "Literal(42)"
        assert not self.handler.had_error()

    def test_precedence(self):
        """`*` связывает сильнее `+`"""
        assert self.parse_str("1 + 2 * 3") == "Binary(+, Literal(1), Binary(*, Literal(2), Literal(3)))"
        assert self.parse_str("1 * 2 + 3") == "Binary(+, Binary(*, Literal(1), Literal(2)), Literal(3))"

    def test_left_associativity(self):
        assert self.parse_str("8 - 3 - 2") == "Binary(-, Binary(-, Literal(8), Literal(3)), Literal(2))"
        assert self.parse_str("8 / 4 / 2") == "Binary(/, Binary(/, Literal(8), Literal(4)), Literal(2))"

    def test_power_is_left_associative(self):
        assert self.parse_str("2 ^ 3 ^ 2") == "Binary(^, Binary(^, Literal(2), Literal(3)), Literal(2))"

    def test_power_binds_tighter_than_factor(self):
        assert self.parse_str("2 * 3 ^ 2") == "Binary(*, Literal(2), Binary(^, Literal(3), Literal(2)))"

    def test_unary_binds_tighter_than_power(self):
        assert self.parse_str("-2 ^ 2") == "Binary(^, Unary(-, Literal(2)), Literal(2))"
        assert self.parse_str("2 ^ -1") == "Binary(^, Literal(2), Unary(-, Literal(1)))"

    def test_comparison_and_equality(self):
        assert self.parse_str("1 < 2 == 3 > 4") == (
            "Binary(==, Binary(<, Literal(1), Literal(2)), Binary(>, Literal(3), Literal(4)))"
        )
        assert self.parse_str("1 + 2 == 3") == "Binary(==, Binary(+, Literal(1), Literal(2)), Literal(3))"
        assert self.parse_str("1 <= 2 != 3 >= 4") == (
            "Binary(!=, Binary(<=, Literal(1), Literal(2)), Binary(>=, Literal(3), Literal(4)))"
        )

    def test_unary_operators(self):
        assert self.parse_str("-1") == "Unary(-, Literal(1))"
        assert self.parse_str("--1") == "Unary(-, Unary(-, Literal(1)))"
        assert self.parse_str("!-1") == "Unary(!, Unary(-, Literal(1)))"

    def test_grouping(self):
        tree = self.parse("(1 + 2) * 3")
        assert str(tree.root) == "Binary(*, Grouping(Binary(+, Literal(1), Literal(2))), Literal(3))"
        assert isinstance(tree.root, BinaryExpression)
        assert isinstance(tree.root.left, GroupingExpression)
        assert not self.handler.had_error()

    def test_curly_grouping(self):
        assert self.parse_str("{1}") == "Grouping(Literal(1))"
        assert self.parse_str("{(1)}") == "Grouping(Grouping(Literal(1)))"

    def test_void_and_strings(self):
        assert self.parse_str("()") == "Literal(())"
        assert self.parse_str("(())") == "Grouping(Literal(()))"
        assert self.parse_str('"a" + "b"') == 'Binary(+, Literal("a"), Literal("b"))'
        assert not self.handler.had_error()

    def test_eof_token(self):
        tree = self.parse("1 + 2")
        assert tree.eof == EndOfFileToken(Position(1, 6))

    def test_tokens_without_sentinel(self):
        """Поток без EndOfFile: парсер синтезирует его по последней позиции"""
        tree = Parser(self.handler).parse([LiteralToken(Literal.number(1), Position(1, 1))])
        assert str(tree.root) == "Literal(1)"
        assert tree.eof == EndOfFileToken(Position(1, 1))
        assert not self.handler.had_error()

    # ---- Ошибки и восстановление ----

    def test_empty_source(self):
        tree = self.parse("")
        assert tree.root == LiteralExpression.placeholder(Position(1, 1))
        assert len(self.handler) == 1
        error = self.handler.errors[0]
        assert error.kind == DiagnosticKind.PARSE_ERROR
        assert error.message == "expected expression"
        assert error.position == Position(1, 1)

    def test_missing_closing_paren(self):
        """Незакрытая скобка: ровно одна ошибка в позиции открывающей"""
        tree = self.parse("(1 + 2")
        assert len(self.handler) == 1
        error = self.handler.errors[0]
        assert error.kind == DiagnosticKind.UNMATCHED_DELIMITER
        assert error.position == Position(1, 1)
        assert str(error) == "Unmatched `(` (1, 1)"
        assert str(tree.root) == "Grouping(Binary(+, Literal(1), Literal(2)))"

    def test_nested_missing_closing_paren(self):
        self.parse("((1)")
        assert len(self.handler) == 1
        assert str(self.handler.errors[0]) == "Unmatched `(` (1, 1)"

    def test_rogue_closing_paren(self):
        tree = self.parse("1 + 2) + 3")
        assert len(self.handler) == 1
        error = self.handler.errors[0]
        assert error.kind == DiagnosticKind.UNMATCHED_DELIMITER
        assert error.subject == ")"
        assert error.position == Position(1, 6)
        assert str(tree.root) == "Binary(+, Binary(+, Literal(1), Literal(2)), Literal(3))"

    def test_mismatched_closer(self):
        self.parse("(1 + 2}")
        assert [str(e) for e in self.handler.errors] == [
            "Unmatched `}` (1, 7)",
            "Unmatched `(` (1, 1)",
        ]

    def test_mismatched_closer_in_curly(self):
        self.parse("{1 + 2)")
        assert [str(e) for e in self.handler.errors] == [
            "Unmatched `)` (1, 7)",
            "Unmatched `{` (1, 1)",
        ]

    def test_rogue_square_bracket(self):
        self.parse("]")
        assert [e.kind for e in self.handler.errors] == [
            DiagnosticKind.UNMATCHED_DELIMITER,
            DiagnosticKind.PARSE_ERROR,
        ]

    def test_greater_than_is_not_a_delimiter(self):
        assert self.parse_str("2 > 1") == "Binary(>, Literal(2), Literal(1))"
        assert not self.handler.had_error()

    def test_missing_right_operand(self):
        tree = self.parse("1 +")
        assert str(tree.root) == "Binary(+, Literal(1), Literal(()))"
        assert len(self.handler) == 1
        error = self.handler.errors[0]
        assert error.message == "expected expression after `+`"
        assert error.position == Position(1, 4)

    def test_missing_operand_before_operator(self):
        """Лишний оператор не потребляется заглушкой: его подбирает цикл уровня"""
        tree = self.parse("1 + * 2")
        assert str(tree.root) == "Binary(+, Literal(1), Binary(*, Literal(()), Literal(2)))"
        assert len(self.handler) == 1
        error = self.handler.errors[0]
        assert error.message == "expected expression after `+`, found `*`"
        assert error.position == Position(1, 5)

    def test_leading_binary_operator(self):
        tree = self.parse("+ 1")
        assert str(tree.root) == "Binary(+, Literal(()), Literal(1))"
        assert [e.message for e in self.handler.errors] == ["expected expression, found `+`"]

    def test_missing_operand_inside_group(self):
        """Ожидаемый закрывающий разделитель остаётся группе"""
        tree = self.parse("(1 + )")
        assert str(tree.root) == "Grouping(Binary(+, Literal(1), Literal(())))"
        assert len(self.handler) == 1
        error = self.handler.errors[0]
        assert error.message == "expected expression after `+`, found `)`"
        assert error.position == Position(1, 6)

    def test_identifier_is_not_an_operand(self):
        tree = self.parse("x")
        assert str(tree.root) == "Literal(())"
        assert [str(e) for e in self.handler.errors] == ["expected expression, found `x` (1, 1)"]

    def test_keyword_is_not_an_operand(self):
        self.parse("1 + if")
        assert [e.message for e in self.handler.errors] == ["expected expression after `+`, found `if`"]

    def test_trailing_tokens(self):
        tree = self.parse("1 2")
        assert str(tree.root) == "Literal(1)"
        assert [str(e) for e in self.handler.errors] == ["unexpected token `2` (1, 3)"]

    def test_trailing_tokens_reported_once(self):
        self.parse("1 2 3 )")
        assert len(self.handler) == 1
        assert self.handler.errors[0].subject == "2"

    def test_unknown_token_reported_once(self):
        """Invalid-токен не порождает ошибок парсера"""
        tree = self.parse("@")
        assert len(self.handler) == 1
        assert self.handler.errors[0].kind == DiagnosticKind.UNKNOWN_TOKEN
        assert str(tree.root) == "Literal(())"

    def test_unknown_token_as_operand(self):
        tree = self.parse("1 + @")
        assert str(tree.root) == "Binary(+, Literal(1), Literal(()))"
        assert [e.kind for e in self.handler.errors] == [DiagnosticKind.UNKNOWN_TOKEN]

    def test_trailing_invalid_token_skipped(self):
        self.parse("1 @")
        assert [e.kind for e in self.handler.errors] == [DiagnosticKind.UNKNOWN_TOKEN]

    def test_lexer_and_parser_errors_accumulate(self):
        self.parse("@ + (1 + 2")
        assert [str(e) for e in self.handler.errors] == [
            "Unknown token `@` (1, 1)",
            "Unmatched `(` (1, 5)",
        ]

    def test_unary_without_operand(self):
        tree = self.parse("!")
        assert isinstance(tree.root, UnaryExpression)
        assert [str(e) for e in self.handler.errors] == ["expected expression after `!` (1, 2)"]

    def test_parser_is_reusable(self):
        parser = Parser(self.handler)
        from kon.interpreter.lexer import scan

        parser.parse(scan("(1"))
        self.handler.clear()
        tree = parser.parse(scan("2"))
        assert str(tree.root) == "Literal(2)"
        assert not self.handler.had_error()

    def test_deep_nesting_within_limit(self):
        depth = 20
        tree = self.parse("(" * depth + "1" + ")" * depth)
        assert not self.handler.had_error()
        node = tree.root
        for _ in range(depth):
            assert isinstance(node, GroupingExpression)
            node = node.operand
        assert str(node) == "Literal(1)"

    def test_deep_nesting_exceeds_recursion_limit(self):
        with pytest.raises(RecursionError):
            self.parse("(" * 5000 + "1" + ")" * 5000)


class TestPrettyPrint:

    def test_dump_layout(self):
        tree = parse_source("-(1 + 2)")
        assert tree.root.pretty_print() == (
            "Unary: -\n"
            "  Grouping\n"
            "    Binary: +\n"
            "      Literal: 1\n"
            "      Literal: 2\n"
        )

    def test_dump_with_base_indent(self):
        tree = parse_source("1")
        assert tree.root.pretty_print(4) == "    Literal: 1\n"

    @pytest.mark.parametrize("source", [
        "1",
        "1 + 2 * 3",
        "-(1 + 2) ^ 2",
        '{"a" + "b"} == ()',
        "!(1 < 2) != (3 >= 4)",
        "((((7))))",
        "1 - -2 / 3",
        '""',
        '"a\\nb" + "c"',
        '"x, y"',
        '"Literal: 1" + "\\t"',
    ])
    def test_dump_preserves_shape(self, source):
        """Дамп однозначно восстанавливает форму дерева"""
        tree = parse_source(source)
        assert shape_of_dump(tree.root.pretty_print()) == shape_of(tree.root)

    def test_string_literals_are_quoted(self):
        """Строки в дампе в кавычках: `"1"` и `1` различимы"""
        assert parse_source('"1"').root.pretty_print() == 'Literal: "1"\n'
        assert parse_source("1").root.pretty_print() == "Literal: 1\n"
        assert str(parse_source('""').root) == 'Literal("")'

    def test_string_escapes_in_dump(self):
        tree = parse_source(r'"a\nb" + "q\"t\\"')
        assert tree.root.pretty_print() == (
            "Binary: +\n"
            '  Literal: "a\\nb"\n'
            '  Literal: "q\\"t\\\\"\n'
        )
