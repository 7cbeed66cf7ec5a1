"""
Tests for the token provider used by the parser.
"""

from kon.interpreter.lexer import scan
from kon.interpreter.token_provider import NextKind, TokenProvider
from kon.interpreter.tokens import Literal, LiteralToken, Position


class TestTokenProvider:

    def test_peek_does_not_advance(self):
        provider = TokenProvider(scan("1 + 2"))
        assert provider.peek().token.lexeme == "1"
        assert provider.peek().token.lexeme == "1"

    def test_next_advances(self):
        provider = TokenProvider(scan("1 + 2"))
        assert provider.next().token.lexeme == "1"
        assert provider.next().token.lexeme == "+"
        assert provider.previous_valid_token.lexeme == "+"
        assert provider.peek().position == Position(1, 5)

    def test_end_of_file_is_terminal(self):
        """После EndOfFile повторные вызовы возвращают его же"""
        provider = TokenProvider(scan("1"))
        provider.next()

        first = provider.next()
        second = provider.next()
        assert first.kind == NextKind.END_OF_FILE
        assert second == first
        assert first.is_end and not first.is_token
        assert first.position == Position(1, 2)
        assert provider.previous_valid_token.lexeme == "1"

    def test_end_of_stream_without_sentinel(self):
        provider = TokenProvider([LiteralToken(Literal.number(1), Position(1, 1))])
        provider.next()

        result = provider.next()
        assert result.kind == NextKind.END_OF_STREAM
        assert result.token is None
        assert result.position == Position(1, 1)

    def test_empty_stream(self):
        result = TokenProvider([]).peek()
        assert result.kind == NextKind.END_OF_STREAM
        assert result.position == Position(0, 0)

    def test_invalid_token_uses_last_position(self):
        provider = TokenProvider(scan("1 @"))
        provider.next()
        result = provider.next()
        assert result.kind == NextKind.TOKEN
        assert result.position == Position(1, 1)
