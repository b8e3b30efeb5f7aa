"""
Unit tests for the Dummy Lexer.
"""

import pytest

from dummylang.compiler.tokens import TokenType
from dummylang.utils.errors import LexerError


def _types(tokens):
    return [t.type for t in tokens]


class TestLexerBasics:
    """Basic tokenization."""

    def test_empty_source(self, tokenize):
        """Empty source yields only EOF."""
        tokens = tokenize("")
        assert _types(tokens) == [TokenType.EOF]

    def test_keywords(self, tokenize):
        tokens = tokenize("fun var if else return true false")
        assert _types(tokens) == [
            TokenType.FUN,
            TokenType.VAR,
            TokenType.IF,
            TokenType.ELSE,
            TokenType.RETURN,
            TokenType.TRUE,
            TokenType.FALSE,
            TokenType.EOF,
        ]

    def test_boolean_values(self, tokenize):
        tokens = tokenize("true false")
        assert tokens[0].value is True
        assert tokens[1].value is False

    def test_identifiers(self, tokenize):
        tokens = tokenize("foo _bar baz42 funny")
        assert all(t.type == TokenType.IDENTIFIER for t in tokens[:-1])
        assert [t.value for t in tokens[:-1]] == ["foo", "_bar", "baz42", "funny"]

    def test_integer(self, tokenize):
        tokens = tokenize("42")
        assert tokens[0].type == TokenType.INTEGER
        assert tokens[0].value == 42

    def test_punctuation(self, tokenize):
        tokens = tokenize("( ) { } , ; =")
        assert _types(tokens)[:-1] == [
            TokenType.LPAREN,
            TokenType.RPAREN,
            TokenType.LBRACE,
            TokenType.RBRACE,
            TokenType.COMMA,
            TokenType.SEMICOLON,
            TokenType.ASSIGN,
        ]


class TestLexerLocations:
    """Line and column tracking."""

    def test_lines_and_columns(self, tokenize):
        tokens = tokenize("fun f() {\n    return x\n}")
        ret = next(t for t in tokens if t.type == TokenType.RETURN)
        assert ret.location.line == 2
        assert ret.location.column == 5

        x = tokens[tokens.index(ret) + 1]
        assert x.line == 2
        assert x.location.column == 12

    def test_filename_recorded(self, lexer_factory):
        tokens = lexer_factory("x", "prog.dummy").tokenize()
        assert tokens[0].location.filename == "prog.dummy"


class TestLexerComments:
    """Comment handling."""

    def test_line_comment(self, tokenize):
        tokens = tokenize("var x // a comment\nvar y")
        assert _types(tokens) == [
            TokenType.VAR,
            TokenType.IDENTIFIER,
            TokenType.VAR,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]

    def test_block_comment_spans_lines(self, tokenize):
        tokens = tokenize("var /* one\ntwo */ x")
        assert _types(tokens) == [TokenType.VAR, TokenType.IDENTIFIER, TokenType.EOF]
        assert tokens[1].line == 2

    def test_unterminated_block_comment(self, tokenize):
        with pytest.raises(LexerError, match="Unterminated"):
            tokenize("var x /* never closed")


class TestLexerErrors:
    """Invalid input."""

    def test_unexpected_character(self, tokenize):
        with pytest.raises(LexerError) as exc_info:
            tokenize("var x = 1 + 2")
        assert "Unexpected character '+'" in exc_info.value.message
        assert exc_info.value.location.column == 11

    def test_letter_inside_number(self, tokenize):
        with pytest.raises(LexerError, match="number literal"):
            tokenize("var x = 12ab")

    def test_error_message_has_caret(self, tokenize):
        with pytest.raises(LexerError) as exc_info:
            tokenize("x $")
        text = str(exc_info.value)
        assert "x $" in text
        assert text.rstrip().endswith("^")

    def test_iteration(self, lexer_factory):
        lexer = lexer_factory("var x")
        assert [t.type for t in lexer] == [TokenType.VAR, TokenType.IDENTIFIER, TokenType.EOF]
