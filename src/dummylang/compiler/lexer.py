"""
Dummy language Lexer (Tokenizer).

Transforms Dummy source code into a stream of tokens. Newlines are not
tokens; each token records its line so the parser can tell where a bare
`return` ends.
"""

from typing import Iterator, Optional

from dummylang.compiler.tokens import (
    KEYWORDS,
    SINGLE_CHAR_TOKENS,
    Token,
    TokenType,
)
from dummylang.utils.errors import LexerError, SourceLocation


class Lexer:
    """
    Tokenizer for Dummy source code.

    The lexer supports:
    - Identifiers and keywords (fun, var, if, else, return, true, false)
    - Decimal integer literals
    - Comments (// single line, /* multi-line */)
    - Punctuation: ( ) { } , ; =

    Usage:
        lexer = Lexer(source_code)
        tokens = lexer.tokenize()
        # or iterate: for token in lexer: ...
    """

    def __init__(self, source: str, filename: Optional[str] = None) -> None:
        """
        Initialize the lexer with source code.

        Args:
            source: The Dummy source code to tokenize
            filename: Optional filename for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

        # Start of the current line for error reporting
        self._line_start = 0

    @property
    def _current_char(self) -> Optional[str]:
        """Return the current character or None if at end."""
        if self.pos >= len(self.source):
            return None
        return self.source[self.pos]

    @property
    def _peek_char(self) -> Optional[str]:
        """Return the next character without consuming it."""
        peek_pos = self.pos + 1
        if peek_pos >= len(self.source):
            return None
        return self.source[peek_pos]

    def _location(self) -> SourceLocation:
        """Create a SourceLocation for the current position."""
        return SourceLocation(
            line=self.line,
            column=self.column,
            offset=self.pos,
            filename=self.filename,
        )

    def _current_line_text(self) -> str:
        """Extract the current line of source for error messages."""
        end = self.source.find("\n", self._line_start)
        if end == -1:
            end = len(self.source)
        return self.source[self._line_start:end]

    def _advance(self) -> str:
        """Consume and return the current character."""
        char = self.source[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
            self._line_start = self.pos
        else:
            self.column += 1

        return char

    def _skip_whitespace(self) -> None:
        """Skip whitespace characters, newlines included."""
        while self._current_char is not None and self._current_char in " \t\r\n":
            self._advance()

    def _skip_line_comment(self) -> bool:
        """Skip a // comment. Returns True if one was skipped."""
        if self._current_char == "/" and self._peek_char == "/":
            while self._current_char is not None and self._current_char != "\n":
                self._advance()
            return True
        return False

    def _skip_multiline_comment(self) -> bool:
        """
        Skip multi-line comments /* ... */.

        Returns:
            True if a multi-line comment was skipped, False otherwise.
        """
        if self._current_char == "/" and self._peek_char == "*":
            start_loc = self._location()
            start_line_text = self._current_line_text()
            self._advance()  # /
            self._advance()  # *

            while True:
                if self._current_char is None:
                    raise LexerError(
                        "Unterminated multi-line comment",
                        start_loc,
                        start_line_text,
                    )
                if self._current_char == "*" and self._peek_char == "/":
                    self._advance()  # *
                    self._advance()  # /
                    return True
                self._advance()

        return False

    def _read_number(self) -> Token:
        """Read a decimal integer literal."""
        start_loc = self._location()
        num_chars: list[str] = []

        while self._current_char is not None and self._current_char.isdigit():
            num_chars.append(self._advance())

        if self._current_char is not None and (
            self._current_char.isalpha() or self._current_char == "_"
        ):
            raise LexerError(
                f"Invalid character '{self._current_char}' in number literal",
                self._location(),
                self._current_line_text(),
            )

        return Token(TokenType.INTEGER, int("".join(num_chars)), start_loc)

    def _read_identifier_or_keyword(self) -> Token:
        """
        Read an identifier or keyword.

        Identifiers start with a letter or underscore and contain
        letters, digits, and underscores.
        """
        start_loc = self._location()
        id_chars: list[str] = []

        while self._current_char is not None and (
            self._current_char.isalnum() or self._current_char == "_"
        ):
            id_chars.append(self._advance())

        identifier = "".join(id_chars)

        if identifier in KEYWORDS:
            token_type = KEYWORDS[identifier]
            if token_type == TokenType.TRUE:
                return Token(token_type, True, start_loc)
            if token_type == TokenType.FALSE:
                return Token(token_type, False, start_loc)
            return Token(token_type, identifier, start_loc)

        return Token(TokenType.IDENTIFIER, identifier, start_loc)

    def _next_token(self) -> Token:
        """Extract the next token from the source."""
        while True:
            self._skip_whitespace()
            if self._skip_line_comment():
                continue
            if self._skip_multiline_comment():
                continue
            break

        char = self._current_char
        if char is None:
            return Token(TokenType.EOF, None, self._location())

        if char.isdigit():
            return self._read_number()

        if char.isalpha() or char == "_":
            return self._read_identifier_or_keyword()

        if char in SINGLE_CHAR_TOKENS:
            loc = self._location()
            self._advance()
            return Token(SINGLE_CHAR_TOKENS[char], char, loc)

        raise LexerError(
            f"Unexpected character '{char}'",
            self._location(),
            self._current_line_text(),
        )

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source code.

        Returns:
            A list of all tokens including the final EOF token.
        """
        self.tokens = []
        self.pos = 0
        self.line = 1
        self.column = 1
        self._line_start = 0

        while True:
            token = self._next_token()
            self.tokens.append(token)
            if token.type == TokenType.EOF:
                break

        return self.tokens

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens (tokenizes on first use)."""
        if not self.tokens:
            self.tokenize()
        return iter(self.tokens)


def tokenize(source: str, filename: Optional[str] = None) -> list[Token]:
    """
    Convenience function to tokenize source code.

    Args:
        source: Dummy source code
        filename: Optional filename for error reporting

    Returns:
        List of tokens
    """
    return Lexer(source, filename).tokenize()
