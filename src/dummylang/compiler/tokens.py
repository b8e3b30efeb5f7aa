"""
Token definitions for the Dummy language lexer.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from dummylang.utils.errors import SourceLocation


class TokenType(Enum):
    """Enumeration of all token types in the Dummy language."""

    # End of file
    EOF = auto()

    # Literals
    INTEGER = auto()

    # Identifiers
    IDENTIFIER = auto()

    # Keywords
    FUN = auto()
    VAR = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()
    TRUE = auto()
    FALSE = auto()

    # Punctuation
    LPAREN = auto()     # (
    RPAREN = auto()     # )
    LBRACE = auto()     # {
    RBRACE = auto()     # }
    COMMA = auto()      # ,
    SEMICOLON = auto()  # ;
    ASSIGN = auto()     # =


KEYWORDS: dict[str, TokenType] = {
    "fun": TokenType.FUN,
    "var": TokenType.VAR,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "=": TokenType.ASSIGN,
}


@dataclass(frozen=True, slots=True)
class Token:
    """
    Represents a single token from the source code.

    Attributes:
        type: The type of this token
        value: The literal value (for literals) or lexeme text
        location: Source location of this token
    """

    type: TokenType
    value: Any
    location: SourceLocation

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, {self.location})"
        return f"Token({self.type.name}, {self.location})"

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def is_literal(self) -> bool:
        """Check if this token represents a literal value."""
        return self.type in {
            TokenType.INTEGER,
            TokenType.TRUE,
            TokenType.FALSE,
        }

    @property
    def starts_expression(self) -> bool:
        """Check if an expression may begin with this token."""
        return self.is_literal or self.type in {
            TokenType.IDENTIFIER,
            TokenType.LPAREN,
        }
