"""
Shared utilities for the Dummy language tooling.
"""

from dummylang.utils.errors import (
    DummyLangError,
    LexerError,
    ParserError,
    SourceLocation,
)

__all__ = [
    "SourceLocation",
    "DummyLangError",
    "LexerError",
    "ParserError",
]
