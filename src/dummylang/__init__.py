"""
dummylang - Semantic diagnostics for the Dummy language.

Dummy is a minimal imperative language of functions, blocks, if/else,
variable declarations, assignments, returns and calls. dummylang parses
Dummy sources and reports variable lifecycle, function signature and
return coverage problems.
"""

from dummylang.compiler import analyze_file, analyze_source
from dummylang.compiler.analyzer import DummyLanguageAnalyzer
from dummylang.compiler.lexer import Lexer
from dummylang.compiler.parser import Parser

__version__ = "0.1.0"
__all__ = [
    "analyze_source",
    "analyze_file",
    "DummyLanguageAnalyzer",
    "Lexer",
    "Parser",
]
