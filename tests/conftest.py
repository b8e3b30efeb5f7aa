"""
Pytest configuration and shared fixtures for dummylang tests.
"""

from typing import Optional

import pytest

from dummylang.compiler.analyzer import DummyLanguageAnalyzer
from dummylang.compiler.ast_nodes import File
from dummylang.compiler.diagnostics import Diagnostic, DiagnosticReporter
from dummylang.compiler.lexer import Lexer
from dummylang.compiler.parser import Parser
from dummylang.compiler.rules import CheckConfiguration
from dummylang.compiler.tokens import Token


@pytest.fixture
def lexer_factory():
    """Factory fixture for creating lexers."""

    def _create_lexer(source: str, filename: str = "test.dummy") -> Lexer:
        return Lexer(source, filename)

    return _create_lexer


@pytest.fixture
def parser_factory(lexer_factory):
    """Factory fixture for creating parsers from source."""

    def _create_parser(source: str) -> Parser:
        lexer = lexer_factory(source)
        tokens = lexer.tokenize()
        return Parser(tokens, source, "test.dummy")

    return _create_parser


@pytest.fixture
def tokenize(lexer_factory):
    """Fixture to tokenize source code."""

    def _tokenize(source: str) -> list[Token]:
        lexer = lexer_factory(source)
        return lexer.tokenize()

    return _tokenize


@pytest.fixture
def parse(parser_factory):
    """Fixture to parse source code into AST."""

    def _parse(source: str) -> File:
        parser = parser_factory(source)
        return parser.parse()

    return _parse


@pytest.fixture
def run_checker(parse):
    """Fixture running a single checker class over source code."""

    def _run(
        checker_class,
        source: str,
        config: Optional[CheckConfiguration] = None,
    ) -> list[Diagnostic]:
        reporter = DiagnosticReporter()
        checker_class(reporter, config).inspect(parse(source))
        return reporter.diagnostics

    return _run


@pytest.fixture
def check_source(parse):
    """Fixture running every checker over source code."""

    def _check(
        source: str,
        config: Optional[CheckConfiguration] = None,
    ) -> list[Diagnostic]:
        return DummyLanguageAnalyzer(config=config).check(parse(source))

    return _check


@pytest.fixture
def codes():
    """Fixture returning the rule codes of diagnostics, in emission order."""

    def _codes(diagnostics: list[Diagnostic]) -> list[str]:
        return [d.code for d in diagnostics]

    return _codes


@pytest.fixture
def with_code():
    """Fixture selecting the diagnostics of one rule."""

    def _select(diagnostics: list[Diagnostic], code: str) -> list[Diagnostic]:
        return [d for d in diagnostics if d.code == code]

    return _select


@pytest.fixture
def source_file(tmp_path):
    """Fixture writing source code to a temporary .dummy file."""

    def _write(source: str, name: str = "program.dummy"):
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return _write
