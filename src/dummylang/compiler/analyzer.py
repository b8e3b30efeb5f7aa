"""
Analysis driver.

Builds the syntax tree of a Dummy file and runs the fixed list of checkers
against one diagnostic reporter. The checkers share nothing but the
reporter, so they may also run concurrently, one task per checker.

Example:
    analyzer = DummyLanguageAnalyzer(stream=sys.stdout)
    diagnostics = analyzer.analyze("example.dummy")
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, TextIO, Union

from dummylang.compiler.ast_nodes import File
from dummylang.compiler.checker import AbstractChecker
from dummylang.compiler.diagnostics import Diagnostic, DiagnosticReporter
from dummylang.compiler.function_checker import FunctionSignatureChecker
from dummylang.compiler.parser import transform_source
from dummylang.compiler.return_checker import ReturnCoverageChecker
from dummylang.compiler.rules import CheckConfiguration
from dummylang.compiler.variable_checker import VariableLifecycleChecker

logger = logging.getLogger("dummylang")


CHECKERS: tuple[type[AbstractChecker], ...] = (
    VariableLifecycleChecker,
    FunctionSignatureChecker,
    ReturnCoverageChecker,
)


class DummyLanguageAnalyzer:
    """
    Runs every checker over a file.

    Attributes:
        reporter: The sink all checkers emit to
        config: Rule levels and scoping mode shared by the checkers
    """

    def __init__(
        self,
        reporter: Optional[DiagnosticReporter] = None,
        config: Optional[CheckConfiguration] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.reporter = reporter or DiagnosticReporter(stream)
        self.config = config or CheckConfiguration()

    def analyze(self, path: Union[str, Path]) -> list[Diagnostic]:
        """
        Build the tree of a source file and check it.

        Raises:
            FileNotFoundError: If the path does not exist
            LexerError: On an invalid character or unterminated comment
            ParserError: On the first syntax error
        """
        logger.debug("Analyzing %s", path)
        source = Path(path).read_text(encoding="utf-8")
        return self.analyze_source(source, str(path))

    def analyze_source(self, source: str, filename: str = "<input>") -> list[Diagnostic]:
        """Build the tree of a source string and check it."""
        tree = transform_source(source, filename)
        # Each top-level analysis starts from an empty reporter
        self.reporter.reset(source, filename)
        return self.check(tree)

    def _checkers(self) -> list[AbstractChecker]:
        return [checker_class(self.reporter, self.config) for checker_class in CHECKERS]

    def check(self, file: File) -> list[Diagnostic]:
        """
        Run the checkers one after another on an already built tree.

        Returns:
            The diagnostics emitted by this call, in emission order
        """
        start = len(self.reporter.diagnostics)
        for checker in self._checkers():
            logger.debug("Running %s checker", checker.name)
            checker.inspect(file)
        self._log_summary()
        return self.reporter.diagnostics[start:]

    async def check_async(self, file: File) -> list[Diagnostic]:
        """Run the checkers as concurrent tasks, each in its own thread."""
        start = len(self.reporter.diagnostics)
        checkers = self._checkers()
        logger.debug("Running %d checkers concurrently", len(checkers))
        await asyncio.gather(
            *(asyncio.to_thread(checker.inspect, file) for checker in checkers)
        )
        self._log_summary()
        return self.reporter.diagnostics[start:]

    def check_concurrently(self, file: File) -> list[Diagnostic]:
        """Synchronous wrapper around check_async."""
        return asyncio.run(self.check_async(file))

    def _log_summary(self) -> None:
        logger.debug(
            "Analysis finished: %d error(s), %d warning(s)",
            self.reporter.error_count(),
            self.reporter.warning_count(),
        )


def analyze_file(
    path: Union[str, Path],
    config: Optional[CheckConfiguration] = None,
) -> list[Diagnostic]:
    """
    Convenience function to check a source file.

    Returns:
        The diagnostics in emission order
    """
    return DummyLanguageAnalyzer(config=config).analyze(path)


def analyze_source(
    source: str,
    config: Optional[CheckConfiguration] = None,
    filename: str = "<input>",
) -> list[Diagnostic]:
    """Convenience function to check a source string."""
    return DummyLanguageAnalyzer(config=config).analyze_source(source, filename)


__all__ = [
    "CHECKERS",
    "DummyLanguageAnalyzer",
    "analyze_file",
    "analyze_source",
]
