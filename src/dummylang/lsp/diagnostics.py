"""
Diagnostic generation for the dummylang LSP.

This module converts front-end errors and checker diagnostics into
LSP-compatible diagnostic messages for display in editors.
"""

from typing import Optional

from lsprotocol import types

from dummylang.compiler.analyzer import DummyLanguageAnalyzer
from dummylang.compiler.diagnostics import Diagnostic, DiagnosticReporter, DiagnosticSeverity
from dummylang.compiler.parser import transform_source
from dummylang.compiler.rules import CheckConfiguration
from dummylang.utils.errors import DummyLangError

SOURCE_NAME = "dummylang"


class DiagnosticProvider:
    """
    Generates LSP diagnostics from Dummy source code.

    A front-end error stops at one diagnostic; otherwise every checker
    diagnostic is converted.
    """

    def __init__(
        self,
        source: str,
        uri: str,
        config: Optional[CheckConfiguration] = None,
    ) -> None:
        """
        Initialize the diagnostic provider.

        Args:
            source: The Dummy source code to analyze
            uri: The document URI for location information
            config: Optional rule configuration
        """
        self.source = source
        self.uri = uri
        self.config = config
        self._source_lines = source.splitlines()
        self._diagnostics: list[types.Diagnostic] = []

    def get_diagnostics(self) -> list[types.Diagnostic]:
        """
        Get all diagnostics for the document.

        Returns:
            List of LSP diagnostic objects
        """
        self._diagnostics = []

        try:
            tree = transform_source(self.source, self.uri)
        except DummyLangError as e:
            self._add_front_end_error(e)
            return self._diagnostics

        reporter = DiagnosticReporter(source=self.source, filename=self.uri)
        for diag in DummyLanguageAnalyzer(reporter, self.config).check(tree):
            self._add_checker_diagnostic(diag)

        return self._diagnostics

    def _add_front_end_error(self, error: DummyLangError) -> None:
        """Add a lexer or parser error as an LSP diagnostic."""
        line = 0
        character = 0

        if error.location:
            line = max(0, error.location.line - 1)  # Convert to 0-indexed
            character = max(0, error.location.column - 1)

        end_character = self._token_end(error.source_line, character)

        self._diagnostics.append(types.Diagnostic(
            range=types.Range(
                start=types.Position(line=line, character=character),
                end=types.Position(line=line, character=end_character),
            ),
            message=error.message,
            severity=types.DiagnosticSeverity.Error,
            source=SOURCE_NAME,
        ))

    def _add_checker_diagnostic(self, diag: Diagnostic) -> None:
        """Add a checker diagnostic as an LSP diagnostic."""
        severity = (
            types.DiagnosticSeverity.Error
            if diag.severity == DiagnosticSeverity.ERROR
            else types.DiagnosticSeverity.Warning
        )

        line = max(0, diag.line - 1)
        character = max(0, diag.location.column - 1) if diag.location else 0
        source_line = (
            self._source_lines[line] if line < len(self._source_lines) else None
        )
        end_character = self._token_end(source_line, character)

        message = diag.message
        if diag.suggestion:
            message = f"{message}\n\nhint: {diag.suggestion}"

        self._diagnostics.append(types.Diagnostic(
            range=types.Range(
                start=types.Position(line=line, character=character),
                end=types.Position(line=line, character=end_character),
            ),
            message=message,
            severity=severity,
            source=SOURCE_NAME,
            code=diag.code,
            tags=self._get_diagnostic_tags(diag),
        ))

    @staticmethod
    def _token_end(source_line: Optional[str], character: int) -> int:
        """Find the end of the token starting at `character`."""
        if not source_line:
            return character + 1
        rest_of_line = source_line[character:]
        for i, c in enumerate(rest_of_line):
            if c.isspace() or c in "(){},;=":
                return character + max(1, i)
        return character + max(1, len(rest_of_line))

    def _get_diagnostic_tags(self, diag: Diagnostic) -> list[types.DiagnosticTag]:
        """Get diagnostic tags for a checker diagnostic."""
        tags: list[types.DiagnosticTag] = []

        # Unused and unreachable code is rendered faded
        if diag.rule_name and (
            diag.rule_name.startswith("unused") or diag.rule_name == "unreachable-code"
        ):
            tags.append(types.DiagnosticTag.Unnecessary)

        return tags


def get_diagnostics_for_document(
    source: str,
    uri: str,
    config: Optional[CheckConfiguration] = None,
) -> list[types.Diagnostic]:
    """
    Convenience function to get diagnostics for a document.

    Args:
        source: The Dummy source code
        uri: The document URI
        config: Optional rule configuration

    Returns:
        List of LSP diagnostics
    """
    provider = DiagnosticProvider(source, uri, config)
    return provider.get_diagnostics()
