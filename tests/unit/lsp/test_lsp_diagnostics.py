"""Tests for the dummylang LSP diagnostics provider."""

from lsprotocol.types import DiagnosticSeverity, DiagnosticTag

from dummylang.compiler.rules import CheckConfiguration
from dummylang.lsp.diagnostics import (
    SOURCE_NAME,
    DiagnosticProvider,
    get_diagnostics_for_document,
)

URI = "file:///test.dummy"


class TestDiagnosticProvider:
    """Test suite for DiagnosticProvider."""

    def test_valid_code_no_diagnostics(self) -> None:
        """Valid code produces no diagnostics."""
        source = """
fun main() {
    var x = 1
    return x
}
"""
        assert get_diagnostics_for_document(source, URI) == []

    def test_syntax_error_produces_single_diagnostic(self) -> None:
        """A front-end error stops at one error diagnostic."""
        source = "fun main() {\n    var x = \n}"
        (diagnostic,) = get_diagnostics_for_document(source, URI)

        assert diagnostic.severity == DiagnosticSeverity.Error
        assert diagnostic.source == SOURCE_NAME
        assert diagnostic.message.startswith("Expected expression")

    def test_lexer_error_position(self) -> None:
        """Lexer errors are reported at their 0-indexed position."""
        source = "fun main() {\n  #\n}"
        (diagnostic,) = get_diagnostics_for_document(source, URI)

        assert diagnostic.range.start.line == 1
        assert diagnostic.range.start.character == 2
        assert diagnostic.message == "Unexpected character '#'"

    def test_unused_variable_is_tagged(self) -> None:
        """Unused declarations are warnings rendered as unnecessary code."""
        source = "fun main() {\n    var y = 1\n}\n"
        (diagnostic,) = get_diagnostics_for_document(source, URI)

        assert diagnostic.severity == DiagnosticSeverity.Warning
        assert diagnostic.code == "W0102"
        assert diagnostic.tags == [DiagnosticTag.Unnecessary]
        assert diagnostic.range.start.line == 1
        assert diagnostic.range.start.character == 4
        assert diagnostic.range.end.character == 7

    def test_error_has_no_tags(self) -> None:
        source = "fun main() {\n    return x\n}\n"
        (diagnostic,) = get_diagnostics_for_document(source, URI)

        assert diagnostic.severity == DiagnosticSeverity.Error
        assert diagnostic.code == "E0101"
        assert diagnostic.tags == []

    def test_suggestion_appended_as_hint(self) -> None:
        source = """
fun main() {
    var count = 1
    return cont
}
"""
        diagnostics = get_diagnostics_for_document(source, URI)
        undeclared = next(d for d in diagnostics if d.code == "E0101")

        assert undeclared.message == (
            "Variable 'cont' is accessed but is not declared"
            "\n\nhint: did you mean 'count'?"
        )
        assert undeclared.range.start.line == 3
        assert undeclared.range.start.character == 11
        assert undeclared.range.end.character == 15

    def test_configuration_is_applied(self) -> None:
        source = "fun main() {\n    var y = 1\n}\n"
        config = CheckConfiguration()
        config.allow("unused-variable")

        assert get_diagnostics_for_document(source, URI, config) == []

    def test_provider_can_be_rerun(self) -> None:
        """Each call starts from an empty diagnostic list."""
        provider = DiagnosticProvider("fun helper() {}", URI)

        first = provider.get_diagnostics()
        second = provider.get_diagnostics()

        assert len(first) == len(second) == 1
        assert second[0].code == "W0201"
