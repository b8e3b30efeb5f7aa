"""Tests for the dummylang language server document handlers."""

import pytest
from lsprotocol import types

from dummylang.compiler.rules import CheckConfiguration
from dummylang.lsp.server import DummyLanguageServer, create_server

URI = "file:///program.dummy"

SOURCE = """
fun main() {
    var unused = 1
}
"""


@pytest.fixture
def server(monkeypatch):
    """Server whose published diagnostics are recorded instead of sent."""
    instance = DummyLanguageServer()
    published: list[tuple[str, list[types.Diagnostic]]] = []
    monkeypatch.setattr(
        instance,
        "_publish_diagnostics",
        lambda uri, diagnostics: published.append((uri, diagnostics)),
    )
    instance.published = published
    return instance


class TestDocumentSynchronization:
    """Open and close notifications."""

    def test_open_publishes_diagnostics(self, server) -> None:
        server._on_did_open(types.DidOpenTextDocumentParams(
            text_document=types.TextDocumentItem(
                uri=URI, language_id="dummy", version=1, text=SOURCE,
            ),
        ))

        (uri, diagnostics), = server.published
        assert uri == URI
        assert [d.code for d in diagnostics] == ["W0102"]
        assert server.diagnostics_for(URI) == diagnostics

    def test_save_with_text(self, server) -> None:
        server._on_did_save(types.DidSaveTextDocumentParams(
            text_document=types.TextDocumentIdentifier(uri=URI),
            text="fun main() { return x }",
        ))

        (_, diagnostics), = server.published
        assert [d.code for d in diagnostics] == ["E0101"]

    def test_close_clears_diagnostics(self, server) -> None:
        server.analyze_document(URI, SOURCE)

        server._on_did_close(types.DidCloseTextDocumentParams(
            text_document=types.TextDocumentIdentifier(uri=URI),
        ))

        assert server.published == [(URI, [])]
        assert server.diagnostics_for(URI) == []


class TestServerConfiguration:
    """Rule configuration flows into every analysis."""

    def test_strict_scoping(self) -> None:
        source = """
fun main() {
    var x = 1
    if (x) {
        var x = 2
    }
    return x
}
"""
        server = create_server(CheckConfiguration(strict_scoping=True))
        diagnostics = server.analyze_document(URI, source)
        assert [d.code for d in diagnostics] == ["E0104"]

    def test_default_configuration(self) -> None:
        server = create_server()
        assert server.config is None
        assert server.analyze_document(URI, "fun main() {}") == []
