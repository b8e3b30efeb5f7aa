"""
dummylang Language Server Protocol (LSP) Server.

This module implements an LSP server for the Dummy language using pygls
(Python Language Server). It keeps the editor's diagnostics in sync with
the document:

- Document synchronization (open, change, save, close)
- Diagnostics (errors, warnings) from the front end and all checkers

Usage:
    # Start the server in stdio mode (for IDE integration)
    dummylang-lsp

    # Start in TCP mode (for debugging)
    dummylang-lsp --tcp --port 2087
"""

import argparse
import logging
from typing import Optional

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from dummylang import __version__
from dummylang.compiler.rules import CheckConfiguration
from dummylang.lsp.diagnostics import get_diagnostics_for_document

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("dummylang-lsp")


class DummyLanguageServer(LanguageServer):
    """
    Language Server Protocol implementation for Dummy.

    Every synchronization event re-analyzes the whole document and
    republishes its diagnostics.
    """

    def __init__(self, config: Optional[CheckConfiguration] = None) -> None:
        """Initialize the dummylang language server."""
        super().__init__(
            name="dummylang-lsp",
            version=f"v{__version__}",
        )
        self.config = config

        # Last published diagnostics (uri -> diagnostics)
        self._diagnostics: dict[str, list[types.Diagnostic]] = {}

        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register all LSP notification handlers."""
        self.feature(types.TEXT_DOCUMENT_DID_OPEN)(self._on_did_open)
        self.feature(types.TEXT_DOCUMENT_DID_CHANGE)(self._on_did_change)
        self.feature(types.TEXT_DOCUMENT_DID_SAVE)(self._on_did_save)
        self.feature(types.TEXT_DOCUMENT_DID_CLOSE)(self._on_did_close)

    def analyze_document(self, uri: str, text: str) -> list[types.Diagnostic]:
        """Analyze a document and cache its diagnostics."""
        diagnostics = get_diagnostics_for_document(text, uri, self.config)
        self._diagnostics[uri] = diagnostics
        return diagnostics

    def diagnostics_for(self, uri: str) -> list[types.Diagnostic]:
        """Last diagnostics published for a document."""
        return self._diagnostics.get(uri, [])

    def _publish_diagnostics(self, uri: str, diagnostics: list[types.Diagnostic]) -> None:
        """Publish diagnostics to the client."""
        self.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )

    # =========================================================================
    # Document Synchronization
    # =========================================================================

    def _on_did_open(self, params: types.DidOpenTextDocumentParams) -> None:
        """Handle document open notification."""
        document = params.text_document
        logger.info(f"Document opened: {document.uri}")

        diagnostics = self.analyze_document(document.uri, document.text)
        self._publish_diagnostics(document.uri, diagnostics)

    def _on_did_change(self, params: types.DidChangeTextDocumentParams) -> None:
        """Handle document change notification."""
        uri = params.text_document.uri

        doc = self.workspace.get_text_document(uri)
        if doc is None:
            return

        logger.debug(f"Document changed: {uri}")

        diagnostics = self.analyze_document(uri, doc.source)
        self._publish_diagnostics(uri, diagnostics)

    def _on_did_save(self, params: types.DidSaveTextDocumentParams) -> None:
        """Handle document save notification."""
        uri = params.text_document.uri
        logger.info(f"Document saved: {uri}")

        text = params.text
        if text is None:
            doc = self.workspace.get_text_document(uri)
            if doc is None:
                return
            text = doc.source

        diagnostics = self.analyze_document(uri, text)
        self._publish_diagnostics(uri, diagnostics)

    def _on_did_close(self, params: types.DidCloseTextDocumentParams) -> None:
        """Handle document close notification."""
        uri = params.text_document.uri
        logger.info(f"Document closed: {uri}")

        self._diagnostics.pop(uri, None)

        # Clear diagnostics
        self._publish_diagnostics(uri, [])


# =============================================================================
# Server Creation and Main Entry Point
# =============================================================================


def create_server(config: Optional[CheckConfiguration] = None) -> DummyLanguageServer:
    """Create and configure a dummylang language server instance."""
    server = DummyLanguageServer(config)

    @server.feature(types.INITIALIZED)
    def on_initialized(
        params: types.InitializedParams,  # noqa: ARG001
    ) -> None:
        """Handle initialized notification."""
        logger.info("Dummy Language Server initialized successfully")

    @server.feature(types.SHUTDOWN)
    def on_shutdown(
        params: None,  # noqa: ARG001
    ) -> None:
        """Handle shutdown request."""
        logger.info("Shutting down Dummy Language Server")

    return server


def main(argv: Optional[list[str]] = None) -> None:
    """
    Main entry point for the dummylang language server.

    Starts the server in stdio mode for IDE integration.
    """
    parser = argparse.ArgumentParser(
        description="Dummy Language Server",
        prog="dummylang-lsp",
    )
    parser.add_argument(
        "--tcp",
        action="store_true",
        help="Start server in TCP mode instead of stdio",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to in TCP mode (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=2087,
        help="Port to listen on in TCP mode (default: 2087)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Logging level (default: info)",
    )
    parser.add_argument(
        "--strict-scoping",
        action="store_true",
        help="Reject declarations that hide an enclosing variable",
    )

    args = parser.parse_args(argv)

    # Configure logging level
    log_level = getattr(logging, args.log_level.upper())
    logging.getLogger("dummylang-lsp").setLevel(log_level)
    logging.getLogger("dummylang").setLevel(log_level)

    server = create_server(CheckConfiguration(strict_scoping=args.strict_scoping))

    if args.tcp:
        logger.info(f"Starting Dummy LSP in TCP mode on {args.host}:{args.port}")
        server.start_tcp(args.host, args.port)
    else:
        logger.info("Starting Dummy LSP in stdio mode")
        server.start_io()


if __name__ == "__main__":
    main()
