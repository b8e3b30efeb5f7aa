"""
dummylang Language Server Protocol (LSP) implementation.

This package provides an LSP server for the Dummy language that publishes
the diagnostics of the semantic checkers to the editor.

Usage:
    # Start the LSP server (stdio mode)
    dummylang-lsp

    # Or run as a module
    python -m dummylang.lsp
"""

from dummylang.lsp.diagnostics import DiagnosticProvider, get_diagnostics_for_document
from dummylang.lsp.server import DummyLanguageServer, create_server, main

__all__ = [
    "DiagnosticProvider",
    "DummyLanguageServer",
    "create_server",
    "get_diagnostics_for_document",
    "main",
]
