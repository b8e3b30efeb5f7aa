"""
Entry point for running the dummylang LSP server as a module.

Usage:
    python -m dummylang.lsp
    python -m dummylang.lsp --tcp --port 2087
"""

from dummylang.lsp.server import main

if __name__ == "__main__":
    main()
