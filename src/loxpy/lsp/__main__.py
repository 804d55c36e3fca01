"""
Entry point for running the Lox LSP server as a module.

Usage:
    python -m loxpy.lsp
    python -m loxpy.lsp --tcp --port 2087
"""

from loxpy.lsp.server import main

if __name__ == "__main__":
    main()
