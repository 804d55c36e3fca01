"""
Lox Language Server Protocol (LSP) implementation.

This package provides a small LSP server for Lox expression files:
- Error diagnostics (scan, parse and runtime errors)
- Hover information with the token, its value and the evaluated result

Usage:
    # Start the LSP server (stdio mode)
    loxpy-lsp

    # Or run as a module
    python -m loxpy.lsp
"""

from loxpy.lsp.analyzer import DocumentAnalyzer
from loxpy.lsp.server import LoxLanguageServer, create_server, main

__all__ = [
    "DocumentAnalyzer",
    "LoxLanguageServer",
    "create_server",
    "main",
]
