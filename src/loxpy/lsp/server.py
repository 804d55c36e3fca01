"""
Lox Language Server Protocol (LSP) Server.

Implements an LSP server for Lox expression files using pygls. It provides:

- Document synchronization (open, change, save, close)
- Diagnostics (scan, parse and runtime errors)
- Hover information

Usage:
    # Start the server in stdio mode (for IDE integration)
    loxpy-lsp

    # Start in TCP mode (for debugging)
    loxpy-lsp --tcp --port 2087
"""

import argparse
import logging
from typing import Optional

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from loxpy import __version__
from loxpy.lsp.analyzer import DocumentAnalyzer

logger = logging.getLogger("loxpy-lsp")


class LoxLanguageServer(LanguageServer):
    """
    Language Server Protocol implementation for Lox.

    One DocumentAnalyzer is kept per open URI. Opening, editing or saving a
    document re-runs the pipeline over its full text and republishes the
    result; closing it drops the analyzer and clears the editor's markers.
    """

    def __init__(self) -> None:
        super().__init__(name="loxpy-lsp", version=f"v{__version__}")
        self._analyzers: dict[str, DocumentAnalyzer] = {}
        self._register_handlers()

    def _register_handlers(self) -> None:
        """
        Register all LSP request and notification handlers.

        pygls tags each handler with attributes, which bound methods do not
        accept, so every method is wrapped in a plain function.
        """

        @self.feature(types.TEXT_DOCUMENT_DID_OPEN)
        def did_open(params: types.DidOpenTextDocumentParams) -> None:
            self._on_did_open(params)

        @self.feature(types.TEXT_DOCUMENT_DID_CHANGE)
        def did_change(params: types.DidChangeTextDocumentParams) -> None:
            self._on_did_change(params)

        @self.feature(types.TEXT_DOCUMENT_DID_SAVE)
        def did_save(params: types.DidSaveTextDocumentParams) -> None:
            self._on_did_save(params)

        @self.feature(types.TEXT_DOCUMENT_DID_CLOSE)
        def did_close(params: types.DidCloseTextDocumentParams) -> None:
            self._on_did_close(params)

        @self.feature(types.TEXT_DOCUMENT_HOVER)
        def hover(params: types.HoverParams) -> types.Hover | None:
            return self._on_hover(params)

    def _get_analyzer(self, uri: str) -> DocumentAnalyzer | None:
        return self._analyzers.get(uri)

    def _refresh(self, uri: str, text: str) -> None:
        """Re-analyze a document and publish its errors."""
        analyzer = DocumentAnalyzer(text, uri)
        analyzer.analyze()
        self._analyzers[uri] = analyzer
        logger.debug(f"{uri}: {len(analyzer.diagnostics)} diagnostic(s)")
        self._send(uri, analyzer.diagnostics)

    def _refresh_from_workspace(self, uri: str) -> None:
        doc = self.workspace.get_text_document(uri)
        if doc is not None:
            self._refresh(uri, doc.source)

    def _send(self, uri: str, diagnostics: list[types.Diagnostic]) -> None:
        self.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )

    # =========================================================================
    # Document Synchronization
    # =========================================================================

    def _on_did_open(self, params: types.DidOpenTextDocumentParams) -> None:
        item = params.text_document
        logger.info(f"Opened {item.uri}")
        self._refresh(item.uri, item.text)

    def _on_did_change(self, params: types.DidChangeTextDocumentParams) -> None:
        self._refresh_from_workspace(params.text_document.uri)

    def _on_did_save(self, params: types.DidSaveTextDocumentParams) -> None:
        logger.info(f"Saved {params.text_document.uri}")
        self._refresh_from_workspace(params.text_document.uri)

    def _on_did_close(self, params: types.DidCloseTextDocumentParams) -> None:
        uri = params.text_document.uri
        logger.info(f"Closed {uri}")
        self._analyzers.pop(uri, None)
        self._send(uri, [])

    # =========================================================================
    # Hover
    # =========================================================================

    def _on_hover(self, params: types.HoverParams) -> types.Hover | None:
        analyzer = self._get_analyzer(params.text_document.uri)
        if analyzer is None:
            return None
        return analyzer.get_hover(params.position.line, params.position.character)


def create_server() -> LoxLanguageServer:
    """Create a Lox language server with its lifecycle logging attached."""
    server = LoxLanguageServer()

    @server.feature(types.INITIALIZED)
    def on_initialized(params: types.InitializedParams) -> None:  # noqa: ARG001
        logger.info("Client handshake complete")

    @server.feature(types.SHUTDOWN)
    def on_shutdown(params: None) -> None:  # noqa: ARG001
        logger.info(f"Shutting down with {len(server._analyzers)} open document(s)")

    return server


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for ``loxpy-lsp``; serves over stdio unless --tcp is given."""
    parser = argparse.ArgumentParser(prog="loxpy-lsp", description="Lox Language Server")
    parser.add_argument("--tcp", action="store_true", help="Serve over TCP instead of stdio")
    parser.add_argument("--host", default="127.0.0.1", help="TCP bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=2087, help="TCP port (default: 2087)")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Logging level (default: info)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    server = create_server()
    if args.tcp:
        logger.info(f"Listening on {args.host}:{args.port}")
        server.start_tcp(args.host, args.port)
    else:
        logger.info("Serving over stdio")
        server.start_io()


if __name__ == "__main__":
    main()
