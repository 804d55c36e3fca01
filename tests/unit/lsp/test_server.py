"""Tests for the Lox language server handlers."""

from unittest.mock import patch

import pytest
from lsprotocol import types

from loxpy.lsp.server import LoxLanguageServer, create_server

URI = "file:///doc.lox"


@pytest.fixture
def server():
    return LoxLanguageServer()


def open_params(text: str) -> types.DidOpenTextDocumentParams:
    return types.DidOpenTextDocumentParams(
        text_document=types.TextDocumentItem(uri=URI, language_id="lox", version=1, text=text)
    )


class TestDocumentSync:
    """Tests for document synchronization handlers."""

    def test_open_publishes_diagnostics(self, server) -> None:
        with patch.object(server, "text_document_publish_diagnostics") as publish:
            server._on_did_open(open_params("(1"))

        publish.assert_called_once()
        params = publish.call_args.args[0]
        assert params.uri == URI
        assert len(params.diagnostics) == 1
        assert params.diagnostics[0].code == "E0202"

    def test_open_valid_document(self, server) -> None:
        with patch.object(server, "text_document_publish_diagnostics") as publish:
            server._on_did_open(open_params("1 + 2"))

        assert publish.call_args.args[0].diagnostics == []

    def test_close_clears_diagnostics(self, server) -> None:
        with patch.object(server, "text_document_publish_diagnostics") as publish:
            server._on_did_open(open_params("(1"))
            server._on_did_close(
                types.DidCloseTextDocumentParams(
                    text_document=types.TextDocumentIdentifier(uri=URI)
                )
            )

        assert publish.call_args.args[0].diagnostics == []
        assert server._get_analyzer(URI) is None


class TestHover:
    def test_hover_after_open(self, server) -> None:
        with patch.object(server, "text_document_publish_diagnostics"):
            server._on_did_open(open_params("2 * 21"))

        hover = server._on_hover(
            types.HoverParams(
                text_document=types.TextDocumentIdentifier(uri=URI),
                position=types.Position(line=0, character=0),
            )
        )

        assert hover is not None
        assert "value: `42`" in hover.contents.value

    def test_hover_unknown_document(self, server) -> None:
        hover = server._on_hover(
            types.HoverParams(
                text_document=types.TextDocumentIdentifier(uri="file:///other.lox"),
                position=types.Position(line=0, character=0),
            )
        )
        assert hover is None


class TestRegistration:
    """Handlers are reachable through pygls's feature table."""

    def test_construct(self) -> None:
        server = LoxLanguageServer()
        assert server._analyzers == {}

    def test_features_registered(self, server) -> None:
        features = server.protocol.fm.features
        for method in (
            types.TEXT_DOCUMENT_DID_OPEN,
            types.TEXT_DOCUMENT_DID_CHANGE,
            types.TEXT_DOCUMENT_DID_SAVE,
            types.TEXT_DOCUMENT_DID_CLOSE,
            types.TEXT_DOCUMENT_HOVER,
        ):
            assert method in features

    def test_registered_open_handler(self, server) -> None:
        handler = server.protocol.fm.features[types.TEXT_DOCUMENT_DID_OPEN]
        with patch.object(server, "text_document_publish_diagnostics") as publish:
            handler(open_params("1 +"))

        assert publish.call_args.args[0].diagnostics[0].code == "E0201"
        assert server._get_analyzer(URI) is not None

    def test_create_server(self) -> None:
        server = create_server()
        assert isinstance(server, LoxLanguageServer)
        assert types.INITIALIZED in server.protocol.fm.features
