"""Tests for the Lox LSP document analyzer."""

from lsprotocol import types

from loxpy.lsp.analyzer import DIAGNOSTIC_SOURCE, DocumentAnalyzer, error_to_diagnostic

URI = "file:///test.lox"


def analyze(source: str) -> DocumentAnalyzer:
    analyzer = DocumentAnalyzer(source, URI)
    analyzer.analyze()
    return analyzer


class TestDiagnostics:
    """Test suite for analyzer diagnostics."""

    def test_valid_code_no_errors(self) -> None:
        assert analyze("1 + 2 * 3").diagnostics == []

    def test_before_analyze(self) -> None:
        analyzer = DocumentAnalyzer("(", URI)
        assert analyzer.diagnostics == []
        assert analyzer.tokens == []

    def test_parse_error(self) -> None:
        diagnostics = analyze("(1 + 2").diagnostics

        assert len(diagnostics) == 1
        diagnostic = diagnostics[0]
        assert diagnostic.severity == types.DiagnosticSeverity.Error
        assert diagnostic.source == DIAGNOSTIC_SOURCE
        assert diagnostic.code == "E0202"
        assert diagnostic.message == "Expected ')' after expression. (at end)"
        assert diagnostic.range.start == types.Position(line=0, character=6)

    def test_unterminated_string(self) -> None:
        diagnostic = analyze('1\n+ "abc').diagnostics[0]

        assert diagnostic.code == "E0206"
        assert diagnostic.message == "Unterminated string"
        assert diagnostic.range.start == types.Position(line=1, character=2)
        assert diagnostic.range.end == types.Position(line=1, character=3)

    def test_runtime_error_covers_operator(self) -> None:
        diagnostic = analyze("1 >= true").diagnostics[0]

        assert diagnostic.code == "E0101"
        assert diagnostic.range.start == types.Position(line=0, character=2)
        assert diagnostic.range.end == types.Position(line=0, character=4)
        assert "at '>='" in diagnostic.message

    def test_reanalyze_clears_diagnostics(self) -> None:
        analyzer = analyze("(")
        assert analyzer.diagnostics
        analyzer.source = "1"
        analyzer.analyze()
        assert analyzer.diagnostics == []

    def test_error_to_diagnostic_without_code(self) -> None:
        from loxpy.utils.errors import ScanError

        diagnostic = error_to_diagnostic(ScanError("odd"))
        assert diagnostic.code is None
        assert diagnostic.range.start == types.Position(line=0, character=0)


class TestHover:
    """Test suite for hover information."""

    def test_hover_on_number(self) -> None:
        hover = analyze("12 + 30").get_hover(0, 1)

        assert hover is not None
        content = hover.contents.value
        assert "**NUMBER** `12`" in content
        assert "literal: `12`" in content
        assert "(+ 12 30)" in content
        assert "value: `42`" in content
        assert hover.range == types.Range(
            start=types.Position(line=0, character=0),
            end=types.Position(line=0, character=2),
        )

    def test_hover_on_operator(self) -> None:
        hover = analyze("12 + 30").get_hover(0, 3)

        assert hover is not None
        assert "**PLUS** `+`" in hover.contents.value
        assert "literal:" not in hover.contents.value

    def test_hover_on_whitespace(self) -> None:
        assert analyze("12 + 30").get_hover(0, 2) is None

    def test_hover_out_of_range(self) -> None:
        assert analyze("1").get_hover(5, 0) is None

    def test_hover_with_runtime_error(self) -> None:
        hover = analyze('1 - "a"').get_hover(0, 0)

        assert hover is not None
        assert '(- 1 a)' in hover.contents.value
        assert "value:" not in hover.contents.value

    def test_hover_after_scan_error(self) -> None:
        assert analyze("1 @").get_hover(0, 0) is None

    def test_token_at_string(self) -> None:
        token = analyze('"abc" ').token_at(0, 4)

        assert token is not None
        assert token.literal == "abc"

    def test_token_at_past_token(self) -> None:
        assert analyze('"abc" ').token_at(0, 5) is None
