"""
Document analysis for the Lox LSP.

Runs a document through the pipeline and answers position-based queries.
"""

from __future__ import annotations

from typing import Optional

from lsprotocol import types

from loxpy.compiler import RunResult, run_source
from loxpy.compiler.ast_printer import print_ast
from loxpy.compiler.tokens import Token
from loxpy.runtime.values import stringify
from loxpy.utils.diagnostics import error_code_for
from loxpy.utils.errors import LoxError

DIAGNOSTIC_SOURCE = "loxpy"


def _token_range(token: Token) -> types.Range:
    """LSP range (0-indexed) covering a token on its first line."""
    line = max(0, token.location.line - 1)
    start = max(0, token.location.column - 1)
    text = (token.lexeme or "").split("\n", 1)[0]
    return types.Range(
        start=types.Position(line=line, character=start),
        end=types.Position(line=line, character=start + max(1, len(text))),
    )


def error_to_diagnostic(error: LoxError) -> types.Diagnostic:
    """
    Convert a scan, parse or runtime error into an LSP diagnostic.

    The range covers the offending token, or one character when the error
    has no token (scan errors).
    """
    token: Optional[Token] = getattr(error, "token", None)
    if token is not None and token.lexeme:
        range_ = _token_range(token)
    else:
        line = max(0, error.line - 1)
        character = max(0, error.location.column - 1) if error.location else 0
        range_ = types.Range(
            start=types.Position(line=line, character=character),
            end=types.Position(line=line, character=character + 1),
        )

    message = error.message
    if error.where:
        message = f"{message} ({error.where})"

    return types.Diagnostic(
        range=range_,
        message=message,
        severity=types.DiagnosticSeverity.Error,
        source=DIAGNOSTIC_SOURCE,
        code=error_code_for(error) or None,
    )


class DocumentAnalyzer:
    """
    Analyzes a Lox document for LSP features.

    The whole document is one expression; analysis scans, parses and
    evaluates it once and keeps every stage's output for queries.
    """

    def __init__(self, source: str, uri: str) -> None:
        """
        Initialize the analyzer with source code.

        Args:
            source: The Lox source code
            uri: The document URI
        """
        self.source = source
        self.uri = uri
        self.result: RunResult = RunResult(source=source)
        self.diagnostics: list[types.Diagnostic] = []

    def analyze(self) -> None:
        """Run the pipeline and regenerate diagnostics."""
        self.result = run_source(self.source, self.uri)
        self.diagnostics = []
        if self.result.error is not None:
            self.diagnostics.append(error_to_diagnostic(self.result.error))

    @property
    def tokens(self) -> list[Token]:
        return self.result.tokens

    def token_at(self, line: int, character: int) -> Optional[Token]:
        """Find the token covering a 0-indexed position."""
        for token in self.tokens:
            if not token.lexeme:
                continue
            range_ = _token_range(token)
            if range_.start.line == line and range_.start.character <= character < range_.end.character:
                return token
        return None

    def get_hover(self, line: int, character: int) -> types.Hover | None:
        """
        Get hover information at a position.

        Args:
            line: 0-indexed line number
            character: 0-indexed character position

        Returns:
            Hover information or None
        """
        token = self.token_at(line, character)
        if token is None:
            return None

        parts = [f"**{token.type.name}** `{token.lexeme}`"]
        if token.literal is not None:
            parts.append(f"literal: `{stringify(token.literal)}`")

        if self.result.expression is not None:
            parts.append(f"```lox\n{print_ast(self.result.expression)}\n```")
        if self.result.ok:
            parts.append(f"value: `{self.result.display}`")

        return types.Hover(
            contents=types.MarkupContent(
                kind=types.MarkupKind.Markdown,
                value="\n\n".join(parts),
            ),
            range=_token_range(token),
        )
