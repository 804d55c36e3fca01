"""
Rust-like Rich Error Diagnostics for Lox.

Turns scan, parse and runtime errors into diagnostics with source context.

Example output:
    error[E0202]: Expected ')' after expression.
      --> example.lox:1:7
       |
     1 | (1 + 2
       |       ^ at end
       |
       = note: parse error
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from loxpy.utils.colors import ANSI_CODES
from loxpy.utils.errors import ErrorKind, LoxError


# =============================================================================
# Error Codes Catalog
# =============================================================================


class ErrorCode:
    """
    Catalog of error codes for Lox diagnostics.

    - E01xx: Runtime type errors
    - E02xx: Syntax errors (scan and parse)
    """

    # Runtime type errors: E01xx
    E0101 = "E0101"  # operands must be two numbers or two strings
    E0102 = "E0102"  # operand must be a number

    # Syntax errors: E02xx
    E0201 = "E0201"  # expected expression
    E0202 = "E0202"  # unclosed delimiter
    E0206 = "E0206"  # unterminated string
    E0208 = "E0208"  # unexpected character


ERROR_DESCRIPTIONS: dict[str, str] = {
    ErrorCode.E0101: "incompatible operand types",
    ErrorCode.E0102: "operand must be a number",
    ErrorCode.E0201: "expected expression",
    ErrorCode.E0202: "unclosed delimiter",
    ErrorCode.E0206: "unterminated string",
    ErrorCode.E0208: "unexpected character",
}

# Message prefix -> error code
_MESSAGE_CODES: tuple[tuple[str, str], ...] = (
    ("Operands must be", ErrorCode.E0101),
    ("Operand must be", ErrorCode.E0102),
    ("Expected expression", ErrorCode.E0201),
    ("Expected ')'", ErrorCode.E0202),
    ("Unterminated string", ErrorCode.E0206),
    ("Unexpected character", ErrorCode.E0208),
)


def error_code_for(error: LoxError) -> str:
    """Look up the catalog code for an error, or "" if it has none."""
    for prefix, code in _MESSAGE_CODES:
        if error.message.startswith(prefix):
            return code
    return ""


# =============================================================================
# Diagnostic Types
# =============================================================================


_RESET = ANSI_CODES["RESET"]
_BOLD = ANSI_CODES["BOLD"]
_BLUE = ANSI_CODES["BLUE"]


class DiagnosticLevel(Enum):
    """Severity level of a diagnostic message."""

    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"

    def color_code(self) -> str:
        """ANSI color for this level's header and primary underline."""
        return {
            DiagnosticLevel.ERROR: ANSI_CODES["RED"],
            DiagnosticLevel.WARNING: ANSI_CODES["YELLOW"],
            DiagnosticLevel.NOTE: ANSI_CODES["CYAN"],
        }[self]


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """
    A run of columns on one source line.

    Lox tokens never need more than one line of underline; a string literal
    spanning lines is marked at its opening quote.
    """

    line: int
    start_col: int
    end_col: int
    filename: str = "<input>"

    @classmethod
    def from_location(
        cls, line: int, col: int, length: int = 1, filename: str = "<input>"
    ) -> "SourceSpan":
        return cls(line=line, start_col=col, end_col=col + length, filename=filename)

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.start_col}"

    @property
    def length(self) -> int:
        return max(1, self.end_col - self.start_col)


@dataclass(slots=True)
class DiagnosticLabel:
    """A span plus the short text printed after its underline."""

    span: SourceSpan
    message: str = ""
    is_primary: bool = True


@dataclass
class Diagnostic:
    """
    A diagnostic message with source context.

    Attributes:
        code: Catalog code such as "E0201", or "" when uncatalogued
        level: Severity level
        message: The headline
        labels: Underlined spans; the first primary one names the location
        notes: Trailing "= note:" lines
    """

    code: str
    level: DiagnosticLevel
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    def render(self, source_code: str, use_color: bool = True) -> str:
        """
        Render this diagnostic as a multi-line string.

        Args:
            source_code: The full source text for context
            use_color: Whether to emit ANSI color codes
        """

        def paint(text: str, *codes: str) -> str:
            if not use_color or not codes:
                return text
            return "".join(codes) + text + _RESET

        level_color = self.level.color_code()
        gutter = paint("|", _BLUE)
        blank_gutter = f"   {gutter}"

        title = f"{self.level.value}[{self.code}]" if self.code else self.level.value
        out = [f"{paint(title, level_color, _BOLD)}: {paint(self.message, _BOLD)}"]

        if self.labels:
            anchor = next((label for label in self.labels if label.is_primary), self.labels[0])
            out.append(f"  {paint('-->', _BLUE)} {anchor.span}")
            out.append(blank_gutter)

            source_lines = source_code.splitlines()
            for label in self.labels:
                span = label.span
                if span.line < 1 or span.line > len(source_lines):
                    continue

                marker_color = level_color if label.is_primary else _BLUE
                marker = ("^" if label.is_primary else "-") * span.length
                if label.message:
                    marker = f"{marker} {label.message}"

                out.append(f"{paint(f'{span.line:3} |', _BLUE)} {source_lines[span.line - 1]}")
                out.append(f"{blank_gutter} {' ' * (span.start_col - 1)}{paint(marker, marker_color)}")
            out.append(blank_gutter)

        out.extend(f"   {paint('=', _BLUE)} {paint('note:', _BOLD)} {note}" for note in self.notes)
        return "\n".join(out)

    def to_simple_message(self) -> str:
        """One-line form: "[E0201] Expected expression." """
        return f"[{self.code}] {self.message}" if self.code else self.message


# =============================================================================
# Diagnostic Emitter
# =============================================================================


class DiagnosticEmitter:
    """
    Collects and renders diagnostics for a source file.

    Usage:
        emitter = DiagnosticEmitter(source, "example.lox")
        emitter.add_error(error)
        print(emitter.render_all(use_color=False))
    """

    def __init__(self, source: str, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.diagnostics: list[Diagnostic] = []

    def add_diagnostic(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic to the collection."""
        self.diagnostics.append(diagnostic)

    def add_error(self, error: LoxError) -> Diagnostic:
        """Convert a LoxError into a diagnostic and collect it."""
        diagnostic = diagnostic_from_error(error, self.filename)
        self.add_diagnostic(diagnostic)
        return diagnostic

    def has_errors(self) -> bool:
        return any(d.level == DiagnosticLevel.ERROR for d in self.diagnostics)

    def render_all(self, use_color: bool = True) -> str:
        """Render all diagnostics as a single string."""
        return "\n\n".join(d.render(self.source, use_color) for d in self.diagnostics)

    def clear(self) -> None:
        self.diagnostics.clear()


_STAGE_NOTES: dict[ErrorKind, str] = {
    ErrorKind.SCAN: "scan error",
    ErrorKind.PARSE: "parse error",
    ErrorKind.RUNTIME: "runtime error",
}


def diagnostic_from_error(error: LoxError, filename: Optional[str] = None) -> Diagnostic:
    """
    Build a diagnostic for a scan, parse or runtime error.

    The primary label underlines the offending token (or character) and
    carries the error's "where" text.
    """
    diagnostic = Diagnostic(
        code=error_code_for(error),
        level=DiagnosticLevel.ERROR,
        message=error.message,
        notes=[_STAGE_NOTES[error.kind]],
    )

    if error.location is not None:
        token = getattr(error, "token", None)
        length = len(token.lexeme) if token is not None and token.lexeme else 1
        span = SourceSpan.from_location(
            error.location.line,
            error.location.column,
            length,
            filename or error.location.filename or "<input>",
        )
        diagnostic.labels.append(DiagnosticLabel(span, error.where or "", True))

    return diagnostic
