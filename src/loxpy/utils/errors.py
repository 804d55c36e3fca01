"""
Error types and source location tracking for the Lox expression front end.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from loxpy.compiler.tokens import Token


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Attributes:
        line: 1-indexed line number
        column: 1-indexed column number
        offset: 0-indexed character offset from start of source
        filename: Optional filename for error reporting
    """

    line: int
    column: int
    offset: int = 0
    filename: Optional[str] = None

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


class ErrorKind(Enum):
    """The pipeline stage an error was raised in."""

    SCAN = "scan"
    PARSE = "parse"
    RUNTIME = "runtime"


class LoxError(Exception):
    """Base exception for all scan, parse and runtime errors."""

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        where: Optional[str] = None,
    ) -> None:
        self.message = message
        self.location = location
        self.where = where
        super().__init__(self.format())

    @property
    def line(self) -> int:
        return self.location.line if self.location else 0

    def format(self, with_column: bool = False) -> str:
        """
        Render the error in the report format.

        ``[line L] Error <where>: <message>``, or with ``with_column``
        ``[line L; column C] Error <where>: <message>``.
        """
        if with_column and self.location:
            header = f"[line {self.location.line}; column {self.location.column}]"
        else:
            header = f"[line {self.line}]"

        if self.where:
            return f"{header} Error {self.where}: {self.message}"
        return f"{header} Error: {self.message}"

    def __str__(self) -> str:
        return self.format()


class ScanError(LoxError):
    """Raised when the scanner meets a malformed lexeme."""

    kind = ErrorKind.SCAN


def _where_for(token: Token) -> str:
    from loxpy.compiler.tokens import TokenType

    if token.type == TokenType.EOF:
        return "at end"
    return f"at '{token.lexeme}'"


class ParseError(LoxError):
    """Raised when the token stream violates the expression grammar."""

    kind = ErrorKind.PARSE

    def __init__(self, token: Token, message: str) -> None:
        self.token = token
        super().__init__(message, token.location, _where_for(token))


class LoxRuntimeError(LoxError):
    """Raised when an operand has the wrong type during evaluation."""

    kind = ErrorKind.RUNTIME

    def __init__(self, token: Token, message: str) -> None:
        self.token = token
        super().__init__(message, token.location, _where_for(token))
