"""
Lox Utilities Package.

Error types, source locations and diagnostics rendering.
"""

from loxpy.utils.diagnostics import (
    ERROR_DESCRIPTIONS,
    Diagnostic,
    DiagnosticEmitter,
    DiagnosticLabel,
    DiagnosticLevel,
    ErrorCode,
    SourceSpan,
    diagnostic_from_error,
    error_code_for,
)
from loxpy.utils.errors import (
    ErrorKind,
    LoxError,
    LoxRuntimeError,
    ParseError,
    ScanError,
    SourceLocation,
)

__all__ = [
    # Errors
    "ErrorKind",
    "LoxError",
    "ScanError",
    "ParseError",
    "LoxRuntimeError",
    "SourceLocation",
    # Diagnostics
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    "DiagnosticLevel",
    "SourceSpan",
    "DiagnosticLabel",
    "Diagnostic",
    "DiagnosticEmitter",
    "diagnostic_from_error",
    "error_code_for",
]
