"""
Lox Front-End Package.

This package contains the expression pipeline:
- Lexer: Tokenizes Lox source code
- Parser: Produces an expression tree from tokens
- AST: Node definitions and the visitor dispatch
- AstPrinter: Parenthesized rendering of trees
- Interpreter: Tree-walking evaluation to a literal value

``run_source`` drives the three stages and turns each stage's error into a
value on the returned RunResult, so callers decide what to do with it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from loxpy.compiler.ast_nodes import Expression
from loxpy.compiler.interpreter import Interpreter
from loxpy.compiler.lexer import Lexer
from loxpy.compiler.parser import Parser
from loxpy.compiler.tokens import Token
from loxpy.runtime.values import LiteralValue, stringify
from loxpy.utils.errors import ErrorKind, LoxError, LoxRuntimeError, ScanError

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """
    Outcome of running one source string through the pipeline.

    On a scan error ``tokens`` is empty; on a parse error ``expression`` is
    None; on a runtime error ``value`` and ``display`` are None. ``error``
    holds the error that stopped the pipeline, if any.
    """

    source: str
    tokens: list[Token] = field(default_factory=list)
    expression: Optional[Expression] = None
    value: LiteralValue = None
    display: Optional[str] = None
    error: Optional[LoxError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def stage_failed(self) -> Optional[ErrorKind]:
        """The stage that failed, or None on success."""
        return self.error.kind if self.error is not None else None


def scan_source(source: str, filename: Optional[str] = None) -> list[Token]:
    """Tokenize source; raises ScanError."""
    return Lexer(source, filename).tokenize()


def parse_source(source: str, filename: Optional[str] = None) -> Optional[Expression]:
    """Tokenize and parse source; raises ScanError, returns None on a parse error."""
    return Parser(scan_source(source, filename)).parse()


def run_source(
    source: str,
    filename: Optional[str] = None,
    interpreter: Optional[Interpreter] = None,
) -> RunResult:
    """
    Scan, parse and evaluate a source string.

    Never raises LoxError: the first error stops the pipeline and is returned
    on the result.

    Args:
        source: Lox source text holding one expression
        filename: Optional filename for error locations
        interpreter: Interpreter to evaluate with (a fresh one by default)

    Returns:
        The RunResult for this invocation
    """
    result = RunResult(source=source)

    try:
        result.tokens = Lexer(source, filename).tokenize()
    except ScanError as e:
        logger.debug(f"Scan failed: {e}")
        result.error = e
        return result

    parser = Parser(result.tokens)
    result.expression = parser.parse()
    if result.expression is None:
        result.error = parser.errors[0]
        return result

    interpreter = interpreter or Interpreter()
    try:
        result.value = interpreter.evaluate(result.expression)
    except LoxRuntimeError as e:
        logger.debug(f"Evaluation failed: {e}")
        result.error = e
        return result

    result.display = stringify(result.value)
    logger.debug(f"Evaluated {filename or '<input>'} to {result.display}")
    return result


__all__ = [
    "RunResult",
    "run_source",
    "scan_source",
    "parse_source",
]
