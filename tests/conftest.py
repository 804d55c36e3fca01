"""
Pytest configuration and shared fixtures for loxpy tests.
"""

import pytest

from loxpy.compiler import RunResult, run_source
from loxpy.compiler.ast_nodes import Expression
from loxpy.compiler.interpreter import Interpreter
from loxpy.compiler.lexer import Lexer
from loxpy.compiler.parser import Parser
from loxpy.compiler.tokens import Token
from loxpy.runtime.values import LiteralValue


@pytest.fixture
def lexer_factory():
    """Factory fixture for creating lexers."""

    def _create_lexer(source: str, filename: str = "test.lox") -> Lexer:
        return Lexer(source, filename)

    return _create_lexer


@pytest.fixture
def tokenize(lexer_factory):
    """Fixture to tokenize source code."""

    def _tokenize(source: str) -> list[Token]:
        lexer = lexer_factory(source)
        return lexer.tokenize()

    return _tokenize


@pytest.fixture
def parser_factory(tokenize):
    """Factory fixture for creating parsers from source."""

    def _create_parser(source: str) -> Parser:
        return Parser(tokenize(source))

    return _create_parser


@pytest.fixture
def parse(parser_factory):
    """Fixture to parse source code into an expression tree."""

    def _parse(source: str) -> Expression:
        parser = parser_factory(source)
        expression = parser.parse()
        assert expression is not None, f"parse failed: {parser.errors}"
        return expression

    return _parse


@pytest.fixture
def evaluate(parse):
    """Fixture to evaluate source code to a raw value."""

    def _evaluate(source: str) -> LiteralValue:
        return Interpreter().evaluate(parse(source))

    return _evaluate


@pytest.fixture
def run():
    """Fixture to run source code through the whole pipeline."""

    def _run(source: str) -> RunResult:
        return run_source(source, "test.lox")

    return _run
