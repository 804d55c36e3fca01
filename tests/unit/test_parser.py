"""
Unit tests for the Lox Parser.
"""

import pytest

from loxpy.compiler.ast_nodes import Binary, Grouping, Literal, Unary
from loxpy.compiler.ast_printer import print_ast
from loxpy.compiler.parser import Parser, parse as module_parse
from loxpy.compiler.tokens import TokenType
from loxpy.utils.errors import ErrorKind, ParseError


class TestPrimary:
    """Tests for primary expressions."""

    def test_number(self, parse):
        expr = parse("42")
        assert isinstance(expr, Literal)
        assert expr.value == 42.0

    def test_string(self, parse):
        expr = parse('"hi"')
        assert isinstance(expr, Literal)
        assert expr.value == "hi"

    def test_true(self, parse):
        assert parse("true").value is True

    def test_false(self, parse):
        assert parse("false").value is False

    def test_nil(self, parse):
        expr = parse("nil")
        assert isinstance(expr, Literal)
        assert expr.value is None

    def test_grouping(self, parse):
        expr = parse("(1)")
        assert isinstance(expr, Grouping)
        assert isinstance(expr.expression, Literal)

    def test_nested_grouping(self, parse):
        assert print_ast(parse("((1))")) == "(group (group 1))"


class TestUnary:
    """Tests for prefix operators."""

    def test_negation(self, parse):
        expr = parse("-1")
        assert isinstance(expr, Unary)
        assert expr.operator.type == TokenType.MINUS
        assert expr.right == Literal(1.0)

    def test_not(self, parse):
        expr = parse("!true")
        assert isinstance(expr, Unary)
        assert expr.operator.type == TokenType.BANG

    def test_prefix_chain_is_right_recursive(self, parse):
        expr = parse("!!-1")
        assert isinstance(expr, Unary)
        assert isinstance(expr.right, Unary)
        assert isinstance(expr.right.right, Unary)
        assert expr.right.right.operator.type == TokenType.MINUS

    def test_unary_binds_tighter_than_binary(self, parse):
        assert print_ast(parse("-1 * 2")) == "(* (- 1) 2)"


class TestPrecedence:
    """Tests for the precedence ladder."""

    def test_multiplication_over_addition(self, parse):
        """1 + 2 * 3 parses as Binary(+, 1, Binary(*, 2, 3))."""
        expr = parse("1 + 2 * 3")
        assert isinstance(expr, Binary)
        assert expr.operator.type == TokenType.PLUS
        assert expr.left == Literal(1.0)
        assert isinstance(expr.right, Binary)
        assert expr.right.operator.type == TokenType.STAR
        assert expr.right.left == Literal(2.0)
        assert expr.right.right == Literal(3.0)

    def test_addition_over_comparison(self, parse):
        assert print_ast(parse("1 + 2 > 3 - 4")) == "(> (+ 1 2) (- 3 4))"

    def test_comparison_over_equality(self, parse):
        assert print_ast(parse("1 < 2 == 3 >= 4")) == "(== (< 1 2) (>= 3 4))"

    def test_grouping_overrides_precedence(self, parse):
        assert print_ast(parse("(1 + 2) * 3")) == "(* (group (+ 1 2)) 3)"

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("1 != 2", TokenType.BANG_EQUAL),
            ("1 == 2", TokenType.EQUAL_EQUAL),
            ("1 > 2", TokenType.GREATER),
            ("1 >= 2", TokenType.GREATER_EQUAL),
            ("1 < 2", TokenType.LESS),
            ("1 <= 2", TokenType.LESS_EQUAL),
            ("1 - 2", TokenType.MINUS),
            ("1 + 2", TokenType.PLUS),
            ("1 / 2", TokenType.SLASH),
            ("1 * 2", TokenType.STAR),
        ],
    )
    def test_binary_operators(self, parse, source, expected):
        expr = parse(source)
        assert isinstance(expr, Binary)
        assert expr.operator.type == expected


class TestAssociativity:
    """Binary operator chains associate to the left."""

    def test_subtraction(self, parse):
        """1 - 2 - 3 parses as (1 - 2) - 3."""
        expr = parse("1 - 2 - 3")
        assert isinstance(expr, Binary)
        assert isinstance(expr.left, Binary)
        assert expr.right == Literal(3.0)
        assert print_ast(expr) == "(- (- 1 2) 3)"

    def test_division(self, parse):
        assert print_ast(parse("8 / 4 / 2")) == "(/ (/ 8 4) 2)"

    def test_equality(self, parse):
        assert print_ast(parse("1 == 2 == 3")) == "(== (== 1 2) 3)"


class TestParseErrors:
    """Tests for parse error reporting."""

    def test_unbalanced_grouping(self, parser_factory):
        parser = parser_factory("(1 + 2")
        assert parser.parse() is None
        assert len(parser.errors) == 1
        error = parser.errors[0]
        assert error.message == "Expected ')' after expression."
        assert error.token.type == TokenType.EOF
        assert error.where == "at end"
        assert error.kind == ErrorKind.PARSE

    def test_empty_input(self, parser_factory):
        parser = parser_factory("")
        assert parser.parse() is None
        assert str(parser.errors[0]) == "[line 1] Error at end: Expected expression."

    def test_missing_operand(self, parser_factory):
        parser = parser_factory("1 +")
        assert parser.parse() is None
        assert parser.errors[0].message == "Expected expression."

    def test_unexpected_token(self, parser_factory):
        parser = parser_factory("\n)")
        assert parser.parse() is None
        error = parser.errors[0]
        assert str(error) == "[line 2] Error at ')': Expected expression."

    def test_identifier_is_not_an_expression(self, parser_factory):
        parser = parser_factory("x")
        assert parser.parse() is None
        assert parser.errors[0].where == "at 'x'"

    def test_on_error_callback(self, tokenize):
        reported: list[ParseError] = []
        parser = Parser(tokenize("(1"), on_error=reported.append)
        assert parser.parse() is None
        assert reported == parser.errors

    def test_no_error_on_success(self, parser_factory):
        parser = parser_factory("1")
        parser.parse()
        assert parser.errors == []

    def test_trailing_tokens_ignored(self, parse):
        """Only the first expression is parsed; the rest is left unread."""
        assert parse("1 2") == Literal(1.0)

    def test_module_parse(self, tokenize):
        assert module_parse(tokenize("nil")) == Literal(None)
        assert module_parse(tokenize("(")) is None


class TestSynchronize:
    """Tests for statement-boundary error recovery."""

    def test_stops_after_semicolon(self, parser_factory):
        parser = parser_factory("+ + ; 3")
        parser.synchronize()
        assert parser.parse() == Literal(3.0)

    def test_stops_before_statement_keyword(self, parser_factory):
        parser = parser_factory("1 + var")
        parser.synchronize()
        assert parser.parse() is None
        assert parser.errors[0].where == "at 'var'"

    def test_stops_at_end(self, parser_factory):
        parser = parser_factory("1 2 3")
        parser.synchronize()
        assert parser.parse() is None
        assert parser.errors[0].where == "at end"
