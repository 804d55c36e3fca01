"""
Lox Parser.

A recursive descent parser that transforms a token stream into an expression
tree. Each precedence level is one method; binary levels loop so that
operator chains associate to the left.

Grammar, loosest to tightest binding:

    expression     := equality
    equality       := comparison ( ( "!=" | "==" ) comparison )*
    comparison     := addition ( ( ">" | ">=" | "<" | "<=" ) addition )*
    addition       := multiplication ( ( "-" | "+" ) multiplication )*
    multiplication := unary ( ( "/" | "*" ) unary )*
    unary          := ( "!" | "-" ) unary | primary
    primary        := NUMBER | STRING | "true" | "false" | "nil"
                    | "(" expression ")"
"""

import logging
from typing import Callable, Optional

from loxpy.compiler.ast_nodes import Binary, Expression, Grouping, Literal, Unary
from loxpy.compiler.tokens import STATEMENT_KEYWORDS, Token, TokenType
from loxpy.utils.errors import ParseError

logger = logging.getLogger(__name__)

ErrorReporter = Callable[[ParseError], None]

EQUALITY_OPERATORS = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
COMPARISON_OPERATORS = (
    TokenType.GREATER,
    TokenType.GREATER_EQUAL,
    TokenType.LESS,
    TokenType.LESS_EQUAL,
)
ADDITION_OPERATORS = (TokenType.MINUS, TokenType.PLUS)
MULTIPLICATION_OPERATORS = (TokenType.SLASH, TokenType.STAR)
UNARY_OPERATORS = (TokenType.BANG, TokenType.MINUS)


class Parser:
    """
    Recursive descent parser for Lox expressions.

    Usage:
        parser = Parser(tokens)
        expression = parser.parse()
        if expression is None:
            ...  # parser.errors holds the ParseError
    """

    def __init__(self, tokens: list[Token], on_error: Optional[ErrorReporter] = None) -> None:
        """
        Initialize the parser.

        Args:
            tokens: List of tokens from the lexer, ending with EOF
            on_error: Optional callback receiving the parse error, if any
        """
        self.tokens = tokens
        self.pos = 0
        self.errors: list[ParseError] = []
        self._on_error = on_error

    @property
    def _current(self) -> Token:
        """Get the current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    @property
    def _previous(self) -> Token:
        """Get the previous token."""
        return self.tokens[self.pos - 1] if self.pos > 0 else self.tokens[0]

    def _is_at_end(self) -> bool:
        """Check if we've reached the end of tokens."""
        return self._current.type == TokenType.EOF

    def _check(self, *types: TokenType) -> bool:
        """Check if the current token is one of the given types."""
        return self._current.type in types

    def _advance(self) -> Token:
        """Consume and return the current token."""
        token = self._current
        if not self._is_at_end():
            self.pos += 1
        return token

    def _match(self, *types: TokenType) -> bool:
        """Consume current token if it matches one of the given types."""
        if self._check(*types):
            self._advance()
            return True
        return False

    def _expect(self, token_type: TokenType, message: str) -> Token:
        """Consume current token if it matches, else raise error."""
        if self._check(token_type):
            return self._advance()
        raise self._error(message)

    def _error(self, message: str) -> ParseError:
        """Create a parse error at the current token."""
        return ParseError(self._current, message)

    def synchronize(self) -> None:
        """
        Discard tokens up to the next statement boundary.

        Stops after a ";" or before a statement keyword. The expression
        grammar has no statements, so ``parse`` does not call this yet.
        """
        self._advance()
        while not self._is_at_end():
            if self._previous.type == TokenType.SEMICOLON:
                return
            if self._current.type in STATEMENT_KEYWORDS:
                return
            self._advance()

    # -------------------------------------------------------------------------
    # Entry Point
    # -------------------------------------------------------------------------

    def parse(self) -> Optional[Expression]:
        """
        Parse a single expression.

        Returns:
            The root expression node, or None if a parse error occurred.
            The error is recorded in ``errors`` and passed to ``on_error``.
        """
        try:
            return self._parse_expression()
        except ParseError as e:
            logger.debug(f"Parse error: {e}")
            self.errors.append(e)
            if self._on_error is not None:
                self._on_error(e)
            return None

    # -------------------------------------------------------------------------
    # Expression Parsing
    # -------------------------------------------------------------------------

    def _parse_expression(self) -> Expression:
        return self._parse_equality()

    def _parse_binary(
        self,
        operand: Callable[[], Expression],
        operators: tuple[TokenType, ...],
    ) -> Expression:
        """Parse one left-associative binary precedence level."""
        expr = operand()

        while self._match(*operators):
            operator = self._previous
            right = operand()
            expr = Binary(expr, operator, right)

        return expr

    def _parse_equality(self) -> Expression:
        return self._parse_binary(self._parse_comparison, EQUALITY_OPERATORS)

    def _parse_comparison(self) -> Expression:
        return self._parse_binary(self._parse_addition, COMPARISON_OPERATORS)

    def _parse_addition(self) -> Expression:
        return self._parse_binary(self._parse_multiplication, ADDITION_OPERATORS)

    def _parse_multiplication(self) -> Expression:
        return self._parse_binary(self._parse_unary, MULTIPLICATION_OPERATORS)

    def _parse_unary(self) -> Expression:
        """Parse a prefix operator chain; right-recursive."""
        if self._match(*UNARY_OPERATORS):
            operator = self._previous
            right = self._parse_unary()
            return Unary(operator, right)

        return self._parse_primary()

    def _parse_primary(self) -> Expression:
        """Parse a literal or a parenthesized expression."""
        if self._match(TokenType.FALSE):
            return Literal(False)

        if self._match(TokenType.TRUE):
            return Literal(True)

        if self._match(TokenType.NIL):
            return Literal(None)

        if self._match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self._previous.literal)

        if self._match(TokenType.LEFT_PAREN):
            expr = self._parse_expression()
            self._expect(TokenType.RIGHT_PAREN, "Expected ')' after expression.")
            return Grouping(expr)

        raise self._error("Expected expression.")


def parse(tokens: list[Token]) -> Optional[Expression]:
    """
    Convenience function to parse tokens into an expression tree.

    Args:
        tokens: List of tokens from the lexer

    Returns:
        The root expression node, or None on a parse error
    """
    return Parser(tokens).parse()
