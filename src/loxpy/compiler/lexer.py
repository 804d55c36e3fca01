"""
Lox Scanner (Lexer).

Transforms Lox source code into a stream of tokens in a single left-to-right
pass with at most two characters of lookahead.
"""

import logging
from typing import Iterator, Optional

from loxpy.compiler.tokens import (
    COMPOUND_OPERATORS,
    KEYWORDS,
    SINGLE_CHAR_TOKENS,
    Token,
    TokenLiteral,
    TokenType,
)
from loxpy.utils.errors import ScanError, SourceLocation

logger = logging.getLogger(__name__)


def _is_digit(char: Optional[str]) -> bool:
    return char is not None and "0" <= char <= "9"


def _is_alpha(char: Optional[str]) -> bool:
    return char is not None and (("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_")


def _is_alphanumeric(char: Optional[str]) -> bool:
    return _is_alpha(char) or _is_digit(char)


class Lexer:
    """
    Tokenizer for Lox source code.

    The lexer supports:
    - Punctuation and the arithmetic, comparison and equality operators
    - Number literals (digit runs with an optional fractional part)
    - String literals in double quotes, which may span lines
    - Identifiers and the reserved keywords
    - Line comments starting with //

    Scanning is fail-fast: the first malformed lexeme raises a ScanError and
    no further tokens are produced.

    Usage:
        lexer = Lexer(source_code)
        tokens = lexer.tokenize()
        # or iterate: for token in lexer: ...
    """

    def __init__(self, source: str, filename: Optional[str] = None) -> None:
        """
        Initialize the lexer with source code.

        Args:
            source: The Lox source code to tokenize
            filename: Optional filename for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

        # Start of the lexeme currently being scanned
        self._start = 0
        self._start_location = self._location()

    @property
    def _current_char(self) -> Optional[str]:
        """Return the current character or None if at end."""
        if self.pos >= len(self.source):
            return None
        return self.source[self.pos]

    @property
    def _peek_char(self) -> Optional[str]:
        """Return the next character without consuming it."""
        peek_pos = self.pos + 1
        if peek_pos >= len(self.source):
            return None
        return self.source[peek_pos]

    def _location(self) -> SourceLocation:
        """Create a SourceLocation for the current position."""
        return SourceLocation(
            line=self.line,
            column=self.column,
            offset=self.pos,
            filename=self.filename,
        )

    def _advance(self) -> str:
        """Consume and return the current character."""
        char = self.source[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def _match(self, expected: str) -> bool:
        """Consume the current character only if it equals ``expected``."""
        if self._current_char != expected:
            return False
        self._advance()
        return True

    def _lexeme(self) -> str:
        return self.source[self._start:self.pos]

    def _make_token(self, token_type: TokenType, literal: TokenLiteral = None) -> Token:
        return Token(token_type, self._lexeme(), literal, self._start_location)

    def _skip_line_comment(self) -> None:
        """Skip to the end of the line; the newline itself is left in place."""
        while self._current_char is not None and self._current_char != "\n":
            self._advance()

    def _read_string(self) -> Token:
        """
        Read a string literal; the opening quote is already consumed.

        The value is the text between the quotes, taken verbatim. Newlines
        are allowed and advance the line counter.
        """
        while self._current_char is not None and self._current_char != '"':
            self._advance()

        if self._current_char is None:
            raise ScanError("Unterminated string", self._start_location)

        self._advance()  # closing quote
        value = self.source[self._start + 1:self.pos - 1]
        return self._make_token(TokenType.STRING, value)

    def _read_number(self) -> Token:
        """
        Read a number literal; the first digit is already consumed.

        A "." is part of the number only when a digit follows it, so ``1.``
        scans as NUMBER then DOT.
        """
        while _is_digit(self._current_char):
            self._advance()

        if self._current_char == "." and _is_digit(self._peek_char):
            self._advance()  # decimal point
            while _is_digit(self._current_char):
                self._advance()

        return self._make_token(TokenType.NUMBER, float(self._lexeme()))

    def _read_identifier_or_keyword(self) -> Token:
        """Read an identifier; reserved words become their keyword token."""
        while _is_alphanumeric(self._current_char):
            self._advance()

        token_type = KEYWORDS.get(self._lexeme(), TokenType.IDENTIFIER)
        return self._make_token(token_type)

    def _next_token(self) -> Optional[Token]:
        """
        Scan one lexeme starting at the current position.

        Returns:
            The token, or None if the lexeme produced no token
            (whitespace, newline, comment).
        """
        self._start = self.pos
        self._start_location = self._location()
        char = self._advance()

        if char in SINGLE_CHAR_TOKENS:
            return self._make_token(SINGLE_CHAR_TOKENS[char])

        if char in COMPOUND_OPERATORS:
            single, compound = COMPOUND_OPERATORS[char]
            return self._make_token(compound if self._match("=") else single)

        if char == "/":
            if self._match("/"):
                self._skip_line_comment()
                return None
            return self._make_token(TokenType.SLASH)

        if char in " \r\t\n":
            return None

        if char == '"':
            return self._read_string()

        if _is_digit(char):
            return self._read_number()

        if _is_alpha(char):
            return self._read_identifier_or_keyword()

        raise ScanError("Unexpected character.", self._start_location)

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source code.

        Returns:
            A list of all tokens including the final EOF token.

        Raises:
            ScanError: On the first malformed lexeme.
        """
        self.tokens = []
        self.pos = 0
        self.line = 1
        self.column = 1

        while self._current_char is not None:
            token = self._next_token()
            if token is not None:
                self.tokens.append(token)

        self.tokens.append(Token(TokenType.EOF, None, None, self._location()))
        logger.debug(f"Scanned {len(self.tokens)} tokens from {self.filename or '<input>'}")
        return self.tokens

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens (tokenizes on first use)."""
        if not self.tokens:
            self.tokenize()
        return iter(self.tokens)


def tokenize(source: str, filename: Optional[str] = None) -> list[Token]:
    """
    Convenience function to tokenize source code.

    Args:
        source: Lox source code
        filename: Optional filename for error reporting

    Returns:
        List of tokens
    """
    return Lexer(source, filename).tokenize()
