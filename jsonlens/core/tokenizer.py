"""
Lexer for jsonlens - turns validated JSON text into a token sequence.

The tree builder consumes these tokens; string tokens keep their raw literal
(quotes and escapes included) so keys can be displayed exactly as written.
"""

import asyncio
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

from ..security.exceptions import ErrorReporter, TokenStreamError
from .constants import classify_number, get_structural_token_map


class TokenType(Enum):
    """Token kinds emitted by the lexer."""

    COMMA = "comma"
    END_LABEL = "end-label"
    BEGIN_OBJECT = "begin-object"
    END_OBJECT = "end-object"
    BEGIN_ARRAY = "begin-array"
    END_ARRAY = "end-array"

    STRING = "string"
    MAYBE_STRING = "maybe-string"
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    DECIMAL_NUMBER = "maybe-decimal-number"
    NEGATIVE_NUMBER = "maybe-negative-number"
    EXPONENTIAL_NUMBER = "maybe-exponential-number"
    EXPONENTIAL_NUMBER_NEGATIVE = "maybe-exponential-number-negative"
    SYMBOL = "symbol"


NUMBER_TYPES = frozenset({
    TokenType.NUMBER,
    TokenType.DECIMAL_NUMBER,
    TokenType.NEGATIVE_NUMBER,
    TokenType.EXPONENTIAL_NUMBER,
    TokenType.EXPONENTIAL_NUMBER_NEGATIVE,
})


@dataclass
class Position:
    """Position in source text (line and column)."""

    line: int
    column: int


class Token(NamedTuple):
    """Token with type, raw text and position information."""

    type: TokenType
    value: str
    position: Position


class Lexer:
    """Lexical analyzer for JSON input."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self._reporter: Optional[ErrorReporter] = None

    def current_position(self) -> Position:
        """Get current position in the text."""
        return Position(self.line, self.column)

    def peek(self, offset: int = 0) -> str:
        """Peek at character at given offset without consuming it."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return ""
        return self.text[pos]

    def advance(self) -> str:
        """Advance position and return the current character."""
        if self.pos >= len(self.text):
            return ""

        char = self.text[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def skip_whitespace(self) -> None:
        """Skip JSON whitespace (space, tab, newline, carriage return)."""
        while self.pos < len(self.text) and self.text[self.pos] in " \t\n\r":
            self.advance()

    def error(self, message: str, position: Position) -> TokenStreamError:
        if self._reporter is None:
            self._reporter = ErrorReporter(self.text)
        return self._reporter.create_token_error(message, position)

    def read_string(self) -> str:
        """Read a double-quoted string literal, returning it verbatim."""
        start = self.pos
        start_position = self.current_position()
        self.advance()

        while self.pos < len(self.text):
            char = self.advance()
            if char == "\\":
                if not self.advance():
                    break
            elif char == '"':
                return self.text[start:self.pos]
            elif char == "\n":
                break

        raise self.error("Unterminated string", start_position)

    def read_number(self) -> str:
        """Read a numeric literal."""
        start = self.pos

        if self.peek() == "-":
            self.advance()
        while self.peek().isdigit():
            self.advance()

        if self.peek() == "." and self.peek(1).isdigit():
            self.advance()
            while self.peek().isdigit():
                self.advance()

        if self.peek() in ("e", "E"):
            self.advance()
            if self.peek() in ("+", "-"):
                self.advance()
            while self.peek().isdigit():
                self.advance()

        return self.text[start:self.pos]

    def read_identifier(self) -> str:
        """Read a bare word such as true, false, null or NaN."""
        start = self.pos
        while self.pos < len(self.text):
            char = self.peek()
            if char.isalnum() or char in "_$":
                self.advance()
            else:
                break
        return self.text[start:self.pos]

    def tokenize(self) -> Iterator[Token]:
        """Tokenize the input text into a sequence of tokens."""
        while self.pos < len(self.text):
            self.skip_whitespace()

            if self.pos >= len(self.text):
                break

            char = self.peek()
            pos = self.current_position()

            token = self._try_structural_token(char, pos)
            if token:
                yield token
                continue

            token = self._try_string_token(char, pos)
            if token:
                yield token
                continue

            token = self._try_number_token(char, pos)
            if token:
                yield token
                continue

            token = self._try_identifier_token(char, pos)
            if token:
                yield token
                continue

            raise self.error(f"Unexpected character {char!r}", pos)

    def _try_structural_token(self, char: str, pos: Position) -> Optional[Token]:
        """Try to create structural tokens (braces, brackets, etc.)."""
        token_map = get_structural_token_map()

        if char in token_map:
            self.advance()
            return Token(token_map[char], char, pos)
        return None

    def _try_string_token(self, char: str, pos: Position) -> Optional[Token]:
        """Try to create a string token."""
        if char == '"':
            return Token(TokenType.STRING, self.read_string(), pos)
        return None

    def _try_number_token(self, char: str, pos: Position) -> Optional[Token]:
        """Try to create a number token."""
        if char.isdigit() or (char == "-" and self.peek(1).isdigit()):
            literal = self.read_number()
            return Token(classify_number(literal), literal, pos)
        return None

    def _try_identifier_token(self, char: str, pos: Position) -> Optional[Token]:
        """Try to create a keyword or symbol token."""
        if char.isalpha() or char in "_$" or (char == "-" and self.peek(1).isalpha()):
            prefix = self.advance() if char == "-" else ""
            identifier = prefix + self.read_identifier()

            if identifier in {"true", "false"}:
                return Token(TokenType.BOOLEAN, identifier, pos)
            if identifier == "null":
                return Token(TokenType.NULL, identifier, pos)
            return Token(TokenType.SYMBOL, identifier, pos)
        return None

    def get_all_tokens(self) -> list[Token]:
        """Get all tokens as a list."""
        return list(self.tokenize())


async def iter_tokens_async(text: str, yield_every: int = 1000) -> AsyncIterator[Token]:
    """Tokenize text, handing control back to the event loop every yield_every tokens."""
    for count, token in enumerate(Lexer(text).tokenize(), 1):
        yield token
        if count % yield_every == 0:
            await asyncio.sleep(0)
