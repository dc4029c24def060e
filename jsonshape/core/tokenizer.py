"""
Lexer for jsonshape - tokenizes input strings for parsing.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

from ..security.exceptions import ErrorSuggestionEngine, LexError
from .constants import (
    HEX_DIGITS,
    JSON_ESCAPE_MAP,
    KEYWORDS,
    NUMBER_CHARS,
    WHITESPACE,
    get_structural_token_map,
)


class TokenType(Enum):
    """Token types for JSON parsing."""

    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    COLON = "COLON"
    COMMA = "COMMA"

    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"

    EOF = "EOF"


@dataclass(frozen=True)
class Position:
    """Position in source text.

    ``line`` and ``column`` are 1-based and count code points; ``offset`` is
    the 0-based byte offset into the UTF-8 encoding of the text.
    """

    line: int
    column: int
    offset: int = 0


class Token(NamedTuple):
    """Token with type, value and position information."""

    type: TokenType
    value: str
    position: Position

    def describe(self) -> str:
        """Short human-readable form used in error messages."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.STRING:
            return f"string {self.value!r}"
        if self.type == TokenType.NUMBER:
            return f"number {self.value}"
        return f"'{self.value}'"


def _utf8_width(char: str) -> int:
    code_point = ord(char)
    if code_point < 0x80:
        return 1
    if code_point < 0x800:
        return 2
    if code_point < 0x10000:
        return 3
    return 4


class Lexer:
    """Lexical analyzer for JSON input."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.offset = 0
        self._structural = get_structural_token_map()

    def current_position(self) -> Position:
        """Get current position in the text."""
        return Position(self.line, self.column, self.offset)

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
        self.offset += _utf8_width(char)

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def skip_whitespace(self) -> None:
        """Skip insignificant whitespace (space, tab, newline, carriage return)."""
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.advance()

    def read_string(self) -> str:
        """Read a double-quoted string literal, decoding escape sequences."""
        start = self.current_position()
        parts: list[str] = []
        self.advance()

        while True:
            if self.pos >= len(self.text):
                raise LexError(
                    "Unterminated string",
                    start,
                    suggestions=["Add the closing double quote"],
                )

            char = self.peek()

            if char == '"':
                self.advance()
                return "".join(parts)

            if char == "\\":
                parts.append(self._read_escape())
            elif ord(char) < 0x20:
                raise LexError(
                    f"Unescaped control character U+{ord(char):04X} in string",
                    self.current_position(),
                    suggestions=["Control characters must be written as escapes"],
                )
            elif 0xD800 <= ord(char) <= 0xDFFF:
                raise LexError(
                    f"Lone surrogate U+{ord(char):04X} in string",
                    self.current_position(),
                )
            else:
                parts.append(self.advance())

    def _read_escape(self) -> str:
        """Read one escape sequence; the current character is the backslash."""
        escape_pos = self.current_position()
        self.advance()
        next_char = self.peek()

        if next_char == "":
            raise LexError("Incomplete escape sequence", escape_pos)

        if next_char == "u":
            self.advance()
            return self._read_unicode_escape(escape_pos)

        if next_char in JSON_ESCAPE_MAP:
            self.advance()
            return JSON_ESCAPE_MAP[next_char]

        raise LexError(f"Invalid escape sequence '\\{next_char}'", escape_pos)

    def _read_unicode_escape(self, escape_pos: Position) -> str:
        """Decode the hex digits of a \\u escape, combining surrogate pairs."""
        code_point = self._read_hex_digits(escape_pos)

        if 0xDC00 <= code_point <= 0xDFFF:
            raise LexError("Unpaired low surrogate in unicode escape", escape_pos)

        if 0xD800 <= code_point <= 0xDBFF:
            low = self._read_low_surrogate(escape_pos)
            high = code_point - 0xD800
            return chr(0x10000 + (high << 10) + (low - 0xDC00))

        return chr(code_point)

    def _read_hex_digits(self, escape_pos: Position) -> int:
        """Read exactly 4 hexadecimal digits."""
        hex_digits = ""
        for _ in range(4):
            char = self.peek()
            if char and char in HEX_DIGITS:
                hex_digits += self.advance()
            else:
                raise LexError(
                    "Incomplete unicode escape, expected 4 hex digits", escape_pos
                )
        return int(hex_digits, 16)

    def _read_low_surrogate(self, escape_pos: Position) -> int:
        """Read the \\uXXXX low surrogate that must follow a high surrogate."""
        if self.peek() != "\\" or self.peek(1) != "u":
            raise LexError("Unpaired high surrogate in unicode escape", escape_pos)

        low_pos = self.current_position()
        self.advance()
        self.advance()
        code_point = self._read_hex_digits(low_pos)
        if not 0xDC00 <= code_point <= 0xDFFF:
            raise LexError("Unpaired high surrogate in unicode escape", escape_pos)
        return code_point

    def read_number(self) -> str:
        """Read a raw numeric lexeme; grammar is checked by the parser."""
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in NUMBER_CHARS:
            self.advance()
        return self.text[start : self.pos]

    def read_word(self) -> str:
        """Read a run of letters (candidate keyword)."""
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos].isalpha():
            self.advance()
        return self.text[start : self.pos]

    def tokenize(self) -> Iterator[Token]:
        """Tokenize the input text into a sequence of tokens.

        Raises LexError at the first character that cannot start a token.
        """
        while True:
            self.skip_whitespace()

            if self.pos >= len(self.text):
                break

            char = self.peek()
            pos = self.current_position()

            # Try different token types in order
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

            token = self._try_keyword_token(char, pos)
            if token:
                yield token
                continue

            raise LexError(
                f"Unexpected character {char!r}",
                pos,
                suggestions=ErrorSuggestionEngine.suggest_for_unexpected_token(char),
            )

        yield Token(TokenType.EOF, "", self.current_position())

    def _try_structural_token(self, char: str, pos: Position) -> Optional[Token]:
        """Try to create structural tokens (braces, brackets, etc.)."""
        if char in self._structural:
            self.advance()
            return Token(self._structural[char], char, pos)
        return None

    def _try_string_token(self, char: str, pos: Position) -> Optional[Token]:
        """Try to create a string token."""
        if char == '"':
            return Token(TokenType.STRING, self.read_string(), pos)
        return None

    def _try_number_token(self, char: str, pos: Position) -> Optional[Token]:
        """Try to create a number token."""
        if char == "-" or char in "0123456789":
            return Token(TokenType.NUMBER, self.read_number(), pos)
        return None

    def _try_keyword_token(self, char: str, pos: Position) -> Optional[Token]:
        """Try to create a true/false/null token."""
        if not char.isalpha():
            return None

        word = self.read_word()
        if word not in KEYWORDS:
            raise LexError(
                f"Unrecognized literal '{word}'",
                pos,
                suggestions=ErrorSuggestionEngine.suggest_for_invalid_value(word),
            )
        if word == "null":
            return Token(TokenType.NULL, word, pos)
        return Token(TokenType.BOOLEAN, word, pos)

    def get_all_tokens(self) -> list[Token]:
        """Get all tokens as a list."""
        return list(self.tokenize())
