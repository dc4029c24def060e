"""
Parser for jsonshape - converts tokens into a Value tree.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Any, NoReturn, Optional, TextIO, Union

from ..security.exceptions import (
    ErrorReporter,
    ErrorSuggestionEngine,
    LexError,
    ParseError,
    SecurityError,
)
from ..security.limits import LimitValidator
from ..utils.config import ParseConfig
from .parser_base import BaseParserMixin
from .tokenizer import Lexer, Position, Token, TokenType
from .value import Array, Object, String, Value

logger = logging.getLogger(__name__)


class Parser(BaseParserMixin):
    """Recursive-descent parser producing a Value tree.

    Tokens are pulled lazily from ``tokens`` (normally ``Lexer.tokenize()``),
    so the error reported is always the first one in reading order.
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        config: Optional[ParseConfig] = None,
        error_reporter: Optional[ErrorReporter] = None,
    ):
        self.config = config or ParseConfig()
        self.validator = (
            LimitValidator(self.config.limits) if self.config.limits else None
        )
        self.error_reporter = error_reporter
        self._tokens: Iterator[Token] = iter(tokens)
        self._current: Optional[Token] = None

    def current_token(self) -> Token:
        """Get the current token, pulling it from the stream if needed."""
        if self._current is None:
            self._current = next(
                self._tokens, Token(TokenType.EOF, "", Position(1, 1, 0))
            )
        return self._current

    def advance(self) -> Token:
        """Move to the next token and return the current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self._current = None
        return token

    def parse(self) -> Value:
        """Parse the token stream into exactly one JSON value."""
        try:
            value = self.parse_value()
            token = self.current_token()
            if token.type != TokenType.EOF:
                self._raise_parse_error(
                    "Unexpected trailing data after the top-level value",
                    token,
                    ["Only one top-level value is allowed per document"],
                    expected="end of input",
                )
        except LexError as e:
            raise self._wrap_lex_error(e) from e
        except SecurityError as e:
            if self.error_reporter is None or e.position is None:
                raise
            raise self.error_reporter.create_security_error(
                e.message, e.position
            ) from e
        if self.validator:
            logger.debug(
                "Maximum nesting depth reached: %d", self.validator.depth_reached
            )
        return value

    def parse_value(self) -> Value:
        """Parse a JSON value (string, number, boolean, null, object, or array)."""
        token = self.current_token()

        if token.type == TokenType.LBRACE:
            return self.parse_object()

        if token.type == TokenType.LBRACKET:
            return self.parse_array()

        if token.type == TokenType.STRING:
            if self.validator:
                self.validator.validate_string_length(token.value, token.position)
            self.advance()
            return String(token.value)

        if token.type == TokenType.NUMBER:
            return self.parse_number()

        if token.type == TokenType.BOOLEAN:
            self.advance()
            return self.parse_boolean_token(token)

        if token.type == TokenType.NULL:
            self.advance()
            return self.parse_null_token(token)

        if token.type == TokenType.EOF:
            self._raise_parse_error(
                "Unexpected end of input", token, expected="a value"
            )

        self._raise_parse_error(
            "Unexpected token",
            token,
            ErrorSuggestionEngine.suggest_for_unexpected_token(token.value),
            expected="a value",
        )

    def parse_number(self) -> Value:
        """Parse a number token after checking it against the JSON grammar."""
        token = self.current_token()
        if self.validator:
            self.validator.validate_number_length(token.value, token.position)

        if not self.is_valid_number(token.value):
            self._raise_parse_error(
                f"Invalid number literal '{token.value}'",
                token,
                ErrorSuggestionEngine.suggest_for_invalid_number(token.value),
                expected="a JSON number",
            )

        self.advance()
        return self.parse_number_token(token)

    def _parse_object_key(self) -> str:
        """Parse an object key and return it."""
        key_token = self.current_token()
        if key_token.type == TokenType.STRING:
            if self.validator:
                self.validator.validate_string_length(
                    key_token.value, key_token.position
                )
            self.advance()
            return key_token.value

        if key_token.type == TokenType.EOF:
            self._raise_unclosed("object", key_token)

        suggestions = ["Object keys must be double-quoted strings"]
        if key_token.type == TokenType.RBRACE:
            suggestions = ErrorSuggestionEngine.suggest_for_unexpected_token("}")
        self._raise_parse_error(
            "Expected object key", key_token, suggestions, expected="a string key"
        )

    def _expect_colon(self) -> None:
        """Expect and consume a colon token."""
        token = self.current_token()
        if token.type != TokenType.COLON:
            self._raise_parse_error(
                "Expected ':' after object key",
                token,
                ["Object keys must be followed by a colon"],
                expected="':'",
            )
        self.advance()

    def parse_object(self) -> Object:
        """Parse a JSON object; a repeated key keeps its last value."""
        if self.current_token().type != TokenType.LBRACE:
            self._raise_parse_error(
                "Expected '{'", self.current_token(), expected="'{'"
            )

        self.validate_and_enter_structure(
            self.validator, self.current_token().position
        )
        self.advance()

        members: dict[str, Value] = {}

        if self.current_token().type == TokenType.RBRACE:
            self.advance()
            self.validate_and_exit_structure(self.validator)
            return Object(members)

        while True:
            member_position = self.current_token().position
            key = self._parse_object_key()
            self._expect_colon()
            value = self.parse_value()
            self.insert_member(members, key, value)

            if self.validator:
                self.validator.validate_object_keys(len(members), member_position)

            token = self.current_token()
            if token.type == TokenType.COMMA:
                self.advance()
                continue
            if token.type == TokenType.RBRACE:
                self.advance()
                break
            if token.type == TokenType.EOF:
                self._raise_unclosed("object", token)
            self._raise_parse_error(
                "Expected ',' or '}' after object member",
                token,
                ["Separate object members with commas"],
                expected="',' or '}'",
            )

        self.validate_and_exit_structure(self.validator)
        return Object(members)

    def parse_array(self) -> Array:
        """Parse a JSON array."""
        if self.current_token().type != TokenType.LBRACKET:
            self._raise_parse_error(
                "Expected '['", self.current_token(), expected="'['"
            )

        self.validate_and_enter_structure(
            self.validator, self.current_token().position
        )
        self.advance()

        items: list[Value] = []

        if self.current_token().type == TokenType.RBRACKET:
            self.advance()
            self.validate_and_exit_structure(self.validator)
            return Array(())

        while True:
            if self.current_token().type == TokenType.EOF:
                self._raise_unclosed("array", self.current_token())

            item_position = self.current_token().position
            items.append(self.parse_value())

            if self.validator:
                self.validator.validate_array_items(len(items), item_position)

            token = self.current_token()
            if token.type == TokenType.COMMA:
                self.advance()
                continue
            if token.type == TokenType.RBRACKET:
                self.advance()
                break
            if token.type == TokenType.EOF:
                self._raise_unclosed("array", token)
            self._raise_parse_error(
                "Expected ',' or ']' after array element",
                token,
                ["Separate array elements with commas"],
                expected="',' or ']'",
            )

        self.validate_and_exit_structure(self.validator)
        return Array(tuple(items))

    def _raise_unclosed(self, structure_type: str, token: Token) -> NoReturn:
        closer = "'}'" if structure_type == "object" else "']'"
        self._raise_parse_error(
            f"Unexpected end of input, expected {closer} to close {structure_type}",
            token,
            ErrorSuggestionEngine.suggest_for_unclosed_structure(structure_type),
            expected=closer,
        )

    def _raise_parse_error(
        self,
        message: str,
        token: Token,
        suggestions: Optional[list[str]] = None,
        *,
        expected: Optional[str] = None,
    ) -> NoReturn:
        found = token.describe()
        if message.startswith("Expected"):
            message = f"{message}, found {found}"
        elif expected and not message.startswith("Unexpected end of input"):
            message = f"{message}: expected {expected}, found {found}"
        if self.error_reporter:
            raise self.error_reporter.create_parse_error(
                message, token.position, suggestions, expected=expected, found=found
            )
        raise ParseError(
            message,
            token.position,
            suggestions=suggestions,
            expected=expected,
            found=found,
        )

    def _wrap_lex_error(self, error: LexError) -> ParseError:
        if self.error_reporter:
            return self.error_reporter.wrap_lex_error(error)
        return ParseError(
            error.message,
            error.position,
            suggestions=error.suggestions,
            lex_error=error,
        )


def _decode_bytes(data: Union[bytes, bytearray]) -> str:
    """Decode UTF-8 input, reporting the offset of the first invalid byte."""
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        prefix = bytes(data[: e.start]).decode("utf-8")
        line = prefix.count("\n") + 1
        column = len(prefix) - (prefix.rfind("\n") + 1) + 1
        lex_error = LexError(
            f"Invalid UTF-8 byte 0x{data[e.start]:02X}",
            Position(line, column, e.start),
        )
        raise ParseError(
            lex_error.message, lex_error.position, lex_error=lex_error
        ) from e


def parse(
    text: Union[str, bytes, bytearray], config: Optional[ParseConfig] = None
) -> Value:
    """
    Parse JSON text into an immutable Value tree.

    Args:
        text: JSON text; bytes are decoded as UTF-8
        config: Optional ParseConfig for limits and error reporting

    Returns:
        The root Value of the document

    Raises:
        ParseError: On the first lexical or structural error (a LexError is
            available as ``lex_error``)
        SecurityError: If a configured limit is exceeded
    """
    config = config or ParseConfig()

    if isinstance(text, (bytes, bytearray)):
        text = _decode_bytes(text)
    if not isinstance(text, str):
        raise TypeError(f"Input must be str or bytes, not {type(text).__name__}")

    if config.limits:
        LimitValidator(config.limits).validate_input_size(text)

    error_reporter = (
        ErrorReporter(text, config.max_error_context)
        if config.include_context
        else None
    )

    logger.debug("Parsing %d characters", len(text))
    parser = Parser(Lexer(text).tokenize(), config, error_reporter)
    value = parser.parse()
    logger.debug("Parsed top-level %s", value.kind.value)
    return value


def loads(
    s: Union[str, bytes, bytearray], *, config: Optional[ParseConfig] = None
) -> Any:
    """Parse JSON text into plain Python data (numbers come back as float)."""
    return parse(s, config).to_python()


def load(fp: TextIO, *, config: Optional[ParseConfig] = None) -> Any:
    """Same as loads() but reads from a file-like object."""
    return loads(fp.read(), config=config)


def dumps(obj: Any) -> str:
    """Serialize plain Python data (or a Value) to canonical JSON text."""
    return Value.from_python(obj).serialize()


def dump(obj: Any, fp: TextIO) -> None:
    """Serialize obj as canonical JSON text to a file-like object."""
    fp.write(dumps(obj))
