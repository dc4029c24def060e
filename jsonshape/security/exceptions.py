"""
Exception types and error reporting for jsonshape.

Every failure raised by the lexer and parser derives from JsonShapeError and
carries an optional source position, a rendered context excerpt and a list of
human-readable suggestions.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..core.tokenizer import Position


@dataclass
class ErrorContext:
    """Source excerpt surrounding an error position."""

    text: str
    position: "Position"
    context_before: str
    context_after: str
    error_char: str
    line_text: str
    column_indicator: str


class JsonShapeError(Exception):
    """Base class for all jsonshape errors."""

    def __init__(
        self,
        message: str,
        position: Optional["Position"] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
    ) -> None:
        self.message = message
        self.position = position
        self.context = context
        self.suggestions = list(suggestions) if suggestions else []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]

        if self.position is not None:
            parts[0] += f" at line {self.position.line}, column {self.position.column}"

        if self.context is not None:
            parts.append(f"Context: {self.context.line_text}")
            parts.append(f"         {self.context.column_indicator}")

        if self.suggestions:
            parts.append("Suggestions:")
            parts.extend(f"  - {suggestion}" for suggestion in self.suggestions)

        return "\n".join(parts)


class LexError(JsonShapeError):
    """Raised when the input cannot be split into JSON tokens."""

    def __init__(
        self,
        message: str,
        position: "Position",
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
    ) -> None:
        super().__init__(message, position, context, suggestions)

    @property
    def offset(self) -> int:
        """Byte offset of the error in the UTF-8 encoded input."""
        return self.position.offset


class ParseError(JsonShapeError):
    """Raised when the token stream does not form a single JSON value."""

    def __init__(
        self,
        message: str,
        position: Optional["Position"] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
        *,
        expected: Optional[str] = None,
        found: Optional[str] = None,
        lex_error: Optional[LexError] = None,
    ) -> None:
        self.expected = expected
        self.found = found
        self.lex_error = lex_error
        super().__init__(message, position, context, suggestions)

    @property
    def offset(self) -> Optional[int]:
        """Byte offset of the error, if known."""
        if self.position is None:
            return None
        return self.position.offset


class SecurityError(ParseError):
    """Raised when a configured parse limit is exceeded."""


class ErrorReporter:
    """Builds positioned, context-rich errors for one input text."""

    def __init__(self, text: str, max_context: int = 50) -> None:
        self.text = text
        self.lines = text.split("\n")
        self.max_context = max_context

    def _build_context(self, position: "Position") -> ErrorContext:
        if 1 <= position.line <= len(self.lines):
            line_text = self.lines[position.line - 1]
        else:
            line_text = ""

        column_index = max(0, min(position.column - 1, len(line_text)))
        half = self.max_context // 2
        error_char = line_text[column_index] if column_index < len(line_text) else ""

        return ErrorContext(
            text=self.text,
            position=position,
            context_before=line_text[max(0, column_index - half) : column_index],
            context_after=line_text[column_index : column_index + half],
            error_char=error_char,
            line_text=line_text,
            column_indicator=" " * column_index + "^",
        )

    def create_parse_error(
        self,
        message: str,
        position: "Position",
        suggestions: Optional[list[str]] = None,
        *,
        expected: Optional[str] = None,
        found: Optional[str] = None,
    ) -> ParseError:
        """Create a ParseError with source context attached."""
        return ParseError(
            message,
            position,
            self._build_context(position),
            suggestions,
            expected=expected,
            found=found,
        )

    def wrap_lex_error(self, error: LexError) -> ParseError:
        """Wrap a LexError into a ParseError carrying the same position."""
        return ParseError(
            error.message,
            error.position,
            self._build_context(error.position),
            error.suggestions,
            lex_error=error,
        )

    def create_security_error(
        self, message: str, position: Optional["Position"] = None
    ) -> SecurityError:
        """Create a SecurityError, with context when a position is known."""
        context = self._build_context(position) if position is not None else None
        return SecurityError(message, position, context)


class ErrorSuggestionEngine:
    """Static hints attached to common parse failures."""

    _LITERAL_HINTS = {
        "True": "Use lowercase 'true' for boolean values",
        "False": "Use lowercase 'false' for boolean values",
        "None": "Use 'null' instead of 'None'",
        "NULL": "Use lowercase 'null'",
        "undefined": "Use 'null' instead of 'undefined'",
        "NaN": "NaN is not valid JSON; use null or a string",
        "Infinity": "Infinity is not valid JSON; use a string or a large number",
    }

    @staticmethod
    def suggest_for_unexpected_token(token: str) -> list[str]:
        """Suggestions for a token that cannot start or continue a value."""
        if token in ("}", "]"):
            return [
                "Remove the trailing comma before the closing bracket",
                "Check that a value follows every ',' and ':'",
            ]
        if token == ",":
            return ["Check for a missing value or a doubled comma"]
        if token == ":":
            return ["Colons are only allowed between an object key and its value"]
        if token == '"':
            return ["Check for an unmatched double quote"]
        return ["Check the JSON syntax near this position"]

    @staticmethod
    def suggest_for_unclosed_structure(structure_type: str) -> list[str]:
        """Suggestions for an object or array that never closes."""
        closer = "}" if structure_type == "object" else "]"
        return [
            f"Add the missing '{closer}' to close the {structure_type}",
            "Check that every nested structure is closed",
        ]

    @classmethod
    def suggest_for_invalid_value(cls, value: str) -> list[str]:
        """Suggestions for an unrecognized bare word."""
        hint = cls._LITERAL_HINTS.get(value)
        if hint:
            return [hint]
        if value.isidentifier():
            return ["Strings must be enclosed in double quotes"]
        return []

    @staticmethod
    def suggest_for_invalid_number(lexeme: str) -> list[str]:
        """Suggestions for a number lexeme outside the JSON number grammar."""
        digits = lexeme.lstrip("-")
        if len(digits) > 1 and digits[0] == "0" and digits[1].isdigit():
            return ["Leading zeros are not allowed in JSON numbers"]
        if lexeme.endswith("."):
            return ["A decimal point must be followed by at least one digit"]
        return ["Numbers must match -?(0|[1-9][0-9]*)(.[0-9]+)?([eE][+-]?[0-9]+)?"]
