"""
Test cases for exceptions and error reporting.

Tests focus on error context creation, message formatting, and error reporting accuracy.
"""

import unittest

from jsonshape.core.tokenizer import Position
from jsonshape.security.exceptions import (
    ErrorContext,
    ErrorReporter,
    ErrorSuggestionEngine,
    JsonShapeError,
    LexError,
    ParseError,
    SecurityError,
)


class TestErrorContext(unittest.TestCase):
    """Test ErrorContext dataclass functionality."""

    def test_error_context_creation(self):
        """Test ErrorContext creation with all fields."""
        position = Position(line=5, column=10)
        context = ErrorContext(
            text="test json content",
            position=position,
            context_before="test ",
            context_after=" content",
            error_char="j",
            line_text="test json content",
            column_indicator="     ^",
        )

        self.assertEqual(context.text, "test json content")
        self.assertEqual(context.position, position)
        self.assertEqual(context.context_before, "test ")
        self.assertEqual(context.context_after, " content")
        self.assertEqual(context.error_char, "j")
        self.assertEqual(context.column_indicator, "     ^")


class TestJsonShapeError(unittest.TestCase):
    """Test base JsonShapeError exception class."""

    def test_basic_error_creation(self):
        """Test basic error creation with message only."""
        error = JsonShapeError("Test error message")

        self.assertEqual(error.message, "Test error message")
        self.assertIsNone(error.position)
        self.assertIsNone(error.context)
        self.assertEqual(error.suggestions, [])
        self.assertEqual(str(error), "Test error message")

    def test_error_with_position(self):
        """Test error creation with position information."""
        position = Position(line=3, column=15)
        error = JsonShapeError("Parse error", position=position)

        self.assertEqual(error.position, position)
        self.assertEqual(str(error), "Parse error at line 3, column 15")

    def test_error_with_suggestions(self):
        """Test error creation with suggestions."""
        suggestions = ["Check for missing quotes", "Verify JSON syntax"]
        error = JsonShapeError("Syntax error", suggestions=suggestions)

        self.assertEqual(error.suggestions, suggestions)
        self.assertEqual(
            str(error),
            "Syntax error\nSuggestions:\n  - Check for missing quotes\n"
            "  - Verify JSON syntax",
        )

    def test_error_with_context(self):
        """Test that the context line and caret are rendered."""
        reporter = ErrorReporter("[1, 2 3]")
        error = reporter.create_parse_error("Boom", Position(1, 7, 6))

        lines = str(error).split("\n")
        self.assertEqual(lines[0], "Boom at line 1, column 7")
        self.assertEqual(lines[1], "Context: [1, 2 3]")
        self.assertEqual(lines[2], "               ^")


class TestErrorHierarchy(unittest.TestCase):
    """Test exception subclasses and their extra attributes."""

    def test_hierarchy(self):
        self.assertTrue(issubclass(LexError, JsonShapeError))
        self.assertTrue(issubclass(ParseError, JsonShapeError))
        self.assertTrue(issubclass(SecurityError, ParseError))
        self.assertFalse(issubclass(LexError, ParseError))

    def test_lex_error_offset(self):
        error = LexError("Bad", Position(2, 3, 9))
        self.assertEqual(error.offset, 9)

    def test_parse_error_fields(self):
        lex_error = LexError("Bad", Position(1, 1, 0))
        error = ParseError(
            "Wrapped", Position(1, 1, 0), expected="a value", found="'x'",
            lex_error=lex_error,
        )
        self.assertEqual(error.expected, "a value")
        self.assertEqual(error.found, "'x'")
        self.assertIs(error.lex_error, lex_error)
        self.assertEqual(error.offset, 0)

    def test_parse_error_without_position(self):
        error = ParseError("No position")
        self.assertIsNone(error.offset)
        self.assertIsNone(error.expected)
        self.assertIsNone(error.lex_error)


class TestErrorReporter(unittest.TestCase):
    """Test ErrorReporter context building."""

    def setUp(self):
        self.text = 'line one\n{"a": x}'
        self.reporter = ErrorReporter(self.text)

    def test_lines_split(self):
        self.assertEqual(self.reporter.lines, ["line one", '{"a": x}'])

    def test_create_parse_error(self):
        error = self.reporter.create_parse_error(
            "Unexpected token",
            Position(2, 7, 15),
            ["hint"],
            expected="a value",
            found="'x'",
        )
        self.assertIsInstance(error, ParseError)
        self.assertEqual(error.suggestions, ["hint"])
        self.assertEqual(error.expected, "a value")
        self.assertEqual(error.found, "'x'")

        context = error.context
        self.assertEqual(context.text, self.text)
        self.assertEqual(context.line_text, '{"a": x}')
        self.assertEqual(context.error_char, "x")
        self.assertEqual(context.context_before, '{"a": ')
        self.assertEqual(context.context_after, "x}")
        self.assertEqual(context.column_indicator, "      ^")

    def test_context_is_bounded(self):
        reporter = ErrorReporter(self.text, max_context=4)
        context = reporter.create_parse_error("x", Position(2, 7, 15)).context
        self.assertEqual(context.context_before, ": ")
        self.assertEqual(context.context_after, "x}")

    def test_position_past_end(self):
        context = self.reporter.create_parse_error("x", Position(5, 1)).context
        self.assertEqual(context.line_text, "")
        self.assertEqual(context.error_char, "")
        self.assertEqual(context.column_indicator, "^")

    def test_position_at_end_of_line(self):
        context = self.reporter.create_parse_error("x", Position(1, 9, 8)).context
        self.assertEqual(context.error_char, "")
        self.assertEqual(context.column_indicator, " " * 8 + "^")

    def test_wrap_lex_error(self):
        lex_error = LexError("Bad char", Position(2, 7, 15), suggestions=["fix it"])
        error = self.reporter.wrap_lex_error(lex_error)
        self.assertIsInstance(error, ParseError)
        self.assertIs(error.lex_error, lex_error)
        self.assertEqual(error.message, "Bad char")
        self.assertEqual(error.position, lex_error.position)
        self.assertEqual(error.suggestions, ["fix it"])
        self.assertEqual(error.context.error_char, "x")

    def test_create_security_error(self):
        error = self.reporter.create_security_error("Too deep")
        self.assertIsInstance(error, SecurityError)
        self.assertIsNone(error.context)

        positioned = self.reporter.create_security_error("Too deep", Position(1, 1))
        self.assertEqual(positioned.context.error_char, "l")


class TestErrorSuggestionEngine(unittest.TestCase):
    """Test suggestion generation."""

    def test_unexpected_closing_bracket(self):
        for token in ("}", "]"):
            with self.subTest(token=token):
                suggestions = ErrorSuggestionEngine.suggest_for_unexpected_token(token)
                self.assertIn(
                    "Remove the trailing comma before the closing bracket", suggestions
                )

    def test_unexpected_other_tokens(self):
        self.assertEqual(
            ErrorSuggestionEngine.suggest_for_unexpected_token(","),
            ["Check for a missing value or a doubled comma"],
        )
        self.assertEqual(
            ErrorSuggestionEngine.suggest_for_unexpected_token("@"),
            ["Check the JSON syntax near this position"],
        )

    def test_unclosed_structure(self):
        object_hints = ErrorSuggestionEngine.suggest_for_unclosed_structure("object")
        array_hints = ErrorSuggestionEngine.suggest_for_unclosed_structure("array")
        self.assertTrue(any("'}'" in hint for hint in object_hints))
        self.assertTrue(any("']'" in hint for hint in array_hints))

    def test_invalid_value(self):
        test_cases = [
            ("True", ["Use lowercase 'true' for boolean values"]),
            ("None", ["Use 'null' instead of 'None'"]),
            ("undefined", ["Use 'null' instead of 'undefined'"]),
            ("hello", ["Strings must be enclosed in double quotes"]),
            ("@", []),
        ]
        for value, expected in test_cases:
            with self.subTest(value=value):
                self.assertEqual(
                    ErrorSuggestionEngine.suggest_for_invalid_value(value), expected
                )

    def test_invalid_number(self):
        test_cases = [
            ("01", "Leading zeros are not allowed in JSON numbers"),
            ("-007", "Leading zeros are not allowed in JSON numbers"),
            ("1.", "A decimal point must be followed by at least one digit"),
        ]
        for lexeme, expected in test_cases:
            with self.subTest(lexeme=lexeme):
                self.assertEqual(
                    ErrorSuggestionEngine.suggest_for_invalid_number(lexeme), [expected]
                )

    def test_invalid_number_generic(self):
        suggestions = ErrorSuggestionEngine.suggest_for_invalid_number("1e")
        self.assertEqual(len(suggestions), 1)
        self.assertTrue(suggestions[0].startswith("Numbers must match"))


if __name__ == "__main__":
    unittest.main()
