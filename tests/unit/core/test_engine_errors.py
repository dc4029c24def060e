"""
Test cases for parse error reporting.

Tests focus on error messages, positions, expected/found descriptions,
context excerpts, suggestions and the wrapping of lexical errors.
"""

import unittest

from jsonshape import ParseConfig, ParseError, parse
from jsonshape.core.tokenizer import Position
from jsonshape.security.exceptions import LexError


class TestStructuralErrors(unittest.TestCase):
    """Messages for malformed structure."""

    def assert_parse_error(self, text, message):
        with self.assertRaises(ParseError) as cm:
            parse(text)
        self.assertEqual(cm.exception.message, message)
        return cm.exception

    def test_empty_input(self):
        error = self.assert_parse_error("", "Unexpected end of input")
        self.assertEqual(error.position, Position(1, 1, 0))
        self.assertEqual(error.expected, "a value")
        self.assertEqual(error.found, "end of input")

    def test_whitespace_only_input(self):
        self.assert_parse_error("  \n ", "Unexpected end of input")

    def test_unclosed_array(self):
        error = self.assert_parse_error(
            "[1, 2", "Unexpected end of input, expected ']' to close array"
        )
        self.assertIn("Add the missing ']' to close the array", error.suggestions)

    def test_unclosed_array_after_comma(self):
        self.assert_parse_error(
            "[1,", "Unexpected end of input, expected ']' to close array"
        )

    def test_unclosed_object(self):
        self.assert_parse_error(
            '{"a": 1', "Unexpected end of input, expected '}' to close object"
        )
        self.assert_parse_error(
            "{", "Unexpected end of input, expected '}' to close object"
        )

    def test_trailing_comma_in_array(self):
        error = self.assert_parse_error(
            "[1,]", "Unexpected token: expected a value, found ']'"
        )
        self.assertIn(
            "Remove the trailing comma before the closing bracket", error.suggestions
        )

    def test_trailing_comma_in_object(self):
        self.assert_parse_error('{"a": 1,}', "Expected object key, found '}'")

    def test_non_string_key(self):
        error = self.assert_parse_error("{1: 2}", "Expected object key, found number 1")
        self.assertEqual(error.suggestions, ["Object keys must be double-quoted strings"])

    def test_missing_colon(self):
        self.assert_parse_error(
            '{"a" 1}', "Expected ':' after object key, found number 1"
        )

    def test_missing_comma_in_array(self):
        self.assert_parse_error(
            "[1 2]", "Expected ',' or ']' after array element, found number 2"
        )

    def test_missing_comma_in_object(self):
        self.assert_parse_error(
            '{"a": 1 "b": 2}',
            "Expected ',' or '}' after object member, found string 'b'",
        )

    def test_missing_value(self):
        self.assert_parse_error(
            '{"a": }', "Unexpected token: expected a value, found '}'"
        )

    def test_trailing_data(self):
        error = self.assert_parse_error(
            "1 2",
            "Unexpected trailing data after the top-level value: "
            "expected end of input, found number 2",
        )
        self.assertEqual(error.position, Position(1, 3, 2))

    def test_trailing_structure(self):
        with self.assertRaises(ParseError):
            parse("[1]]")
        with self.assertRaises(ParseError):
            parse("{} {}")


class TestNumberErrors(unittest.TestCase):
    """Number lexemes outside the JSON grammar."""

    def test_invalid_numbers(self):
        for text in ["01", "-01", "1.", "-", "1e", "1e+", "--1", "1.2.3", "1-2", "2."]:
            with self.subTest(text=text):
                with self.assertRaises(ParseError) as cm:
                    parse(text)
                self.assertTrue(
                    cm.exception.message.startswith(f"Invalid number literal '{text}'")
                )

    def test_leading_zero_suggestion(self):
        with self.assertRaises(ParseError) as cm:
            parse("[01]")
        self.assertEqual(
            cm.exception.message,
            "Invalid number literal '01': expected a JSON number, found number 01",
        )
        self.assertEqual(
            cm.exception.suggestions, ["Leading zeros are not allowed in JSON numbers"]
        )
        self.assertEqual(cm.exception.position.column, 2)

    def test_trailing_dot_suggestion(self):
        with self.assertRaises(ParseError) as cm:
            parse("1.")
        self.assertEqual(
            cm.exception.suggestions,
            ["A decimal point must be followed by at least one digit"],
        )


class TestLexErrorWrapping(unittest.TestCase):
    """Lexical errors surface as ParseError with lex_error set."""

    def test_unterminated_string(self):
        with self.assertRaises(ParseError) as cm:
            parse('"abc')
        error = cm.exception
        self.assertIsInstance(error.lex_error, LexError)
        self.assertEqual(error.message, "Unterminated string")
        self.assertEqual(error.position, Position(1, 1, 0))

    def test_unexpected_character(self):
        with self.assertRaises(ParseError) as cm:
            parse("[1, @]")
        self.assertEqual(cm.exception.message, "Unexpected character '@'")
        self.assertEqual(cm.exception.position.column, 5)
        self.assertEqual(cm.exception.offset, 4)

    def test_first_error_in_reading_order_wins(self):
        """A structural error before a bad character is reported first."""
        with self.assertRaises(ParseError) as cm:
            parse("[1, 2 3, @]")
        self.assertIsNone(cm.exception.lex_error)
        self.assertEqual(
            cm.exception.message,
            "Expected ',' or ']' after array element, found number 3",
        )

    def test_unrecognized_literal_suggestions(self):
        test_cases = [
            ("[True]", ["Use lowercase 'true' for boolean values"]),
            ("[None]", ["Use 'null' instead of 'None'"]),
            ('{"a": hello}', ["Strings must be enclosed in double quotes"]),
        ]
        for text, suggestions in test_cases:
            with self.subTest(text=text):
                with self.assertRaises(ParseError) as cm:
                    parse(text)
                self.assertEqual(cm.exception.suggestions, suggestions)

    def test_invalid_utf8_bytes(self):
        with self.assertRaises(ParseError) as cm:
            parse(b"[1, \xff]")
        error = cm.exception
        self.assertEqual(error.message, "Invalid UTF-8 byte 0xFF")
        self.assertIsInstance(error.lex_error, LexError)
        self.assertEqual(error.lex_error.offset, 4)
        self.assertEqual(error.position, Position(1, 5, 4))

    def test_invalid_utf8_after_multibyte(self):
        with self.assertRaises(ParseError) as cm:
            parse(b'["\xc3\xa9", \xc3]')
        self.assertEqual(cm.exception.offset, 7)
        self.assertEqual(cm.exception.position.column, 7)


class TestErrorContext(unittest.TestCase):
    """Context excerpts attached to parse errors."""

    def test_context_included_by_default(self):
        with self.assertRaises(ParseError) as cm:
            parse('{"a": tru}')
        context = cm.exception.context
        self.assertIsNotNone(context)
        self.assertEqual(context.line_text, '{"a": tru}')
        self.assertEqual(context.column_indicator, "      ^")
        self.assertEqual(context.error_char, "t")

        rendered = str(cm.exception)
        self.assertIn("at line 1, column 7", rendered)
        self.assertIn('Context: {"a": tru}', rendered)
        self.assertIn("Suggestions:", rendered)

    def test_context_on_later_line(self):
        with self.assertRaises(ParseError) as cm:
            parse('{\n  "a": 1,\n  "b" 2\n}')
        error = cm.exception
        self.assertEqual(error.position.line, 3)
        self.assertEqual(error.position.column, 7)
        self.assertEqual(error.context.line_text, '  "b" 2')
        self.assertEqual(error.context.column_indicator, "      ^")

    def test_context_disabled(self):
        config = ParseConfig(include_context=False)
        with self.assertRaises(ParseError) as cm:
            parse("[1,]", config)
        self.assertIsNone(cm.exception.context)
        self.assertNotIn("Context:", str(cm.exception))

    def test_max_error_context(self):
        config = ParseConfig(max_error_context=4)
        with self.assertRaises(ParseError) as cm:
            parse("[1, 2, 3, 4 5]", config)
        context = cm.exception.context
        self.assertEqual(context.context_before, "4 ")
        self.assertEqual(context.context_after, "5]")


if __name__ == "__main__":
    unittest.main()
