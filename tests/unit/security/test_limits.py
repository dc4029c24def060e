"""
Test cases for parse limit validation.
"""

import unittest

from jsonshape.core.tokenizer import Position
from jsonshape.security.exceptions import SecurityError
from jsonshape.security.limits import LimitValidator
from jsonshape.utils.config import ParseLimits


class TestLimitValidator(unittest.TestCase):
    """Test LimitValidator checks against ParseLimits."""

    def setUp(self):
        self.limits = ParseLimits(
            max_input_size=100,
            max_string_length=50,
            max_number_length=10,
            max_nesting_depth=3,
            max_object_keys=5,
            max_array_items=8,
        )
        self.validator = LimitValidator(self.limits)

    def test_input_size(self):
        self.validator.validate_input_size("x" * 100)
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_input_size("x" * 101)
        self.assertEqual(cm.exception.message, "Input size 101 exceeds limit 100")

    def test_string_length(self):
        self.validator.validate_string_length("a" * 50)
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_string_length("a" * 51, Position(5, 2, 40))
        self.assertEqual(cm.exception.message, "String length 51 exceeds limit 50")
        self.assertEqual(cm.exception.position, Position(5, 2, 40))
        self.assertEqual(
            str(cm.exception), "String length 51 exceeds limit 50 at line 5, column 2"
        )

    def test_string_length_without_position(self):
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_string_length("a" * 51)
        self.assertEqual(cm.exception.message, "String length 51 exceeds limit 50")
        self.assertIsNone(cm.exception.position)

    def test_number_length(self):
        self.validator.validate_number_length("1234567890")
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_number_length("12345678901", Position(1, 1, 0))
        self.assertEqual(cm.exception.message, "Number length 11 exceeds limit 10")
        self.assertEqual(cm.exception.offset, 0)

    def test_nesting_depth(self):
        for _ in range(3):
            self.validator.enter_structure()
        self.assertEqual(self.validator.nesting_depth, 3)

        with self.assertRaises(SecurityError) as cm:
            self.validator.enter_structure(Position(1, 4, 3))
        self.assertEqual(cm.exception.message, "Nesting depth 4 exceeds limit 3")
        self.assertEqual(cm.exception.position.column, 4)

    def test_exit_structure(self):
        self.validator.enter_structure()
        self.validator.exit_structure()
        self.validator.exit_structure()
        self.assertEqual(self.validator.nesting_depth, 0)

    def test_depth_reached(self):
        self.validator.enter_structure()
        self.validator.enter_structure()
        self.validator.exit_structure()
        self.validator.enter_structure()
        self.assertEqual(self.validator.nesting_depth, 2)
        self.assertEqual(self.validator.depth_reached, 2)

    def test_object_keys(self):
        self.validator.validate_object_keys(5)
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_object_keys(6)
        self.assertEqual(cm.exception.message, "Object key count 6 exceeds limit 5")

    def test_array_items(self):
        self.validator.validate_array_items(8)
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_array_items(9)
        self.assertEqual(cm.exception.message, "Array item count 9 exceeds limit 8")

    def test_default_limits(self):
        validator = LimitValidator(ParseLimits())
        validator.validate_input_size("x" * 1024)
        validator.validate_string_length("x" * 1024)
        for _ in range(100):
            validator.enter_structure()
        with self.assertRaises(SecurityError):
            validator.enter_structure()


if __name__ == "__main__":
    unittest.main()
