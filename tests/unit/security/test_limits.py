"""
Test cases for security limits and validation.

Tests focus on the bounds that stop pathological input from exhausting the
stack or memory.
"""

import unittest

from jsonpinpoint.core.content import JsonContent
from jsonpinpoint.core.position import Position
from jsonpinpoint.security.exceptions import (
    DepthLimitExceeded,
    ErrorReporter,
    InputTooLarge,
    MemberLimitExceeded,
    SecurityError,
)
from jsonpinpoint.security.limits import LimitValidator
from jsonpinpoint.utils.config import ParseLimits


class TestLimitValidator(unittest.TestCase):
    """Test LimitValidator functionality for security constraints."""

    def setUp(self):
        """Set up test validator with custom limits."""
        self.limits = ParseLimits(
            max_input_length=1000,
            max_nesting_depth=5,
            max_object_members=10,
        )
        self.validator = LimitValidator(self.limits)

    def test_input_size_validation_pass(self):
        self.validator.validate_input_size("x" * 1000)

    def test_input_size_validation_fail(self):
        with self.assertRaises(InputTooLarge) as cm:
            self.validator.validate_input_size("x" * 1001)

        error = cm.exception
        self.assertIsInstance(error, SecurityError)
        self.assertIn("Input length 1001 exceeds limit 1000", str(error))

    def test_unbounded_input(self):
        validator = LimitValidator(ParseLimits.unbounded_input())
        validator.validate_input_size("x" * 3_000_000)

    def test_nesting_depth_validation(self):
        for _ in range(5):
            self.validator.enter_structure()
        self.assertEqual(self.validator.nesting_depth, 5)

        with self.assertRaises(DepthLimitExceeded) as cm:
            self.validator.enter_structure()
        self.assertIn("Nesting depth 6 exceeds limit 5", str(cm.exception))

    def test_exit_structure(self):
        self.validator.enter_structure()
        self.validator.enter_structure()
        self.validator.exit_structure()
        self.assertEqual(self.validator.nesting_depth, 1)

    def test_exit_structure_never_goes_negative(self):
        self.validator.exit_structure()
        self.assertEqual(self.validator.nesting_depth, 0)

    def test_reset(self):
        self.validator.enter_structure()
        self.validator.enter_structure()
        self.validator.reset()
        self.assertEqual(self.validator.nesting_depth, 0)

    def test_object_member_validation(self):
        self.validator.validate_object_members(9)

        with self.assertRaises(MemberLimitExceeded) as cm:
            self.validator.validate_object_members(10)
        self.assertIn("Object member count exceeds limit 10", str(cm.exception))

    def test_error_carries_position(self):
        with self.assertRaises(MemberLimitExceeded) as cm:
            self.validator.validate_object_members(10, Position(2, 7))
        self.assertEqual((cm.exception.line, cm.exception.column), (2, 7))
        self.assertIsNone(cm.exception.context)

    def test_error_with_reporter_has_context(self):
        content = JsonContent('[[["deep"]]]')
        validator = LimitValidator(ParseLimits(max_nesting_depth=2), ErrorReporter(content))
        validator.enter_structure(Position(0, 0))
        validator.enter_structure(Position(0, 1))

        with self.assertRaises(DepthLimitExceeded) as cm:
            validator.enter_structure(Position(0, 2))

        error = cm.exception
        self.assertEqual(error.position, Position(0, 2))
        self.assertEqual(error.context.error_char, "[")
        self.assertEqual(error.context.column_indicator, "  ^")


class TestDefaultLimits(unittest.TestCase):
    """Test the default bounds."""

    def test_defaults(self):
        validator = LimitValidator(ParseLimits())
        validator.validate_input_size("x" * 2097152)
        with self.assertRaises(InputTooLarge):
            validator.validate_input_size("x" * 2097153)

        for _ in range(100):
            validator.enter_structure()
        with self.assertRaises(DepthLimitExceeded):
            validator.enter_structure()

        validator.validate_object_members(2**31 - 2)
        with self.assertRaises(MemberLimitExceeded):
            validator.validate_object_members(2**31 - 1)


if __name__ == '__main__':
    unittest.main()
