"""
Security limits and validation for jsonpinpoint.
This module provides the defensive bounds that stop pathological input from
exhausting the stack or memory.
"""

import logging
from typing import Optional

from ..core.position import Position
from ..utils.config import ParseLimits
from .exceptions import (
    DepthLimitExceeded,
    ErrorReporter,
    InputTooLarge,
    MemberLimitExceeded,
    SecurityError,
)

logger = logging.getLogger(__name__)


class LimitValidator:
    """Tracks nesting depth and validates the configured limits."""

    def __init__(
        self, limits: ParseLimits, error_reporter: Optional[ErrorReporter] = None
    ):
        self.limits = limits
        self.error_reporter = error_reporter
        self.nesting_depth = 0

    def validate_input_size(self, text: str) -> None:
        """Validate that string input length is within limits."""
        max_length = self.limits.max_input_length
        if max_length is not None and len(text) > max_length:
            logger.debug("Rejecting input of %d characters", len(text))
            raise InputTooLarge(
                f"Input length {len(text)} exceeds limit {max_length}"
            )

    def enter_structure(self, position: Optional[Position] = None) -> None:
        """Track entering a nested array or object and validate depth."""
        self.nesting_depth += 1
        if self.nesting_depth > self.limits.max_nesting_depth:
            logger.debug("Nesting depth limit hit at %s", position)
            raise self._located(
                DepthLimitExceeded,
                f"Nesting depth {self.nesting_depth} exceeds limit "
                f"{self.limits.max_nesting_depth}",
                position,
            )

    def exit_structure(self) -> None:
        """Track leaving a nested array or object."""
        if self.nesting_depth > 0:
            self.nesting_depth -= 1

    def validate_object_members(
        self, member_count: int, position: Optional[Position] = None
    ) -> None:
        """Validate that another member may be added to an object."""
        if member_count >= self.limits.max_object_members:
            logger.debug("Object member limit hit at %s", position)
            raise self._located(
                MemberLimitExceeded,
                f"Object member count exceeds limit {self.limits.max_object_members}",
                position,
            )

    def reset(self) -> None:
        """Reset validator state for reuse."""
        self.nesting_depth = 0

    def _located(
        self, error_type: type[SecurityError], message: str, position: Optional[Position]
    ) -> SecurityError:
        if position is None:
            return error_type(message)
        if self.error_reporter:
            return self.error_reporter.create_error(error_type, message, position)
        return error_type(message, position.line, position.column)
