"""
Configuration and limits for jsonpinpoint deserialization.

This module defines the defensive limits and error reporting options that are
passed explicitly to each deserializer instance.
"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_INPUT_LENGTH = 2097152
DEFAULT_MAX_NESTING_DEPTH = 100
DEFAULT_MAX_OBJECT_MEMBERS = 2**31 - 1


@dataclass
class ParseLimits:
    """Limits guarding the deserializer against pathological input."""

    max_input_length: Optional[int] = DEFAULT_MAX_INPUT_LENGTH
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    max_object_members: int = DEFAULT_MAX_OBJECT_MEMBERS

    def __post_init__(self) -> None:
        if self.max_input_length is not None and self.max_input_length <= 0:
            raise ValueError("max_input_length must be positive")
        if self.max_nesting_depth <= 0:
            raise ValueError("max_nesting_depth must be positive")
        if self.max_object_members <= 0:
            raise ValueError("max_object_members must be positive")

    @classmethod
    def unbounded_input(cls) -> "ParseLimits":
        """Limits without the string input length bound."""
        return cls(max_input_length=None)


@dataclass
class ErrorReporting:
    """Error reporting and context settings."""

    include_context: bool = True
    include_suggestions: bool = True
    max_error_context: int = 50


@dataclass
class ParseConfig:
    """Configuration options for jsonpinpoint deserialization."""

    limits: Optional[ParseLimits] = None
    error_reporting: Optional[ErrorReporting] = None

    def __post_init__(self) -> None:
        if self.limits is None:
            self.limits = ParseLimits()
        if self.error_reporting is None:
            self.error_reporting = ErrorReporting()

    @property
    def max_input_length(self) -> Optional[int]:
        """Maximum number of characters accepted from string input."""
        assert self.limits is not None
        return self.limits.max_input_length

    @property
    def max_nesting_depth(self) -> int:
        """Maximum array/object nesting depth."""
        assert self.limits is not None
        return self.limits.max_nesting_depth

    @property
    def max_object_members(self) -> int:
        """Maximum number of members a single object may hold."""
        assert self.limits is not None
        return self.limits.max_object_members

    @property
    def include_context(self) -> bool:
        """Whether errors carry a source line snippet."""
        assert self.error_reporting is not None
        return self.error_reporting.include_context

    @property
    def include_suggestions(self) -> bool:
        """Whether errors carry fix suggestions."""
        assert self.error_reporting is not None
        return self.error_reporting.include_suggestions

    @property
    def max_error_context(self) -> int:
        """Maximum characters of the source line kept in an error snippet."""
        assert self.error_reporting is not None
        return self.error_reporting.max_error_context
