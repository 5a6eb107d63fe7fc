"""
Exception types and error reporting for jsonpinpoint.

Every failure raised while deserializing is a ``FileFormatError`` carrying the
0-based line and column of the cursor at the moment the problem was detected.
The source path is never known to the deserializer; callers attach it
afterwards with ``with_path``.
"""

import copy
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, TypeVar

from ..core.position import Position

if TYPE_CHECKING:
    from ..core.content import JsonContent

E = TypeVar("E", bound="FileFormatError")


@dataclass(frozen=True)
class ErrorContext:
    """Snippet of the source line an error points at."""

    line_text: str
    error_char: Optional[str]
    column_indicator: str


class FileFormatError(Exception):
    """Base exception for all jsonpinpoint failures."""

    def __init__(
        self,
        message: str,
        line: int = 0,
        column: int = 0,
        path: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
    ):
        super().__init__(message)
        self._message = message
        self._line = line
        self._column = column
        self._path = path
        self._context = context
        self._suggestions = tuple(suggestions or ())

    @property
    def message(self) -> str:
        return self._message

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._column

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def context(self) -> Optional[ErrorContext]:
        return self._context

    @property
    def suggestions(self) -> list[str]:
        return list(self._suggestions)

    @property
    def position(self) -> Position:
        return Position(self._line, self._column)

    def with_path(self: E, path: str) -> E:
        """Return a copy of this error that names the file it came from."""
        if path is None:
            raise TypeError("path must not be None")
        enriched = copy.copy(self)
        enriched._path = path
        return enriched

    @classmethod
    def from_value(cls: type[E], message: str, value: Any, path: Optional[str] = None) -> E:
        """Create an error located at a parsed value (for downstream loaders)."""
        position = getattr(value, "position", None)
        if position is None:
            return cls(message, path=path)
        return cls(message, position.line, position.column, path=path)

    def __str__(self) -> str:
        result = f"{self._message} at line {self._line + 1}, column {self._column + 1}"
        if self._path:
            result += f" in {self._path}"

        if self._context:
            result += f"\n\nContext:\n  {self._context.line_text}"
            result += f"\n  {self._context.column_indicator}"

        if self._suggestions:
            result += "\n\nSuggestions:"
            for suggestion in self._suggestions:
                result += f"\n  - {suggestion}"

        return result

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._message!r}, line={self._line}, "
            f"column={self._column}, path={self._path!r})"
        )


class ParseError(FileFormatError):
    """Raised when the input violates the grammar."""


class SecurityError(FileFormatError):
    """Raised when a defensive limit is exceeded."""


class InputTooLarge(SecurityError):
    """String input is longer than the configured bound."""


class DepthLimitExceeded(SecurityError):
    """Arrays and objects are nested deeper than allowed."""


class MemberLimitExceeded(SecurityError):
    """An object holds more members than allowed."""


class TrailingContent(ParseError):
    """Non-whitespace text follows a complete root value."""


class MalformedArray(ParseError):
    """Missing ']' or a separator that is not ','."""


class TrailingComma(MalformedArray):
    """A ',' in an array is not followed by another element."""


class InvalidMemberName(ParseError):
    """An object member starts with ':' instead of a name."""


class MalformedObject(ParseError):
    """Missing '}', ':' or a separator that is not ','."""


class StringNotQuoted(ParseError):
    """A string literal does not start with a quote character."""


class UnterminatedString(ParseError):
    """Input ended before the closing quote of a string."""


class BadEscape(ParseError):
    """A backslash is followed by an unsupported character."""


class InvalidUnicodeSequence(ParseError):
    """A string contains an unpaired UTF-16 surrogate."""


class IllegalPrimitive(ParseError):
    """An unquoted token is neither a literal nor a number."""

    def __init__(self, message: str, *args: Any, token: str = "", **kwargs: Any):
        super().__init__(message, *args, **kwargs)
        self.token = token


class UnexpectedEndOfInput(ParseError):
    """Input ended before a structural element was completed."""


class NotAnObject(ParseError):
    """The root value is not an object where one was required."""


class ErrorSuggestionEngine:
    """Provides suggestions for fixing common JSON errors."""

    _LITERAL_HINTS = {
        "True": 'Use lowercase "true" for boolean values',
        "False": 'Use lowercase "false" for boolean values',
        "None": 'Use "null" instead of "None"',
        "NULL": 'Use lowercase "null"',
        "Null": 'Use lowercase "null"',
        "undefined": 'Use "null" instead of "undefined"',
    }

    @staticmethod
    def suggest_for_unclosed_structure(kind: str) -> list[str]:
        closing = "}" if kind == "object" else "]"
        return [
            f"Add a closing '{closing}' to finish the {kind}",
            "Separate elements with ','",
        ]

    @staticmethod
    def suggest_for_invalid_primitive(token: str) -> list[str]:
        hint = ErrorSuggestionEngine._LITERAL_HINTS.get(token)
        if hint:
            return [hint]
        if token and token[0].isalpha():
            return ["Wrap text values in double or single quotes"]
        return []

    @staticmethod
    def suggest_for_string() -> list[str]:
        return [
            "Close the string with the same quote character it was opened with",
            "Escape quote characters inside the string with a backslash",
        ]

    @staticmethod
    def suggest_for_escape() -> list[str]:
        return [
            "Supported escapes are \\\" \\' \\\\ \\/ \\b \\f \\n \\r \\t and \\uXXXX",
            "Write a literal backslash as \\\\",
        ]


class ErrorReporter:
    """Builds positioned errors with a snippet of the offending source line."""

    def __init__(
        self,
        content: "JsonContent",
        max_context: int = 50,
        include_context: bool = True,
        include_suggestions: bool = True,
    ):
        self.content = content
        self.max_context = max_context
        self.include_context = include_context
        self.include_suggestions = include_suggestions

    def build_context(self, position: Position) -> Optional[ErrorContext]:
        """Cut the source line around the error column."""
        if not 0 <= position.line < self.content.total_lines:
            return None

        line_text = self.content.line_text(position.line)
        column = max(position.column, 0)
        half = self.max_context // 2
        start = max(0, column - half)
        end = min(len(line_text), start + self.max_context)

        snippet = line_text[start:end]
        prefix = "..." if start > 0 else ""
        suffix = "..." if end < len(line_text) else ""
        indicator = " " * (len(prefix) + column - start) + "^"
        error_char = line_text[column] if column < len(line_text) else None

        return ErrorContext(
            line_text=f"{prefix}{snippet}{suffix}",
            error_char=error_char,
            column_indicator=indicator,
        )

    def create_error(
        self,
        error_type: type[E],
        message: str,
        position: Position,
        suggestions: Optional[list[str]] = None,
        **kwargs: Any,
    ) -> E:
        """Create an error of ``error_type`` located at ``position``."""
        context = self.build_context(position) if self.include_context else None
        return error_type(
            message,
            position.line,
            position.column,
            context=context,
            suggestions=suggestions if self.include_suggestions else None,
            **kwargs,
        )
