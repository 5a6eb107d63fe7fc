"""
Source positions shared by the cursor, the value model and the error types.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Position in source text (0-based line and column)."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line + 1}, column {self.column + 1}"


BEFORE_START = Position(0, -1)
