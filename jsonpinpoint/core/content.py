"""
Content cursor for jsonpinpoint - a navigable view over line-split input.

The cursor is an explicit (line, column) index into a list of lines, so the
deserializer can peek at the next meaningful character and step back again
with plain index arithmetic.
"""

from typing import BinaryIO, Optional, TextIO, Union

from ..security.limits import LimitValidator
from ..utils.config import ParseLimits
from .position import BEFORE_START, Position


def split_lines(text: str) -> list[str]:
    """Split text the way a text reader does, dropping line terminators."""
    if not text:
        return []
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class JsonContent:
    """Line-split input text with a bidirectional character cursor."""

    def __init__(self, text: str) -> None:
        self._lines = split_lines(text)
        self._line = BEFORE_START.line
        self._column = BEFORE_START.column
        self._started = False

    @classmethod
    def from_string(
        cls, text: str, limits: Optional[ParseLimits] = None
    ) -> "JsonContent":
        """Create content from a string, enforcing the input length bound."""
        LimitValidator(limits or ParseLimits()).validate_input_size(text)
        return cls(text)

    @classmethod
    def from_stream(cls, stream: Union[BinaryIO, TextIO]) -> "JsonContent":
        """Create content from a stream; the caller keeps ownership of it.

        Byte streams are decoded as UTF-8 with an optional byte order mark.
        Invalid byte sequences are not an error: each one becomes U+FFFD, the
        way a lenient text reader decodes them.
        """
        data = stream.read()
        if isinstance(data, (bytes, bytearray)):
            text = bytes(data).decode("utf-8-sig", errors="replace")
        else:
            text = data[1:] if data.startswith("\ufeff") else data
        return cls(text)

    @property
    def total_lines(self) -> int:
        return len(self._lines)

    @property
    def current_line(self) -> int:
        return self._line

    @property
    def current_column(self) -> int:
        return self._column

    @property
    def current_position(self) -> int:
        """Column of the cursor within the current line."""
        return self._column

    @property
    def position(self) -> Position:
        return Position(self._line, self._column)

    @property
    def started(self) -> bool:
        return self._started

    @property
    def valid_cursor(self) -> bool:
        return (
            0 <= self._line < len(self._lines)
            and 0 <= self._column < len(self._lines[self._line])
        )

    @property
    def current_char(self) -> Optional[str]:
        if not self.valid_cursor:
            return None
        return self._lines[self._line][self._column]

    def line_text(self, line: int) -> str:
        """Get the text of a line without its terminator."""
        return self._lines[line]

    def move_next(self) -> bool:
        """Advance one character, skipping empty lines; stay put at the end."""
        following = self._position_after(self._line, self._column)
        if following is None:
            return False
        self._line, self._column = following
        self._started = True
        return True

    def move_prev(self) -> bool:
        """Step back one character, skipping empty lines.

        Stepping back from the first character lands on the before-start
        position so that the next forward move finds that character again.
        """
        if self.position == BEFORE_START:
            return False
        preceding = self._position_before(self._line, self._column)
        if preceding is None:
            self._line, self._column = BEFORE_START.line, BEFORE_START.column
        else:
            self._line, self._column = preceding
        return True

    def move_to_next_non_empty_char(self) -> bool:
        """Advance to the next non-whitespace character.

        Returns False and leaves the cursor past the end when the rest of the
        input is whitespace.
        """
        while self.move_next():
            if not self._lines[self._line][self._column].isspace():
                return True
        self._line, self._column = len(self._lines), 0
        self._started = True
        return False

    def get_status_info(self, message: str) -> str:
        """Format a diagnostic message with the cursor position."""
        if self.valid_cursor:
            where = f"{self.position}, character {self.current_char!r}"
        elif self._started:
            where = "end of input"
        else:
            where = "start of input"
        return f"{message} ({where})"

    def _position_after(self, line: int, column: int) -> Optional[tuple[int, int]]:
        if line < len(self._lines) and column + 1 < len(self._lines[line]):
            return line, column + 1
        for next_line in range(line + 1, len(self._lines)):
            if self._lines[next_line]:
                return next_line, 0
        return None

    def _position_before(self, line: int, column: int) -> Optional[tuple[int, int]]:
        if line < len(self._lines) and column - 1 >= 0:
            return line, column - 1
        for prev_line in range(min(line, len(self._lines)) - 1, -1, -1):
            if self._lines[prev_line]:
                return prev_line, len(self._lines[prev_line]) - 1
        return None

    def __repr__(self) -> str:
        return f"JsonContent(lines={self.total_lines}, position={self.position!r})"
