"""
Deserializer for jsonpinpoint - converts cursor-addressed text into values.

A recursive-descent engine: each grammar rule peeks at the next meaningful
character through the content cursor, rewinds, and lets the chosen rule
consume the text itself. Every failure is raised at the point of detection
with the cursor's line and column.
"""

import io
import logging
from decimal import Decimal
from typing import Any, BinaryIO, NoReturn, Optional, TextIO, Union

from ..security.exceptions import (
    BadEscape,
    ErrorReporter,
    ErrorSuggestionEngine,
    FileFormatError,
    IllegalPrimitive,
    InvalidMemberName,
    InvalidUnicodeSequence,
    MalformedArray,
    MalformedObject,
    NotAnObject,
    StringNotQuoted,
    TrailingComma,
    TrailingContent,
    UnexpectedEndOfInput,
    UnterminatedString,
)
from ..security.limits import LimitValidator
from ..utils.config import ParseConfig
from .constants import (
    DECIMAL_PATTERN,
    DEFAULT_QUOTE,
    FALSE_LITERAL,
    FLOAT_PATTERN,
    FLOAT_SYMBOLS,
    HEX_DIGITS,
    HIGH_SURROGATES,
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    INTEGER_PATTERN,
    JSON_ESCAPE_MAP,
    LOW_SURROGATES,
    NULL_LITERAL,
    QUOTE_CHARS,
    SURROGATE_PATTERN,
    TOKEN_PUNCTUATION,
    TRUE_LITERAL,
    UNICODE_ESCAPE,
    UNICODE_ESCAPE_LENGTH,
)
from .content import JsonContent
from .position import Position
from .values import (
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
    Number,
    NumberKind,
)

logger = logging.getLogger(__name__)

Source = Union[str, BinaryIO, TextIO]


def infer_number(token: str) -> Optional[tuple[Number, NumberKind]]:
    """Pick the narrowest numeric representation for a token.

    Integers without a decimal point or exponent try 32-bit then 64-bit
    ranges; anything else without an exponent becomes an exact Decimal;
    exponent notation always becomes a float. Returns None when the token is
    not a number.
    """
    has_exponent = "e" in token or "E" in token

    if not has_exponent:
        if "." not in token and INTEGER_PATTERN.fullmatch(token):
            number = int(token)
            if INT32_MIN <= number <= INT32_MAX:
                return number, NumberKind.INT32
            if INT64_MIN <= number <= INT64_MAX:
                return number, NumberKind.INT64

        if DECIMAL_PATTERN.fullmatch(token):
            return Decimal(token), NumberKind.DECIMAL

    if token in FLOAT_SYMBOLS:
        return FLOAT_SYMBOLS[token], NumberKind.FLOAT64

    if FLOAT_PATTERN.fullmatch(token):
        value = float(token)
        # A finite literal too large for a double is not representable
        if value in (float("inf"), float("-inf")):
            return None
        return value, NumberKind.FLOAT64

    return None


def combine_surrogates(text: str) -> str:
    """Join UTF-16 surrogate pairs; raise ValueError on an unpaired one."""
    if not SURROGATE_PATTERN.search(text):
        return text

    result = []
    i = 0
    while i < len(text):
        code = ord(text[i])
        if code in HIGH_SURROGATES:
            if i + 1 < len(text) and ord(text[i + 1]) in LOW_SURROGATES:
                low = ord(text[i + 1])
                result.append(chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)))
                i += 2
                continue
            raise ValueError(f"Unpaired high surrogate U+{code:04X} at index {i}")
        if code in LOW_SURROGATES:
            raise ValueError(f"Unpaired low surrogate U+{code:04X} at index {i}")
        result.append(text[i])
        i += 1
    return "".join(result)


class JsonDeserializer:
    """Recursive-descent deserializer producing a ``JsonValue`` tree.

    An instance keeps per-parse state and must not be shared between threads;
    sequential calls are fine since every call starts from fresh state.
    """

    def __init__(self, config: Optional[ParseConfig] = None):
        self.config = config or ParseConfig()
        self._content: Optional[JsonContent] = None
        self._validator: Optional[LimitValidator] = None
        self._error_reporter: Optional[ErrorReporter] = None

    def deserialize(self, text: str) -> JsonValue:
        """Deserialize a string."""
        if text is None:
            raise TypeError("text must not be None")
        return self._deserialize(JsonContent.from_string(text, self.config.limits))

    def deserialize_stream(self, stream: Union[BinaryIO, TextIO]) -> JsonValue:
        """Deserialize a UTF-8 stream. The stream is read but never closed."""
        if stream is None:
            raise TypeError("stream must not be None")
        return self._deserialize(JsonContent.from_stream(stream))

    def deserialize_object(self, source: Source) -> JsonObject:
        """Deserialize a string or stream whose root value must be an object."""
        if hasattr(source, "read"):
            value = self.deserialize_stream(source)  # type: ignore[arg-type]
        else:
            value = self.deserialize(source)  # type: ignore[arg-type]

        if not isinstance(value, JsonObject):
            assert self._error_reporter is not None
            raise self._error_reporter.create_error(
                NotAnObject,
                f"Expected an object at the root, found {type(value).__name__}",
                value.position,
            )
        return value

    @property
    def content(self) -> JsonContent:
        """Content of the parse in progress (or the last one)."""
        if self._content is None:
            raise RuntimeError("No content has been deserialized yet")
        return self._content

    def _deserialize(self, content: JsonContent) -> JsonValue:
        self._content = content
        self._error_reporter = ErrorReporter(
            content,
            max_context=self.config.max_error_context,
            include_context=self.config.include_context,
            include_suggestions=self.config.include_suggestions,
        )
        self._validator = LimitValidator(self.config.limits, self._error_reporter)

        logger.debug("Deserializing %d lines", content.total_lines)
        result = self._deserialize_value()

        if content.move_to_next_non_empty_char():
            self._raise_error(
                TrailingContent, "Unexpected content after the root value"
            )

        logger.debug("Deserialized root %s", type(result).__name__)
        return result

    def _deserialize_value(self) -> JsonValue:
        """Peek at the next meaningful character and dispatch on it."""
        content = self.content
        if not content.move_to_next_non_empty_char():
            return JsonNull(position=content.position)

        next_char = content.current_char
        position = content.position
        content.move_prev()

        if next_char == "{":
            return self._deserialize_object(position)
        if next_char == "[":
            return self._deserialize_array(position)
        if next_char in QUOTE_CHARS:
            return self._deserialize_string(position)
        return self._deserialize_primitive(position)

    def _open_structure(self, opening: str, error_type: type[FileFormatError]) -> None:
        content = self.content
        if not content.move_next():
            self._raise_error(
                UnexpectedEndOfInput,
                f"Input ended before '{opening}' could be read",
            )
        if content.current_char != opening:
            self._raise_error(error_type, f"Expected '{opening}'")

        assert self._validator is not None
        self._validator.enter_structure(content.position)

    def _deserialize_array(self, position: Position) -> JsonArray:
        """Parse a JSON array."""
        content = self.content
        self._open_structure("[", MalformedArray)

        items: list[JsonValue] = []
        expect_more = False
        while content.move_to_next_non_empty_char() and content.current_char != "]":
            content.move_prev()
            items.append(self._deserialize_value())
            expect_more = False

            content.move_to_next_non_empty_char()
            if content.current_char == "]":
                break

            expect_more = True
            if content.current_char != ",":
                self._raise_error(
                    MalformedArray,
                    "Expected ',' or ']' after array element",
                    ErrorSuggestionEngine.suggest_for_unclosed_structure("array"),
                )

        if expect_more:
            self._raise_error(TrailingComma, "Extra ',' at the end of the array")

        if content.current_char != "]":
            self._raise_error(
                MalformedArray,
                "Expected ']' to close array",
                ErrorSuggestionEngine.suggest_for_unclosed_structure("array"),
            )

        assert self._validator is not None
        self._validator.exit_structure()
        return JsonArray(tuple(items), position=position)

    def _deserialize_object(self, position: Position) -> JsonObject:
        """Parse a JSON object; a repeated member name keeps the last value."""
        content = self.content
        self._open_structure("{", MalformedObject)
        assert self._validator is not None

        members: dict[str, JsonValue] = {}
        expect_more = False
        while content.move_to_next_non_empty_char():
            char = content.current_char
            if char == "}":
                if expect_more:
                    self._raise_error(
                        MalformedObject, "Extra ',' at the end of the object"
                    )
                break

            if char == ":":
                self._raise_error(InvalidMemberName, "Missing member name before ':'")

            content.move_prev()
            name = self._deserialize_member_name()

            if not content.move_to_next_non_empty_char():
                self._raise_error(
                    UnexpectedEndOfInput,
                    f"Input ended after member name {name!r}, expected ':'",
                )
            if content.current_char != ":":
                self._raise_error(
                    MalformedObject, f"Expected ':' after member name {name!r}"
                )

            self._validator.validate_object_members(len(members), content.position)
            members[name] = self._deserialize_value()
            expect_more = False

            content.move_to_next_non_empty_char()
            if content.current_char == "}":
                break

            if content.current_char != ",":
                self._raise_error(
                    MalformedObject,
                    "Expected ',' or '}' after object member",
                    ErrorSuggestionEngine.suggest_for_unclosed_structure("object"),
                )
            expect_more = True

        if content.current_char != "}":
            self._raise_error(
                MalformedObject,
                "Expected '}' to close object",
                ErrorSuggestionEngine.suggest_for_unclosed_structure("object"),
            )

        self._validator.exit_structure()
        return JsonObject(members, position=position)

    def _deserialize_member_name(self) -> str:
        """Parse a member name: quoted with either quote, or a bare token."""
        content = self.content
        content.move_to_next_non_empty_char()
        char = content.current_char
        content.move_prev()

        if char in QUOTE_CHARS:
            return self._deserialize_string().value
        return self._read_primitive_token()

    def _deserialize_string(self, position: Optional[Position] = None) -> JsonString:
        """Parse a quoted string, unescaping as it goes."""
        content = self.content
        content.move_next()
        position = position or content.position
        quote_char = self._check_quote_char(content.current_char)

        chars: list[str] = []
        escaped = False
        while content.move_next():
            char = content.current_char
            assert char is not None

            if escaped:
                chars.append(self._unescape(char))
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote_char:
                return JsonString(self._validate_string("".join(chars)), position=position)
            else:
                chars.append(char)

        self._raise_error(
            UnterminatedString,
            "Unterminated string",
            ErrorSuggestionEngine.suggest_for_string(),
        )

    def _check_quote_char(self, char: Optional[str]) -> str:
        if char == "'":
            return char
        if char != DEFAULT_QUOTE:
            self._raise_error(StringNotQuoted, "String is not quoted")
        return DEFAULT_QUOTE

    def _unescape(self, char: str) -> str:
        """Translate the character following a backslash."""
        if char in JSON_ESCAPE_MAP:
            return JSON_ESCAPE_MAP[char]
        if char == UNICODE_ESCAPE:
            return self._read_unicode_escape()
        self._raise_error(
            BadEscape,
            f"Invalid escape sequence '\\{char}'",
            ErrorSuggestionEngine.suggest_for_escape(),
        )

    def _read_unicode_escape(self) -> str:
        """Read exactly 4 hexadecimal digits as one UTF-16 code unit."""
        content = self.content
        hex_digits = ""
        for _ in range(UNICODE_ESCAPE_LENGTH):
            if not content.move_next():
                self._raise_error(
                    UnterminatedString, "Input ended inside a \\u escape sequence"
                )
            char = content.current_char
            if char not in HEX_DIGITS:
                self._raise_error(
                    BadEscape,
                    f"Invalid hexadecimal digit {char!r} in \\u escape sequence",
                    ErrorSuggestionEngine.suggest_for_escape(),
                )
            hex_digits += char  # type: ignore[operator]
        return chr(int(hex_digits, 16))

    def _validate_string(self, text: str) -> str:
        try:
            return combine_surrogates(text)
        except ValueError as e:
            self._raise_error(InvalidUnicodeSequence, f"Invalid Unicode sequence: {e}")

    def _read_primitive_token(self) -> str:
        """Consume letters, digits and '.-_+'.

        Line breaks produce no character, so a token continues on the next
        line when that line starts with a token character.
        """
        content = self.content
        chars: list[str] = []
        while content.move_next():
            char = content.current_char
            assert char is not None
            if char.isalnum() or char in TOKEN_PUNCTUATION:
                chars.append(char)
            else:
                content.move_prev()
                break

        return "".join(chars)

    def _deserialize_primitive(self, position: Position) -> JsonValue:
        """Parse null, true, false or a number."""
        token = self._read_primitive_token()

        if token == NULL_LITERAL:
            return JsonNull(position=position)
        if token == TRUE_LITERAL:
            return JsonBoolean(True, position=position)
        if token == FALSE_LITERAL:
            return JsonBoolean(False, position=position)

        number = infer_number(token)
        if number is None:
            if not token:
                self._raise_error(IllegalPrimitive, "Expected a value", token=token)
            self._raise_error(
                IllegalPrimitive,
                f"Invalid JSON primitive: {token}",
                ErrorSuggestionEngine.suggest_for_invalid_primitive(token),
                token=token,
            )

        value, kind = number
        return JsonNumber(value, kind, position=position)

    def _raise_error(
        self,
        error_type: type[FileFormatError],
        message: str,
        suggestions: Optional[list[str]] = None,
        **kwargs: Any,
    ) -> NoReturn:
        content = self.content
        logger.debug(content.get_status_info(message))
        assert self._error_reporter is not None
        raise self._error_reporter.create_error(
            error_type, message, content.position, suggestions, **kwargs
        )


def parse(text: str, config: Optional[ParseConfig] = None) -> JsonValue:
    """
    Parse a JSON-like string into a value tree.

    Args:
        text: The text to parse
        config: Optional ParseConfig with limits and error reporting options

    Returns:
        The root JsonValue

    Raises:
        ParseError: If the text violates the grammar
        SecurityError: If a limit is exceeded
    """
    return JsonDeserializer(config).deserialize(text)


def parse_stream(
    stream: Union[BinaryIO, TextIO], config: Optional[ParseConfig] = None
) -> JsonValue:
    """Parse a UTF-8 stream into a value tree without closing the stream."""
    return JsonDeserializer(config).deserialize_stream(stream)


def parse_object(source: Source, config: Optional[ParseConfig] = None) -> JsonObject:
    """Parse a string or stream whose root must be an object."""
    return JsonDeserializer(config).deserialize_object(source)


def loads(
    s: Union[str, bytes, bytearray], *, config: Optional[ParseConfig] = None
) -> Any:
    """Deserialize text to plain Python objects (dict, list, str, numbers, ...)."""
    if isinstance(s, (bytes, bytearray)):
        return parse_stream(io.BytesIO(s), config).to_python()
    return parse(s, config).to_python()


def load(fp: Union[BinaryIO, TextIO], *, config: Optional[ParseConfig] = None) -> Any:
    """Deserialize a file-like object to plain Python objects."""
    return parse_stream(fp, config).to_python()
