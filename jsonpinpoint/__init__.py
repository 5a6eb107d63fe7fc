"""
jsonpinpoint - lenient JSON deserializer that pinpoints every failure.

jsonpinpoint turns JSON-like text into an immutable value tree while tracking
the exact line and column of every character, so malformed input produces
errors that point at the offending spot.

Key Features:
- Lenient grammar: single or double quotes, unquoted member names
- Exact numbers: 32-bit and 64-bit integers, Decimal, float
- Positioned errors with a source snippet and fix suggestions
- Limits on input length, nesting depth and object member count
- Typed, null-safe accessors on parsed objects

Quick Start:
    import jsonpinpoint

    value = jsonpinpoint.parse('{ name: "demo", "tags": ["a", "b"] }')
    value.get_string("name")          # "demo"
    value.get_string_array("tags")    # ["a", "b"]

    # Plain Python objects
    data = jsonpinpoint.loads("{'debug': true}")

    # Attach the file path to errors
    try:
        with open("project.json", "rb") as fp:
            project = jsonpinpoint.parse_object(fp)
    except jsonpinpoint.FileFormatError as e:
        raise e.with_path("project.json")
"""

from .core.content import JsonContent
from .core.deserializer import (
    JsonDeserializer,
    load,
    loads,
    parse,
    parse_object,
    parse_stream,
)
from .core.position import Position
from .core.values import (
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
    NumberKind,
)
from .security.exceptions import (
    BadEscape,
    DepthLimitExceeded,
    FileFormatError,
    IllegalPrimitive,
    InputTooLarge,
    InvalidMemberName,
    InvalidUnicodeSequence,
    MalformedArray,
    MalformedObject,
    MemberLimitExceeded,
    NotAnObject,
    ParseError,
    SecurityError,
    StringNotQuoted,
    TrailingComma,
    TrailingContent,
    UnexpectedEndOfInput,
    UnterminatedString,
)
from .utils.config import ErrorReporting, ParseConfig, ParseLimits

__version__ = "0.1.0"
__author__ = "jsonpinpoint contributors"

__all__ = [
    # Deserialization entry points
    "parse", "parse_stream", "parse_object", "loads", "load",
    "JsonDeserializer", "JsonContent", "Position",
    # Value model
    "JsonValue", "JsonNull", "JsonBoolean", "JsonNumber", "JsonString",
    "JsonArray", "JsonObject", "NumberKind",
    # Configuration classes
    "ParseConfig", "ParseLimits", "ErrorReporting",
    # Exception classes
    "FileFormatError", "ParseError", "SecurityError",
    "InputTooLarge", "DepthLimitExceeded", "MemberLimitExceeded",
    "TrailingContent", "MalformedArray", "TrailingComma",
    "InvalidMemberName", "MalformedObject", "StringNotQuoted",
    "UnterminatedString", "BadEscape", "InvalidUnicodeSequence",
    "IllegalPrimitive", "UnexpectedEndOfInput", "NotAnObject",
]
