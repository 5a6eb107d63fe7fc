"""
jsonpinpoint Core Deserialization Engine.

This module provides the content cursor, the value model and the
recursive-descent deserializer.
"""

from .content import JsonContent
from .deserializer import JsonDeserializer, parse, parse_object, parse_stream
from .position import Position
from .values import (
    JsonArray,
    JsonBoolean,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
    NumberKind,
)

__all__ = [
    'parse', 'parse_stream', 'parse_object', 'JsonDeserializer',
    'JsonContent', 'Position',
    'JsonValue', 'JsonNull', 'JsonBoolean', 'JsonNumber', 'JsonString',
    'JsonArray', 'JsonObject', 'NumberKind',
]
