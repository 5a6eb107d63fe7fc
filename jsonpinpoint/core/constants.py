"""
Common constants used by the jsonpinpoint deserializer.
"""

import math
import re

# Characters that may follow a backslash inside a string, except "u"
JSON_ESCAPE_MAP = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    '"': '"',
    "'": "'",
    "\\": "\\",
    "/": "/",
}

QUOTE_CHARS = "\"'"
DEFAULT_QUOTE = '"'
UNICODE_ESCAPE = "u"
UNICODE_ESCAPE_LENGTH = 4
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# Besides letters and digits, an unquoted token may hold these
TOKEN_PUNCTUATION = frozenset(".-_+")

NULL_LITERAL = "null"
TRUE_LITERAL = "true"
FALSE_LITERAL = "false"

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")
FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

FLOAT_SYMBOLS = {
    "NaN": math.nan,
    "Infinity": math.inf,
    "+Infinity": math.inf,
    "-Infinity": -math.inf,
}

SURROGATE_PATTERN = re.compile("[\ud800-\udfff]")
HIGH_SURROGATES = range(0xD800, 0xDC00)
LOW_SURROGATES = range(0xDC00, 0xE000)
