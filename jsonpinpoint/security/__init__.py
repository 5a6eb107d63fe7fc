"""
jsonpinpoint Limits and Error Types.

This module provides the defensive limits and the positioned exceptions.
"""

from .exceptions import (
    ErrorReporter,
    FileFormatError,
    ParseError,
    SecurityError,
)
from .limits import LimitValidator

__all__ = [
    'FileFormatError', 'ParseError', 'SecurityError',
    'ErrorReporter', 'LimitValidator',
]
