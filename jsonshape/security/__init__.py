"""
jsonshape error types and parse limits.
"""

from .exceptions import (
    ErrorContext,
    ErrorReporter,
    ErrorSuggestionEngine,
    JsonShapeError,
    LexError,
    ParseError,
    SecurityError,
)
from .limits import LimitValidator

__all__ = [
    'JsonShapeError', 'LexError', 'ParseError', 'SecurityError',
    'ErrorContext', 'ErrorReporter', 'ErrorSuggestionEngine', 'LimitValidator',
]
