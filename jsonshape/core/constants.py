"""
Common constants and mappings used across the jsonshape library.
"""

from typing import TYPE_CHECKING

import regex

if TYPE_CHECKING:
    from .tokenizer import TokenType

# Escape sequences accepted inside string literals (without the backslash)
JSON_ESCAPE_MAP = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# Short escapes used when serializing; other control characters use \u00XX
SERIALIZE_ESCAPE_MAP = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

WHITESPACE = " \t\n\r"

HEX_DIGITS = "0123456789abcdefABCDEF"

# Characters that may appear in a raw number lexeme
NUMBER_CHARS = "+-.0123456789eE"

KEYWORDS = ("true", "false", "null")

NUMBER_PATTERN = regex.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")

# Text that parses back to +/- infinity
INFINITY_LITERAL = "1e999"


# Token type mapping for structural characters
def get_structural_token_map() -> dict[str, "TokenType"]:
    """Get the mapping of structural characters to TokenType enums."""
    # Import here to avoid circular imports
    from .tokenizer import TokenType  # pylint: disable=import-outside-toplevel

    return {
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
        "[": TokenType.LBRACKET,
        "]": TokenType.RBRACKET,
        ":": TokenType.COLON,
        ",": TokenType.COMMA,
    }
