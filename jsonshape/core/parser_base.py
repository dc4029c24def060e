"""
Base parser functionality: scalar token conversion and structure bookkeeping.
"""

import logging
from typing import Optional

from ..security.limits import LimitValidator
from .constants import NUMBER_PATTERN
from .tokenizer import Position, Token
from .value import Bool, Null, Number, Value

logger = logging.getLogger(__name__)


class BaseParserMixin:
    """Common parsing functionality used by the recursive-descent parser."""

    def is_valid_number(self, lexeme: str) -> bool:
        """Check a raw number lexeme against the JSON number grammar."""
        return NUMBER_PATTERN.fullmatch(lexeme) is not None

    def parse_number_token(self, token: Token) -> Number:
        """Convert a grammar-checked number token to a Number."""
        return Number(float(token.value))

    def parse_boolean_token(self, token: Token) -> Bool:
        """Parse a boolean token."""
        return Bool(token.value == "true")

    def parse_null_token(self, token: Token) -> Null:  # pylint: disable=unused-argument
        """Parse a null token."""
        return Null()

    def insert_member(self, obj: dict[str, Value], key: str, value: Value) -> None:
        """Insert an object member; a repeated key takes the last value."""
        if key in obj:
            logger.debug("Duplicate object key %r, keeping the last value", key)
        obj[key] = value

    def validate_and_enter_structure(
        self, validator: Optional[LimitValidator], position: Optional[Position] = None
    ) -> None:
        """Count one more level of nesting when limits are enforced."""
        if validator:
            validator.enter_structure(position)

    def validate_and_exit_structure(self, validator: Optional[LimitValidator]) -> None:
        if validator:
            validator.exit_structure()
