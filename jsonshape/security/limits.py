"""
Parse limit enforcement for jsonshape.

A LimitValidator is created per parse and consulted by the parser as tokens
are consumed, so an oversized document fails at the first offending token.
"""

from typing import TYPE_CHECKING, Optional

from ..utils.config import ParseLimits
from .exceptions import SecurityError

if TYPE_CHECKING:
    from ..core.tokenizer import Position


class LimitValidator:
    """Checks one parse against a ParseLimits instance."""

    def __init__(self, limits: ParseLimits):
        self.limits = limits
        self.nesting_depth = 0
        self.depth_reached = 0

    def _check(
        self,
        what: str,
        actual: int,
        limit: int,
        position: Optional["Position"] = None,
    ) -> None:
        if actual > limit:
            raise SecurityError(f"{what} {actual} exceeds limit {limit}", position)

    def validate_input_size(self, text: str) -> None:
        """Input size is measured in characters after decoding."""
        self._check("Input size", len(text), self.limits.max_input_size)

    def validate_string_length(
        self, string: str, position: Optional["Position"] = None
    ) -> None:
        """Check a decoded string or object key."""
        self._check(
            "String length", len(string), self.limits.max_string_length, position
        )

    def validate_number_length(
        self, lexeme: str, position: Optional["Position"] = None
    ) -> None:
        """Check a raw number lexeme before it is converted."""
        self._check(
            "Number length", len(lexeme), self.limits.max_number_length, position
        )

    def enter_structure(self, position: Optional["Position"] = None) -> None:
        self.nesting_depth += 1
        self.depth_reached = max(self.depth_reached, self.nesting_depth)
        self._check(
            "Nesting depth",
            self.nesting_depth,
            self.limits.max_nesting_depth,
            position,
        )

    def exit_structure(self) -> None:
        if self.nesting_depth > 0:
            self.nesting_depth -= 1

    def validate_object_keys(
        self, key_count: int, position: Optional["Position"] = None
    ) -> None:
        """Check the number of distinct keys in one object."""
        self._check(
            "Object key count", key_count, self.limits.max_object_keys, position
        )

    def validate_array_items(
        self, item_count: int, position: Optional["Position"] = None
    ) -> None:
        self._check(
            "Array item count", item_count, self.limits.max_array_items, position
        )
