"""
Parse configuration for jsonshape.

ParseLimits bounds the work a single parse may do; ParseConfig bundles those
limits with the options that shape error reports.
"""

from dataclasses import dataclass, fields, replace
from typing import Optional

MIB = 1024 * 1024


@dataclass(frozen=True)
class ParseLimits:
    """Upper bounds enforced while parsing.

    Sizes are measured in characters after decoding. Structure limits count
    nesting levels, distinct keys per object and elements per array.
    """

    max_input_size: int = 10 * MIB
    max_string_length: int = MIB
    max_number_length: int = 100
    max_nesting_depth: int = 100
    max_object_keys: int = 10000
    max_array_items: int = 100000

    def __post_init__(self) -> None:
        for limit in fields(self):
            value = getattr(self, limit.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(
                    f"{limit.name} must be an int, not {type(value).__name__}"
                )
            if value <= 0:
                raise ValueError(f"{limit.name} must be positive, got {value}")

    def with_overrides(self, **overrides: int) -> "ParseLimits":
        """Return a copy with some limits replaced."""
        return replace(self, **overrides)

    @classmethod
    def relaxed(cls) -> "ParseLimits":
        """Limits large enough for any document that fits in memory.

        Nesting stays bounded so deep documents fail with SecurityError
        instead of exhausting the interpreter stack.
        """
        huge = 2**62
        return cls(
            max_input_size=huge,
            max_string_length=huge,
            max_number_length=huge,
            max_nesting_depth=200,
            max_object_keys=huge,
            max_array_items=huge,
        )


@dataclass
class ParseConfig:
    """Options for a single call to parse().

    ``limits=None`` installs the default ParseLimits; there is no way to turn
    limit checking off entirely.
    """

    limits: Optional[ParseLimits] = None
    include_context: bool = True
    max_error_context: int = 50

    def __post_init__(self) -> None:
        if self.limits is None:
            self.limits = ParseLimits()
        if self.max_error_context < 0:
            raise ValueError("max_error_context must not be negative")

    @classmethod
    def unlimited(cls) -> "ParseConfig":
        """Configuration with relaxed limits (see ParseLimits.relaxed)."""
        return cls(limits=ParseLimits.relaxed())
