"""
Chainable validator builders for each JSON type.

Every builder method appends one step and returns the builder, so constraints
read left to right in the order they run:

    StringType().trim().min_length(3)     # trims first, then measures
    NumberType().gt(18).lt(100)
    ArrayType(StringType().build()).min_items(1)

``build()`` returns the immutable validator; Schema also accepts builders and
builds them itself.
"""

import math
from collections.abc import Iterable, Sequence
from typing import Any, Callable, Optional, Union

import regex

from ..core.value import Array, Bool, Null, Number, Object, String, Value, ValueKind
from .base import (
    Step,
    StepKind,
    StepValidator,
    Validator,
    ValidatorBuilder,
    as_validator,
    check_count,
    index_path,
)
from .errors import ConstraintViolation, ValidationError
from .schema import Schema

AnyValidator = Union[Validator, ValidatorBuilder]

# multiple_of tolerance, relative to the divisor (0.3 is a multiple of 0.1)
MULTIPLE_OF_TOLERANCE = 1e-9


def _check_number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} requires a number, not {type(value).__name__}")
    if math.isnan(value):
        raise ValueError(f"{name} bound must not be NaN")
    return value


def _check_text(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} requires a str, not {type(value).__name__}")
    return value


def _is_multiple(value: float, divisor: float) -> bool:
    if not math.isfinite(value):
        return False
    remainder = math.remainder(value, divisor)
    return abs(remainder) <= MULTIPLE_OF_TOLERANCE * abs(divisor)


def _finite_only(func: Callable[[float], float]) -> Callable[[float], float]:
    def apply(value: float) -> float:
        return float(func(value)) if math.isfinite(value) else value

    return apply


class StringValidator(StepValidator):
    expected_kind = ValueKind.STRING

    def unwrap(self, value: Value) -> str:
        return value.as_string()

    def wrap(self, candidate: str) -> Value:
        return String(candidate)


class NumberValidator(StepValidator):
    expected_kind = ValueKind.NUMBER

    def unwrap(self, value: Value) -> float:
        return value.as_number()

    def wrap(self, candidate: float) -> Value:
        return Number(candidate)


class BooleanValidator(StepValidator):
    expected_kind = ValueKind.BOOL

    def unwrap(self, value: Value) -> bool:
        return value.as_bool()

    def wrap(self, candidate: bool) -> Value:
        return Bool(candidate)


class ArrayValidator(StepValidator):
    expected_kind = ValueKind.ARRAY

    def unwrap(self, value: Value) -> tuple[Value, ...]:
        return value.as_array()

    def wrap(self, candidate: Sequence[Value]) -> Value:
        return Array(tuple(candidate))


class ObjectValidator(StepValidator):
    expected_kind = ValueKind.OBJECT

    def __init__(self, schema: Schema, steps: Iterable[Step] = ()) -> None:
        super().__init__(steps)
        self.schema = schema

    def unwrap(self, value: Value) -> Value:
        return value

    def wrap(self, candidate: Value) -> Value:
        return candidate


class NullValidator(StepValidator):
    expected_kind = ValueKind.NULL

    def unwrap(self, value: Value) -> None:
        return None

    def wrap(self, candidate: None) -> Value:
        return Null()


class StringType(ValidatorBuilder):
    """Builder for string validators."""

    def min_length(self, n: int) -> "StringType":
        """Require at least ``n`` code points."""
        check_count("min_length", n)
        return self._predicate("min_length", lambda s: len(s) >= n, n, len)

    def max_length(self, n: int) -> "StringType":
        """Allow at most ``n`` code points."""
        check_count("max_length", n)
        return self._predicate("max_length", lambda s: len(s) <= n, n, len)

    def length(self, n: int) -> "StringType":
        """Require exactly ``n`` code points."""
        check_count("length", n)
        return self._predicate("length", lambda s: len(s) == n, n, len)

    def starts_with(self, prefix: str) -> "StringType":
        _check_text("starts_with", prefix)
        return self._predicate("starts_with", lambda s: s.startswith(prefix), prefix)

    def ends_with(self, suffix: str) -> "StringType":
        _check_text("ends_with", suffix)
        return self._predicate("ends_with", lambda s: s.endswith(suffix), suffix)

    def includes(self, fragment: str) -> "StringType":
        _check_text("includes", fragment)
        return self._predicate("includes", lambda s: fragment in s, fragment)

    def pattern(self, expression: str) -> "StringType":
        """Require a regular expression match anywhere in the string."""
        _check_text("pattern", expression)
        try:
            compiled = regex.compile(expression)
        except regex.error as e:
            raise ValueError(f"Invalid pattern {expression!r}: {e}") from e
        return self._predicate(
            "pattern", lambda s: compiled.search(s) is not None, expression
        )

    def trim(self) -> "StringType":
        """Strip leading and trailing whitespace before later steps."""
        return self._transform("trim", str.strip)

    def trim_start(self) -> "StringType":
        return self._transform("trim_start", str.lstrip)

    def trim_end(self) -> "StringType":
        return self._transform("trim_end", str.rstrip)

    def to_lowercase(self) -> "StringType":
        return self._transform("to_lowercase", str.lower)

    def to_uppercase(self) -> "StringType":
        return self._transform("to_uppercase", str.upper)

    def transform(self, func: Callable[[str], str]) -> "StringType":
        """Apply a custom ``str -> str`` function."""
        return self._transform("transform", func)

    def build(self) -> StringValidator:
        return StringValidator(self._steps)


class NumberType(ValidatorBuilder):
    """Builder for number validators."""

    def gt(self, n: float) -> "NumberType":
        """Require a value strictly greater than ``n``."""
        _check_number("gt", n)
        return self._predicate("gt", lambda v: v > n, n)

    def lt(self, n: float) -> "NumberType":
        """Require a value strictly less than ``n``."""
        _check_number("lt", n)
        return self._predicate("lt", lambda v: v < n, n)

    def minimum(self, n: float) -> "NumberType":
        """Require a value greater than or equal to ``n``."""
        _check_number("minimum", n)
        return self._predicate("minimum", lambda v: v >= n, n)

    def maximum(self, n: float) -> "NumberType":
        """Require a value less than or equal to ``n``."""
        _check_number("maximum", n)
        return self._predicate("maximum", lambda v: v <= n, n)

    def multiple_of(self, n: float) -> "NumberType":
        _check_number("multiple_of", n)
        if n == 0 or math.isinf(n):
            raise ValueError(f"multiple_of requires a finite non-zero number, got {n}")
        return self._predicate("multiple_of", lambda v: _is_multiple(v, n), n)

    def integer(self) -> "NumberType":
        """Require an integral value."""
        return self._predicate("integer", lambda v: float(v).is_integer())

    def floor(self) -> "NumberType":
        return self._transform("floor", _finite_only(math.floor))

    def ceil(self) -> "NumberType":
        return self._transform("ceil", _finite_only(math.ceil))

    def round(self) -> "NumberType":
        """Round to the nearest integer, ties to even."""
        return self._transform("round", _finite_only(round))

    def transform(self, func: Callable[[float], float]) -> "NumberType":
        return self._transform("transform", func)

    def build(self) -> NumberValidator:
        return NumberValidator(self._steps)


class BooleanType(ValidatorBuilder):
    """Builder for boolean validators."""

    def truthy(self) -> "BooleanType":
        """Require the literal ``true``."""
        return self._predicate("truthy", lambda b: b is True, True)

    def falsy(self) -> "BooleanType":
        """Require the literal ``false``."""
        return self._predicate("falsy", lambda b: b is False, False)

    def transform(self, func: Callable[[bool], bool]) -> "BooleanType":
        return self._transform("transform", func)

    def build(self) -> BooleanValidator:
        return BooleanValidator(self._steps)


class ArrayType(ValidatorBuilder):
    """Builder for array validators.

    ``items`` validates every element; it runs where the builder starts, before
    any step chained afterwards.
    """

    def __init__(self, items: Optional[AnyValidator] = None) -> None:
        super().__init__()
        if items is not None:
            self.every(items)

    def every(self, validator: AnyValidator) -> "ArrayType":
        """Validate (and transform) every element at ``path[i]``."""
        element = as_validator(validator)

        def check_elements(
            items: tuple[Value, ...], path: str, errors: list[ValidationError]
        ) -> tuple[Value, ...]:
            return tuple(
                element.apply(item, index_path(path, index), errors)
                for index, item in enumerate(items)
            )

        return self._nested("every", check_elements)

    def some(self, validator: AnyValidator) -> "ArrayType":
        """Require at least one element that passes ``validator``."""
        element = as_validator(validator)
        return self._predicate(
            "some",
            lambda items: any(element.check(item).ok for item in items),
            None,
            len,
        )

    def at(self, index: int, validator: AnyValidator) -> "ArrayType":
        """Require element ``index`` to exist and pass ``validator``."""
        check_count("at", index)
        element = as_validator(validator)

        def check_element(
            items: tuple[Value, ...], path: str, errors: list[ValidationError]
        ) -> tuple[Value, ...]:
            if index >= len(items):
                errors.append(ConstraintViolation(path, "at", len(items), index))
                return items
            updated = list(items)
            updated[index] = element.apply(
                items[index], index_path(path, index), errors
            )
            return tuple(updated)

        return self._nested("at", check_element, index)

    def min_items(self, n: int) -> "ArrayType":
        check_count("min_items", n)
        return self._predicate("min_items", lambda items: len(items) >= n, n, len)

    def max_items(self, n: int) -> "ArrayType":
        check_count("max_items", n)
        return self._predicate("max_items", lambda items: len(items) <= n, n, len)

    def length(self, n: int) -> "ArrayType":
        check_count("length", n)
        return self._predicate("length", lambda items: len(items) == n, n, len)

    def non_empty(self) -> "ArrayType":
        return self._predicate("non_empty", lambda items: len(items) > 0, None, len)

    def truncate(self, n: int) -> "ArrayType":
        """Keep only the first ``n`` elements."""
        check_count("truncate", n)
        return self._transform("truncate", lambda items: items[:n])

    def transform(
        self, func: Callable[[list[Value]], Sequence[Value]]
    ) -> "ArrayType":
        """Apply a custom function to the element list."""
        return self._transform("transform", lambda items: tuple(func(list(items))))

    def build(self) -> ArrayValidator:
        return ArrayValidator(self._steps)


class ObjectType(ValidatorBuilder):
    """Builder for nested object validators wrapping a Schema."""

    def __init__(self, schema: Optional[Schema] = None) -> None:
        super().__init__()
        self._fields: list[tuple[str, AnyValidator]] = (
            list(schema.fields) if schema is not None else []
        )

    def property(self, name: str, validator: AnyValidator) -> "ObjectType":
        """Declare a member of the nested object."""
        self._fields.append((name, validator))
        return self

    def transform(
        self, func: Callable[[dict[str, Value]], dict[str, Value]]
    ) -> "ObjectType":
        """Apply a custom function to the member mapping after the schema runs."""
        return self._transform(
            "transform", lambda obj: Object(func(dict(obj.members)))
        )

    def build(self) -> ObjectValidator:
        schema = Schema(self._fields)
        members = Step(StepKind.NESTED, "schema", schema.apply)
        return ObjectValidator(schema, [members, *self._steps])


class NullType(ValidatorBuilder):
    """Builder for a validator accepting only ``null``."""

    def build(self) -> NullValidator:
        return NullValidator(self._steps)
