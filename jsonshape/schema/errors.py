"""
Validation error records and the exception that aggregates them.

Validation never stops at the first problem: every failing field produces one
record, and ``Schema.validate`` raises a single SchemaValidationError holding
all of them in schema declaration order.
"""

from dataclasses import dataclass
from typing import Any

from ..core.value import Value, ValueKind
from ..security.exceptions import JsonShapeError

ROOT_PATH_LABEL = "<root>"


def display_path(path: str) -> str:
    """Render a path for messages; the root path is empty."""
    return path or ROOT_PATH_LABEL


@dataclass(frozen=True)
class ValidationError:
    """Base class of validation error records; ``path`` locates the value."""

    path: str

    @property
    def message(self) -> str:
        return f"{display_path(self.path)}: invalid value"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class MissingField(ValidationError):
    """A declared field is absent from the object."""

    @property
    def message(self) -> str:
        return f"{display_path(self.path)}: required field is missing"


@dataclass(frozen=True)
class TypeMismatch(ValidationError):
    """The value has a different JSON type than the validator expects."""

    expected: ValueKind
    found: ValueKind

    @property
    def message(self) -> str:
        return (
            f"{display_path(self.path)}: expected {self.expected.value}, "
            f"found {self.found.value}"
        )


@dataclass(frozen=True)
class ConstraintViolation(ValidationError):
    """A predicate step failed.

    ``constraint`` is the builder method name (``gt``, ``min_length``...),
    ``actual`` the measured quantity and ``bound`` the configured argument.
    """

    constraint: str
    actual: Any
    bound: Any = None

    @property
    def message(self) -> str:
        text = f"{display_path(self.path)}: {self.constraint} constraint failed"
        if self.bound is None:
            return f"{text} (actual {self.actual!r})"
        return f"{text} (actual {self.actual!r}, bound {self.bound!r})"


class SchemaValidationError(JsonShapeError):
    """Raised by ``validate`` when one or more validation errors were found."""

    def __init__(self, errors: list[ValidationError]) -> None:
        self.errors = list(errors)
        count = len(self.errors)
        header = f"{count} validation error{'s' if count != 1 else ''}"
        lines = [header] + [f"  {error.message}" for error in self.errors]
        super().__init__("\n".join(lines))


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a non-raising ``check`` call."""

    value: Value
    errors: tuple[ValidationError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> Value:
        """Return the transformed value, or raise SchemaValidationError."""
        if self.errors:
            raise SchemaValidationError(list(self.errors))
        return self.value
