"""
Validator interface, step model and builder base class.

A concrete validator is an immutable tuple of steps run in the order the
builder appended them. A step is one of:

- a transform, which replaces the candidate payload;
- a predicate, which checks the candidate and, on failure, records a
  ConstraintViolation and stops the remaining steps of that validator;
- a nested step, which validates children (array elements, object members)
  at their own paths and stops the remaining steps if it recorded errors.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Optional, TypeVar, Union

from ..core.value import Value, ValueKind
from .errors import ConstraintViolation, TypeMismatch, ValidationError, ValidationResult

logger = logging.getLogger(__name__)

BuilderT = TypeVar("BuilderT", bound="ValidatorBuilder")


def field_path(parent: str, name: str) -> str:
    """Path of an object member: ``address.city``."""
    return f"{parent}.{name}" if parent else name


def index_path(parent: str, index: int) -> str:
    """Path of an array element: ``items[2]``."""
    return f"{parent}[{index}]"


class StepKind(Enum):
    """How a step acts on the candidate."""

    TRANSFORM = "transform"
    PREDICATE = "predicate"
    NESTED = "nested"


@dataclass(frozen=True)
class Step:
    """One transform, predicate or nested check of a validator."""

    kind: StepKind
    name: str
    func: Callable[..., Any]
    bound: Any = None
    measure: Optional[Callable[[Any], Any]] = None

    def actual(self, candidate: Any) -> Any:
        """Quantity reported as ``actual`` when the predicate fails."""
        return self.measure(candidate) if self.measure else candidate


class Validator(ABC):
    """Common interface of every validator and of Schema."""

    @abstractmethod
    def apply(self, value: Value, path: str, errors: list[ValidationError]) -> Value:
        """Validate ``value`` located at ``path``.

        Appends any errors to ``errors`` and returns the transformed value.
        """

    def check(self, value: Value, path: str = "") -> ValidationResult:
        """Validate without raising; errors are returned in the result."""
        errors: list[ValidationError] = []
        transformed = self.apply(value, path, errors)
        logger.debug(
            "%s checked %s: %d error(s)",
            type(self).__name__,
            path or "<root>",
            len(errors),
        )
        return ValidationResult(transformed, tuple(errors))

    def validate(self, value: Value, path: str = "") -> Value:
        """Return the transformed value or raise SchemaValidationError."""
        return self.check(value, path).raise_for_errors()


class StepValidator(Validator):
    """Validator for one JSON type, driven by an immutable tuple of steps."""

    expected_kind: ClassVar[ValueKind]

    def __init__(self, steps: Iterable[Step] = ()) -> None:
        self._steps = tuple(steps)

    @property
    def steps(self) -> tuple[Step, ...]:
        return self._steps

    @abstractmethod
    def unwrap(self, value: Value) -> Any:
        """Extract the payload steps operate on."""

    @abstractmethod
    def wrap(self, candidate: Any) -> Value:
        """Rebuild a Value from a (possibly transformed) payload."""

    def apply(self, value: Value, path: str, errors: list[ValidationError]) -> Value:
        if value.kind != self.expected_kind:
            errors.append(TypeMismatch(path, self.expected_kind, value.kind))
            return value

        candidate = self.unwrap(value)
        for step in self._steps:
            if step.kind is StepKind.TRANSFORM:
                candidate = step.func(candidate)
            elif step.kind is StepKind.PREDICATE:
                if not step.func(candidate):
                    errors.append(
                        ConstraintViolation(
                            path, step.name, step.actual(candidate), step.bound
                        )
                    )
                    break
            else:
                recorded = len(errors)
                candidate = step.func(candidate, path, errors)
                if len(errors) > recorded:
                    break

        return self.wrap(candidate)

    def __repr__(self) -> str:
        names = ", ".join(step.name for step in self._steps)
        return f"{type(self).__name__}([{names}])"


class ValidatorBuilder(ABC):
    """Mutable accumulator of steps; ``build()`` freezes it into a validator."""

    def __init__(self) -> None:
        self._steps: list[Step] = []

    @classmethod
    def new(cls: type[BuilderT], *args: Any, **kwargs: Any) -> BuilderT:
        """Alternate constructor, same as calling the builder class."""
        return cls(*args, **kwargs)

    def _add(self: BuilderT, step: Step) -> BuilderT:
        self._steps.append(step)
        return self

    def _predicate(
        self: BuilderT,
        name: str,
        func: Callable[[Any], bool],
        bound: Any = None,
        measure: Optional[Callable[[Any], Any]] = None,
    ) -> BuilderT:
        return self._add(Step(StepKind.PREDICATE, name, func, bound, measure))

    def _transform(self: BuilderT, name: str, func: Callable[[Any], Any]) -> BuilderT:
        return self._add(Step(StepKind.TRANSFORM, name, func))

    def _nested(
        self: BuilderT,
        name: str,
        func: Callable[[Any, str, list[ValidationError]], Any],
        bound: Any = None,
    ) -> BuilderT:
        return self._add(Step(StepKind.NESTED, name, func, bound))

    @abstractmethod
    def build(self) -> Validator:
        """Finalize into an immutable validator."""


def as_validator(candidate: Union[Validator, ValidatorBuilder]) -> Validator:
    """Accept a built validator or finalize a builder."""
    if isinstance(candidate, Validator):
        return candidate
    if isinstance(candidate, ValidatorBuilder):
        return candidate.build()
    raise TypeError(
        f"Expected a Validator or validator builder, not {type(candidate).__name__}"
    )


def check_count(name: str, value: int) -> int:
    """Validate a non-negative integer builder argument."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} requires an int, not {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value
