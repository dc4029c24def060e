"""
Schema: an ordered set of named field validators for an object value.
"""

from collections.abc import Iterable, Mapping
from typing import Union

from ..core.value import Object, Value, ValueKind
from .base import Validator, ValidatorBuilder, as_validator, field_path
from .errors import MissingField, TypeMismatch, ValidationError

FieldSpec = tuple[str, Union[Validator, ValidatorBuilder]]


class Schema(Validator):
    """
    Expected shape of a JSON object.

    Fields are checked in declaration order and every field is checked, so one
    call reports all problems. Members not declared in the schema pass through
    unchanged.

    Example:
        schema = Schema([
            ("name", StringType().trim().min_length(3)),
            ("age", NumberType().gt(18).lt(100)),
        ])
        cleaned = schema.validate(parse(text))
    """

    def __init__(
        self,
        fields: Union[
            Iterable[FieldSpec], Mapping[str, Union[Validator, ValidatorBuilder]]
        ],
    ) -> None:
        if isinstance(fields, Mapping):
            fields = fields.items()

        declared: list[tuple[str, Validator]] = []
        seen: set[str] = set()
        for name, validator in fields:
            if not isinstance(name, str):
                raise TypeError(f"Field names must be str, not {type(name).__name__}")
            if name in seen:
                raise ValueError(f"Duplicate schema field '{name}'")
            seen.add(name)
            declared.append((name, as_validator(validator)))

        self._fields = tuple(declared)

    @classmethod
    def new(cls, fields: Iterable[FieldSpec]) -> "Schema":
        """Alternate constructor, same as ``Schema(fields)``."""
        return cls(fields)

    @property
    def fields(self) -> tuple[tuple[str, Validator], ...]:
        return self._fields

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self._fields)

    def apply(self, value: Value, path: str, errors: list[ValidationError]) -> Value:
        members = value.as_object()
        if members is None:
            errors.append(TypeMismatch(path, ValueKind.OBJECT, value.kind))
            return value

        transformed = dict(members)
        for name, validator in self._fields:
            member_path = field_path(path, name)
            member = members.get(name)
            if member is None:
                errors.append(MissingField(member_path))
                continue
            transformed[name] = validator.apply(member, member_path, errors)

        return Object(transformed)

    def __repr__(self) -> str:
        return f"Schema({list(self._fields)!r})"
