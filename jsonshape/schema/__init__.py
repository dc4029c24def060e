"""
jsonshape schema validation.

Schemas describe the expected shape of a parsed document with chainable,
typed validators that can also normalize values (trim, round, truncate...).
"""

from .base import Step, StepKind, StepValidator, Validator, ValidatorBuilder
from .errors import (
    ConstraintViolation,
    MissingField,
    SchemaValidationError,
    TypeMismatch,
    ValidationError,
    ValidationResult,
)
from .schema import Schema
from .types import (
    ArrayType,
    ArrayValidator,
    BooleanType,
    BooleanValidator,
    NullType,
    NullValidator,
    NumberType,
    NumberValidator,
    ObjectType,
    ObjectValidator,
    StringType,
    StringValidator,
)

__all__ = [
    'Schema', 'Validator', 'ValidatorBuilder', 'StepValidator', 'Step', 'StepKind',
    'StringType', 'NumberType', 'BooleanType', 'ArrayType', 'ObjectType', 'NullType',
    'StringValidator', 'NumberValidator', 'BooleanValidator', 'ArrayValidator',
    'ObjectValidator', 'NullValidator',
    'ValidationError', 'MissingField', 'TypeMismatch', 'ConstraintViolation',
    'ValidationResult', 'SchemaValidationError',
]
