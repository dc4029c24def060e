"""
jsonshape - strict JSON parsing with typed, chainable schema validation.

jsonshape parses RFC 8259 JSON text into an immutable tree of values, writes
it back out in a canonical compact form, and validates (and normalizes)
documents against schemas built from chainable type builders.

Key Features:
- Strict parser with line/column error positions, context and suggestions
- Immutable Value tree with fallible accessors (get, at, as_string, ...)
- Canonical serialization: no insignificant whitespace, stable member order
- Schemas that report every failing field in one pass
- Configurable limits on input size, string length and nesting depth

Quick Start:
    import jsonshape
    doc = jsonshape.parse('{"name": " Jo ", "age": 30}')
    doc.get("age").as_number()  # 30.0

    from jsonshape import Schema, StringType, NumberType
    schema = Schema([
        ("name", StringType().trim().min_length(2)),
        ("age", NumberType().gt(18).lt(100)),
    ])
    cleaned = schema.validate(doc)
    cleaned.serialize()  # '{"name":"Jo","age":30}'

    # Plain Python data, like the json module
    data = jsonshape.loads('[1, 2, 3]')  # [1.0, 2.0, 3.0]
"""

from .core.engine import parse, loads, load, dumps, dump
from .core.serializer import serialize
from .core.value import Value, ValueKind, Null, Bool, Number, String, Array, Object
from .schema import (
    Schema, Validator, StringType, NumberType, BooleanType, ArrayType, ObjectType,
    NullType, ValidationError, MissingField, TypeMismatch, ConstraintViolation,
    ValidationResult, SchemaValidationError,
)
from .security.exceptions import JsonShapeError, LexError, ParseError, SecurityError
from .utils.config import ParseConfig, ParseLimits

__version__ = "0.1.0"
__author__ = "jsonshape contributors"

__all__ = [
    # Parsing and serialization
    "parse", "loads", "load", "dumps", "dump", "serialize",
    # Value tree
    "Value", "ValueKind", "Null", "Bool", "Number", "String", "Array", "Object",
    # Schemas
    "Schema", "Validator", "StringType", "NumberType", "BooleanType", "ArrayType",
    "ObjectType", "NullType",
    # Validation errors
    "ValidationError", "MissingField", "TypeMismatch", "ConstraintViolation",
    "ValidationResult", "SchemaValidationError",
    # Exceptions
    "JsonShapeError", "LexError", "ParseError", "SecurityError",
    # Configuration
    "ParseConfig", "ParseLimits",
]
