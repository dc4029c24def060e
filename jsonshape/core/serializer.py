"""
Canonical serializer for jsonshape values.

Output is compact (no inserted whitespace), keeps object members in insertion
order and is deterministic, so equal trees produced the same way serialize to
the same text.
"""

import math

from .constants import INFINITY_LITERAL, SERIALIZE_ESCAPE_MAP
from .value import Array, Bool, Null, Number, Object, String, Value


def serialize(value: Value) -> str:
    """Serialize a Value tree to canonical compact JSON text."""
    parts: list[str] = []
    _write_value(value, parts)
    return "".join(parts)


def format_number(number: float) -> str:
    """Shortest decimal text that parses back to the same float.

    Integral magnitudes drop the trailing ``.0``; infinities are written as an
    out-of-range literal that parses back to the same infinity.
    """
    if math.isinf(number):
        return INFINITY_LITERAL if number > 0 else "-" + INFINITY_LITERAL
    if math.isnan(number):
        raise ValueError("NaN cannot be serialized as JSON")

    text = repr(number)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def quote_string(text: str) -> str:
    """Quote a string, escaping only '"', '\\' and control characters."""
    parts = ['"']
    for char in text:
        if char in SERIALIZE_ESCAPE_MAP:
            parts.append(SERIALIZE_ESCAPE_MAP[char])
        elif ord(char) < 0x20:
            parts.append(f"\\u{ord(char):04x}")
        else:
            parts.append(char)
    parts.append('"')
    return "".join(parts)


def _write_value(value: Value, parts: list[str]) -> None:
    if isinstance(value, Null):
        parts.append("null")
    elif isinstance(value, Bool):
        parts.append("true" if value.value else "false")
    elif isinstance(value, Number):
        parts.append(format_number(value.value))
    elif isinstance(value, String):
        parts.append(quote_string(value.value))
    elif isinstance(value, Array):
        _write_array(value, parts)
    elif isinstance(value, Object):
        _write_object(value, parts)
    else:
        raise TypeError(f"Cannot serialize {type(value).__name__}")


def _write_array(array: Array, parts: list[str]) -> None:
    parts.append("[")
    for index, item in enumerate(array.items):
        if index:
            parts.append(",")
        _write_value(item, parts)
    parts.append("]")


def _write_object(obj: Object, parts: list[str]) -> None:
    parts.append("{")
    for index, (key, item) in enumerate(obj.members.items()):
        if index:
            parts.append(",")
        parts.append(quote_string(key))
        parts.append(":")
        _write_value(item, parts)
    parts.append("}")
