"""
The in-memory JSON value tree.

A parsed document is a tree of immutable ``Value`` nodes. Each JSON type has
its own variant class; all of them share the fallible accessors defined on
``Value`` (``get``, ``at`` and the ``as_*`` helpers), which return ``None``
instead of raising when the node has the wrong type or the key/index is absent.

    >>> doc = parse('{"name": "Ada", "tags": ["x"]}')
    >>> doc.get("name").as_string()
    'Ada'
    >>> doc.get("tags").at(3) is None
    True

Indexing with ``[]`` is a thin convenience layer on top that raises
``KeyError``/``IndexError``/``TypeError`` at the call site.
"""

import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Optional, Union


class ValueKind(Enum):
    """Variant tag of a Value."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class Value(ABC):
    """Base class of every JSON value node."""

    kind: ClassVar[ValueKind]

    def get(self, key: Union[str, int]) -> Optional["Value"]:
        """Member of an object (str key) or element of an array (int index)."""
        if isinstance(key, int) and not isinstance(key, bool):
            return self.at(key)
        return None

    def at(self, index: int) -> Optional["Value"]:
        """Element at ``index`` of an array, or None."""
        return None

    def as_string(self) -> Optional[str]:
        return None

    def as_number(self) -> Optional[float]:
        return None

    def as_bool(self) -> Optional[bool]:
        return None

    def as_array(self) -> Optional[tuple["Value", ...]]:
        return None

    def as_object(self) -> Optional[Mapping[str, "Value"]]:
        return None

    def is_null(self) -> bool:
        return False

    def __getitem__(self, key: Union[str, int]) -> "Value":
        if isinstance(key, str):
            raise TypeError(
                f"Key-based indexing is supported only for JSON objects, "
                f"not {self.kind.value}"
            )
        if isinstance(key, int) and not isinstance(key, bool):
            raise TypeError(
                f"Numerical indexing is supported only for JSON arrays, "
                f"not {self.kind.value}"
            )
        raise TypeError(f"Invalid index type: {type(key).__name__}")

    def serialize(self) -> str:
        """Canonical compact JSON text for this value."""
        from .serializer import serialize  # pylint: disable=import-outside-toplevel

        return serialize(self)

    @abstractmethod
    def to_python(self) -> Any:
        """Convert to plain Python data (None, bool, float, str, list, dict)."""

    @staticmethod
    def from_python(obj: Any) -> "Value":
        """Build a Value tree from plain Python data."""
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return Null()
        if isinstance(obj, bool):
            return Bool(obj)
        if isinstance(obj, (int, float)):
            return Number(float(obj))
        if isinstance(obj, str):
            return String(obj)
        if isinstance(obj, (list, tuple)):
            return Array(tuple(Value.from_python(item) for item in obj))
        if isinstance(obj, Mapping):
            members = {}
            for key, item in obj.items():
                if not isinstance(key, str):
                    raise TypeError(
                        f"Object keys must be str, not {type(key).__name__}"
                    )
                members[key] = Value.from_python(item)
            return Object(members)
        raise TypeError(f"Cannot convert {type(obj).__name__} to a JSON value")


@dataclass(frozen=True)
class Null(Value):
    """The JSON ``null`` literal."""

    kind: ClassVar[ValueKind] = ValueKind.NULL

    def is_null(self) -> bool:
        return True

    def to_python(self) -> None:
        return None


@dataclass(frozen=True)
class Bool(Value):
    """A JSON boolean."""

    value: bool
    kind: ClassVar[ValueKind] = ValueKind.BOOL

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"Bool requires a bool, not {type(self.value).__name__}")

    def as_bool(self) -> Optional[bool]:
        return self.value

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class Number(Value):
    """A JSON number, always held as a 64-bit float."""

    value: float
    kind: ClassVar[ValueKind] = ValueKind.NUMBER

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(
                f"Number requires an int or float, not {type(self.value).__name__}"
            )
        number = float(self.value)
        if math.isnan(number):
            raise ValueError("NaN cannot be represented as a JSON number")
        object.__setattr__(self, "value", number)

    def as_number(self) -> Optional[float]:
        return self.value

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True)
class String(Value):
    """A JSON string (a sequence of Unicode code points)."""

    value: str
    kind: ClassVar[ValueKind] = ValueKind.STRING

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"String requires a str, not {type(self.value).__name__}")
        if any(0xD800 <= ord(char) <= 0xDFFF for char in self.value):
            raise ValueError("Lone surrogate code points are not valid in JSON text")

    def as_string(self) -> Optional[str]:
        return self.value

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class Array(Value):
    """An ordered sequence of values."""

    items: tuple[Value, ...] = ()
    kind: ClassVar[ValueKind] = ValueKind.ARRAY

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, Value):
                raise TypeError(
                    f"Array items must be Value instances, not {type(item).__name__}"
                )
        object.__setattr__(self, "items", items)

    def at(self, index: int) -> Optional[Value]:
        if isinstance(index, bool) or not isinstance(index, int):
            return None
        if 0 <= index < len(self.items):
            return self.items[index]
        return None

    def as_array(self) -> Optional[tuple[Value, ...]]:
        return self.items

    def __getitem__(self, key: Union[str, int]) -> Value:
        if isinstance(key, int) and not isinstance(key, bool):
            item = self.at(key)
            if item is None:
                raise IndexError(f"Array index {key} out of range")
            return item
        return super().__getitem__(key)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True, eq=False)
class Object(Value):
    """An ordered mapping of unique string keys to values.

    Built from a mapping or from ``(key, value)`` pairs; with pairs, a repeated
    key keeps its first position and takes its last value.
    """

    members: Mapping[str, Value] = field(default_factory=dict)
    kind: ClassVar[ValueKind] = ValueKind.OBJECT

    def __post_init__(self) -> None:
        source: Iterable[tuple[str, Value]]
        if isinstance(self.members, Mapping):
            source = self.members.items()
        else:
            source = self.members

        members: dict[str, Value] = {}
        for key, item in source:
            if not isinstance(key, str):
                raise TypeError(f"Object keys must be str, not {type(key).__name__}")
            if not isinstance(item, Value):
                raise TypeError(
                    f"Object members must be Value instances, not {type(item).__name__}"
                )
            members[key] = item
        object.__setattr__(self, "members", MappingProxyType(members))

    def get(self, key: Union[str, int]) -> Optional[Value]:
        if isinstance(key, str):
            return self.members.get(key)
        return super().get(key)

    def as_object(self) -> Optional[Mapping[str, Value]]:
        return self.members

    def __getitem__(self, key: Union[str, int]) -> Value:
        if isinstance(key, str):
            item = self.get(key)
            if item is None:
                raise KeyError(key)
            return item
        return super().__getitem__(key)

    def __contains__(self, key: object) -> bool:
        return key in self.members

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[str]:
        return iter(self.members)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Object):
            return NotImplemented
        return dict(self.members) == dict(other.members)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Object({dict(self.members)!r})"

    def to_python(self) -> dict[str, Any]:
        return {key: item.to_python() for key, item in self.members.items()}
