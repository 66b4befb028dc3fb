"""Untyped intermediate value tree shared by all sources.

Every source produces a ``Value`` and the builder folds them together before
decoding into the caller's target type. Variants are immutable; the merger
always builds new instances.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from collections.abc import Mapping as AbcMapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any, ClassVar


class ValueKind(str, Enum):
    """Tag identifying a Value variant."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


class Value(ABC):
    """Base class of all value variants."""

    kind: ClassVar[ValueKind]

    @abstractmethod
    def to_python(self, *, drop_nulls: bool = False) -> Any:
        """Convert to plain Python data.

        Args:
            drop_nulls: Omit mapping entries whose value is Null.

        Returns:
            None, bool, int, float, str, list or dict.
        """

    @property
    def is_null(self) -> bool:
        """Check if this is the Null variant."""
        return self.kind == ValueKind.NULL


@dataclass(frozen=True)
class Null(Value):
    """Absent value. Never overrides a present value when merged."""

    kind: ClassVar[ValueKind] = ValueKind.NULL

    def to_python(self, *, drop_nulls: bool = False) -> None:
        return None


@dataclass(frozen=True)
class Boolean(Value):
    kind: ClassVar[ValueKind] = ValueKind.BOOLEAN

    value: bool

    def to_python(self, *, drop_nulls: bool = False) -> bool:
        return self.value


@dataclass(frozen=True)
class Integer(Value):
    kind: ClassVar[ValueKind] = ValueKind.INTEGER

    value: int

    def to_python(self, *, drop_nulls: bool = False) -> int:
        return self.value


@dataclass(frozen=True)
class Float(Value):
    kind: ClassVar[ValueKind] = ValueKind.FLOAT

    value: float

    def to_python(self, *, drop_nulls: bool = False) -> float:
        return self.value


@dataclass(frozen=True)
class String(Value):
    kind: ClassVar[ValueKind] = ValueKind.STRING

    value: str

    def to_python(self, *, drop_nulls: bool = False) -> str:
        return self.value


@dataclass(frozen=True)
class Sequence(Value):
    """Ordered list of values. Merged atomically."""

    kind: ClassVar[ValueKind] = ValueKind.SEQUENCE

    items: tuple[Value, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def to_python(self, *, drop_nulls: bool = False) -> list[Any]:
        return [item.to_python(drop_nulls=drop_nulls) for item in self.items]


@dataclass(frozen=True, eq=False)
class Mapping(Value):
    """String-keyed collection of values.

    Keys are unique. Insertion order is kept for re-serialization but is
    ignored by equality.
    """

    kind: ClassVar[ValueKind] = ValueKind.MAPPING

    entries: tuple[tuple[str, Value], ...] = ()
    _index: dict[str, Value] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        index: dict[str, Value] = {}
        for key, value in self.entries:
            if key in index:
                raise ValueError(f"Duplicate mapping key: {key!r}")
            index[key] = value
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_items(cls, items: Iterable[tuple[str, Value]]) -> "Mapping":
        """Build a mapping from (key, value) pairs."""
        return cls(tuple(items))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self._index == other._index

    def __hash__(self) -> int:
        return hash(frozenset(self._index.items()))

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def get(self, key: str, default: Value | None = None) -> Value | None:
        """Get the value stored under a key."""
        return self._index.get(key, default)

    def keys(self) -> list[str]:
        """Keys in insertion order."""
        return [key for key, _ in self.entries]

    def items(self) -> tuple[tuple[str, Value], ...]:
        return self.entries

    def to_python(self, *, drop_nulls: bool = False) -> dict[str, Any]:
        return {
            key: value.to_python(drop_nulls=drop_nulls)
            for key, value in self.entries
            if not (drop_nulls and value.is_null)
        }


NULL = Null()

EMPTY_MAPPING = Mapping()


def from_python(obj: object) -> Value:
    """Convert plain Python data into a Value.

    Args:
        obj: None, bool, int, float, str, date/time, list/tuple or mapping.

    Returns:
        The equivalent Value tree.

    Raises:
        TypeError: If an object of an unsupported type is found.
        ValueError: If two mapping keys are equal once converted to strings.
    """
    if obj is None:
        return NULL
    # bool first: it is an int subclass
    if isinstance(obj, bool):
        return Boolean(obj)
    if isinstance(obj, int):
        return Integer(obj)
    if isinstance(obj, float):
        return Float(obj)
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, datetime | date | time):
        return String(obj.isoformat())
    if isinstance(obj, AbcMapping):
        return Mapping.from_items(
            (str(key), from_python(value)) for key, value in obj.items()
        )
    if isinstance(obj, list | tuple):
        return Sequence(tuple(from_python(item) for item in obj))
    raise TypeError(f"Cannot convert {type(obj).__name__} to a config value")
