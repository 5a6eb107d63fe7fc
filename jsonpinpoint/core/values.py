"""
Value model produced by the deserializer.

Values are immutable and carry the position where their text started. The
position is informational only and does not take part in equality.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional, TypeVar, Union

from .position import Position

logger = logging.getLogger(__name__)

V = TypeVar("V", bound="JsonValue")

Number = Union[int, Decimal, float]


class NumberKind(Enum):
    """Concrete representation chosen for a numeric literal."""

    INT32 = "int32"
    INT64 = "int64"
    DECIMAL = "decimal"
    FLOAT64 = "float64"


@dataclass(frozen=True)
class JsonValue(ABC):
    """Base class of every parsed value."""

    position: Position = field(
        default=Position(0, 0), compare=False, repr=False, kw_only=True
    )

    @abstractmethod
    def to_python(self) -> Any:
        """Convert to plain Python objects."""


@dataclass(frozen=True)
class JsonNull(JsonValue):
    def to_python(self) -> None:
        return None


@dataclass(frozen=True)
class JsonBoolean(JsonValue):
    value: bool

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class JsonNumber(JsonValue):
    value: Number
    kind: NumberKind

    def to_python(self) -> Number:
        return self.value


@dataclass(frozen=True)
class JsonString(JsonValue):
    value: str

    def to_python(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class JsonArray(JsonValue):
    items: tuple[JsonValue, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self.items)

    def __getitem__(self, index: int) -> JsonValue:
        return self.items[index]

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class JsonObject(JsonValue, Mapping):
    """Parsed object with null-safe typed accessors.

    The ``get_*`` accessors never raise: an absent key or a value of another
    type yields ``None`` (or the supplied default).
    """

    members: Mapping[str, JsonValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", MappingProxyType(dict(self.members)))

    def __getitem__(self, key: str) -> JsonValue:
        return self.members[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    __hash__ = None  # type: ignore[assignment]

    def get(self, key: str, default: Optional[JsonValue] = None) -> Optional[JsonValue]:
        return self.members.get(key, default)

    def get_as(self, key: str, value_type: type[V]) -> Optional[V]:
        """Get the value for ``key`` if it is a ``value_type``."""
        value = self.members.get(key)
        if value is None:
            return None
        if not isinstance(value, value_type):
            logger.debug(
                "Member %r is %s, not %s", key, type(value).__name__, value_type.__name__
            )
            return None
        return value

    def get_object(self, key: str) -> Optional["JsonObject"]:
        return self.get_as(key, JsonObject)

    def get_string(self, key: str) -> Optional[str]:
        value = self.get_as(key, JsonString)
        return value.value if value is not None else None

    def get_number(self, key: str) -> Optional[Number]:
        value = self.get_as(key, JsonNumber)
        return value.value if value is not None else None

    def get_boolean(self, key: str, default: bool = False) -> bool:
        value = self.get_as(key, JsonBoolean)
        return value.value if value is not None else default

    def get_nullable_boolean(self, key: str) -> Optional[bool]:
        value = self.get_as(key, JsonBoolean)
        return value.value if value is not None else None

    def get_array(self, key: str) -> Optional[list[JsonValue]]:
        value = self.get_as(key, JsonArray)
        return list(value.items) if value is not None else None

    def get_string_array(self, key: str) -> Optional[list[str]]:
        """Get an array of strings; any non-string element yields None."""
        items = self.get_array(key)
        if items is None:
            return None
        if not all(isinstance(item, JsonString) for item in items):
            logger.debug("Member %r is not an array of strings", key)
            return None
        return [item.value for item in items]  # type: ignore[attr-defined]

    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self.members.items()}
