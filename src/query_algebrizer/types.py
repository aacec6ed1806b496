"""Value types and typed values for the query_algebrizer library."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Iterator


# Largest entid the store can allocate (signed 64-bit)
MAX_ENTID = 2**63 - 1

# Signed 64-bit bounds for Long values
MIN_LONG = -(2**63)
MAX_LONG = 2**63 - 1


class ValueType(Enum):
    """The closed set of value types an attribute or variable can have."""

    REF = "ref"
    LONG = "long"
    DOUBLE = "double"
    STRING = "string"
    BOOLEAN = "boolean"
    INSTANT = "instant"
    UUID = "uuid"
    KEYWORD = "keyword"

    @property
    def keyword(self) -> str:
        """Return the schema keyword naming this type, e.g. ``:db.type/ref``."""
        return f":db.type/{self.value}"

    @classmethod
    def from_keyword(cls, keyword: str) -> ValueType:
        """Look up a type by its schema keyword.

        Raises:
            ValueError: If the keyword does not name a value type.
        """
        prefix = ":db.type/"
        if keyword.startswith(prefix):
            try:
                return cls(keyword[len(prefix):])
            except ValueError:
                pass
        raise ValueError(f"Unknown value type keyword: {keyword}")

    def accommodates_integer(self, value: int) -> bool:
        """Return whether an integer literal could be a value of this type."""
        if self is ValueType.REF:
            return 0 <= value <= MAX_ENTID
        if self is ValueType.LONG:
            return MIN_LONG <= value <= MAX_LONG
        if self is ValueType.DOUBLE:
            return True
        # Instants always need an explicit #inst literal.
        return False

    def __str__(self) -> str:
        return self.value


# Declaration order, used for stable iteration and display
_ORDER: dict[ValueType, int] = {vt: i for i, vt in enumerate(ValueType)}


@dataclass(frozen=True)
class ValueTypeSet:
    """An immutable set of value types.

    An empty set is a contradiction: no type can satisfy it. ``any()`` is the
    unconstrained set.
    """

    types: frozenset[ValueType] = field(default_factory=frozenset)

    @classmethod
    def none(cls) -> ValueTypeSet:
        return cls(frozenset())

    @classmethod
    def any(cls) -> ValueTypeSet:
        return cls(frozenset(ValueType))

    @classmethod
    def of_one(cls, value_type: ValueType) -> ValueTypeSet:
        return cls(frozenset((value_type,)))

    @classmethod
    def of_types(cls, types: Iterable[ValueType]) -> ValueTypeSet:
        return cls(frozenset(types))

    @classmethod
    def of_longs(cls) -> ValueTypeSet:
        """The two types an integer literal can denote."""
        return cls(frozenset((ValueType.REF, ValueType.LONG)))

    @classmethod
    def of_keywords(cls) -> ValueTypeSet:
        """The two types a keyword literal can denote."""
        return cls(frozenset((ValueType.REF, ValueType.KEYWORD)))

    @classmethod
    def of_numeric_types(cls) -> ValueTypeSet:
        return cls(frozenset((ValueType.DOUBLE, ValueType.LONG)))

    def contains(self, value_type: ValueType) -> bool:
        return value_type in self.types

    def is_empty(self) -> bool:
        return not self.types

    def is_unit(self) -> bool:
        return len(self.types) == 1

    def exemplar(self) -> ValueType | None:
        """Return the only member of a unit set, else None."""
        if self.is_unit():
            return next(iter(self.types))
        return None

    def union(self, other: ValueTypeSet) -> ValueTypeSet:
        return ValueTypeSet(self.types | other.types)

    def intersection(self, other: ValueTypeSet) -> ValueTypeSet:
        return ValueTypeSet(self.types & other.types)

    def is_subset(self, other: ValueTypeSet) -> bool:
        return self.types <= other.types

    def __contains__(self, value_type: object) -> bool:
        return value_type in self.types

    def __iter__(self) -> Iterator[ValueType]:
        return iter(sorted(self.types, key=_ORDER.__getitem__))

    def __len__(self) -> int:
        return len(self.types)

    def __str__(self) -> str:
        return "{" + ", ".join(vt.value for vt in self) + "}"


@dataclass(frozen=True)
class Keyword:
    """A keyword such as ``:db/ident`` or ``:foo``.

    Keywords are immutable and compare by value, so one instance can be
    shared by every clause that mentions it.
    """

    namespace: str | None
    name: str

    @classmethod
    def parse(cls, text: str) -> Keyword:
        """Parse ``:ns/name`` or ``:name``.

        Raises:
            ValueError: If the text is not a keyword.
        """
        if not text.startswith(":") or len(text) < 2:
            raise ValueError(f"Not a keyword: {text!r}")
        body = text[1:]
        if "/" in body and body != "/":
            namespace, _, name = body.rpartition("/")
            if not namespace or not name:
                raise ValueError(f"Not a keyword: {text!r}")
            return cls(namespace, name)
        return cls(None, body)

    def __str__(self) -> str:
        if self.namespace is None:
            return f":{self.name}"
        return f":{self.namespace}/{self.name}"


# Python payload type(s) accepted for each value type
_PAYLOAD_TYPES: dict[ValueType, tuple[type, ...]] = {
    ValueType.REF: (int,),
    ValueType.LONG: (int,),
    ValueType.DOUBLE: (float,),
    ValueType.STRING: (str,),
    ValueType.BOOLEAN: (bool,),
    ValueType.INSTANT: (datetime,),
    ValueType.UUID: (uuid.UUID,),
    ValueType.KEYWORD: (Keyword,),
}


@dataclass(frozen=True)
class TypedValue:
    """A concrete value paired with its value type.

    Equality compares both the type tag and the payload, so ``Ref(5)`` and
    ``Long(5)`` are different values. Payloads are never coerced.
    """

    value_type: ValueType
    value: Any

    def __post_init__(self) -> None:
        expected = _PAYLOAD_TYPES[self.value_type]
        # bool is an int subclass; only BOOLEAN accepts it.
        if isinstance(self.value, bool) and self.value_type is not ValueType.BOOLEAN:
            raise TypeError(f"{self.value_type} value cannot be a boolean: {self.value!r}")
        if not isinstance(self.value, expected):
            raise TypeError(
                f"{self.value_type} value must be {expected[0].__name__}, "
                f"got {type(self.value).__name__}"
            )
        if self.value_type is ValueType.INSTANT and self.value.tzinfo is None:
            raise TypeError("instant value must be timezone-aware")
        if self.value_type is ValueType.REF and not ValueType.REF.accommodates_integer(self.value):
            raise TypeError(f"ref value out of entid range: {self.value}")
        if self.value_type is ValueType.LONG and not ValueType.LONG.accommodates_integer(self.value):
            raise TypeError(f"long value out of 64-bit range: {self.value}")

    @classmethod
    def ref(cls, entid: int) -> TypedValue:
        return cls(ValueType.REF, entid)

    @classmethod
    def long(cls, value: int) -> TypedValue:
        return cls(ValueType.LONG, value)

    @classmethod
    def double(cls, value: float) -> TypedValue:
        return cls(ValueType.DOUBLE, value)

    @classmethod
    def string(cls, value: str) -> TypedValue:
        return cls(ValueType.STRING, value)

    @classmethod
    def boolean(cls, value: bool) -> TypedValue:
        return cls(ValueType.BOOLEAN, value)

    @classmethod
    def instant(cls, value: datetime) -> TypedValue:
        return cls(ValueType.INSTANT, value)

    @classmethod
    def uuid(cls, value: uuid.UUID) -> TypedValue:
        return cls(ValueType.UUID, value)

    @classmethod
    def keyword(cls, value: Keyword) -> TypedValue:
        return cls(ValueType.KEYWORD, value)

    def matches_type(self, value_type: ValueType) -> bool:
        return self.value_type is value_type

    def __str__(self) -> str:
        if self.value_type is ValueType.INSTANT:
            return f"#inst \"{self.value.isoformat()}\""
        if self.value_type is ValueType.UUID:
            return f"#uuid \"{self.value}\""
        if self.value_type is ValueType.STRING:
            return f"\"{self.value}\""
        if self.value_type is ValueType.BOOLEAN:
            return "true" if self.value else "false"
        return f"{self.value_type.value.capitalize()}({self.value})"
