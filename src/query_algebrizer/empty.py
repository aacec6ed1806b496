"""Reasons a clause is known to produce no results.

These are plain data: the algebrizer records them, prunes the clause, and
carries on. They are never raised.
"""

from __future__ import annotations

from dataclasses import dataclass

from query_algebrizer.query import Variable
from query_algebrizer.types import Keyword, TypedValue, ValueTypeSet


@dataclass(frozen=True)
class TypeMismatch:
    """The types a variable may take don't overlap with the types required."""

    var: Variable
    existing: ValueTypeSet
    desired: ValueTypeSet

    def __str__(self) -> str:
        return f"Type mismatch: {self.var} can be {self.existing}, but must be one of {self.desired}"


@dataclass(frozen=True)
class UnresolvedIdent:
    """A keyword had to be an ident, but the schema doesn't know it."""

    keyword: Keyword

    def __str__(self) -> str:
        return f"Couldn't resolve keyword {self.keyword}"


@dataclass(frozen=True)
class ValueTypeMismatch:
    """A bound value's type isn't one the variable may take."""

    var: Variable
    value: TypedValue
    existing: ValueTypeSet

    def __str__(self) -> str:
        return f"Value {self.value} for {self.var} is not one of {self.existing}"


@dataclass(frozen=True)
class InvalidAttributeIdent:
    """A clause names an attribute the schema doesn't know."""

    keyword: Keyword

    def __str__(self) -> str:
        return f"{self.keyword} does not name an attribute"


@dataclass(frozen=True)
class NonAttributeIdent:
    """A clause names an ident that exists but isn't an attribute."""

    keyword: Keyword

    def __str__(self) -> str:
        return f"{self.keyword} is an ident, not an attribute"


EmptyBecause = TypeMismatch | UnresolvedIdent | ValueTypeMismatch | InvalidAttributeIdent | NonAttributeIdent
