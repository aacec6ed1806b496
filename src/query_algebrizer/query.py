"""Query syntax nodes consumed by the algebrizer: variables and function arguments."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from query_algebrizer.types import MAX_LONG, MIN_LONG, Keyword


@dataclass(frozen=True, order=True)
class Variable:
    """A query variable such as ``?x``. The name includes the leading ``?``."""

    name: str

    def __post_init__(self) -> None:
        if not self.name.startswith("?") or len(self.name) < 2:
            raise ValueError(f"Variable names must start with '?': {self.name!r}")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, order=True)
class SrcVar:
    """A source variable such as ``$`` or ``$history``."""

    name: str = "$"

    def __str__(self) -> str:
        return self.name


# ---------- Non-integer constants ----------


@dataclass(frozen=True)
class BooleanConstant:
    value: bool


@dataclass(frozen=True)
class InstantConstant:
    value: datetime


@dataclass(frozen=True)
class UuidConstant:
    value: uuid.UUID


@dataclass(frozen=True)
class FloatConstant:
    value: float


@dataclass(frozen=True)
class TextConstant:
    value: str


@dataclass(frozen=True)
class BigIntegerConstant:
    """An integer literal too large for a 64-bit value, or written as ``123N``."""

    value: int


NonIntegerConstant = (
    BooleanConstant | InstantConstant | UuidConstant | FloatConstant | TextConstant | BigIntegerConstant
)


# ---------- Function arguments ----------


@dataclass(frozen=True)
class EntidOrInteger:
    """An integer literal: either an entid or a long, depending on context."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Integer arguments must be int: {self.value!r}")
        if not MIN_LONG <= self.value <= MAX_LONG:
            raise ValueError(f"Integer argument out of 64-bit range: {self.value}")


@dataclass(frozen=True)
class IdentOrKeyword:
    """A keyword literal: either an ident to look up or a plain keyword value."""

    keyword: Keyword


@dataclass(frozen=True)
class Constant:
    """A literal whose type is fixed by its syntax."""

    constant: NonIntegerConstant


@dataclass(frozen=True)
class Vector:
    """A bracketed list of arguments, e.g. ``[?x ?y]``."""

    items: tuple[FnArg, ...] = field(default_factory=tuple)


FnArg = EntidOrInteger | IdentOrKeyword | Variable | Constant | Vector | SrcVar

# Every argument form, for exhaustiveness checks
FN_ARG_TYPES: tuple[type, ...] = (EntidOrInteger, IdentOrKeyword, Variable, Constant, Vector, SrcVar)

NON_INTEGER_CONSTANT_TYPES: tuple[type, ...] = (
    BooleanConstant, InstantConstant, UuidConstant, FloatConstant, TextConstant, BigIntegerConstant,
)
