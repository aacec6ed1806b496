"""Conversion of function arguments to typed values."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from query_algebrizer.empty import EmptyBecause, TypeMismatch, UnresolvedIdent
from query_algebrizer.errors import (
    BigIntegerNotSupportedError,
    InvalidGroundConstantError,
    UnboundVariableError,
)
from query_algebrizer.query import (
    BigIntegerConstant,
    BooleanConstant,
    Constant,
    EntidOrInteger,
    FloatConstant,
    FnArg,
    IdentOrKeyword,
    InstantConstant,
    SrcVar,
    TextConstant,
    UuidConstant,
    Variable,
    Vector,
)
from query_algebrizer.types import Keyword, TypedValue, ValueType, ValueTypeSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Val:
    """The argument converted to a value."""

    value: TypedValue


@dataclass(frozen=True)
class Impossible:
    """The argument can never satisfy the variable's types."""

    reason: EmptyBecause


ValueConversion = Val | Impossible


class IdentLookup(Protocol):
    def get_entid(self, keyword: Keyword) -> int | None: ...


class InputBindings(Protocol):
    def is_input_variable(self, var: Variable) -> bool: ...

    def bound_value(self, var: Variable) -> TypedValue | None: ...


# Constant class -> (value type, TypedValue constructor)
_CONSTANT_TYPES = {
    BooleanConstant: (ValueType.BOOLEAN, TypedValue.boolean),
    InstantConstant: (ValueType.INSTANT, TypedValue.instant),
    UuidConstant: (ValueType.UUID, TypedValue.uuid),
    FloatConstant: (ValueType.DOUBLE, TypedValue.double),
    TextConstant: (ValueType.STRING, TypedValue.string),
}


def _mismatch(var: Variable, known_types: ValueTypeSet, desired: ValueTypeSet) -> Impossible:
    reason = TypeMismatch(var=var, existing=known_types, desired=desired)
    logger.debug("%s", reason)
    return Impossible(reason)


def typed_value_from_arg(
    schema: IdentLookup,
    bindings: InputBindings,
    var: Variable,
    arg: FnArg,
    known_types: ValueTypeSet,
) -> ValueConversion:
    """Convert a function argument to a value for ``var``.

    The conversion depends on the types ``var`` may already take and on the
    values bound to input variables. Nothing passed in is modified; narrowing
    ``var`` to the result is up to the caller.

    Returns:
        ``Val`` with the converted value, or ``Impossible`` with the reason
        the argument can never match.

    Raises:
        UnboundVariableError: If a variable argument has no bound input value.
        InvalidGroundConstantError: For vectors and source variables.
        BigIntegerNotSupportedError: For big integer constants.
        TypeError: For an object that isn't an argument at all.
    """
    if known_types.is_empty():
        # The clause has already failed.
        return _mismatch(var, known_types, ValueTypeSet.any())

    # Integers could be longs or entids.
    if isinstance(arg, EntidOrInteger):
        x = arg.value
        plausible_ref = ValueType.REF.accommodates_integer(x)
        has_ref = known_types.contains(ValueType.REF)
        has_long = known_types.contains(ValueType.LONG)
        if has_long and (not has_ref or plausible_ref):
            # Ambiguous integers default to long.
            return Val(TypedValue.long(x))
        if has_ref and plausible_ref:
            return Val(TypedValue.ref(x))
        # Either not a valid entid where one is required, or no overlap at all.
        return _mismatch(var, known_types, ValueTypeSet.of_longs())

    # Keywords could be plain keywords or idents.
    if isinstance(arg, IdentOrKeyword):
        has_ref = known_types.contains(ValueType.REF)
        has_keyword = known_types.contains(ValueType.KEYWORD)
        if has_keyword:
            # Ambiguous keywords default to keyword; no lookup.
            return Val(TypedValue.keyword(arg.keyword))
        if has_ref:
            entid = schema.get_entid(arg.keyword)
            if entid is None:
                logger.debug("Unresolved ident %s for %s", arg.keyword, var)
                return Impossible(UnresolvedIdent(arg.keyword))
            return Val(TypedValue.ref(entid))
        return _mismatch(var, known_types, ValueTypeSet.of_keywords())

    if isinstance(arg, Variable):
        # TODO: ground a variable bound elsewhere in the same query, not only inputs.
        if not bindings.is_input_variable(arg):
            raise UnboundVariableError(arg.name)
        value = bindings.bound_value(arg)
        if value is None:
            # Declared in :in but not supplied yet; values from computed tables aren't collected.
            raise UnboundVariableError(arg.name, declared=True)
        return Val(value)

    if isinstance(arg, (Vector, SrcVar)):
        raise InvalidGroundConstantError(arg)

    if isinstance(arg, Constant):
        constant = arg.constant
        if isinstance(constant, BigIntegerConstant):
            raise BigIntegerNotSupportedError(constant.value)
        try:
            value_type, constructor = _CONSTANT_TYPES[type(constant)]
        except KeyError:
            raise TypeError(f"Unknown constant: {constant!r}") from None
        if not known_types.contains(value_type):
            return _mismatch(var, known_types, ValueTypeSet.of_one(value_type))
        return Val(constructor(constant.value))

    raise TypeError(f"Unknown function argument: {arg!r}")
