"""Per-query constraint state: what each variable can be, and what it is bound to."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from query_algebrizer.clauses.convert import (
    Impossible,
    Val,
    ValueConversion,
    typed_value_from_arg,
)
from query_algebrizer.empty import (
    EmptyBecause,
    InvalidAttributeIdent,
    NonAttributeIdent,
    TypeMismatch,
    ValueTypeMismatch,
)
from query_algebrizer.errors import UnknownInputVariableError
from query_algebrizer.query import FnArg, Variable
from query_algebrizer.schema import Schema
from query_algebrizer.types import Keyword, TypedValue, ValueTypeSet

logger = logging.getLogger(__name__)


@dataclass
class QueryInputs:
    """Types and values supplied for a query's ``:in`` variables.

    A supplied value fixes its variable's type; ``types`` can restrict
    variables whose values arrive later.
    """

    types: dict[Variable, ValueTypeSet] = field(default_factory=dict)
    values: dict[Variable, TypedValue] = field(default_factory=dict)

    @classmethod
    def with_values(cls, values: Mapping[Variable, TypedValue]) -> QueryInputs:
        return cls(
            types={var: ValueTypeSet.of_one(value.value_type) for var, value in values.items()},
            values=dict(values),
        )

    @classmethod
    def with_types(cls, types: Mapping[Variable, ValueTypeSet]) -> QueryInputs:
        return cls(types=dict(types))


class ConjoiningClauses:
    """The constraints accumulated while algebrizing one query.

    Owned by a single algebrizer pass; not shared between threads.
    """

    def __init__(
        self,
        input_variables: Iterable[Variable] = (),
        inputs: QueryInputs | None = None,
    ) -> None:
        self.empty_because: EmptyBecause | None = None
        self.input_variables: frozenset[Variable] = frozenset(input_variables)
        self.value_bindings: dict[Variable, TypedValue] = {}
        self.known_types: dict[Variable, ValueTypeSet] = {}

        if inputs is None:
            return
        for var in list(inputs.types) + list(inputs.values):
            if var not in self.input_variables:
                raise UnknownInputVariableError(var.name)
        for var, types in inputs.types.items():
            self.narrow_types_for_var(var, types)
        for var, value in inputs.values.items():
            self.bind_value(var, value)

    def is_known_empty(self) -> bool:
        return self.empty_because is not None

    def mark_known_empty(self, why: EmptyBecause) -> None:
        """Record that these clauses can produce no results. The first reason is kept."""
        if self.empty_because is not None:
            logger.debug("Already empty (%s); ignoring %s", self.empty_because, why)
            return
        logger.debug("Clauses known empty: %s", why)
        self.empty_because = why

    def known_type_set(self, var: Variable) -> ValueTypeSet:
        return self.known_types.get(var, ValueTypeSet.any())

    def narrow_types_for_var(self, var: Variable, types: ValueTypeSet) -> None:
        """Restrict ``var`` to ``types``, marking the clauses empty if nothing remains."""
        existing = self.known_type_set(var)
        narrowed = existing.intersection(types)
        self.known_types[var] = narrowed
        if narrowed.is_empty():
            self.mark_known_empty(TypeMismatch(var=var, existing=existing, desired=types))

    def narrow_types_for_attribute(self, var: Variable, schema: Schema, attribute: Keyword) -> None:
        """Restrict ``var`` to the value type of ``attribute``."""
        entid = schema.get_entid(attribute)
        if entid is None:
            self.mark_known_empty(InvalidAttributeIdent(attribute))
            return
        found = schema.attribute_for_ident(attribute)
        if found is None:
            self.mark_known_empty(NonAttributeIdent(attribute))
            return
        self.narrow_types_for_var(var, ValueTypeSet.of_one(found.value_type))

    def is_input_variable(self, var: Variable) -> bool:
        return var in self.input_variables

    def bound_value(self, var: Variable) -> TypedValue | None:
        return self.value_bindings.get(var)

    def bind_value(self, var: Variable, value: TypedValue) -> bool:
        """Bind ``var`` to a value, which also fixes its type.

        Returns:
            False if the value's type is not one ``var`` may take.
        """
        existing = self.known_type_set(var)
        if not existing.contains(value.value_type):
            self.known_types[var] = ValueTypeSet.none()
            self.mark_known_empty(ValueTypeMismatch(var=var, value=value, existing=existing))
            return False
        self.value_bindings[var] = value
        self.known_types[var] = ValueTypeSet.of_one(value.value_type)
        return True

    def typed_value_from_arg(
        self,
        schema: Schema,
        var: Variable,
        arg: FnArg,
        known_types: ValueTypeSet,
    ) -> ValueConversion:
        """Convert ``arg`` to a value for ``var``, given the types ``var`` may take."""
        return typed_value_from_arg(schema, self, var, arg, known_types)

    def apply_fn_arg(self, schema: Schema, var: Variable, arg: FnArg) -> bool:
        """Bind ``var`` to ``arg`` if possible, otherwise mark the clauses empty.

        Returns:
            Whether a value was bound.
        """
        result = self.typed_value_from_arg(schema, var, arg, self.known_type_set(var))
        if isinstance(result, Impossible):
            self.mark_known_empty(result.reason)
            return False
        return self.bind_value(var, result.value)


__all__ = [
    "ConjoiningClauses",
    "Impossible",
    "QueryInputs",
    "Val",
    "ValueConversion",
]
