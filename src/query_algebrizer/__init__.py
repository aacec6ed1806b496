"""Query Algebrizer - type-checked resolution of Datalog query arguments."""

from query_algebrizer.clauses import ConjoiningClauses, QueryInputs
from query_algebrizer.clauses.convert import Impossible, Val, ValueConversion, typed_value_from_arg
from query_algebrizer.empty import (
    EmptyBecause,
    InvalidAttributeIdent,
    NonAttributeIdent,
    TypeMismatch,
    UnresolvedIdent,
    ValueTypeMismatch,
)
from query_algebrizer.errors import (
    AlgebrizerError,
    BigIntegerNotSupportedError,
    InvalidGroundConstantError,
    UnboundVariableError,
    UnknownInputVariableError,
)
from query_algebrizer.parsing import ArgParser
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
from query_algebrizer.schema import Attribute, Schema
from query_algebrizer.types import Keyword, TypedValue, ValueType, ValueTypeSet

__all__ = [
    # Main API
    "ConjoiningClauses",
    "QueryInputs",
    "Schema",
    "Attribute",
    "ArgParser",
    "typed_value_from_arg",
    # Results
    "ValueConversion",
    "Val",
    "Impossible",
    # Emptiness reasons
    "EmptyBecause",
    "TypeMismatch",
    "UnresolvedIdent",
    "ValueTypeMismatch",
    "InvalidAttributeIdent",
    "NonAttributeIdent",
    # Errors
    "AlgebrizerError",
    "UnboundVariableError",
    "InvalidGroundConstantError",
    "UnknownInputVariableError",
    "BigIntegerNotSupportedError",
    # Values
    "Keyword",
    "TypedValue",
    "ValueType",
    "ValueTypeSet",
    # Arguments
    "FnArg",
    "EntidOrInteger",
    "IdentOrKeyword",
    "Variable",
    "SrcVar",
    "Constant",
    "Vector",
    "BooleanConstant",
    "InstantConstant",
    "UuidConstant",
    "FloatConstant",
    "TextConstant",
    "BigIntegerConstant",
]

__version__ = "0.1.0"
