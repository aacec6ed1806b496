"""Errors that abort algebrizing a query.

A clause that can never match is not an error: it is reported as an
``EmptyBecause`` reason. These exceptions are for malformed queries and
unsupported features.
"""

from __future__ import annotations

from typing import Any


class AlgebrizerError(Exception):
    """Base class for hard algebrizer failures."""


class UnboundVariableError(AlgebrizerError):
    """A variable was used as an argument but has no value to bind."""

    def __init__(self, name: str, declared: bool = False):
        self.name = name
        self.declared = declared
        if declared:
            msg = f"Input variable {name} has not been given a value"
        else:
            msg = f"Variable {name} is not bound: it is not a declared input"
        super().__init__(msg)


class InvalidGroundConstantError(AlgebrizerError):
    """An argument shape that can never be a ground value in this position."""

    def __init__(self, arg: Any):
        self.arg = arg
        super().__init__(f"Invalid ground constant: {arg!r}")


class UnknownInputVariableError(AlgebrizerError):
    """An input value was supplied for a variable the query does not declare."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Value supplied for undeclared input variable {name}")


class BigIntegerNotSupportedError(AlgebrizerError, NotImplementedError):
    """Arbitrary-precision integer constants are not supported yet."""

    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Big integer constants are not yet supported: {value}N")
