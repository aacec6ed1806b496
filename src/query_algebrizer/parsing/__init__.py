"""Parsing module for function argument literals."""

from query_algebrizer.parsing.arg_lexer import ArgLexer
from query_algebrizer.parsing.arg_parser import ArgParser, parse_instant

__all__ = [
    "ArgLexer",
    "ArgParser",
    "parse_instant",
]
