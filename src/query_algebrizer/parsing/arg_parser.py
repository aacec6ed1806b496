"""Parser for EDN-style function arguments."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

import ply.yacc as yacc

from query_algebrizer.parsing.arg_lexer import ArgLexer
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
from query_algebrizer.types import MAX_LONG, MIN_LONG, Keyword


def parse_instant(text: str) -> datetime:
    """Parse an ISO-8601 timestamp, treating naive and ``Z`` times as UTC."""
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


class ArgParser:
    """Parser for function argument lists."""

    tokens = ArgLexer.tokens

    def __init__(self) -> None:
        self.lexer = ArgLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_args_empty(self, p: yacc.YaccProduction) -> None:
        """args : """
        p[0] = []

    def p_args_list(self, p: yacc.YaccProduction) -> None:
        """args : arg_list"""
        p[0] = p[1]

    def p_arg_list_single(self, p: yacc.YaccProduction) -> None:
        """arg_list : arg"""
        p[0] = [p[1]]

    def p_arg_list_multiple(self, p: yacc.YaccProduction) -> None:
        """arg_list : arg_list arg"""
        p[0] = p[1]
        p[0].append(p[2])

    def p_arg_integer(self, p: yacc.YaccProduction) -> None:
        """arg : INTEGER"""
        if MIN_LONG <= p[1] <= MAX_LONG:
            p[0] = EntidOrInteger(p[1])
        else:
            p[0] = Constant(BigIntegerConstant(p[1]))

    def p_arg_bigint(self, p: yacc.YaccProduction) -> None:
        """arg : BIGINT"""
        p[0] = Constant(BigIntegerConstant(p[1]))

    def p_arg_keyword(self, p: yacc.YaccProduction) -> None:
        """arg : KEYWORD"""
        try:
            p[0] = IdentOrKeyword(Keyword.parse(p[1]))
        except ValueError as e:
            raise SyntaxError(f"{e} (position {p.lexpos(1)})") from e

    def p_arg_variable(self, p: yacc.YaccProduction) -> None:
        """arg : VARIABLE"""
        p[0] = Variable(p[1])

    def p_arg_src_var(self, p: yacc.YaccProduction) -> None:
        """arg : SRC_VAR"""
        p[0] = SrcVar(p[1])

    def p_arg_boolean(self, p: yacc.YaccProduction) -> None:
        """arg : TRUE
               | FALSE"""
        p[0] = Constant(BooleanConstant(p[1]))

    def p_arg_float(self, p: yacc.YaccProduction) -> None:
        """arg : FLOAT"""
        p[0] = Constant(FloatConstant(p[1]))

    def p_arg_string(self, p: yacc.YaccProduction) -> None:
        """arg : STRING"""
        p[0] = Constant(TextConstant(p[1]))

    def p_arg_instant(self, p: yacc.YaccProduction) -> None:
        """arg : INST_TAG STRING"""
        try:
            p[0] = Constant(InstantConstant(parse_instant(p[2])))
        except ValueError as e:
            raise SyntaxError(f"Invalid #inst '{p[2]}' (position {p.lexpos(2)})") from e

    def p_arg_uuid(self, p: yacc.YaccProduction) -> None:
        """arg : UUID_TAG STRING"""
        try:
            p[0] = Constant(UuidConstant(uuid.UUID(p[2])))
        except ValueError as e:
            raise SyntaxError(f"Invalid #uuid '{p[2]}' (position {p.lexpos(2)})") from e

    def p_arg_vector(self, p: yacc.YaccProduction) -> None:
        """arg : LBRACKET args RBRACKET"""
        p[0] = Vector(tuple(p[2]))

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (position {p.lexpos})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, start="args", **kwargs)

    def parse(self, data: str) -> list[FnArg]:
        """Parse a whitespace-separated list of arguments."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        return self.parser.parse(data, lexer=self.lexer.lexer)

    def parse_one(self, data: str) -> FnArg:
        """Parse exactly one argument.

        Raises:
            SyntaxError: If the input holds zero or several arguments.
        """
        args = self.parse(data)
        if len(args) != 1:
            raise SyntaxError(f"Expected exactly one argument, got {len(args)}")
        return args[0]
