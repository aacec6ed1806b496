"""Command line tool for resolving a single function argument."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from query_algebrizer.clauses import ConjoiningClauses, Impossible, QueryInputs
from query_algebrizer.errors import AlgebrizerError
from query_algebrizer.parsing import ArgParser
from query_algebrizer.query import Variable
from query_algebrizer.schema import Schema
from query_algebrizer.types import TypedValue, ValueType, ValueTypeSet

logger = logging.getLogger("query_algebrizer")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


def _configure_logging(verbosity: int) -> None:
    """Set up the ``query_algebrizer`` logger: 0 → WARNING, 1 → INFO, 2+ → DEBUG."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.setLevel(level)
    logger.addHandler(handler)


def parse_type_set(text: str) -> ValueTypeSet:
    """Parse a comma-separated list of type names like ``ref,long``.

    An empty string is the empty set; ``any`` is every type.
    """
    text = text.strip()
    if text == "any":
        return ValueTypeSet.any()
    names = [name.strip() for name in text.split(",") if name.strip()]
    try:
        return ValueTypeSet.of_types(ValueType(name) for name in names)
    except ValueError:
        valid = ", ".join(vt.value for vt in ValueType)
        raise ValueError(f"Unknown type in '{text}' (expected any of: {valid})") from None


def parse_input(spec: str, parser: ArgParser, schema: Schema) -> tuple[Variable, TypedValue]:
    """Parse ``?var=LITERAL`` into a variable and its value.

    The literal is resolved with no type restriction, so integers become
    longs and keywords stay keywords.
    """
    name, sep, literal = spec.partition("=")
    if not sep:
        raise ValueError(f"Input must look like ?var=value: {spec}")
    var = Variable(name.strip())
    arg = parser.parse_one(literal)
    result = ConjoiningClauses().typed_value_from_arg(schema, var, arg, ValueTypeSet.any())
    if isinstance(result, Impossible):
        raise ValueError(f"Cannot use {literal} as a value for {var}: {result.reason}")
    return var, result.value


def resolve_command(args: argparse.Namespace) -> int:
    parser = ArgParser()

    try:
        schema = Schema.parse(args.schema.read_text()) if args.schema else Schema()
        known_types = parse_type_set(args.types)
        var = Variable(args.var)
        values = dict(parse_input(spec, parser, schema) for spec in args.input)
        declared = [Variable(name) for name in args.declare]
        arg = parser.parse_one(args.arg)
    except (OSError, SyntaxError, ValueError, AlgebrizerError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    cc = ConjoiningClauses(
        input_variables=list(values) + declared,
        inputs=QueryInputs.with_values(values),
    )
    logger.info("Resolving %s for %s with types %s", args.arg, var, known_types)

    try:
        result = cc.typed_value_from_arg(schema, var, arg, known_types)
    except AlgebrizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if isinstance(result, Impossible):
        print(f"Impossible: {result.reason}")
    else:
        print(f"Val: {result.value}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    arg_parser = argparse.ArgumentParser(
        description="Resolve a query function argument to a typed value"
    )
    arg_parser.add_argument(
        "arg",
        type=str,
        help="The argument, e.g. 42, :foo/bar, ?x, \"text\", #inst \"2017-01-01T00:00:00Z\"",
    )
    arg_parser.add_argument(
        "--var",
        type=str,
        default="?x",
        help="The variable the argument is bound to (default: ?x)",
    )
    arg_parser.add_argument(
        "-t", "--types",
        type=str,
        default="any",
        help="Comma-separated types the variable may take, e.g. ref,long (default: any)",
    )
    arg_parser.add_argument(
        "-s", "--schema",
        type=Path,
        help="Schema file of [ident entid type] vectors",
    )
    arg_parser.add_argument(
        "-i", "--input",
        action="append",
        default=[],
        help="Declare and bind an input variable, e.g. ?name=\"Alice\" (repeatable)",
    )
    arg_parser.add_argument(
        "-d", "--declare",
        action="append",
        default=[],
        help="Declare an input variable without a value (repeatable)",
    )
    arg_parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v info, -vv debug)",
    )

    args = arg_parser.parse_args(argv)
    _configure_logging(args.verbose)
    return resolve_command(args)


if __name__ == "__main__":
    sys.exit(main())
