# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the colrecord command-line interface."""

import argparse
import importlib
import logging
import sys
from pathlib import Path

from colrecord.config import SCHEMA_FORMATS, ColrecordConfig, find_config, load_config
from colrecord.errors import ColrecordError, ConfigError
from colrecord.model.catalog import MATERIALIZABLE_KINDS, SCHEMA_KINDS, native_types
from colrecord.model.types import PrimitiveKind, render_schema
from colrecord.schema.builder import derive_schema

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the colrecord CLI."""
    parser = argparse.ArgumentParser(
        prog="colrecord",
        description="colrecord: columnar schemas and values for annotated record types",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a configuration file (default: ./.colrecord.yaml if present)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at DEBUG level regardless of the configured log level",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # schema subcommand
    schema_parser = subparsers.add_parser(
        "schema",
        help="Print the schema derived from a record type",
        description="Import a record type and print the columnar schema derived from its field directives.",
    )
    schema_parser.add_argument(
        "target",
        help="Record type to describe, as MODULE:TYPE (e.g. myapp.records:Person)",
    )
    schema_parser.add_argument(
        "--format",
        choices=SCHEMA_FORMATS,
        default=None,
        help="Output format (default: from config, else orc)",
    )

    # kinds subcommand
    subparsers.add_parser(
        "kinds",
        help="List the primitive kinds and their support",
        description="List primitive kinds, the native types inferred to them, and what supports them.",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Load configuration, set up logging and run the subcommand."""
    try:
        config = load_config(Path(args.config)) if args.config else find_config(Path.cwd())
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    _configure_logging(config, verbose=args.verbose)

    if args.command == "schema":
        return _cmd_schema(args, config)
    if args.command == "kinds":
        return _cmd_kinds()
    return 0


def _configure_logging(config: ColrecordConfig, *, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.log_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _cmd_schema(args: argparse.Namespace, config: ColrecordConfig) -> int:
    """Handle the schema subcommand."""
    try:
        record_type = _import_record_type(args.target)
    except Exception as exc:
        print(f"Error: cannot load '{args.target}': {exc}", file=sys.stderr)
        return 1

    try:
        schema = derive_schema(record_type)
    except ColrecordError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    schema_format = args.format or config.schema_format
    if schema_format == "arrow":
        from colrecord.arrow import arrow_schema

        print(arrow_schema(schema))
    else:
        print(render_schema(schema))
    return 0


def _cmd_kinds() -> int:
    """Handle the kinds subcommand."""
    print(f"{'KIND':<20} {'SCHEMA':<7} {'VALUES':<7} NATIVE TYPES")
    for kind in PrimitiveKind:
        if kind is PrimitiveKind.UNKNOWN:
            continue
        natives = ", ".join(_type_name(t) for t in native_types(kind)) or "-"
        in_schema = "yes" if kind in SCHEMA_KINDS else "no"
        in_values = "yes" if kind in MATERIALIZABLE_KINDS else "no"
        print(f"{kind.value:<20} {in_schema:<7} {in_values:<7} {natives}")
    return 0


def _import_record_type(target: str) -> type:
    """Resolve a ``MODULE:TYPE`` reference to a class."""
    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError("expected MODULE:TYPE")
    obj: object = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    if not isinstance(obj, type):
        raise ValueError(f"{qualname} is not a class")
    return obj


def _type_name(native: type) -> str:
    if native.__module__ == "builtins":
        return native.__qualname__
    return f"{native.__module__}.{native.__qualname__}"
