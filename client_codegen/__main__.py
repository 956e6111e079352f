#!/usr/bin/env python3
"""
Client generator CLI.

Usage:
    python -m client_codegen <command> [options]

Commands:
    generate    Generate client modules from an API document
    resolve     Resolve one inline schema and print its type expression
    clean       Remove generated client modules

Examples:
    python -m client_codegen generate petstore.yaml --out-dir src/api
    python -m client_codegen generate https://petstore.swagger.io/v2/swagger.json --language js
    python -m client_codegen resolve '{"type": "array", "items": {"$ref": "#/definitions/Pet"}}'
    python -m client_codegen clean src/api --dry-run
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

import yaml

from client_codegen.shared.errors import SchemaError
from client_codegen.type_resolver import ResolutionMode, ResolverConfig, TypeResolver


def _exit_code(e: SystemExit) -> int:
    if e.code is None:
        return 0
    return e.code if isinstance(e.code, int) else 1


def cmd_generate(args: list[str]) -> int:
    """Generate client modules."""
    from client_codegen.api_codegen import main as generator
    try:
        generator.main(args)
        return 0
    except SystemExit as e:
        return _exit_code(e)


def cmd_resolve(args: list[str]) -> int:
    """Resolve one schema node."""
    parser = argparse.ArgumentParser(
        prog="client_codegen resolve",
        description="Resolve one inline schema (JSON or YAML) to a type expression",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("schema", nargs="?", help="Inline schema text")
    source.add_argument("--file", type=Path, help="Read the schema from a file")
    parser.add_argument(
        "--types-module",
        action="store_true",
        help="Render referenced names bare, as inside the types module",
    )
    parser.add_argument("--strict", action="store_true", help="Fail on untyped array items")
    parsed = parser.parse_args(args)

    try:
        text = parsed.file.read_text(encoding="utf-8") if parsed.file else parsed.schema
        node = yaml.safe_load(text)
    except (OSError, yaml.YAMLError) as e:
        print(f"error: cannot read schema: {e}", file=sys.stderr)
        return 1

    mode = ResolutionMode.TYPES_MODULE if parsed.types_module else ResolutionMode.DEFAULT
    resolver = TypeResolver(config=ResolverConfig(strict=parsed.strict))
    try:
        type_expr = resolver.resolve(node, mode)
        doc_type = resolver.doc_type(node)
    except SchemaError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"type:     {type_expr}")
    print(f"doc type: {doc_type}")
    for declaration in resolver.enum_declarations():
        print(f"enum:     {declaration}")
    return 0


def cmd_clean(args: list[str]) -> int:
    """Remove generated modules."""
    from client_codegen import clean
    try:
        clean.main(args)
        return 0
    except SystemExit as e:
        return _exit_code(e)


COMMANDS = {
    "generate": (cmd_generate, "Generate client modules from an API document"),
    "resolve": (cmd_resolve, "Resolve one inline schema and print its type expression"),
    "clean": (cmd_clean, "Remove generated client modules"),
}


def main(argv: Sequence[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] in ("-h", "--help"):
        print(__doc__)
        print("Available commands:")
        for name, (_, desc) in COMMANDS.items():
            print(f"  {name:12} {desc}")
        print("\nUse '<command> --help' for command-specific options.")
        return 0

    command, args = argv[0], argv[1:]
    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"Available commands: {', '.join(COMMANDS.keys())}")
        return 1

    handler, _ = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
