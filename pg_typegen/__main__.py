#!/usr/bin/env python3
"""
Command-line interface for pg-typegen.

Usage:
    python -m pg_typegen <command> [options]

Commands:
    generate    Write TypeScript definitions for the database schema
    tables      List the enums and tables that would be generated

Examples:
    python -m pg_typegen generate --dsn postgresql://localhost/app -o src/db.ts
    python -m pg_typegen generate --schema public,log,!secret --exclude migration
    python -m pg_typegen tables --config typegen.yaml
"""

from __future__ import annotations

import sys


def cmd_generate(args: list[str]) -> int:
    """Generate TypeScript definitions."""
    from pg_typegen.typegen.main import main as generate_main
    try:
        generate_main(args)
        return 0
    except SystemExit as e:
        return _exit_code(e)


def cmd_tables(args: list[str]) -> int:
    """List enums and tables selected for generation."""
    from pg_typegen.typegen.main import tables_main
    try:
        tables_main(args)
        return 0
    except SystemExit as e:
        return _exit_code(e)


def _exit_code(e: SystemExit) -> int:
    if isinstance(e.code, int):
        return e.code
    if e.code:
        # argparse and the generators exit with a message
        print(e.code, file=sys.stderr)
        return 1
    return 0


COMMANDS = {
    "generate": (cmd_generate, "Write TypeScript definitions for the database schema"),
    "tables": (cmd_tables, "List the enums and tables that would be generated"),
}


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0] in ("-h", "--help"):
        print(__doc__)
        print("Available commands:")
        for name, (_, desc) in COMMANDS.items():
            print(f"  {name:12} {desc}")
        print("\nUse '<command> --help' for command-specific options.")
        return 0

    command = argv[0]
    args = argv[1:]

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"Available commands: {', '.join(COMMANDS.keys())}")
        return 1

    handler, _ = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
