"""
Type Generator - Generates TypeScript definitions from a PostgreSQL schema.

A generation pass reads enum types and columns from the database catalog,
resolves emitted names and types (applying any user overrides), and writes:

- one enum per database enum type
- an enum and a lookup type listing every generated table
- one record type per table, columns in definition order
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from ..shared import (
    OptionsError,
    TypegenError,
    find_options_file,
    load_options_file,
    sanitize_property_name,
)
from .catalog import CatalogSource, PostgresCatalog
from .emitter import GeneratorContext, write_types
from .models import (
    ColumnDescriptor,
    ColumnSpec,
    EnumEntry,
    EnumMember,
    EnumSpec,
    TableSpec,
)
from .options import GeneratorOptions, open_output
from .overrides import NameResolver
from .type_mapper import TypeMapper

logger = logging.getLogger(__name__)

DSN_ENV_VAR = "DATABASE_URL"


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Summary of a completed generation pass."""

    enums: tuple[EnumSpec, ...]
    tables: tuple[TableSpec, ...]


def _build_enums(entries: Sequence[EnumEntry], resolver: NameResolver) -> list[EnumSpec]:
    """Group enum members by type name, keeping first-appearance order."""
    grouped: dict[str, list[EnumEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.key, []).append(entry)

    return [
        EnumSpec(
            key=key,
            name=resolver.enum_name(members[0]),
            members=tuple(
                EnumMember(name=resolver.member_name(entry), value=entry.value)
                for entry in members
            ),
        )
        for key, members in grouped.items()
    ]


def _build_tables(
    columns: Sequence[ColumnDescriptor],
    resolver: NameResolver,
    mapper: TypeMapper,
) -> list[TableSpec]:
    """Group columns by table and resolve their names and types.

    Tables keep the order in which they first appear; columns keep catalog
    order within their table.
    """
    grouped: dict[tuple[str, str], list[ColumnDescriptor]] = {}
    for column in columns:
        grouped.setdefault(column.table_ref, []).append(column)

    tables: list[TableSpec] = []
    for (schema, table), table_columns in grouped.items():
        first = table_columns[0]
        specs = []
        for column in table_columns:
            name = resolver.resolve(column, "column")
            specs.append(
                ColumnSpec(
                    name=name,
                    property=sanitize_property_name(name),
                    type=mapper.column_type(column),
                )
            )
        tables.append(
            TableSpec(
                schema=schema,
                table=table,
                type_name=resolver.type_name(first),
                runtime_name=first.runtime_name,
                columns=tuple(specs),
            )
        )
    return tables


async def collect(catalog: CatalogSource, options: GeneratorOptions) -> GenerationResult:
    """Read the catalog and resolve every enum and table declaration.

    The enum map must exist before column types are mapped, since enum
    columns are typed by their resolved enum name.
    """
    resolver = NameResolver(options.overrides)
    schema_filter = options.schema_filter
    logger.debug(
        f"Schema filter: include={list(schema_filter.include)} "
        f"exclude={list(schema_filter.exclude)} tables={list(schema_filter.tables)}"
    )

    entries = await catalog.fetch_enums()
    enums = _build_enums(entries, resolver)

    columns = schema_filter.apply(await catalog.fetch_columns(schema_filter))
    mapper = TypeMapper(
        options.type_overrides,
        {spec.key: spec.name for spec in enums},
        table_column_types=options.override_table_column_types,
        column_types=options.override_column_types,
        default_types=options.override_default_types,
    )
    tables = _build_tables(columns, resolver, mapper)
    logger.debug(f"Resolved {len(enums)} enum(s) and {len(tables)} table(s)")

    return GenerationResult(enums=tuple(enums), tables=tuple(tables))


async def inspect_catalog(
    catalog: CatalogSource,
    options: GeneratorOptions,
) -> GenerationResult:
    """Resolve declarations without writing anything, then release the catalog."""
    try:
        return await collect(catalog, options)
    finally:
        await catalog.close()


async def update_types(
    catalog: CatalogSource,
    options: GeneratorOptions,
    ctx: GeneratorContext | None = None,
) -> GenerationResult:
    """Generate TypeScript definitions from the catalog into ``options.output``.

    The output and the catalog are both released on every exit path. When an
    error is raised the output is incomplete and should be discarded.

    Args:
        catalog: Catalog reader; closed once generation finishes.
        options: Generation options.
        ctx: Optional pre-built template context.

    Returns:
        The enums and tables that were written.
    """
    output = None
    try:
        output = open_output(options.output)
        result = await collect(catalog, options)
        write_types(
            output,
            ctx or GeneratorContext(),
            enums=result.enums,
            tables=result.tables,
            prefix=options.prefix,
            suffix=options.suffix,
            tables_enum_name=options.tables_enum_name,
            tables_type_name=options.tables_type_name,
        )
    finally:
        try:
            if output is not None:
                output.close()
        finally:
            await catalog.close()

    return result


async def generate(dsn: str, options: GeneratorOptions) -> GenerationResult:
    """Connect to the database at ``dsn`` and run :func:`update_types`."""
    catalog = await PostgresCatalog.connect(dsn)
    return await update_types(catalog, options)


def build_parser(prog: str = "pg-typegen generate", with_output: bool = True) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Generate TypeScript definitions from a PostgreSQL schema",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Options file (default: typegen.yaml in the working directory)",
    )
    parser.add_argument(
        "--dsn",
        default=None,
        help=f"Database connection string (default: ${DSN_ENV_VAR})",
    )
    if with_output:
        parser.add_argument(
            "-o",
            "--output",
            default=None,
            help="Destination file for the generated definitions",
        )
        parser.add_argument("--prefix", default=None, help="Text written before the definitions")
        parser.add_argument("--suffix", default=None, help="Text written after the definitions")
    parser.add_argument(
        "--schema",
        default=None,
        help="Comma separated schemas to include; prefix with '!' to exclude",
    )
    parser.add_argument(
        "--exclude",
        default=None,
        help="Comma separated table names to leave out",
    )
    parser.add_argument("--tables-enum-name", default=None, help="Name of the tables enum")
    parser.add_argument("--tables-type-name", default=None, help="Name of the tables lookup type")
    parser.add_argument(
        "--no-table-column-types",
        dest="override_table_column_types",
        action="store_false",
        default=None,
        help="Ignore 'table.column' type overrides",
    )
    parser.add_argument(
        "--no-column-types",
        dest="override_column_types",
        action="store_false",
        default=None,
        help="Ignore 'column' type overrides",
    )
    parser.add_argument(
        "--no-default-types",
        dest="override_default_types",
        action="store_false",
        default=None,
        help="Ignore storage type overrides",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


# CLI arguments that map one-to-one onto GeneratorOptions fields
_OPTION_ARGS = (
    "output",
    "prefix",
    "suffix",
    "schema",
    "exclude",
    "tables_enum_name",
    "tables_type_name",
    "override_table_column_types",
    "override_column_types",
    "override_default_types",
)


def resolve_options(args: argparse.Namespace) -> tuple[str, GeneratorOptions]:
    """Merge the options file, command-line flags and environment.

    Command-line flags win over the options file.

    Raises:
        OptionsError: If the options are invalid or no DSN is available.
    """
    config_path = args.config if args.config is not None else find_options_file(Path.cwd())
    data: dict[str, Any] = {}
    source: str | None = None
    if config_path is not None:
        data = dict(load_options_file(config_path))
        source = str(config_path)
        logger.debug(f"Loaded options from {source}")

    file_dsn = data.pop("dsn", None)
    dsn = args.dsn or file_dsn or os.environ.get(DSN_ENV_VAR)
    if not dsn:
        raise OptionsError(
            f"no database connection string; pass --dsn or set ${DSN_ENV_VAR}",
            option="dsn",
        )

    for name in _OPTION_ARGS:
        value = getattr(args, name, None)
        if value is not None:
            data[name] = value

    return str(dsn), GeneratorOptions.from_mapping(data, source)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``generate`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        dsn, options = resolve_options(args)
        if options.output is None:
            raise OptionsError("an output file is required; pass --output", option="output")

        result = asyncio.run(generate(dsn, options))

        print(
            f"Generated {len(result.tables)} table type(s) and "
            f"{len(result.enums)} enum(s) into {options.output}"
        )
    except (TypegenError, OSError) as e:
        raise SystemExit(f"Error: {e}") from e


def tables_main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``tables`` command."""
    parser = build_parser(prog="pg-typegen tables", with_output=False)
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        dsn, options = resolve_options(args)

        async def _inspect() -> GenerationResult:
            catalog = await PostgresCatalog.connect(dsn)
            return await inspect_catalog(catalog, options)

        result = asyncio.run(_inspect())
    except (TypegenError, OSError) as e:
        raise SystemExit(f"Error: {e}") from e

    for spec in result.enums:
        print(f"enum   {spec.name} ({len(spec.members)} member(s))")
    for table in result.tables:
        print(f"table  {table.runtime_name} -> {table.type_name} ({len(table.columns)} column(s))")


if __name__ == "__main__":
    main(sys.argv[1:])
