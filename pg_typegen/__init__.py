"""
pg-typegen

Generates TypeScript definitions (record types, enums and a table registry)
from a PostgreSQL database schema.
"""

from pg_typegen.typegen import (
    ColumnDescriptor,
    EnumEntry,
    GeneratorOptions,
    Literal,
    Resolver,
    generate,
    update_types,
)

__version__ = "0.5.0"

__all__ = [
    "ColumnDescriptor",
    "EnumEntry",
    "GeneratorOptions",
    "Literal",
    "Resolver",
    "generate",
    "update_types",
]
