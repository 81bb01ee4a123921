"""Type Generator - Generates TypeScript definitions from a PostgreSQL schema."""

from .catalog import CatalogSource, PostgresCatalog
from .emitter import GeneratorContext
from .main import (
    GenerationResult,
    generate,
    inspect_catalog,
    update_types,
)
from .models import ColumnDescriptor, EnumEntry
from .options import GeneratorOptions, SchemaFilter
from .overrides import Literal, NameResolver, OverrideMap, Resolver
from .type_mapper import DEFAULT_TS_TYPES, TypeMapper

__all__ = [
    "CatalogSource",
    "PostgresCatalog",
    "GeneratorContext",
    "GenerationResult",
    "generate",
    "inspect_catalog",
    "update_types",
    "ColumnDescriptor",
    "EnumEntry",
    "GeneratorOptions",
    "SchemaFilter",
    "Literal",
    "NameResolver",
    "OverrideMap",
    "Resolver",
    "DEFAULT_TS_TYPES",
    "TypeMapper",
]
