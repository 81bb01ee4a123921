"""Maps catalog storage types to TypeScript type expressions."""

from __future__ import annotations

from typing import Final, Mapping

from .models import ColumnDescriptor
from .overrides import OverrideMap

UNKNOWN_TYPE: Final[str] = "unknown"

# Type mappings from PostgreSQL storage types to TypeScript types
DEFAULT_TS_TYPES: Final[dict[str, str]] = {
    "bool": "boolean",
    "text": "string",
    "citext": "string",
    "money": "string",
    "numeric": "string",
    "int8": "string",
    "char": "string",
    "character": "string",
    "bpchar": "string",
    "varchar": "string",
    "time": "string",
    "tsquery": "string",
    "tsvector": "string",
    "uuid": "string",
    "xml": "string",
    "cidr": "string",
    "inet": "string",
    "macaddr": "string",
    "smallint": "number",
    "integer": "number",
    "int": "number",
    "int2": "number",
    "int4": "number",
    "real": "number",
    "float": "number",
    "float4": "number",
    "float8": "number",
    "date": "Date",
    "timestamp": "Date",
    "timestamptz": "Date",
    "bytea": "Buffer",
    "interval": "PostgresInterval",
}

JSON_TYPES: Final[frozenset[str]] = frozenset({"json", "jsonb"})
JSON_OBJECT_TYPE: Final[str] = "Record<string, unknown>"
JSON_ARRAY_TYPE: Final[str] = "unknown[]"


def _json_type(default: str | None) -> str:
    """Infer a JSON column's shape from its literal default, e.g. ``'{}'::jsonb``."""
    if default:
        if default.startswith("'{"):
            return JSON_OBJECT_TYPE
        if default.startswith("'["):
            return JSON_ARRAY_TYPE
    return UNKNOWN_TYPE


def base_type(column: ColumnDescriptor, enum_names: Mapping[str, str]) -> str:
    """Resolve the TypeScript type for a column's storage type.

    Args:
        column: Column descriptor from the catalog.
        enum_names: Resolved declaration names keyed by enum type name.

    Returns:
        The element type, without array or null suffixes.
    """
    udt = column.storage_type

    if udt in JSON_TYPES:
        return _json_type(column.default)

    mapped = DEFAULT_TS_TYPES.get(udt)
    if mapped is not None:
        return mapped

    enum_name = enum_names.get(udt)
    if enum_name is not None:
        return enum_name

    # Older catalogs may only carry the generic type name
    if not column.is_array:
        return DEFAULT_TS_TYPES.get(column.type.lower(), UNKNOWN_TYPE)

    return UNKNOWN_TYPE


class TypeMapper:
    """Resolves the full type expression of each column.

    The base type may be replaced by a user override, checked from most to
    least specific: ``table.column``, ``column``, then the storage type name.
    Each tier can be switched off. Array and null suffixes are appended
    afterwards, and the ``"*"`` override finally post-processes the whole
    expression.
    """

    __slots__ = (
        "_type_overrides",
        "_enum_names",
        "_table_column_types",
        "_column_types",
        "_default_types",
    )

    def __init__(
        self,
        type_overrides: OverrideMap,
        enum_names: Mapping[str, str],
        *,
        table_column_types: bool = True,
        column_types: bool = True,
        default_types: bool = True,
    ) -> None:
        self._type_overrides = type_overrides
        self._enum_names = dict(enum_names)
        self._table_column_types = table_column_types
        self._column_types = column_types
        self._default_types = default_types

    def override_type(self, column: ColumnDescriptor) -> str | None:
        """Return the user-supplied type for a column, if any tier matches."""
        tiers = (
            (self._table_column_types, f"{column.table}.{column.column}"),
            (self._column_types, column.column),
            (self._default_types, column.storage_type),
        )
        for enabled, key in tiers:
            if not enabled:
                continue
            override = self._type_overrides.get(key)
            if override is None:
                continue
            result = override.apply(column)
            if result is not None:
                return result
        return None

    def post_process(self, column: ColumnDescriptor, type_expr: str) -> str:
        wildcard = self._type_overrides.wildcard
        if wildcard is None:
            return type_expr
        result = wildcard.apply(column, type_expr)
        return type_expr if result is None else result

    def column_type(self, column: ColumnDescriptor) -> str:
        type_expr = self.override_type(column)
        if type_expr is None:
            type_expr = base_type(column, self._enum_names)

        if column.is_array:
            type_expr += "[]"
        if column.nullable:
            type_expr += " | null"

        return self.post_process(column, type_expr)
