"""
Catalog reader - fetches enum and column metadata from PostgreSQL.

Both queries return rows in a deterministic order: enum members by type
name then declared sort order, columns by schema, table and ordinal
position.
"""

from __future__ import annotations

import logging
from typing import Any, Final, Protocol, Sequence

import psycopg
from psycopg import AsyncConnection
from psycopg.rows import dict_row

from ..shared import CatalogError
from .models import ColumnDescriptor, EnumEntry
from .options import SchemaFilter

logger = logging.getLogger(__name__)

ENUMS_QUERY: Final[str] = """
    SELECT t.typname AS key, e.enumlabel AS value
    FROM pg_catalog.pg_type t
    JOIN pg_catalog.pg_enum e ON e.enumtypid = t.oid
    ORDER BY t.typname, e.enumsortorder
"""

COLUMNS_QUERY: Final[str] = """
    SELECT
        table_schema AS "schema",
        table_name AS "table",
        column_name AS "column",
        (is_nullable = 'YES') AS nullable,
        column_default AS "default",
        data_type AS "type",
        udt_name AS udt
    FROM information_schema.columns
    WHERE table_schema = ANY(%(include)s::text[])
      AND NOT (table_schema = ANY(%(exclude)s::text[]))
      AND NOT (table_name = ANY(%(tables)s::text[]))
    ORDER BY table_schema, table_name, ordinal_position
"""


class CatalogSource(Protocol):
    """Anything that can list enum members and columns, then be released."""

    async def fetch_enums(self) -> list[EnumEntry]: ...

    async def fetch_columns(self, schema_filter: SchemaFilter) -> list[ColumnDescriptor]: ...

    async def close(self) -> None: ...


class PostgresCatalog:
    """Catalog reader over a psycopg async connection.

    The catalog owns the connection: :meth:`close` releases it, and is safe
    to call more than once.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn
        self._closed = False

    @classmethod
    async def connect(cls, conninfo: str) -> PostgresCatalog:
        """Open a dedicated read-only session for catalog queries."""
        try:
            conn = await AsyncConnection.connect(
                conninfo,
                autocommit=True,
                row_factory=dict_row,
            )
        except psycopg.Error as e:
            raise CatalogError("connect", e) from e
        logger.debug("Catalog connection established")
        return cls(conn)

    async def _fetch(
        self,
        name: str,
        query: str,
        params: dict[str, Any] | None = None,
    ) -> Sequence[dict[str, Any]]:
        try:
            async with self._conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(query, params)
                rows = await cur.fetchall()
        except psycopg.Error as e:
            logger.error(f"Catalog query '{name}' failed: {e}")
            raise CatalogError(name, e) from e

        logger.debug(f"Fetched {len(rows)} {name} row(s)")
        return rows

    async def fetch_enums(self) -> list[EnumEntry]:
        rows = await self._fetch("enum types", ENUMS_QUERY)
        return [EnumEntry(key=row["key"], value=row["value"]) for row in rows]

    async def fetch_columns(self, schema_filter: SchemaFilter) -> list[ColumnDescriptor]:
        params = {
            "include": list(schema_filter.include),
            "exclude": list(schema_filter.exclude),
            "tables": list(schema_filter.tables),
        }
        rows = await self._fetch("columns", COLUMNS_QUERY, params)
        return [
            ColumnDescriptor(
                schema=row["schema"],
                table=row["table"],
                column=row["column"],
                nullable=bool(row["nullable"]),
                default=row["default"],
                type=row["type"],
                udt=row["udt"],
            )
            for row in rows
        ]

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._conn.close()
        logger.debug("Catalog connection closed")
