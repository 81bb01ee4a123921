"""Catalog rows and the view models rendered into the output."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_SCHEMA = "public"


@dataclass(frozen=True, slots=True)
class EnumEntry:
    """One member label of a database enum type."""

    key: str
    value: str


@dataclass(frozen=True, slots=True)
class ColumnDescriptor:
    """Represents a database column as reported by the catalog."""

    schema: str
    table: str
    column: str
    nullable: bool
    default: str | None
    type: str
    udt: str

    @property
    def is_array(self) -> bool:
        return self.type == "ARRAY"

    @property
    def storage_type(self) -> str:
        """The element storage type, without the array underscore prefix."""
        return self.udt[1:] if self.is_array else self.udt

    @property
    def table_ref(self) -> tuple[str, str]:
        return (self.schema, self.table)

    @property
    def runtime_name(self) -> str:
        """The table name as used at runtime, schema-qualified when not public."""
        if self.schema == DEFAULT_SCHEMA:
            return self.table
        return f"{self.schema}.{self.table}"


@dataclass(frozen=True, slots=True)
class EnumMember:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class EnumSpec:
    """Specification for a generated enum declaration."""

    key: str
    name: str
    members: tuple[EnumMember, ...]


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    """A resolved record property: emitted key and type expression."""

    name: str
    property: str
    type: str


@dataclass(frozen=True, slots=True)
class TableSpec:
    """Specification for a generated table record type."""

    schema: str
    table: str
    type_name: str
    runtime_name: str
    columns: tuple[ColumnSpec, ...] = field(default=())
