"""
Override maps and name resolution.

An override map is keyed by exact names (``"table"``, ``"table.column"``,
``"type_name"``) or the ``"*"`` wildcard. Each entry is either a
:class:`Literal` used verbatim or a :class:`Resolver` wrapping a callable.
Entries are tagged once, when the map is built, so resolution never has to
inspect the raw values again.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Final, Mapping

from ..shared import OptionsError, enum_member_name, to_pascal_case
from .models import DEFAULT_SCHEMA, ColumnDescriptor, EnumEntry

WILDCARD: Final[str] = "*"

# Name categories resolvable for a column descriptor
NAME_CATEGORIES: Final[frozenset[str]] = frozenset({"table", "schema", "column"})


@dataclass(frozen=True, slots=True)
class Literal:
    """An override whose value is used as-is."""

    value: str

    def apply(self, *args: Any) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Resolver:
    """An override computed by a callable; ``None`` means "no opinion"."""

    func: Callable[..., str | None]

    def apply(self, *args: Any) -> str | None:
        return self.func(*args)


Override = Literal | Resolver


def to_override(value: Any, option: str = "overrides", key: str | None = None) -> Override:
    """Tag a raw override value.

    Raises:
        OptionsError: If the value is neither a string nor a callable.
    """
    if isinstance(value, (Literal, Resolver)):
        return value
    if isinstance(value, str):
        return Literal(value)
    if callable(value):
        return Resolver(value)
    where = f"{option}[{key!r}]" if key is not None else option
    raise OptionsError(
        f"expected a string or a callable, got {type(value).__name__}",
        option=where,
    )


class OverrideMap:
    """Immutable mapping of override keys to tagged overrides."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, Override] | None = None) -> None:
        self._entries: dict[str, Override] = dict(entries or {})

    @classmethod
    def from_mapping(
        cls,
        raw: Mapping[str, Any] | OverrideMap | None,
        option: str = "overrides",
    ) -> OverrideMap:
        if raw is None:
            return cls()
        if isinstance(raw, OverrideMap):
            return raw
        if not isinstance(raw, Mapping):
            raise OptionsError("expected a mapping", option=option)
        return cls(
            {str(key): to_override(value, option, str(key)) for key, value in raw.items()}
        )

    def get(self, key: str) -> Override | None:
        return self._entries.get(key)

    @property
    def wildcard(self) -> Override | None:
        return self._entries.get(WILDCARD)


class NameResolver:
    """Derives emitted identifiers for enums, schemas, tables and columns.

    For a column descriptor the candidates are tried from most to least
    specific (``table.column``, ``column``, then the raw table or schema
    name), falling back to the default naming rule. The wildcard override
    always runs last and may replace the result.
    """

    __slots__ = ("_overrides",)

    def __init__(self, overrides: OverrideMap) -> None:
        self._overrides = overrides

    def _candidate_keys(self, column: ColumnDescriptor, category: str) -> tuple[str, ...]:
        if category == "column":
            return (f"{column.table}.{column.column}", column.column)
        return (getattr(column, category),)

    @staticmethod
    def default_name(column: ColumnDescriptor, category: str) -> str:
        """Apply the default naming rule for a category."""
        if category == "table":
            return to_pascal_case(column.table)
        if category == "schema":
            if column.schema == DEFAULT_SCHEMA:
                return ""
            return to_pascal_case(column.schema)
        # Columns mirror the stored field names exactly
        return column.column

    def resolve(self, column: ColumnDescriptor, category: str) -> str:
        """Resolve the emitted name of ``category`` for a column descriptor."""
        if category not in NAME_CATEGORIES:
            raise ValueError(f"Unknown name category: {category!r}")

        raw_value = getattr(column, category)
        name: str | None = None
        for key in self._candidate_keys(column, category):
            override = self._overrides.get(key)
            if override is None:
                continue
            name = override.apply(column, category, raw_value)
            if name is not None:
                break

        if name is None:
            name = self.default_name(column, category)

        wildcard = self._overrides.wildcard
        if wildcard is not None:
            final = wildcard.apply(column, category, name)
            if final is not None:
                name = final

        return name

    def type_name(self, column: ColumnDescriptor) -> str:
        """Composite record type name: resolved schema followed by resolved table."""
        return self.resolve(column, "schema") + self.resolve(column, "table")

    def enum_name(self, entry: EnumEntry) -> str:
        default = to_pascal_case(entry.key)
        override = self._overrides.get(entry.key)
        if override is None:
            return default
        name = override.apply(entry, "enum", default)
        return default if name is None else name

    def member_name(self, entry: EnumEntry) -> str:
        default = enum_member_name(entry.value)
        override = self._overrides.get(f"{entry.key}.{entry.value}")
        if override is None:
            return default
        name = override.apply(entry, "enum_member", default)
        return default if name is None else name
