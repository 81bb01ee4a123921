"""Generator options and the schema/table filter."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Final, Mapping, Sequence, TextIO, Union

from ..shared import OptionsError
from .models import DEFAULT_SCHEMA, ColumnDescriptor
from .overrides import OverrideMap

EXCLUDE_PREFIX: Final[str] = "!"

OutputTarget = Union[str, os.PathLike, TextIO]


def split_list(value: str | Sequence[str] | None, option: str) -> list[str] | None:
    """Accept either a list or a comma separated string of names."""
    if value is None:
        return None
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value]
    raise OptionsError(
        f"expected a list or a comma separated string, got {type(value).__name__}",
        option=option,
    )


@dataclass(frozen=True, slots=True)
class SchemaFilter:
    """The schemas and tables selected for generation.

    A schema listed both as included and excluded is excluded.
    """

    include: tuple[str, ...]
    exclude: tuple[str, ...] = ()
    tables: tuple[str, ...] = ()

    @classmethod
    def from_lists(
        cls,
        schema: Sequence[str],
        exclude_tables: Sequence[str] = (),
    ) -> SchemaFilter:
        include: list[str] = []
        exclude: list[str] = []
        for entry in schema:
            if entry.startswith(EXCLUDE_PREFIX):
                exclude.append(entry[len(EXCLUDE_PREFIX):])
            else:
                include.append(entry)
        return cls(
            include=tuple(include),
            exclude=tuple(exclude),
            tables=tuple(exclude_tables),
        )

    def accepts(self, column: ColumnDescriptor) -> bool:
        return (
            column.schema in self.include
            and column.schema not in self.exclude
            and column.table not in self.tables
        )

    def apply(self, columns: Sequence[ColumnDescriptor]) -> list[ColumnDescriptor]:
        return [column for column in columns if self.accepts(column)]


@dataclass
class GeneratorOptions:
    """Options controlling a single generation pass.

    ``overrides`` and ``type_overrides`` accept plain mappings whose values
    are strings or callables; they are normalised into :class:`OverrideMap`
    instances on construction. ``schema`` and ``exclude`` accept a list or a
    comma separated string.
    """

    output: OutputTarget | None = None
    overrides: Mapping[str, Any] | OverrideMap = field(default_factory=OverrideMap)
    type_overrides: Mapping[str, Any] | OverrideMap = field(default_factory=OverrideMap)
    override_table_column_types: bool = True
    override_column_types: bool = True
    override_default_types: bool = True
    prefix: str | None = None
    suffix: str | None = None
    schema: str | Sequence[str] | None = None
    exclude: str | Sequence[str] | None = None
    tables_enum_name: str = "Table"
    tables_type_name: str = "Tables"

    def __post_init__(self) -> None:
        self.overrides = OverrideMap.from_mapping(self.overrides, "overrides")
        self.type_overrides = OverrideMap.from_mapping(
            self.type_overrides, "type_overrides"
        )
        schema = split_list(self.schema, "schema")
        self.schema = [DEFAULT_SCHEMA] if schema is None else schema
        self.exclude = split_list(self.exclude, "exclude") or []

        if self.output is not None and not _is_output_target(self.output):
            raise OptionsError(
                "expected a file path or a writable stream",
                option="output",
            )

        for name in ("tables_enum_name", "tables_type_name"):
            if not getattr(self, name):
                raise OptionsError("must be a non-empty string", option=name)

    @property
    def schema_filter(self) -> SchemaFilter:
        return SchemaFilter.from_lists(self.schema, self.exclude)

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        source: str | None = None,
    ) -> GeneratorOptions:
        """Build options from a plain mapping, e.g. a parsed options file."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise OptionsError(
                f"Unknown option(s): {', '.join(unknown)}",
                source,
            )

        for name in (
            "override_table_column_types",
            "override_column_types",
            "override_default_types",
        ):
            if name in data and not isinstance(data[name], bool):
                raise OptionsError("must be true or false", source, option=name)

        return cls(**dict(data))


def _is_output_target(value: Any) -> bool:
    if isinstance(value, (str, os.PathLike)):
        return True
    return callable(getattr(value, "write", None)) and callable(
        getattr(value, "close", None)
    )


def open_output(target: OutputTarget | None) -> TextIO:
    """Open the output destination for writing.

    Paths are opened as UTF-8 text files; streams are returned unchanged.
    """
    if target is None:
        raise OptionsError("an output file or stream is required", option="output")
    if isinstance(target, (str, os.PathLike)):
        path = Path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        return open(path, "w", encoding="utf-8", newline="\n")
    return target
