"""Renders resolved enums and tables as TypeScript declarations."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Sequence, TextIO

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from ..shared import quote
from .models import EnumSpec, TableSpec

# Template configuration
TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"
TYPES_TEMPLATE: Final[str] = "types.ts.j2"


@dataclass
class GeneratorContext:
    """Context for code generation with cached resources."""

    template_env: Environment = field(init=False)
    _types_template: Template = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
        )
        self.template_env.filters["quote"] = quote
        self._types_template = self.template_env.get_template(TYPES_TEMPLATE)

    @property
    def types_template(self) -> Template:
        return self._types_template


def write_types(
    output: TextIO,
    ctx: GeneratorContext,
    *,
    enums: Sequence[EnumSpec],
    tables: Sequence[TableSpec],
    prefix: str | None = None,
    suffix: str | None = None,
    tables_enum_name: str = "Table",
    tables_type_name: str = "Tables",
) -> None:
    """Stream the rendered declarations into ``output`` chunk by chunk."""
    chunks = ctx.types_template.generate(
        enums=enums,
        tables=tables,
        prefix=prefix,
        suffix=suffix,
        tables_enum_name=tables_enum_name,
        tables_type_name=tables_type_name,
    )
    for chunk in chunks:
        output.write(chunk)
