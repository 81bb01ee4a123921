import io
from pathlib import Path

import pytest

from conftest import col
from pg_typegen.shared.errors import OptionsError
from pg_typegen.typegen.options import (
    GeneratorOptions,
    SchemaFilter,
    open_output,
    split_list,
)
from pg_typegen.typegen.overrides import Literal, OverrideMap


class TestSplitList:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, None),
            ("public", ["public"]),
            ("public, log ,!secret", ["public", "log", "!secret"]),
            ("a,,b,", ["a", "b"]),
            (["public", "log"], ["public", "log"]),
            (("migration",), ["migration"]),
        ],
    )
    def test_split_list(self, value, expected):
        assert split_list(value, "schema") == expected

    def test_invalid_type(self):
        with pytest.raises(OptionsError, match="Option 'exclude'"):
            split_list(42, "exclude")


class TestSchemaFilter:
    def test_partition(self):
        f = SchemaFilter.from_lists(["public", "log", "!secret"], ["login"])
        assert f.include == ("public", "log")
        assert f.exclude == ("secret",)
        assert f.tables == ("login",)

    def test_exclusion_wins(self):
        f = SchemaFilter.from_lists(["secret", "!secret"])
        assert not f.accepts(col("secret", "secret", "id", "integer", "int4"))

    def test_excluded_table_in_any_schema(self):
        f = SchemaFilter.from_lists(["public", "log"], ["messages"])
        assert not f.accepts(col("log", "messages", "id", "integer", "int4"))
        assert not f.accepts(col("public", "messages", "id", "integer", "int4"))
        assert f.accepts(col("public", "user", "id", "integer", "int4"))

    def test_only_exclusions_select_nothing(self):
        f = SchemaFilter.from_lists(["!secret"])
        assert f.apply([col("public", "user", "id", "integer", "int4")]) == []


class TestGeneratorOptions:
    def test_defaults(self):
        options = GeneratorOptions()
        assert options.schema == ["public"]
        assert options.exclude == []
        assert options.tables_enum_name == "Table"
        assert options.tables_type_name == "Tables"
        assert options.override_table_column_types is True
        assert isinstance(options.overrides, OverrideMap)

    @pytest.mark.parametrize("schema", [[], ""])
    def test_explicit_empty_schema_is_kept(self, schema):
        options = GeneratorOptions(schema=schema)
        assert options.schema == []
        assert options.schema_filter.include == ()

    def test_overrides_are_tagged(self):
        options = GeneratorOptions(overrides={"user": "Account"}, type_overrides={"*": lambda x, t: t})
        assert options.overrides.get("user") == Literal("Account")
        assert options.type_overrides.wildcard is not None

    def test_comma_separated_strings(self):
        options = GeneratorOptions(schema="public, log", exclude="migration,migration_lock")
        assert options.schema == ["public", "log"]
        assert options.exclude == ["migration", "migration_lock"]
        assert options.schema_filter.tables == ("migration", "migration_lock")

    def test_invalid_output(self):
        with pytest.raises(OptionsError, match="output"):
            GeneratorOptions(output=42)

    def test_empty_registry_name(self):
        with pytest.raises(OptionsError, match="tables_enum_name"):
            GeneratorOptions(tables_enum_name="")

    def test_from_mapping(self):
        options = GeneratorOptions.from_mapping(
            {"output": "db.ts", "schema": ["public"], "override_column_types": False}
        )
        assert options.output == "db.ts"
        assert options.override_column_types is False

    def test_from_mapping_unknown_key(self):
        with pytest.raises(OptionsError) as exc_info:
            GeneratorOptions.from_mapping({"outptu": "db.ts"}, "typegen.yaml")
        assert str(exc_info.value) == "[typegen.yaml] Unknown option(s): outptu"

    def test_from_mapping_non_bool_flag(self):
        with pytest.raises(OptionsError, match="override_default_types"):
            GeneratorOptions.from_mapping({"override_default_types": "no"})

    def test_from_mapping_non_string_override(self):
        with pytest.raises(OptionsError, match="overrides"):
            GeneratorOptions.from_mapping({"overrides": {"user": 1}})


class TestOpenOutput:
    def test_stream_returned_unchanged(self):
        stream = io.StringIO()
        assert open_output(stream) is stream

    def test_path_opened_for_writing(self, tmp_path):
        target = tmp_path / "nested" / "db.ts"
        with open_output(str(target)) as handle:
            handle.write("x")
        assert Path(target).read_text(encoding="utf-8") == "x"

    def test_missing(self):
        with pytest.raises(OptionsError, match="output"):
            open_output(None)
