import io

import pytest

from pg_typegen.typegen.models import ColumnDescriptor, EnumEntry


def col(schema, table, column, type_, udt, nullable=False, default=None):
    return ColumnDescriptor(
        schema=schema,
        table=table,
        column=column,
        nullable=nullable,
        default=default,
        type=type_,
        udt=udt,
    )


ENUMS = [
    EnumEntry("identity_provider", "google"),
    EnumEntry("identity_provider", "facebook"),
    EnumEntry("identity_provider", "linkedin"),
]

USER_COLUMNS = [
    col("public", "user", "int", "integer", "int4", default="nextval('user_int_seq'::regclass)"),
    col("public", "user", "provider", "USER-DEFINED", "identity_provider"),
    col("public", "user", "provider_null", "USER-DEFINED", "identity_provider", nullable=True),
    col("public", "user", "provider_array", "ARRAY", "_identity_provider"),
    col("public", "user", "int_array", "ARRAY", "_int4"),
    col("public", "user", "short_id", "text", "text"),
    col("public", "user", "decimal", "numeric", "numeric"),
    col("public", "user", "decimal_array", "ARRAY", "_numeric"),
    col("public", "user", "double", "double precision", "float8"),
    col("public", "user", "double_array", "ARRAY", "_float8"),
    col("public", "user", "float", "real", "float4"),
    col("public", "user", "float_array", "ARRAY", "_float4"),
    col("public", "user", "money", "money", "money"),
    col("public", "user", "bigint", "bigint", "int8"),
    col("public", "user", "binary", "bytea", "bytea"),
    col("public", "user", "binary_null", "bytea", "bytea", nullable=True),
    col("public", "user", "binary_array", "ARRAY", "_bytea"),
    col("public", "user", "uuid", "uuid", "uuid"),
    col("public", "user", "uuid_null", "uuid", "uuid", nullable=True),
    col("public", "user", "uuid_array", "ARRAY", "_uuid"),
    col("public", "user", "text", "text", "text"),
    col("public", "user", "text_null", "text", "text", nullable=True),
    col("public", "user", "text_array", "ARRAY", "_text"),
    col("public", "user", "citext", "USER-DEFINED", "citext"),
    col("public", "user", "citext_null", "USER-DEFINED", "citext", nullable=True),
    col("public", "user", "citext_array", "ARRAY", "_citext"),
    col("public", "user", "char", "character", "bpchar"),
    col("public", "user", "varchar", "character varying", "varchar"),
    col("public", "user", "bool", "boolean", "bool"),
    col("public", "user", "bool_null", "boolean", "bool", nullable=True),
    col("public", "user", "bool_array", "ARRAY", "_bool"),
    col("public", "user", "jsonb_object", "jsonb", "jsonb", default="'{}'::jsonb"),
    col("public", "user", "jsonb_object_null", "jsonb", "jsonb", nullable=True, default="'{}'::jsonb"),
    col("public", "user", "jsonb_array", "jsonb", "jsonb", default="'[]'::jsonb"),
    col("public", "user", "jsonb_array_null", "jsonb", "jsonb", nullable=True, default="'[]'::jsonb"),
    col("public", "user", "timestamp", "timestamp with time zone", "timestamptz"),
    col("public", "user", "timestamp_null", "timestamp with time zone", "timestamptz", nullable=True),
    col("public", "user", "time", "time without time zone", "time"),
    col("public", "user", "time_null", "time without time zone", "time", nullable=True),
    col("public", "user", "time_array", "ARRAY", "_time"),
    col("public", "user", "interval", "interval", "interval"),
    col("public", "user", "display name", "text", "text", nullable=True),
    col("public", "user", "1invalidIdentifierName", "text", "text", nullable=True),
    col("public", "user", 'name with a "', "text", "text", nullable=True),
]

LOGIN_COLUMNS = [
    col("public", "login", "secret", "integer", "int4", default="nextval('login_secret_seq'::regclass)"),
]

MESSAGES_COLUMNS = [
    col("log", "messages", "int", "integer", "int4", default="nextval('log.messages_int_seq'::regclass)"),
    col("log", "messages", "notes", "text", "text", nullable=True),
    col("log", "messages", "timestamp", "timestamp with time zone", "timestamptz"),
]

SECRET_COLUMNS = [
    col("secret", "secret", "int", "integer", "int4", default="nextval('secret.secret_int_seq'::regclass)"),
    col("secret", "secret", "notes", "text", "text", nullable=True),
    col("secret", "secret", "timestamp", "timestamp with time zone", "timestamptz"),
]

ALL_COLUMNS = USER_COLUMNS + LOGIN_COLUMNS + MESSAGES_COLUMNS + SECRET_COLUMNS


class FakeCatalog:
    """In-memory catalog filtering and ordering rows like the SQL queries do."""

    def __init__(self, enums=None, columns=None, fail_on=None, error=None):
        self.enums = list(ENUMS if enums is None else enums)
        self.columns = list(ALL_COLUMNS if columns is None else columns)
        self.fail_on = fail_on
        self.error = error or RuntimeError("connection lost")
        self.close_count = 0
        self.schema_filters = []

    async def fetch_enums(self):
        if self.fail_on == "enums":
            raise self.error
        return list(self.enums)

    async def fetch_columns(self, schema_filter):
        self.schema_filters.append(schema_filter)
        if self.fail_on == "columns":
            raise self.error
        rows = [
            c
            for c in self.columns
            if c.schema in schema_filter.include
            and c.schema not in schema_filter.exclude
            and c.table not in schema_filter.tables
        ]
        # Stable sort keeps ordinal order within a table
        return sorted(rows, key=lambda c: (c.schema, c.table))

    async def close(self):
        self.close_count += 1


class CapturedOutput(io.StringIO):
    """A text stream that remembers its content when closed."""

    def __init__(self):
        super().__init__()
        self.value = None
        self.close_count = 0

    def close(self):
        self.close_count += 1
        if not self.closed:
            self.value = self.getvalue()
        super().close()

    def lines(self):
        return [line.strip() for line in (self.value or "").split("\n")]


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
def output():
    return CapturedOutput()
