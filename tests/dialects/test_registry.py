import pytest

from crudforge.core import UnknownDialectError
from crudforge.dialects import (
    BaseDialect,
    MySQLDialect,
    PostgresDialect,
    SQLServerDialect,
    available_dialects,
    get_dialect_by_name,
    register_dialect,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("SQL Server", SQLServerDialect),
        ("sqlserver", SQLServerDialect),
        ("MSSQL", SQLServerDialect),
        ("PostgreSQL", PostgresDialect),
        ("postgres", PostgresDialect),
        ("MariaDB", MySQLDialect),
    ],
)
def test_lookup_is_case_insensitive_with_aliases(name, expected):
    assert isinstance(get_dialect_by_name(name), expected)


def test_unknown_dialect_raises():
    with pytest.raises(UnknownDialectError):
        get_dialect_by_name("oracle")


def test_register_custom_dialect():
    class FirebirdDialect(BaseDialect):
        name = "firebird"
        identity_sql = "SELECT GEN_ID(g, 0) AS id FROM RDB$DATABASE"

    register_dialect(FirebirdDialect(), aliases=("fb",))
    assert "firebird" in available_dialects()
    assert get_dialect_by_name("FB").name == "firebird"
