import pytest

from crudforge.config import CrudConfig
from crudforge.core import DialectUnsupportedError, IntegerField, Model, StringField
from crudforge.dialects import (
    PAGED_LIST_PLACEHOLDERS,
    BaseDialect,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
    SQLServerDialect,
)
from crudforge.metadata import MetadataCache
from crudforge.query import StatementBuilder

PAGE_VALUES = {
    "SelectColumns": "[Id], [Name]",
    "TableName": "[Users]",
    "WhereClause": " WHERE [Age] > 18",
    "OrderBy": "[Id]",
    "PageNumber": "2",
    "RowsPerPage": "10",
    "Offset": "10",
}


class Gadget(Model):
    id = IntegerField(primary_key=True)
    name = StringField()


class NoPagingDialect(BaseDialect):
    name = "nopaging"
    identity_sql = "SELECT 1 AS id"


def test_quote_formats():
    assert SQLServerDialect().quote_identifier("Name") == "[Name]"
    assert MySQLDialect().quote_identifier("Name") == "`Name`"
    assert PostgresDialect().quote_identifier("Name") == '"Name"'
    assert SQLiteDialect().quote_identifier("Name") == '"Name"'


def test_quote_identifier_escapes_closing_character():
    assert SQLServerDialect().quote_identifier("odd]name") == "[odd]]name]"
    assert PostgresDialect().quote_identifier('say "hi"') == '"say ""hi"""'


def test_identity_sql_per_family():
    assert "SCOPE_IDENTITY()" in SQLServerDialect().identity_sql
    assert PostgresDialect().identity_sql == "SELECT LASTVAL() AS id"
    assert SQLiteDialect().identity_sql == "SELECT LAST_INSERT_ROWID() AS id"
    assert MySQLDialect().identity_sql == "SELECT LAST_INSERT_ID() AS id"


def test_parameter_placeholders_follow_paramstyle():
    assert SQLiteDialect().parameter_placeholder("age") == ":age"
    assert PostgresDialect().parameter_placeholder("age") == "%(age)s"
    assert SQLServerDialect().parameter_placeholder("age") == "%(age)s"


def test_unknown_paramstyle_is_rejected():
    class QmarkDialect(BaseDialect):
        name = "qmark"
        param_style = "qmark"

    with pytest.raises(DialectUnsupportedError):
        QmarkDialect().parameter_placeholder("age")


def test_sqlserver_paging_uses_row_number_window():
    sql = SQLServerDialect().render_paged_list(PAGE_VALUES)
    assert sql == (
        "SELECT * FROM (SELECT ROW_NUMBER() OVER(ORDER BY [Id]) AS PagedNumber, [Id], [Name] "
        "FROM [Users] WHERE [Age] > 18) AS u WHERE PagedNumber BETWEEN ((2-1) * 10 + 1) "
        "AND (2 * 10)"
    )


def test_offset_family_paging():
    values = dict(PAGE_VALUES, SelectColumns='"Id", "Name"', TableName='"Users"', OrderBy='"Id"')
    expected = (
        'SELECT "Id", "Name" FROM "Users" WHERE [Age] > 18 ORDER BY "Id" LIMIT 10 OFFSET 10'
    )
    assert PostgresDialect().render_paged_list(values) == expected
    assert SQLiteDialect().render_paged_list(values) == expected
    assert MySQLDialect().render_paged_list(values).endswith("LIMIT 10,10")


def test_every_template_uses_only_known_placeholders():
    import re

    for dialect in (SQLServerDialect(), PostgresDialect(), SQLiteDialect(), MySQLDialect()):
        names = set(re.findall(r"\{(\w+)\}", dialect.paged_list_sql))
        assert names <= set(PAGED_LIST_PLACEHOLDERS)


def test_substitution_does_not_rescan_inserted_text():
    values = dict(PAGE_VALUES, WhereClause=" WHERE [Note] = '{OrderBy}'")
    sql = PostgresDialect().render_paged_list(values)
    assert "'{OrderBy}'" in sql


def test_missing_paging_template_is_unsupported():
    dialect = NoPagingDialect()
    assert dialect.supports_paging is False
    with pytest.raises(DialectUnsupportedError):
        dialect.render_paged_list(PAGE_VALUES)


class BracketPostgres(PostgresDialect):
    param_style = "named"
    quote_format = "[{0}]"


def test_profiles_compare_by_rendering_attributes():
    assert SQLiteDialect() == SQLiteDialect()
    assert hash(SQLiteDialect()) == hash(SQLiteDialect())
    assert SQLiteDialect() != PostgresDialect()
    assert BracketPostgres().name == PostgresDialect().name
    assert BracketPostgres() != PostgresDialect()


def test_same_name_profile_renders_its_own_fragments():
    cache = MetadataCache()
    stock = StatementBuilder(CrudConfig.for_dialect(PostgresDialect()), cache)
    custom = StatementBuilder(CrudConfig.for_dialect(BracketPostgres()), cache)

    assert stock.update(Gadget(id=1, name="a")).sql == (
        'UPDATE "Gadget" SET "name" = %(name)s WHERE "id" = %(id)s'
    )
    assert custom.update(Gadget(id=1, name="a")).sql == (
        "UPDATE [Gadget] SET [name] = :name WHERE [id] = :id"
    )
