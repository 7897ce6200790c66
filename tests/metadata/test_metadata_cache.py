import dataclasses

import pytest

from crudforge.config import CrudConfig
from crudforge.core import IntegerField, MissingIdentityError, Model, StringField
from crudforge.core.naming import SnakeCaseTableNameResolver
from crudforge.metadata import MetadataCache


class CachedUser(Model):
    id = IntegerField(primary_key=True)
    full_name = StringField()


class Keyless(Model):
    label = StringField()


@dataclasses.dataclass
class NameFilter:
    full_name: str


def test_subsets_are_computed_once():
    cache = MetadataCache()
    first = cache.insertable_fields(CachedUser)
    second = cache.insertable_fields(CachedUser)
    assert first is second
    assert cache.stats()["subsets"] == 2  # scaffoldable + insertable


def test_require_identity_fields_raises_for_keyless_models():
    cache = MetadataCache()
    with pytest.raises(MissingIdentityError) as excinfo:
        cache.require_identity_fields(Keyless, "Get")
    assert "Get requires model 'Keyless'" in str(excinfo.value)


def test_names_are_keyed_by_configuration():
    cache = MetadataCache()
    sqlserver = CrudConfig.for_dialect("sqlserver")
    mysql = CrudConfig.for_dialect("mysql")
    assert cache.table_name(CachedUser, sqlserver) == "[CachedUser]"
    assert cache.table_name(CachedUser, mysql) == "`CachedUser`"
    snake = sqlserver.with_table_name_resolver(SnakeCaseTableNameResolver())
    assert cache.table_name(CachedUser, snake) == "[cached_user]"
    column = CachedUser._meta.get_field("full_name")
    assert cache.column_name(column, mysql) == "`full_name`"


def test_fragments_render_once_per_configuration():
    cache = MetadataCache()
    config = CrudConfig.for_dialect("sqlite")
    calls = []

    def render():
        calls.append(1)
        return "rendered"

    assert cache.fragment(CachedUser, "select", config, render) == "rendered"
    assert cache.fragment(CachedUser, "select", config, render) == "rendered"
    assert cache.fragment(CachedUser, "select", CrudConfig.for_dialect("mysql"), render) == "rendered"
    assert len(calls) == 2


def test_filter_fields_cached_only_for_fixed_shapes():
    cache = MetadataCache()
    assert cache.filter_field_names(CachedUser, NameFilter("x")) == ("full_name",)
    assert cache.filter_field_names(CachedUser, {"id": 1}) == ("id",)
    assert cache.filter_field_names(CachedUser, {"full_name": "y"}) == ("full_name",)
    assert cache.stats()["filter_fields"] == 1


def test_clear_empties_every_map():
    cache = MetadataCache()
    cache.selectable_fields(CachedUser)
    cache.table_name(CachedUser, CrudConfig.for_dialect("sqlite"))
    cache.clear()
    assert set(cache.stats().values()) == {0}
