import dataclasses
from collections import namedtuple

import pytest

from crudforge.core import IntegerField, JSONField, Model, StringField, UUIDField
from crudforge.metadata import classifier


class Account(Model):
    id = IntegerField()
    name = StringField()
    slug = StringField(read_only=True)
    notes = StringField(ignore_insert=True)
    audit = StringField(ignore_update=True)
    secret = StringField(ignore_select=True)
    computed = StringField(not_mapped=True)
    extra = JSONField()
    settings = JSONField(editable=True)
    legacy = StringField(editable=False)


class Keyed(Model):
    account_key = IntegerField(primary_key=True)
    ID = IntegerField()
    label = StringField()


class Composite(Model):
    tenant = StringField(primary_key=True, required=True)
    number = IntegerField(primary_key=True, required=True)
    total = IntegerField()


class GuidKeyed(Model):
    id = UUIDField(primary_key=True)
    name = StringField()


class RequiredId(Model):
    id = IntegerField(required=True)
    name = StringField()


class NoKey(Model):
    name = StringField()


def names(fields):
    return [f.name for f in fields]


def test_scaffoldable_excludes_complex_and_opted_out_fields():
    assert names(classifier.scaffoldable_fields(Account)) == [
        "id",
        "name",
        "slug",
        "notes",
        "audit",
        "secret",
        "computed",
        "settings",
    ]


def test_identity_falls_back_to_field_named_id():
    assert names(classifier.identity_fields(Account)) == ["id"]
    assert names(classifier.identity_fields(NoKey)) == []


def test_primary_key_marker_wins_over_id_name():
    assert names(classifier.identity_fields(Keyed)) == ["account_key"]
    assert names(classifier.identity_fields(Composite)) == ["tenant", "number"]


def test_insertable_rules():
    assert names(classifier.insertable_fields(Account)) == ["name", "audit", "secret", "settings"]
    assert names(classifier.insertable_fields(Keyed)) == ["label"]
    assert names(classifier.insertable_fields(Composite)) == ["tenant", "number", "total"]


def test_client_generated_and_required_keys_are_insertable():
    assert names(classifier.insertable_fields(GuidKeyed)) == ["id", "name"]
    assert names(classifier.insertable_fields(RequiredId)) == ["id", "name"]


def test_updateable_rules():
    assert names(classifier.updateable_fields(Account)) == ["name", "notes", "secret", "settings"]
    assert names(classifier.updateable_fields(Keyed)) == ["label"]
    assert names(classifier.updateable_fields(Composite)) == ["total"]


def test_selectable_rules():
    assert names(classifier.selectable_fields(Account)) == [
        "id",
        "name",
        "slug",
        "notes",
        "audit",
        "settings",
    ]


@dataclasses.dataclass
class AgeFilter:
    age: int
    name: str = None


AgeTuple = namedtuple("AgeTuple", ["age"])


class PlainFilter:
    def __init__(self):
        self.age = 3
        self._hidden = True


def test_object_field_names_for_supported_shapes():
    assert classifier.object_field_names(None) == ()
    assert classifier.object_field_names({"age": 1, "name": "x"}) == ("age", "name")
    assert classifier.object_field_names(AgeFilter(age=1)) == ("age", "name")
    assert classifier.object_field_names(AgeTuple(age=1)) == ("age",)
    assert classifier.object_field_names(PlainFilter()) == ("age",)
    assert "computed" not in classifier.object_field_names(Account(name="x"))


def test_object_field_names_rejects_opaque_values():
    with pytest.raises(TypeError):
        classifier.object_field_names(42)


def test_type_level_fields_detection():
    assert classifier.has_type_level_fields(AgeFilter(age=1))
    assert classifier.has_type_level_fields(AgeTuple(age=1))
    assert classifier.has_type_level_fields(Account())
    assert not classifier.has_type_level_fields({"age": 1})
    assert not classifier.has_type_level_fields(PlainFilter())


def test_read_value_from_mapping_and_object():
    assert classifier.read_value({"age": 4}, "age") == 4
    assert classifier.read_value(AgeTuple(age=5), "age") == 5
