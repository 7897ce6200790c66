import pytest

from crudforge.core import (
    BooleanField,
    IntegerField,
    Model,
    ModelConfigurationError,
    StringField,
)


class User(Model):
    id = IntegerField(primary_key=True)
    name = StringField(max_length=50)
    age = IntegerField(default=0)
    is_active = BooleanField(default=True)


def test_model_metadata_collects_fields_in_order():
    assert list(User._meta.fields.keys()) == ["id", "name", "age", "is_active"]
    assert User._meta.table_name is None
    assert User._meta.schema is None


def test_model_does_not_add_implicit_key():
    class Note(Model):
        body = StringField()

    assert list(Note._meta.fields) == ["body"]


def test_model_initializes_defaults_and_ignores_unknown_kwargs():
    user = User(name="Alice", nickname="ally")
    assert user.name == "Alice"
    assert user.age == 0
    assert user.is_active is True
    assert user.id is None
    assert not hasattr(user, "nickname")


def test_meta_table_and_schema_are_recorded():
    class Invoice(Model):
        id = IntegerField(primary_key=True)

        class Meta:
            table = "invoices"
            schema = "billing"

    assert Invoice._meta.table_name == "invoices"
    assert Invoice._meta.schema == "billing"


def test_from_row_ignores_unknown_columns():
    user = User.from_row({"id": 3, "name": "Bob", "age": 41, "PagedNumber": 1})
    assert user.id == 3
    assert user.age == 41
    assert user.to_dict() == {"id": 3, "name": "Bob", "age": 41, "is_active": True}


def test_get_field_rejects_unknown_name():
    with pytest.raises(ModelConfigurationError):
        User._meta.get_field("email")


def test_add_field_rejects_duplicates():
    with pytest.raises(ModelConfigurationError):
        User._meta.add_field(User._meta.get_field("name"))


def test_repr_lists_assigned_values():
    assert repr(User(id=1, name="Ann")) == "<User id=1, name='Ann', age=0, is_active=True>"
