import enum
import uuid
from datetime import date, datetime
from decimal import Decimal

import pytest

from crudforge.core import (
    BinaryField,
    BooleanField,
    DateField,
    DateTimeField,
    DecimalField,
    EnumField,
    IntegerField,
    JSONField,
    Model,
    SmallIntegerField,
    StringField,
    UUIDField,
)


class Color(enum.Enum):
    RED = "red"
    BLUE = "blue"


class Sample(Model):
    id = IntegerField(primary_key=True)
    small = SmallIntegerField()
    flag = BooleanField()
    price = DecimalField()
    code = StringField(max_length=3)
    token = UUIDField()
    created = DateTimeField()
    born = DateField()
    blob = BinaryField()
    color = EnumField(Color)
    payload = JSONField(editable=True)


def test_integer_fields_enforce_range():
    sample = Sample()
    sample.id = "12"
    assert sample.id == 12
    with pytest.raises(ValueError):
        sample.small = 40000
    with pytest.raises(ValueError):
        sample.id = "twelve"


def test_boolean_field_parses_strings():
    sample = Sample(flag="t")
    assert sample.flag is True
    sample.flag = "0"
    assert sample.flag is False
    with pytest.raises(ValueError):
        sample.flag = "maybe"


def test_decimal_and_string_conversion():
    sample = Sample(price=1.5, code="abc")
    assert sample.price == Decimal("1.5")
    with pytest.raises(ValueError):
        sample.code = "abcd"


def test_uuid_field_accepts_text_and_bytes():
    value = uuid.uuid4()
    assert Sample(token=str(value)).token == value
    assert Sample(token=value.bytes).token == value
    with pytest.raises(ValueError):
        Sample(token="not-a-uuid")


def test_temporal_fields_parse_iso_strings():
    sample = Sample(created="2024-05-06T07:08:09", born="2000-01-02")
    assert sample.created == datetime(2024, 5, 6, 7, 8, 9)
    assert sample.born == date(2000, 1, 2)
    sample.born = datetime(2001, 2, 3, 4, 5)
    assert sample.born == date(2001, 2, 3)


def test_binary_field_normalizes_buffers():
    assert Sample(blob=bytearray(b"ab")).blob == b"ab"
    with pytest.raises(ValueError):
        Sample(blob="ab")


def test_enum_field_round_trips_values():
    sample = Sample(color="red")
    assert sample.color is Color.RED
    field = Sample._meta.get_field("color")
    assert field.to_db(sample.color) == "red"
    assert field.python_type is Color


def test_json_field_is_complex_and_serializes_sorted():
    field = Sample._meta.get_field("payload")
    assert field.simple is False
    assert field.to_db({"b": 1, "a": 2}) == '{"a": 2, "b": 1}'
    assert Sample(payload='{"x": [1, 2]}').payload == {"x": [1, 2]}


def test_client_generated_key_kinds():
    assert Sample._meta.get_field("token").client_generated_key is True
    assert Sample._meta.get_field("code").client_generated_key is True
    assert Sample._meta.get_field("id").client_generated_key is False


def test_auto_now_add_default():
    class Event(Model):
        id = IntegerField(primary_key=True)
        at = DateTimeField(auto_now_add=True)

    assert isinstance(Event().at, datetime)


def test_callable_default_is_invoked_per_instance():
    class Tagged(Model):
        id = IntegerField(primary_key=True)
        tags = JSONField(editable=True, default=list)

    first, second = Tagged(), Tagged()
    first.tags.append("x")
    assert second.tags == []
