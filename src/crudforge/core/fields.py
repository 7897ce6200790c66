"""
Field definitions and descriptors for crudforge models.

Each field carries the declarative markers the metadata classifier reads:
key and required flags, editability, read-only state, per-operation ignore
flags, the not-mapped flag, and an optional explicit column name.
"""

from __future__ import annotations

import enum
import json
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Optional, Type, cast

if TYPE_CHECKING:
    from .model import Model


class FieldError(Exception):
    """Internal exception for field configuration issues."""


class Field:
    """
    Base class for model field descriptors.

    Fields manage attribute storage on model instances and retain the
    markers required for statement generation.
    """

    python_type: type = object
    # Simple scalars are scaffolded automatically; complex values need editable=True.
    simple: bool = True
    # Key values of this kind are assigned by the caller rather than the database.
    client_generated_key: bool = False

    _creation_counter = 0

    def __init__(
        self,
        *,
        primary_key: bool = False,
        required: bool = False,
        editable: Optional[bool] = None,
        read_only: bool = False,
        ignore_select: bool = False,
        ignore_insert: bool = False,
        ignore_update: bool = False,
        not_mapped: bool = False,
        db_column: Optional[str] = None,
        default: Any = None,
        help_text: Optional[str] = None,
    ) -> None:
        self.primary_key = primary_key
        self.required = required
        self.editable = editable
        self.read_only = read_only
        self.ignore_select = ignore_select
        self.ignore_insert = ignore_insert
        self.ignore_update = ignore_update
        self.not_mapped = not_mapped
        self.db_column = db_column
        self.default = default
        self.help_text = help_text

        self.model: type["Model"] | None = None  # Will be set during contribute_to_class
        self.name: str | None = None
        self.creation_counter = Field._creation_counter
        Field._creation_counter += 1

    # Descriptor protocol -------------------------------------------------
    def __get__(self, instance: object | None, owner: type | None = None) -> Any:
        if instance is None:
            return self

        model_instance = cast("Model", instance)
        name = self.require_name()
        if name not in model_instance._field_values and self.has_default:
            model_instance._field_values[name] = self.get_default()
        return model_instance._field_values.get(name)

    def __set__(self, instance: object, value: Any) -> None:
        model_instance = cast("Model", instance)
        name = self.require_name()
        if value is None:
            model_instance._field_values[name] = None
            return
        model_instance._field_values[name] = self.to_python(value)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name or '?'}>"

    # Metadata helpers ----------------------------------------------------
    def bind(self, model: type["Model"], name: str) -> None:
        self.model = model
        self.name = name

    def contribute_to_class(self, model: type["Model"], name: str) -> None:
        """
        Attach the field to the model class as a descriptor.
        """
        self.bind(model, name)
        setattr(model, name, self)

    def require_name(self) -> str:
        if self.name is None:
            raise FieldError("Field name is not set.")
        return self.name

    def require_model(self) -> type["Model"]:
        if self.model is None:
            raise FieldError("Field model is not set.")
        return self.model

    @property
    def has_explicit_column(self) -> bool:
        return bool(self.db_column)

    # Conversion ----------------------------------------------------------
    @property
    def has_default(self) -> bool:
        return self.default is not None

    def get_default(self) -> Any:
        if callable(self.default):
            return self.default()
        return self.default

    def to_python(self, value: Any) -> Any:
        return value

    def to_db(self, value: Any) -> Any:
        """
        Convert an attribute value into a driver-bindable parameter.
        """
        return value


class IntegerField(Field):
    python_type = int
    min_value: int | None = -(2**31)
    max_value: int | None = 2**31 - 1

    def to_python(self, value: Any) -> int | None:
        if value is None:
            return value
        if isinstance(value, bool):
            return int(value)
        try:
            result = int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid integer value '{value}'") from exc
        if self.min_value is not None and result < self.min_value:
            raise ValueError(f"Value {result} for field '{self.name}' is below {self.min_value}")
        if self.max_value is not None and result > self.max_value:
            raise ValueError(f"Value {result} for field '{self.name}' exceeds {self.max_value}")
        return result


class SmallIntegerField(IntegerField):
    min_value = -(2**15)
    max_value = 2**15 - 1


class BigIntegerField(IntegerField):
    min_value = -(2**63)
    max_value = 2**63 - 1


class FloatField(Field):
    python_type = float

    def to_python(self, value: Any) -> float | None:
        if value is None:
            return value
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid float value '{value}'") from exc


class DecimalField(Field):
    python_type = Decimal

    def to_python(self, value: Any) -> Decimal | None:
        if value is None or isinstance(value, Decimal):
            return value
        try:
            return Decimal(str(value))
        except InvalidOperation as exc:
            raise ValueError(f"Invalid decimal value '{value}'") from exc


class BooleanField(Field):
    python_type = bool

    def to_python(self, value: Any) -> bool | None:
        if value is None:
            return value
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.lower()
            if lowered in {"true", "t", "1"}:
                return True
            if lowered in {"false", "f", "0"}:
                return False
        if isinstance(value, (int, float)):
            return bool(value)
        raise ValueError(f"Invalid boolean value '{value}'")


class StringField(Field):
    python_type = str
    client_generated_key = True

    def __init__(self, *, max_length: int | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.max_length = max_length

    def to_python(self, value: Any) -> str | None:
        if value is None:
            return value
        result = str(value)
        if self.max_length and len(result) > self.max_length:
            field_name = self.require_name()
            raise ValueError(f"Value for field '{field_name}' exceeds max_length {self.max_length}")
        return result


class UUIDField(Field):
    python_type = uuid.UUID
    client_generated_key = True

    def to_python(self, value: Any) -> uuid.UUID | None:
        if value is None or isinstance(value, uuid.UUID):
            return value
        try:
            if isinstance(value, bytes):
                return uuid.UUID(bytes=value)
            return uuid.UUID(str(value))
        except ValueError as exc:
            raise ValueError(f"Invalid UUID value '{value}' for field '{self.name}'") from exc


class DateTimeField(Field):
    python_type = datetime

    def __init__(self, *, auto_now_add: bool = False, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.auto_now_add = auto_now_add

    @property
    def has_default(self) -> bool:
        return self.auto_now_add or super().has_default

    def get_default(self) -> Any:
        if self.auto_now_add:
            return datetime.now(timezone.utc)
        return super().get_default()

    def to_python(self, value: Any) -> datetime | None:
        if value is None or isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value)
            except ValueError as exc:
                raise ValueError(f"Invalid datetime '{value}' for field '{self.name}'") from exc
        raise ValueError(f"Expected datetime for field '{self.name}', received {value!r}")


class DateField(Field):
    python_type = date

    def to_python(self, value: Any) -> date | None:
        if value is None:
            return value
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value)
            except ValueError as exc:
                raise ValueError(f"Invalid date '{value}' for field '{self.name}'") from exc
        raise ValueError(f"Expected date for field '{self.name}', received {value!r}")


class BinaryField(Field):
    python_type = bytes

    def to_python(self, value: Any) -> bytes | None:
        if value is None or isinstance(value, bytes):
            return value
        if isinstance(value, (bytearray, memoryview)):
            return bytes(value)
        raise ValueError(f"Expected bytes for field '{self.name}', received {value!r}")


class EnumField(Field):
    def __init__(self, enum_class: Type[enum.Enum], **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.enum_class = enum_class
        self.python_type = enum_class

    def to_python(self, value: Any) -> enum.Enum | None:
        if value is None or isinstance(value, self.enum_class):
            return value
        try:
            return self.enum_class(value)
        except ValueError as exc:
            raise ValueError(
                f"Value '{value}' for field '{self.name}' is not a valid {self.enum_class.__name__}"
            ) from exc

    def to_db(self, value: Any) -> Any:
        if isinstance(value, enum.Enum):
            return value.value
        return value


class JSONField(Field):
    """
    Structured value stored as JSON text.

    Not a simple scalar: statements only include it when declared with
    ``editable=True``.
    """

    python_type = dict
    simple = False

    def to_python(self, value: Any) -> Any:
        if isinstance(value, (str, bytes)):
            return json.loads(value)
        return value

    def to_db(self, value: Any) -> Any:
        if value is None:
            return None
        return json.dumps(value, sort_keys=True)
