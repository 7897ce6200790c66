"""
Model base classes and metadata orchestration for crudforge.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Type, TypeVar

from .errors import ModelConfigurationError
from .fields import Field

__all__ = ["Model", "ModelConfigurationError", "ModelMeta", "ModelOptions"]


@dataclass
class ModelOptions:
    """
    Container for model metadata calculated by :class:`ModelMeta`.

    ``table_name`` and ``schema`` hold the explicit overrides from the inner
    ``Meta`` class; table name resolvers decide what to do when they are unset.
    """

    model: Type["Model"]
    table_name: Optional[str] = None
    schema: Optional[str] = None
    fields: "OrderedDict[str, Field]" = field(default_factory=OrderedDict)

    def add_field(self, field_obj: Field) -> None:
        if field_obj.name in self.fields:
            raise ModelConfigurationError(
                f"Duplicate field name '{field_obj.name}' on model '{self.model.__name__}'"
            )
        self.fields[field_obj.name] = field_obj

    def get_field(self, name: str) -> Field:
        try:
            return self.fields[name]
        except KeyError as exc:
            raise ModelConfigurationError(
                f"Unknown field '{name}' on model '{self.model.__name__}'"
            ) from exc

    def get_fields(self) -> Iterable[Field]:
        return self.fields.values()


TModel = TypeVar("TModel", bound="Model")


class ModelMeta(type):
    """
    Metaclass responsible for collecting fields and establishing metadata.
    """

    def __new__(mcls, name: str, bases: tuple[type, ...], attrs: Dict[str, Any]) -> "ModelMeta":
        # Allow creation of the base Model class without processing fields.
        if name == "Model" and bases == (object,):
            return super().__new__(mcls, name, bases, attrs)

        declared_fields: Dict[str, Field] = {}
        for attr_name, value in list(attrs.items()):
            if isinstance(value, Field):
                declared_fields[attr_name] = attrs.pop(attr_name)

        cls = super().__new__(mcls, name, bases, attrs)

        meta = getattr(cls, "Meta", None)
        table_name = getattr(meta, "table", None) if meta else None
        schema = getattr(meta, "schema", None) if meta else None

        cls._meta = ModelOptions(model=cls, table_name=table_name, schema=schema)

        # TODO: Support inheriting fields from base models.
        sorted_fields = sorted(
            declared_fields.items(), key=lambda item: item[1].creation_counter
        )
        for attr_name, field_obj in sorted_fields:
            field_obj.contribute_to_class(cls, attr_name)
            cls._meta.add_field(field_obj)

        return cls


class Model(metaclass=ModelMeta):
    """
    Plain data record mapped to exactly one table.

    Statement generation lives in :mod:`crudforge.query`; execution lives in
    :mod:`crudforge.persistence`.
    """

    _meta: ModelOptions

    def __init__(self, **kwargs: Any) -> None:
        self._field_values: Dict[str, Any] = {}

        for field_obj in self._meta.get_fields():
            name = field_obj.require_name()
            if name in kwargs:
                setattr(self, name, kwargs[name])
            elif field_obj.has_default:
                setattr(self, name, field_obj.get_default())

    def __repr__(self) -> str:
        field_parts = ", ".join(
            f"{name}={value!r}" for name, value in self._field_values.items()
        )
        return f"<{self.__class__.__name__} {field_parts}>"

    @classmethod
    def from_row(cls: Type[TModel], row: Mapping[str, Any]) -> TModel:
        """
        Build an instance from a result row, ignoring columns the model lacks.
        """
        known = {key: value for key, value in row.items() if key in cls._meta.fields}
        return cls(**known)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self._meta.fields}
