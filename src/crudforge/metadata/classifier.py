"""
Pure classification of model fields into statement-specific subsets.

Every function here depends only on the model class and the markers its
fields were declared with, so results are safe to memoize for the lifetime
of the process.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Iterable, Optional, Tuple, Type

from ..core.fields import Field
from ..core.model import Model

FieldSubset = Tuple[Field, ...]


def is_named_id(field: Field) -> bool:
    return field.require_name().lower() == "id"


def is_scaffoldable(field: Field) -> bool:
    """
    Simple scalars, or anything explicitly opted in, minus explicit opt-outs.
    """
    if field.editable is False:
        return False
    return field.simple or field.editable is True


def scaffoldable_fields(model: Type[Model]) -> FieldSubset:
    return tuple(field for field in model._meta.get_fields() if is_scaffoldable(field))


def identity_fields(model: Type[Model]) -> FieldSubset:
    """
    Fields marked ``primary_key``; otherwise any field named ``id`` (any case).
    """
    fields = list(model._meta.get_fields())
    keyed = tuple(field for field in fields if field.primary_key)
    if keyed:
        return keyed
    return tuple(field for field in fields if is_named_id(field))


def is_insertable(field: Field) -> bool:
    if field.primary_key and not field.client_generated_key and not field.required:
        return False
    if field.ignore_insert or field.not_mapped or field.read_only:
        return False
    if is_named_id(field) and not field.required and not field.client_generated_key:
        return False
    return True


def insertable_fields(
    model: Type[Model], scaffoldable: Optional[Iterable[Field]] = None
) -> FieldSubset:
    source = scaffoldable_fields(model) if scaffoldable is None else scaffoldable
    return tuple(field for field in source if is_insertable(field))


def is_updateable(field: Field) -> bool:
    return not (
        is_named_id(field)
        or field.primary_key
        or field.read_only
        or field.ignore_update
        or field.not_mapped
    )


def updateable_fields(
    model: Type[Model], scaffoldable: Optional[Iterable[Field]] = None
) -> FieldSubset:
    source = scaffoldable_fields(model) if scaffoldable is None else scaffoldable
    return tuple(field for field in source if is_updateable(field))


def selectable_fields(
    model: Type[Model], scaffoldable: Optional[Iterable[Field]] = None
) -> FieldSubset:
    source = scaffoldable_fields(model) if scaffoldable is None else scaffoldable
    return tuple(
        field for field in source if not field.ignore_select and not field.not_mapped
    )


def has_type_level_fields(obj: Any) -> bool:
    """
    True when the attribute names of ``obj`` are fixed by its class.

    Only such objects may have their field list cached by runtime type.
    """
    if isinstance(obj, Model):
        return True
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return True
    return isinstance(obj, tuple) and hasattr(obj, "_fields")


def object_field_names(obj: Any) -> Tuple[str, ...]:
    """
    Attribute names that an ad-hoc filter object contributes as predicates.
    """
    if obj is None:
        return ()
    if hasattr(obj, "keys") and hasattr(obj, "__getitem__"):
        return tuple(obj.keys())
    if isinstance(obj, Model):
        return tuple(name for name, f in obj._meta.fields.items() if not f.not_mapped)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return tuple(f.name for f in dataclasses.fields(obj))
    if isinstance(obj, tuple) and hasattr(obj, "_fields"):
        return tuple(obj._fields)
    try:
        attributes = vars(obj)
    except TypeError as exc:
        raise TypeError(
            f"Cannot derive filter fields from {type(obj).__name__!r}; "
            "pass a mapping, a dataclass, a named tuple, or a model instance."
        ) from exc
    return tuple(name for name in attributes if not name.startswith("_"))


def read_value(source: Any, name: str) -> Any:
    """
    Read ``name`` off a mapping (by key) or any other object (by attribute).
    """
    if hasattr(source, "keys") and hasattr(source, "__getitem__"):
        return source[name]
    return getattr(source, name)
