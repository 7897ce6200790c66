"""Process-wide memoization of model metadata and rendered SQL fragments."""

from __future__ import annotations

from threading import RLock
from typing import TYPE_CHECKING, Any, Callable, Dict, Hashable, Tuple, Type, TypeVar

from ..core.errors import MissingIdentityError
from ..core.fields import Field
from ..core.model import Model
from . import classifier
from .classifier import FieldSubset

if TYPE_CHECKING:
    from ..config import CrudConfig

T = TypeVar("T")

_MISSING = object()


class MetadataCache:
    """
    Read-through, compute-once maps keyed by model class.

    Values are computed outside the lock and published with ``setdefault``:
    concurrent misses for the same key may compute twice, but every caller
    ends up with the single published value. Nothing is ever evicted.

    Field subsets depend only on the model. Table names, column names and
    rendered fragments also depend on the dialect and resolvers, so they are
    keyed by the :class:`~crudforge.config.CrudConfig` as well.
    """

    def __init__(self) -> None:
        self._subsets: Dict[Tuple[Type[Model], str], FieldSubset] = {}
        self._filter_fields: Dict[Tuple[Type[Model], type], Tuple[str, ...]] = {}
        self._table_names: Dict[Tuple[Type[Model], "CrudConfig"], str] = {}
        self._column_names: Dict[Tuple[Field, "CrudConfig"], str] = {}
        self._fragments: Dict[Tuple[Type[Model], str, "CrudConfig"], str] = {}
        self._lock = RLock()

    def _get_or_compute(self, store: Dict[Any, T], key: Hashable, compute: Callable[[], T]) -> T:
        value = store.get(key, _MISSING)
        if value is not _MISSING:
            return value  # type: ignore[return-value]
        computed = compute()
        with self._lock:
            return store.setdefault(key, computed)

    # Field subsets -------------------------------------------------------
    def scaffoldable_fields(self, model: Type[Model]) -> FieldSubset:
        return self._get_or_compute(
            self._subsets,
            (model, "scaffoldable"),
            lambda: classifier.scaffoldable_fields(model),
        )

    def identity_fields(self, model: Type[Model]) -> FieldSubset:
        return self._get_or_compute(
            self._subsets, (model, "identity"), lambda: classifier.identity_fields(model)
        )

    def require_identity_fields(self, model: Type[Model], operation: str) -> FieldSubset:
        fields = self.identity_fields(model)
        if not fields:
            raise MissingIdentityError(model, operation)
        return fields

    def insertable_fields(self, model: Type[Model]) -> FieldSubset:
        return self._get_or_compute(
            self._subsets,
            (model, "insertable"),
            lambda: classifier.insertable_fields(model, self.scaffoldable_fields(model)),
        )

    def updateable_fields(self, model: Type[Model]) -> FieldSubset:
        return self._get_or_compute(
            self._subsets,
            (model, "updateable"),
            lambda: classifier.updateable_fields(model, self.scaffoldable_fields(model)),
        )

    def selectable_fields(self, model: Type[Model]) -> FieldSubset:
        return self._get_or_compute(
            self._subsets,
            (model, "selectable"),
            lambda: classifier.selectable_fields(model, self.scaffoldable_fields(model)),
        )

    def filter_field_names(self, model: Type[Model], conditions: Any) -> Tuple[str, ...]:
        """
        Field names contributed by a filter object.

        Cached per ``(model, type(conditions))`` only when the names are fixed
        by the filter's class; mappings and plain objects are read each time.
        """
        if not classifier.has_type_level_fields(conditions):
            return classifier.object_field_names(conditions)
        return self._get_or_compute(
            self._filter_fields,
            (model, type(conditions)),
            lambda: classifier.object_field_names(conditions),
        )

    # Names and fragments -------------------------------------------------
    def table_name(self, model: Type[Model], config: "CrudConfig") -> str:
        return self._get_or_compute(
            self._table_names,
            (model, config),
            lambda: config.table_name_resolver.resolve_table_name(model, config.dialect),
        )

    def column_name(self, field: Field, config: "CrudConfig") -> str:
        return self._get_or_compute(
            self._column_names,
            (field, config),
            lambda: config.column_name_resolver.resolve_column_name(field, config.dialect),
        )

    def fragment(
        self,
        model: Type[Model],
        kind: str,
        config: "CrudConfig",
        render: Callable[[], str],
    ) -> str:
        return self._get_or_compute(self._fragments, (model, kind, config), render)

    # Introspection -------------------------------------------------------
    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "subsets": len(self._subsets),
                "filter_fields": len(self._filter_fields),
                "table_names": len(self._table_names),
                "column_names": len(self._column_names),
                "fragments": len(self._fragments),
            }

    def clear(self) -> None:
        with self._lock:
            self._subsets.clear()
            self._filter_fields.clear()
            self._table_names.clear()
            self._column_names.clear()
            self._fragments.clear()


metadata_cache = MetadataCache()
