"""
Statement builders turning model metadata into parameterised SQL.

Every builder returns a :class:`Statement`: SQL text plus a mapping of named
parameters, keyed by model attribute name and rendered with the dialect's
paramstyle. Nothing here talks to a database; see
:mod:`crudforge.persistence` for execution.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Type

from ..config import CrudConfig, get_config
from ..core.errors import (
    InvalidPageError,
    ModelConfigurationError,
    UnsupportedKeyTypeError,
)
from ..core.fields import Field
from ..core.model import Model
from ..identity import is_empty_key, sequential_uuid
from ..metadata import MetadataCache, metadata_cache
from ..metadata.classifier import read_value
from ..security.guards import require_where_clause
from ..security.redaction import redact_params
from ..utils import get_logger

SUPPORTED_KEY_TYPES: Tuple[type, ...] = (int, str, uuid.UUID)

Conditions = Any


@dataclass(frozen=True)
class Statement:
    operation: str
    model: Type[Model]
    sql: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class InsertStatement(Statement):
    """
    INSERT plus the optional follow-up query that reports the new key.

    ``key_sql`` runs on the same connection right after ``sql``. When
    ``key_from_entity`` is set the key is already known (caller supplied, or
    generated here and written onto the entity) and ``key_value`` holds it.
    """

    key_name: str = ""
    key_type: type = int
    key_sql: Optional[str] = None
    key_value: Any = None
    key_from_entity: bool = False

    @property
    def script(self) -> str:
        if self.key_sql:
            return f"{self.sql};{self.key_sql}"
        return self.sql


class StatementBuilder:
    """
    Build CRUD statements for :class:`~crudforge.core.model.Model` subclasses.

    ``config`` pins the dialect and naming resolvers; when omitted, each call
    reads the process-wide default from :func:`crudforge.config.get_config`.
    """

    def __init__(
        self,
        config: Optional[CrudConfig] = None,
        cache: Optional[MetadataCache] = None,
    ) -> None:
        self._config = config
        self.cache = cache if cache is not None else metadata_cache
        self.logger = get_logger("query.builders")

    @property
    def config(self) -> CrudConfig:
        return self._config if self._config is not None else get_config()

    # Reads ---------------------------------------------------------------
    def get(self, model: Type[Model], id_value: Any) -> Statement:
        """
        Select one row by key. Composite keys take a mapping or object holding every key field.
        """
        config = self.config
        id_fields = self.cache.require_identity_fields(model, "Get")
        sql = (
            f"SELECT {self._select_columns(model, config)} "
            f"FROM {self._table(model, config)} "
            f"WHERE {self._identity_where(model, config)}"
        )
        return self._finish("Get", model, sql, self._identity_params(id_fields, id_value))

    def get_list(
        self,
        model: Type[Model],
        conditions: Conditions = None,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> Statement:
        """
        Select rows matching a filter object or caller-written condition text.

        A filter object (mapping, dataclass, named tuple, model instance or
        plain object) contributes one equality predicate per attribute, joined
        with AND; ``None`` values become ``IS NULL``. Condition text is
        appended verbatim after the table name and is bound with
        ``parameters``.
        """
        config = self.config
        self.cache.require_identity_fields(model, "GetList")
        base = f"SELECT {self._select_columns(model, config)} FROM {self._table(model, config)}"
        sql, params = self._apply_conditions("GetList", model, config, base, conditions, parameters)
        return self._finish("GetList", model, sql, params)

    def get_list_paged(
        self,
        model: Type[Model],
        page_number: int,
        rows_per_page: int,
        conditions: Optional[str] = None,
        order_by: Optional[str] = None,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> Statement:
        config = self.config
        dialect = config.dialect
        if page_number < 1:
            raise InvalidPageError("Page must be greater than 0.")
        if rows_per_page < 1:
            raise InvalidPageError("Rows per page must be greater than 0.")
        id_fields = self.cache.require_identity_fields(model, "GetListPaged")

        if not order_by or not order_by.strip():
            order_by = self._column(id_fields[0], config)
        values = {
            "SelectColumns": self._select_columns(model, config),
            "TableName": self._table(model, config),
            "WhereClause": f" {conditions}" if conditions and conditions.strip() else "",
            "OrderBy": order_by,
            "PageNumber": str(page_number),
            "RowsPerPage": str(rows_per_page),
            "Offset": str((page_number - 1) * rows_per_page),
        }
        sql = dialect.render_paged_list(values)
        return self._finish("GetListPaged", model, sql, dict(parameters or {}))

    def record_count(
        self,
        model: Type[Model],
        conditions: Conditions = None,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> Statement:
        config = self.config
        base = f"SELECT COUNT(1) FROM {self._table(model, config)}"
        sql, params = self._apply_conditions(
            "RecordCount", model, config, base, conditions, parameters
        )
        return self._finish("RecordCount", model, sql, params)

    # Writes --------------------------------------------------------------
    def insert(self, entity: Model, key_type: Optional[type] = None) -> InsertStatement:
        """
        Build an INSERT for ``entity`` and decide how its key is reported.

        Integer keys left at ``0`` or ``None`` are read back with the
        dialect's identity query. A non-empty integer or string key is
        returned as supplied. UUID keys are generated here when empty, set
        on the entity, and echoed back by a constant select.
        """
        model = type(entity)
        config = self.config
        id_fields = self.cache.require_identity_fields(model, "Insert")
        key_field = id_fields[0]
        resolved = self._resolve_key_type(key_field, key_type)

        key_name = key_field.require_name()
        current = getattr(entity, key_name)
        key_sql: Optional[str] = None
        key_from_entity = True

        if resolved is uuid.UUID:
            if is_empty_key(current):
                setattr(entity, key_name, sequential_uuid())
                current = getattr(entity, key_name)
            key_sql = f"SELECT '{current}' AS id"
        elif resolved is int and is_empty_key(current):
            key_sql = config.dialect.identity_sql
            key_from_entity = False

        insertable = self.cache.insertable_fields(model)
        columns = self.cache.fragment(
            model,
            "insert_columns",
            config,
            lambda: ", ".join(self._column(f, config) for f in insertable),
        )
        placeholders = self.cache.fragment(
            model,
            "insert_values",
            config,
            lambda: ", ".join(
                config.dialect.parameter_placeholder(f.require_name()) for f in insertable
            ),
        )
        params = self._field_params(entity, insertable)
        sql = f"INSERT INTO {self._table(model, config)} ({columns}) VALUES ({placeholders})"
        self._log("Insert", model, sql, params)
        return InsertStatement(
            operation="Insert",
            model=model,
            sql=sql,
            params=params,
            key_name=key_name,
            key_type=resolved,
            key_sql=key_sql,
            key_value=current if key_from_entity else None,
            key_from_entity=key_from_entity,
        )

    def update(self, entity: Model) -> Statement:
        model = type(entity)
        config = self.config
        id_fields = self.cache.require_identity_fields(model, "Update")
        updateable = self.cache.updateable_fields(model)
        if not updateable:
            raise ModelConfigurationError(
                f"Update requires model '{model.__name__}' to have at least one updateable field."
            )
        set_clause = self.cache.fragment(
            model,
            "update_set",
            config,
            lambda: ", ".join(
                f"{self._column(f, config)} = "
                f"{config.dialect.parameter_placeholder(f.require_name())}"
                for f in updateable
            ),
        )
        params = self._field_params(entity, updateable)
        params.update(self._field_params(entity, id_fields))
        sql = (
            f"UPDATE {self._table(model, config)} SET {set_clause} "
            f"WHERE {self._identity_where(model, config)}"
        )
        return self._finish("Update", model, sql, params)

    def delete(self, model: Type[Model], target: Any) -> Statement:
        """
        Delete one row, given either an entity of ``model`` or a bare key value.
        """
        config = self.config
        id_fields = self.cache.require_identity_fields(model, "Delete")
        if isinstance(target, model):
            params = self._field_params(target, id_fields)
        else:
            params = self._identity_params(id_fields, target)
        where = self._identity_where(model, config)
        sql = f"DELETE FROM {self._table(model, config)} WHERE {where}"
        return self._finish("Delete", model, sql, params)

    def delete_list(
        self,
        model: Type[Model],
        conditions: Conditions,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> Statement:
        """
        Delete every row matching a filter object or condition text.

        Condition text must be non-empty and contain WHERE. A filter object
        with no attributes matches, and therefore deletes, every row.
        """
        config = self.config
        if conditions is None or isinstance(conditions, str):
            require_where_clause(conditions, operation="DeleteList")
        base = f"DELETE FROM {self._table(model, config)}"
        sql, params = self._apply_conditions(
            "DeleteList", model, config, base, conditions, parameters
        )
        return self._finish("DeleteList", model, sql, params)

    # Helpers -------------------------------------------------------------
    def _table(self, model: Type[Model], config: CrudConfig) -> str:
        return self.cache.table_name(model, config)

    def _column(self, field_obj: Field, config: CrudConfig) -> str:
        return self.cache.column_name(field_obj, config)

    def _select_columns(self, model: Type[Model], config: CrudConfig) -> str:
        def render() -> str:
            parts = []
            for field_obj in self.cache.selectable_fields(model):
                column = self._column(field_obj, config)
                if field_obj.has_explicit_column:
                    alias = config.dialect.quote_identifier(field_obj.require_name())
                    column = f"{column} AS {alias}"
                parts.append(column)
            return ", ".join(parts)

        return self.cache.fragment(model, "select", config, render)

    def _identity_where(self, model: Type[Model], config: CrudConfig) -> str:
        def render() -> str:
            return " AND ".join(
                f"{self._column(f, config)} = "
                f"{config.dialect.parameter_placeholder(f.require_name())}"
                for f in self.cache.identity_fields(model)
            )

        return self.cache.fragment(model, "identity_where", config, render)

    @staticmethod
    def _identity_params(id_fields: Tuple[Field, ...], id_value: Any) -> Dict[str, Any]:
        if len(id_fields) == 1:
            key_field = id_fields[0]
            return {key_field.require_name(): key_field.to_db(key_field.to_python(id_value))}
        if id_value is None:
            raise ValueError("Composite keys require a mapping or object holding every key field.")
        params: Dict[str, Any] = {}
        for key_field in id_fields:
            name = key_field.require_name()
            params[name] = key_field.to_db(key_field.to_python(read_value(id_value, name)))
        return params

    @staticmethod
    def _field_params(entity: Model, fields: Iterable[Field]) -> Dict[str, Any]:
        return {f.require_name(): f.to_db(getattr(entity, f.require_name())) for f in fields}

    def _predicates(
        self,
        model: Type[Model],
        config: CrudConfig,
        names: Iterable[str],
        source: Any,
    ) -> Tuple[str, Dict[str, Any]]:
        clauses = []
        params: Dict[str, Any] = {}
        for name in names:
            field_obj = model._meta.get_field(name)
            if field_obj.not_mapped:
                raise ModelConfigurationError(
                    f"Field '{name}' on model '{model.__name__}' is not mapped to a column."
                )
            column = self._column(field_obj, config)
            value = read_value(source, name)
            if value is None:
                clauses.append(f"{column} IS NULL")
                continue
            clauses.append(f"{column} = {config.dialect.parameter_placeholder(name)}")
            params[name] = field_obj.to_db(field_obj.to_python(value))
        return " AND ".join(clauses), params

    def _apply_conditions(
        self,
        operation: str,
        model: Type[Model],
        config: CrudConfig,
        base: str,
        conditions: Conditions,
        parameters: Optional[Mapping[str, Any]],
    ) -> Tuple[str, Dict[str, Any]]:
        if conditions is None or isinstance(conditions, str):
            if conditions:
                return f"{base} {conditions}", dict(parameters or {})
            return base, dict(parameters or {})
        if parameters:
            raise TypeError(f"{operation} only accepts parameters alongside condition text.")
        names = self.cache.filter_field_names(model, conditions)
        where, params = self._predicates(model, config, names, conditions)
        if where:
            return f"{base} WHERE {where}", params
        return base, params

    @staticmethod
    def _resolve_key_type(key_field: Field, key_type: Optional[type]) -> type:
        resolved = key_type if key_type is not None else key_field.python_type
        if resolved not in SUPPORTED_KEY_TYPES:
            raise UnsupportedKeyTypeError(resolved)
        return resolved

    def _finish(
        self, operation: str, model: Type[Model], sql: str, params: Dict[str, Any]
    ) -> Statement:
        self._log(operation, model, sql, params)
        return Statement(operation=operation, model=model, sql=sql, params=params)

    def _log(self, operation: str, model: Type[Model], sql: str, params: Dict[str, Any]) -> None:
        self.logger.debug(
            "%s %s: %s",
            operation,
            model.__name__,
            sql,
            extra={"sql": sql, "params": redact_params(params)},
        )
