"""
Session running built statements through a database adapter.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional, Type, TypeVar

from ..adapters.base import AdapterExecutionError, ConnectionConfig, DatabaseAdapter
from ..config import CrudConfig, get_config
from ..core.model import Model
from ..metadata import MetadataCache
from ..query.builders import Statement, StatementBuilder
from ..utils import get_logger
from .transaction import TransactionManager

M = TypeVar("M", bound=Model)


class Session:
    """
    Execute CRUD operations for model instances over one adapter connection.

    Writes issued outside :meth:`transaction` (or an explicit :meth:`begin`)
    are committed immediately. Using the session as a context manager opens
    a transaction that commits on success, rolls back on error, and closes
    the connection either way.
    """

    def __init__(
        self,
        adapter: DatabaseAdapter,
        *,
        connection_config: Optional[ConnectionConfig] = None,
        config: Optional[CrudConfig] = None,
        cache: Optional[MetadataCache] = None,
    ) -> None:
        self.adapter = adapter
        self.config = config or get_config().with_dialect(adapter.dialect)
        self.builder = StatementBuilder(self.config, cache)
        self.connection_config = connection_config or ConnectionConfig(url="sqlite:///:memory:")
        self.transaction_manager = TransactionManager(adapter)
        self.logger = get_logger("persistence.session")
        self.adapter.connect(self.connection_config)

    # ------------------------------------------------------------------ #
    # Context management
    # ------------------------------------------------------------------ #
    def __enter__(self) -> "Session":
        self.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self.transaction_manager.active:
                if exc_type:
                    self.rollback()
                else:
                    self.commit()
        finally:
            self.close()

    def begin(self) -> None:
        self.transaction_manager.begin()

    def commit(self) -> None:
        self.transaction_manager.commit()

    def rollback(self) -> None:
        self.transaction_manager.rollback()

    def close(self) -> None:
        self.transaction_manager.reset()
        self.adapter.close()

    @contextmanager
    def transaction(self) -> Iterator["Session"]:
        """
        Open a transaction, or a savepoint when one is already open.
        """
        with self.transaction_manager.transaction():
            yield self

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #
    def get(self, model: Type[M], id_value: Any, *, timeout: float | None = None) -> Optional[M]:
        statement = self.builder.get(model, id_value)
        row = self.adapter.fetch_one(statement.sql, statement.params, timeout=timeout)
        if row is None:
            return None
        return model.from_row(row)

    def get_list(
        self,
        model: Type[M],
        conditions: Any = None,
        parameters: Optional[Mapping[str, Any]] = None,
        *,
        timeout: float | None = None,
    ) -> Iterator[M]:
        """
        Rows matching ``conditions`` as model instances, fetched in batches while iterated.

        Entries of ``parameters`` that the condition text never references are
        not sent to the driver.
        """
        statement = self.builder.get_list(model, conditions, parameters)
        return self._instances(model, statement, timeout)

    def get_list_paged(
        self,
        model: Type[M],
        page_number: int,
        rows_per_page: int,
        conditions: Optional[str] = None,
        order_by: Optional[str] = None,
        parameters: Optional[Mapping[str, Any]] = None,
        *,
        timeout: float | None = None,
    ) -> Iterator[M]:
        statement = self.builder.get_list_paged(
            model, page_number, rows_per_page, conditions, order_by, parameters
        )
        return self._instances(model, statement, timeout)

    def record_count(
        self,
        model: Type[Model],
        conditions: Any = None,
        parameters: Optional[Mapping[str, Any]] = None,
        *,
        timeout: float | None = None,
    ) -> int:
        statement = self.builder.record_count(model, conditions, parameters)
        row = self.adapter.fetch_one(statement.sql, statement.params, timeout=timeout)
        if not row:
            return 0
        return int(next(iter(row.values())))

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #
    def insert(
        self,
        entity: Model,
        key_type: Optional[type] = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """
        Insert ``entity`` and return its key.

        Database-generated integer keys are read back on the same connection
        and written onto the entity before returning.
        """
        statement = self.builder.insert(entity, key_type)
        with self._write_scope():
            self.adapter.execute(statement.sql, statement.params, timeout=timeout)
            if statement.key_sql is None:
                return statement.key_value
            row = self.adapter.fetch_one(statement.key_sql, timeout=timeout)

        if statement.key_from_entity:
            return statement.key_value
        if not row:
            raise AdapterExecutionError(
                f"Insert into {type(entity).__name__} did not report a generated key."
            )
        raw = row["id"] if "id" in row else next(iter(row.values()))
        key = statement.key_type(raw)
        setattr(entity, statement.key_name, key)
        self.logger.debug("Generated key %r for %s", key, type(entity).__name__)
        return key

    def update(self, entity: Model, *, timeout: float | None = None) -> int:
        return self._run_write(self.builder.update(entity), timeout)

    def delete(self, entity: Model, *, timeout: float | None = None) -> int:
        return self._run_write(self.builder.delete(type(entity), entity), timeout)

    def delete_by_id(self, model: Type[Model], id_value: Any, *, timeout: float | None = None) -> int:
        return self._run_write(self.builder.delete(model, id_value), timeout)

    def delete_list(
        self,
        model: Type[Model],
        conditions: Any,
        parameters: Optional[Mapping[str, Any]] = None,
        *,
        timeout: float | None = None,
    ) -> int:
        return self._run_write(self.builder.delete_list(model, conditions, parameters), timeout)

    def execute(
        self,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """
        Run caller-written SQL on the session's connection.
        """
        return self.adapter.execute(sql, params, timeout=timeout)

    # ------------------------------------------------------------------ #
    def _instances(self, model: Type[M], statement: Statement, timeout: float | None) -> Iterator[M]:
        rows = self.adapter.iterate(statement.sql, statement.params, timeout=timeout)
        return (model.from_row(row) for row in rows)

    def _run_write(self, statement: Statement, timeout: float | None) -> int:
        with self._write_scope():
            cursor = self.adapter.execute(statement.sql, statement.params, timeout=timeout)
        return cursor.rowcount

    @contextmanager
    def _write_scope(self) -> Iterator[None]:
        if self.transaction_manager.active:
            yield
            return
        with self.transaction_manager.transaction():
            yield
