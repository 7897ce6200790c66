"""
SQLite database adapter implementation.
"""

from __future__ import annotations

import sqlite3
import time
import uuid
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterator

from ..dialects.sqlite import SQLiteDialect
from .base import ConnectionConfig, ConnectionState, DBAPIAdapter

# Virtual machine instructions between timeout checks.
PROGRESS_INTERVAL = 1000


class SQLiteAdapter(DBAPIAdapter):
    """
    Adapter wrapping the Python stdlib sqlite3 module.

    The connection runs in autocommit mode; transactions are opened with an
    explicit ``BEGIN`` so savepoints behave the same way as on the server
    backends.
    """

    logger_name = "adapters.sqlite"

    def __init__(self, slow_query_ms: int | None = None) -> None:
        self.dialect = SQLiteDialect()
        super().__init__(slow_query_ms)
        self._begin_sql = "BEGIN"

    def connect(self, config: ConnectionConfig) -> sqlite3.Connection:
        path = self._normalize_path(config.url)
        timeout = config.timeout if config.timeout is not None else 5.0

        connection = sqlite3.connect(
            path,
            isolation_level=None,
            timeout=timeout,
            check_same_thread=False,
        )
        connection.execute("PRAGMA foreign_keys = ON")
        if config.isolation_level:
            self._begin_sql = f"BEGIN {config.isolation_level.upper()}"

        self._state = ConnectionState(connection, config, sqlite3)
        self.logger.debug("Opened SQLite database %s", path)
        return connection

    def prepare_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {name: self._to_sqlite(value) for name, value in params.items()}

    @contextmanager
    def command_timeout(self, connection: sqlite3.Connection, timeout: float) -> Iterator[None]:
        deadline = time.monotonic() + timeout
        connection.set_progress_handler(
            lambda: int(time.monotonic() > deadline), PROGRESS_INTERVAL
        )
        try:
            yield
        finally:
            connection.set_progress_handler(None, PROGRESS_INTERVAL)

    def begin(self) -> None:
        self._ensure_connection().execute(self._begin_sql)

    @staticmethod
    def _to_sqlite(value: Any) -> Any:
        if isinstance(value, uuid.UUID):
            return str(value)
        if isinstance(value, Decimal):
            return str(value)
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        return value

    @staticmethod
    def _normalize_path(url: str) -> str:
        if url in ("sqlite://", "sqlite:///:memory:"):
            return ":memory:"
        prefix = "sqlite:///"
        if url.startswith(prefix):
            return url[len(prefix) :]
        return url
