"""
PostgreSQL database adapter implementation.
"""

from __future__ import annotations

from typing import Any, ContextManager

from ..dialects.postgres import PostgresDialect
from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    ConnectionConfig,
    ConnectionState,
    DBAPIAdapter,
)


def _load_driver():
    try:
        import psycopg

        return psycopg
    except ImportError:
        return None


class PostgresAdapter(DBAPIAdapter):
    """
    Adapter wrapping the psycopg PostgreSQL driver.
    """

    logger_name = "adapters.postgres"

    def __init__(self, slow_query_ms: int | None = None) -> None:
        self.dialect = PostgresDialect()
        super().__init__(slow_query_ms)

    def connect(self, config: ConnectionConfig) -> Any:
        driver = _load_driver()
        if driver is None:
            raise AdapterConfigurationError("psycopg is required to use PostgresAdapter.")

        options = dict(config.options or {})
        if config.ssl:
            for key, value in config.ssl.postgres_options().items():
                options.setdefault(key, value)
        if config.timeout and "connect_timeout" not in options:
            options["connect_timeout"] = int(config.timeout)

        self.logger.info(
            "Connecting to PostgreSQL %s (autocommit=%s)",
            config.descriptive_label(),
            config.autocommit,
        )
        try:
            connection = driver.connect(config.url, **options)
        except Exception as exc:
            raise AdapterConnectionError("Failed to connect to PostgreSQL.") from exc
        connection.autocommit = bool(config.autocommit)
        if config.isolation_level:
            setattr(connection, "isolation_level", config.isolation_level)

        self._state = ConnectionState(connection, config, driver)
        return connection

    def _ensure_connection(self) -> Any:
        state = self._state
        connection = super()._ensure_connection()
        if state and getattr(connection, "closed", False):
            self.logger.warning("PostgreSQL connection closed; reconnecting.")
            connection = self.connect(state.config)
        return connection

    def command_timeout(self, connection: Any, timeout: float) -> ContextManager[None]:
        milliseconds = max(int(timeout * 1000), 1)
        return self._session_setting(
            connection.cursor(),
            f"SET statement_timeout = {milliseconds}",
            "RESET statement_timeout",
        )

    def begin(self) -> None:
        if self._state and getattr(self._state.connection, "autocommit", False):
            return
        super().begin()
