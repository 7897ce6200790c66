"""
MySQL database adapter implementation.
"""

from __future__ import annotations

import uuid
from typing import Any, ContextManager, Dict

from ..dialects.mysql import MySQLDialect
from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    ConnectionConfig,
    ConnectionState,
    DBAPIAdapter,
)


def _load_driver():
    try:
        import pymysql  # type: ignore[import-untyped]

        return pymysql
    except ImportError:
        try:
            import MySQLdb

            return MySQLdb
        except ImportError:
            return None


class MySQLAdapter(DBAPIAdapter):
    """
    Adapter wrapping a MySQL DB-API driver (PyMySQL or mysqlclient).

    Both drivers use the ``pyformat`` paramstyle, so statements built for the
    MySQL dialect run unchanged on either.
    """

    logger_name = "adapters.mysql"

    def __init__(self, slow_query_ms: int | None = None) -> None:
        self.dialect = MySQLDialect()
        super().__init__(slow_query_ms)

    def connect(self, config: ConnectionConfig) -> Any:
        driver = _load_driver()
        if driver is None:
            raise AdapterConfigurationError(
                "PyMySQL or mysqlclient is required to use MySQLAdapter."
            )

        dsn = config.dsn
        if dsn is None:
            raise AdapterConfigurationError("MySQLAdapter requires a DSN-based ConnectionConfig.")

        options: Dict[str, Any] = {
            "host": dsn.host or "localhost",
            "user": dsn.username,
            "password": dsn.password or "",
            "database": dsn.database,
            "autocommit": bool(config.autocommit),
        }
        if dsn.port:
            options["port"] = dsn.port
        if config.timeout:
            options["connect_timeout"] = int(config.timeout)
        if config.ssl:
            options.update(config.ssl.mysql_options())
        options.update(config.options or {})

        self.logger.info(
            "Connecting to MySQL %s (autocommit=%s)",
            config.descriptive_label(),
            config.autocommit,
        )
        try:
            connection = driver.connect(**options)
        except Exception as exc:
            raise AdapterConnectionError("Failed to connect to MySQL.") from exc

        if config.isolation_level:
            cursor = connection.cursor()
            cursor.execute(
                f"SET SESSION TRANSACTION ISOLATION LEVEL {config.isolation_level.upper()}"
            )

        self._state = ConnectionState(connection, config, driver)
        return connection

    def prepare_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {
            name: str(value) if isinstance(value, uuid.UUID) else value
            for name, value in params.items()
        }

    def command_timeout(self, connection: Any, timeout: float) -> ContextManager[None]:
        # MAX_EXECUTION_TIME only applies to SELECT statements.
        milliseconds = max(int(timeout * 1000), 1)
        return self._session_setting(
            connection.cursor(),
            f"SET SESSION MAX_EXECUTION_TIME = {milliseconds}",
            "SET SESSION MAX_EXECUTION_TIME = 0",
        )
