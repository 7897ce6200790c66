"""
Database adapters executing built statements over DB-API drivers.
"""

from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterError,
    AdapterExecutionError,
    AdapterTransactionError,
    ConnectionConfig,
    DatabaseAdapter,
    DBAPIAdapter,
    SSLConfig,
)
from .mysql import MySQLAdapter
from .postgres import PostgresAdapter
from .sqlite import SQLiteAdapter

__all__ = [
    "ConnectionConfig",
    "DatabaseAdapter",
    "DBAPIAdapter",
    "SSLConfig",
    "AdapterError",
    "AdapterConfigurationError",
    "AdapterConnectionError",
    "AdapterExecutionError",
    "AdapterTransactionError",
    "SQLiteAdapter",
    "PostgresAdapter",
    "MySQLAdapter",
]
