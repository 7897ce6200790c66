"""
Dialect strategy registry.
"""

from .base import PAGED_LIST_PLACEHOLDERS, BaseDialect, Dialect
from .mysql import MySQLDialect
from .postgres import PostgresDialect
from .registry import (
    DEFAULT_DIALECT_NAME,
    available_dialects,
    get_dialect_by_name,
    register_dialect,
)
from .sqlite import SQLiteDialect
from .sqlserver import SQLServerDialect

__all__ = [
    "BaseDialect",
    "DEFAULT_DIALECT_NAME",
    "Dialect",
    "MySQLDialect",
    "PAGED_LIST_PLACEHOLDERS",
    "PostgresDialect",
    "SQLiteDialect",
    "SQLServerDialect",
    "available_dialects",
    "get_dialect_by_name",
    "register_dialect",
]
