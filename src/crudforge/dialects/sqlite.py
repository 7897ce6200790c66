"""
SQLite dialect implementation.
"""

from __future__ import annotations

from typing import Final

from .base import BaseDialect


class SQLiteDialect(BaseDialect):
    """
    SQLite dialect using the sqlite3 ``named`` param style.
    """

    name: Final[str] = "sqlite"
    param_style: Final[str] = "named"
    quote_format: Final[str] = '"{0}"'
    identity_sql: Final[str] = "SELECT LAST_INSERT_ROWID() AS id"
    paged_list_sql: Final[str] = (
        "SELECT {SelectColumns} FROM {TableName}{WhereClause} ORDER BY {OrderBy} "
        "LIMIT {RowsPerPage} OFFSET {Offset}"
    )
