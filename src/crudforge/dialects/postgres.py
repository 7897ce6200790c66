"""
PostgreSQL dialect implementation.
"""

from __future__ import annotations

from typing import Final

from .base import BaseDialect


class PostgresDialect(BaseDialect):
    """
    PostgreSQL dialect using pyformat named parameters.
    """

    name: Final[str] = "postgresql"
    param_style: Final[str] = "pyformat"
    quote_format: Final[str] = '"{0}"'
    identity_sql: Final[str] = "SELECT LASTVAL() AS id"
    paged_list_sql: Final[str] = (
        "SELECT {SelectColumns} FROM {TableName}{WhereClause} ORDER BY {OrderBy} "
        "LIMIT {RowsPerPage} OFFSET {Offset}"
    )
