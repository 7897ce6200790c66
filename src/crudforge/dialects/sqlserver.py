"""
SQL Server dialect implementation.
"""

from __future__ import annotations

from typing import Final

from .base import BaseDialect


class SQLServerDialect(BaseDialect):
    """
    SQL Server dialect with bracket quoting and ROW_NUMBER() paging.

    Placeholders use pyformat, matching pymssql.
    """

    name: Final[str] = "sqlserver"
    param_style: Final[str] = "pyformat"
    quote_format: Final[str] = "[{0}]"
    identity_sql: Final[str] = "SELECT CAST(SCOPE_IDENTITY() AS BIGINT) AS [id]"
    paged_list_sql: Final[str] = (
        "SELECT * FROM (SELECT ROW_NUMBER() OVER(ORDER BY {OrderBy}) AS PagedNumber, "
        "{SelectColumns} FROM {TableName}{WhereClause}) AS u "
        "WHERE PagedNumber BETWEEN (({PageNumber}-1) * {RowsPerPage} + 1) "
        "AND ({PageNumber} * {RowsPerPage})"
    )
