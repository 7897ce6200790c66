"""
MySQL dialect implementation.
"""

from __future__ import annotations

from typing import Final

from .base import BaseDialect


class MySQLDialect(BaseDialect):
    """
    MySQL dialect with backtick quoting and ``LIMIT offset,count`` paging.
    """

    name: Final[str] = "mysql"
    param_style: Final[str] = "pyformat"
    quote_format: Final[str] = "`{0}`"
    identity_sql: Final[str] = "SELECT LAST_INSERT_ID() AS id"
    paged_list_sql: Final[str] = (
        "SELECT {SelectColumns} FROM {TableName}{WhereClause} ORDER BY {OrderBy} "
        "LIMIT {Offset},{RowsPerPage}"
    )
