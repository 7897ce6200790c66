"""
Name-based lookup of dialect profiles.
"""

from __future__ import annotations

from threading import RLock
from typing import Dict, Iterable, List

from ..core.errors import UnknownDialectError
from .base import Dialect
from .mysql import MySQLDialect
from .postgres import PostgresDialect
from .sqlite import SQLiteDialect
from .sqlserver import SQLServerDialect

DEFAULT_DIALECT_NAME = "sqlserver"

_lock = RLock()
_dialects: Dict[str, Dialect] = {}
_aliases: Dict[str, str] = {}


def _normalize(name: str) -> str:
    return "".join(name.split()).lower()


def register_dialect(dialect: Dialect, aliases: Iterable[str] = ()) -> None:
    """
    Make ``dialect`` selectable by its name and any extra aliases.
    """
    canonical = _normalize(dialect.name)
    with _lock:
        _dialects[canonical] = dialect
        _aliases[canonical] = canonical
        for alias in aliases:
            _aliases[_normalize(alias)] = canonical


def get_dialect_by_name(name: str) -> Dialect:
    key = _normalize(name)
    with _lock:
        canonical = _aliases.get(key)
        if canonical is None:
            known = ", ".join(sorted(_dialects))
            raise UnknownDialectError(f"Unknown dialect '{name}'. Known dialects: {known}.")
        return _dialects[canonical]


def available_dialects() -> List[str]:
    with _lock:
        return sorted(_dialects)


register_dialect(SQLServerDialect(), aliases=("SQL Server", "mssql", "default"))
register_dialect(PostgresDialect(), aliases=("postgres", "pgsql"))
register_dialect(SQLiteDialect(), aliases=("sqlite3",))
register_dialect(MySQLDialect(), aliases=("mariadb",))
