"""
Statement generation configuration.

A :class:`CrudConfig` bundles the dialect profile with the table and column
name resolvers. Builders and sessions take one explicitly; the module-level
helpers manage a process-wide default for callers that prefer not to thread
it through. Setters swap in a new frozen object, so a builder that already
holds a config never observes a half-applied change.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from threading import RLock
from typing import Optional, Union

from .core.naming import (
    ColumnNameResolver,
    DefaultColumnNameResolver,
    DefaultTableNameResolver,
    TableNameResolver,
)
from .dialects import DEFAULT_DIALECT_NAME, Dialect, get_dialect_by_name
from .utils import get_logger

DIALECT_ENV_VAR = "CRUDFORGE_DIALECT"

DEFAULT_TABLE_NAME_RESOLVER = DefaultTableNameResolver()
DEFAULT_COLUMN_NAME_RESOLVER = DefaultColumnNameResolver()

DialectLike = Union[str, Dialect]

logger = get_logger("config")


def _coerce_dialect(dialect: DialectLike) -> Dialect:
    if isinstance(dialect, str):
        return get_dialect_by_name(dialect)
    return dialect


@dataclass(frozen=True)
class CrudConfig:
    """
    Immutable dialect + naming configuration; hashable so it can key caches.
    """

    dialect: Dialect
    table_name_resolver: TableNameResolver = DEFAULT_TABLE_NAME_RESOLVER
    column_name_resolver: ColumnNameResolver = DEFAULT_COLUMN_NAME_RESOLVER

    @classmethod
    def for_dialect(cls, dialect: DialectLike) -> "CrudConfig":
        return cls(dialect=_coerce_dialect(dialect))

    @classmethod
    def from_env(cls, env_var: str = DIALECT_ENV_VAR) -> "CrudConfig":
        """
        Build a config whose dialect comes from ``env_var`` (SQL Server when unset).
        """
        name = os.getenv(env_var) or DEFAULT_DIALECT_NAME
        return cls.for_dialect(name)

    def with_dialect(self, dialect: DialectLike) -> "CrudConfig":
        return replace(self, dialect=_coerce_dialect(dialect))

    def with_table_name_resolver(self, resolver: TableNameResolver) -> "CrudConfig":
        return replace(self, table_name_resolver=resolver)

    def with_column_name_resolver(self, resolver: ColumnNameResolver) -> "CrudConfig":
        return replace(self, column_name_resolver=resolver)


_lock = RLock()
_active: Optional[CrudConfig] = None


def get_config() -> CrudConfig:
    """
    Return the process-wide default, initialising it from the environment once.
    """
    global _active
    config = _active
    if config is not None:
        return config
    with _lock:
        if _active is None:
            _active = CrudConfig.from_env()
            logger.debug("Default dialect initialised to %s", _active.dialect.name)
        return _active


def set_config(config: CrudConfig) -> None:
    global _active
    with _lock:
        _active = config


def reset_config() -> None:
    """
    Forget the process-wide default; the next lookup re-reads the environment.
    """
    global _active
    with _lock:
        _active = None


def set_dialect(dialect: DialectLike) -> None:
    with _lock:
        set_config(get_config().with_dialect(dialect))
    logger.info("Active dialect set to %s", get_dialect())


def get_dialect() -> str:
    return get_config().dialect.name


def set_table_name_resolver(resolver: TableNameResolver) -> None:
    with _lock:
        set_config(get_config().with_table_name_resolver(resolver))


def set_column_name_resolver(resolver: ColumnNameResolver) -> None:
    with _lock:
        set_config(get_config().with_column_name_resolver(resolver))
