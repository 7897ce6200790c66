"""
Adapter protocol, connection configuration, and the shared DB-API runner.

Adapters are the execution collaborator for built statements: they take SQL
text plus a mapping of named parameters, run it on one DB-API connection,
and hand rows back as dictionaries keyed by column label. Driver exceptions
raised while a statement runs are not translated.
"""

from __future__ import annotations

import os
import re
from contextlib import contextmanager, nullcontext
from dataclasses import dataclass
from typing import Any, ContextManager, Dict, Iterator, List, Mapping, Optional, Protocol

from ..dialects.base import Dialect
from ..security.dsns import DSNConfig, parse_dsn
from ..security.redaction import redact_params
from ..utils import get_logger, time_call
from ..utils.performance import resolve_slow_query_ms

Params = Optional[Mapping[str, Any]]
Row = Dict[str, Any]


class AdapterError(RuntimeError):
    """Base error for adapter-related failures."""


class AdapterConfigurationError(AdapterError):
    """Raised when configuration or required dependencies are invalid."""


class AdapterConnectionError(AdapterError):
    """Raised when establishing or using a connection fails."""


class AdapterExecutionError(AdapterError):
    """Raised when a statement has a placeholder with no parameter value."""


class AdapterTransactionError(AdapterError):
    """Raised when transaction operations fail."""


# --------------------------------------------------------------------------- #
# Connection configuration
# --------------------------------------------------------------------------- #
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _to_bool(value: str, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise AdapterConfigurationError(f"Invalid boolean value for '{key}': {value!r}")


def _to_number(value: str, key: str, kind: type) -> Any:
    try:
        return kind(value)
    except ValueError as exc:
        raise AdapterConfigurationError(
            f"Invalid {kind.__name__} value for '{key}': {value!r}"
        ) from exc


@dataclass
class SSLConfig:
    mode: str | None = None
    rootcert: str | None = None
    cert: str | None = None
    key: str | None = None
    ca: str | None = None
    check_hostname: bool | None = None

    # DSN query key -> attribute; PostgreSQL and MySQL spell these differently.
    QUERY_KEYS = {
        "sslmode": "mode",
        "sslrootcert": "rootcert",
        "sslcert": "cert",
        "sslkey": "key",
        "ssl_ca": "ca",
        "ssl_cert": "cert",
        "ssl_key": "key",
    }

    @classmethod
    def pop_from_query(cls, query: Dict[str, str]) -> "SSLConfig | None":
        ssl = cls()
        found = False
        for query_key, attribute in cls.QUERY_KEYS.items():
            if query_key in query:
                setattr(ssl, attribute, query.pop(query_key))
                found = True
        if "ssl_check_hostname" in query:
            ssl.check_hostname = _to_bool(query.pop("ssl_check_hostname"), "ssl_check_hostname")
            found = True
        return ssl if found else None

    def postgres_options(self) -> Dict[str, Any]:
        pairs = {
            "sslmode": self.mode,
            "sslrootcert": self.rootcert,
            "sslcert": self.cert,
            "sslkey": self.key,
        }
        return {key: value for key, value in pairs.items() if value}

    def mysql_options(self) -> Dict[str, Any]:
        ssl: Dict[str, Any] = {
            key: value
            for key, value in (("ca", self.ca), ("cert", self.cert), ("key", self.key))
            if value
        }
        if self.check_hostname is not None:
            ssl["check_hostname"] = self.check_hostname
        return {"ssl": ssl} if ssl else {}


@dataclass
class ConnectionConfig:
    """
    Normalized connection configuration for adapters.

    ``timeout`` is the connect/lock timeout in seconds; per-statement command
    timeouts are passed to :meth:`DatabaseAdapter.execute` instead.
    """

    url: str
    autocommit: bool = False
    isolation_level: str | None = None
    timeout: float | None = None
    options: Dict[str, Any] | None = None
    ssl: SSLConfig | None = None
    dsn: DSNConfig | None = None
    source: str | None = None

    @classmethod
    def from_dsn(cls, dsn: str, **overrides: Any) -> "ConnectionConfig":
        """
        Parse ``dsn``; keyword arguments win over values found in its query string.
        """
        parsed = parse_dsn(dsn)
        query = dict(parsed.query)

        settings: Dict[str, Any] = {"autocommit": False}
        if "autocommit" in query:
            settings["autocommit"] = _to_bool(query.pop("autocommit"), "autocommit")
        if "timeout" in query:
            settings["timeout"] = _to_number(query.pop("timeout"), "timeout", float)
        if "isolation_level" in query:
            settings["isolation_level"] = query.pop("isolation_level")
        settings["ssl"] = SSLConfig.pop_from_query(query)

        options: Dict[str, Any] = {}
        for key, value in query.items():
            options[key] = _to_number(value, key, int) if key == "connect_timeout" else value
        options.update(overrides.pop("options", None) or {})

        settings.update(overrides)
        if settings.get("autocommit") is None:
            settings["autocommit"] = False
        return cls(url=dsn, dsn=parsed, options=options or None, **settings)

    @classmethod
    def from_env(cls, env_var: str, **overrides: Any) -> "ConnectionConfig":
        value = os.getenv(env_var)
        if not value:
            raise AdapterConfigurationError(f"Environment variable {env_var} is not set")
        return cls.from_dsn(value, source=env_var, **overrides)

    def redacted_dsn(self) -> str:
        if self.dsn:
            return self.dsn.redacted()
        return self.url

    def descriptive_label(self) -> str:
        redacted = self.redacted_dsn()
        if self.source:
            return f"{self.source} ({redacted})"
        return redacted


# --------------------------------------------------------------------------- #
# Parameter and row helpers
# --------------------------------------------------------------------------- #
_NAMED_PLACEHOLDER_RE = re.compile(r"(?<![:\w]):([A-Za-z_]\w*)")
_PYFORMAT_PLACEHOLDER_RE = re.compile(r"(?<!%)%\(([A-Za-z_]\w*)\)s")
_QUOTED_LITERAL_RE = re.compile(r"'(?:[^']|'')*'")


def placeholder_names(sql: str, param_style: str) -> set[str]:
    """
    Names referenced by ``:name`` or ``%(name)s`` placeholders outside string literals.
    """
    stripped = _QUOTED_LITERAL_RE.sub("''", sql)
    if param_style == "named":
        return set(_NAMED_PLACEHOLDER_RE.findall(stripped))
    if param_style == "pyformat":
        return set(_PYFORMAT_PLACEHOLDER_RE.findall(stripped))
    raise AdapterConfigurationError(f"Unsupported paramstyle '{param_style}'.")


def bind_parameters(sql: str, params: Mapping[str, Any], param_style: str) -> Dict[str, Any]:
    """
    The entries of ``params`` that ``sql`` references; unused names are dropped.
    """
    names = placeholder_names(sql, param_style)
    missing = sorted(names - set(params))
    if missing:
        raise AdapterExecutionError(f"Missing parameters for placeholders: {', '.join(missing)}.")
    return {name: params[name] for name in params if name in names}


def row_to_dict(cursor: Any, row: Any) -> Row:
    if isinstance(row, Mapping):
        return dict(row)
    columns = [column[0] for column in cursor.description or ()]
    return dict(zip(columns, row))


class DatabaseAdapter(Protocol):
    """
    Adapter interface exposing database operations used by higher layers.
    """

    dialect: Dialect
    slow_query_ms: int

    def connect(self, config: ConnectionConfig) -> Any:
        """
        Establish a connection handle using the supplied configuration.
        """

    def close(self) -> None:
        """
        Close underlying resources. Implementations should be idempotent.
        """

    def execute(self, sql: str, params: Params = None, *, timeout: float | None = None) -> Any:
        """
        Execute one statement with named parameters, returning the cursor.
        """

    def fetch_one(self, sql: str, params: Params = None, *, timeout: float | None = None) -> Row | None:
        """
        Execute a query and return its first row, or ``None``.
        """

    def fetch_all(self, sql: str, params: Params = None, *, timeout: float | None = None) -> List[Row]:
        """
        Execute a query and return every row.
        """

    def iterate(self, sql: str, params: Params = None, *, timeout: float | None = None) -> Iterator[Row]:
        """
        Execute a query and yield rows as the cursor produces them.
        """

    def begin(self) -> None:
        """
        Start a transaction.
        """

    def commit(self) -> None:
        """
        Commit the current transaction.
        """

    def rollback(self) -> None:
        """
        Roll back the current transaction.
        """


@dataclass
class ConnectionState:
    connection: Any
    config: ConnectionConfig
    driver: Any = None


class DBAPIAdapter:
    """
    Statement runner shared by the DB-API 2.0 backed adapters.

    Subclasses implement :meth:`connect` and may override :meth:`prepare_params`
    (driver-specific value conversion) and :meth:`command_timeout` (how a
    per-statement timeout is enforced).
    """

    dialect: Dialect
    logger_name = "adapters"
    fetch_size = 100

    def __init__(self, slow_query_ms: int | None = None) -> None:
        self._state: ConnectionState | None = None
        self.logger = get_logger(self.logger_name)
        self.slow_query_ms = resolve_slow_query_ms(default=100, override=slow_query_ms)

    @property
    def connected(self) -> bool:
        return self._state is not None

    def connect(self, config: ConnectionConfig) -> Any:
        raise NotImplementedError

    def close(self) -> None:
        if self._state:
            try:
                self._state.connection.close()
            finally:
                self._state = None

    def _ensure_connection(self) -> Any:
        if not self._state:
            raise AdapterConnectionError(f"{type(self).__name__} is not connected.")
        return self._state.connection

    # Execution -----------------------------------------------------------
    def prepare_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return params

    def command_timeout(self, connection: Any, timeout: float) -> ContextManager[None]:
        return nullcontext()

    def execute(self, sql: str, params: Params = None, *, timeout: float | None = None) -> Any:
        connection = self._ensure_connection()
        bound = bind_parameters(sql, params or {}, self.dialect.param_style)
        cursor = connection.cursor()
        guard = self.command_timeout(connection, timeout) if timeout else nullcontext()
        with guard, time_call(
            f"{self.dialect.name}.execute",
            self.logger,
            sql=sql,
            params=redact_params(bound),
            threshold_ms=self.slow_query_ms,
        ):
            if bound:
                cursor.execute(sql, self.prepare_params(bound))
            else:
                cursor.execute(sql)
        return cursor

    def fetch_one(self, sql: str, params: Params = None, *, timeout: float | None = None) -> Row | None:
        cursor = self.execute(sql, params, timeout=timeout)
        row = cursor.fetchone()
        return None if row is None else row_to_dict(cursor, row)

    def fetch_all(self, sql: str, params: Params = None, *, timeout: float | None = None) -> List[Row]:
        cursor = self.execute(sql, params, timeout=timeout)
        return [row_to_dict(cursor, row) for row in cursor.fetchall()]

    def iterate(self, sql: str, params: Params = None, *, timeout: float | None = None) -> Iterator[Row]:
        cursor = self.execute(sql, params, timeout=timeout)
        return self._drain(cursor)

    def _drain(self, cursor: Any) -> Iterator[Row]:
        while True:
            batch = cursor.fetchmany(self.fetch_size)
            if not batch:
                return
            for row in batch:
                yield row_to_dict(cursor, row)

    # Transactions --------------------------------------------------------
    def begin(self) -> None:
        connection = self._ensure_connection()
        connection.cursor().execute("BEGIN")

    def commit(self) -> None:
        self._ensure_connection().commit()

    def rollback(self) -> None:
        self._ensure_connection().rollback()

    @staticmethod
    @contextmanager
    def _session_setting(cursor: Any, apply_sql: str, reset_sql: str) -> Iterator[None]:
        cursor.execute(apply_sql)
        try:
            yield
        finally:
            cursor.execute(reset_sql)
