"""Redaction helpers for DSN query strings and logged statement parameters."""

from __future__ import annotations

from typing import Any, Mapping

REDACTED_VALUE = "***"

_SENSITIVE_KEY_TOKENS = (
    "password",
    "passwd",
    "pwd",
    "secret",
    "token",
    "apikey",
    "accesskey",
    "privatekey",
    "sslkey",
    "sslcert",
    "sslrootcert",
    "sslca",
)

_SENSITIVE_VALUE_TOKENS = ("password", "secret", "token", "bearer", "authorization")


def _compact(value: str) -> str:
    return "".join(ch for ch in value.lower() if ch.isalnum())


def is_sensitive_key(key: str) -> bool:
    compact = _compact(key)
    return any(token in compact for token in _SENSITIVE_KEY_TOKENS)


def is_sensitive_value(value: str) -> bool:
    lowered = value.lower()
    return any(token in lowered for token in _SENSITIVE_VALUE_TOKENS)


def redact_query_params(query: Mapping[str, str]) -> dict[str, str]:
    return {key: REDACTED_VALUE if is_sensitive_key(key) else val for key, val in query.items()}


def redact_value(value: Any, *, key: str | None = None) -> Any:
    if key is not None and is_sensitive_key(key):
        return REDACTED_VALUE
    if isinstance(value, Mapping):
        return {k: redact_value(v, key=str(k)) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(redact_value(item) for item in value)
    if isinstance(value, str) and is_sensitive_value(value):
        return REDACTED_VALUE
    return value


def redact_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Copy of a named parameter mapping that is safe to attach to log records.
    """
    if not params:
        return {}
    return {name: redact_value(value, key=name) for name, value in params.items()}
