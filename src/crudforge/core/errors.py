"""
Error hierarchy for crudforge statement generation.

Configuration errors are raised before any SQL reaches an adapter and are
never worth retrying: the model or the call has to change.
"""

from __future__ import annotations


class CrudError(Exception):
    """Base class for every error raised by crudforge itself."""


class ConfigurationError(CrudError):
    """Raised when a model, dialect, or call cannot produce a statement."""


class ModelConfigurationError(ConfigurationError):
    """Raised when a model class is misconfigured."""


class MissingIdentityError(ConfigurationError):
    """Raised when an identity-dependent operation finds no key field."""

    def __init__(self, model: type, operation: str) -> None:
        self.model = model
        self.operation = operation
        super().__init__(
            f"{operation} requires model '{model.__name__}' to declare a primary_key "
            "field or a field named 'id'."
        )


class UnsupportedKeyTypeError(ConfigurationError):
    """Raised when Insert is asked to return a key type it cannot produce."""

    def __init__(self, key_type: object) -> None:
        self.key_type = key_type
        name = getattr(key_type, "__name__", repr(key_type))
        super().__init__(
            f"Invalid return key type '{name}'; expected int, str, or uuid.UUID."
        )


class DialectUnsupportedError(ConfigurationError):
    """Raised when the active dialect lacks a feature an operation needs."""


class UnknownDialectError(ConfigurationError):
    """Raised when a dialect name does not match any registered profile."""


class UnsafeDeleteError(ConfigurationError):
    """Raised when a bulk delete would run without a WHERE clause."""


class InvalidPageError(ConfigurationError):
    """Raised for page numbers below one."""
