"""
crudforge public package initialization.

Declare models with :class:`Model` and field descriptors, build statements
with :class:`StatementBuilder`, and run them through a :class:`Session`.
"""

from .config import (  # noqa: F401
    CrudConfig,
    get_config,
    get_dialect,
    reset_config,
    set_column_name_resolver,
    set_dialect,
    set_table_name_resolver,
)
from .core.errors import (  # noqa: F401
    ConfigurationError,
    CrudError,
    DialectUnsupportedError,
    InvalidPageError,
    MissingIdentityError,
    UnknownDialectError,
    UnsafeDeleteError,
    UnsupportedKeyTypeError,
)
from .core.fields import (  # noqa: F401
    BigIntegerField,
    BinaryField,
    BooleanField,
    DateField,
    DateTimeField,
    DecimalField,
    EnumField,
    FloatField,
    IntegerField,
    JSONField,
    SmallIntegerField,
    StringField,
    UUIDField,
)
from .core.model import Model, ModelConfigurationError  # noqa: F401
from .core.naming import SnakeCaseTableNameResolver  # noqa: F401
from .dialects import register_dialect  # noqa: F401
from .identity import sequential_uuid  # noqa: F401
from .persistence import Session  # noqa: F401
from .query import InsertStatement, Statement, StatementBuilder  # noqa: F401

__all__ = [
    "BigIntegerField",
    "BinaryField",
    "BooleanField",
    "ConfigurationError",
    "CrudConfig",
    "CrudError",
    "DateField",
    "DateTimeField",
    "DecimalField",
    "DialectUnsupportedError",
    "EnumField",
    "FloatField",
    "InsertStatement",
    "IntegerField",
    "InvalidPageError",
    "JSONField",
    "MissingIdentityError",
    "Model",
    "ModelConfigurationError",
    "Session",
    "SmallIntegerField",
    "SnakeCaseTableNameResolver",
    "Statement",
    "StatementBuilder",
    "StringField",
    "UUIDField",
    "UnknownDialectError",
    "UnsafeDeleteError",
    "UnsupportedKeyTypeError",
    "get_config",
    "get_dialect",
    "register_dialect",
    "reset_config",
    "sequential_uuid",
    "set_column_name_resolver",
    "set_dialect",
    "set_table_name_resolver",
]
