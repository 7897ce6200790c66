"""
Core building blocks for crudforge models and naming.
"""

from .errors import (
    ConfigurationError,
    CrudError,
    DialectUnsupportedError,
    InvalidPageError,
    MissingIdentityError,
    UnknownDialectError,
    UnsafeDeleteError,
    UnsupportedKeyTypeError,
)
from .fields import (
    BigIntegerField,
    BinaryField,
    BooleanField,
    DateField,
    DateTimeField,
    DecimalField,
    EnumField,
    Field,
    FloatField,
    IntegerField,
    JSONField,
    SmallIntegerField,
    StringField,
    UUIDField,
)
from .model import Model, ModelConfigurationError, ModelMeta, ModelOptions
from .naming import (
    ColumnNameResolver,
    DefaultColumnNameResolver,
    DefaultTableNameResolver,
    SnakeCaseTableNameResolver,
    TableNameResolver,
)

__all__ = [
    "BigIntegerField",
    "BinaryField",
    "BooleanField",
    "ColumnNameResolver",
    "ConfigurationError",
    "CrudError",
    "DateField",
    "DateTimeField",
    "DecimalField",
    "DefaultColumnNameResolver",
    "DefaultTableNameResolver",
    "DialectUnsupportedError",
    "EnumField",
    "Field",
    "FloatField",
    "IntegerField",
    "InvalidPageError",
    "JSONField",
    "MissingIdentityError",
    "Model",
    "ModelConfigurationError",
    "ModelMeta",
    "ModelOptions",
    "SmallIntegerField",
    "SnakeCaseTableNameResolver",
    "StringField",
    "TableNameResolver",
    "UUIDField",
    "UnknownDialectError",
    "UnsafeDeleteError",
    "UnsupportedKeyTypeError",
]
