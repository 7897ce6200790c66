"""
Table and column name resolvers.

Resolvers turn a model class or a field into the physical, already-quoted
identifier used in generated SQL. They are pure: the same input always
yields the same string, which is what allows the metadata cache to
memoize their output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Type

from ..utils.logging import get_logger
from ..utils.naming import camel_to_snake, split_qualified_name

if TYPE_CHECKING:
    from ..dialects.base import Dialect
    from .fields import Field
    from .model import Model


logger = get_logger("core.naming")


class TableNameResolver(Protocol):
    def resolve_table_name(self, model: Type["Model"], dialect: "Dialect") -> str: ...


class ColumnNameResolver(Protocol):
    def resolve_column_name(self, field: "Field", dialect: "Dialect") -> str: ...


class DefaultTableNameResolver:
    """
    Quote the class name, or the ``Meta.table`` override when present.

    A ``Meta.schema`` override, or a dotted ``Meta.table``, prefixes the
    quoted schema name.
    """

    def default_table_name(self, model: Type["Model"]) -> str:
        return model.__name__

    def resolve_table_name(self, model: Type["Model"], dialect: "Dialect") -> str:
        options = model._meta
        if options.table_name:
            schema, table = split_qualified_name(options.table_name)
        else:
            schema, table = None, self.default_table_name(model)
        return dialect.format_table(table, options.schema or schema)


class SnakeCaseTableNameResolver(DefaultTableNameResolver):
    """
    Derive ``order_line`` style table names from ``OrderLine`` classes.
    """

    def default_table_name(self, model: Type["Model"]) -> str:
        return camel_to_snake(model.__name__)


class DefaultColumnNameResolver:
    """
    Quote the attribute name, or the ``db_column`` override when present.
    """

    def resolve_column_name(self, field: "Field", dialect: "Dialect") -> str:
        name = field.require_name()
        if field.db_column:
            logger.debug("Column name for %s overridden to %s", name, field.db_column)
            return dialect.quote_identifier(field.db_column)
        return dialect.quote_identifier(name)
