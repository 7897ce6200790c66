"""
Dialect profiles describing the SQL differences between database families.

A profile is an immutable bundle of an identifier quote format, the SQL that
fetches the last generated identity, and a paged-list template. Paged-list
templates may use ``{SelectColumns}``, ``{TableName}``, ``{WhereClause}``,
``{OrderBy}``, ``{PageNumber}``, ``{RowsPerPage}`` and ``{Offset}``.
``{WhereClause}`` is substituted with a leading space when conditions are
present and with an empty string otherwise, so templates write it directly
after ``{TableName}``.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional, Protocol, Tuple

from ..core.errors import DialectUnsupportedError

PAGED_LIST_PLACEHOLDERS = (
    "SelectColumns",
    "TableName",
    "WhereClause",
    "OrderBy",
    "PageNumber",
    "RowsPerPage",
    "Offset",
)

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


class Dialect(Protocol):
    """
    Strategy interface consumed by naming resolvers and statement builders.
    """

    @property
    def name(self) -> str: ...

    @property
    def param_style(self) -> str: ...

    @property
    def quote_format(self) -> str: ...

    @property
    def identity_sql(self) -> str: ...

    @property
    def paged_list_sql(self) -> Optional[str]: ...

    @property
    def supports_paging(self) -> bool: ...

    def quote_identifier(self, identifier: str) -> str: ...

    def format_table(self, table_name: str, schema: Optional[str] = None) -> str: ...

    def parameter_placeholder(self, name: str) -> str: ...

    def render_paged_list(self, values: Mapping[str, str]) -> str: ...


class BaseDialect:
    """
    Shared behaviour for the built-in profiles.

    Subclasses only declare class attributes. Two profiles compare equal when
    they share a class and every attribute that shapes rendered SQL, which
    lets configuration objects holding them act as cache keys.
    """

    name: str = ""
    param_style: str = "pyformat"
    quote_format: str = '"{0}"'
    identity_sql: str = ""
    paged_list_sql: Optional[str] = None

    def _identity(self) -> Tuple[Any, ...]:
        return (
            type(self),
            self.name,
            self.param_style,
            self.quote_format,
            self.identity_sql,
            self.paged_list_sql,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseDialect):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"

    @property
    def supports_paging(self) -> bool:
        return bool(self.paged_list_sql)

    def quote_identifier(self, identifier: str) -> str:
        closing = self.quote_format[-1]
        escaped = identifier.replace(closing, closing * 2)
        return self.quote_format.format(escaped)

    def format_table(self, table_name: str, schema: Optional[str] = None) -> str:
        if schema:
            return f"{self.quote_identifier(schema)}.{self.quote_identifier(table_name)}"
        return self.quote_identifier(table_name)

    def parameter_placeholder(self, name: str) -> str:
        if self.param_style == "named":
            return f":{name}"
        if self.param_style == "pyformat":
            return f"%({name})s"
        raise DialectUnsupportedError(
            f"Dialect '{self.name}' uses unsupported paramstyle '{self.param_style}'."
        )

    def render_paged_list(self, values: Mapping[str, str]) -> str:
        if not self.paged_list_sql:
            raise DialectUnsupportedError(
                f"GetListPaged is not supported with the '{self.name}' dialect."
            )

        def substitute(match: re.Match[str]) -> str:
            return values.get(match.group(1), match.group(0))

        # Single pass so caller-supplied text is never re-scanned for placeholders.
        return _PLACEHOLDER_RE.sub(substitute, self.paged_list_sql)
