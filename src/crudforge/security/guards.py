"""Guards against statements that would touch every row of a table."""

from __future__ import annotations

from typing import Optional

from ..core.errors import UnsafeDeleteError


def require_where_clause(conditions: Optional[str], *, operation: str = "DeleteList") -> str:
    """
    Return ``conditions`` unchanged if it is non-empty and mentions WHERE.

    The keyword check is a case-insensitive substring test; the text itself is
    never parsed.
    """
    if conditions is None or not conditions.strip():
        raise UnsafeDeleteError(f"{operation} requires a where clause.")
    if "where" not in conditions.lower():
        raise UnsafeDeleteError(
            f"{operation} requires a where clause and must contain the WHERE keyword."
        )
    return conditions
