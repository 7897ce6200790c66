"""
Identifier helpers used by the default naming resolvers.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

_WORD_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def camel_to_snake(name: str) -> str:
    """
    Convert ``OrderLine`` or ``HTTPRequestLog`` to ``order_line`` / ``http_request_log``.
    """
    return _WORD_BOUNDARY_RE.sub("_", name).lower()


def split_qualified_name(name: str) -> Tuple[Optional[str], str]:
    """
    Split ``"sales.Orders"`` into ``("sales", "Orders")``; bare names have no schema.
    """
    if "." in name:
        schema, table = name.split(".", 1)
        return schema or None, table
    return None, name
