"""Security helpers for crudforge."""

from .dsns import DSNConfig, parse_dsn
from .guards import require_where_clause
from .redaction import redact_params, redact_query_params

__all__ = ["DSNConfig", "parse_dsn", "redact_params", "redact_query_params", "require_where_clause"]
