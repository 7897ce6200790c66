"""
Statement builders for crudforge.
"""

from .builders import SUPPORTED_KEY_TYPES, InsertStatement, Statement, StatementBuilder

__all__ = ["InsertStatement", "Statement", "StatementBuilder", "SUPPORTED_KEY_TYPES"]
