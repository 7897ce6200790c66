"""
Field classification and the process-wide metadata cache.
"""

from .cache import MetadataCache, metadata_cache
from .classifier import (
    identity_fields,
    insertable_fields,
    scaffoldable_fields,
    selectable_fields,
    updateable_fields,
)

__all__ = [
    "MetadataCache",
    "identity_fields",
    "insertable_fields",
    "metadata_cache",
    "scaffoldable_fields",
    "selectable_fields",
    "updateable_fields",
]
