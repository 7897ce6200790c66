"""
Client-side surrogate key generation.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

EMPTY_UUID = uuid.UUID(int=0)


def sequential_uuid(now: Optional[datetime] = None) -> uuid.UUID:
    """
    Return a random UUID whose first six bytes carry the local time.

    Bytes 0-3 hold year (low byte), month, day and hour; bytes 4-5 hold minute
    and second. Keys generated in the same minute therefore share a prefix,
    which keeps clustered indexes from fragmenting, while the remaining ten
    random bytes keep them unique. Ordering within one second is not
    guaranteed.
    """
    moment = now or datetime.now()
    raw = bytearray(uuid.uuid4().bytes)
    raw[0] = moment.year & 0xFF
    raw[1] = moment.month
    raw[2] = moment.day
    raw[3] = moment.hour
    raw[4] = moment.minute
    raw[5] = moment.second
    return uuid.UUID(bytes=bytes(raw))


def is_empty_key(value: Any) -> bool:
    """
    True for the "not yet assigned" sentinels: ``None``, ``0``, ``""`` and the nil UUID.
    """
    if value is None:
        return True
    if isinstance(value, uuid.UUID):
        return value == EMPTY_UUID
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, int) and not isinstance(value, bool):
        return value == 0
    return False
