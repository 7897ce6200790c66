"""Structured logging helpers for crudforge."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

ROOT_LOGGER_NAME = "crudforge"

_correlation_id: ContextVar[str | None] = ContextVar("crudforge_correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_correlation_id(value: Optional[str] = None) -> str:
    token = value or uuid.uuid4().hex
    _correlation_id.set(token)
    return token


def get_correlation_id() -> str:
    cid = _correlation_id.get()
    if cid is None:
        cid = set_correlation_id()
    return cid


@contextmanager
def time_call(
    name: str,
    logger: logging.Logger,
    *,
    sql: str | None = None,
    params: Any = None,
    threshold_ms: int = 100,
) -> Iterator[None]:
    """
    Log how long the wrapped block took; WARNING once ``threshold_ms`` is reached.

    ``params`` must already be redacted by the caller.
    """
    start = time.monotonic()
    try:
        yield
    finally:
        elapsed_ms = (time.monotonic() - start) * 1000
        level = logging.WARNING if elapsed_ms >= threshold_ms else logging.DEBUG
        extra = {"sql": sql, "params": params, "elapsed_ms": elapsed_ms}
        logger.log(level, "%s took %.2fms", name, elapsed_ms, extra=extra)
