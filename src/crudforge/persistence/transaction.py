"""
Transaction manager handling nested transactions through savepoints.
"""

from __future__ import annotations

import itertools
from contextlib import contextmanager
from typing import Iterator, List

from ..adapters.base import AdapterTransactionError, DatabaseAdapter
from ..utils import get_logger


class TransactionError(AdapterTransactionError):
    """Raised when commit or rollback is called with no open transaction."""


class TransactionManager:
    """
    Stack of open scopes: the outermost is a real transaction, inner ones are savepoints.
    """

    def __init__(self, adapter: DatabaseAdapter) -> None:
        self.adapter = adapter
        self._stack: List[str | None] = []
        self._savepoint_counter = itertools.count(1)
        self.logger = get_logger("persistence.transaction")

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def active(self) -> bool:
        return bool(self._stack)

    def begin(self) -> None:
        if not self._stack:
            self.adapter.begin()
            self._stack.append(None)
            return
        name = f"sp_{next(self._savepoint_counter)}"
        self.adapter.execute(f"SAVEPOINT {name}")
        self._stack.append(name)
        self.logger.debug("Opened savepoint %s at depth %d", name, self.depth)

    def commit(self) -> None:
        name = self._pop("commit")
        if name is None:
            self.adapter.commit()
            return
        self.adapter.execute(f"RELEASE SAVEPOINT {name}")

    def rollback(self) -> None:
        name = self._pop("roll back")
        if name is None:
            self.adapter.rollback()
            return
        self.adapter.execute(f"ROLLBACK TO SAVEPOINT {name}")
        self.adapter.execute(f"RELEASE SAVEPOINT {name}")

    def reset(self) -> None:
        self._stack.clear()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        self.begin()
        try:
            yield
        except BaseException:
            self.rollback()
            raise
        else:
            self.commit()

    def _pop(self, action: str) -> str | None:
        if not self._stack:
            raise TransactionError(f"No active transaction to {action}.")
        return self._stack.pop()
