"""Correlation identifier shared across execution boundaries.

Purpose
-------
Hold the current transaction id and expose the explicit start / resume / stop
lifecycle used to correlate entries from disjoint executions.

System Role
-----------
A producer starts a transaction and passes the id to the next execution, which
resumes it. Nothing is propagated implicitly.
"""

from __future__ import annotations

from collections.abc import Callable
from uuid import uuid4


def _uuid4_text() -> str:
    return str(uuid4())


class TransactionContext:
    """Track the correlation id for one logical execution.

    Examples
    --------
    >>> ctx = TransactionContext(id_provider=lambda: 'tx-1')
    >>> ctx.current is None
    True
    >>> ctx.start()
    'tx-1'
    >>> ctx.resume('tx-upstream')
    >>> ctx.current
    'tx-upstream'
    >>> ctx.stop()
    >>> ctx.current is None
    True
    """

    def __init__(self, *, id_provider: Callable[[], str] | None = None, current: str | None = None) -> None:
        self._id_provider = id_provider or _uuid4_text
        self._current = current

    @property
    def current(self) -> str | None:
        return self._current

    @property
    def active(self) -> bool:
        return self._current is not None

    def start(self) -> str:
        """Generate a fresh identifier and make it current."""

        self._current = self._id_provider()
        return self._current

    def resume(self, transaction_id: str) -> None:
        """Adopt ``transaction_id`` issued by an earlier execution."""

        if not transaction_id or not transaction_id.strip():
            raise ValueError("transaction_id must not be empty")
        self._current = transaction_id

    def stop(self) -> None:
        self._current = None


__all__ = ["TransactionContext"]
