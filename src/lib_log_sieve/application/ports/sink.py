"""Sink port describing durable storage of accepted entries.

Purpose
-------
Define the narrow contract the buffered logger relies on when draining its
buffer, so persistence adapters can be swapped without touching policy code.

Contents
--------
* :class:`SinkPort` – runtime-checkable protocol with ``add``, ``flush`` and
  ``capture_stack``.

System Role
-----------
The core never inspects persisted state. Failures raised by ``add`` or
``flush`` propagate unchanged to whoever called ``BufferedLogger.flush``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_sieve.domain.entry import LogEntry


@runtime_checkable
class SinkPort(Protocol):
    """Persist log entries handed over during a flush."""

    def add(self, entry: LogEntry) -> None:
        """Accept ``entry`` for persistence."""

    def flush(self) -> None:
        """Complete persistence of everything added so far."""

    def capture_stack(self, offset: int) -> str:
        """Return the current call stack, omitting ``offset`` caller frames."""


__all__ = ["SinkPort"]
