"""In-memory sink retaining delivered entries.

Useful for tests, the CLI ``check``/``replay`` commands and hosts that post
process entries themselves.
"""

from __future__ import annotations

from lib_log_sieve.application.ports.sink import SinkPort
from lib_log_sieve.domain.entry import LogEntry

from ._stack import StackCaptureMixin


class MemorySink(StackCaptureMixin, SinkPort):
    """Keep every delivered entry in insertion order.

    Examples
    --------
    >>> from lib_log_sieve.domain import Category, LogEntry
    >>> sink = MemorySink()
    >>> sink.add(LogEntry(Category.EVENT, 'T', 'A'))
    >>> sink.flush()
    >>> len(sink.entries), sink.flush_count
    (1, 1)
    """

    def __init__(self) -> None:
        self.entries: list[LogEntry] = []
        self.flush_count = 0

    def add(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    def flush(self) -> None:
        self.flush_count += 1

    def clear(self) -> None:
        self.entries.clear()
        self.flush_count = 0


__all__ = ["MemorySink"]
