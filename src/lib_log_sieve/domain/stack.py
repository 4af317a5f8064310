"""Depth bookkeeping for automatic stack capture."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator


class StackOffsetTracker:
    """Count wrapper layers between the caller and the capture point.

    Immediate (auto-flushing) operations wrap their buffered counterpart in
    :meth:`immediate`, which adds one frame for the duration of the call and
    resets the counter afterwards.

    Examples
    --------
    >>> tracker = StackOffsetTracker()
    >>> with tracker.immediate():
    ...     tracker.offset
    1
    >>> tracker.offset
    0
    """

    def __init__(self) -> None:
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    def increment(self, frames: int = 1) -> int:
        self._offset += frames
        return self._offset

    def reset(self) -> None:
        self._offset = 0

    @contextmanager
    def immediate(self) -> Iterator[int]:
        self.increment()
        try:
            yield self._offset
        finally:
            self.reset()


__all__ = ["StackOffsetTracker"]
