from __future__ import annotations

import os
from datetime import datetime, timezone
from io import StringIO

import pytest
from rich.console import Console

from lib_log_sieve.adapters import MemorySink
from lib_log_sieve.domain import LogEntry


class RecordingSink(MemorySink):
    """Memory sink that also records the order of ``add``/``flush``/``capture_stack`` calls."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, object]] = []
        self.offsets: list[int] = []
        self.fail_on_flush: Exception | None = None

    def add(self, entry: LogEntry) -> None:
        self.calls.append(("add", entry.summary))
        super().add(entry)

    def flush(self) -> None:
        self.calls.append(("flush", None))
        if self.fail_on_flush is not None:
            raise self.fail_on_flush
        super().flush()

    def capture_stack(self, offset: int) -> str:
        self.offsets.append(offset)
        return super().capture_stack(offset + 1)


class FixedClock:
    def __init__(self, moment: datetime | None = None) -> None:
        self.moment = moment or datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.moment


@pytest.fixture(autouse=True)
def _isolate_log_sieve_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("LOG_SIEVE_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, force_terminal=False, width=200, color_system=None)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()
