from __future__ import annotations

from pathlib import Path

from rich.console import Console

from lib_log_sieve.adapters import (
    ChainedRuleSource,
    InlineRuleSource,
    JsonLinesSink,
    JsonRuleSource,
    MemorySink,
    RichConsoleSink,
    StaticRuleSource,
)
from lib_log_sieve.application.ports import ClockPort, IdProvider, LevelRuleSource, SinkPort
from lib_log_sieve.application.use_cases import BufferedLogger
from lib_log_sieve.application.use_cases import SystemClock as UseCaseClock
from lib_log_sieve.domain.entry import LogEntry
from lib_log_sieve.runtime._factories import SystemClock, UuidProvider


class _FakeSink(SinkPort):
    def __init__(self) -> None:
        self.entries: list[LogEntry] = []

    def add(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    def flush(self) -> None:
        return None

    def capture_stack(self, offset: int) -> str:
        return f"offset={offset}"


def test_sink_adapters_satisfy_sink_port(tmp_path: Path) -> None:
    sinks = [
        MemorySink(),
        JsonLinesSink(tmp_path / "log.jsonl"),
        RichConsoleSink(console=Console(record=True)),
        _FakeSink(),
    ]

    assert all(isinstance(sink, SinkPort) for sink in sinks)


def test_rule_sources_satisfy_rule_source_port(tmp_path: Path) -> None:
    sources = [
        StaticRuleSource([]),
        JsonRuleSource(tmp_path / "rules.json"),
        InlineRuleSource(None),
        ChainedRuleSource([]),
    ]

    assert all(isinstance(source, LevelRuleSource) for source in sources)


def test_clock_and_id_provider_ports() -> None:
    clock = SystemClock()
    provider = UuidProvider()

    assert isinstance(clock, ClockPort)
    assert isinstance(provider, IdProvider)
    assert clock.now().tzinfo is not None
    assert len(provider()) == 36


def test_logger_defaults_to_the_runtime_clock() -> None:
    log = BufferedLogger(sink=MemorySink())
    log.add_warning("Checkout", "Cart", "slow")

    assert UseCaseClock is SystemClock
    assert log.pending[0].timestamp.tzinfo is not None
