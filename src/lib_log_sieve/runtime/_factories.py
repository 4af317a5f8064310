"""Factories translating :class:`RuntimeSettings` into adapters."""

from __future__ import annotations

from uuid import uuid4

from lib_log_sieve.adapters import (
    ChainedRuleSource,
    InlineRuleSource,
    JsonLinesSink,
    JsonRuleSource,
    MemorySink,
    RichConsoleSink,
)
from lib_log_sieve.application.ports import IdProvider, LevelRuleSource, SinkPort
from lib_log_sieve.application.use_cases import SystemClock

from ._settings import RuntimeSettings


class UuidProvider(IdProvider):
    """Generate ``8-4-4-4-12`` random identifiers for transactions."""

    def __call__(self) -> str:
        return str(uuid4())


def create_sink(settings: RuntimeSettings) -> SinkPort:
    if settings.sink == "memory":
        return MemorySink()
    if settings.sink == "jsonl":
        if settings.output is None:
            raise ValueError("The jsonl sink requires an output path")
        return JsonLinesSink(settings.output)
    return RichConsoleSink(
        force_color=settings.force_color,
        no_color=settings.no_color,
        template=settings.console_template,
    )


def create_rule_source(settings: RuntimeSettings) -> LevelRuleSource:
    """Chain the rules file (if any) with inline overrides; inline rows win."""

    sources: list[LevelRuleSource] = []
    if settings.rules_file is not None:
        sources.append(JsonRuleSource(settings.rules_file))
    if settings.level_overrides:
        sources.append(InlineRuleSource(settings.level_overrides))
    return ChainedRuleSource(sources)


__all__ = ["SystemClock", "UuidProvider", "create_rule_source", "create_sink"]
