"""Concrete sinks and rule sources implementing the application ports."""

from __future__ import annotations

from .console import RichConsoleSink
from .jsonl import JsonLinesSink, read_json_lines
from .memory import MemorySink
from .rule_sources import (
    ChainedRuleSource,
    InlineRuleSource,
    JsonRuleSource,
    StaticRuleSource,
    parse_level_overrides,
    rule_from_row,
)

__all__ = [
    "ChainedRuleSource",
    "InlineRuleSource",
    "JsonLinesSink",
    "JsonRuleSource",
    "MemorySink",
    "RichConsoleSink",
    "StaticRuleSource",
    "parse_level_overrides",
    "read_json_lines",
    "rule_from_row",
]
