from __future__ import annotations

import json
from pathlib import Path

import pytest

from lib_log_sieve.adapters import (
    ChainedRuleSource,
    InlineRuleSource,
    JsonRuleSource,
    StaticRuleSource,
    parse_level_overrides,
    rule_from_row,
)
from lib_log_sieve.domain import Category, LevelRegistry, LevelRule, LogEntry, LogLevel


def test_rule_from_row_treats_star_and_blank_as_wildcards() -> None:
    rule = rule_from_row({"category": "*", "type": "", "area": "Billing", "level": "warning"})

    assert rule == LevelRule(LogLevel.WARNING, category=None, type=None, area="Billing")


@pytest.mark.parametrize(
    "row, message",
    [
        ({"area": "Billing"}, "missing 'level'"),
        ({"area": "Billing", "level": "LOUD"}, "Unknown log level"),
    ],
)
def test_rule_from_row_rejects_bad_rows(row: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        rule_from_row(row)


def test_static_source_accepts_rows_and_rules() -> None:
    ready = LevelRule(LogLevel.ERROR)

    rules = StaticRuleSource([{"category": "Flow", "level": "DEBUG"}, ready]).load()

    assert rules == [LevelRule(LogLevel.DEBUG, category="Flow"), ready]


def test_json_source_reads_array_file(tmp_path: Path) -> None:
    path = tmp_path / "rules.json"
    path.write_text(json.dumps([{"category": "Flow", "area": "Billing", "level": "FINE"}]), encoding="utf-8")

    rules = JsonRuleSource(path).load()

    assert rules == [LevelRule(LogLevel.FINE, category="Flow", area="Billing")]


@pytest.mark.parametrize("content, message", [("{not json", "not valid JSON"), ('{"level": "INFO"}', "JSON array")])
def test_json_source_rejects_malformed_files(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / "rules.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError, match=message):
        JsonRuleSource(path).load()


def test_parse_level_overrides_fills_missing_parts_with_wildcards() -> None:
    rules = parse_level_overrides("Flow=DEBUG, Event/Audit=ERROR")

    assert rules == [
        LevelRule(LogLevel.DEBUG, category="Flow"),
        LevelRule(LogLevel.ERROR, category="Event", type="Audit"),
    ]


@pytest.mark.parametrize("raw", ["Flow", "a/b/c/d=INFO"])
def test_parse_level_overrides_rejects_malformed_chunks(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_level_overrides(raw)


def test_chained_source_lets_later_rows_win_in_registry(tmp_path: Path) -> None:
    path = tmp_path / "rules.json"
    path.write_text(json.dumps([{"area": "Billing", "level": "ERROR"}]), encoding="utf-8")
    source = ChainedRuleSource([JsonRuleSource(path), InlineRuleSource("*/*/Billing=DEBUG")])
    registry = LevelRegistry(source.load)

    assert registry.resolve(LogEntry(Category.EVENT, "Audit", "Billing", LogLevel.DEBUG)) is True


def test_override_rows_may_name_the_category_member() -> None:
    registry = LevelRegistry(lambda: parse_level_overrides("Workflow/*/*=ERROR"))

    assert registry.resolve(LogEntry(Category.WORKFLOW, "Checkout", "Billing", LogLevel.DEBUG)) is False
    assert registry.resolve(LogEntry(Category.EVENT, "Checkout", "Billing", LogLevel.DEBUG)) is True
