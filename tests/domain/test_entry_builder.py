from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from lib_log_sieve.domain import Category, IntegrationPayload, LogEntry, LogEntryBuilder, LogLevel


def test_log_entry_requires_timezone_aware_timestamp() -> None:
    with pytest.raises(ValueError, match="timezone-aware"):
        LogEntry(Category.EVENT, "T", "A", timestamp=datetime(2025, 1, 1))


def test_log_entry_normalises_timestamp_to_utc() -> None:
    local = datetime(2025, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))

    entry = LogEntry(Category.EVENT, "T", "A", timestamp=local)

    assert entry.timestamp == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_log_entry_mappings_are_read_only() -> None:
    entry = LogEntry(Category.EVENT, "T", "A", attributes={"k": 1})

    with pytest.raises(TypeError):
        entry.attributes["k"] = 2  # type: ignore[index]


def test_log_entry_to_json_is_sorted_and_complete() -> None:
    entry = LogEntry(
        Category.INTEGRATION,
        "Callout",
        "Billing",
        LogLevel.ERROR,
        summary="timeout",
        related_object_ids=frozenset({"b", "a"}),
        integration_payload=IntegrationPayload(request="GET /", response=None),
        timestamp=datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc),
    )

    data = json.loads(entry.to_json())

    assert data["category"] == "Integration"
    assert data["level"] == "ERROR"
    assert data["related_object_ids"] == ["a", "b"]
    assert data["integration_payload"] == {"request": "GET /", "response": None}
    assert data["timestamp"] == "2025-09-23T12:00:00+00:00"


def test_builder_defaults_to_info_and_workflow_category() -> None:
    entry = LogEntryBuilder().type("X").area("Y").build()

    assert entry.level is LogLevel.INFO
    assert entry.category is Category.WORKFLOW
    assert entry.details == ""


def test_builder_appends_level_and_category_diagnostics_to_details() -> None:
    entry = LogEntryBuilder().category("Nope").level("BOGUS").details("original").build()

    assert entry.details == (
        "original\n\n"
        "Invalid category 'Nope' supplied; defaulted to Flow.\n\n"
        "Invalid log level 'BOGUS' supplied; defaulted to INFO."
    )


def test_builder_drops_diagnostic_once_a_valid_value_is_set() -> None:
    entry = LogEntryBuilder().level("BOGUS").level(LogLevel.WARNING).build()

    assert entry.level is LogLevel.WARNING
    assert "BOGUS" not in entry.details


def test_builder_build_is_repeatable() -> None:
    builder = LogEntryBuilder().type("X").area("Y").summary("s").attribute("k", [1])

    assert builder.build() == builder.build()


def test_clone_does_not_share_collections_with_source() -> None:
    template = LogEntryBuilder().area("Billing").related_objects(["r1"]).attribute("tags", ["a"])

    twin = template.clone()
    twin.related_objects(["r2"]).attribute("extra", 1).post_processing({"user_info": True})

    original = template.build()
    copied = twin.build()
    assert original.related_object_ids == frozenset({"r1"})
    assert copied.related_object_ids == frozenset({"r1", "r2"})
    assert "extra" not in original.attributes
    assert dict(original.post_processing) == {}
    assert copied.area == "Billing"


def test_related_objects_skip_empty_identifiers() -> None:
    entry = LogEntryBuilder().related_objects(["a", None, "", "b"]).build()

    assert entry.related_object_ids == frozenset({"a", "b"})


def test_post_processing_merges_toggles() -> None:
    entry = LogEntryBuilder().post_processing({"user_info": True}).post_processing({"stack_trace": True}).build()

    assert dict(entry.post_processing) == {"user_info": True, "stack_trace": True}


def test_has_stacktrace_reflects_explicit_value() -> None:
    builder = LogEntryBuilder()
    assert builder.has_stacktrace is False

    builder.stacktrace("frame")

    assert builder.has_stacktrace is True
