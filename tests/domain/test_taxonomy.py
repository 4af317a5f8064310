from __future__ import annotations

import pytest

from lib_log_sieve.domain.taxonomy import PRESETS, Category, PostProcessing, post_processing_controls


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Flow", Category.WORKFLOW),
        ("workflow", Category.WORKFLOW),
        ("ERROR", Category.ERROR),
        ("integration", Category.INTEGRATION),
        (" Frontend ", Category.FRONTEND),
    ],
)
def test_category_from_name_matches_value_or_member_name(raw: str, expected: Category) -> None:
    assert Category.from_name(raw) is expected


def test_category_from_name_rejects_unknown_values() -> None:
    with pytest.raises(ValueError, match="Unknown category"):
        Category.from_name("Telemetry")


def test_category_parse_defaults_to_workflow_with_diagnostic() -> None:
    category, diagnostic = Category.parse("Telemetry")

    assert category is Category.WORKFLOW
    assert diagnostic == "Invalid category 'Telemetry' supplied; defaulted to Flow."


def test_category_parse_blank_is_silent() -> None:
    assert Category.parse("") == (Category.WORKFLOW, None)


def test_post_processing_controls_cover_every_toggle() -> None:
    controls = post_processing_controls(PostProcessing.STACK_TRACE)

    assert set(controls) == {member.value for member in PostProcessing}
    assert [name for name, enabled in controls.items() if enabled] == ["stack_trace"]


def test_presets_are_read_only() -> None:
    with pytest.raises(TypeError):
        PRESETS["error"]["stack_trace"] = False  # type: ignore[index]


def test_error_preset_enables_stack_trace_and_event_preset_does_not() -> None:
    assert PRESETS["error"]["stack_trace"] is True
    assert PRESETS["event"]["stack_trace"] is False
    assert PRESETS["workflow"]["workflow_details"] is True
