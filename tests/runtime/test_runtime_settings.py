from __future__ import annotations

from pathlib import Path

import pytest

from lib_log_sieve.runtime import build_runtime_settings


def test_defaults_select_console_sink() -> None:
    settings = build_runtime_settings()

    assert settings.sink == "console"
    assert settings.output is None
    assert settings.level_overrides is None
    assert settings.force_color is False


def test_environment_supplies_missing_arguments(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("LOG_SIEVE_SINK", "JSONL")
    monkeypatch.setenv("LOG_SIEVE_OUTPUT", str(tmp_path / "out.jsonl"))
    monkeypatch.setenv("LOG_SIEVE_LEVEL_OVERRIDES", "Flow=DEBUG")
    monkeypatch.setenv("LOG_SIEVE_NO_COLOR", "yes")

    settings = build_runtime_settings()

    assert settings.sink == "jsonl"
    assert settings.output == tmp_path / "out.jsonl"
    assert settings.level_overrides == "Flow=DEBUG"
    assert settings.no_color is True


def test_arguments_win_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_SIEVE_SINK", "console")
    monkeypatch.setenv("LOG_SIEVE_LEVEL_OVERRIDES", "Flow=DEBUG")
    monkeypatch.setenv("LOG_SIEVE_FORCE_COLOR", "1")

    settings = build_runtime_settings(sink="memory", level_overrides="", force_color=False)

    assert settings.sink == "memory"
    assert settings.level_overrides == ""
    assert settings.force_color is False


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"sink": "syslog"}, "Unsupported sink"),
        ({"sink": "jsonl"}, "requires an output path"),
    ],
)
def test_invalid_settings_raise(kwargs: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        build_runtime_settings(**kwargs)
