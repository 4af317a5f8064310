"""CLI behaviour coverage for the click command group."""

from __future__ import annotations

import json
import re
import sys
from pathlib import Path
from typing import Callable

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from lib_log_sieve import __init__conf__
from lib_log_sieve import cli as cli_mod
from lib_log_sieve.adapters import read_json_lines
from lib_log_sieve.cli import summary_info

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")
UUID_RE = re.compile(r"transaction [0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")


def strip_ansi(text: str) -> str:
    """Return ``text`` without ANSI colour codes.

    Examples
    --------
    >>> strip_ansi("\x1b[31mred\x1b[0m")
    'red'
    """

    return ANSI_RE.sub("", text)


def run_cli(args: list[str] | None = None) -> tuple[int, str, BaseException | None]:
    """Invoke the click command group with ``CliRunner`` and capture output."""

    runner = CliRunner()
    original_argv = sys.argv
    sys.argv = [__init__conf__.shell_command]
    try:
        result = runner.invoke(
            cli_mod.cli,
            args or [],
            prog_name=__init__conf__.shell_command,
        )
    finally:
        sys.argv = original_argv
    return result.exit_code, strip_ansi(result.output), result.exception


def _records_file(tmp_path: Path, count: int = 2) -> Path:
    records = [
        {
            "category": "Flow",
            "type": "Screen",
            "area": "Billing",
            "summary": f"step {index}",
            "details": "d",
            "interviewGUID": f"g{index}",
            "level": "INFO",
        }
        for index in range(count)
    ]
    path = tmp_path / "records.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def test_cli_without_subcommand_prints_summary() -> None:
    exit_code, stdout, _ = run_cli()

    assert exit_code == 0
    assert stdout == summary_info()


def test_cli_info_command_matches_summary() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, ["info"])

    assert result.exit_code == 0
    assert result.output == summary_info()


def test_summary_info_lists_metadata() -> None:
    banner = summary_info()

    assert banner.startswith(f"Info for {__init__conf__.name}:")
    assert f"version       = {__init__conf__.version}" in banner


def test_cli_version_option() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert stdout.strip() == __init__conf__.version


def test_cli_no_traceback_option(monkeypatch: pytest.MonkeyPatch) -> None:
    """`--no-traceback` should disable verbose tracebacks for subsequent commands."""

    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    exit_code, _stdout, _exception = run_cli(["--no-traceback", "info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


def test_cli_check_reports_drop_with_matching_override() -> None:
    exit_code, stdout, _ = run_cli(
        ["check", "--overrides", "Flow/*/Billing=WARNING", "--category", "Flow", "--type", "Screen", "--area", "Billing", "--level", "DEBUG"]
    )

    assert exit_code == 0
    assert stdout.strip() == "drop (Flow/Screen/Billing at DEBUG; override Flow/*/Billing=WARNING)"


def test_cli_check_allows_without_overrides() -> None:
    exit_code, stdout, _ = run_cli(["check", "--area", "Billing", "--level", "FINEST"])

    assert exit_code == 0
    assert stdout.startswith("allow (Flow/*/Billing at FINEST; no matching override)")


def test_cli_check_rejects_bad_override_string() -> None:
    exit_code, _stdout, _exception = run_cli(["check", "--overrides", "Flow=LOUD", "--level", "INFO"])

    assert exit_code == 1


def test_cli_replay_counts_persisted_entries(tmp_path: Path) -> None:
    records = _records_file(tmp_path)

    exit_code, stdout, _ = run_cli(["replay", str(records), "--sink", "memory"])

    assert exit_code == 0
    assert stdout.startswith("2 record(s) processed, 2 persisted, ")
    assert UUID_RE.search(stdout.strip())


def test_cli_replay_applies_overrides_and_resumes_transaction(tmp_path: Path) -> None:
    records = _records_file(tmp_path)

    exit_code, stdout, _ = run_cli(
        ["replay", str(records), "--sink", "memory", "--overrides", "Flow=ERROR", "--transaction-id", "tx-9"]
    )

    assert exit_code == 0
    assert stdout.strip() == "2 record(s) processed, 0 persisted, transaction tx-9"


def test_cli_replay_writes_jsonl(tmp_path: Path) -> None:
    records = _records_file(tmp_path, count=3)
    output = tmp_path / "out" / "entries.jsonl"

    exit_code, _stdout, _ = run_cli(["replay", str(records), "--sink", "jsonl", "--output", str(output)])

    assert exit_code == 0
    documents = read_json_lines(output)
    assert [doc["interview_guid"] for doc in documents] == ["g0", "g1", "g2"]
    assert len({doc["transaction_id"] for doc in documents}) == 1


def test_cli_replay_rejects_non_array_payload(tmp_path: Path) -> None:
    path = tmp_path / "records.json"
    path.write_text('{"category": "Flow"}', encoding="utf-8")

    exit_code, _stdout, _ = run_cli(["replay", str(path), "--sink", "memory"])

    assert exit_code == 1


def test_cli_dml_reports_failures(tmp_path: Path) -> None:
    path = tmp_path / "outcomes.json"
    path.write_text(
        json.dumps(
            [
                {"operation": "Save", "success": True, "id": "a"},
                {"operation": "Save", "success": False, "id": "b", "errors": ["locked"]},
            ]
        ),
        encoding="utf-8",
    )

    exit_code, stdout, _ = run_cli(["dml", str(path), "--area", "Billing", "--sink", "memory"])

    assert exit_code == 0
    assert stdout.strip() == "logged failures for 2 outcome(s)"


def test_main_restores_traceback_preferences(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)

    recorded: dict[str, bool] = {}

    def fake_run_cli(command: Callable[..., int], argv: list[str] | None = None, *, prog_name: str | None = None, **_: object) -> int:
        runner = CliRunner()
        result = runner.invoke(command, ["info"] if argv is None else argv)
        if result.exception is not None and not isinstance(result.exception, SystemExit):
            raise result.exception
        recorded["traceback"] = lib_cli_exit_tools.config.traceback
        recorded["traceback_force_color"] = lib_cli_exit_tools.config.traceback_force_color
        return result.exit_code

    monkeypatch.setattr(lib_cli_exit_tools, "run_cli", fake_run_cli)

    exit_code = cli_mod.main(["--traceback", "info"])

    assert exit_code == 0
    assert recorded == {"traceback": True, "traceback_force_color": True}
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


def test_cli_dml_rejects_non_object_items(tmp_path: Path) -> None:
    path = tmp_path / "outcomes.json"
    path.write_text(json.dumps([{"operation": "Save", "success": False, "id": "b"}, "oops"]), encoding="utf-8")

    exit_code, stdout, _ = run_cli(["dml", str(path), "--area", "Billing", "--sink", "memory"])

    assert exit_code == 1
    assert "outcome objects" in stdout
