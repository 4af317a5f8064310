"""Command line interface for inspecting and exercising the decision engine.

Purpose
-------
Give operators a quick way to check how level overrides treat a given
classifier, and to replay recorded workflow batches or batch-operation
results through a configured sink.

Contents
--------
* :func:`cli` – click group with ``info``, ``check``, ``replay`` and
  ``dml`` commands.
* :func:`main` – entry point delegating exit-code handling to
  ``lib_cli_exit_tools``.
* :func:`summary_info` – metadata banner shared with the package surface.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as log_config
from .application.use_cases import log_workflow_records
from .domain import DMLOutcome, LogEntryBuilder
from .runtime import SINK_CHOICES, build_runtime_settings, create_logger, create_registry

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def summary_info() -> str:
    """Return the metadata banner used by the CLI and docs."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


def _load_json_array(path: Path, what: str) -> list[Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise click.ClickException(f"{path} must contain a JSON array of {what}")
    return payload


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(version)s")
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python tracebacks on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load LOG_SIEVE_* settings from the nearest .env (also via {log_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Inspect level overrides and replay log batches."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    if log_config.should_use_dotenv(explicit=explicit, env_value=os.getenv(log_config.DOTENV_ENV_VAR)):
        log_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print the package metadata banner."""

    click.echo(summary_info(), nl=False)


_rules_file_option = click.option(
    "--rules-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON array of {category, type, area, level} override rows.",
)
_overrides_option = click.option(
    "--overrides",
    default=None,
    help="Inline overrides such as 'Flow/*/Billing=WARNING,*/*/*=ERROR'.",
)


@cli.command("check", context_settings=CLICK_CONTEXT_SETTINGS)
@_rules_file_option
@_overrides_option
@click.option("--category", default=None, help="Entry category (defaults to Flow).")
@click.option("--type", "log_type", default="", help="Entry type.")
@click.option("--area", default="", help="Entry area.")
@click.option("--level", required=True, help="Entry level, e.g. DEBUG.")
def cli_check(
    rules_file: Path | None,
    overrides: str | None,
    category: str | None,
    log_type: str,
    area: str,
    level: str,
) -> None:
    """Print whether an entry with the given classifier would be persisted."""

    settings = build_runtime_settings(sink="memory", rules_file=rules_file, level_overrides=overrides)
    try:
        registry = create_registry(settings)
        registry.load()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    entry = LogEntryBuilder().category(category).type(log_type).area(area).level(level).build()
    verdict = "allow" if registry.resolve(entry) else "drop"
    rule = registry.match(entry.category, entry.type, entry.area)
    reason = "no matching override" if rule is None else f"override {rule.category or '*'}/{rule.type or '*'}/{rule.area or '*'}={rule.minimum.name}"
    click.echo(f"{verdict} ({entry.category.value}/{entry.type or '*'}/{entry.area or '*'} at {entry.level.name}; {reason})")


@cli.command("replay", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("records_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--sink", type=click.Choice(SINK_CHOICES), default=None, help="Destination for accepted entries.")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Output file for the jsonl sink.")
@_rules_file_option
@_overrides_option
@click.option("--transaction-id", default=None, help="Resume an existing transaction instead of starting one.")
def cli_replay(
    records_file: Path,
    sink: str | None,
    output: Path | None,
    rules_file: Path | None,
    overrides: str | None,
    transaction_id: str | None,
) -> None:
    """Feed a JSON array of workflow records through the workflow adapter."""

    records = _load_json_array(records_file, "workflow records")
    accepted: list[str] = []

    def _count(event: str, payload: dict[str, Any]) -> None:
        if event == "buffered":
            accepted.append(payload["level"])

    try:
        logger = create_logger(
            sink=sink,
            output=output,
            rules_file=rules_file,
            level_overrides=overrides,
            transaction_id=transaction_id,
            diagnostic_hook=_count,
        )
        entries = log_workflow_records(logger, records)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"{len(entries)} record(s) processed, {len(accepted)} persisted, transaction {logger.transaction_id}")


@cli.command("dml", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("outcomes_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--area", required=True, help="Functional area of the batch.")
@click.option("--sink", type=click.Choice(SINK_CHOICES), default=None, help="Destination for the aggregated entry.")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Output file for the jsonl sink.")
def cli_dml(outcomes_file: Path, area: str, sink: str | None, output: Path | None) -> None:
    """Aggregate a JSON array of batch-operation outcomes into one entry."""

    raw = _load_json_array(outcomes_file, "outcomes")
    if not all(isinstance(item, dict) for item in raw):
        raise click.ClickException(f"{outcomes_file} must contain a JSON array of outcome objects")
    outcomes = [DMLOutcome.from_mapping(item) for item in raw]
    try:
        logger = create_logger(sink=sink, output=output)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    if logger.dml_result(area, outcomes):
        click.echo(f"logged failures for {len(outcomes)} outcome(s)")
    else:
        click.echo(f"no failures among {len(outcomes)} outcome(s)")


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI and return its exit code.

    Parameters
    ----------
    argv:
        Optional argument list (defaults to ``sys.argv[1:]``).
    restore_traceback:
        Restore the global traceback preference afterwards so embedding
        callers are unaffected by ``--traceback``.
    """

    previous = (lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color = previous


__all__ = ["cli", "main", "summary_info"]
