"""Composition root that wires the decision engine for one execution.

Purpose
-------
Expose :func:`create_logger`, the entry point host code uses instead of
assembling registries, sinks and transaction contexts by hand. Settings come
from keyword arguments and ``LOG_SIEVE_*`` environment variables.

Contents
--------
* :func:`create_logger` – build a fresh :class:`BufferedLogger`.
* :func:`create_registry` – build a :class:`LevelRegistry` from settings.
* Re-exports of :class:`RuntimeSettings` and :func:`build_runtime_settings`.

System Role
-----------
There is no process-wide singleton: every call returns an independent logger
with its own buffer, transaction context and stack tracker. Hosts running
executions concurrently create one logger per execution and carry transaction
ids across boundaries explicitly.
"""

from __future__ import annotations

from pathlib import Path

from lib_log_sieve.application.ports import ClockPort, IdProvider, LevelRuleSource, SinkPort
from lib_log_sieve.application.use_cases import BufferedLogger, DiagnosticHook
from lib_log_sieve.domain import LevelRegistry, LogEntryBuilder, StackOffsetTracker, TransactionContext

from ._factories import SystemClock, UuidProvider, create_rule_source, create_sink
from ._settings import SINK_CHOICES, RuntimeSettings, build_runtime_settings


def create_registry(settings: RuntimeSettings, rule_source: LevelRuleSource | None = None) -> LevelRegistry:
    """Return a lazily loading registry for ``rule_source`` or the configured sources."""

    source = rule_source if rule_source is not None else create_rule_source(settings)
    return LevelRegistry(source.load)


def create_logger(
    *,
    sink: SinkPort | str | None = None,
    output: str | Path | None = None,
    rules_file: str | Path | None = None,
    level_overrides: str | None = None,
    rule_source: LevelRuleSource | None = None,
    registry: LevelRegistry | None = None,
    transaction_id: str | None = None,
    template: LogEntryBuilder | None = None,
    force_color: bool | None = None,
    no_color: bool | None = None,
    console_template: str | None = None,
    clock: ClockPort | None = None,
    id_provider: IdProvider | None = None,
    diagnostic_hook: DiagnosticHook = None,
) -> BufferedLogger:
    """Compose a :class:`BufferedLogger` according to configuration inputs.

    Inputs
    ------
    sink:
        A ready :class:`SinkPort`, or the name of a built-in sink
        (``console``, ``jsonl``, ``memory``). Defaults to ``LOG_SIEVE_SINK``
        or ``console``.
    output:
        File path for the ``jsonl`` sink.
    rules_file, level_overrides:
        Override sources (JSON file and inline string). Ignored when
        ``rule_source`` or ``registry`` is given.
    rule_source, registry:
        Pre-built collaborators; a shared ``registry`` lets several loggers
        reuse one loaded rule set.
    transaction_id:
        Resume this correlation id immediately, continuing a trace started by
        an earlier execution.
    template:
        Builder used as the template for every produced entry.
    force_color, no_color, console_template:
        Console sink presentation knobs.
    clock, id_provider, diagnostic_hook:
        Test and observability seams.

    Side Effects
    ------------
    None until the logger is used: rules load on the first resolved entry and
    sinks write only on flush.
    """

    injected_sink = sink is not None and not isinstance(sink, str)
    settings = build_runtime_settings(
        # an injected sink makes LOG_SIEVE_SINK irrelevant
        sink="memory" if injected_sink else sink,
        output=output,
        rules_file=rules_file,
        level_overrides=level_overrides,
        force_color=force_color,
        no_color=no_color,
        console_template=console_template,
    )
    resolved_sink = sink if injected_sink else create_sink(settings)
    resolved_registry = registry if registry is not None else create_registry(settings, rule_source)
    transaction = TransactionContext(id_provider=id_provider or UuidProvider())
    if transaction_id is not None:
        transaction.resume(transaction_id)
    return BufferedLogger(
        sink=resolved_sink,
        registry=resolved_registry,
        transaction=transaction,
        stack=StackOffsetTracker(),
        clock=clock or SystemClock(),
        template=template,
        diagnostic=diagnostic_hook,
    )


__all__ = [
    "RuntimeSettings",
    "SINK_CHOICES",
    "build_runtime_settings",
    "create_logger",
    "create_registry",
]
