"""Use case orchestrating accept-or-drop, buffering and flushing of entries.

Purpose
-------
Tie together the level registry, the transaction context, the stack offset
tracker and the sink into one explicit object owned by a single logical
execution.

Contents
--------
* :class:`BufferedLogger` – buffered (``add_*``) and immediate producers.
* :func:`build_diagnostic_emitter` – wraps the optional diagnostic hook.

System Role
-----------
Application-layer orchestrator created by :func:`lib_log_sieve.create_logger`.
Each concurrent execution owns its own instance; nothing here is global.
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Any

from lib_log_sieve.application.ports import ClockPort, SinkPort
from lib_log_sieve.domain import (
    BACKEND_TYPE,
    PRESETS,
    Category,
    DMLOutcome,
    IntegrationPayload,
    LevelRegistry,
    LogEntry,
    LogEntryBuilder,
    LogLevel,
    StackOffsetTracker,
    TransactionContext,
    join_details,
)

from .dml_results import build_dml_result_entry

logger = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None

_CAPTURE_DEPTH = 2
# Frames between the caller and the sink: ``_add_log`` plus the public ``add*`` method.


def build_diagnostic_emitter(diagnostic: DiagnosticHook) -> Callable[[str, dict[str, Any]], None]:
    """Return a callable forwarding pipeline milestones to ``diagnostic``.

    A failing hook is logged and otherwise ignored so observability code can
    never break logging itself.
    """

    if diagnostic is None:

        def _noop(event: str, payload: dict[str, Any]) -> None:
            return None

        return _noop

    def _emit(event: str, payload: dict[str, Any]) -> None:
        try:
            diagnostic(event, payload)
        except Exception:  # noqa: BLE001
            logger.exception("Diagnostic hook failed for %s", event)

    return _emit


class SystemClock(ClockPort):
    """Concrete clock port returning timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def _exception_type(error: BaseException) -> str:
    return type(error).__name__ or BACKEND_TYPE


def _exception_details(error: BaseException) -> str:
    head = "".join(traceback.format_exception_only(type(error), error)).strip()
    trace = "".join(traceback.format_tb(error.__traceback__)).rstrip() if error.__traceback__ else ""
    return join_details(head, trace)


class BufferedLogger:
    """Accept, buffer and flush log entries for one execution context.

    Parameters
    ----------
    sink:
        Destination receiving entries on :meth:`flush`.
    registry:
        :class:`LevelRegistry` deciding which entries are kept. Defaults to an
        empty registry that accepts everything.
    transaction:
        :class:`TransactionContext` providing the correlation id stamped on
        entries.
    stack:
        :class:`StackOffsetTracker` shared by the immediate producers.
    clock:
        Source of timestamps for entries that arrive without one.
    template:
        Builder cloned by :meth:`from_template` and by every producer.
    diagnostic:
        Optional ``(event, payload)`` hook receiving ``buffered``,
        ``dropped`` and ``flushed`` milestones.

    Examples
    --------
    >>> class ListSink:
    ...     def __init__(self):
    ...         self.entries = []
    ...     def add(self, entry):
    ...         self.entries.append(entry)
    ...     def flush(self):
    ...         pass
    ...     def capture_stack(self, offset):
    ...         return 'stack'
    >>> sink = ListSink()
    >>> log = BufferedLogger(sink=sink)
    >>> log.add_warning('Checkout', 'Cart', 'slow response')
    True
    >>> len(log.pending), len(sink.entries)
    (1, 0)
    >>> log.flush()
    1
    >>> sink.entries[0].level.name, len(log.pending)
    ('WARNING', 0)
    """

    def __init__(
        self,
        *,
        sink: SinkPort,
        registry: LevelRegistry | None = None,
        transaction: TransactionContext | None = None,
        stack: StackOffsetTracker | None = None,
        clock: ClockPort | None = None,
        template: LogEntryBuilder | None = None,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        self._sink = sink
        self._registry = registry if registry is not None else LevelRegistry()
        self._transaction = transaction if transaction is not None else TransactionContext()
        self._stack = stack if stack is not None else StackOffsetTracker()
        self._clock: ClockPort = clock if clock is not None else SystemClock()
        self._template = template if template is not None else LogEntryBuilder()
        self._emit = build_diagnostic_emitter(diagnostic)
        self._buffer: list[LogEntry] = []

    # -- state -----------------------------------------------------------------

    @property
    def pending(self) -> tuple[LogEntry, ...]:
        """Return a snapshot of buffered, not yet flushed entries."""

        return tuple(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def registry(self) -> LevelRegistry:
        return self._registry

    @property
    def stack(self) -> StackOffsetTracker:
        return self._stack

    # -- template and transactions ---------------------------------------------

    @property
    def template(self) -> LogEntryBuilder:
        return self._template

    def set_template(self, builder: LogEntryBuilder) -> None:
        """Store a copy of ``builder`` as the template for later entries."""

        self._template = builder.clone()

    def from_template(self) -> LogEntryBuilder:
        """Return a template clone carrying the current transaction id."""

        return self._template.clone().transaction_id(self._transaction.current)

    @property
    def transaction_id(self) -> str | None:
        return self._transaction.current

    def start_transaction(self) -> str:
        return self._transaction.start()

    def resume_transaction(self, transaction_id: str) -> None:
        self._transaction.resume(transaction_id)

    def stop_transaction(self) -> None:
        self._transaction.stop()

    # -- core ------------------------------------------------------------------

    def add(self, entry: LogEntry) -> bool:
        """Buffer ``entry`` when the registry accepts it; drop it silently otherwise."""

        if not self._registry.resolve(entry):
            logger.debug("Dropped %s entry %s/%s/%s", entry.level.name, entry.category.value, entry.type, entry.area)
            self._emit("dropped", {"level": entry.level.name, "category": entry.category.value, "type": entry.type, "area": entry.area})
            return False
        stamped = self._stamp(entry)
        self._buffer.append(stamped)
        self._emit("buffered", {"level": stamped.level.name, "pending": len(self._buffer)})
        return True

    def add_log(self, builder: LogEntryBuilder) -> bool:
        """Build and add ``builder``, capturing the caller's stack if none was set."""

        return self._add_log(builder, _CAPTURE_DEPTH)

    def flush(self) -> int:
        """Deliver every entry buffered at call time to the sink.

        The sink's ``flush`` hook runs exactly once per call, also when the
        buffer is empty. Entries are removed only after the sink succeeded;
        entries added while the flush runs stay buffered for the next one.

        Returns
        -------
        int
            Number of entries handed to the sink.
        """

        pending = tuple(self._buffer)
        for entry in pending:
            self._sink.add(entry)
        self._sink.flush()
        del self._buffer[: len(pending)]
        logger.debug("Flushed %d entr%s", len(pending), "y" if len(pending) == 1 else "ies")
        self._emit("flushed", {"count": len(pending), "remaining": len(self._buffer)})
        return len(pending)

    # -- producers -------------------------------------------------------------

    def add_exception(self, area: str, error: BaseException, *, log_type: str | None = None) -> bool:
        """Buffer an ERROR entry describing ``error``."""

        builder = self._exception_builder(Category.ERROR, area, error, log_type).post_processing(PRESETS["error"])
        return self._add_log(builder, _CAPTURE_DEPTH)

    def exception(self, area: str, error: BaseException, *, log_type: str | None = None) -> bool:
        with self._stack.immediate():
            accepted = self.add_exception(area, error, log_type=log_type)
            self.flush()
        return accepted

    def add_error(self, log_type: str, area: str, summary: str, details: str = "") -> bool:
        builder = self._producer(Category.ERROR, LogLevel.ERROR, log_type, area, summary, details, "error")
        return self._add_log(builder, _CAPTURE_DEPTH)

    def error(self, log_type: str, area: str, summary: str, details: str = "") -> bool:
        with self._stack.immediate():
            accepted = self.add_error(log_type, area, summary, details)
            self.flush()
        return accepted

    def add_warning(self, log_type: str, area: str, summary: str, details: str = "") -> bool:
        builder = self._producer(Category.WARNING, LogLevel.WARNING, log_type, area, summary, details, "warning")
        return self._add_log(builder, _CAPTURE_DEPTH)

    def warning(self, log_type: str, area: str, summary: str, details: str = "") -> bool:
        with self._stack.immediate():
            accepted = self.add_warning(log_type, area, summary, details)
            self.flush()
        return accepted

    def add_debug(self, log_type: str, area: str, summary: str, details: str = "") -> bool:
        builder = self._producer(Category.DEBUG, LogLevel.DEBUG, log_type, area, summary, details, "debug")
        return self._add_log(builder, _CAPTURE_DEPTH)

    def debug(self, log_type: str, area: str, summary: str, details: str = "") -> bool:
        with self._stack.immediate():
            accepted = self.add_debug(log_type, area, summary, details)
            self.flush()
        return accepted

    def add_event(
        self,
        log_type: str,
        area: str,
        summary: str,
        details: str = "",
        *,
        level: LogLevel = LogLevel.INFO,
    ) -> bool:
        """Buffer a business event; events carry no automatic stack trace."""

        builder = self._producer(Category.EVENT, level, log_type, area, summary, details, "event")
        return self.add(builder.build())

    def event(
        self,
        log_type: str,
        area: str,
        summary: str,
        details: str = "",
        *,
        level: LogLevel = LogLevel.INFO,
    ) -> bool:
        with self._stack.immediate():
            accepted = self.add_event(log_type, area, summary, details, level=level)
            self.flush()
        return accepted

    def add_integration_error(
        self,
        area: str,
        error: BaseException,
        payload: IntegrationPayload | None = None,
        *,
        log_type: str | None = None,
    ) -> bool:
        """Buffer an integration failure with its optional request/response pair."""

        builder = (
            self._exception_builder(Category.INTEGRATION, area, error, log_type)
            .integration_payload(payload)
            .post_processing(PRESETS["integration"])
        )
        return self._add_log(builder, _CAPTURE_DEPTH)

    def integration_error(
        self,
        area: str,
        error: BaseException,
        payload: IntegrationPayload | None = None,
        *,
        log_type: str | None = None,
    ) -> bool:
        with self._stack.immediate():
            accepted = self.add_integration_error(area, error, payload, log_type=log_type)
            self.flush()
        return accepted

    def add_dml_result(self, area: str, outcomes: Iterable[DMLOutcome]) -> bool:
        """Buffer one aggregated entry when any outcome failed.

        Returns ``False`` both when nothing failed and when the aggregated
        entry was dropped by a level override.
        """

        builder = build_dml_result_entry(self.from_template(), area, outcomes)
        if builder is None:
            return False
        return self._add_log(builder, _CAPTURE_DEPTH)

    def dml_result(self, area: str, outcomes: Iterable[DMLOutcome]) -> bool:
        with self._stack.immediate():
            accepted = self.add_dml_result(area, outcomes)
            self.flush()
        return accepted

    # -- helpers ---------------------------------------------------------------

    def _add_log(self, builder: LogEntryBuilder, depth: int) -> bool:
        if not builder.has_stacktrace:
            builder = builder.clone().stacktrace(self._sink.capture_stack(depth + self._stack.offset))
        return self.add(builder.build())

    def _stamp(self, entry: LogEntry) -> LogEntry:
        changes: dict[str, Any] = {}
        if entry.transaction_id is None and self._transaction.current is not None:
            changes["transaction_id"] = self._transaction.current
        if entry.timestamp is None:
            changes["timestamp"] = self._clock.now()
        return entry.replace(**changes) if changes else entry

    def _producer(
        self,
        category: Category,
        level: LogLevel,
        log_type: str,
        area: str,
        summary: str,
        details: str,
        preset: str,
    ) -> LogEntryBuilder:
        return (
            self.from_template()
            .category(category)
            .level(level)
            .type(log_type)
            .area(area)
            .summary(summary)
            .details(details)
            .post_processing(PRESETS[preset])
        )

    def _exception_builder(
        self,
        category: Category,
        area: str,
        error: BaseException,
        log_type: str | None,
    ) -> LogEntryBuilder:
        return (
            self.from_template()
            .category(category)
            .level(LogLevel.ERROR)
            .type(log_type or _exception_type(error))
            .area(area)
            .summary(str(error) or _exception_type(error))
            .details(_exception_details(error))
        )


__all__ = ["BufferedLogger", "DiagnosticHook", "SystemClock", "build_diagnostic_emitter"]
