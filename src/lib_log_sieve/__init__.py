"""Public package surface for the structured-logging decision engine.

Host code normally needs only :func:`create_logger` plus the domain value
types; the adapters are exported for callers wiring sinks by hand.
"""

from __future__ import annotations

from .adapters import JsonLinesSink, MemorySink, RichConsoleSink
from .application.use_cases import BufferedLogger, WorkflowLogRecord, log_workflow_records
from .cli import summary_info
from .domain import (
    Category,
    DMLOperation,
    DMLOutcome,
    IntegrationPayload,
    LevelRegistry,
    LevelRule,
    LogEntry,
    LogEntryBuilder,
    LogLevel,
    TransactionContext,
)
from .runtime import create_logger

__all__ = [
    "BufferedLogger",
    "Category",
    "DMLOperation",
    "DMLOutcome",
    "IntegrationPayload",
    "JsonLinesSink",
    "LevelRegistry",
    "LevelRule",
    "LogEntry",
    "LogEntryBuilder",
    "LogLevel",
    "MemorySink",
    "RichConsoleSink",
    "TransactionContext",
    "WorkflowLogRecord",
    "create_logger",
    "log_workflow_records",
    "summary_info",
]
