"""Use cases composing domain objects with the application ports."""

from __future__ import annotations

from .buffered_logger import BufferedLogger, DiagnosticHook, SystemClock, build_diagnostic_emitter
from .dml_results import build_dml_result_entry
from .workflow import WorkflowLogRecord, log_workflow_records, parse_additional_fields

__all__ = [
    "BufferedLogger",
    "DiagnosticHook",
    "SystemClock",
    "WorkflowLogRecord",
    "build_diagnostic_emitter",
    "build_dml_result_entry",
    "log_workflow_records",
    "parse_additional_fields",
]
