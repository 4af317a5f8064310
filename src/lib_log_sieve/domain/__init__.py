"""Domain entities and value objects used by the logging decision engine."""

from __future__ import annotations

from .builder import LogEntryBuilder
from .entry import DETAILS_SEPARATOR, IntegrationPayload, LogEntry, join_details
from .levels import LogLevel
from .outcomes import DMLOperation, DMLOutcome, DMLSummary, summarise_outcomes
from .rules import LevelRegistry, LevelRule, candidate_keys, rule_key
from .stack import StackOffsetTracker
from .taxonomy import BACKEND_TYPE, DML_RESULT_TYPE, PRESETS, Category, PostProcessing, post_processing_controls
from .transaction import TransactionContext

__all__ = [
    "BACKEND_TYPE",
    "Category",
    "DETAILS_SEPARATOR",
    "DML_RESULT_TYPE",
    "DMLOperation",
    "DMLOutcome",
    "DMLSummary",
    "IntegrationPayload",
    "LevelRegistry",
    "LevelRule",
    "LogEntry",
    "LogEntryBuilder",
    "LogLevel",
    "PRESETS",
    "PostProcessing",
    "StackOffsetTracker",
    "TransactionContext",
    "candidate_keys",
    "join_details",
    "post_processing_controls",
    "rule_key",
    "summarise_outcomes",
]
