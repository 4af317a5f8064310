"""Fluent, cloneable builder for :class:`LogEntry` values.

Purpose
-------
Collect entry fields step by step, apply default and fallback policy, and
derive immutable snapshots on demand.

Contents
--------
* :class:`LogEntryBuilder` with one setter per entry field.

System Role
-----------
Callers obtain builders (usually via ``BufferedLogger.from_template``), fill
them, and hand them back to the logger. Clones never share mutable state with
their source, so a builder doubles as a reusable template.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from .entry import IntegrationPayload, LogEntry, join_details
from .levels import LogLevel
from .taxonomy import Category


class LogEntryBuilder:
    """Mutable staging area producing :class:`LogEntry` snapshots.

    Level defaults to ``INFO`` and category to ``Category.WORKFLOW``. Raw
    strings passed to :meth:`level` or :meth:`category` are parsed leniently;
    an unknown value keeps the default and its diagnostic is appended to
    ``details`` when the entry is built.

    Examples
    --------
    >>> builder = LogEntryBuilder().type('X').area('Y').level('BOGUS').details('d')
    >>> entry = builder.build()
    >>> entry.level.name
    'INFO'
    >>> entry.details.startswith('d') and 'BOGUS' in entry.details
    True
    >>> builder.build() == entry
    True
    """

    def __init__(self) -> None:
        self._category = Category.WORKFLOW
        self._type = ""
        self._area = ""
        self._level = LogLevel.INFO
        self._summary = ""
        self._details = ""
        self._stacktrace: str | None = None
        self._transaction_id: str | None = None
        self._related_object_ids: set[str] = set()
        self._duration: float | None = None
        self._operation: str | None = None
        self._create_issue = False
        self._post_processing: dict[str, bool] = {}
        self._integration_payload: IntegrationPayload | None = None
        self._interview_guid: str | None = None
        self._flow_api_name: str | None = None
        self._attributes: dict[str, Any] = {}
        self._timestamp: datetime | None = None
        self._diagnostics: dict[str, str] = {}

    def category(self, value: Category | str | None) -> "LogEntryBuilder":
        if isinstance(value, Category):
            self._category = value
            self._diagnostics.pop("category", None)
            return self
        self._category, diagnostic = Category.parse(value)
        self._note("category", diagnostic)
        return self

    def type(self, value: str) -> "LogEntryBuilder":
        self._type = value
        return self

    def area(self, value: str) -> "LogEntryBuilder":
        self._area = value
        return self

    def level(self, value: LogLevel | str | None) -> "LogEntryBuilder":
        if isinstance(value, LogLevel):
            self._level = value
            self._diagnostics.pop("level", None)
            return self
        self._level, diagnostic = LogLevel.parse(value)
        self._note("level", diagnostic)
        return self

    def summary(self, value: str) -> "LogEntryBuilder":
        self._summary = value
        return self

    def details(self, value: str) -> "LogEntryBuilder":
        self._details = value
        return self

    def append_details(self, value: str | None) -> "LogEntryBuilder":
        """Append ``value`` to the details, separated by a blank line."""

        self._details = join_details(self._details, value)
        return self

    def stacktrace(self, value: str | None) -> "LogEntryBuilder":
        self._stacktrace = value
        return self

    def transaction_id(self, value: str | None) -> "LogEntryBuilder":
        self._transaction_id = value
        return self

    def related_objects(self, ids: Iterable[str | None]) -> "LogEntryBuilder":
        """Add ``ids`` to the related object set, ignoring empty identifiers."""

        self._related_object_ids.update(item for item in ids if item)
        return self

    def duration(self, seconds: float | None) -> "LogEntryBuilder":
        self._duration = seconds
        return self

    def operation(self, value: str | None) -> "LogEntryBuilder":
        self._operation = value
        return self

    def create_issue(self, value: bool = True) -> "LogEntryBuilder":
        self._create_issue = value
        return self

    def post_processing(self, controls: Mapping[str, bool]) -> "LogEntryBuilder":
        """Merge ``controls`` into the post-processing toggles."""

        self._post_processing.update({str(key): bool(value) for key, value in controls.items()})
        return self

    def integration_payload(self, payload: IntegrationPayload | None) -> "LogEntryBuilder":
        self._integration_payload = payload
        return self

    def interview_guid(self, value: str | None) -> "LogEntryBuilder":
        self._interview_guid = value
        return self

    def flow_api_name(self, value: str | None) -> "LogEntryBuilder":
        self._flow_api_name = value
        return self

    def attribute(self, name: str, value: Any) -> "LogEntryBuilder":
        """Set attribute ``name``, overwriting any previous value."""

        self._attributes[name] = value
        return self

    def attributes(self, values: Mapping[str, Any]) -> "LogEntryBuilder":
        for name, value in values.items():
            self.attribute(name, value)
        return self

    def timestamp(self, value: datetime | None) -> "LogEntryBuilder":
        self._timestamp = value
        return self

    @property
    def has_stacktrace(self) -> bool:
        """Return ``True`` when an explicit stack trace has been supplied."""

        return bool(self._stacktrace)

    @property
    def current_transaction_id(self) -> str | None:
        return self._transaction_id

    def clone(self) -> "LogEntryBuilder":
        """Return an independent copy; mutable collections are deep-copied."""

        twin = copy.copy(self)
        for name in ("_related_object_ids", "_post_processing", "_attributes", "_diagnostics"):
            setattr(twin, name, copy.deepcopy(getattr(self, name)))
        return twin

    def build(self) -> LogEntry:
        """Derive a :class:`LogEntry` from the current state.

        Repeated calls without intervening mutation return equal entries.
        """

        return LogEntry(
            category=self._category,
            type=self._type,
            area=self._area,
            level=self._level,
            summary=self._summary,
            details=join_details(self._details, *self._diagnostics.values()),
            stacktrace=self._stacktrace,
            transaction_id=self._transaction_id,
            related_object_ids=frozenset(self._related_object_ids),
            duration=self._duration,
            operation=self._operation,
            create_issue=self._create_issue,
            post_processing=dict(self._post_processing),
            integration_payload=self._integration_payload,
            interview_guid=self._interview_guid,
            flow_api_name=self._flow_api_name,
            attributes=copy.deepcopy(self._attributes),
            timestamp=self._timestamp,
        )

    def _note(self, field_name: str, diagnostic: str | None) -> None:
        if diagnostic is None:
            self._diagnostics.pop(field_name, None)
        else:
            self._diagnostics[field_name] = diagnostic


__all__ = ["LogEntryBuilder"]
