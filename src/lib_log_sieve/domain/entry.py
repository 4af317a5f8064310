"""Immutable log entry value object.

Purpose
-------
Provide the frozen representation handed from the builder to the buffered
logger and, on flush, to the sink.

Contents
--------
* :class:`IntegrationPayload` – serialised request/response pair.
* :class:`LogEntry` – frozen dataclass with serialisation helpers.

System Role
-----------
Sits in the domain layer; once an entry joins the buffer it is never mutated,
only replaced by copies produced through :meth:`LogEntry.replace`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from .levels import LogLevel
from .taxonomy import Category


DETAILS_SEPARATOR = "\n\n"
"""Separator used whenever text fragments are appended to ``details``."""


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


def join_details(*parts: str | None) -> str:
    """Join non-empty ``parts`` with :data:`DETAILS_SEPARATOR`.

    Examples
    --------
    >>> join_details('d', None, '', 'note')
    'd\\n\\nnote'
    """

    return DETAILS_SEPARATOR.join(part for part in parts if part)


@dataclass(slots=True, frozen=True)
class IntegrationPayload:
    """Serialised request/response pair attached to integration failures."""

    request: str | None = None
    response: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"request": self.request, "response": self.response}


@dataclass(slots=True, frozen=True)
class LogEntry:
    """Immutable log entry accepted (or dropped) by the buffered logger.

    Attributes
    ----------
    category, type, area:
        Three-part classifier; also the key of level overrides.
    level:
        :class:`LogLevel` severity.
    summary, details, stacktrace:
        Human-readable payload.
    transaction_id:
        Correlation identifier shared by related entries.
    related_object_ids:
        Identifiers of the records this entry is about.
    duration:
        Optional elapsed time in seconds.
    operation:
        Optional operation label such as ``"Save"`` or ``"Upsert"``.
    create_issue:
        Request that the sink raise an issue for this entry.
    post_processing:
        Named enrichment toggles for the sink.
    integration_payload:
        Optional request/response pair.
    interview_guid, flow_api_name:
        Workflow caller identifiers.
    attributes:
        Additional name/value pairs.
    timestamp:
        Creation time; stamped by the logger when left empty.
    """

    category: Category
    type: str
    area: str
    level: LogLevel = LogLevel.INFO
    summary: str = ""
    details: str = ""
    stacktrace: str | None = None
    transaction_id: str | None = None
    related_object_ids: frozenset[str] = frozenset()
    duration: float | None = None
    operation: str | None = None
    create_issue: bool = False
    post_processing: Mapping[str, bool] = field(default_factory=dict)
    integration_payload: IntegrationPayload | None = None
    interview_guid: str | None = None
    flow_api_name: str | None = None
    attributes: Mapping[str, Any] = field(default_factory=dict)
    timestamp: datetime | None = None

    def __post_init__(self) -> None:
        if self.timestamp is not None:
            object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "related_object_ids", frozenset(self.related_object_ids))
        object.__setattr__(self, "post_processing", MappingProxyType(dict(self.post_processing)))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entry to a dictionary with ISO8601 timestamps."""

        data: dict[str, Any] = {
            "category": self.category.value,
            "type": self.type,
            "area": self.area,
            "level": self.level.name,
            "summary": self.summary,
            "details": self.details,
            "stacktrace": self.stacktrace,
            "transaction_id": self.transaction_id,
            "related_object_ids": sorted(self.related_object_ids),
            "duration": self.duration,
            "operation": self.operation,
            "create_issue": self.create_issue,
            "post_processing": dict(self.post_processing),
            "integration_payload": self.integration_payload.to_dict() if self.integration_payload else None,
            "interview_guid": self.interview_guid,
            "flow_api_name": self.flow_api_name,
            "attributes": dict(self.attributes),
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }
        return data

    def to_json(self) -> str:
        """Serialize the entry to JSON with sorted keys for deterministic output."""

        return json.dumps(self.to_dict(), sort_keys=True, default=str)

    def replace(self, **changes: Any) -> "LogEntry":
        """Return a copied entry with ``changes`` applied."""

        return replace(self, **changes)


__all__ = ["DETAILS_SEPARATOR", "IntegrationPayload", "LogEntry", "join_details"]
