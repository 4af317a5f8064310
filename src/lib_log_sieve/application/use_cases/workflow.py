"""Entry point for no-code workflow callers.

Purpose
-------
Translate a batch of workflow-engine records into entries on a
:class:`BufferedLogger`, applying the lenient input policy: bad levels,
categories or attribute payloads become diagnostics, never exceptions.

Contents
--------
* :class:`WorkflowLogRecord` – one inbound record.
* :func:`parse_additional_fields` – JSON object decoding with a diagnostic.
* :func:`log_workflow_records` – per-record processing plus a single flush.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from lib_log_sieve.domain import PRESETS, LogEntry

from .buffered_logger import BufferedLogger

logger = logging.getLogger(__name__)

_REQUIRED = ("category", "type", "area", "summary", "details", "interview_guid")

_ALIASES = {
    "category": ("category",),
    "type": ("type",),
    "area": ("area",),
    "summary": ("summary",),
    "details": ("details",),
    "interview_guid": ("interview_guid", "interviewGUID", "interviewGuid"),
    "flow_api_name": ("flow_api_name", "flowApiName"),
    "level": ("level",),
    "additional_fields": ("additional_fields", "additionalFields"),
}
# Workflow engines send camelCase keys; both spellings are accepted.


@dataclass(slots=True, frozen=True)
class WorkflowLogRecord:
    """Inbound record from a workflow engine."""

    category: str
    type: str
    area: str
    summary: str
    details: str
    interview_guid: str
    flow_api_name: str | None = None
    level: str | None = None
    additional_fields: str | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "WorkflowLogRecord":
        """Create a record from a decoded workflow payload.

        Raises
        ------
        ValueError
            When a required field is missing.

        Examples
        --------
        >>> record = WorkflowLogRecord.from_mapping({
        ...     'category': 'Flow', 'type': 'X', 'area': 'Y', 'summary': 's',
        ...     'details': 'd', 'interviewGUID': 'g1', 'level': 'BOGUS'})
        >>> record.interview_guid, record.level
        ('g1', 'BOGUS')
        """

        values: dict[str, Any] = {}
        for name, keys in _ALIASES.items():
            for key in keys:
                if key in payload and payload[key] is not None:
                    values[name] = payload[key]
                    break
        missing = [name for name in _REQUIRED if name not in values]
        if missing:
            raise ValueError("Workflow record is missing required fields: " + ", ".join(missing))
        if isinstance(values.get("additional_fields"), Mapping):
            values["additional_fields"] = json.dumps(values["additional_fields"])
        return cls(**{name: str(value) for name, value in values.items()})


def parse_additional_fields(raw: str | None) -> tuple[dict[str, Any], str | None]:
    """Decode ``raw`` as a flat JSON object.

    Returns the decoded mapping and ``None``, or an empty mapping plus a
    diagnostic sentence when ``raw`` is not a JSON object.

    Examples
    --------
    >>> parse_additional_fields('{"x": 1, "y": "z"}')
    ({'x': 1, 'y': 'z'}, None)
    >>> parse_additional_fields('not-json')[1]
    "Unable to parse additional fields 'not-json' as a JSON object."
    >>> parse_additional_fields(None)
    ({}, None)
    """

    if raw is None or not raw.strip():
        return {}, None
    try:
        decoded = json.loads(raw)
    except ValueError:
        decoded = None
    if not isinstance(decoded, dict):
        return {}, f"Unable to parse additional fields {raw!r} as a JSON object."
    return decoded, None


def log_workflow_records(
    target: BufferedLogger,
    records: Iterable[WorkflowLogRecord | Mapping[str, Any]],
) -> list[LogEntry]:
    """Add one entry per record and flush once after the whole batch.

    Parameters
    ----------
    target:
        Logger receiving the entries.
    records:
        Records or raw mappings accepted by :meth:`WorkflowLogRecord.from_mapping`.

    Returns
    -------
    list[LogEntry]
        Entries built for the batch, including ones dropped by level
        overrides.

    Raises
    ------
    ValueError
        When a raw record lacks a required field. Entries accepted before
        the bad record are still flushed.
    """

    built: list[LogEntry] = []
    try:
        for raw_record in records:
            record = raw_record if isinstance(raw_record, WorkflowLogRecord) else WorkflowLogRecord.from_mapping(raw_record)
            if target.transaction_id is None:
                target.start_transaction()
            attributes, attribute_diagnostic = parse_additional_fields(record.additional_fields)
            if attribute_diagnostic is not None:
                logger.debug("Ignoring additional fields for interview %s", record.interview_guid)
            builder = (
                target.from_template()
                .category(record.category)
                .type(record.type)
                .area(record.area)
                .level(record.level)
                .summary(record.summary)
                .details(record.details)
                .append_details(attribute_diagnostic)
                .interview_guid(record.interview_guid)
                .flow_api_name(record.flow_api_name)
                .post_processing(PRESETS["workflow"])
                .attributes(attributes)
            )
            entry = builder.build()
            target.add(entry)
            built.append(entry)
    finally:
        target.flush()
    return built


__all__ = ["WorkflowLogRecord", "log_workflow_records", "parse_additional_fields"]
