"""Utilities that normalise log entries into template-friendly dictionaries.

Why
---
The console sink accepts ``str.format`` templates. Producing the payload in
one place keeps the default layout and custom templates on the same data
contract.

Contents
--------
* :func:`build_format_payload` – generate placeholder values for an entry.
"""

from __future__ import annotations

from typing import Any

from lib_log_sieve.domain.entry import LogEntry


DEFAULT_TEMPLATE = "{timestamp} {level:>7} {category}/{type}/{area} {summary}{context_fields}"


def _short(value: str | None, width: int = 8) -> str:
    if not value:
        return ""
    return value[:width]


def build_format_payload(entry: LogEntry) -> dict[str, Any]:
    """Return the mapping of placeholders exposed to format templates."""

    context_pairs: dict[str, Any] = {}
    if entry.transaction_id:
        context_pairs["tx"] = _short(entry.transaction_id)
    if entry.operation:
        context_pairs["operation"] = entry.operation
    if entry.related_object_ids:
        context_pairs["related"] = ",".join(sorted(entry.related_object_ids))
    if entry.interview_guid:
        context_pairs["interview"] = entry.interview_guid
    for key, value in entry.attributes.items():
        context_pairs[key] = value

    context_fields = ""
    if context_pairs:
        context_fields = " " + " ".join(f"{key}={value}" for key, value in sorted(context_pairs.items()))

    timestamp = entry.timestamp.isoformat() if entry.timestamp else "-"
    return {
        "timestamp": timestamp,
        "level": entry.level.name,
        "level_enum": entry.level,
        "severity": entry.level.severity,
        "category": entry.category.value,
        "type": entry.type or "-",
        "area": entry.area or "-",
        "summary": entry.summary,
        "details": entry.details,
        "transaction_id": entry.transaction_id or "",
        "transaction_short": _short(entry.transaction_id),
        "context_fields": context_fields,
        "create_issue": entry.create_issue,
    }


__all__ = ["DEFAULT_TEMPLATE", "build_format_payload"]
