"""Batch operation outcomes and their failure summary.

Purpose
-------
Represent per-record results of platform batch operations behind one
``{success, record_id, errors}`` projection and reduce a batch to a summary.

Contents
--------
* :class:`DMLOperation` – operation kinds.
* :class:`DMLOutcome` – tagged outcome with per-kind constructors.
* :class:`DMLSummary` / :func:`summarise_outcomes` – batch reduction.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .entry import join_details


class DMLOperation(Enum):
    """Kinds of batch operation whose results can be aggregated."""

    SAVE = "Save"
    DELETE = "Delete"
    UNDELETE = "Undelete"
    UPSERT = "Upsert"
    MERGE = "Merge"

    @classmethod
    def from_name(cls, name: str) -> "DMLOperation":
        normalized = name.strip().casefold()
        for member in cls:
            if member.value.casefold() == normalized:
                return member
        raise ValueError(f"Unknown DML operation: {name!r}")


@dataclass(slots=True, frozen=True)
class DMLOutcome:
    """Outcome of one record within a batch operation.

    ``operation`` is ``None`` for result kinds the aggregator does not know;
    such outcomes still count towards totals and failures.
    """

    operation: DMLOperation | None
    success: bool
    record_id: str | None = None
    errors: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "errors", tuple(str(message) for message in self.errors))

    @classmethod
    def save(cls, success: bool, record_id: str | None = None, errors: Iterable[str] = ()) -> "DMLOutcome":
        return cls(DMLOperation.SAVE, success, record_id, tuple(errors))

    @classmethod
    def delete(cls, success: bool, record_id: str | None = None, errors: Iterable[str] = ()) -> "DMLOutcome":
        return cls(DMLOperation.DELETE, success, record_id, tuple(errors))

    @classmethod
    def undelete(cls, success: bool, record_id: str | None = None, errors: Iterable[str] = ()) -> "DMLOutcome":
        return cls(DMLOperation.UNDELETE, success, record_id, tuple(errors))

    @classmethod
    def upsert(cls, success: bool, record_id: str | None = None, errors: Iterable[str] = ()) -> "DMLOutcome":
        return cls(DMLOperation.UPSERT, success, record_id, tuple(errors))

    @classmethod
    def merge(cls, success: bool, record_id: str | None = None, errors: Iterable[str] = ()) -> "DMLOutcome":
        return cls(DMLOperation.MERGE, success, record_id, tuple(errors))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "DMLOutcome":
        """Build an outcome from a JSON-style mapping.

        Recognised keys are ``operation``, ``success``, ``id`` (or
        ``record_id``) and ``errors`` (a string or a list of strings). An
        unknown ``operation`` yields ``operation=None``.

        Examples
        --------
        >>> DMLOutcome.from_mapping({'operation': 'upsert', 'success': False, 'id': 'a1', 'errors': 'dup'})
        DMLOutcome(operation=<DMLOperation.UPSERT: 'Upsert'>, success=False, record_id='a1', errors=('dup',))
        """

        raw_operation = payload.get("operation")
        try:
            operation = DMLOperation.from_name(raw_operation) if raw_operation else None
        except ValueError:
            operation = None
        errors = payload.get("errors") or ()
        if isinstance(errors, str):
            errors = (errors,)
        record_id = payload.get("id", payload.get("record_id"))
        return cls(operation, bool(payload.get("success")), record_id, tuple(errors))


@dataclass(slots=True, frozen=True)
class DMLSummary:
    """Reduction of a batch of outcomes."""

    total: int
    failures: int
    failed_ids: frozenset[str]
    error_text: str
    operation: DMLOperation | None

    @property
    def has_failures(self) -> bool:
        return self.failures > 0

    def describe(self) -> str:
        """Return the one-line summary used on aggregated entries.

        Examples
        --------
        >>> DMLSummary(5, 2, frozenset(), '', DMLOperation.SAVE).describe()
        'Save failed: 2 of 5 records failed'
        """

        label = self.operation.value if self.operation is not None else "DML"
        return f"{label} failed: {self.failures} of {self.total} records failed"


def summarise_outcomes(outcomes: Iterable[DMLOutcome]) -> DMLSummary:
    """Count outcomes, collect failed identifiers and join their error messages.

    Examples
    --------
    >>> summary = summarise_outcomes([
    ...     DMLOutcome.save(True, 'ok1'),
    ...     DMLOutcome.save(False, 'id1', ['E1']),
    ...     DMLOutcome.delete(False, 'id2', ['E2']),
    ... ])
    >>> summary.failures, summary.total, summary.error_text
    (2, 3, 'E1\\n\\nE2')
    >>> summary.operation
    <DMLOperation.DELETE: 'Delete'>
    """

    total = 0
    failed_ids: set[str] = set()
    messages: list[str] = []
    failures = 0
    operation: DMLOperation | None = None
    for outcome in outcomes:
        total += 1
        if outcome.operation is not None:
            operation = outcome.operation
        if outcome.success:
            continue
        failures += 1
        if outcome.record_id:
            failed_ids.add(outcome.record_id)
        messages.extend(outcome.errors)
    return DMLSummary(
        total=total,
        failures=failures,
        failed_ids=frozenset(failed_ids),
        error_text=join_details(*messages),
        operation=operation,
    )


__all__ = ["DMLOperation", "DMLOutcome", "DMLSummary", "summarise_outcomes"]
