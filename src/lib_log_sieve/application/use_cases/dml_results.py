"""Reduce batch-operation outcomes to a single diagnostic entry.

Purpose
-------
Turn a noisy batch of per-record results into at most one ERROR entry that
names the operation, the failure ratio, the failed identifiers and every
error message.

System Role
-----------
Used by ``BufferedLogger.add_dml_result``; the builder it fills travels the
same ``add_log`` path as any other entry, so level overrides still apply.
"""

from __future__ import annotations

from collections.abc import Iterable

from lib_log_sieve.domain import (
    DML_RESULT_TYPE,
    PRESETS,
    Category,
    DMLOutcome,
    LogEntryBuilder,
    LogLevel,
    summarise_outcomes,
)


def build_dml_result_entry(
    builder: LogEntryBuilder,
    area: str,
    outcomes: Iterable[DMLOutcome],
) -> LogEntryBuilder | None:
    """Fill ``builder`` with the aggregated failure entry, or return ``None``.

    Parameters
    ----------
    builder:
        Builder to populate, typically a fresh template clone.
    area:
        Functional area the batch belongs to.
    outcomes:
        Ordered batch results; kinds may be mixed.

    Returns
    -------
    LogEntryBuilder | None
        ``builder`` when at least one outcome failed, otherwise ``None``.

    Examples
    --------
    >>> outcomes = [DMLOutcome.save(True, 'a'), DMLOutcome.save(False, 'b', ['locked'])]
    >>> entry = build_dml_result_entry(LogEntryBuilder(), 'Billing', outcomes).build()
    >>> entry.summary, entry.details, sorted(entry.related_object_ids)
    ('Save failed: 1 of 2 records failed', 'locked', ['b'])
    >>> build_dml_result_entry(LogEntryBuilder(), 'Billing', outcomes[:1]) is None
    True
    """

    summary = summarise_outcomes(outcomes)
    if not summary.has_failures:
        return None
    return (
        builder.category(Category.ERROR)
        .type(DML_RESULT_TYPE)
        .area(area)
        .level(LogLevel.ERROR)
        .summary(summary.describe())
        .details(summary.error_text)
        .related_objects(summary.failed_ids)
        .operation(summary.operation.value if summary.operation is not None else None)
        .create_issue(True)
        .post_processing(PRESETS["error"])
    )


__all__ = ["build_dml_result_entry"]
