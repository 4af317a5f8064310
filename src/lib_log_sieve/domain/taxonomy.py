"""Classifier vocabulary for log entries.

Purpose
-------
Define the closed :class:`Category` enum, the well-known entry types, and the
post-processing toggles a sink may honour after receiving an entry.

Contents
--------
* :class:`Category` with a lenient parser mirroring :meth:`LogLevel.parse`.
* :class:`PostProcessing` toggles plus the presets used by the producers.
* ``BACKEND_TYPE`` / ``DML_RESULT_TYPE`` string constants.

System Role
-----------
Category, type and area form the three-part key used by level overrides; the
presets keep producer defaults in one place.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


BACKEND_TYPE = "Backend"
"""Type recorded when an exception does not expose a usable class name."""

DML_RESULT_TYPE = "DMLResult"
"""Type recorded on aggregated batch-operation failures."""


class Category(Enum):
    """Top-level classifier attached to every entry."""

    ERROR = "Error"
    WARNING = "Warning"
    DEBUG = "Debug"
    EVENT = "Event"
    INTEGRATION = "Integration"
    WORKFLOW = "Flow"
    FRONTEND = "Frontend"

    @classmethod
    def from_name(cls, name: str) -> "Category":
        """Return the member whose value or name matches ``name`` case-insensitively.

        Examples
        --------
        >>> Category.from_name('flow') is Category.WORKFLOW
        True
        >>> Category.from_name('Workflow') is Category.WORKFLOW
        True
        >>> Category.from_name('yaml')
        Traceback (most recent call last):
        ...
        ValueError: Unknown category: 'yaml'
        """

        normalized = name.strip().casefold()
        for member in cls:
            if normalized in (member.value.casefold(), member.name.casefold()):
                return member
        raise ValueError(f"Unknown category: {name!r}")

    @classmethod
    def parse(cls, raw: str | None, default: "Category | None" = None) -> tuple["Category", str | None]:
        """Resolve ``raw`` leniently, returning the category and an optional diagnostic."""

        fallback = default if default is not None else cls.WORKFLOW
        if raw is None or not raw.strip():
            return fallback, None
        try:
            return cls.from_name(raw), None
        except ValueError:
            return fallback, f"Invalid category {raw!r} supplied; defaulted to {fallback.value}."


class PostProcessing(Enum):
    """Named enrichment steps a sink may perform on a persisted entry."""

    STACK_TRACE = "stack_trace"
    USER_INFO = "user_info"
    OBJECT_INFO = "object_info"
    RELATED_OBJECTS = "related_objects"
    DEPLOY_RESULT = "deploy_result"
    INSTALLED_PACKAGES = "installed_packages"
    PLATFORM_LIMITS = "platform_limits"
    ACTIVE_SESSIONS = "active_sessions"
    AUDIT_TRAIL = "audit_trail"
    PENDING_JOBS = "pending_jobs"
    WORKFLOW_DETAILS = "workflow_details"


def post_processing_controls(*enabled: PostProcessing) -> dict[str, bool]:
    """Return a full toggle map with only ``enabled`` switched on.

    Examples
    --------
    >>> controls = post_processing_controls(PostProcessing.USER_INFO)
    >>> controls['user_info'], controls['stack_trace']
    (True, False)
    """

    switched = set(enabled)
    return {member.value: member in switched for member in PostProcessing}


_P = PostProcessing

PRESETS: Mapping[str, Mapping[str, bool]] = MappingProxyType(
    {
        "error": MappingProxyType(
            post_processing_controls(
                _P.STACK_TRACE,
                _P.USER_INFO,
                _P.OBJECT_INFO,
                _P.RELATED_OBJECTS,
                _P.DEPLOY_RESULT,
                _P.INSTALLED_PACKAGES,
                _P.PLATFORM_LIMITS,
                _P.AUDIT_TRAIL,
                _P.PENDING_JOBS,
            )
        ),
        "warning": MappingProxyType(post_processing_controls(_P.STACK_TRACE, _P.USER_INFO, _P.RELATED_OBJECTS)),
        "debug": MappingProxyType(post_processing_controls(_P.STACK_TRACE, _P.USER_INFO)),
        "event": MappingProxyType(post_processing_controls(_P.USER_INFO)),
        "integration": MappingProxyType(post_processing_controls(_P.STACK_TRACE, _P.USER_INFO, _P.RELATED_OBJECTS)),
        "workflow": MappingProxyType(post_processing_controls(_P.USER_INFO, _P.WORKFLOW_DETAILS)),
    }
)
"""Toggle presets keyed by producer name (error, warning, debug, event, integration, workflow)."""


__all__ = [
    "BACKEND_TYPE",
    "Category",
    "DML_RESULT_TYPE",
    "PRESETS",
    "PostProcessing",
    "post_processing_controls",
]
