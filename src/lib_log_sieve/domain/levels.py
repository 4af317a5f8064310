"""Log level abstraction with declaration-order ranking.

Purpose
-------
Provide the closed severity vocabulary used by entries and override rules,
together with strict and lenient parsing helpers.

Contents
--------
* :class:`LogLevel` enum ordered from most to least severe.
* ``_INVALID_LEVEL`` diagnostic template used by :meth:`LogLevel.parse`.

System Role
-----------
Override rules compare levels by their declared rank; inbound entries use the
lenient parser so a bad level never aborts a log call.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Enumerated severities, declared from most to least severe."""

    ERROR = 0
    WARNING = 1
    INFO = 2
    DEBUG = 3
    FINE = 4
    FINER = 5
    FINEST = 6

    @property
    def rank(self) -> int:
        """Return the declaration index (``ERROR`` is ``0``)."""

        return self.value

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured payloads."""

        return self.name.lower()

    def allows(self, level: "LogLevel") -> bool:
        """Return ``True`` when ``self`` used as a threshold lets ``level`` through.

        Examples
        --------
        >>> LogLevel.WARNING.allows(LogLevel.ERROR)
        True
        >>> LogLevel.WARNING.allows(LogLevel.INFO)
        False
        """

        return self.rank >= level.rank

    def to_python_level(self) -> int:
        """Return the closest :mod:`logging` constant for this level."""

        return _PYTHON_LEVELS[self]

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def parse(cls, raw: str | None, default: "LogLevel | None" = None) -> tuple["LogLevel", str | None]:
        """Resolve ``raw`` leniently, returning the level and an optional diagnostic.

        Blank input falls back silently; unknown names fall back to
        ``default`` (``INFO`` unless given) and yield a sentence naming the
        offending value.

        Examples
        --------
        >>> LogLevel.parse("debug")
        (<LogLevel.DEBUG: 3>, None)
        >>> LogLevel.parse(None)
        (<LogLevel.INFO: 2>, None)
        >>> LogLevel.parse("BOGUS")[1]
        "Invalid log level 'BOGUS' supplied; defaulted to INFO."
        """

        fallback = default if default is not None else cls.INFO
        if raw is None or not raw.strip():
            return fallback, None
        try:
            return cls.from_name(raw), None
        except ValueError:
            return fallback, _INVALID_LEVEL.format(raw=raw, fallback=fallback.name)


_INVALID_LEVEL = "Invalid log level {raw!r} supplied; defaulted to {fallback}."

_PYTHON_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.FINE: logging.DEBUG,
    LogLevel.FINER: logging.DEBUG,
    LogLevel.FINEST: logging.DEBUG,
}
# Stdlib has nothing finer than DEBUG; the three fine levels collapse onto it.


__all__ = ["LogLevel"]
