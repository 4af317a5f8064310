"""Port for the configuration store supplying level override rules."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from lib_log_sieve.domain.rules import LevelRule


@runtime_checkable
class LevelRuleSource(Protocol):
    """Provide the override rules loaded once by :class:`LevelRegistry`."""

    def load(self) -> Iterable[LevelRule]:
        """Return parsed rules; raise ``ValueError`` on malformed configuration."""


__all__ = ["LevelRuleSource"]
