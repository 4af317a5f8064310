"""Level override rules and the registry that applies them.

Purpose
-------
Decide whether an entry is important enough to persist, based on overrides
keyed by any combination of category, type and area.

Contents
--------
* :class:`LevelRule` – partial key plus minimum level.
* :func:`rule_key` / :func:`candidate_keys` – canonical key construction.
* :class:`LevelRegistry` – lazily loaded, cached rule lookup.

System Role
-----------
The buffered logger consults :meth:`LevelRegistry.resolve` before buffering.
Rules are loaded once through an injected loader and treated as static for the
registry's lifetime.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .entry import LogEntry
from .levels import LogLevel
from .taxonomy import Category


logger = logging.getLogger(__name__)

RuleKey = tuple[str, str, str]
"""Canonical ``(category, type, area)`` key; ``""`` is the wildcard."""

WILDCARD = ""


def _normalise(part: Category | str | None) -> str:
    if part is None:
        return WILDCARD
    if isinstance(part, Category):
        part = part.value
    return part.strip().casefold()


def _normalise_category(part: Category | str | None) -> str:
    # Member names ("Workflow") and values ("Flow") must share one key.
    folded = _normalise(part)
    for member in Category:
        if folded in (member.value.casefold(), member.name.casefold()):
            return member.value.casefold()
    return folded


def rule_key(category: Category | str | None, type: str | None, area: str | None) -> RuleKey:
    """Return the canonical key for a (possibly partial) classifier triple.

    Examples
    --------
    >>> rule_key(Category.WORKFLOW, ' Checkout ', None)
    ('flow', 'checkout', '')
    >>> rule_key('Workflow', None, None)
    ('flow', '', '')
    """

    return (_normalise_category(category), _normalise(type), _normalise(area))


def candidate_keys(category: Category | str | None, type: str | None, area: str | None) -> Iterator[RuleKey]:
    """Yield lookup keys from most to least specific.

    Examples
    --------
    >>> keys = list(candidate_keys('c', 't', 'a'))
    >>> keys[0], keys[4], keys[-1]
    (('c', 't', 'a'), ('', '', 'a'), ('', '', ''))
    """

    cat, typ, area_ = rule_key(category, type, area)
    w = WILDCARD
    yield (cat, typ, area_)
    yield (cat, typ, w)
    yield (cat, w, area_)
    yield (w, typ, area_)
    yield (w, w, area_)
    yield (w, typ, w)
    yield (cat, w, w)
    yield (w, w, w)


@dataclass(slots=True, frozen=True)
class LevelRule:
    """Minimum level applied to entries matching a partial classifier key."""

    minimum: LogLevel
    category: str | None = None
    type: str | None = None
    area: str | None = None

    @property
    def key(self) -> RuleKey:
        return rule_key(self.category, self.type, self.area)

    def allows(self, level: LogLevel) -> bool:
        return self.minimum.allows(level)


class LevelRegistry:
    """Answer whether an entry's level is sufficient to be persisted.

    Parameters
    ----------
    loader:
        Callable returning the configured rules. It runs at most once, on the
        first call to :meth:`resolve`, :meth:`load` or :attr:`rules`; any
        exception it raises propagates to the caller.

    Examples
    --------
    >>> registry = LevelRegistry(lambda: [LevelRule(LogLevel.WARNING, area='Billing')])
    >>> from lib_log_sieve.domain.entry import LogEntry
    >>> registry.resolve(LogEntry(Category.EVENT, 'T', 'Billing', LogLevel.INFO))
    False
    >>> registry.resolve(LogEntry(Category.EVENT, 'T', 'Shipping', LogLevel.INFO))
    True
    """

    def __init__(self, loader: Callable[[], Iterable[LevelRule]] | None = None) -> None:
        self._loader = loader
        self._rules: Mapping[RuleKey, LevelRule] | None = None

    @property
    def loaded(self) -> bool:
        return self._rules is not None

    @property
    def rules(self) -> Mapping[RuleKey, LevelRule]:
        """Return the read-only rule mapping, loading it if necessary."""

        return self.load()

    def load(self) -> Mapping[RuleKey, LevelRule]:
        """Load and cache rules; subsequent calls return the cached mapping."""

        if self._rules is None:
            table: dict[RuleKey, LevelRule] = {}
            if self._loader is not None:
                for rule in self._loader():
                    table[rule.key] = rule
            logger.debug("Loaded %d level override rule(s)", len(table))
            self._rules = MappingProxyType(table)
        return self._rules

    def match(self, category: Category | str | None, type: str | None, area: str | None) -> LevelRule | None:
        """Return the most specific rule for the classifier triple, if any."""

        rules = self.load()
        if not rules:
            return None
        for key in candidate_keys(category, type, area):
            rule = rules.get(key)
            if rule is not None:
                return rule
        return None

    def resolve(self, entry: LogEntry) -> bool:
        """Return ``True`` when ``entry`` should be persisted."""

        if entry.level is None:
            return True
        rule = self.match(entry.category, entry.type, entry.area)
        if rule is None:
            return True
        return rule.allows(entry.level)


__all__ = ["LevelRegistry", "LevelRule", "RuleKey", "candidate_keys", "rule_key"]
