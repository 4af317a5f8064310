"""Level override sources backed by static rows, JSON files or inline strings.

Purpose
-------
Turn configuration rows ``{category?, type?, area?, level}`` into
:class:`LevelRule` objects for :class:`LevelRegistry`.

Contents
--------
* :func:`rule_from_row` – parse a single mapping (strict).
* :class:`StaticRuleSource` – rows held in memory.
* :class:`JsonRuleSource` – JSON array stored on disk.
* :func:`parse_level_overrides` – ``category/type/area=LEVEL`` comma lists.

System Role
-----------
Configuration is trusted input: an unknown level or a malformed row raises
``ValueError`` at load time instead of silently widening what gets persisted.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from lib_log_sieve.application.ports.rules import LevelRuleSource
from lib_log_sieve.domain.levels import LogLevel
from lib_log_sieve.domain.rules import LevelRule

_WILDCARDS = {"", "*"}


def _key_part(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return None if text in _WILDCARDS else text


def rule_from_row(row: Mapping[str, Any]) -> LevelRule:
    """Parse one override row.

    Examples
    --------
    >>> rule_from_row({'category': 'Flow', 'level': 'debug'})
    LevelRule(minimum=<LogLevel.DEBUG: 3>, category='Flow', type=None, area=None)
    >>> rule_from_row({'area': 'Billing'})
    Traceback (most recent call last):
    ...
    ValueError: Level override row is missing 'level': {'area': 'Billing'}
    """

    if not isinstance(row, Mapping):
        raise ValueError(f"Level override row must be an object: {row!r}")
    raw_level = row.get("level")
    if raw_level is None or not str(raw_level).strip():
        raise ValueError(f"Level override row is missing 'level': {dict(row)!r}")
    return LevelRule(
        minimum=LogLevel.from_name(str(raw_level)),
        category=_key_part(row.get("category")),
        type=_key_part(row.get("type")),
        area=_key_part(row.get("area")),
    )


class StaticRuleSource(LevelRuleSource):
    """Serve rules parsed from in-memory rows."""

    def __init__(self, rows: Iterable[Mapping[str, Any] | LevelRule] = ()) -> None:
        self._rows = list(rows)

    def load(self) -> list[LevelRule]:
        return [row if isinstance(row, LevelRule) else rule_from_row(row) for row in self._rows]


class JsonRuleSource(LevelRuleSource):
    """Read rules from a JSON file holding an array of override rows."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[LevelRule]:
        with self._path.open("r", encoding="utf-8") as fh:
            try:
                payload = json.load(fh)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Level override file {self._path} is not valid JSON: {exc}") from exc
        if not isinstance(payload, Sequence) or isinstance(payload, (str, bytes)):
            raise ValueError(f"Level override file {self._path} must contain a JSON array")
        return [rule_from_row(row) for row in payload]


def parse_level_overrides(raw: str | None) -> list[LevelRule]:
    """Parse ``category/type/area=LEVEL`` comma-separated overrides.

    Missing trailing parts and ``*`` act as wildcards.

    Examples
    --------
    >>> rules = parse_level_overrides('Flow/*/Billing=WARNING, */*/*=error')
    >>> [(r.category, r.type, r.area, r.minimum.name) for r in rules]
    [('Flow', None, 'Billing', 'WARNING'), (None, None, None, 'ERROR')]
    >>> parse_level_overrides('')
    []
    """

    if not raw:
        return []
    rules: list[LevelRule] = []
    for chunk in raw.split(","):
        if not chunk.strip():
            continue
        if "=" not in chunk:
            raise ValueError(f"Level override {chunk.strip()!r} must look like category/type/area=LEVEL")
        key, level = chunk.split("=", 1)
        parts = [part.strip() for part in key.split("/")]
        if len(parts) > 3:
            raise ValueError(f"Level override key {key.strip()!r} has more than three parts")
        parts += [""] * (3 - len(parts))
        rules.append(rule_from_row({"category": parts[0], "type": parts[1], "area": parts[2], "level": level}))
    return rules


class InlineRuleSource(LevelRuleSource):
    """Serve rules parsed from an inline override string."""

    def __init__(self, raw: str | None) -> None:
        self._raw = raw

    def load(self) -> list[LevelRule]:
        return parse_level_overrides(self._raw)


class ChainedRuleSource(LevelRuleSource):
    """Concatenate several sources; later rows override earlier ones per key."""

    def __init__(self, sources: Iterable[LevelRuleSource]) -> None:
        self._sources = list(sources)

    def load(self) -> list[LevelRule]:
        rules: list[LevelRule] = []
        for source in self._sources:
            rules.extend(source.load())
        return rules


__all__ = [
    "ChainedRuleSource",
    "InlineRuleSource",
    "JsonRuleSource",
    "StaticRuleSource",
    "parse_level_overrides",
    "rule_from_row",
]
