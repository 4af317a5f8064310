"""Settings resolution for the composition root.

Purpose
-------
Merge explicit keyword arguments with ``LOG_SIEVE_*`` environment variables
into one frozen :class:`RuntimeSettings` value.

Contents
--------
* :class:`RuntimeSettings` – resolved configuration.
* :func:`build_runtime_settings` – argument/env precedence rules.
* Environment helpers (``_env_bool``, ``_env_text``).

System Role
-----------
Explicit arguments win over the environment; the environment wins over
defaults. Invalid sink names raise ``ValueError`` immediately.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

SINK_CHOICES = ("console", "jsonl", "memory")

ENV_SINK = "LOG_SIEVE_SINK"
ENV_OUTPUT = "LOG_SIEVE_OUTPUT"
ENV_RULES_FILE = "LOG_SIEVE_RULES_FILE"
ENV_OVERRIDES = "LOG_SIEVE_LEVEL_OVERRIDES"
ENV_FORCE_COLOR = "LOG_SIEVE_FORCE_COLOR"
ENV_NO_COLOR = "LOG_SIEVE_NO_COLOR"


@dataclass(slots=True, frozen=True)
class RuntimeSettings:
    """Resolved configuration used by :func:`lib_log_sieve.create_logger`."""

    sink: str = "console"
    output: Path | None = None
    rules_file: Path | None = None
    level_overrides: str | None = None
    force_color: bool = False
    no_color: bool = False
    console_template: str | None = None


def _env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> import os
    >>> _ = os.environ.pop('LOG_SIEVE_EXAMPLE_BOOL', None)
    >>> _env_bool('LOG_SIEVE_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LOG_SIEVE_EXAMPLE_BOOL'] = '0'
    >>> _env_bool('LOG_SIEVE_EXAMPLE_BOOL', default=True)
    False
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_text(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _as_path(value: str | Path | None) -> Path | None:
    if value is None:
        return None
    return Path(value)


def build_runtime_settings(
    *,
    sink: str | None = None,
    output: str | Path | None = None,
    rules_file: str | Path | None = None,
    level_overrides: str | None = None,
    force_color: bool | None = None,
    no_color: bool | None = None,
    console_template: str | None = None,
) -> RuntimeSettings:
    """Resolve settings from arguments, then environment, then defaults."""

    sink_name = (sink or _env_text(ENV_SINK) or "console").strip().lower()
    if sink_name not in SINK_CHOICES:
        raise ValueError(f"Unsupported sink {sink_name!r}; expected one of {', '.join(SINK_CHOICES)}")
    output_path = _as_path(output) or _as_path(_env_text(ENV_OUTPUT))
    if sink_name == "jsonl" and output_path is None:
        raise ValueError(f"The jsonl sink requires an output path ({ENV_OUTPUT} or output=...)")
    return RuntimeSettings(
        sink=sink_name,
        output=output_path,
        rules_file=_as_path(rules_file) or _as_path(_env_text(ENV_RULES_FILE)),
        level_overrides=level_overrides if level_overrides is not None else _env_text(ENV_OVERRIDES),
        force_color=force_color if force_color is not None else _env_bool(ENV_FORCE_COLOR, False),
        no_color=no_color if no_color is not None else _env_bool(ENV_NO_COLOR, False),
        console_template=console_template,
    )


__all__ = ["RuntimeSettings", "SINK_CHOICES", "build_runtime_settings"]
