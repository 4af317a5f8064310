"""Optional ``.env`` loading for ``LOG_SIEVE_*`` configuration.

Purpose
-------
Let operators keep sink and override settings in a ``.env`` file next to a
project without exporting variables by hand.

Contents
--------
* :func:`enable_dotenv` – locate and load the nearest ``.env`` once.
* :func:`should_use_dotenv` – precedence between CLI flag and environment.

System Role
-----------
Real environment variables always keep precedence over ``.env`` values.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DOTENV_ENV_VAR = "LOG_SIEVE_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}

_LOADED_PATH: Path | None = None
_ATTEMPTED = False


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Return whether ``.env`` loading is requested.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value='1')
    False
    >>> should_use_dotenv(env_value='yes')
    True
    >>> should_use_dotenv()
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding existing variables.

    The search starts at ``search_from`` (default: the working directory) and
    walks up the tree. Loading happens at most once per process; later calls
    return the path found by the first call.
    """

    global _LOADED_PATH, _ATTEMPTED
    if _ATTEMPTED:
        return _LOADED_PATH
    _ATTEMPTED = True
    if search_from is not None:
        candidate = _search_upwards(Path(search_from))
    else:
        found = find_dotenv(usecwd=True)
        candidate = Path(found).resolve() if found else None
    if candidate is None:
        return None
    load_dotenv(candidate, override=False)
    _LOADED_PATH = candidate
    return candidate


def _search_upwards(start: Path) -> Path | None:
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _LOADED_PATH, _ATTEMPTED
    _LOADED_PATH = None
    _ATTEMPTED = False


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "should_use_dotenv"]
