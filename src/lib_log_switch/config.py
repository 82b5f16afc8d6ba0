"""Optional ``.env`` loading for CLI entry points.

Purpose
-------
Let operators keep ``LOG_SWITCH_*`` settings in a ``.env`` file next to a
project instead of exporting them in every shell.

Contents
--------
* :data:`DOTENV_ENV_VAR` - toggle read when no CLI flag is given.
* :func:`should_use_dotenv` - decide between CLI flag and environment toggle.
* :func:`enable_dotenv` - locate and load the nearest ``.env`` once.

System Role
-----------
Only the CLI calls into this module. Values already present in the process
environment always win over ``.env`` entries.
"""

from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LOG_SWITCH_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}

_LOADED: Path | None = None
_ATTEMPTED = False
_LOCK = RLock()


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Return whether ``.env`` loading is requested.

    An explicit CLI flag wins; otherwise the environment toggle decides.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(explicit=None, env_value=None)
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(search_from: Path | str | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding existing variables.

    The search walks from ``search_from`` (default: the working directory)
    towards the filesystem root. Loading happens at most once per process;
    later calls return the path found by the first one.
    """

    global _LOADED, _ATTEMPTED
    with _LOCK:
        if _ATTEMPTED:
            return _LOADED
        _ATTEMPTED = True
        candidate = _locate(search_from)
        if candidate is None:
            logger.debug("no .env file found from %s", search_from or Path.cwd())
            return None
        load_dotenv(candidate, override=False)
        _LOADED = candidate.resolve()
        logger.debug("loaded environment from %s", _LOADED)
        return _LOADED


def _locate(search_from: Path | str | None) -> Path | None:
    if search_from is None:
        found = find_dotenv(usecwd=True)
        return Path(found) if found else None
    start = Path(search_from).resolve()
    if start.is_file():
        start = start.parent
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    """Forget the previous load so tests can exercise :func:`enable_dotenv` again."""

    global _LOADED, _ATTEMPTED
    with _LOCK:
        _LOADED = None
        _ATTEMPTED = False


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "should_use_dotenv"]
