"""Runtime state container and access helpers."""

from __future__ import annotations

from threading import RLock
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._facility import LogFacility


_STATE: LogFacility | None = None
_STATE_LOCK = RLock()


def set_runtime(facility: LogFacility) -> None:
    """Install ``facility`` as the active singleton."""

    with _STATE_LOCK:
        global _STATE
        _STATE = facility


def clear_runtime() -> LogFacility | None:
    """Remove the active facility if present and return it."""

    with _STATE_LOCK:
        global _STATE
        previous, _STATE = _STATE, None
        return previous


def current_runtime() -> LogFacility:
    """Return the active facility or raise when uninitialised."""

    with _STATE_LOCK:
        if _STATE is None:
            raise RuntimeError("lib_log_switch.init() must be called before using the facility")
        return _STATE


def peek_runtime() -> LogFacility | None:
    """Return the active facility or ``None`` without raising."""

    with _STATE_LOCK:
        return _STATE


def is_initialised() -> bool:
    """Return ``True`` when :func:`lib_log_switch.init` has been called."""

    with _STATE_LOCK:
        return _STATE is not None


__all__ = [
    "clear_runtime",
    "current_runtime",
    "is_initialised",
    "peek_runtime",
    "set_runtime",
]
