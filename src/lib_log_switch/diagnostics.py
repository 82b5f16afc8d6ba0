"""Lowest-effort side channel for errors about the facility itself.

Purpose
-------
The facility cannot log problems with its own configuration through the
mechanism it is trying to configure. Errors are therefore written straight to
the process's standard error stream and, when installed, forwarded to a
diagnostic hook.

Contents
--------
* :func:`report` - write an error line and notify the hook.
* :func:`set_hook` / :func:`current_hook` - manage the process-wide hook.

System Role
-----------
Used by the level model, the registry and the façade. The hook receives
``(event_name, payload)`` pairs; exceptions raised by it are swallowed so a
faulty hook never breaks a log call.
"""

from __future__ import annotations

import logging
import sys
from threading import RLock
from typing import Any, Callable, TextIO

from .domain.errors import LogSwitchError

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None

LOGGER = logging.getLogger(__name__)

_HOOK: DiagnosticHook = None
_HOOK_LOCK = RLock()


def set_hook(hook: DiagnosticHook) -> None:
    """Install ``hook`` (or remove it with ``None``)."""

    global _HOOK
    with _HOOK_LOCK:
        _HOOK = hook


def current_hook() -> DiagnosticHook:
    """Return the installed hook, if any."""

    with _HOOK_LOCK:
        return _HOOK


def notify(event: str, payload: dict[str, Any]) -> None:
    """Forward ``event`` to the hook without writing to stderr."""

    hook = current_hook()
    if hook is None:
        return
    try:
        hook(event, payload)
    except Exception:  # pragma: no cover - hooks must never break logging
        LOGGER.debug("diagnostic hook raised for %s", event, exc_info=True)


def report(error: LogSwitchError, *, stream: TextIO | None = None) -> None:
    """Write ``error`` to standard error and notify the diagnostic hook.

    Examples
    --------
    >>> import io
    >>> from lib_log_switch.domain.errors import UnknownMechanismError
    >>> buffer = io.StringIO()
    >>> report(UnknownMechanismError('Unknown logging mechanism: "foo"'), stream=buffer)
    >>> buffer.getvalue()
    'Unknown logging mechanism: "foo"\\n'
    """

    target = stream if stream is not None else sys.stderr
    try:
        target.write(f"{error}\n")
        target.flush()
    except (OSError, ValueError):  # pragma: no cover - stderr closed or detached
        pass
    notify(error.event, {"error": type(error).__name__, "message": str(error)})


__all__ = ["DiagnosticHook", "current_hook", "notify", "report", "set_hook"]
