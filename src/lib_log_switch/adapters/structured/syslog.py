"""Syslog mechanism forwarding messages to the platform system log.

Purpose
-------
Send rendered messages to the local syslog daemon with a priority derived from
the message's loglevel.

Contents
--------
* :data:`_PRIORITY_MAP` - loglevel to syslog priority mapping.
* :class:`SyslogBackend` - the subset of the stdlib :mod:`syslog` module used.
* :class:`SyslogMechanism` - the ``syslog`` mechanism.

System Role
-----------
``init`` opens the log (``openlog``), ``log`` calls ``syslog`` and ``deinit``
closes it. The backend is imported lazily so the module loads on platforms
without syslog; there ``init`` reports failure and the registry refuses the
switch.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Protocol

from lib_log_switch.domain.levels import LogLevel
from lib_log_switch.domain.mechanism import MechanismDescriptor

LOGGER = logging.getLogger(__name__)

LOG_PID = 0x01
LOG_USER = 1 << 3

_PRIORITY_MAP = {
    LogLevel.VERY_NOISY: 7,
    LogLevel.NOISY: 7,
    LogLevel.DEBUG: 7,
    LogLevel.VERBOSE: 6,
    LogLevel.INFO: 6,
    LogLevel.NOTICE: 5,
    LogLevel.WARNING: 4,
    LogLevel.ERROR: 3,
    LogLevel.QUIET: 2,
}

#: Map :class:`LogLevel` to syslog numeric priorities.


class SyslogBackend(Protocol):
    """Functions of the stdlib :mod:`syslog` module the mechanism calls."""

    def openlog(self, ident: str, logoption: int, facility: int) -> None: ...

    def syslog(self, priority: int, message: str) -> None: ...

    def closelog(self) -> None: ...


def _default_backend() -> Any:
    """Return the stdlib :mod:`syslog` module, raising if unavailable."""
    try:
        import syslog
    except ImportError as exc:  # pragma: no cover - executed only where syslog is missing
        raise RuntimeError("syslog is not available on this platform") from exc
    return syslog


def _program_name() -> str:
    argv0 = sys.argv[0] if sys.argv and sys.argv[0] else "python"
    return os.path.basename(argv0) or "python"


class SyslogMechanism:
    """Forward messages to syslog.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.calls = []
    ...     def openlog(self, ident, logoption, facility):
    ...         self.calls.append(("openlog", ident))
    ...     def syslog(self, priority, message):
    ...         self.calls.append(("syslog", priority, message))
    ...     def closelog(self):
    ...         self.calls.append(("closelog",))
    >>> backend = Recorder()
    >>> descriptor = SyslogMechanism(backend=backend, ident="demo").as_descriptor()
    >>> descriptor.start()
    >>> descriptor.log(LogLevel.ERROR, "error: boom")
    >>> descriptor.stop()
    >>> backend.calls
    [('openlog', 'demo'), ('syslog', 3, 'error: boom'), ('closelog',)]
    """

    name = "syslog"

    def __init__(
        self,
        *,
        backend: SyslogBackend | None = None,
        ident: str | None = None,
        facility: int = LOG_USER,
    ) -> None:
        self._backend = backend
        self._ident = ident
        self._facility = facility
        self._active: Any = None

    def init(self) -> bool:
        try:
            backend = self._backend if self._backend is not None else _default_backend()
            backend.openlog(self._ident or _program_name(), LOG_PID, self._facility)
        except (RuntimeError, OSError) as exc:
            LOGGER.debug("syslog mechanism unavailable: %s", exc)
            return False
        self._active = backend
        return True

    def log(self, level: LogLevel, text: str) -> None:
        backend = self._active
        if backend is None:
            return
        backend.syslog(_PRIORITY_MAP[level], text)

    def deinit(self) -> None:
        backend, self._active = self._active, None
        if backend is not None:
            backend.closelog()

    def as_descriptor(self) -> MechanismDescriptor:
        return MechanismDescriptor(self.name, log=self.log, init=self.init, deinit=self.deinit)


__all__ = ["SyslogBackend", "SyslogMechanism"]
