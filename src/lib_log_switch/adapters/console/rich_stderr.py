"""Standard-error mechanism rendered through Rich.

Purpose
-------
Write each message to the process's standard error stream, one line per
message, exactly as the façade rendered it.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping for terminals.
* :class:`StderrMechanism` - the ``stderr`` mechanism.

System Role
-----------
Default mechanism of the facility. The Rich console is created on ``init`` and
released on ``deinit``; markup, highlighting, emoji substitution and soft
wrapping are disabled so the emitted bytes match the rendered text. Styles are
applied only when Rich detects a terminal (or ``force_color`` is set).
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console

from lib_log_switch.domain.levels import LogLevel, coerce_level
from lib_log_switch.domain.mechanism import MechanismDescriptor

#: Default Rich styles keyed by :class:`LogLevel`.
_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.VERY_NOISY: "dim",
    LogLevel.NOISY: "dim",
    LogLevel.DEBUG: "dim",
    LogLevel.VERBOSE: "",
    LogLevel.INFO: "cyan",
    LogLevel.NOTICE: "bold cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
    LogLevel.QUIET: "bold red",
}


class StderrMechanism:
    """Print messages to standard error.

    Examples
    --------
    >>> from io import StringIO
    >>> console = Console(file=StringIO(), no_color=True)
    >>> mechanism = StderrMechanism(console=console)
    >>> descriptor = mechanism.as_descriptor()
    >>> descriptor.start()
    >>> descriptor.log(LogLevel.WARNING, "warning: disk almost full")
    >>> console.file.getvalue()
    'warning: disk almost full\\n'
    """

    name = "stderr"

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: Mapping[LogLevel | str, str] | None = None,
    ) -> None:
        self._injected = console
        self._console: Console | None = None
        self._force_color = force_color
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = coerce_level(key.strip().lower().replace("_", "")) if isinstance(key, str) else coerce_level(key)
            merged[level] = value
        self._style_map = merged

    @property
    def console(self) -> Console | None:
        return self._console

    def init(self) -> bool:
        if self._injected is not None:
            self._console = self._injected
        else:
            self._console = Console(
                stderr=True,
                force_terminal=True if self._force_color else None,
                no_color=self._no_color,
                highlight=False,
                emoji=False,
                markup=False,
                soft_wrap=True,
            )
        return True

    def log(self, level: LogLevel, text: str) -> None:
        console = self._console
        if console is None:
            return
        style = "" if self._no_color else self._style_map.get(level, "")
        console.print(text, style=style or None, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def deinit(self) -> None:
        self._console = None

    def as_descriptor(self) -> MechanismDescriptor:
        return MechanismDescriptor(self.name, log=self.log, init=self.init, deinit=self.deinit)


__all__ = ["StderrMechanism"]
