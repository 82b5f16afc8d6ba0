"""Use case turning one log call into output.

Purpose
-------
Apply the facility's policy to a single message: validate the level, filter it
against the current threshold, render it for the active verbosity tier, and
hand it to either the registered override function or the mechanism registry.

Contents
--------
* :class:`ProcessMessage` - the callable produced per facility.
* :func:`create_process_message` - factory freezing the collaborators.

System Role
-----------
Application-layer orchestrator invoked by
:meth:`lib_log_switch.runtime.LogFacility.log`. Every failure is reported on the
diagnostics side channel and turned into a ``{"ok": False, ...}`` result; no
exception escapes to the caller.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypedDict

from lib_log_switch import diagnostics
from lib_log_switch.domain.errors import FormatError, LogSwitchError
from lib_log_switch.domain.events import SourceLocation
from lib_log_switch.domain.levels import LogLevel, coerce_level

from .render import render_detailed, render_message, render_plain


class ProcessResult(TypedDict, total=False):
    ok: bool
    reason: str
    target: str


OverrideBinding = tuple[Callable[..., None], Any] | None

DispatchCallable = Callable[[LogLevel, str], bool]


@dataclass(frozen=True)
class _Collaborators:
    current_level: Callable[[], LogLevel]
    current_override: Callable[[], OverrideBinding]
    dispatch: DispatchCallable
    max_message_size: int


class ProcessMessage:
    """Callable applying filter, render and dispatch to a log call."""

    def __init__(self, collaborators: _Collaborators) -> None:
        self._c = collaborators

    def __call__(
        self,
        level: LogLevel | int,
        location: SourceLocation,
        fmt: str,
        args: Sequence[Any] = (),
    ) -> ProcessResult:
        try:
            requested = coerce_level(level)
        except LogSwitchError as exc:
            diagnostics.report(exc)
            return {"ok": False, "reason": "invalid_level"}

        threshold = self._c.current_level()
        if threshold > requested:
            return {"ok": False, "reason": "suppressed"}

        try:
            text, truncated = render_message(fmt, args, self._c.max_message_size)
        except LogSwitchError as exc:
            diagnostics.report(exc)
            return {"ok": False, "reason": "format_failed"}
        if truncated:
            diagnostics.report(
                FormatError(f"Log message truncated to {self._c.max_message_size} bytes ({location.file}:{location.line})")
            )

        override = self._c.current_override()
        if override is not None:
            func, context = override
            try:
                func(context, requested, location.file, location.func, location.line, text)
            except Exception as exc:
                diagnostics.report(LogSwitchError(f"Log override function raised: {exc!r}"))
                return {"ok": False, "reason": "override_error"}
            return {"ok": True, "target": "override"}

        if threshold <= LogLevel.DEBUG:
            rendered = render_detailed(requested, location, text)
        else:
            rendered = render_plain(requested, text)

        if not self._c.dispatch(requested, rendered):
            return {"ok": False, "reason": "dropped"}
        return {"ok": True, "target": "mechanism"}


def create_process_message(
    *,
    current_level: Callable[[], LogLevel],
    current_override: Callable[[], OverrideBinding],
    dispatch: DispatchCallable,
    max_message_size: int,
) -> ProcessMessage:
    """Build the per-facility message pipeline.

    Parameters
    ----------
    current_level:
        Returns the effective threshold at call time.
    current_override:
        Returns ``(function, context)`` when an override is registered.
    dispatch:
        Delivers rendered text to a mechanism; returns ``False`` on drop.
    max_message_size:
        Message buffer size in bytes.

    Examples
    --------
    >>> seen = []
    >>> process = create_process_message(
    ...     current_level=lambda: LogLevel.NOTICE,
    ...     current_override=lambda: None,
    ...     dispatch=lambda level, text: seen.append(text) or True,
    ...     max_message_size=4096,
    ... )
    >>> process(LogLevel.WARNING, SourceLocation("a.py", "f", 1), "low %s", ("disk",))
    {'ok': True, 'target': 'mechanism'}
    >>> process(LogLevel.DEBUG, SourceLocation("a.py", "f", 2), "hidden")
    {'ok': False, 'reason': 'suppressed'}
    >>> seen
    ['warning: low disk']
    """

    if max_message_size <= 1:
        raise ValueError(f"max_message_size must exceed 1 byte, got {max_message_size}")
    return ProcessMessage(
        _Collaborators(
            current_level=current_level,
            current_override=current_override,
            dispatch=dispatch,
            max_message_size=max_message_size,
        )
    )


__all__ = ["DispatchCallable", "OverrideBinding", "ProcessMessage", "ProcessResult", "create_process_message"]
