"""The logging facility: level, override and mechanism state behind one handle.

Purpose
-------
Own every piece of mutable state a process needs to log: the current level,
the optional override function and the mechanism registry. All public logging
calls of :mod:`lib_log_switch` end up in a :class:`LogFacility`.

Contents
--------
* :class:`LogFacility` - level accessors, the ``log``/``emit`` entry points,
  per-level helpers, mechanism selection and listings.
* :data:`NOT_IMPLEMENTED_MESSAGE` - text logged by :meth:`LogFacility.not_implemented`.

System Role
-----------
Built by :func:`lib_log_switch.runtime._composition.build_facility` and stored
as the process singleton by :mod:`lib_log_switch.runtime`. The facility holds
no I/O of its own; rendering happens in the process-message use case and
output in the registry's mechanisms.
"""

from __future__ import annotations

import logging
import sys
from threading import RLock
from typing import Any, Callable, TextIO

from lib_log_switch import diagnostics
from lib_log_switch.application.ports import MechanismPort
from lib_log_switch.application.use_cases.process_message import (
    OverrideBinding,
    ProcessResult,
    create_process_message,
)
from lib_log_switch.application.use_cases.registry import MechanismRegistry
from lib_log_switch.domain.errors import LogSwitchError, MechanismRegistrationError
from lib_log_switch.domain.events import SourceLocation
from lib_log_switch.domain.levels import LogLevel, coerce_level, level_names, name_to_level
from lib_log_switch.domain.mechanism import MechanismDescriptor

from ._settings import RuntimeSettings

logger = logging.getLogger(__name__)

NOT_IMPLEMENTED_MESSAGE = "Not implemented, yet. Please tell developers that you need this."


class LogFacility:
    """Process-wide logging state and its operations.

    Parameters
    ----------
    settings:
        Resolved configuration; its ``environ`` is the environment-style store
        for the level and mechanism keys.
    registry:
        Mechanism registry receiving rendered messages.
    stdout:
        Stream for :meth:`print_levels`; ``None`` resolves ``sys.stdout`` lazily.

    Examples
    --------
    >>> from lib_log_switch.runtime._composition import build_facility
    >>> from lib_log_switch.runtime._settings import build_runtime_settings
    >>> store = {"LOG_SWITCH_MECHANISM": "null"}
    >>> facility = build_facility(build_runtime_settings(environ=store))
    >>> facility.set_level(LogLevel.NOTICE)
    True
    >>> store["LOG_SWITCH_LEVEL"]
    'notice'
    >>> facility.debug("hidden")
    {'ok': False, 'reason': 'suppressed'}
    >>> facility.warning("shown")
    {'ok': True, 'target': 'mechanism'}
    """

    def __init__(
        self,
        settings: RuntimeSettings,
        registry: MechanismRegistry,
        *,
        stdout: TextIO | None = None,
    ) -> None:
        self._settings = settings
        self._registry = registry
        self._stdout = stdout
        self._lock = RLock()
        self._level = settings.level
        self._override: OverrideBinding = None
        # guarded by the registry lock, which is never taken while holding self._lock
        self._custom_source: Any = None
        self._rejected_env_levels: set[str] = set()
        self._process = create_process_message(
            current_level=self.get_level,
            current_override=self._current_override,
            dispatch=registry.dispatch,
            max_message_size=settings.max_message_size,
        )

    @property
    def settings(self) -> RuntimeSettings:
        return self._settings

    @property
    def registry(self) -> MechanismRegistry:
        return self._registry

    @property
    def current_mechanism(self) -> str | None:
        """Name of the mechanism currently receiving messages, if any."""

        return self._registry.current_name

    # ------------------------------------------------------------------
    # level

    def set_level(self, level: LogLevel | int | str) -> bool:
        """Store ``level`` as the current threshold and mirror it to the store.

        Returns ``False`` (after reporting on the side channel) when ``level``
        is not an operational level.
        """

        try:
            resolved = coerce_level(level)
        except LogSwitchError as exc:
            diagnostics.report(exc)
            return False
        with self._lock:
            self._level = resolved
            if self._settings.persist_environment:
                self._settings.environ[self._settings.level_env_key] = resolved.canonical_name
        logger.debug("loglevel set to %s", resolved.canonical_name)
        return True

    def get_level(self) -> LogLevel:
        """Return the effective threshold.

        A valid level name in the store wins over the stored field. Invalid
        store values are reported once per distinct value and ignored.
        """

        raw = self._settings.environ.get(self._settings.level_env_key)
        with self._lock:
            if raw:
                try:
                    return name_to_level(raw)
                except LogSwitchError as exc:
                    if raw not in self._rejected_env_levels:
                        self._rejected_env_levels.add(raw)
                        diagnostics.report(exc)
            return self._level

    # ------------------------------------------------------------------
    # override

    def register_override(self, func: Callable[..., None] | None, context: Any = None) -> None:
        """Route every surviving message to ``func(context, level, file, func, line, message)``.

        The last registration wins; ``None`` removes the override.
        """

        if func is not None and not callable(func):
            raise TypeError(f"override function must be callable, got {type(func).__name__}")
        with self._lock:
            self._override = (func, context) if func is not None else None

    def _current_override(self) -> OverrideBinding:
        with self._lock:
            return self._override

    # ------------------------------------------------------------------
    # logging

    def log(
        self,
        level: LogLevel | int,
        location: SourceLocation | None,
        fmt: str,
        *args: Any,
    ) -> ProcessResult:
        """Filter, render and deliver one message from an explicit location."""

        return self._process(level, location or SourceLocation.unknown(), fmt, args)

    def emit(self, level: LogLevel | int, fmt: str, *args: Any, stacklevel: int = 1) -> ProcessResult:
        """Log ``fmt % args`` at ``level`` from the calling code's location.

        ``stacklevel=1`` attributes the message to the direct caller; wrappers
        add one per frame they introduce, as with :mod:`logging`.
        """

        return self._process(level, SourceLocation.from_caller(stacklevel + 1), fmt, args)

    def very_noisy(self, fmt: str, *args: Any, stacklevel: int = 1) -> ProcessResult:
        return self.emit(LogLevel.VERY_NOISY, fmt, *args, stacklevel=stacklevel + 1)

    def noisy(self, fmt: str, *args: Any, stacklevel: int = 1) -> ProcessResult:
        return self.emit(LogLevel.NOISY, fmt, *args, stacklevel=stacklevel + 1)

    def debug(self, fmt: str, *args: Any, stacklevel: int = 1) -> ProcessResult:
        return self.emit(LogLevel.DEBUG, fmt, *args, stacklevel=stacklevel + 1)

    def verbose(self, fmt: str, *args: Any, stacklevel: int = 1) -> ProcessResult:
        return self.emit(LogLevel.VERBOSE, fmt, *args, stacklevel=stacklevel + 1)

    def info(self, fmt: str, *args: Any, stacklevel: int = 1) -> ProcessResult:
        return self.emit(LogLevel.INFO, fmt, *args, stacklevel=stacklevel + 1)

    def notice(self, fmt: str, *args: Any, stacklevel: int = 1) -> ProcessResult:
        return self.emit(LogLevel.NOTICE, fmt, *args, stacklevel=stacklevel + 1)

    def warning(self, fmt: str, *args: Any, stacklevel: int = 1) -> ProcessResult:
        return self.emit(LogLevel.WARNING, fmt, *args, stacklevel=stacklevel + 1)

    def error(self, fmt: str, *args: Any, stacklevel: int = 1) -> ProcessResult:
        return self.emit(LogLevel.ERROR, fmt, *args, stacklevel=stacklevel + 1)

    def log_os_error(self, message: str, error: BaseException, *, stacklevel: int = 1) -> ProcessResult:
        """Log ``"<message>: <reason>"`` at error level.

        The reason is the ``strerror`` of an :class:`OSError` when it carries
        one, else ``str(error)``.
        """

        reason = getattr(error, "strerror", None) or str(error) or type(error).__name__
        return self.emit(LogLevel.ERROR, "%s: %s", message, reason, stacklevel=stacklevel + 1)

    def not_implemented(self, *, stacklevel: int = 1) -> ProcessResult:
        """Log the standard "not implemented" notice at error level."""

        return self.emit(LogLevel.ERROR, NOT_IMPLEMENTED_MESSAGE, stacklevel=stacklevel + 1)

    # ------------------------------------------------------------------
    # mechanisms

    def set_mechanism(self, name: str | None) -> bool:
        """Switch the current mechanism; ``False`` when the switch failed."""

        return self._registry.select(name)

    def register_custom_mechanism(self, mechanism: MechanismDescriptor | MechanismPort) -> bool:
        """Install a caller-supplied mechanism into the custom slot.

        Accepts a :class:`MechanismDescriptor` or any object implementing
        :class:`MechanismPort`. Registering the same object again succeeds
        without side effects; failures are reported and yield ``False``.
        """

        with self._registry.lock:
            try:
                if isinstance(mechanism, MechanismDescriptor):
                    descriptor = mechanism
                elif isinstance(mechanism, MechanismPort):
                    if mechanism is self._custom_source and self._registry.custom is not None:
                        return True
                    descriptor = mechanism.as_descriptor()
                else:
                    raise MechanismRegistrationError(
                        f"Expected a MechanismDescriptor or mechanism adapter, got {type(mechanism).__name__}"
                    )
                self._registry.register_custom(descriptor)
            except LogSwitchError as exc:
                diagnostics.report(exc)
                return False
            self._custom_source = mechanism
        return True

    def unregister_custom_mechanism(self) -> bool:
        """Empty the custom slot; ``False`` when it was already empty."""

        with self._registry.lock:
            self._custom_source = None
            return self._registry.unregister_custom() is not None

    def mechanism_names(self) -> tuple[str, ...]:
        return self._registry.list_names()

    def print_mechanisms(self, stream: TextIO | None = None) -> None:
        self._registry.print_list(stream)

    def print_levels(self, stream: TextIO | None = None) -> None:
        """Print every loglevel name, noisiest first, on one line."""

        target = stream or self._stdout or sys.stdout
        target.write("".join(f"{name} " for name in level_names()) + "\n")
        target.flush()

    def shutdown(self) -> None:
        """Tear down the current mechanism and drop the override."""

        with self._lock:
            self._override = None
        self._registry.clear()


__all__ = ["LogFacility", "NOT_IMPLEMENTED_MESSAGE"]
