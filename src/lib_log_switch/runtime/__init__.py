"""Runtime façade holding the process-wide logging facility.

Purpose
-------
Expose a stable entry point (``init``, ``shutdown``, ``set_level``, ``emit``,
``set_mechanism`` ...) that host applications use instead of building a
:class:`LogFacility` themselves.

Contents
--------
* ``init`` / ``shutdown`` / ``is_initialised`` / ``current_facility`` -
  lifecycle of the singleton.
* Free functions delegating to the singleton: level accessors, override
  registration, mechanism selection, listings and the logging calls.

System Role
-----------
The singleton is created lazily with default settings on first use, so a
library can log before (or without) its host calling :func:`init`. Calling
:func:`init` after the singleton exists raises; call :func:`shutdown` first.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, MutableMapping, TextIO

from lib_log_switch import diagnostics
from lib_log_switch.application.ports import MechanismPort
from lib_log_switch.application.use_cases.process_message import ProcessResult
from lib_log_switch.application.use_cases.render import MAX_MESSAGE_SIZE
from lib_log_switch.diagnostics import DiagnosticHook
from lib_log_switch.domain.events import SourceLocation
from lib_log_switch.domain import levels as _levels
from lib_log_switch.domain.levels import LogLevel
from lib_log_switch.domain.mechanism import MechanismDescriptor

from ._composition import BUILTIN_MECHANISMS, build_facility
from ._facility import NOT_IMPLEMENTED_MESSAGE, LogFacility
from ._settings import (
    DEFAULT_LEVEL,
    DEFAULT_MECHANISM,
    LEVEL_ENV_KEY,
    MECHANISM_ENV_KEY,
    RuntimeSettings,
    build_runtime_settings,
)
from ._state import clear_runtime, is_initialised, peek_runtime, set_runtime
from . import _state as _state_module


def init(
    *,
    level: LogLevel | int | str = DEFAULT_LEVEL,
    default_mechanism: str = DEFAULT_MECHANISM,
    level_env_key: str = LEVEL_ENV_KEY,
    mechanism_env_key: str = MECHANISM_ENV_KEY,
    max_message_size: int = MAX_MESSAGE_SIZE,
    persist_environment: bool = True,
    syslog_ident: str | None = None,
    force_color: bool = False,
    no_color: bool = False,
    console_styles: Mapping[str, str] | None = None,
    diagnostic_hook: DiagnosticHook = None,
    environ: MutableMapping[str, str] | None = None,
) -> LogFacility:
    """Compose the facility and install it as the process singleton.

    Why
    ---
    Hosts call ``init`` once during startup to choose the startup level,
    default mechanism and side-channel hook. Libraries that only log never
    need to call it.

    Inputs
    ------
    level:
        Startup threshold, used until the level key in the environment says
        otherwise.
    default_mechanism:
        Mechanism used when the environment selects none.
    level_env_key, mechanism_env_key:
        Keys consulted (and written) in ``environ``.
    persist_environment:
        Mirror level and mechanism changes into ``environ``.
    syslog_ident, force_color, no_color, console_styles:
        Adapter options for the ``syslog`` and ``stderr`` mechanisms.
    diagnostic_hook:
        Receives ``(event, payload)`` for every side-channel report.
    environ:
        Environment-style store; defaults to :data:`os.environ`.

    Outputs
    -------
    The installed :class:`LogFacility`.

    Side Effects
    ------------
    Raises :class:`RuntimeError` if a facility is already installed. Installs
    ``diagnostic_hook`` process-wide.
    """

    with _state_module._STATE_LOCK:
        if is_initialised():
            raise RuntimeError(
                "lib_log_switch.init() cannot be called twice without shutdown(); call lib_log_switch.shutdown() first",
            )
        settings = build_runtime_settings(
            level=level,
            default_mechanism=default_mechanism,
            level_env_key=level_env_key,
            mechanism_env_key=mechanism_env_key,
            max_message_size=max_message_size,
            persist_environment=persist_environment,
            syslog_ident=syslog_ident,
            force_color=force_color,
            no_color=no_color,
            console_styles=console_styles,
            diagnostic_hook=diagnostic_hook,
            environ=environ,
        )
        facility = build_facility(settings)
        if settings.diagnostic_hook is not None:
            diagnostics.set_hook(settings.diagnostic_hook)
        set_runtime(facility)
        return facility


def shutdown() -> None:
    """Tear down the current mechanism and forget the singleton."""

    facility = clear_runtime()
    if facility is None:
        return
    facility.shutdown()
    if facility.settings.diagnostic_hook is not None and diagnostics.current_hook() is facility.settings.diagnostic_hook:
        diagnostics.set_hook(None)


def current_facility() -> LogFacility:
    """Return the singleton, creating it with default settings when absent."""

    facility = peek_runtime()
    if facility is not None:
        return facility
    with _state_module._STATE_LOCK:
        facility = peek_runtime()
        if facility is None:
            facility = build_facility(build_runtime_settings())
            set_runtime(facility)
        return facility


def set_level(level: LogLevel | int | str) -> bool:
    return current_facility().set_level(level)


def get_level() -> LogLevel:
    return current_facility().get_level()


def register_override(func: Callable[..., None] | None, context: Any = None) -> None:
    current_facility().register_override(func, context)


def set_mechanism(name: str | None) -> bool:
    return current_facility().set_mechanism(name)


def register_custom_mechanism(mechanism: MechanismDescriptor | MechanismPort) -> bool:
    return current_facility().register_custom_mechanism(mechanism)


def unregister_custom_mechanism() -> bool:
    return current_facility().unregister_custom_mechanism()


def is_noisier_than(a: int, b: int) -> bool:
    """Compare two levels; out-of-range arguments are reported and yield ``False``."""

    return _levels.is_noisier_than(a, b, on_invalid=diagnostics.report)


def mechanism_names() -> tuple[str, ...]:
    return current_facility().mechanism_names()


def print_mechanisms(stream: TextIO | None = None) -> None:
    current_facility().print_mechanisms(stream)


def print_levels(stream: TextIO | None = None) -> None:
    current_facility().print_levels(stream)


def log(level: LogLevel | int, location: SourceLocation | None, fmt: str, *args: Any) -> ProcessResult:
    """Log with an explicit source location (see :meth:`LogFacility.log`)."""

    return current_facility().log(level, location, fmt, *args)


def emit(level: LogLevel | int, fmt: str, *args: Any, stacklevel: int = 1) -> ProcessResult:
    """Log ``fmt % args`` at ``level`` attributed to the caller."""

    return current_facility().emit(level, fmt, *args, stacklevel=stacklevel + 1)


def very_noisy(fmt: str, *args: Any) -> ProcessResult:
    return current_facility().very_noisy(fmt, *args, stacklevel=2)


def noisy(fmt: str, *args: Any) -> ProcessResult:
    return current_facility().noisy(fmt, *args, stacklevel=2)


def debug(fmt: str, *args: Any) -> ProcessResult:
    return current_facility().debug(fmt, *args, stacklevel=2)


def verbose(fmt: str, *args: Any) -> ProcessResult:
    return current_facility().verbose(fmt, *args, stacklevel=2)


def info(fmt: str, *args: Any) -> ProcessResult:
    return current_facility().info(fmt, *args, stacklevel=2)


def notice(fmt: str, *args: Any) -> ProcessResult:
    return current_facility().notice(fmt, *args, stacklevel=2)


def warning(fmt: str, *args: Any) -> ProcessResult:
    return current_facility().warning(fmt, *args, stacklevel=2)


def error(fmt: str, *args: Any) -> ProcessResult:
    return current_facility().error(fmt, *args, stacklevel=2)


def log_os_error(message: str, error: BaseException) -> ProcessResult:
    return current_facility().log_os_error(message, error, stacklevel=2)


def not_implemented() -> ProcessResult:
    return current_facility().not_implemented(stacklevel=2)


__all__ = [
    "BUILTIN_MECHANISMS",
    "LogFacility",
    "NOT_IMPLEMENTED_MESSAGE",
    "RuntimeSettings",
    "build_facility",
    "build_runtime_settings",
    "current_facility",
    "debug",
    "emit",
    "error",
    "get_level",
    "info",
    "init",
    "is_initialised",
    "is_noisier_than",
    "log",
    "log_os_error",
    "mechanism_names",
    "noisy",
    "not_implemented",
    "notice",
    "print_levels",
    "print_mechanisms",
    "register_custom_mechanism",
    "register_override",
    "set_level",
    "set_mechanism",
    "shutdown",
    "unregister_custom_mechanism",
    "verbose",
    "very_noisy",
    "warning",
]
