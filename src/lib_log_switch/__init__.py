"""Process-wide logging facility with switchable output mechanisms.

Callers emit leveled, ``%``-formatted messages; the facility filters them by
the current loglevel and routes survivors either to a registered override
function or to the active mechanism (``null``, ``stderr``, ``syslog`` or a
custom one). The level and mechanism can be changed at runtime, from code or
through the ``LOG_SWITCH_LEVEL`` and ``LOG_SWITCH_MECHANISM`` environment
variables.
"""

from __future__ import annotations

from .application.ports import MechanismPort, OverrideFunction
from .domain import (
    FormatError,
    InvalidLevelError,
    LogLevel,
    LogSwitchError,
    MechanismDescriptor,
    MechanismInitError,
    MechanismRegistrationError,
    NullInputError,
    SourceLocation,
    UnknownLevelNameError,
    UnknownMechanismError,
    level_names,
    level_to_name,
    name_to_level,
)
from .runtime import (
    LogFacility,
    RuntimeSettings,
    current_facility,
    debug,
    emit,
    error,
    get_level,
    info,
    init,
    is_initialised,
    is_noisier_than,
    log,
    log_os_error,
    mechanism_names,
    noisy,
    not_implemented,
    notice,
    print_levels,
    print_mechanisms,
    register_custom_mechanism,
    register_override,
    set_level,
    set_mechanism,
    shutdown,
    unregister_custom_mechanism,
    verbose,
    very_noisy,
    warning,
)

__all__ = [
    "FormatError",
    "InvalidLevelError",
    "LogFacility",
    "LogLevel",
    "LogSwitchError",
    "MechanismDescriptor",
    "MechanismInitError",
    "MechanismPort",
    "MechanismRegistrationError",
    "NullInputError",
    "OverrideFunction",
    "RuntimeSettings",
    "SourceLocation",
    "UnknownLevelNameError",
    "UnknownMechanismError",
    "current_facility",
    "debug",
    "emit",
    "error",
    "get_level",
    "info",
    "init",
    "is_initialised",
    "is_noisier_than",
    "level_names",
    "level_to_name",
    "log",
    "log_os_error",
    "mechanism_names",
    "name_to_level",
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
