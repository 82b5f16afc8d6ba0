"""Runtime settings resolved from keyword arguments and the environment.

Purpose
-------
Collect every knob the facility understands into one frozen value so the
composition root never reads the environment directly.

Contents
--------
* :class:`RuntimeSettings` - the resolved configuration.
* :func:`build_runtime_settings` - apply ``LOG_SWITCH_*`` overrides and
  validate the result.
* Environment key constants.

System Role
-----------
Only the *static* options are resolved here. The level and mechanism keys are
read by the facility on every call so an out-of-process override keeps
precedence over in-process configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, MutableMapping

from lib_log_switch.application.use_cases.registry import LIST_COMMAND
from lib_log_switch.application.use_cases.render import MAX_MESSAGE_SIZE
from lib_log_switch.diagnostics import DiagnosticHook
from lib_log_switch.domain.levels import LogLevel, coerce_level
from lib_log_switch.domain.mechanism import MAX_MECHANISM_NAME

LEVEL_ENV_KEY = "LOG_SWITCH_LEVEL"
MECHANISM_ENV_KEY = "LOG_SWITCH_MECHANISM"
DEFAULT_MECHANISM_ENV_KEY = "LOG_SWITCH_DEFAULT_MECHANISM"
MAX_MESSAGE_SIZE_ENV_KEY = "LOG_SWITCH_MAX_MESSAGE_SIZE"
NO_COLOR_ENV_KEY = "LOG_SWITCH_NO_COLOR"
FORCE_COLOR_ENV_KEY = "LOG_SWITCH_FORCE_COLOR"
SYSLOG_IDENT_ENV_KEY = "LOG_SWITCH_SYSLOG_IDENT"

DEFAULT_LEVEL = LogLevel.INFO
DEFAULT_MECHANISM = "stderr"


@dataclass(frozen=True, slots=True)
class RuntimeSettings:
    """Resolved configuration handed to the composition root."""

    level: LogLevel = DEFAULT_LEVEL
    default_mechanism: str = DEFAULT_MECHANISM
    level_env_key: str = LEVEL_ENV_KEY
    mechanism_env_key: str = MECHANISM_ENV_KEY
    max_message_size: int = MAX_MESSAGE_SIZE
    persist_environment: bool = True
    syslog_ident: str | None = None
    force_color: bool = False
    no_color: bool = False
    console_styles: Mapping[str, str] | None = None
    diagnostic_hook: DiagnosticHook = None
    environ: MutableMapping[str, str] = field(default_factory=lambda: os.environ)


def build_runtime_settings(
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
) -> RuntimeSettings:
    """Resolve keyword arguments plus environment overrides into settings.

    Environment variables win over arguments, mirroring how operators expect
    deployment configuration to behave.

    Raises
    ------
    ValueError
        When a value (argument or environment) is out of range.

    Examples
    --------
    >>> settings = build_runtime_settings(environ={"LOG_SWITCH_DEFAULT_MECHANISM": "null"})
    >>> settings.default_mechanism, settings.level.canonical_name
    ('null', 'info')
    >>> build_runtime_settings(environ={"LOG_SWITCH_MAX_MESSAGE_SIZE": "x"})
    Traceback (most recent call last):
    ...
    ValueError: LOG_SWITCH_MAX_MESSAGE_SIZE must be an integer, got 'x'
    """

    store: MutableMapping[str, str] = os.environ if environ is None else environ

    resolved_level = coerce_level(level)
    mechanism = _validate_mechanism_name(store.get(DEFAULT_MECHANISM_ENV_KEY) or default_mechanism)
    size = _coerce_positive_size(store.get(MAX_MESSAGE_SIZE_ENV_KEY), max_message_size)
    ident = store.get(SYSLOG_IDENT_ENV_KEY) or syslog_ident
    resolved_force = _env_bool(store, FORCE_COLOR_ENV_KEY, force_color)
    resolved_no_color = _env_bool(store, NO_COLOR_ENV_KEY, no_color)

    for key in (level_env_key, mechanism_env_key):
        if not key or not key.strip():
            raise ValueError("Environment keys must be non-empty strings")
    if level_env_key == mechanism_env_key:
        raise ValueError("Level and mechanism environment keys must differ")

    return RuntimeSettings(
        level=resolved_level,
        default_mechanism=mechanism,
        level_env_key=level_env_key,
        mechanism_env_key=mechanism_env_key,
        max_message_size=size,
        persist_environment=persist_environment,
        syslog_ident=ident,
        force_color=resolved_force,
        no_color=resolved_no_color,
        console_styles=dict(console_styles) if console_styles else None,
        diagnostic_hook=diagnostic_hook,
        environ=store,
    )


def _validate_mechanism_name(name: str) -> str:
    candidate = name.strip()
    if not candidate:
        raise ValueError("Default mechanism must be a non-empty name")
    if candidate == LIST_COMMAND:
        raise ValueError(f'"{LIST_COMMAND}" is a command, not a default mechanism')
    if len(candidate) > MAX_MECHANISM_NAME:
        raise ValueError(f"Default mechanism name exceeds {MAX_MECHANISM_NAME} characters")
    return candidate


def _coerce_positive_size(value: str | None, fallback: int) -> int:
    """Parse the message buffer size, which must leave room for one byte.

    Examples
    --------
    >>> _coerce_positive_size(None, 4096)
    4096
    >>> _coerce_positive_size("512", 4096)
    512
    """

    if value is None or not value.strip():
        size = fallback
    else:
        try:
            size = int(value.strip())
        except ValueError as exc:
            raise ValueError(f"{MAX_MESSAGE_SIZE_ENV_KEY} must be an integer, got {value!r}") from exc
    if size <= 1:
        raise ValueError(f"max message size must be greater than 1 byte, got {size}")
    return size


def _env_bool(store: Mapping[str, str], name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> _env_bool({}, "LOG_SWITCH_NO_COLOR", default=True)
    True
    >>> _env_bool({"LOG_SWITCH_NO_COLOR": "0"}, "LOG_SWITCH_NO_COLOR", default=True)
    False
    >>> _env_bool({"LOG_SWITCH_NO_COLOR": "yes"}, "LOG_SWITCH_NO_COLOR", default=False)
    True
    """

    value = store.get(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


__all__ = [
    "DEFAULT_LEVEL",
    "DEFAULT_MECHANISM",
    "DEFAULT_MECHANISM_ENV_KEY",
    "FORCE_COLOR_ENV_KEY",
    "LEVEL_ENV_KEY",
    "MAX_MESSAGE_SIZE_ENV_KEY",
    "MECHANISM_ENV_KEY",
    "NO_COLOR_ENV_KEY",
    "RuntimeSettings",
    "SYSLOG_IDENT_ENV_KEY",
    "build_runtime_settings",
]
