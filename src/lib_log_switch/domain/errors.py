"""Error taxonomy shared by every layer.

Each error maps to one failure class of the facility. None of them is meant to
reach the host application from the logging path: the façade reports them on
the diagnostics side channel and degrades to dropping the message.
"""

from __future__ import annotations


class LogSwitchError(Exception):
    """Base class for all facility errors."""

    #: Short event name forwarded to diagnostic hooks.
    event = "error"


class InvalidLevelError(LogSwitchError, ValueError):
    """A loglevel value lies outside the operational range."""

    event = "invalid_level"


class UnknownLevelNameError(LogSwitchError, ValueError):
    """A loglevel name does not resolve."""

    event = "unknown_level_name"


class UnknownMechanismError(LogSwitchError, LookupError):
    """A mechanism name does not resolve."""

    event = "unknown_mechanism"


class MechanismInitError(LogSwitchError, RuntimeError):
    """A mechanism reported failure from its ``init`` operation."""

    event = "init_failed"


class MechanismRegistrationError(LogSwitchError, ValueError):
    """A custom mechanism could not be installed."""

    event = "registration_failed"


class FormatError(LogSwitchError, ValueError):
    """Rendering a message failed or overflowed the message buffer."""

    event = "format_failed"


class NullInputError(LogSwitchError, ValueError):
    """A required string argument was absent."""

    event = "null_input"


__all__ = [
    "FormatError",
    "InvalidLevelError",
    "LogSwitchError",
    "MechanismInitError",
    "MechanismRegistrationError",
    "NullInputError",
    "UnknownLevelNameError",
    "UnknownMechanismError",
]
