"""Domain values used by the logging facility."""

from __future__ import annotations

from .errors import (
    FormatError,
    InvalidLevelError,
    LogSwitchError,
    MechanismInitError,
    MechanismRegistrationError,
    NullInputError,
    UnknownLevelNameError,
    UnknownMechanismError,
)
from .events import SourceLocation
from .levels import (
    LEVEL_CEILING,
    LEVEL_FLOOR,
    LogLevel,
    coerce_level,
    is_noisier_than,
    level_names,
    level_to_name,
    name_to_level,
)
from .mechanism import MAX_MECHANISM_NAME, MechanismDescriptor

__all__ = [
    "FormatError",
    "InvalidLevelError",
    "LEVEL_CEILING",
    "LEVEL_FLOOR",
    "LogLevel",
    "LogSwitchError",
    "MAX_MECHANISM_NAME",
    "MechanismDescriptor",
    "MechanismInitError",
    "MechanismRegistrationError",
    "NullInputError",
    "SourceLocation",
    "UnknownLevelNameError",
    "UnknownMechanismError",
    "coerce_level",
    "is_noisier_than",
    "level_names",
    "level_to_name",
    "name_to_level",
]
