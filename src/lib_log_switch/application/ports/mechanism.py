"""Ports describing output mechanisms and override functions.

Purpose
-------
Define the narrow contracts external code implements to plug into the
facility: an adapter that can describe itself as a
:class:`~lib_log_switch.domain.mechanism.MechanismDescriptor`, and the override
function that replaces mechanism dispatch entirely.

Contents
--------
* :class:`MechanismPort` - adapters exposing ``name`` and ``as_descriptor``.
* :class:`OverrideFunction` - ``(context, level, file, func, line, message)``.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from lib_log_switch.domain.levels import LogLevel
from lib_log_switch.domain.mechanism import MechanismDescriptor


@runtime_checkable
class MechanismPort(Protocol):
    """Output backend able to describe itself to the registry."""

    name: str

    def as_descriptor(self) -> MechanismDescriptor:
        """Return the descriptor registered under :attr:`name`."""


@runtime_checkable
class OverrideFunction(Protocol):
    """Receive every surviving message instead of the active mechanism."""

    def __call__(self, context: Any, level: LogLevel, file: str, func: str, line: int, message: str) -> None: ...


__all__ = ["MechanismPort", "OverrideFunction"]
