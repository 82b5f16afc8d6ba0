"""Mechanism that discards every message."""

from __future__ import annotations

from lib_log_switch.domain.levels import LogLevel
from lib_log_switch.domain.mechanism import MechanismDescriptor


class NullMechanism:
    """Accept messages and drop them."""

    name = "null"

    def log(self, level: LogLevel, text: str) -> None:
        return None

    def as_descriptor(self) -> MechanismDescriptor:
        return MechanismDescriptor(self.name, log=self.log)


__all__ = ["NullMechanism"]
