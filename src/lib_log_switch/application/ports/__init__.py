"""Ports implemented by adapters and host callbacks."""

from __future__ import annotations

from .mechanism import MechanismPort, OverrideFunction

__all__ = ["MechanismPort", "OverrideFunction"]
