"""Concrete output mechanisms.

Each adapter exposes ``name`` and ``as_descriptor()`` so the runtime can hand
it to the :class:`~lib_log_switch.application.use_cases.registry.MechanismRegistry`.
"""

from __future__ import annotations

from .console.rich_stderr import StderrMechanism
from .null import NullMechanism
from .structured.syslog import SyslogMechanism

__all__ = ["NullMechanism", "StderrMechanism", "SyslogMechanism"]
