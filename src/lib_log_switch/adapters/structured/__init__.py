"""Mechanisms forwarding to system logging services."""

from __future__ import annotations

from .syslog import SyslogMechanism

__all__ = ["SyslogMechanism"]
