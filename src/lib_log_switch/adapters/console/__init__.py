"""Terminal-facing mechanisms."""

from __future__ import annotations

from .rich_stderr import StderrMechanism

__all__ = ["StderrMechanism"]
