"""Application use cases: message processing, rendering and the registry."""

from __future__ import annotations

from .process_message import ProcessMessage, ProcessResult, create_process_message
from .registry import LIST_COMMAND, MechanismRegistry
from .render import MAX_MESSAGE_SIZE, render_detailed, render_message, render_plain

__all__ = [
    "LIST_COMMAND",
    "MAX_MESSAGE_SIZE",
    "MechanismRegistry",
    "ProcessMessage",
    "ProcessResult",
    "create_process_message",
    "render_detailed",
    "render_message",
    "render_plain",
]
