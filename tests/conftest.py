from __future__ import annotations

import os
from io import StringIO
from typing import Callable, Iterator

import pytest
from rich.console import Console

from lib_log_switch import diagnostics, runtime
from lib_log_switch.runtime import LogFacility, build_facility, build_runtime_settings

_ENV_KEYS = (
    "LOG_SWITCH_LEVEL",
    "LOG_SWITCH_MECHANISM",
    "LOG_SWITCH_DEFAULT_MECHANISM",
    "LOG_SWITCH_MAX_MESSAGE_SIZE",
    "LOG_SWITCH_NO_COLOR",
    "LOG_SWITCH_FORCE_COLOR",
    "LOG_SWITCH_SYSLOG_IDENT",
    "LOG_SWITCH_USE_DOTENV",
)


@pytest.fixture(autouse=True)
def _isolated_environment() -> Iterator[None]:
    """Strip facility variables from the process environment and reset singletons."""

    saved = {key: os.environ.pop(key) for key in _ENV_KEYS if key in os.environ}
    runtime.shutdown()
    diagnostics.set_hook(None)
    try:
        yield
    finally:
        runtime.shutdown()
        diagnostics.set_hook(None)
        for key in _ENV_KEYS:
            os.environ.pop(key, None)
        os.environ.update(saved)


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, color_system=None, width=200)


class SyslogRecorder:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def openlog(self, ident: str, logoption: int, facility: int) -> None:
        self.calls.append(("openlog", ident, logoption, facility))

    def syslog(self, priority: int, message: str) -> None:
        self.calls.append(("syslog", priority, message))

    def closelog(self) -> None:
        self.calls.append(("closelog",))


@pytest.fixture
def syslog_recorder() -> SyslogRecorder:
    return SyslogRecorder()


@pytest.fixture
def store() -> dict[str, str]:
    return {}


@pytest.fixture
def make_facility(
    store: dict[str, str],
    record_console: Console,
    syslog_recorder: SyslogRecorder,
) -> Callable[..., LogFacility]:
    """Build facilities bound to an in-memory environment store."""

    def _make(**overrides: object) -> LogFacility:
        stdout = overrides.pop("stdout", None)
        settings = build_runtime_settings(environ=store, **overrides)
        return build_facility(settings, stdout=stdout, console=record_console, syslog_backend=syslog_recorder)

    return _make
