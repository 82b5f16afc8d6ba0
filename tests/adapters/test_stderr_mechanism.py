from __future__ import annotations

from io import StringIO

import pytest
from rich.console import Console

from lib_log_switch.adapters.console.rich_stderr import StderrMechanism
from lib_log_switch.domain.levels import LogLevel


def test_stderr_mechanism_prints_text_verbatim(record_console: Console) -> None:
    descriptor = StderrMechanism(console=record_console).as_descriptor()
    descriptor.start()

    descriptor.log(LogLevel.WARNING, "warning: [bold]not markup[/bold] :smile:")

    assert record_console.export_text() == "warning: [bold]not markup[/bold] :smile:\n"


def test_stderr_mechanism_does_not_wrap_long_lines(record_console: Console) -> None:
    descriptor = StderrMechanism(console=record_console).as_descriptor()
    descriptor.start()

    descriptor.log(LogLevel.INFO, "x" * 500)

    assert record_console.export_text() == "x" * 500 + "\n"


def test_stderr_mechanism_is_silent_before_init(record_console: Console) -> None:
    mechanism = StderrMechanism(console=record_console)

    mechanism.log(LogLevel.ERROR, "too early")

    assert record_console.export_text() == ""


def test_stderr_mechanism_releases_console_on_deinit(record_console: Console) -> None:
    mechanism = StderrMechanism(console=record_console)
    descriptor = mechanism.as_descriptor()
    descriptor.start()
    assert mechanism.console is record_console

    descriptor.stop()

    assert mechanism.console is None


def test_stderr_mechanism_writes_to_process_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    descriptor = StderrMechanism(no_color=True).as_descriptor()
    descriptor.start()

    descriptor.log(LogLevel.ERROR, "error: disk on fire")

    captured = capsys.readouterr()
    assert captured.err == "error: disk on fire\n"
    assert captured.out == ""


def test_stderr_mechanism_accepts_style_overrides_by_name() -> None:
    console = Console(file=StringIO(), record=True, force_terminal=True, color_system="standard", width=200)
    mechanism = StderrMechanism(console=console, styles={"WARNING": "magenta", "very_noisy": "blue"})
    descriptor = mechanism.as_descriptor()
    descriptor.start()

    descriptor.log(LogLevel.WARNING, "warning: styled")

    assert mechanism._style_map[LogLevel.WARNING] == "magenta"
    assert mechanism._style_map[LogLevel.VERY_NOISY] == "blue"
    assert mechanism._style_map[LogLevel.ERROR] == "red"
    rendered = console.export_text(styles=True)
    assert "\x1b[35m" in rendered
    assert "\x1b[33m" not in rendered
    assert "warning: styled" in rendered


def test_stderr_mechanism_no_color_drops_styles() -> None:
    console = Console(file=StringIO(), record=True, force_terminal=True, color_system="standard", width=200)
    descriptor = StderrMechanism(console=console, no_color=True, styles={"warning": "magenta"}).as_descriptor()
    descriptor.start()

    descriptor.log(LogLevel.WARNING, "warning: plain")

    assert console.export_text(styles=True) == "warning: plain\n"
