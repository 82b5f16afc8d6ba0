from __future__ import annotations

import os

import pytest

import lib_log_switch as log
from lib_log_switch import diagnostics
from lib_log_switch.domain.levels import LogLevel
from lib_log_switch.domain.mechanism import MechanismDescriptor


def _memory() -> tuple[MechanismDescriptor, list[str]]:
    lines: list[str] = []
    return MechanismDescriptor("memory", log=lambda level, text: lines.append(text)), lines


def test_facility_is_created_lazily() -> None:
    assert log.is_initialised() is False

    facility = log.current_facility()

    assert log.is_initialised() is True
    assert log.current_facility() is facility


def test_init_twice_requires_shutdown() -> None:
    log.init(environ={})

    with pytest.raises(RuntimeError, match="cannot be called twice"):
        log.init(environ={})

    log.shutdown()
    log.init(environ={})


def test_init_applies_level_and_default_mechanism() -> None:
    store: dict[str, str] = {}
    log.init(level="warning", default_mechanism="null", environ=store)

    assert log.get_level() is LogLevel.WARNING
    assert log.error("discarded")["ok"] is True
    assert store["LOG_SWITCH_MECHANISM"] == "null"


def test_process_environment_controls_level_and_mechanism(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_SWITCH_LEVEL", "error")
    monkeypatch.setenv("LOG_SWITCH_MECHANISM", "null")

    assert log.get_level() is LogLevel.ERROR
    assert log.warning("below threshold") == {"ok": False, "reason": "suppressed"}
    assert log.error("kept")["ok"] is True
    assert log.current_facility().current_mechanism == "null"


def test_setters_write_process_environment() -> None:
    log.set_level(LogLevel.NOTICE)
    log.set_mechanism("null")

    assert os.environ["LOG_SWITCH_LEVEL"] == "notice"
    assert os.environ["LOG_SWITCH_MECHANISM"] == "null"


def test_module_helpers_attribute_the_caller() -> None:
    calls: list[tuple] = []
    log.init(level="debug", environ={})
    log.register_override(lambda *args: calls.append(args))

    log.info("from helper")
    log.emit(LogLevel.NOTICE, "from emit")

    assert [(call[3], call[5]) for call in calls] == [
        ("test_module_helpers_attribute_the_caller", "from helper"),
        ("test_module_helpers_attribute_the_caller", "from emit"),
    ]
    assert {call[2] for call in calls} == {"test_runtime_api.py"}


def test_every_level_helper_routes_its_level() -> None:
    seen: list[LogLevel] = []
    log.init(level="verynoisy", environ={})
    log.register_override(lambda ctx, level, *rest: seen.append(level))

    log.very_noisy("a")
    log.noisy("b")
    log.debug("c")
    log.verbose("d")
    log.info("e")
    log.notice("f")
    log.warning("g")
    log.error("h")
    log.not_implemented()
    log.log_os_error("read", OSError(5, "Input/output error"))

    assert seen == [
        LogLevel.VERY_NOISY,
        LogLevel.NOISY,
        LogLevel.DEBUG,
        LogLevel.VERBOSE,
        LogLevel.INFO,
        LogLevel.NOTICE,
        LogLevel.WARNING,
        LogLevel.ERROR,
        LogLevel.ERROR,
        LogLevel.ERROR,
    ]


def test_custom_mechanism_through_module_api() -> None:
    log.init(environ={})
    descriptor, lines = _memory()

    assert log.register_custom_mechanism(descriptor) is True
    assert "memory" in log.mechanism_names()
    assert log.set_mechanism("memory") is True
    log.warning("stored")

    assert lines == ["warning: stored"]
    assert log.unregister_custom_mechanism() is True
    assert log.current_facility().current_mechanism is None


def test_shutdown_removes_installed_hook() -> None:
    events: list[str] = []

    def hook(event: str, payload: dict) -> None:
        events.append(event)

    log.init(environ={}, diagnostic_hook=hook)
    assert diagnostics.current_hook() is hook

    log.set_mechanism("unknown-thing")
    log.shutdown()

    assert events == ["unknown_mechanism"]
    assert diagnostics.current_hook() is None
    assert log.is_initialised() is False


def test_listings_print_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    log.init(environ={})

    log.print_levels()
    log.print_mechanisms()

    out = capsys.readouterr().out
    assert out == "verynoisy noisy debug verbose info notice warning error quiet \nnull stderr syslog \n"


def test_default_facility_writes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    log.init(environ={}, no_color=True)

    log.info("plain")
    log.error("bad %s", "thing")

    assert capsys.readouterr().err == "plain\nerror: bad thing\n"


def test_public_is_noisier_than_reports_out_of_range(capsys: pytest.CaptureFixture[str]) -> None:
    events: list[str] = []
    diagnostics.set_hook(lambda event, payload: events.append(event))

    assert log.is_noisier_than(LogLevel.DEBUG, LogLevel.INFO) is True
    assert log.is_noisier_than(0, LogLevel.INFO) is False

    assert "Invalid loglevel: 0" in capsys.readouterr().err
    assert events == ["invalid_level"]


def test_logging_resumes_on_default_after_custom_is_unregistered(capsys: pytest.CaptureFixture[str]) -> None:
    store: dict[str, str] = {}
    log.init(environ=store, no_color=True)
    descriptor, lines = _memory()
    log.register_custom_mechanism(descriptor)
    log.set_mechanism("memory")

    log.unregister_custom_mechanism()
    log.info("after %d", 1)

    assert lines == []
    assert store["LOG_SWITCH_MECHANISM"] == "stderr"
    assert capsys.readouterr().err == "after 1\n"
