from __future__ import annotations

from lib_log_switch.domain.events import SourceLocation


def _helper() -> SourceLocation:
    return SourceLocation.from_caller()


def _outer() -> SourceLocation:
    return SourceLocation.from_caller(stacklevel=2)


def test_from_caller_captures_file_function_and_line() -> None:
    location = _helper()

    assert location.file == "test_events.py"
    assert location.func == "_helper"
    assert location.line > 0


def test_from_caller_walks_additional_frames() -> None:
    location = _outer()

    assert location.func == "test_from_caller_walks_additional_frames"


def test_from_caller_beyond_the_stack_yields_placeholder() -> None:
    assert SourceLocation.from_caller(stacklevel=10_000) == SourceLocation.unknown()
