from __future__ import annotations

import pytest

from lib_log_switch.application.use_cases.render import (
    MAX_MESSAGE_SIZE,
    render_detailed,
    render_message,
    render_plain,
)
from lib_log_switch.domain.errors import FormatError, NullInputError
from lib_log_switch.domain.events import SourceLocation
from lib_log_switch.domain.levels import LogLevel


def test_render_message_interpolates_positional_args() -> None:
    assert render_message("%d files in %s", (3, "/tmp")) == ("3 files in /tmp", False)


def test_render_message_accepts_a_mapping() -> None:
    assert render_message("%(user)s logged in", ({"user": "ada"},)) == ("ada logged in", False)


def test_render_message_keeps_percent_signs_without_args() -> None:
    assert render_message("100% done", ()) == ("100% done", False)


def test_render_message_rejects_missing_format() -> None:
    with pytest.raises(NullInputError):
        render_message(None, ())  # type: ignore[arg-type]


@pytest.mark.parametrize("fmt, args", [("%d", ("x",)), ("%s %s", ("one",)), ("%(k)s", ({"j": 1},))])
def test_render_message_reports_format_failures(fmt: str, args: tuple) -> None:
    with pytest.raises(FormatError, match="Failed to format log message"):
        render_message(fmt, args)


def test_render_message_truncates_to_buffer_size() -> None:
    text, truncated = render_message("a" * (MAX_MESSAGE_SIZE * 2), ())

    assert truncated is True
    assert len(text.encode("utf-8")) == MAX_MESSAGE_SIZE - 1


def test_render_message_truncates_on_character_boundary() -> None:
    text, truncated = render_message("ééé", (), max_size=5)

    assert truncated is True
    assert text == "éé"


@pytest.mark.parametrize("level", [LogLevel.VERY_NOISY, LogLevel.DEBUG, LogLevel.INFO, LogLevel.NOTICE])
def test_plain_form_is_bare_below_warning(level: LogLevel) -> None:
    assert render_plain(level, "message") == "message"


@pytest.mark.parametrize(
    "level, expected",
    [
        (LogLevel.WARNING, "warning: message"),
        (LogLevel.ERROR, "error: message"),
        (LogLevel.QUIET, "quiet: message"),
    ],
)
def test_plain_form_prefixes_warning_and_quieter(level: LogLevel, expected: str) -> None:
    assert render_plain(level, "message") == expected


def test_detailed_form_carries_location_verbatim() -> None:
    location = SourceLocation("src/weird name.c", "do_thing", 4711)

    assert render_detailed(LogLevel.INFO, location, "hi") == "src/weird name.c:4711 do_thing() info: hi"
