from __future__ import annotations

import os

import pytest

from lib_log_switch.domain.levels import LogLevel
from lib_log_switch.runtime import RuntimeSettings, build_runtime_settings


def test_defaults() -> None:
    settings = build_runtime_settings(environ={})

    assert settings.level is LogLevel.INFO
    assert settings.default_mechanism == "stderr"
    assert settings.max_message_size == 4096
    assert settings.level_env_key == "LOG_SWITCH_LEVEL"
    assert settings.mechanism_env_key == "LOG_SWITCH_MECHANISM"
    assert settings.persist_environment is True


def test_process_environment_is_the_default_store() -> None:
    assert build_runtime_settings().environ is os.environ
    assert RuntimeSettings().environ is os.environ


def test_environment_overrides_arguments() -> None:
    store = {
        "LOG_SWITCH_DEFAULT_MECHANISM": "syslog",
        "LOG_SWITCH_MAX_MESSAGE_SIZE": "256",
        "LOG_SWITCH_NO_COLOR": "true",
        "LOG_SWITCH_FORCE_COLOR": "off",
        "LOG_SWITCH_SYSLOG_IDENT": "daemon",
    }

    settings = build_runtime_settings(
        default_mechanism="null",
        max_message_size=1024,
        force_color=True,
        syslog_ident="ignored",
        environ=store,
    )

    assert settings.default_mechanism == "syslog"
    assert settings.max_message_size == 256
    assert settings.no_color is True
    assert settings.force_color is False
    assert settings.syslog_ident == "daemon"


@pytest.mark.parametrize(
    "env_value, error_match",
    [
        ("big", "must be an integer"),
        ("1", "greater than 1 byte"),
        ("-20", "greater than 1 byte"),
    ],
)
def test_invalid_message_size_values(env_value: str, error_match: str) -> None:
    with pytest.raises(ValueError, match=error_match):
        build_runtime_settings(environ={"LOG_SWITCH_MAX_MESSAGE_SIZE": env_value})


@pytest.mark.parametrize(
    "name, error_match",
    [
        ("list", "is a command"),
        ("   ", "non-empty"),
        ("m" * 64, "exceeds 63"),
    ],
)
def test_invalid_default_mechanism_values(name: str, error_match: str) -> None:
    with pytest.raises(ValueError, match=error_match):
        build_runtime_settings(default_mechanism=name, environ={})


def test_invalid_startup_level_is_rejected() -> None:
    with pytest.raises(ValueError):
        build_runtime_settings(level="shouty", environ={})


def test_environment_keys_must_differ() -> None:
    with pytest.raises(ValueError, match="must differ"):
        build_runtime_settings(level_env_key="X", mechanism_env_key="X", environ={})
