"""Message rendering for the two verbosity tiers.

Purpose
-------
Turn a format string plus arguments into a bounded message, then decorate it
either with the level name (plain tier) or with source location and level
(detailed tier).

Contents
--------
* :data:`MAX_MESSAGE_SIZE` - default message buffer size in bytes.
* :func:`render_message` - interpolate and truncate.
* :func:`render_plain` / :func:`render_detailed` - tier-specific decoration.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from lib_log_switch.domain.errors import FormatError, NullInputError
from lib_log_switch.domain.events import SourceLocation
from lib_log_switch.domain.levels import LogLevel

MAX_MESSAGE_SIZE = 4096
#: Buffer size in bytes; one byte is reserved for the terminator.


def render_message(fmt: str, args: Sequence[Any], max_size: int = MAX_MESSAGE_SIZE) -> tuple[str, bool]:
    """Interpolate ``args`` into ``fmt`` and bound the UTF-8 size.

    ``%``-style interpolation runs only when ``args`` is non-empty, so literal
    percent signs in argument-free messages survive. A single non-empty
    mapping argument is used for named placeholders, as in :mod:`logging`.

    Returns
    -------
    tuple[str, bool]
        Rendered text and whether it had to be truncated.

    Raises
    ------
    NullInputError
        When ``fmt`` is ``None``.
    FormatError
        When interpolation fails.

    Examples
    --------
    >>> render_message("Reading config file %r...", ("a.conf",))
    ("Reading config file 'a.conf'...", False)
    >>> render_message("abcdef", (), max_size=4)
    ('abc', True)
    """

    if fmt is None:
        raise NullInputError("No log message provided")
    text = str(fmt)
    if args:
        try:
            values = args[0] if len(args) == 1 and isinstance(args[0], Mapping) and args[0] else tuple(args)
            text = text % values
        except (TypeError, ValueError, KeyError) as exc:
            raise FormatError(f"Failed to format log message {fmt!r}: {exc}") from exc

    limit = max(max_size - 1, 0)
    encoded = text.encode("utf-8", errors="replace")
    if len(encoded) <= limit:
        return text, False
    return encoded[:limit].decode("utf-8", errors="ignore"), True


def render_plain(level: LogLevel, text: str) -> str:
    """Return ``text`` as-is below warning, ``"<level>: <text>"`` otherwise.

    Examples
    --------
    >>> render_plain(LogLevel.INFO, "ready")
    'ready'
    >>> render_plain(LogLevel.WARNING, "disk almost full")
    'warning: disk almost full'
    """

    if level < LogLevel.WARNING:
        return text
    return f"{level.canonical_name}: {text}"


def render_detailed(level: LogLevel, location: SourceLocation, text: str) -> str:
    """Return ``"<file>:<line> <func>() <level>: <text>"``.

    Examples
    --------
    >>> render_detailed(LogLevel.DEBUG, SourceLocation("main.py", "run", 12), "tick")
    'main.py:12 run() debug: tick'
    """

    return f"{location.file}:{location.line} {location.func}() {level.canonical_name}: {text}"


__all__ = ["MAX_MESSAGE_SIZE", "render_detailed", "render_message", "render_plain"]
