"""Loglevel scale with canonical names and ordering helpers.

Purpose
-------
Provide the ordered severity scale every other layer filters against, together
with the conversions between levels and their printable names.

Contents
--------
* :class:`LogLevel` - the nine operational levels, noisiest first.
* :data:`LEVEL_FLOOR` / :data:`LEVEL_CEILING` - sentinel bounds that are never
  valid runtime levels.
* :func:`level_to_name`, :func:`name_to_level`, :func:`is_noisier_than`,
  :func:`level_names`, :func:`coerce_level` - conversion helpers.

System Role
-----------
The enum is the only name table: canonical names are derived from the member
names, so adding or reordering a level can never leave a second list behind.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable

from .errors import InvalidLevelError, UnknownLevelNameError

LEVEL_FLOOR = 0
#: Sentinel below the noisiest operational level.

LEVEL_CEILING = 10
#: Sentinel above the quietest operational level.


class LogLevel(IntEnum):
    """Operational loglevels; lower values are noisier."""

    VERY_NOISY = 1
    NOISY = 2
    DEBUG = 3
    VERBOSE = 4
    INFO = 5
    NOTICE = 6
    WARNING = 7
    ERROR = 8
    QUIET = 9

    @property
    def canonical_name(self) -> str:
        """Return the lowercase printable name (``VERY_NOISY`` -> ``verynoisy``)."""

        return self.name.lower().replace("_", "")


def _in_range(level: int) -> bool:
    if isinstance(level, bool) or not isinstance(level, int):
        return False
    return LEVEL_FLOOR < int(level) < LEVEL_CEILING


def _member(level: int) -> LogLevel:
    if not _in_range(level):
        raise InvalidLevelError(f"Invalid loglevel: {level!r}")
    return LogLevel(int(level))


def level_to_name(level: int) -> str:
    """Return the canonical name of ``level``.

    Examples
    --------
    >>> level_to_name(LogLevel.NOTICE)
    'notice'
    >>> level_to_name(1)
    'verynoisy'
    """

    return _member(level).canonical_name


def name_to_level(name: str | None) -> LogLevel:
    """Resolve a canonical, case-sensitive level name.

    Raises
    ------
    InvalidLevelError
        When ``name`` is ``None`` or empty.
    UnknownLevelNameError
        When ``name`` matches no level.

    Examples
    --------
    >>> name_to_level("warning") is LogLevel.WARNING
    True
    """

    if not name:
        raise InvalidLevelError("No loglevel name provided")
    for level in LogLevel:
        if level.canonical_name == name:
            return level
    raise UnknownLevelNameError(f'invalid loglevel name: "{name}"')


def is_noisier_than(
    a: int,
    b: int,
    *,
    on_invalid: Callable[[InvalidLevelError], object] | None = None,
) -> bool:
    """Return ``True`` when ``a`` is ordered at or before ``b``.

    Equal levels count as noisier. Out-of-range arguments yield ``False`` and
    are handed to ``on_invalid`` when given; the public
    :func:`lib_log_switch.is_noisier_than` passes the diagnostics reporter.

    Examples
    --------
    >>> is_noisier_than(LogLevel.DEBUG, LogLevel.INFO)
    True
    >>> is_noisier_than(LogLevel.INFO, LogLevel.INFO)
    True
    >>> is_noisier_than(LogLevel.ERROR, LogLevel.INFO)
    False
    >>> rejected = []
    >>> is_noisier_than(0, LogLevel.INFO, on_invalid=rejected.append)
    False
    >>> rejected
    [InvalidLevelError('Invalid loglevel: 0')]
    """

    try:
        first = _member(a)
        second = _member(b)
    except InvalidLevelError as exc:
        if on_invalid is not None:
            on_invalid(exc)
        return False
    return first <= second


def level_names() -> tuple[str, ...]:
    """Return every canonical name from noisiest to quietest."""

    return tuple(level.canonical_name for level in LogLevel)


def coerce_level(value: LogLevel | int | str) -> LogLevel:
    """Normalise enum members, integers and canonical names into :class:`LogLevel`.

    Examples
    --------
    >>> coerce_level("error") is LogLevel.ERROR
    True
    >>> coerce_level(3) is LogLevel.DEBUG
    True
    """

    if isinstance(value, LogLevel):
        return value
    if isinstance(value, str):
        return name_to_level(value.strip())
    return _member(value)


__all__ = [
    "LEVEL_CEILING",
    "LEVEL_FLOOR",
    "LogLevel",
    "coerce_level",
    "is_noisier_than",
    "level_names",
    "level_to_name",
    "name_to_level",
]
