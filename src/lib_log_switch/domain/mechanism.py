"""Mechanism descriptor: a named bundle of optional output operations.

Purpose
-------
Describe an output backend (discard, standard error, syslog, or a caller's
own) independently of how it writes bytes. The registry only ever sees
descriptors, never the adapters behind them.

Contents
--------
* :class:`MechanismDescriptor` - name, optional ``init``/``log``/``deinit``
  callables and the ``initialized`` flag.
* :data:`MAX_MECHANISM_NAME` and :data:`RESERVED_NAMES` - naming constraints.

System Role
-----------
Owns the per-descriptor lifecycle ``Uninitialized -> Initialized ->
Uninitialized`` so the registry can rely on ``start``/``stop`` being the only
places the ``initialized`` flag changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from .errors import MechanismInitError, MechanismRegistrationError
from .levels import LogLevel

MAX_MECHANISM_NAME = 63
#: Names are used verbatim as environment values and must stay short.

RESERVED_NAMES = frozenset({"list"})
#: Pseudo-commands understood by the registry instead of mechanism names.

LogCallable = Callable[[LogLevel, str], None]
InitCallable = Callable[[], bool]
DeinitCallable = Callable[[], None]


@dataclass(eq=False)
class MechanismDescriptor:
    """Named capability bundle registered with the mechanism registry.

    Examples
    --------
    >>> seen = []
    >>> descriptor = MechanismDescriptor("memory", log=lambda level, text: seen.append(text))
    >>> descriptor.start()
    >>> descriptor.initialized
    True
    >>> descriptor.log(LogLevel.INFO, "hello")
    >>> seen
    ['hello']
    """

    name: str
    log: LogCallable | None = None
    init: InitCallable | None = None
    deinit: DeinitCallable | None = None
    initialized: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise MechanismRegistrationError("Mechanism name must be a non-empty string")
        if self.name != self.name.strip() or any(ch.isspace() for ch in self.name):
            raise MechanismRegistrationError(f"Mechanism name must not contain whitespace: {self.name!r}")
        if len(self.name) > MAX_MECHANISM_NAME:
            raise MechanismRegistrationError(f"Mechanism name exceeds {MAX_MECHANISM_NAME} characters: {self.name!r}")
        if self.name in RESERVED_NAMES:
            raise MechanismRegistrationError(f"Mechanism name is reserved: {self.name!r}")

    def start(self) -> None:
        """Run ``init`` unless already initialised and mark the descriptor live.

        Raises
        ------
        MechanismInitError
            When ``init`` returns a falsy value or raises.
        """

        if self.initialized:
            return
        if self.init is not None:
            try:
                ok = self.init()
            except Exception as exc:
                raise MechanismInitError(f'Failed to initialize mechanism "{self.name}": {exc}') from exc
            if not ok:
                raise MechanismInitError(f'Failed to initialize mechanism "{self.name}"')
        self.initialized = True

    def stop(self) -> None:
        """Run ``deinit`` (when present) and clear the ``initialized`` flag."""

        try:
            if self.deinit is not None:
                self.deinit()
        finally:
            self.initialized = False


__all__ = [
    "DeinitCallable",
    "InitCallable",
    "LogCallable",
    "MAX_MECHANISM_NAME",
    "MechanismDescriptor",
    "RESERVED_NAMES",
]
