"""Mechanism registry: lookup, listing and runtime switch-over.

Purpose
-------
Hold every known output mechanism, track the single current one, and perform
the switch-over protocol (tear down the old descriptor, initialise the new
one, persist the selection) whenever a different mechanism is requested.

Contents
--------
* :class:`MechanismRegistry` - the registry itself.
* :data:`LIST_COMMAND` - pseudo mechanism name that prints the listing.

System Role
-----------
Sits between the façade and the adapters. The façade hands fully rendered
text to :meth:`MechanismRegistry.dispatch`; the registry resolves which
mechanism should receive it from the environment-style store, so a selection
made by another process in the same tree is honoured on the next call.

Alignment Notes
---------------
A failed switch leaves *no* mechanism current. Messages dispatched while in
that state are dropped until a later switch succeeds.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, MutableMapping, Sequence
from threading import RLock
from typing import TextIO

from lib_log_switch import diagnostics
from lib_log_switch.domain.errors import (
    LogSwitchError,
    MechanismRegistrationError,
    NullInputError,
    UnknownMechanismError,
)
from lib_log_switch.domain.levels import LogLevel
from lib_log_switch.domain.mechanism import MechanismDescriptor

logger = logging.getLogger(__name__)

LIST_COMMAND = "list"

_BANNER = "=" * 66

DescriptorGetter = Callable[[], MechanismDescriptor]


class MechanismRegistry:
    """Known mechanisms plus the currently active one.

    Parameters
    ----------
    getters:
        Built-in descriptor getters in registration order.
    default_name:
        Mechanism used when the store holds no selection or ``list`` is
        requested.
    environ:
        Environment-style store consulted by :meth:`dispatch` and written on
        every successful switch.
    env_key:
        Key holding the mechanism name inside ``environ``.
    persist:
        When ``False`` successful switches are not written back to ``environ``.
    stdout:
        Stream for the listings; ``None`` resolves ``sys.stdout`` lazily.

    Examples
    --------
    >>> store = {}
    >>> registry = MechanismRegistry(
    ...     [lambda: MechanismDescriptor("null", log=lambda level, text: None)],
    ...     default_name="null",
    ...     environ=store,
    ...     env_key="LOG_SWITCH_MECHANISM",
    ... )
    >>> registry.switch("null")
    >>> registry.current_name, store["LOG_SWITCH_MECHANISM"]
    ('null', 'null')
    """

    def __init__(
        self,
        getters: Sequence[DescriptorGetter],
        *,
        default_name: str,
        environ: MutableMapping[str, str],
        env_key: str,
        persist: bool = True,
        stdout: TextIO | None = None,
    ) -> None:
        self._getters = tuple(getters)
        self._default_name = default_name
        self._environ = environ
        self._env_key = env_key
        self._persist = persist
        self._stdout = stdout
        self._custom: MechanismDescriptor | None = None
        self._current: MechanismDescriptor | None = None
        self._list_served = False
        self._lock = RLock()

    @property
    def default_name(self) -> str:
        return self._default_name

    @property
    def lock(self) -> RLock:
        """Lock guarding the slot, the current mechanism and every mechanism call.

        Callers that also hold a lock of their own must take this one first.
        """

        return self._lock

    @property
    def current(self) -> MechanismDescriptor | None:
        """Descriptor currently receiving messages, if any."""

        with self._lock:
            return self._current

    @property
    def current_name(self) -> str | None:
        with self._lock:
            return self._current.name if self._current is not None else None

    @property
    def custom(self) -> MechanismDescriptor | None:
        with self._lock:
            return self._custom

    def _descriptors(self) -> list[MechanismDescriptor]:
        descriptors = [getter() for getter in self._getters]
        if self._custom is not None:
            descriptors.append(self._custom)
        return descriptors

    def list_names(self) -> tuple[str, ...]:
        """Return every known mechanism name in registration order."""

        with self._lock:
            return tuple(descriptor.name for descriptor in self._descriptors())

    def print_list(self, stream: TextIO | None = None) -> None:
        """Print every known mechanism name on one line."""

        target = stream or self._stdout or sys.stdout
        target.write("".join(f"{name} " for name in self.list_names()) + "\n")
        target.flush()

    def print_banner(self, stream: TextIO | None = None) -> None:
        """Print the mechanism list framed by the ``list`` command banner."""

        target = stream or self._stdout or sys.stdout
        target.write(f"{_BANNER}\n available logging mechanisms:\n\t")
        self.print_list(target)
        target.write(f"{_BANNER}\n")
        target.flush()

    def resolve(self, name: str) -> MechanismDescriptor:
        """Return the descriptor registered under ``name``.

        Raises
        ------
        UnknownMechanismError
            When no descriptor matches.
        """

        with self._lock:
            for descriptor in self._descriptors():
                if descriptor.name == name:
                    return descriptor
        raise UnknownMechanismError(f'Unknown logging mechanism: "{name}"')

    def switch(self, name: str | None) -> None:
        """Make ``name`` the current mechanism.

        Steps: print the listing and fall back to the default for ``list``;
        return early when ``name`` is already current; tear down the current
        descriptor; resolve and initialise the new one; persist the selection.

        Raises
        ------
        NullInputError
            When ``name`` is ``None`` or empty.
        UnknownMechanismError
            When ``name`` does not resolve. No mechanism is current afterwards.
        MechanismInitError
            When the new descriptor fails to initialise. No mechanism is
            current afterwards.
        """

        if not name:
            raise NullInputError("No log mechanism name provided!")

        with self._lock:
            listed = name == LIST_COMMAND
            if listed:
                self.print_banner()
                self._list_served = True
                name = self._default_name

            previous = self._current
            if previous is not None and previous.name == name:
                # replace a stored "list" so the listing prints only once
                if listed and self._persist:
                    self._environ[self._env_key] = name
                return

            if previous is not None:
                self._current = None
                _teardown(previous)

            descriptor = self.resolve(name)
            descriptor.start()
            self._current = descriptor

            if self._persist:
                self._environ[self._env_key] = name
            logger.debug("switched logging mechanism to %s", name)
            diagnostics.notify(
                "mechanism_switched",
                {"previous": previous.name if previous is not None else None, "current": name},
            )

    def select(self, name: str | None) -> bool:
        """Run :meth:`switch`, reporting failures on the side channel."""

        try:
            self.switch(name)
        except LogSwitchError as exc:
            diagnostics.report(exc)
            return False
        return True

    def clear(self) -> None:
        """Tear down the current mechanism and leave none selected."""

        with self._lock:
            previous, self._current = self._current, None
            if previous is not None:
                _teardown(previous)

    def register_custom(self, descriptor: MechanismDescriptor) -> None:
        """Install ``descriptor`` into the custom slot.

        Registering the descriptor already in the slot succeeds without side
        effects. A different descriptor is rejected while the slot is occupied;
        call :meth:`unregister_custom` first.

        Raises
        ------
        MechanismRegistrationError
            When the slot is occupied by another descriptor or the name clashes
            with a built-in mechanism.
        """

        if not isinstance(descriptor, MechanismDescriptor):
            raise MechanismRegistrationError(f"Expected a MechanismDescriptor, got {type(descriptor).__name__}")
        with self._lock:
            if self._custom is descriptor:
                return
            if self._custom is not None:
                raise MechanismRegistrationError(f'Custom mechanism slot already holds "{self._custom.name}"')
            builtin = {getter().name for getter in self._getters}
            if descriptor.name in builtin:
                raise MechanismRegistrationError(f'Custom mechanism name clashes with built-in "{descriptor.name}"')
            self._custom = descriptor

    def unregister_custom(self) -> MechanismDescriptor | None:
        """Empty the custom slot, tearing the descriptor down if it is current.

        A persisted selection naming the removed descriptor is dropped from the
        store, so the next dispatch falls back to the default mechanism.
        """

        with self._lock:
            removed, self._custom = self._custom, None
            if removed is None:
                return None
            if self._current is removed:
                self.clear()
            if self._persist and self._environ.get(self._env_key) == removed.name:
                del self._environ[self._env_key]
            return removed

    def resolve_selected_name(self) -> str:
        """Return the mechanism name the store selects.

        Falls back to the current mechanism, then to the default, when the
        store holds no selection. A stored ``list`` counts as a selection only
        until the listing has been printed once.
        """

        value = self._environ.get(self._env_key)
        with self._lock:
            if value == LIST_COMMAND:
                if self._list_served:
                    value = None
            else:
                self._list_served = False
            if value:
                return value
            if self._current is not None:
                return self._current.name
        return self._default_name

    def dispatch(self, level: LogLevel, text: str) -> bool:
        """Deliver ``text`` to the selected mechanism.

        Returns ``False`` when the message was dropped: the selection could not
        be made current, or the mechanism's ``log`` raised.
        """

        with self._lock:
            if not self.select(self.resolve_selected_name()):
                return False
            descriptor = self._current
            if descriptor is None:
                return False
            if descriptor.log is None:
                return True
            try:
                descriptor.log(level, text)
            except Exception:
                logger.warning("logging mechanism %s raised; message dropped", descriptor.name, exc_info=True)
                return False
            return True


def _teardown(descriptor: MechanismDescriptor) -> None:
    try:
        descriptor.stop()
    except Exception:
        logger.warning("deinit of logging mechanism %s raised", descriptor.name, exc_info=True)
    else:
        logger.debug("deinitialised logging mechanism %s", descriptor.name)


__all__ = ["DescriptorGetter", "LIST_COMMAND", "MechanismRegistry"]
