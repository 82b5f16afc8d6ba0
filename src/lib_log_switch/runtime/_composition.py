"""Runtime composition helpers wiring adapters into a facility.

Purpose
-------
Translate :class:`RuntimeSettings` into a live :class:`LogFacility`: build the
built-in mechanisms, freeze their descriptors into the registry's getter list
and hand the registry to the facility.

Contents
--------
* :func:`build_facility` - the composition root.
* :data:`BUILTIN_MECHANISMS` - names of the built-ins in registration order.

System Role
-----------
The only module that knows about concrete adapters. Tests inject a recording
Rich console or syslog backend through the keyword-only parameters.
"""

from __future__ import annotations

from typing import Any, Sequence, TextIO

from rich.console import Console

from lib_log_switch.adapters import NullMechanism, StderrMechanism, SyslogMechanism
from lib_log_switch.application.use_cases.registry import DescriptorGetter, MechanismRegistry
from lib_log_switch.domain.mechanism import MechanismDescriptor

from ._facility import LogFacility
from ._settings import RuntimeSettings

BUILTIN_MECHANISMS: tuple[str, ...] = (NullMechanism.name, StderrMechanism.name, SyslogMechanism.name)


def build_facility(
    settings: RuntimeSettings,
    *,
    stdout: TextIO | None = None,
    console: Console | None = None,
    syslog_backend: Any = None,
) -> LogFacility:
    """Assemble a facility from resolved settings."""

    descriptors = (
        NullMechanism().as_descriptor(),
        StderrMechanism(
            console=console,
            force_color=settings.force_color,
            no_color=settings.no_color,
            styles=settings.console_styles,
        ).as_descriptor(),
        SyslogMechanism(backend=syslog_backend, ident=settings.syslog_ident).as_descriptor(),
    )
    registry = MechanismRegistry(
        _getters(descriptors),
        default_name=settings.default_mechanism,
        environ=settings.environ,
        env_key=settings.mechanism_env_key,
        persist=settings.persist_environment,
        stdout=stdout,
    )
    return LogFacility(settings, registry, stdout=stdout)


def _getters(descriptors: Sequence[MechanismDescriptor]) -> list[DescriptorGetter]:
    """Return one getter per descriptor, each yielding the same instance every call."""

    def _getter(descriptor: MechanismDescriptor) -> DescriptorGetter:
        return lambda: descriptor

    return [_getter(descriptor) for descriptor in descriptors]


__all__ = ["BUILTIN_MECHANISMS", "build_facility"]
