from __future__ import annotations

import pytest

from lib_log_switch.domain.errors import MechanismInitError, MechanismRegistrationError
from lib_log_switch.domain.mechanism import MAX_MECHANISM_NAME, MechanismDescriptor


class _Lifecycle:
    def __init__(self, init_result: bool = True) -> None:
        self.init_result = init_result
        self.inits = 0
        self.deinits = 0

    def init(self) -> bool:
        self.inits += 1
        return self.init_result

    def deinit(self) -> None:
        self.deinits += 1


def test_start_runs_init_once_until_stopped() -> None:
    lifecycle = _Lifecycle()
    descriptor = MechanismDescriptor("lifecycle", init=lifecycle.init, deinit=lifecycle.deinit)

    descriptor.start()
    descriptor.start()
    assert (lifecycle.inits, descriptor.initialized) == (1, True)

    descriptor.stop()
    assert (lifecycle.deinits, descriptor.initialized) == (1, False)

    descriptor.start()
    assert lifecycle.inits == 2


def test_start_without_init_marks_initialized() -> None:
    descriptor = MechanismDescriptor("bare")
    descriptor.start()
    assert descriptor.initialized is True


def test_failed_init_raises_and_leaves_descriptor_uninitialized() -> None:
    descriptor = MechanismDescriptor("broken", init=_Lifecycle(init_result=False).init)

    with pytest.raises(MechanismInitError, match='Failed to initialize mechanism "broken"'):
        descriptor.start()
    assert descriptor.initialized is False


def test_init_exception_is_wrapped() -> None:
    def _explode() -> bool:
        raise OSError("socket gone")

    descriptor = MechanismDescriptor("flaky", init=_explode)
    with pytest.raises(MechanismInitError, match="socket gone"):
        descriptor.start()


def test_stop_clears_flag_even_when_deinit_raises() -> None:
    def _explode() -> None:
        raise RuntimeError("boom")

    descriptor = MechanismDescriptor("leaky", deinit=_explode)
    descriptor.start()
    with pytest.raises(RuntimeError):
        descriptor.stop()
    assert descriptor.initialized is False


@pytest.mark.parametrize("name", ["", "   ", "has space", "list", "x" * (MAX_MECHANISM_NAME + 1)])
def test_invalid_names_are_rejected(name: str) -> None:
    with pytest.raises(MechanismRegistrationError):
        MechanismDescriptor(name)


def test_longest_allowed_name_is_accepted() -> None:
    assert MechanismDescriptor("x" * MAX_MECHANISM_NAME).name == "x" * MAX_MECHANISM_NAME
