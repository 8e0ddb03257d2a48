# tests/test_requester.py

"""
Unit tests for BaseRequester and the coordinator's mediator plumbing
(`register()` and `notify()`).
"""

import pytest

from admission_coordinator import (
    AdmissionCoordinator,
    BaseRequester,
    CoordinatorState,
    EventKind,
    GrantResult,
    RequesterState
)


class RecordingRequester(BaseRequester):
    """A requester that records its admissions."""
    def __init__(self, name):
        super().__init__(name)
        self.admissions = 0

    def on_admitted(self):
        self.admissions += 1


@pytest.fixture
def coordinator() -> AdmissionCoordinator:
    return AdmissionCoordinator(name="platform", clock=lambda: 0.0)


def test_base_requester_is_abstract():
    with pytest.raises(TypeError):
        BaseRequester("abstract")


def test_register_wires_requesters(coordinator: AdmissionCoordinator):
    a = RecordingRequester("a")
    b = RecordingRequester("b")

    coordinator.register(a, b)
    coordinator.register(a)

    assert a.coordinator is coordinator
    assert b.coordinator is coordinator


def test_register_rejects_unwireable_requester(
        coordinator: AdmissionCoordinator):
    """Duck-typed requesters with only on_admitted() cannot be wired."""
    class Bare:
        def on_admitted(self):
            pass

    with pytest.raises(TypeError):
        coordinator.register(Bare())

    # They still work through the direct operations
    assert coordinator.request_arrival(Bare()) == GrantResult.GRANTED


def test_rewiring_to_another_coordinator_fails(
        coordinator: AdmissionCoordinator):
    a = RecordingRequester("a")
    coordinator.register(a)

    with pytest.raises(RuntimeError):
        AdmissionCoordinator(name="other").register(a)
    assert a.coordinator is coordinator


def test_unwired_requester_cannot_arrive():
    with pytest.raises(RuntimeError):
        RecordingRequester("loose").arrive()
    with pytest.raises(RuntimeError):
        RecordingRequester("loose").depart()


def test_arrive_and_depart_through_notify(coordinator: AdmissionCoordinator):
    a = RecordingRequester("a")
    b = RecordingRequester("b")
    coordinator.register(a, b)

    assert a.arrive() == GrantResult.GRANTED
    assert b.arrive() == GrantResult.QUEUED
    assert b.state == RequesterState.WAITING_FOR_SLOT

    assert a.depart() is b
    assert b.admissions == 1
    assert b.state == RequesterState.ADMITTED
    assert a.state == RequesterState.IDLE

    assert b.depart() is None
    assert coordinator.state == CoordinatorState.IDLE


def test_notify_dispatches_event_kinds(coordinator: AdmissionCoordinator):
    a = RecordingRequester("a")

    assert coordinator.notify(a, EventKind.ARRIVAL_REQUESTED) \
        == GrantResult.GRANTED
    assert coordinator.notify(a, EventKind.DEPARTED) is None
    assert coordinator.state == CoordinatorState.IDLE


def test_notify_rejects_unknown_event(coordinator: AdmissionCoordinator):
    with pytest.raises(ValueError):
        coordinator.notify(RecordingRequester("a"), "A")
