# tests/test_railway_station.py

"""
Tests for the railway station built on the coordinator: trains share
one platform and the station lets waiting trains in, in order.
"""

from admission_coordinator import AdmissionCoordinator, GrantResult
from admission_coordinator.railway_station import (
    FreightTrain,
    PassengerTrain,
    run_demo
)


def test_demo_trace():
    printed = []

    trace = run_demo(emit=printed.append)

    assert trace == [
        "PassengerTrain: Arrived",
        "FreightTrain: Arrival blocked, waiting",
        "PassengerTrain: Leaving",
        "FreightTrain: Arrival permitted, arriving",
        "FreightTrain: Arrived",
    ]
    assert printed == trace


def test_demo_without_emit():
    assert len(run_demo(emit=None)) == 5


def test_waiting_trains_arrive_in_order():
    lines = []
    station = AdmissionCoordinator(name="station")
    first = PassengerTrain(lines.append, name="P1")
    second = FreightTrain(lines.append, name="F1")
    third = PassengerTrain(lines.append, name="P2")
    station.register(first, second, third)

    assert first.arrive() == GrantResult.GRANTED
    assert second.arrive() == GrantResult.QUEUED
    assert third.arrive() == GrantResult.QUEUED

    first.depart()
    second.depart()

    assert lines == [
        "P1: Arrived",
        "F1: Arrival blocked, waiting",
        "P2: Arrival blocked, waiting",
        "P1: Leaving",
        "F1: Arrival permitted, arriving",
        "F1: Arrived",
        "F1: Leaving",
        "P2: Arrival permitted, arriving",
        "P2: Arrived",
    ]
    assert station.holder is third
