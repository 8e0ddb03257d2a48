# src/admission_coordinator/railway_station.py

"""
A railway station built on the admission coordinator.

One platform is shared by every train. A train arriving while the
platform is taken waits; when the train on the platform leaves, the
station lets the first waiting train in.

Run `python -m admission_coordinator.railway_station` to print the trace.
"""

import logging
from typing import Callable, List, Optional

from .constants import GrantResult
from .coordinators import AdmissionCoordinator
from .requester import BaseRequester

log = logging.getLogger(__name__)


class Train(BaseRequester):
    """A train reporting what happens to it through `emit`."""

    def __init__(self, name: str, emit: Callable[[str], None] = print):
        super().__init__(name)
        self.emit = emit

    def _say(self, message: str):
        self.emit(f"{self.name}: {message}")

    def arrive(self) -> GrantResult:
        result = super().arrive()
        if result is GrantResult.GRANTED:
            self._say("Arrived")
        else:
            self._say("Arrival blocked, waiting")
        return result

    def depart(self):
        self._say("Leaving")
        return super().depart()

    def on_admitted(self) -> None:
        self._say("Arrival permitted, arriving")
        self._say("Arrived")


class PassengerTrain(Train):
    def __init__(self, emit: Callable[[str], None] = print,
                 name: str = "PassengerTrain"):
        super().__init__(name, emit)


class FreightTrain(Train):
    def __init__(self, emit: Callable[[str], None] = print,
                 name: str = "FreightTrain"):
        super().__init__(name, emit)


def run_demo(emit: Optional[Callable[[str], None]] = print) -> List[str]:
    """
    Wires two trains to a station and plays the arrival sequence.

    Returns the trace lines, which are also passed to `emit`.
    """
    trace: List[str] = []

    def record(line: str):
        trace.append(line)
        if emit is not None:
            emit(line)

    passenger = PassengerTrain(record)
    freight = FreightTrain(record)

    station = AdmissionCoordinator(name="station")
    station.register(passenger, freight)

    passenger.arrive()
    freight.arrive()
    passenger.depart()

    log.debug(f"Station demo finished with {len(trace)} trace lines.")
    return trace


if __name__ == "__main__":
    run_demo()
