# src/admission_coordinator/requester.py

"""
Defines the base class for components that compete for a slot.

A coordinator only needs its requesters to provide `on_admitted()`.
`BaseRequester` adds the mediator wiring on top of that: a coordinator
handle that is set once, and `arrive()` / `depart()` helpers that send
events through the coordinator's `notify()`.
"""

import abc
import logging
from typing import Any, Optional

from .constants import EventKind, GrantResult, RequesterState

log = logging.getLogger(__name__)


class BaseRequester(abc.ABC):
    """
    Abstract base for requesters wired to a coordinator.

    Attributes:
        name (str): Identity used in logs and traces.
        state (RequesterState): Stamped by the coordinator.
    """

    def __init__(self, name: str):
        self.name: str = name
        self.state: RequesterState = RequesterState.IDLE
        self._coordinator: Optional[Any] = None

    def __repr__(self):
        return f"{self.__class__.__name__}(name='{self.name}')"

    @property
    def coordinator(self) -> Optional[Any]:
        return self._coordinator

    def set_coordinator(self, coordinator: Any) -> None:
        """
        Stores the coordinator handle. The handle is set once; wiring
        the same coordinator again is a no-op.

        Raises:
            RuntimeError: If already wired to another coordinator.
        """
        if self._coordinator is not None and \
                self._coordinator is not coordinator:
            raise RuntimeError(f"{self} is already wired to "
                               f"'{self._coordinator.name}'.")
        self._coordinator = coordinator

    def arrive(self) -> GrantResult:
        """Asks the coordinator for the slot."""
        return self._require_coordinator().notify(
            self, EventKind.ARRIVAL_REQUESTED)

    def depart(self) -> Optional[Any]:
        """Leaves the slot. Returns the requester admitted next, if any."""
        return self._require_coordinator().notify(self, EventKind.DEPARTED)

    @abc.abstractmethod
    def on_admitted(self) -> None:
        """Called by the coordinator when a wait in the queue ends."""
        raise NotImplementedError

    def _require_coordinator(self) -> Any:
        if self._coordinator is None:
            log.error(f"{self} has no coordinator.")
            raise RuntimeError(f"{self} is not wired to a coordinator.")
        return self._coordinator
