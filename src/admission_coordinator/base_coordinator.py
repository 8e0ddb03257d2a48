# src/admission_coordinator/base_coordinator.py

"""
Defines the Abstract Base Class (ABC) for all admission coordinators.

This module provides the 'BaseCoordinator', which establishes the
interface every concrete coordinator must adhere to, and the mediator
plumbing shared by all of them: wiring requesters to the coordinator
and dispatching the events they send.
"""

import abc
import logging
import time
from typing import Any, Callable, Dict, Optional

# Local package imports
from .constants import EventKind, GrantResult

log = logging.getLogger(__name__)


class BaseCoordinator(abc.ABC):
    """
    Abstract Base Class for admission coordinators.

    This class defines the standard public API:
    - `request_arrival(requester)`: A requester asks for the slot.
    - `notify_release(requester)`: The slot holder leaves.
    - `get_final_kpis(end_time)`: Retrieve the KPI report.

    Requesters normally do not call these directly. They are wired with
    `register()` and send events through `notify()`.
    """

    def __init__(self, name: str = "coordinator",
                 clock: Optional[Callable[[], float]] = None):
        """
        Initializes the attributes common to all coordinators.

        Args:
            name (str, optional): Label used in log messages.
            clock (Callable[[], float], optional): Zero-argument callable
                returning the current time in seconds. Defaults to
                `time.monotonic`.
        """
        self.name: str = name
        self.clock: Callable[[], float] = clock or time.monotonic
        self.start_time: float = self.clock()

    def register(self, *requesters: Any) -> None:
        """
        Wires requesters to this coordinator.

        Each requester receives this coordinator as its handle through
        `set_coordinator()`, as `BaseRequester` provides. Requesters that
        only implement `on_admitted()` need no wiring; they call
        `request_arrival()` / `notify_release()` directly.

        Raises:
            TypeError: If a requester has no `set_coordinator()`.
        """
        for requester in requesters:
            set_coordinator = getattr(requester, "set_coordinator", None)
            if not callable(set_coordinator):
                log.error(f"{self.name}: cannot wire {requester}.")
                raise TypeError(f"{requester!r} has no set_coordinator(); "
                                f"register() expects a BaseRequester.")
            set_coordinator(self)
            log.debug(f"{self.name}: registered {requester}")

    def notify(self, sender: Any, event: EventKind) -> Any:
        """
        Mediator entry point: routes an event from a requester.

        Returns whatever the handling operation returns, i.e. a
        `GrantResult` for arrivals and the newly admitted requester
        (or None) for departures.

        Raises:
            ValueError: If `event` is not an `EventKind`.
        """
        if event is EventKind.ARRIVAL_REQUESTED:
            return self.request_arrival(sender)
        if event is EventKind.DEPARTED:
            return self.notify_release(sender)

        log.error(f"{self.name}: unsupported event {event!r} from {sender}.")
        raise ValueError(f"Unsupported event {event!r} from {sender}.")

    @abc.abstractmethod
    def request_arrival(self, requester: Any) -> GrantResult:
        """
        Handles a requester's request for the slot.

        Args:
            requester (Any): The requester asking for the slot.

        Returns:
            GrantResult: GRANTED if the requester now holds the slot,
                         QUEUED if it has to wait.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def notify_release(self, requester: Any = None) -> Optional[Any]:
        """
        Handles the release of the slot.

        The implementation must free the slot and, if requesters are
        waiting, grant the next one and invoke its `on_admitted()`.

        Args:
            requester (Any, optional): The requester releasing the slot.

        Returns:
            Optional[Any]: The requester admitted from the queue, or
                           None if nobody was waiting.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def get_final_kpis(self, end_time: Optional[float] = None
                       ) -> Dict[str, Any]:
        """Retrieves the KPI report collected by the coordinator."""
        raise NotImplementedError
