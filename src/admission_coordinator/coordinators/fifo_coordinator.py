# src/admission_coordinator/coordinators/fifo_coordinator.py

"""
Implements the single-slot FIFO admission coordinator.

This module provides the `AdmissionCoordinator` class. It owns one
shared slot and a `collections.deque` of waiting requesters. Both
public operations, including the `on_admitted()` callback, run under
one reentrant lock, so concurrent callers always observe a single
holder and callbacks fire in FIFO grant order.
"""

import logging
import threading
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

# Local package imports
from ..base_coordinator import BaseCoordinator
from ..constants import CoordinatorState, GrantResult, RequesterState
from ..measure import Measure

# Set up the module-level logger
log = logging.getLogger(__name__)


class AdmissionCoordinator(BaseCoordinator):
    """
    A coordinator granting exclusive use of one slot, in FIFO order.

    Requesters need only an `on_admitted()` method, which is called
    when they are granted the slot after waiting in the queue.
    """

    def __init__(self, name: str = "coordinator",
                 clock: Optional[Callable[[], float]] = None,
                 strict_release: bool = False,
                 verify_holder: bool = False):
        """
        Initializes the coordinator in the IDLE state.

        Args:
            name (str, optional): Label used in log messages.
            clock (Callable[[], float], optional): Time source for KPIs.
                Defaults to `time.monotonic`.
            strict_release (bool, optional): If True, releasing a free
                slot raises ValueError instead of being ignored.
            verify_holder (bool, optional): If True, `notify_release`
                must be called with the current holder.
        """
        super().__init__(name, clock)

        self.strict_release: bool = strict_release
        self.verify_holder: bool = verify_holder

        self.slot_free: bool = True
        self.holder: Optional[Any] = None
        self.wait_queue: Deque[Tuple[Any, float]] = deque()

        self._grant_time: Optional[float] = None
        # Reentrant: on_admitted runs under the lock and may call back in.
        self._lock = threading.RLock()

        self.kpi_tracker: Measure = Measure(self.start_time)

        log.info(f"AdmissionCoordinator '{self.name}' initialized: "
                 f"StrictRelease={strict_release}, "
                 f"VerifyHolder={verify_holder}")

    @property
    def state(self) -> CoordinatorState:
        return CoordinatorState.IDLE if self.slot_free \
            else CoordinatorState.OCCUPIED

    @property
    def queued(self) -> List[Any]:
        """Snapshot of the waiting requesters, head first."""
        with self._lock:
            return [requester for requester, _ in self.wait_queue]

    @property
    def queue_length(self) -> int:
        return len(self.wait_queue)

    def request_arrival(self, requester: Any) -> GrantResult:
        """
        A requester asks for the slot. It is granted the slot if it is
        free, otherwise it is appended to the wait queue.
        """
        with self._lock:
            now = self.clock()
            log.debug(f"{self.name}: arrival request from {requester}...")

            if requester is self.holder and not self.slot_free:
                log.warning(f"{self.name}: {requester} already holds "
                            f"the slot.")
                return GrantResult.GRANTED

            if self._is_queued(requester):
                log.warning(f"{self.name}: {requester} is already "
                            f"waiting; not queued twice.")
                return GrantResult.QUEUED

            self.kpi_tracker.log_arrival_request(now)

            if self.slot_free:
                log.debug(f"{self.name}: slot free, granting {requester}.")
                self._grant(requester, arrival_time=now, grant_time=now,
                            from_queue=False)
                return GrantResult.GRANTED

            log.debug(f"{self.name}: slot held by {self.holder}. "
                      f"Queuing {requester}.")
            self.wait_queue.append((requester, now))
            self._set_requester_state(requester,
                                      RequesterState.WAITING_FOR_SLOT)
            self.kpi_tracker.log_queue_entry(
                time=now,
                current_queue_length=len(self.wait_queue)
            )
            return GrantResult.QUEUED

    def notify_release(self, requester: Any = None) -> Optional[Any]:
        """
        The slot is released. If requesters are waiting, the head of
        the queue is granted the slot and its `on_admitted()` is called
        before this method returns.

        Raises:
            ValueError: If the slot is already free and `strict_release`
                is set, or if `verify_holder` is set and `requester` is
                not the current holder.
        """
        with self._lock:
            now = self.clock()
            log.debug(f"{self.name}: release by {requester}...")

            if self.slot_free:
                if self.strict_release:
                    log.error(f"{self.name}: release by {requester} but "
                              f"the slot is already free.")
                    raise ValueError(f"Slot of '{self.name}' is already "
                                     f"free.")
                log.warning(f"{self.name}: release by {requester} ignored; "
                            f"the slot is already free.")
                self.kpi_tracker.log_ignored_release(now)
                return None

            if requester is not self.holder:
                if self.verify_holder:
                    log.error(f"{self.name}: {requester} tried to release "
                              f"a slot held by {self.holder}.")
                    raise ValueError(f"{requester} does not hold the slot "
                                     f"of '{self.name}'.")
                if requester is not None:
                    log.warning(f"{self.name}: {requester} released a slot "
                                f"held by {self.holder}.")

            released = self.holder
            occupancy_time = now - self._grant_time
            self.slot_free = True
            self.holder = None
            self._set_requester_state(released, RequesterState.IDLE)

            admitted = None
            if self.wait_queue:
                admitted, arrival_time = self.wait_queue.popleft()
                log.debug(f"{self.name}: queue not empty. Granting "
                          f"{admitted} (FIFO).")

            self.kpi_tracker.log_release(
                time=now,
                occupancy_time=occupancy_time,
                slot_busy=admitted is not None
            )

            if admitted is not None:
                self._grant(admitted, arrival_time=arrival_time,
                            grant_time=now, from_queue=True)
            else:
                log.debug(f"{self.name}: slot freed. Queue is empty.")

            # Delivered under the lock, so callbacks follow grant order.
            if admitted is not None:
                admitted.on_admitted()
        return admitted

    def get_final_kpis(self, end_time: Optional[float] = None
                       ) -> Dict[str, Any]:
        """Pass-through method to get the KPI report."""
        return self.kpi_tracker.get_final_kpis(end_time)

    def _grant(self, requester: Any, arrival_time: float,
               grant_time: float, from_queue: bool):
        """Internal helper to hand the slot to a requester."""
        self.slot_free = False
        self.holder = requester
        self._grant_time = grant_time
        self._set_requester_state(requester, RequesterState.ADMITTED)

        self.kpi_tracker.log_grant(
            time=grant_time,
            wait_time=grant_time - arrival_time,
            current_queue_length=len(self.wait_queue),
            from_queue=from_queue
        )

    def _is_queued(self, requester: Any) -> bool:
        return any(queued is requester for queued, _ in self.wait_queue)

    def _set_requester_state(self, requester: Any, state: RequesterState):
        """Sets the requester's state attribute, if it has one."""
        try:
            requester.state = state
        except AttributeError:
            log.debug(f"Requester {requester} does not have a mutable "
                      f"'.state' attribute.")
