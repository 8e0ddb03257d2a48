# src/admission_coordinator/measure.py

"""
Provides the Measure class, a data collection and statistical analysis
tool for admission coordinators.

This module records every grant, queue entry and release reported by
a coordinator and derives a set of Key Performance Indicators (KPIs)
from that data.

It is a passive component; it only records data when its 'log_...'
methods are called by the coordinator.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

# Set up the module-level logger
log = logging.getLogger(__name__)


class Measure:
    """
    Collects, stores, and calculates KPIs for a single-slot coordinator.

    Attributes:
        start_time (float): The timestamp when this tracker was initialized.

        # Observation-based data lists
        wait_times (List[float]): Time from arrival request to grant,
                                  for every grant (0.0 for immediate ones).
        occupancy_times (List[float]): Time from grant to release.

        # Time-weighted data logs
        queue_length_log (List[Tuple[float, int]]):
            A log of (timestamp, new_queue_length) tuples.
        slot_busy_log (List[Tuple[float, int]]):
            A log of (timestamp, 0 or 1) tuples.

        # Simple counters
        total_requests (int): Arrival requests accepted for processing.
        total_granted_immediately (int): Requests granted on arrival.
        total_queued (int): Requests that had to wait.
        total_granted_from_queue (int): Grants handed to queued requesters.
        total_released (int): Releases that freed a held slot.
        total_ignored_releases (int): Releases on an already free slot.

        last_update_time (float): The timestamp of the last logged event.
    """

    def __init__(self, start_time: float = 0.0):
        """
        Initializes the KPI tracker.

        Args:
            start_time (float, optional): The time at which tracking
                                          begins. Defaults to 0.0.
        """
        self.start_time: float = start_time
        self.last_update_time: float = start_time

        self.wait_times: List[float] = []
        self.occupancy_times: List[float] = []

        # Initial state anchors the time-weighted calculations.
        self.queue_length_log: List[Tuple[float, int]] = [(start_time, 0)]
        self.slot_busy_log: List[Tuple[float, int]] = [(start_time, 0)]

        self.total_requests: int = 0
        self.total_granted_immediately: int = 0
        self.total_queued: int = 0
        self.total_granted_from_queue: int = 0
        self.total_released: int = 0
        self.total_ignored_releases: int = 0

        log.debug(f"Measure tracker initialized (StartTime={start_time})")

    def log_arrival_request(self, time: float):
        """Logs a new arrival request."""
        self.total_requests += 1
        self._update_last_time(time)
        log.debug(f"T={time:.2f}: Arrival request logged. "
                  f"Total requests: {self.total_requests}")

    def log_queue_entry(self, time: float, current_queue_length: int):
        """Logs a requester entering the wait queue."""
        self.total_queued += 1
        self.queue_length_log.append((time, current_queue_length))
        self._update_last_time(time)
        log.debug(f"T={time:.2f}: Requester queued. "
                  f"New queue length: {current_queue_length}")

    def log_grant(self, time: float, wait_time: float,
                  current_queue_length: int, from_queue: bool):
        """Logs a requester taking the slot (after 0 or more wait)."""
        self.wait_times.append(wait_time)
        if from_queue:
            self.total_granted_from_queue += 1
            self.queue_length_log.append((time, current_queue_length))
        else:
            self.total_granted_immediately += 1
        self.slot_busy_log.append((time, 1))
        self._update_last_time(time)
        log.debug(f"T={time:.2f}: Slot granted. Wait: {wait_time:.2f}, "
                  f"Q_len: {current_queue_length}")

    def log_release(self, time: float, occupancy_time: float,
                    slot_busy: bool):
        """Logs the holder leaving the slot."""
        self.occupancy_times.append(occupancy_time)
        self.total_released += 1
        # A hand-over keeps the slot busy; only log actual transitions.
        if not slot_busy:
            self.slot_busy_log.append((time, 0))
        self._update_last_time(time)
        log.debug(f"T={time:.2f}: Slot released. "
                  f"Occupancy: {occupancy_time:.2f}")

    def log_ignored_release(self, time: float):
        """Logs a release on a slot that was already free."""
        self.total_ignored_releases += 1
        self._update_last_time(time)

    def _update_last_time(self, time: float):
        """Internal helper to keep track of the latest event time."""
        self.last_update_time = max(self.last_update_time, time)

    def _calculate_statistical_summary(
        self, data: List[float]
    ) -> Dict[str, Any]:
        """
        Calculates mean, std_dev, count and a 95% confidence interval.

        Uses the Z-score 1.96, which assumes a reasonably large sample.
        """
        n = len(data)
        if n == 0:
            return {
                "mean": 0.0, "std_dev": 0.0, "count": 0,
                "confidence_interval_95": (0.0, 0.0)
            }

        mean = sum(data) / n

        if n > 1:
            variance = sum((x - mean) ** 2 for x in data) / (n - 1)
            std_dev = math.sqrt(variance)
        else:
            std_dev = 0.0  # Cannot calculate variance with one sample

        margin_of_error = 1.96 * (std_dev / math.sqrt(n))

        return {
            "mean": mean,
            "std_dev": std_dev,
            "count": n,
            "confidence_interval_95": (mean - margin_of_error,
                                       mean + margin_of_error)
        }

    def _calculate_time_weighted_average(
        self, log_data: List[Tuple[float, int]], total_duration: float
    ) -> float:
        """
        Calculates the time-weighted average for a state variable.

        Integrates (value * duration) over the whole run and divides by
        the total duration.
        """
        if total_duration == 0:
            return 0.0

        integral = 0.0
        last_time, last_value = self.start_time, 0

        for time, value in log_data:
            integral += last_value * (time - last_time)
            last_time, last_value = time, value

        # Final interval, from the last event to the end of the run
        final_duration = total_duration - (last_time - self.start_time)
        integral += last_value * final_duration

        return integral / total_duration

    def get_final_kpis(self, end_time: Optional[float] = None
                       ) -> Dict[str, Any]:
        """
        Calculates and returns the dictionary of all KPIs.

        Args:
            end_time (Optional[float]): The timestamp closing the
                observation window. If not provided, uses the time of
                the last recorded event.

        Returns:
            Dict[str, Any]: A nested dictionary containing all KPIs.
        """
        if end_time is None:
            end_time = self.last_update_time
            log.debug(f"end_time not provided to get_final_kpis(). "
                      f"Using last event time {end_time}.")

        total_duration = end_time - self.start_time
        if total_duration <= 0:
            log.warning("Total duration is 0. Returning empty stats.")
            return {"error": "Total duration is 0"}

        log.info(f"Calculating final KPIs for total duration: "
                 f"{total_duration:.2f} (from {self.start_time:.2f} "
                 f"to {end_time:.2f})")

        wait_stats = self._calculate_statistical_summary(self.wait_times)
        occupancy_stats = self._calculate_statistical_summary(
            self.occupancy_times)

        avg_queue_length = self._calculate_time_weighted_average(
            self.queue_length_log, total_duration)
        max_queue_length = max(val for _, val in self.queue_length_log)

        utilization = self._calculate_time_weighted_average(
            self.slot_busy_log, total_duration)

        prob_wait = (self.total_queued / self.total_requests) \
            if self.total_requests > 0 else 0.0

        return {
            "summary": {
                "start_time": self.start_time,
                "end_time": end_time,
                "total_duration": total_duration
            },
            "requests": {
                "total_requests": self.total_requests,
                "granted_immediately": self.total_granted_immediately,
                "queued": self.total_queued,
                "granted_from_queue": self.total_granted_from_queue,
                "released": self.total_released,
                "ignored_releases": self.total_ignored_releases,
                "probability_of_waiting": prob_wait
            },
            "wait_time": wait_stats,
            "occupancy_time": occupancy_stats,
            "queue_length": {
                "time_weighted_average": avg_queue_length,
                "max_observed": max_queue_length
            },
            "slot_utilization": {
                "time_weighted_average": utilization
            }
        }
