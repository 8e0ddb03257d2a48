# src/admission_coordinator/constants.py

"""
Defines core enumerations used across the admission coordinator.

These enums are the closed vocabulary shared by coordinators and
requesters: the outcome of an arrival request, the state of the
shared slot, the state stamped on requesters, and the kinds of
events a requester can send to its coordinator.
"""

from enum import Enum, auto


class GrantResult(Enum):
    """
    Represents the possible outcomes of a requester's arrival request.

    This enum is the return value of `request_arrival()`. Being queued
    is a normal outcome, not an error.
    """

    # The slot was free; the requester now holds it.
    GRANTED = auto()

    # The slot was taken; the requester waits at the tail of the queue.
    QUEUED = auto()


class CoordinatorState(Enum):
    """Represents the state of a single-slot coordinator."""

    # Slot free and queue empty.
    IDLE = auto()

    # Slot held. The queue may or may not be empty.
    OCCUPIED = auto()


class RequesterState(Enum):
    """
    Represents the standardized states a requester can be in
    relative to a coordinator.

    The coordinator assigns these to any requester exposing a
    mutable `.state` attribute.
    """

    # Not interacting with this coordinator.
    IDLE = auto()

    # Requested arrival while the slot was taken.
    WAITING_FOR_SLOT = auto()

    # Holds the slot.
    ADMITTED = auto()


class EventKind(Enum):
    """Events a requester sends to its coordinator via `notify()`."""

    ARRIVAL_REQUESTED = auto()
    DEPARTED = auto()
