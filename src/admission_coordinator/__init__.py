# src/admission_coordinator/__init__.py

"""
Initializes the 'admission_coordinator' package.

This file sets up the package-level logger and "lifts" the
most important classes and enums to the top-level namespace, e.g.:

from admission_coordinator import AdmissionCoordinator, GrantResult
"""

import logging

# Library logging stays silent unless the application configures
# its own handlers.
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


# Lift constants
from .constants import CoordinatorState, EventKind, GrantResult, RequesterState

# Lift the base classes and KPI tracker
from .base_coordinator import BaseCoordinator
from .requester import BaseRequester
from .measure import Measure

# Lift the concrete coordinators
from .coordinators import AdmissionCoordinator

__all__ = [
    "AdmissionCoordinator",
    "BaseCoordinator",
    "BaseRequester",
    "CoordinatorState",
    "EventKind",
    "GrantResult",
    "Measure",
    "RequesterState",
]
