# src/admission_coordinator/coordinators/__init__.py

"""
Initializes the 'coordinators' sub-package.

This file "lifts" the concrete coordinator implementations to the
sub-package level, e.g.:

from admission_coordinator.coordinators import AdmissionCoordinator
"""

from .fifo_coordinator import AdmissionCoordinator

__all__ = [
    "AdmissionCoordinator"
]
