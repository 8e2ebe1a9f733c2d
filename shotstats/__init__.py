"""Pure shot statistics package for TrueDope.

This package contains deterministic, testable computations that operate on
in-memory samples (hole coordinates, chronograph readings, logged DOPE) and
return immutable DTOs. It must not import Django or perform any I/O.
"""

from .calibration import CalibrationMethod
from .dto import GroupDispersionMetrics, HolePosition, VelocityStatistics
from .geometry import compute_group_metrics
from .velocity import compute_velocity_stats

__all__ = [
    "CalibrationMethod",
    "GroupDispersionMetrics",
    "HolePosition",
    "VelocityStatistics",
    "compute_group_metrics",
    "compute_velocity_stats",
]
