"""Chronograph velocity statistics.

Readings are treated as the full observed population, so the standard
deviation divides by `n`. Results are rounded once, at the end.
"""

from __future__ import annotations

from collections.abc import Iterable
from statistics import fmean, pstdev
from typing import Final

from .dto import VelocityStatistics

VELOCITY_DECIMALS: Final[int] = 2


def compute_velocity_stats(velocities: Iterable[float]) -> VelocityStatistics:
    """Summarize a set of velocity readings.

    Args:
        velocities: Velocity readings (any unit; fps by convention). Order is
            irrelevant.

    Returns:
        VelocityStatistics. With no readings only `count` is populated; with a
        single reading the spread and standard deviation are 0.
    """

    readings = [float(value) for value in velocities]
    if not readings:
        return VelocityStatistics(count=0)

    high = max(readings)
    low = min(readings)
    return VelocityStatistics(
        count=len(readings),
        average=round(fmean(readings), VELOCITY_DECIMALS),
        high=round(high, VELOCITY_DECIMALS),
        low=round(low, VELOCITY_DECIMALS),
        extreme_spread=round(high - low, VELOCITY_DECIMALS),
        standard_deviation=round(pstdev(readings), VELOCITY_DECIMALS),
    )
