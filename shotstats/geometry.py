"""Group dispersion metrics for bullet holes on a target.

Coordinates are inches relative to the point of aim at the origin. Everything
in this module is pure: no Django imports, no I/O, no cached state, and the
result depends only on the set of holes (never on their order).
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from itertools import combinations
from statistics import fmean, pstdev
from typing import Final

from .calibration import CalibrationMethod
from .dto import GroupDispersionMetrics, HolePosition

MIN_HOLES: Final[int] = 2


def compute_group_metrics(
    holes: Iterable[HolePosition],
    bullet_diameter: float,
    *,
    calibration_method: CalibrationMethod = CalibrationMethod.manual,
    measurement_confidence: float | None = None,
) -> GroupDispersionMetrics:
    """Compute the full dispersion report for a group of holes.

    Args:
        holes: Hole positions in inches relative to the point of aim.
        bullet_diameter: Bullet diameter in inches, added to every
            edge-to-edge value. Validation is the caller's concern.
        calibration_method: How the coordinates were calibrated.
        measurement_confidence: Optional detection confidence (0-1).

    Returns:
        GroupDispersionMetrics. When fewer than two holes are supplied every
        derived value is None; this is the "insufficient data" state, not an
        error.
    """

    points = tuple(holes)
    if len(points) < MIN_HOLES:
        return GroupDispersionMetrics(
            bullet_diameter=bullet_diameter,
            calibration_method=calibration_method,
            measurement_confidence=measurement_confidence,
        )

    center_x, center_y = centroid(points)
    xs = [hole.x for hole in points]
    ys = [hole.y for hole in points]
    radii = radial_distances(points, center=(center_x, center_y))

    extreme_spread_ctc = extreme_spread(points)
    horizontal_spread_ctc = max(xs) - min(xs)
    vertical_spread_ctc = max(ys) - min(ys)

    return GroupDispersionMetrics(
        bullet_diameter=bullet_diameter,
        calibration_method=calibration_method,
        measurement_confidence=measurement_confidence,
        extreme_spread_ctc=extreme_spread_ctc,
        extreme_spread_ete=extreme_spread_ctc + bullet_diameter,
        horizontal_spread_ctc=horizontal_spread_ctc,
        horizontal_spread_ete=horizontal_spread_ctc + bullet_diameter,
        vertical_spread_ctc=vertical_spread_ctc,
        vertical_spread_ete=vertical_spread_ctc + bullet_diameter,
        mean_radius=fmean(radii),
        radial_std_dev=pstdev(radii),
        horizontal_std_dev=pstdev(xs),
        vertical_std_dev=pstdev(ys),
        cep50=cep50(radii),
        poi_offset_x=center_x,
        poi_offset_y=center_y,
    )


def centroid(holes: Sequence[HolePosition]) -> tuple[float, float]:
    """Return the arithmetic mean position of the holes.

    Args:
        holes: Non-empty sequence of hole positions.

    Returns:
        `(mean_x, mean_y)` in inches.
    """

    return fmean(hole.x for hole in holes), fmean(hole.y for hole in holes)


def extreme_spread(holes: Sequence[HolePosition]) -> float:
    """Return the largest center-to-center distance between any two holes.

    Groups are small (25 shots or fewer), so an all-pairs scan is used.

    Args:
        holes: Hole positions.

    Returns:
        The maximum pairwise distance, or 0.0 for fewer than two holes.
    """

    widest = 0.0
    for first, second in combinations(holes, 2):
        distance = math.hypot(first.x - second.x, first.y - second.y)
        if distance > widest:
            widest = distance
    return widest


def radial_distances(holes: Sequence[HolePosition], *, center: tuple[float, float]) -> list[float]:
    """Return each hole's distance from `center`, in input order."""

    center_x, center_y = center
    return [math.hypot(hole.x - center_x, hole.y - center_y) for hole in holes]


def cep50(radii: Sequence[float]) -> float:
    """Return the 50% circular error probable for a set of radial distances.

    The radii are ranked ascending and the value at index `n // 2` is used:
    the median for odd counts and the upper of the two middle ranks for even
    counts, so the circle always encloses at least half the holes.

    Args:
        radii: Non-empty distances from the group centroid.

    Returns:
        CEP50 radius in the same unit as `radii`.
    """

    ranked = sorted(radii)
    return ranked[len(ranked) // 2]
