"""DTO types consumed and returned by the shot statistics engine.

DTOs are plain immutable value containers. They intentionally avoid any
Django/ORM dependencies so callers can build them from forms, fixtures or
stored records alike.
"""

from __future__ import annotations

from dataclasses import dataclass

from .calibration import CalibrationMethod


@dataclass(frozen=True, slots=True)
class HolePosition:
    """A single bullet hole relative to the point of aim.

    Attributes:
        x: Horizontal offset in inches. Positive is right of the point of aim.
        y: Vertical offset in inches. Positive is above the point of aim.
    """

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class GroupDispersionMetrics:
    """Dispersion metrics computed for one group of holes.

    All linear values are in inches. Every derived value is None when fewer
    than two holes were supplied.

    Attributes:
        bullet_diameter: Bullet diameter used for edge-to-edge values.
        calibration_method: How the hole coordinates were calibrated.
        measurement_confidence: Optional detection confidence (0-1).
        extreme_spread_ctc: Center-to-center distance of the farthest pair.
        extreme_spread_ete: `extreme_spread_ctc + bullet_diameter`.
        horizontal_spread_ctc: Range of x coordinates.
        horizontal_spread_ete: Horizontal spread plus bullet diameter.
        vertical_spread_ctc: Range of y coordinates.
        vertical_spread_ete: Vertical spread plus bullet diameter.
        mean_radius: Mean distance of the holes from the group centroid.
        radial_std_dev: Population SD of distances from the centroid.
        horizontal_std_dev: Population SD of x offsets from the centroid.
        vertical_std_dev: Population SD of y offsets from the centroid.
        cep50: Radius about the centroid that encloses at least half the holes.
        poi_offset_x: Centroid x, i.e. horizontal point-of-impact bias.
        poi_offset_y: Centroid y, i.e. vertical point-of-impact bias.
    """

    bullet_diameter: float
    calibration_method: CalibrationMethod = CalibrationMethod.manual
    measurement_confidence: float | None = None
    extreme_spread_ctc: float | None = None
    extreme_spread_ete: float | None = None
    horizontal_spread_ctc: float | None = None
    horizontal_spread_ete: float | None = None
    vertical_spread_ctc: float | None = None
    vertical_spread_ete: float | None = None
    mean_radius: float | None = None
    radial_std_dev: float | None = None
    horizontal_std_dev: float | None = None
    vertical_std_dev: float | None = None
    cep50: float | None = None
    poi_offset_x: float | None = None
    poi_offset_y: float | None = None

    @property
    def has_metrics(self) -> bool:
        """Return True when the group had enough holes to be measured."""

        return self.extreme_spread_ctc is not None


@dataclass(frozen=True, slots=True)
class VelocityStatistics:
    """Summary statistics for a set of chronograph readings.

    Attributes:
        count: Number of readings.
        average: Arithmetic mean velocity, or None when `count == 0`.
        high: Fastest reading, or None when `count == 0`.
        low: Slowest reading, or None when `count == 0`.
        extreme_spread: `high - low`, or None when `count == 0`.
        standard_deviation: Population standard deviation, or None when
            `count == 0`.
    """

    count: int
    average: float | None = None
    high: float | None = None
    low: float | None = None
    extreme_spread: float | None = None
    standard_deviation: float | None = None
