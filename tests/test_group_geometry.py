"""Tests for group dispersion metrics."""

from __future__ import annotations

import math
from dataclasses import fields

import pytest

from shotstats.calibration import CalibrationMethod
from shotstats.dto import GroupDispersionMetrics, HolePosition
from shotstats.geometry import cep50, centroid, compute_group_metrics, extreme_spread

pytestmark = pytest.mark.unit

_METADATA_FIELDS = {"bullet_diameter", "calibration_method", "measurement_confidence"}


def _derived_values(metrics: GroupDispersionMetrics) -> dict[str, float | None]:
    return {f.name: getattr(metrics, f.name) for f in fields(metrics) if f.name not in _METADATA_FIELDS}


def _holes(*points: tuple[float, float]) -> list[HolePosition]:
    return [HolePosition(x=x, y=y) for x, y in points]


@pytest.mark.parametrize("holes", [[], [HolePosition(x=0.4, y=-0.2)]])
def test_fewer_than_two_holes_leaves_every_metric_absent(holes: list[HolePosition]) -> None:
    """Zero or one hole is the insufficient-data state, not an error."""

    metrics = compute_group_metrics(holes, 0.308)

    assert metrics.bullet_diameter == 0.308
    assert metrics.has_metrics is False
    assert all(value is None for value in _derived_values(metrics).values())


def test_square_group_golden_values() -> None:
    """A unit square has known spreads, radii and deviations."""

    metrics = compute_group_metrics(_holes((0, 0), (1, 0), (0, 1), (1, 1)), 0.308)

    assert metrics.extreme_spread_ctc == pytest.approx(math.sqrt(2))
    assert metrics.horizontal_spread_ctc == 1.0
    assert metrics.vertical_spread_ctc == 1.0
    assert metrics.horizontal_spread_ete == pytest.approx(1.308)
    assert metrics.vertical_spread_ete == pytest.approx(1.308)
    assert metrics.mean_radius == pytest.approx(math.sqrt(0.5))
    assert metrics.radial_std_dev == pytest.approx(0.0, abs=1e-12)
    assert metrics.horizontal_std_dev == pytest.approx(0.5)
    assert metrics.vertical_std_dev == pytest.approx(0.5)
    assert metrics.cep50 == pytest.approx(math.sqrt(0.5))
    assert (metrics.poi_offset_x, metrics.poi_offset_y) == (0.5, 0.5)


def test_line_group_uses_population_deviation_and_upper_middle_rank() -> None:
    """Holes on the x axis around the origin give exact spreads and CEP50."""

    metrics = compute_group_metrics(_holes((-4, 0), (-1, 0), (2, 0), (3, 0)), 0.224)

    assert metrics.extreme_spread_ctc == 7.0
    assert metrics.vertical_spread_ctc == 0.0
    assert metrics.mean_radius == 2.5
    # Radii 1, 2, 3, 4: the upper of the two middle ranks.
    assert metrics.cep50 == 3.0
    # Population SD of x: sqrt(30 / 4).
    assert metrics.horizontal_std_dev == pytest.approx(math.sqrt(7.5))
    assert metrics.radial_std_dev == pytest.approx(math.sqrt(1.25))


def test_cep50_odd_count_uses_median_radius() -> None:
    metrics = compute_group_metrics(_holes((-4, 0), (-1, 0), (0, 0), (2, 0), (3, 0)), 0.308)

    assert metrics.cep50 == 2.0


def test_holes_on_a_circle_have_constant_radius() -> None:
    """Holes evenly spaced on a circle give mean radius r and zero radial SD."""

    radius = 1.5
    center = (0.3, -0.2)
    holes = [
        HolePosition(
            x=center[0] + radius * math.cos(2 * math.pi * step / 8),
            y=center[1] + radius * math.sin(2 * math.pi * step / 8),
        )
        for step in range(8)
    ]

    metrics = compute_group_metrics(holes, 0.308)

    assert metrics.mean_radius == pytest.approx(radius)
    assert metrics.radial_std_dev == pytest.approx(0.0, abs=1e-9)
    assert metrics.extreme_spread_ctc == pytest.approx(2 * radius)
    assert metrics.poi_offset_x == pytest.approx(center[0])
    assert metrics.poi_offset_y == pytest.approx(center[1])


def test_identical_holes_have_zero_dispersion() -> None:
    metrics = compute_group_metrics([HolePosition(x=1.0, y=-2.0)] * 5, 0.308)

    assert metrics.extreme_spread_ctc == 0.0
    assert metrics.horizontal_spread_ctc == 0.0
    assert metrics.vertical_spread_ctc == 0.0
    assert metrics.mean_radius == 0.0
    assert metrics.radial_std_dev == 0.0
    assert metrics.horizontal_std_dev == 0.0
    assert metrics.vertical_std_dev == 0.0
    assert metrics.cep50 == 0.0
    assert (metrics.poi_offset_x, metrics.poi_offset_y) == (1.0, -2.0)
    assert metrics.extreme_spread_ete == 0.308


@pytest.mark.parametrize(
    ("points", "diameter"),
    [
        (((0.12, 0.3), (-0.45, 0.61), (0.2, -0.33)), 0.308),
        (((1.1, 1.7), (-2.3, 0.4), (0.0, -1.9), (0.77, 0.05)), 0.224),
        (((-9.9, 9.9), (9.9, -9.9)), 0.5),
    ],
)
def test_edge_to_edge_adds_bullet_diameter_exactly(points: tuple[tuple[float, float], ...], diameter: float) -> None:
    metrics = compute_group_metrics(_holes(*points), diameter)

    assert metrics.extreme_spread_ete == metrics.extreme_spread_ctc + diameter
    assert metrics.horizontal_spread_ete == metrics.horizontal_spread_ctc + diameter
    assert metrics.vertical_spread_ete == metrics.vertical_spread_ctc + diameter


def test_metrics_do_not_depend_on_hole_order() -> None:
    holes = _holes((0.12, 0.3), (-0.45, 0.61), (0.2, -0.33), (0.9, 0.1), (-0.3, -0.8))

    forward = compute_group_metrics(holes, 0.308)
    backward = compute_group_metrics(list(reversed(holes)), 0.308)
    shuffled = compute_group_metrics([holes[i] for i in (3, 0, 4, 2, 1)], 0.308)

    assert forward == backward == shuffled


def test_calibration_metadata_is_carried_through() -> None:
    metrics = compute_group_metrics(
        _holes((0, 0), (0.5, 0.5)),
        0.308,
        calibration_method=CalibrationMethod.grid_detect,
        measurement_confidence=0.87,
    )

    assert metrics.calibration_method is CalibrationMethod.grid_detect
    assert metrics.calibration_method == "gridDetect"
    assert metrics.measurement_confidence == 0.87


def test_calibration_method_values_are_stable() -> None:
    assert [method.value for method in CalibrationMethod] == ["manual", "fiducial", "qrCode", "gridDetect"]


def test_extreme_spread_and_centroid_helpers() -> None:
    holes = _holes((0, 0), (3, 4), (1, 1))

    assert extreme_spread(holes) == 5.0
    assert extreme_spread(holes[:1]) == 0.0
    assert centroid(holes) == pytest.approx((4 / 3, 5 / 3))


def test_cep50_adding_a_hole_at_the_centroid_never_increases_it() -> None:
    """A hole at the centroid keeps the centroid fixed and adds the smallest radius."""

    base = _holes((1, 0), (-1, 0), (0, 2), (0, -2), (0.5, 0.5), (-0.5, -0.5))
    with_center_hole = [*base, HolePosition(x=0.0, y=0.0)]

    before = compute_group_metrics(base, 0.308)
    after = compute_group_metrics(with_center_hole, 0.308)

    assert (after.poi_offset_x, after.poi_offset_y) == (0.0, 0.0)
    assert after.cep50 <= before.cep50


def test_cep50_adding_far_holes_never_decreases_it() -> None:
    """A symmetric pair of far holes keeps the centroid fixed and adds large radii."""

    base = _holes((1, 0), (-1, 0), (0, 2), (0, -2), (0.5, 0.5))
    base = [*base, HolePosition(x=-0.5, y=-0.5)]
    with_fliers = [*base, HolePosition(x=5.0, y=5.0), HolePosition(x=-5.0, y=-5.0)]

    before = compute_group_metrics(base, 0.308)
    after = compute_group_metrics(with_fliers, 0.308)

    assert after.cep50 >= before.cep50


@pytest.mark.parametrize(
    "radii",
    [
        [0.4],
        [0.1, 0.9],
        [0.3, 0.1, 0.7],
        [0.25, 0.5, 0.75, 1.0],
        [1.2, 0.2, 0.6, 0.6, 0.9],
    ],
)
def test_cep50_rank_is_monotonic(radii: list[float]) -> None:
    """Adding a larger radius never lowers CEP50; adding a smaller one never raises it."""

    current = cep50(radii)

    assert cep50([*radii, current + 1.0]) >= current
    assert cep50([*radii, max(radii) + 5.0]) >= current
    assert cep50([*radii, 0.0]) <= current
