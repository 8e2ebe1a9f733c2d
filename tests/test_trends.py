"""Tests for velocity trends across chronograph sessions."""

from __future__ import annotations

from datetime import date

import pytest

from shotstats.trends import ChronoSessionSummary, analyze_velocity_trends, pearson_correlation

pytestmark = pytest.mark.unit


def _session(day: int, average: float, rounds: int, **conditions: float) -> ChronoSessionSummary:
    return ChronoSessionSummary(
        session_date=date(2025, 6, day),
        average_velocity=average,
        standard_deviation=8.0 + day,
        extreme_spread=20.0 + day,
        rounds_fired=rounds,
        **conditions,
    )


def test_sessions_are_sorted_by_date() -> None:
    trends = analyze_velocity_trends([_session(3, 2800, 5), _session(1, 2790, 5), _session(2, 2810, 5)])

    assert [session.session_date.day for session in trends.sessions] == [1, 2, 3]


def test_aggregates_weight_velocity_by_rounds() -> None:
    """The overall average counts each round, not each session."""

    trends = analyze_velocity_trends([_session(1, 2850, 10), _session(2, 2900, 10), _session(3, 2950, 0)])

    aggregates = trends.aggregates
    assert aggregates is not None
    assert aggregates.overall_average_velocity == 2875.0
    assert aggregates.total_rounds_fired == 20
    assert aggregates.session_count == 3
    assert aggregates.velocity_high == 2950
    assert aggregates.velocity_low == 2850
    assert aggregates.overall_average_sd == 10.0
    assert aggregates.overall_average_es == 22.0


def test_aggregates_fall_back_to_plain_mean_without_rounds() -> None:
    trends = analyze_velocity_trends([_session(1, 2800, 0), _session(2, 2900, 0)])

    assert trends.aggregates.overall_average_velocity == 2850.0


def test_temperature_correlation_and_slope() -> None:
    """Velocity rising one fps per degree gives r = 1 and slope 1."""

    trends = analyze_velocity_trends(
        [
            _session(1, 2800, 5, temperature_f=50),
            _session(2, 2820, 5, temperature_f=70),
            _session(3, 2840, 5, temperature_f=90),
        ]
    )

    correlation = trends.correlation
    assert correlation is not None
    assert correlation.temperature_correlation == 1.0
    assert correlation.velocity_per_degree_f == 1.0
    assert correlation.density_altitude_correlation is None
    assert correlation.velocity_per_1000ft_da is None


def test_density_altitude_slope_is_per_thousand_feet() -> None:
    trends = analyze_velocity_trends(
        [
            _session(1, 2800, 5, density_altitude_ft=1000),
            _session(2, 2790, 5, density_altitude_ft=2000),
            _session(3, 2780, 5, density_altitude_ft=3000),
        ]
    )

    assert trends.correlation.density_altitude_correlation == -1.0
    assert trends.correlation.velocity_per_1000ft_da == -10.0


def test_correlation_needs_three_sessions_with_conditions() -> None:
    trends = analyze_velocity_trends(
        [
            _session(1, 2800, 5, temperature_f=50),
            _session(2, 2820, 5, temperature_f=70),
            _session(3, 2840, 5),
        ]
    )

    assert trends.correlation is None


def test_no_sessions_yields_empty_trends() -> None:
    trends = analyze_velocity_trends([])

    assert trends.sessions == ()
    assert trends.aggregates is None
    assert trends.correlation is None


@pytest.mark.parametrize(
    ("xs", "ys"),
    [
        ([1.0], [2.0]),
        ([1.0, 2.0], [3.0]),
        ([], []),
    ],
)
def test_pearson_correlation_rejects_short_or_mismatched_input(xs: list[float], ys: list[float]) -> None:
    assert pearson_correlation(xs, ys) == (0.0, 0.0)


def test_pearson_correlation_constant_input_is_zero() -> None:
    """A constant series has no defined correlation; 0.0 is reported."""

    r, slope = pearson_correlation([60.0, 60.0, 60.0], [2800.0, 2810.0, 2820.0])

    assert r == 0.0
    assert slope == 0.0
