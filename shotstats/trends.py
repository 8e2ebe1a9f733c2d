"""Velocity trends across chronograph sessions.

Sessions are summarized (round-weighted average velocity, mean SD/ES) and
average velocity is correlated against recorded conditions so a shooter can
see how temperature and density altitude move their load.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from statistics import StatisticsError, correlation, fmean, linear_regression
from typing import Final

MIN_CORRELATION_SESSIONS: Final[int] = 3


@dataclass(frozen=True, slots=True)
class ChronoSessionSummary:
    """Stored statistics for one chronograph session.

    Attributes:
        session_date: Date of the range session.
        average_velocity: Session average velocity (fps).
        standard_deviation: Session velocity SD (fps).
        extreme_spread: Session velocity ES (fps).
        rounds_fired: Number of readings in the session.
        temperature_f: Optional ambient temperature (°F).
        density_altitude_ft: Optional density altitude (ft).
    """

    session_date: date
    average_velocity: float
    standard_deviation: float
    extreme_spread: float
    rounds_fired: int
    temperature_f: float | None = None
    density_altitude_ft: float | None = None


@dataclass(frozen=True, slots=True)
class VelocityTrendAggregates:
    """Aggregates across all sessions in a trend."""

    overall_average_velocity: float
    overall_average_sd: float
    overall_average_es: float
    total_rounds_fired: int
    session_count: int
    velocity_high: float
    velocity_low: float


@dataclass(frozen=True, slots=True)
class VelocityCorrelation:
    """Correlation of average velocity against recorded conditions.

    Attributes:
        temperature_correlation: Pearson r against temperature, when known.
        velocity_per_degree_f: Regression slope in fps per °F.
        density_altitude_correlation: Pearson r against density altitude.
        velocity_per_1000ft_da: Regression slope in fps per 1000 ft of DA.
    """

    temperature_correlation: float | None = None
    velocity_per_degree_f: float | None = None
    density_altitude_correlation: float | None = None
    velocity_per_1000ft_da: float | None = None


@dataclass(frozen=True, slots=True)
class VelocityTrends:
    """Chronological sessions plus their aggregates and correlations."""

    sessions: tuple[ChronoSessionSummary, ...] = ()
    aggregates: VelocityTrendAggregates | None = None
    correlation: VelocityCorrelation | None = None


def analyze_velocity_trends(sessions: Iterable[ChronoSessionSummary]) -> VelocityTrends:
    """Summarize velocity behaviour across chronograph sessions.

    Args:
        sessions: Session summaries in any order.

    Returns:
        VelocityTrends with sessions sorted by date. Aggregates are None when
        there are no sessions; correlation is None when fewer than three
        sessions carry either temperature or density altitude.
    """

    ordered = tuple(sorted(sessions, key=lambda session: session.session_date))
    if not ordered:
        return VelocityTrends()
    return VelocityTrends(
        sessions=ordered,
        aggregates=aggregate_sessions(ordered),
        correlation=correlate_conditions(ordered),
    )


def aggregate_sessions(sessions: Sequence[ChronoSessionSummary]) -> VelocityTrendAggregates:
    """Aggregate a non-empty sequence of sessions.

    The overall velocity is weighted by rounds fired; SD and ES are plain
    means of the per-session values. When no rounds are recorded at all the
    overall velocity falls back to the unweighted mean.
    """

    total_rounds = sum(session.rounds_fired for session in sessions)
    averages = [session.average_velocity for session in sessions]
    if total_rounds > 0:
        overall = sum(s.average_velocity * s.rounds_fired for s in sessions) / total_rounds
    else:
        overall = fmean(averages)
    return VelocityTrendAggregates(
        overall_average_velocity=round(overall, 1),
        overall_average_sd=round(fmean(s.standard_deviation for s in sessions), 2),
        overall_average_es=round(fmean(s.extreme_spread for s in sessions), 1),
        total_rounds_fired=total_rounds,
        session_count=len(sessions),
        velocity_high=max(averages),
        velocity_low=min(averages),
    )


def correlate_conditions(sessions: Sequence[ChronoSessionSummary]) -> VelocityCorrelation | None:
    """Correlate average velocity with temperature and density altitude.

    Args:
        sessions: Session summaries.

    Returns:
        VelocityCorrelation with values rounded to 2 dp, or None when neither
        condition is present on at least three sessions.
    """

    with_temperature = [s for s in sessions if s.temperature_f is not None]
    with_density_altitude = [s for s in sessions if s.density_altitude_ft is not None]
    has_temperature = len(with_temperature) >= MIN_CORRELATION_SESSIONS
    has_density_altitude = len(with_density_altitude) >= MIN_CORRELATION_SESSIONS
    if not has_temperature and not has_density_altitude:
        return None

    temperature_r: float | None = None
    per_degree: float | None = None
    if has_temperature:
        r, slope = pearson_correlation(
            [float(s.temperature_f) for s in with_temperature],
            [s.average_velocity for s in with_temperature],
        )
        temperature_r, per_degree = round(r, 2), round(slope, 2)

    density_r: float | None = None
    per_1000ft: float | None = None
    if has_density_altitude:
        r, slope = pearson_correlation(
            [float(s.density_altitude_ft) for s in with_density_altitude],
            [s.average_velocity for s in with_density_altitude],
        )
        density_r, per_1000ft = round(r, 2), round(slope * 1000, 2)

    return VelocityCorrelation(
        temperature_correlation=temperature_r,
        velocity_per_degree_f=per_degree,
        density_altitude_correlation=density_r,
        velocity_per_1000ft_da=per_1000ft,
    )


def pearson_correlation(xs: Sequence[float], ys: Sequence[float]) -> tuple[float, float]:
    """Return Pearson's r and the least-squares slope of `ys` on `xs`.

    Args:
        xs: Independent values.
        ys: Dependent values, aligned with `xs`.

    Returns:
        `(r, slope)`. Mismatched or too-short inputs yield `(0.0, 0.0)`; a
        constant input yields 0.0 for whichever value is undefined.
    """

    if len(xs) != len(ys) or len(xs) < 2:
        return 0.0, 0.0
    try:
        r = correlation(xs, ys)
    except StatisticsError:
        r = 0.0
    try:
        slope = linear_regression(xs, ys).slope
    except StatisticsError:
        slope = 0.0
    return r, slope
