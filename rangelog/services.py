"""Service-layer functions for the rangelog app.

Services validate raw measurement payloads with Django forms, hand the cleaned
samples to the pure `shotstats` package and return its DTOs. Nothing here
persists data; callers decide what to store.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Final

from django import forms
from django.conf import settings

from rangelog.forms import ChronoReadingsForm, GroupMeasurementForm
from shotstats.comparison import (
    AmmunitionComparison,
    ComparisonCandidate,
    LotComparison,
    compare_ammunition,
    compare_lots,
)
from shotstats.dope import DopeDataPoint, DopeEntry, build_dope_chart
from shotstats.dto import GroupDispersionMetrics, HolePosition, VelocityStatistics
from shotstats.geometry import compute_group_metrics
from shotstats.trends import ChronoSessionSummary, VelocityTrends, analyze_velocity_trends
from shotstats.units import inches_to_moa
from shotstats.velocity import compute_velocity_stats

logger = logging.getLogger(__name__)

MOA_DECIMALS: Final[int] = 3


class MeasurementInputError(ValueError):
    """Raised when a measurement payload fails validation."""

    def __init__(self, *, errors: dict[str, list[str]]) -> None:
        """Initialize the error.

        Args:
            errors: Validation messages keyed by field name.
        """

        summary = "; ".join(f"{field}: {' '.join(messages)}" for field, messages in errors.items())
        super().__init__(f"Invalid measurement input ({summary}).")
        self.errors = errors


@dataclass(frozen=True, slots=True)
class GroupMeasurementReport:
    """Dispersion metrics plus MOA conversions at the group's distance.

    Attributes:
        holes: Validated hole positions, in submission order.
        metrics: Dispersion metrics computed by `shotstats`.
        distance_yards: Target distance, when supplied.
        extreme_spread_ctc_moa: Center-to-center extreme spread in MOA.
        extreme_spread_ete_moa: Edge-to-edge extreme spread in MOA.
        mean_radius_moa: Mean radius in MOA.
    """

    holes: tuple[HolePosition, ...]
    metrics: GroupDispersionMetrics
    distance_yards: int | None
    extreme_spread_ctc_moa: float | None = None
    extreme_spread_ete_moa: float | None = None
    mean_radius_moa: float | None = None


def measure_group(payload: Mapping[str, object]) -> GroupMeasurementReport:
    """Validate a group payload and compute its dispersion metrics.

    Args:
        payload: Raw mapping with `holes` (list of `{x, y}`), `bullet_diameter`
            and optionally `calibration_method`, `measurement_confidence` and
            `distance_yards`.

    Returns:
        GroupMeasurementReport. MOA values are None when no distance was given.

    Raises:
        MeasurementInputError: When the payload fails validation.
    """

    form = GroupMeasurementForm(data=payload)
    cleaned = _clean(form, kind="group")

    holes: list[HolePosition] = cleaned["holes"]
    distance: int | None = cleaned.get("distance_yards")
    metrics = compute_group_metrics(
        holes,
        cleaned["bullet_diameter"],
        calibration_method=cleaned["calibration_method"],
        measurement_confidence=cleaned.get("measurement_confidence"),
    )
    report = GroupMeasurementReport(
        holes=tuple(holes),
        metrics=metrics,
        distance_yards=distance,
        extreme_spread_ctc_moa=_to_moa(metrics.extreme_spread_ctc, distance),
        extreme_spread_ete_moa=_to_moa(metrics.extreme_spread_ete, distance),
        mean_radius_moa=_to_moa(metrics.mean_radius, distance),
    )
    logger.info(
        "Measured group: holes=%d es_ctc=%s mean_radius=%s cep50=%s distance=%s method=%s",
        len(holes),
        metrics.extreme_spread_ctc,
        metrics.mean_radius,
        metrics.cep50,
        distance,
        metrics.calibration_method,
    )
    return report


def summarize_chrono(payload: Mapping[str, object]) -> VelocityStatistics:
    """Validate chronograph readings and compute velocity statistics.

    Args:
        payload: Raw mapping with `velocities` (list of fps readings) and an
            optional `barrel_temperature`.

    Returns:
        VelocityStatistics for the readings.

    Raises:
        MeasurementInputError: When the payload fails validation.
    """

    form = ChronoReadingsForm(data=payload)
    cleaned = _clean(form, kind="chrono")
    stats = compute_velocity_stats(cleaned["velocities"])
    logger.info(
        "Summarized chrono string: count=%d average=%s sd=%s es=%s",
        stats.count,
        stats.average,
        stats.standard_deviation,
        stats.extreme_spread,
    )
    return stats


def dope_chart(entries: Iterable[DopeEntry]) -> tuple[DopeDataPoint, ...]:
    """Build a DOPE chart using the configured grid interval and gap limit."""

    return build_dope_chart(
        entries,
        interval_yards=settings.TRUEDOPE_DOPE_INTERVAL_YARDS,
        max_gap_yards=settings.TRUEDOPE_DOPE_MAX_INTERPOLATION_GAP_YARDS,
    )


def compare_ammunition_types(candidates: Sequence[ComparisonCandidate]) -> AmmunitionComparison:
    """Compare ammunition types, enforcing the configured candidate limit.

    Raises:
        MeasurementInputError: When too many candidates are supplied.
    """

    try:
        return compare_ammunition(candidates, max_candidates=settings.TRUEDOPE_MAX_COMPARED_AMMUNITION)
    except ValueError as exc:
        logger.warning("Rejected ammunition comparison: %s", exc)
        raise MeasurementInputError(errors={"candidates": [str(exc)]}) from exc


def velocity_trends(sessions: Iterable[ChronoSessionSummary]) -> VelocityTrends:
    """Summarize velocity trends across stored chronograph sessions.

    Args:
        sessions: Session summaries in any order.

    Returns:
        VelocityTrends with sessions sorted by date.
    """

    trends = analyze_velocity_trends(sessions)
    aggregates = trends.aggregates
    logger.info(
        "Analyzed velocity trends: sessions=%d overall_average=%s correlated=%s",
        len(trends.sessions),
        aggregates.overall_average_velocity if aggregates is not None else None,
        trends.correlation is not None,
    )
    return trends


def compare_lot_types(candidates: Sequence[ComparisonCandidate]) -> LotComparison:
    """Compare lots of one ammunition type and log the winners."""

    comparison = compare_lots(candidates)
    logger.info(
        "Compared lots: lots=%d velocity_spread=%s best_consistency=%s best_groups=%s",
        len(comparison.items),
        comparison.velocity_spread,
        comparison.best_lot_for_consistency,
        comparison.best_lot_for_groups,
    )
    return comparison


def _clean(form: forms.Form, *, kind: str) -> dict[str, object]:
    """Return cleaned data, or log and raise MeasurementInputError."""

    if form.is_valid():
        return form.cleaned_data
    errors = {field: [str(message) for message in messages] for field, messages in form.errors.items()}
    logger.warning("Rejected %s input: %s", kind, errors)
    raise MeasurementInputError(errors=errors)


def _to_moa(inches: float | None, distance_yards: int | None) -> float | None:
    """Convert inches to MOA at the distance, rounded; None when either is missing."""

    if inches is None or distance_yards is None:
        return None
    return round(inches_to_moa(inches, distance_yards), MOA_DECIMALS)
