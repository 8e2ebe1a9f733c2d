"""DOPE chart aggregation.

Logged elevation/windage corrections (in MIL) are grouped by distance and laid
out on a regular distance grid for charting. Grid points without logged data
are linearly interpolated from close neighbours when possible.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from statistics import fmean, pstdev
from typing import Final

DOPE_DECIMALS: Final[int] = 3
DEFAULT_START_YARDS: Final[int] = 100
DEFAULT_INTERVAL_YARDS: Final[int] = 50
DEFAULT_MAX_GAP_YARDS: Final[int] = 100


class DataSource(StrEnum):
    """Where a chart point's values came from."""

    direct = "direct"
    interpolated = "interpolated"
    no_data = "no_data"


@dataclass(frozen=True, slots=True)
class DopeEntry:
    """A single logged correction.

    Attributes:
        distance_yards: Target distance in yards.
        elevation_mils: Elevation correction in MIL.
        windage_mils: Windage correction in MIL.
    """

    distance_yards: int
    elevation_mils: float
    windage_mils: float


@dataclass(frozen=True, slots=True)
class DopeDistanceSummary:
    """Aggregated corrections for one distance."""

    distance_yards: int
    average_elevation: float
    elevation_std_dev: float
    average_windage: float
    windage_std_dev: float
    count: int


@dataclass(frozen=True, slots=True)
class DopeDataPoint:
    """A chart point on the distance grid.

    Attributes:
        distance_yards: Grid distance.
        elevation_mils: Mean (or interpolated) elevation, 0 when no data.
        elevation_mils_std_dev: Population SD of elevation; 0 unless direct.
        windage_mils: Mean (or interpolated) windage, 0 when no data.
        windage_mils_std_dev: Population SD of windage; 0 unless direct.
        session_count: Number of logged entries at this distance.
        data_source: Whether the point is direct, interpolated or empty.
    """

    distance_yards: int
    elevation_mils: float
    elevation_mils_std_dev: float
    windage_mils: float
    windage_mils_std_dev: float
    session_count: int
    data_source: DataSource


def summarize_by_distance(entries: Iterable[DopeEntry]) -> dict[int, DopeDistanceSummary]:
    """Group entries by distance and compute mean and population SD.

    Args:
        entries: Logged DOPE entries.

    Returns:
        Mapping of distance (yards) to its summary, ordered by distance.
    """

    grouped: dict[int, list[DopeEntry]] = defaultdict(list)
    for entry in entries:
        grouped[entry.distance_yards].append(entry)

    summaries: dict[int, DopeDistanceSummary] = {}
    for distance in sorted(grouped):
        rows = grouped[distance]
        elevations = [row.elevation_mils for row in rows]
        windages = [row.windage_mils for row in rows]
        summaries[distance] = DopeDistanceSummary(
            distance_yards=distance,
            average_elevation=fmean(elevations),
            elevation_std_dev=pstdev(elevations) if len(rows) > 1 else 0.0,
            average_windage=fmean(windages),
            windage_std_dev=pstdev(windages) if len(rows) > 1 else 0.0,
            count=len(rows),
        )
    return summaries


def build_dope_chart(
    entries: Iterable[DopeEntry],
    *,
    start_yards: int = DEFAULT_START_YARDS,
    interval_yards: int = DEFAULT_INTERVAL_YARDS,
    max_gap_yards: int = DEFAULT_MAX_GAP_YARDS,
) -> tuple[DopeDataPoint, ...]:
    """Lay DOPE data out on a regular distance grid.

    Args:
        entries: Logged DOPE entries.
        start_yards: First grid distance.
        interval_yards: Grid spacing in yards.
        max_gap_yards: Largest distance to either neighbour that still allows
            interpolation.

    Returns:
        Chart points from `start_yards` to the farthest logged distance, or an
        empty tuple when there are no entries.

    Raises:
        ValueError: When `interval_yards` is not positive.
    """

    if interval_yards <= 0:
        raise ValueError(f"interval_yards must be positive, got {interval_yards}.")

    summaries = summarize_by_distance(entries)
    if not summaries:
        return ()

    points: list[DopeDataPoint] = []
    for distance in range(start_yards, max(summaries) + 1, interval_yards):
        summary = summaries.get(distance)
        if summary is not None:
            points.append(
                DopeDataPoint(
                    distance_yards=distance,
                    elevation_mils=round(summary.average_elevation, DOPE_DECIMALS),
                    elevation_mils_std_dev=round(summary.elevation_std_dev, DOPE_DECIMALS),
                    windage_mils=round(summary.average_windage, DOPE_DECIMALS),
                    windage_mils_std_dev=round(summary.windage_std_dev, DOPE_DECIMALS),
                    session_count=summary.count,
                    data_source=DataSource.direct,
                )
            )
            continue

        interpolated = interpolate_point(distance, summaries, max_gap_yards=max_gap_yards)
        points.append(interpolated if interpolated is not None else _empty_point(distance))
    return tuple(points)


def interpolate_point(
    distance_yards: int,
    summaries: Mapping[int, DopeDistanceSummary],
    *,
    max_gap_yards: int = DEFAULT_MAX_GAP_YARDS,
) -> DopeDataPoint | None:
    """Linearly interpolate a chart point between its nearest neighbours.

    Args:
        distance_yards: Distance to interpolate.
        summaries: Per-distance summaries with direct data.
        max_gap_yards: Largest allowed distance to either neighbour.

    Returns:
        An interpolated DopeDataPoint, or None when a neighbour is missing or
        too far away.
    """

    lower = max((d for d in summaries if 0 < d < distance_yards), default=None)
    higher = min((d for d in summaries if d > distance_yards), default=None)
    if lower is None or higher is None:
        return None
    if distance_yards - lower > max_gap_yards or higher - distance_yards > max_gap_yards:
        return None

    below = summaries[lower]
    above = summaries[higher]
    ratio = (distance_yards - lower) / (higher - lower)
    elevation = below.average_elevation + ratio * (above.average_elevation - below.average_elevation)
    windage = below.average_windage + ratio * (above.average_windage - below.average_windage)
    return DopeDataPoint(
        distance_yards=distance_yards,
        elevation_mils=round(elevation, DOPE_DECIMALS),
        elevation_mils_std_dev=0.0,
        windage_mils=round(windage, DOPE_DECIMALS),
        windage_mils_std_dev=0.0,
        session_count=0,
        data_source=DataSource.interpolated,
    )


def _empty_point(distance_yards: int) -> DopeDataPoint:
    """Return the placeholder point for a grid distance with no usable data."""

    return DopeDataPoint(
        distance_yards=distance_yards,
        elevation_mils=0.0,
        elevation_mils_std_dev=0.0,
        windage_mils=0.0,
        windage_mils_std_dev=0.0,
        session_count=0,
        data_source=DataSource.no_data,
    )
