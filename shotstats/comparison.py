"""Side-by-side comparison of ammunition types and lots.

Each candidate carries the chronograph sessions and measured groups recorded
with it. Candidates are summarized independently, then ranked to pick the most
consistent velocity, the tightest groups and the best-documented candidate.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from statistics import fmean
from typing import Final

DEFAULT_MAX_COMPARED: Final[int] = 5
MIN_LOTS_FOR_SPREAD: Final[int] = 2


@dataclass(frozen=True, slots=True)
class ChronoRecord:
    """Stored statistics for one chronograph session."""

    average_velocity: float
    rounds: int
    standard_deviation: float | None = None
    extreme_spread: float | None = None


@dataclass(frozen=True, slots=True)
class GroupRecord:
    """A measured group size in MOA at a known distance."""

    group_size_moa: float
    distance_yards: int


@dataclass(frozen=True, slots=True)
class ComparisonCandidate:
    """An ammunition type or lot together with its recorded data.

    Attributes:
        key: Caller-defined identifier (ammunition or lot id).
        name: Display label.
        chrono: Chronograph sessions recorded with this candidate.
        groups: Measured groups shot with this candidate.
    """

    key: int
    name: str
    chrono: tuple[ChronoRecord, ...] = ()
    groups: tuple[GroupRecord, ...] = ()


@dataclass(frozen=True, slots=True)
class VelocitySummary:
    """Velocity statistics pooled across sessions."""

    average_velocity: float
    average_sd: float
    average_es: float
    session_count: int
    total_rounds: int


@dataclass(frozen=True, slots=True)
class GroupSummary:
    """Group-size statistics pooled across measured groups."""

    average_group_size_moa: float
    best_group_size_moa: float
    group_count: int
    average_distance_yards: int


@dataclass(frozen=True, slots=True)
class ComparisonItem:
    """Summaries for one candidate; either may be None without data."""

    key: int
    name: str
    velocity: VelocitySummary | None
    groups: GroupSummary | None

    @property
    def data_points(self) -> int:
        """Total rounds chronographed plus groups measured."""

        rounds = self.velocity.total_rounds if self.velocity is not None else 0
        groups = self.groups.group_count if self.groups is not None else 0
        return rounds + groups


@dataclass(frozen=True, slots=True)
class AmmunitionComparison:
    """Comparison across ammunition types.

    Attributes:
        items: Per-candidate summaries in input order.
        best_velocity_consistency: Key with the lowest average SD.
        best_group_size: Key with the smallest average group (MOA).
        most_data_points: Key with the most rounds plus groups.
    """

    items: tuple[ComparisonItem, ...] = ()
    best_velocity_consistency: int | None = None
    best_group_size: int | None = None
    most_data_points: int | None = None


@dataclass(frozen=True, slots=True)
class LotComparison:
    """Comparison across lots of one ammunition type.

    Attributes:
        items: Per-lot summaries in input order.
        velocity_spread: Spread of lot average velocities (needs 2+ lots).
        best_lot_for_consistency: Lot key with the lowest average SD (needs
            2+ lots with velocity data).
        best_lot_for_groups: Lot key with the smallest average group.
    """

    items: tuple[ComparisonItem, ...] = ()
    velocity_spread: float | None = None
    best_lot_for_consistency: int | None = None
    best_lot_for_groups: int | None = None


def summarize_velocity(records: Iterable[ChronoRecord]) -> VelocitySummary | None:
    """Pool chronograph sessions into one velocity summary.

    Args:
        records: Chronograph sessions.

    Returns:
        VelocitySummary with a round-weighted average velocity, or None when
        there are no sessions. Missing SD/ES values count as 0.
    """

    sessions = tuple(records)
    if not sessions:
        return None

    total_rounds = sum(session.rounds for session in sessions)
    if total_rounds > 0:
        average = sum(s.average_velocity * s.rounds for s in sessions) / total_rounds
    else:
        average = fmean(s.average_velocity for s in sessions)
    return VelocitySummary(
        average_velocity=round(average, 1),
        average_sd=round(fmean(s.standard_deviation or 0.0 for s in sessions), 2),
        average_es=round(fmean(s.extreme_spread or 0.0 for s in sessions), 1),
        session_count=len(sessions),
        total_rounds=total_rounds,
    )


def summarize_groups(records: Iterable[GroupRecord]) -> GroupSummary | None:
    """Pool measured groups into one group-size summary, or None when empty."""

    groups = tuple(records)
    if not groups:
        return None
    sizes = [group.group_size_moa for group in groups]
    return GroupSummary(
        average_group_size_moa=round(fmean(sizes), 2),
        best_group_size_moa=round(min(sizes), 2),
        group_count=len(groups),
        average_distance_yards=round(fmean(group.distance_yards for group in groups)),
    )


def summarize_candidate(candidate: ComparisonCandidate) -> ComparisonItem:
    """Summarize one candidate's velocity and group data."""

    return ComparisonItem(
        key=candidate.key,
        name=candidate.name,
        velocity=summarize_velocity(candidate.chrono),
        groups=summarize_groups(candidate.groups),
    )


def compare_ammunition(
    candidates: Sequence[ComparisonCandidate],
    *,
    max_candidates: int = DEFAULT_MAX_COMPARED,
) -> AmmunitionComparison:
    """Compare ammunition types and pick the winners.

    Args:
        candidates: Ammunition types to compare.
        max_candidates: Largest number of candidates accepted at once.

    Returns:
        AmmunitionComparison. Ties go to the candidate listed first.

    Raises:
        ValueError: When more than `max_candidates` candidates are supplied.
    """

    if len(candidates) > max_candidates:
        raise ValueError(f"At most {max_candidates} ammunition types can be compared at once.")

    items = tuple(summarize_candidate(candidate) for candidate in candidates)
    with_velocity = [item for item in items if item.velocity is not None]
    with_groups = [item for item in items if item.groups is not None]

    return AmmunitionComparison(
        items=items,
        best_velocity_consistency=_lowest_sd(with_velocity),
        best_group_size=_smallest_group(with_groups),
        most_data_points=max(items, key=lambda item: item.data_points).key if items else None,
    )


def compare_lots(candidates: Sequence[ComparisonCandidate]) -> LotComparison:
    """Compare lots of a single ammunition type.

    Args:
        candidates: Lots to compare.

    Returns:
        LotComparison. Velocity spread and the consistency winner need at
        least two lots with velocity data.
    """

    items = tuple(summarize_candidate(candidate) for candidate in candidates)
    with_velocity = [item for item in items if item.velocity is not None]
    with_groups = [item for item in items if item.groups is not None]

    velocity_spread: float | None = None
    best_for_consistency: int | None = None
    if len(with_velocity) >= MIN_LOTS_FOR_SPREAD:
        velocities = [item.velocity.average_velocity for item in with_velocity]
        velocity_spread = round(max(velocities) - min(velocities), 1)
        best_for_consistency = _lowest_sd(with_velocity)

    return LotComparison(
        items=items,
        velocity_spread=velocity_spread,
        best_lot_for_consistency=best_for_consistency,
        best_lot_for_groups=_smallest_group(with_groups),
    )


def _lowest_sd(items: Sequence[ComparisonItem]) -> int | None:
    if not items:
        return None
    return min(items, key=lambda item: item.velocity.average_sd).key


def _smallest_group(items: Sequence[ComparisonItem]) -> int | None:
    if not items:
        return None
    return min(items, key=lambda item: item.groups.average_group_size_moa).key
