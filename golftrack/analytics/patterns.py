"""
Shot pattern and trend analysis.

Patterns describe where shots finish and which clubs are hit from each
lie. Trends compare the most recent window of play (a week, month or
season) against the window immediately before it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from golftrack.analytics.stats import ShotStats, calculate_shot_stats
from golftrack.models.shot import Shot
from golftrack.utils.constants import (
    MEDIUM_SHOT_MAX,
    SHORT_SHOT_MAX,
    TREND_WINDOWS_MS,
)
from golftrack.utils.rounding import round_half_up


@dataclass
class ShotPatterns:
    """Lie and distance tendencies for a shot collection.

    Attributes:
        preferred_lies: Shot count per lie, in first-seen order.
        club_distribution_by_lie: lie -> club -> shot count.
        distance_ranges: Counts for "short" (<100), "medium" (100-199)
                         and "long" (200+) yard shots.
    """
    preferred_lies: dict[str, int] = field(default_factory=dict)
    club_distribution_by_lie: dict[str, dict[str, int]] = field(default_factory=dict)
    distance_ranges: dict[str, int] = field(
        default_factory=lambda: {"short": 0, "medium": 0, "long": 0}
    )


def distance_bucket(distance: int) -> str:
    if distance < SHORT_SHOT_MAX:
        return "short"
    if distance < MEDIUM_SHOT_MAX:
        return "medium"
    return "long"


def analyze_shot_patterns(shots: Iterable[Shot]) -> ShotPatterns:
    patterns = ShotPatterns()
    for shot in shots:
        lie = shot.lie.value
        patterns.preferred_lies[lie] = patterns.preferred_lies.get(lie, 0) + 1

        by_club = patterns.club_distribution_by_lie.setdefault(lie, {})
        by_club[shot.club] = by_club.get(shot.club, 0) + 1

        patterns.distance_ranges[distance_bucket(shot.distance)] += 1
    return patterns


@dataclass(frozen=True)
class LieShare:
    lie: str
    count: int
    percentage: int


def lie_distribution(shots: Iterable[Shot]) -> list[LieShare]:
    """Share of shots per lie, for the dashboard's pie chart."""
    shots = list(shots)
    counts = analyze_shot_patterns(shots).preferred_lies
    return [
        LieShare(lie, count, round_half_up(count / len(shots) * 100))
        for lie, count in counts.items()
    ]


@dataclass(frozen=True)
class PerformanceTrends:
    """Recent-versus-previous comparison. Changes are recent minus previous."""
    recent: ShotStats
    previous: ShotStats
    accuracy_change: int
    distance_change: int
    shots_change: int


def trend_window(name: str) -> timedelta:
    """Length of a named trend window.

    Raises:
        ValueError: For names other than week, month or season.
    """
    try:
        return timedelta(milliseconds=TREND_WINDOWS_MS[name])
    except KeyError:
        raise ValueError(
            f"Unknown trend window '{name}' "
            f"(expected one of: {', '.join(TREND_WINDOWS_MS)})"
        ) from None


def calculate_performance_trends(
    shots: Iterable[Shot],
    window: str = "week",
    now: Optional[datetime] = None,
) -> PerformanceTrends:
    """Compare the latest window of shots with the one before it.

    A shot is "recent" when it is younger than the window, and
    "previous" when its age is at least one window and at most two.
    Older shots are ignored.

    Args:
        shots: Shots to compare.
        window: "week" (7 days), "month" (30 days) or "season" (90 days).
        now: Reference time; defaults to the current UTC time. A naive
             value is taken as UTC.
    """
    length = trend_window(window)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    recent, previous = [], []
    for shot in shots:
        age = now - shot.timestamp
        if age < length:
            recent.append(shot)
        elif age <= 2 * length:
            previous.append(shot)

    recent_stats = calculate_shot_stats(recent)
    previous_stats = calculate_shot_stats(previous)
    return PerformanceTrends(
        recent=recent_stats,
        previous=previous_stats,
        accuracy_change=recent_stats.accuracy - previous_stats.accuracy,
        distance_change=recent_stats.average_distance - previous_stats.average_distance,
        shots_change=recent_stats.total_shots - previous_stats.total_shots,
    )
