"""
Per-club performance breakdown.
"""

from dataclasses import dataclass, asdict
from typing import Iterable

import numpy as np

from golftrack.analytics.stats import accuracy_percent
from golftrack.models.shot import Shot
from golftrack.utils.rounding import round_half_up


@dataclass(frozen=True)
class ClubPerformance:
    """Distance and accuracy figures for one club.

    Attributes:
        club: Club label.
        avg_distance: Mean distance, whole yards.
        min_distance: Shortest shot (yards).
        max_distance: Longest shot (yards).
        accuracy: Percentage of shots finishing on fairway or green.
        usage: Number of shots hit with the club.
        consistency: 0-100, higher means tighter distance grouping.
    """
    club: str
    avg_distance: int
    min_distance: int
    max_distance: int
    accuracy: int
    usage: int
    consistency: int

    def to_dict(self) -> dict:
        return asdict(self)


def consistency_score(distances: np.ndarray, avg_distance: int) -> int:
    """100 minus the coefficient of variation (as a percentage), floored at 0.

    The spread is the population standard deviation about the rounded
    average. A zero average has no meaningful spread and scores 0.
    """
    if avg_distance == 0:
        return 0
    std = float(np.sqrt(np.mean((distances - avg_distance) ** 2)))
    return max(0, 100 - round_half_up(std / avg_distance * 100))


def analyze_club_performance(shots: Iterable[Shot]) -> list[ClubPerformance]:
    """One ClubPerformance per club, most-used first.

    Clubs with equal usage keep the order they were first used in.
    """
    groups: dict[str, list[Shot]] = {}
    for shot in shots:
        groups.setdefault(shot.club, []).append(shot)

    results = []
    for club, club_shots in groups.items():
        distances = np.array([s.distance for s in club_shots], dtype=float)
        avg = round_half_up(float(distances.mean()))
        results.append(ClubPerformance(
            club=club,
            avg_distance=avg,
            min_distance=int(distances.min()),
            max_distance=int(distances.max()),
            accuracy=accuracy_percent(club_shots),
            usage=len(club_shots),
            consistency=consistency_score(distances, avg),
        ))

    # sorted() is stable, so ties stay in first-used order
    return sorted(results, key=lambda p: p.usage, reverse=True)
