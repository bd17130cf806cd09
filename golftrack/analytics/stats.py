"""
Shot statistics for the analytics dashboard.

All functions here are pure: they take a shot collection and return a
fresh summary, and degrade to zero/empty values on empty input.
"""

from dataclasses import dataclass, asdict
from typing import Iterable, Optional, Protocol

from golftrack.models.shot import Shot
from golftrack.utils.rounding import round_half_up


@dataclass(frozen=True)
class ShotStats:
    """Summary of a shot collection.

    Attributes:
        total_shots: Number of shots.
        average_distance: Mean distance, whole yards.
        accuracy: Percentage of shots finishing on fairway or green.
        most_used_club: Club with the most shots ("" when empty).
        best_hole: Hole with the highest share of good shots (0 when empty).
        worst_hole: Hole with the lowest share of good shots (0 when empty).
    """
    total_shots: int = 0
    average_distance: int = 0
    accuracy: int = 0
    most_used_club: str = ""
    best_hole: int = 0
    worst_hole: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def accuracy_percent(shots: list[Shot]) -> int:
    """Percentage of shots whose lie is fairway or green."""
    if not shots:
        return 0
    good = sum(1 for s in shots if s.is_good)
    return round_half_up(good / len(shots) * 100)


def average_distance(shots: list[Shot]) -> int:
    if not shots:
        return 0
    return round_half_up(sum(s.distance for s in shots) / len(shots))


def club_usage(shots: Iterable[Shot]) -> dict[str, int]:
    """Shot count per club, in first-used order."""
    usage: dict[str, int] = {}
    for shot in shots:
        usage[shot.club] = usage.get(shot.club, 0) + 1
    return usage


def calculate_shot_stats(shots: Iterable[Shot]) -> ShotStats:
    """Compute summary statistics for a collection of shots."""
    shots = list(shots)
    if not shots:
        return ShotStats()

    usage = club_usage(shots)
    # max() keeps the first key on ties, i.e. the club used first
    most_used_club = max(usage, key=usage.get)

    # Per-hole share of good shots
    hole_totals: dict[int, list[int]] = {}
    for shot in shots:
        totals = hole_totals.setdefault(shot.hole_number, [0, 0])
        totals[0] += 1
        if shot.is_good:
            totals[1] += 1
    ratios = {hole: good / count for hole, (count, good) in hole_totals.items()}
    # Ties go to the lowest hole number
    ordered = sorted(ratios)
    best_hole = max(ordered, key=ratios.get)
    worst_hole = min(ordered, key=ratios.get)

    return ShotStats(
        total_shots=len(shots),
        average_distance=average_distance(shots),
        accuracy=accuracy_percent(shots),
        most_used_club=most_used_club,
        best_hole=best_hole,
        worst_hole=worst_hole,
    )


def filter_shots(
    shots: Iterable[Shot],
    club: Optional[str] = None,
    hole_number: Optional[int] = None,
) -> list[Shot]:
    """Restrict shots to one club and/or one hole. None means 'all'."""
    return [
        s for s in shots
        if (club is None or s.club == club)
        and (hole_number is None or s.hole_number == hole_number)
    ]


class _HasPar(Protocol):
    hole_number: int
    par: int


@dataclass(frozen=True)
class HolePerformance:
    """How many strokes a hole has taken across the rounds played."""
    hole_number: int
    par: int
    avg_shots: float
    best_score: int
    worst_score: int
    played_count: int


def calculate_hole_performance(
    shots: Iterable[Shot], holes: Iterable[_HasPar]
) -> list[HolePerformance]:
    """Per-hole stroke counts, one entry per hole that has shots.

    `holes` may be Hole or ScoreEntry objects; anything with
    `hole_number` and `par` works. Shots on holes missing from `holes`
    are skipped. Separate plays of a hole are split wherever the shot
    number restarts at 1.
    """
    pars = {h.hole_number: h.par for h in holes}

    by_hole: dict[int, list[Shot]] = {}
    for shot in shots:
        by_hole.setdefault(shot.hole_number, []).append(shot)

    results = []
    for hole_number, hole_shots in by_hole.items():
        if hole_number not in pars:
            continue

        plays: list[int] = []
        current = 0
        for shot in hole_shots:
            if shot.shot_number == 1 and current > 0:
                plays.append(current)
                current = 0
            current += 1
        if current > 0:
            plays.append(current)

        results.append(HolePerformance(
            hole_number=hole_number,
            par=pars[hole_number],
            avg_shots=round_half_up(sum(plays) / len(plays) * 10) / 10,
            best_score=min(plays),
            worst_score=max(plays),
            played_count=len(plays),
        ))
    return results
