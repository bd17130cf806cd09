"""
Tests for shot statistics and hole performance.
"""

from golftrack.analytics.stats import (
    ShotStats,
    calculate_hole_performance,
    calculate_shot_stats,
    filter_shots,
)
from golftrack.models.round import ScoreEntry


class TestCalculateShotStats:
    """Tests for calculate_shot_stats()."""

    def test_empty(self):
        """No shots gives an all-zero result, not an error."""
        stats = calculate_shot_stats([])
        assert stats == ShotStats(
            total_shots=0, average_distance=0, accuracy=0,
            most_used_club="", best_hole=0, worst_hole=0,
        )

    def test_example_round(self, make_shot):
        shots = [
            make_shot(club="Driver", lie="fairway", distance=250),
            make_shot(club="Driver", lie="rough", distance=180),
            make_shot(club="7-Iron", lie="green", distance=120),
        ]
        stats = calculate_shot_stats(shots)
        assert stats.total_shots == 3
        assert stats.average_distance == 183
        assert stats.accuracy == 67
        assert stats.most_used_club == "Driver"

    def test_average_rounds_half_up(self, make_shot):
        shots = [make_shot(distance=182), make_shot(distance=183)]
        assert calculate_shot_stats(shots).average_distance == 183

    def test_most_used_club_tie_goes_to_first_used(self, make_shot):
        shots = [
            make_shot(club="7-Iron"),
            make_shot(club="Driver"),
            make_shot(club="Driver"),
            make_shot(club="7-Iron"),
        ]
        assert calculate_shot_stats(shots).most_used_club == "7-Iron"

    def test_best_and_worst_hole(self, make_shot):
        shots = [
            make_shot(hole_number=1, lie="fairway"),
            make_shot(hole_number=1, lie="green"),
            make_shot(hole_number=2, lie="rough"),
            make_shot(hole_number=2, lie="sand"),
            make_shot(hole_number=3, lie="fairway"),
            make_shot(hole_number=3, lie="rough"),
        ]
        stats = calculate_shot_stats(shots)
        assert stats.best_hole == 1
        assert stats.worst_hole == 2

    def test_hole_ties_go_to_lowest_number(self, make_shot):
        shots = [
            make_shot(hole_number=5, lie="green"),
            make_shot(hole_number=3, lie="green"),
        ]
        stats = calculate_shot_stats(shots)
        assert stats.best_hole == 3
        assert stats.worst_hole == 3

    def test_tee_lie_is_not_accurate(self, make_shot):
        shots = [make_shot(lie="tee"), make_shot(lie="sand")]
        assert calculate_shot_stats(shots).accuracy == 0

    def test_accepts_generator(self, make_shot):
        stats = calculate_shot_stats(make_shot() for _ in range(4))
        assert stats.total_shots == 4

    def test_to_dict(self, make_shot):
        d = calculate_shot_stats([make_shot(club="PW", distance=110)]).to_dict()
        assert d["most_used_club"] == "PW"
        assert d["average_distance"] == 110


class TestFilterShots:

    def test_no_filters_returns_all(self, make_shot):
        shots = [make_shot(), make_shot(club="Driver")]
        assert filter_shots(shots) == shots

    def test_club_and_hole(self, make_shot):
        match = make_shot(club="Driver", hole_number=2)
        shots = [
            make_shot(club="Driver", hole_number=1),
            match,
            make_shot(club="PW", hole_number=2),
        ]
        assert filter_shots(shots, club="Driver", hole_number=2) == [match]


class TestHolePerformance:
    """Tests for calculate_hole_performance()."""

    def test_plays_split_on_shot_number_restart(self, make_shot):
        """Two plays of hole 1 (3 strokes, then 2 strokes)."""
        shots = [
            make_shot(hole_number=1, shot_number=1),
            make_shot(hole_number=1, shot_number=2),
            make_shot(hole_number=1, shot_number=3),
            make_shot(hole_number=1, shot_number=1),
            make_shot(hole_number=1, shot_number=2),
        ]
        [perf] = calculate_hole_performance(shots, [ScoreEntry(1, par=4)])
        assert perf.hole_number == 1
        assert perf.par == 4
        assert perf.avg_shots == 2.5
        assert perf.best_score == 2
        assert perf.worst_score == 3
        assert perf.played_count == 2

    def test_unknown_holes_skipped(self, make_shot, hole):
        shots = [
            make_shot(hole_number=1, shot_number=1),
            make_shot(hole_number=9, shot_number=1),
        ]
        results = calculate_hole_performance(shots, [hole])
        assert [p.hole_number for p in results] == [1]

    def test_first_seen_order(self, make_shot):
        shots = [
            make_shot(hole_number=2, shot_number=1),
            make_shot(hole_number=1, shot_number=1),
        ]
        holes = [ScoreEntry(1, par=4), ScoreEntry(2, par=3)]
        results = calculate_hole_performance(shots, holes)
        assert [p.hole_number for p in results] == [2, 1]

    def test_empty(self, hole):
        assert calculate_hole_performance([], [hole]) == []
