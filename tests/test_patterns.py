"""
Tests for shot pattern and trend analysis.
"""

from datetime import datetime, timedelta, timezone

import pytest

from golftrack.analytics.patterns import (
    analyze_shot_patterns,
    calculate_performance_trends,
    distance_bucket,
    lie_distribution,
    trend_window,
)

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


class TestAnalyzeShotPatterns:
    """Tests for analyze_shot_patterns()."""

    def test_empty(self):
        patterns = analyze_shot_patterns([])
        assert patterns.preferred_lies == {}
        assert patterns.club_distribution_by_lie == {}
        assert patterns.distance_ranges == {"short": 0, "medium": 0, "long": 0}

    def test_lies_and_clubs(self, make_shot):
        shots = [
            make_shot(club="Driver", lie="fairway"),
            make_shot(club="Driver", lie="rough"),
            make_shot(club="7-Iron", lie="fairway"),
            make_shot(club="Driver", lie="fairway"),
        ]
        patterns = analyze_shot_patterns(shots)
        assert patterns.preferred_lies == {"fairway": 3, "rough": 1}
        assert patterns.club_distribution_by_lie == {
            "fairway": {"Driver": 2, "7-Iron": 1},
            "rough": {"Driver": 1},
        }

    def test_distance_thresholds(self, make_shot):
        shots = [make_shot(distance=d) for d in (0, 99, 100, 199, 200, 400)]
        ranges = analyze_shot_patterns(shots).distance_ranges
        assert ranges == {"short": 2, "medium": 2, "long": 2}

    def test_distance_bucket(self):
        assert distance_bucket(99) == "short"
        assert distance_bucket(100) == "medium"
        assert distance_bucket(200) == "long"


class TestLieDistribution:

    def test_percentages(self, make_shot):
        shots = [make_shot(lie="fairway")] * 2 + [make_shot(lie="sand")]
        shares = lie_distribution(shots)
        assert [(s.lie, s.count, s.percentage) for s in shares] == [
            ("fairway", 2, 67),
            ("sand", 1, 33),
        ]

    def test_empty(self):
        assert lie_distribution([]) == []


class TestPerformanceTrends:
    """Tests for calculate_performance_trends()."""

    def _shot_days_ago(self, make_shot, days, **kwargs):
        return make_shot(timestamp=NOW - timedelta(days=days), **kwargs)

    def test_week_partition(self, make_shot):
        shots = [
            self._shot_days_ago(make_shot, 6.9, lie="fairway", distance=200),
            self._shot_days_ago(make_shot, 7.1, lie="rough", distance=150),
            self._shot_days_ago(make_shot, 20, lie="green", distance=50),
        ]
        trends = calculate_performance_trends(shots, "week", now=NOW)
        assert trends.recent.total_shots == 1
        assert trends.previous.total_shots == 1
        assert trends.accuracy_change == 100
        assert trends.distance_change == 50
        assert trends.shots_change == 0

    def test_window_boundaries(self, make_shot):
        """Exactly one window old is 'previous'; exactly two windows is still 'previous'."""
        shots = [
            self._shot_days_ago(make_shot, 7),
            self._shot_days_ago(make_shot, 14),
        ]
        trends = calculate_performance_trends(shots, "week", now=NOW)
        assert trends.recent.total_shots == 0
        assert trends.previous.total_shots == 2

    def test_month_and_season(self, make_shot):
        shots = [self._shot_days_ago(make_shot, 45)]
        month = calculate_performance_trends(shots, "month", now=NOW)
        season = calculate_performance_trends(shots, "season", now=NOW)
        assert month.previous.total_shots == 1
        assert season.recent.total_shots == 1

    def test_empty(self):
        trends = calculate_performance_trends([], now=NOW)
        assert trends.recent.total_shots == 0
        assert trends.accuracy_change == 0
        assert trends.distance_change == 0
        assert trends.shots_change == 0

    def test_defaults_to_current_time(self, make_shot):
        shot = make_shot(timestamp=datetime.now(timezone.utc) - timedelta(hours=1))
        trends = calculate_performance_trends([shot])
        assert trends.recent.total_shots == 1

    def test_naive_timestamps_taken_as_utc(self, make_shot):
        shots = [make_shot(timestamp=datetime(2026, 10, 16, 12, 0))]
        trends = calculate_performance_trends(shots, "week", now=NOW)
        assert trends.recent.total_shots == 1

        naive_now = datetime(2026, 10, 17, 12, 0)
        trends = calculate_performance_trends(shots, "week", now=naive_now)
        assert trends.recent.total_shots == 1

    def test_unknown_window(self):
        with pytest.raises(ValueError, match="fortnight"):
            calculate_performance_trends([], "fortnight", now=NOW)

    def test_window_lengths(self):
        assert trend_window("week") == timedelta(days=7)
        assert trend_window("month") == timedelta(days=30)
        assert trend_window("season") == timedelta(days=90)
