"""
Tests for great-circle distance helpers.

Validates:
  - Haversine distance is symmetric and zero for identical points
  - Known distances along a meridian and across the globe
  - Tee/green yardages from a position on a hole
"""

import math

from golftrack.gps import calculate_distance, distance_to_pin, hole_distances
from golftrack.models.shot import Coordinate


class TestCalculateDistance:
    """Tests for calculate_distance()."""

    def test_identity(self):
        """Distance from a point to itself is zero."""
        c = Coordinate(40.7451, -73.4540)
        assert calculate_distance(c, c) == 0

    def test_symmetry(self):
        """distance(a, b) == distance(b, a)."""
        pairs = [
            (Coordinate(40.0, -73.0), Coordinate(40.002, -72.998)),
            (Coordinate(-33.9, 151.2), Coordinate(51.5, -0.12)),
            (Coordinate(0.0, 179.9), Coordinate(0.0, -179.9)),
        ]
        for a, b in pairs:
            assert calculate_distance(a, b) == calculate_distance(b, a)

    def test_known_meridian_distance(self):
        """0.001° of latitude at the equator is about 121.6 yards."""
        a = Coordinate(0.0, 0.0)
        b = Coordinate(0.001, 0.0)
        assert calculate_distance(a, b) == 122

    def test_returns_int(self):
        d = calculate_distance(Coordinate(40.0, -73.0), Coordinate(40.001, -73.001))
        assert isinstance(d, int)

    def test_antipodal_is_finite(self):
        """Opposite sides of the globe give half the circumference, no error."""
        d = calculate_distance(Coordinate(0.0, 0.0), Coordinate(0.0, 180.0))
        expected = math.pi * 6_371_000 * 1.094
        assert abs(d - expected) <= 1

    def test_out_of_range_input_does_not_raise(self):
        d = calculate_distance(Coordinate(95.0, 200.0), Coordinate(-95.0, -200.0))
        assert d >= 0

    def test_longitude_shrinks_with_latitude(self):
        """A degree of longitude is shorter further from the equator."""
        at_equator = calculate_distance(Coordinate(0.0, 0.0), Coordinate(0.0, 0.01))
        at_60 = calculate_distance(Coordinate(60.0, 0.0), Coordinate(60.0, 0.01))
        assert at_60 < at_equator
        assert abs(at_60 - at_equator / 2) <= 1


class TestHoleDistances:
    """Tests for yardages to the hole's anchors."""

    def test_from_tee(self, hole):
        d = hole_distances(hole.tee_coordinates, hole)
        assert d.to_tee == 0
        assert d.to_green == 365

    def test_from_fairway(self, hole):
        position = Coordinate(40.001, -73.0)
        d = hole_distances(position, hole)
        assert d.to_tee == calculate_distance(position, hole.tee_coordinates)
        assert d.to_green == distance_to_pin(position, hole)
        assert d.to_tee < d.to_green
