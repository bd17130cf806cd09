"""
Great-circle distance helpers for GolfTrack.

Distances use the Haversine formula on a spherical Earth and are
reported in whole yards, matching the on-course GPS panel.
"""

import math
from dataclasses import dataclass

from golftrack.models.course import Hole
from golftrack.models.shot import Coordinate
from golftrack.utils.constants import EARTH_RADIUS_M, METERS_TO_YARDS
from golftrack.utils.rounding import round_half_up


def calculate_distance(a: Coordinate, b: Coordinate) -> int:
    """Distance between two coordinates in whole yards.

    Inputs are not validated; out-of-range degrees still produce a
    finite result.
    """
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = (math.sin(d_phi / 2) ** 2
         + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2)
    # Float error can push h fractionally past 1 for antipodal points
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    meters = EARTH_RADIUS_M * c
    return round_half_up(meters * METERS_TO_YARDS)


@dataclass(frozen=True)
class HoleDistances:
    """Yardages from the player's position to the hole's anchors."""
    to_tee: int
    to_green: int


def hole_distances(position: Coordinate, hole: Hole) -> HoleDistances:
    """Distances from `position` to the tee and green of `hole`."""
    return HoleDistances(
        to_tee=calculate_distance(position, hole.tee_coordinates),
        to_green=calculate_distance(position, hole.green_coordinates),
    )


def distance_to_pin(position: Coordinate, hole: Hole) -> int:
    return calculate_distance(position, hole.green_coordinates)
