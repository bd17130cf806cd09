"""
Shot distance derivation.

A new shot's distance is measured from the previous ball position on
the same hole: the tee for the first shot, otherwise the resting point
of the highest-numbered shot already recorded.
"""

from typing import Iterable, Optional

from golftrack.gps import calculate_distance
from golftrack.models.course import Hole
from golftrack.models.shot import Coordinate, Shot
from golftrack.utils.constants import MAX_SHOT_DISTANCE


def _hole_shots(hole_number: int, shots: Iterable[Shot]) -> list[Shot]:
    return [s for s in shots if s.hole_number == hole_number]


def next_shot_number(hole_number: int, prior_shots: Iterable[Shot]) -> int:
    """Shot number the next stroke on this hole will get."""
    return max((s.shot_number for s in _hole_shots(hole_number, prior_shots)),
               default=0) + 1


def derive_shot_distance(
    hole: Hole,
    prior_shots: Iterable[Shot],
    coordinates: Coordinate,
    max_distance: Optional[int] = MAX_SHOT_DISTANCE,
) -> int:
    """Distance in yards to attribute to a shot landing at `coordinates`.

    Args:
        hole: Hole being played (supplies the tee anchor).
        prior_shots: Shots recorded so far. Shots on other holes are ignored.
        coordinates: Where the new shot came to rest.
        max_distance: Cap applied to the result. None disables it.

    Returns:
        Whole yards from the previous ball position, capped.
    """
    on_hole = _hole_shots(hole.hole_number, prior_shots)
    if on_hole:
        previous = max(on_hole, key=lambda s: s.shot_number)
        distance = calculate_distance(coordinates, previous.coordinates)
    else:
        distance = calculate_distance(coordinates, hole.tee_coordinates)

    if max_distance is not None:
        distance = min(distance, max_distance)
    return distance
