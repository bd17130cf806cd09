"""Rounding helpers shared by the distance and analytics code."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up.

    Python's built-in round() uses banker's rounding (round(182.5) == 182);
    scorecards and dashboards expect 182.5 to show as 183.
    """
    return int(math.floor(value + 0.5))
