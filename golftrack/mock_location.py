"""
Mock GPS provider for development and testing.

Generates realistic position fixes around an anchor point without a
GPS receiver. Presets simulate good and weak reception, a golfer
walking the hole, and the failure modes a real device reports.

This is a first-class feature, not just a test utility: users can demo
the whole shot-tracking flow from a desk.
"""

import asyncio
import logging
import math
import random
from typing import Optional

from golftrack.location import (
    Fix,
    LocationProvider,
    PermissionDeniedError,
    PositionUnavailableError,
)
from golftrack.models.shot import Coordinate
from golftrack.utils.constants import METERS_PER_DEGREE_LAT

logger = logging.getLogger(__name__)


# Reception presets: (mean, std_dev) in metres / seconds
PRESETS = {
    "good_signal": {
        "description": "Open sky, consistent high-accuracy fixes",
        "accuracy": (4.0, 1.0),     # Reported accuracy (m)
        "jitter": 2.0,              # Position noise std dev (m)
        "latency": (0.0, 0.05),     # Delay before a fix (s)
        "walk_step": 0.0,           # Metres moved per fix
        "failure": None,
    },
    "weak_signal": {
        "description": "Tree cover, noisy fixes",
        "accuracy": (25.0, 8.0),
        "jitter": 15.0,
        "latency": (0.05, 0.2),
        "walk_step": 0.0,
        "failure": None,
    },
    "walking": {
        "description": "Golfer walking toward the green",
        "accuracy": (5.0, 1.5),
        "jitter": 2.0,
        "latency": (0.0, 0.05),
        "walk_step": 8.0,
        "failure": None,
    },
    "no_fix": {
        "description": "Receiver cannot determine a position",
        "accuracy": (0.0, 0.0),
        "jitter": 0.0,
        "latency": (0.0, 0.05),
        "walk_step": 0.0,
        "failure": "unavailable",
    },
    "denied": {
        "description": "User declined location access",
        "accuracy": (0.0, 0.0),
        "jitter": 0.0,
        "latency": (0.0, 0.0),
        "walk_step": 0.0,
        "failure": "denied",
    },
    "slow": {
        "description": "Cold start, fix takes longer than the default timeout",
        "accuracy": (10.0, 3.0),
        "jitter": 5.0,
        "latency": (20.0, 30.0),
        "walk_step": 0.0,
        "failure": None,
    },
}

# Bethpage Black, 1st tee
DEFAULT_ANCHOR = Coordinate(40.7451, -73.4540)


def offset_coordinate(origin: Coordinate, north_m: float, east_m: float) -> Coordinate:
    """Move `origin` by a small offset given in metres."""
    d_lat = north_m / METERS_PER_DEGREE_LAT
    d_lng = east_m / (METERS_PER_DEGREE_LAT * math.cos(math.radians(origin.latitude)))
    return Coordinate(origin.latitude + d_lat, origin.longitude + d_lng)


class MockLocationProvider(LocationProvider):
    """Simulated GPS receiver.

    Fixes scatter around the anchor with the preset's jitter. The
    "walking" preset also advances the anchor along `heading_deg` on
    every fix.
    """

    def __init__(
        self,
        anchor: Coordinate = DEFAULT_ANCHOR,
        preset: str = "good_signal",
        heading_deg: float = 0.0,
        seed: Optional[int] = None,
    ):
        """
        Args:
            anchor: Centre of the simulated fixes.
            preset: Reception preset name (see PRESETS).
            heading_deg: Walking direction, degrees clockwise from north.
            seed: Seed for reproducible fixes.
        """
        super().__init__()
        self._anchor = anchor
        self._preset_name = preset if preset in PRESETS else "good_signal"
        self._preset = PRESETS[self._preset_name]
        self._heading = math.radians(heading_deg)
        self._rng = random.Random(seed)
        self._fix_count = 0

    @property
    def preset(self) -> str:
        return self._preset_name

    def set_preset(self, preset: str):
        """Change the reception preset."""
        if preset in PRESETS:
            self._preset_name = preset
            self._preset = PRESETS[preset]
            logger.info(f"Mock GPS preset changed to: {preset}")

    def set_anchor(self, anchor: Coordinate):
        self._anchor = anchor

    async def _acquire_fix(self, enable_high_accuracy: bool) -> Fix:
        p = self._preset
        delay = self._rng.uniform(*p["latency"])
        if delay > 0:
            await asyncio.sleep(delay)

        if p["failure"] == "denied":
            raise PermissionDeniedError()
        if p["failure"] == "unavailable":
            raise PositionUnavailableError()

        if p["walk_step"]:
            self._anchor = offset_coordinate(
                self._anchor,
                p["walk_step"] * math.cos(self._heading),
                p["walk_step"] * math.sin(self._heading),
            )

        # Low-accuracy mode is noisier, as on a real receiver
        jitter = p["jitter"] if enable_high_accuracy else p["jitter"] * 3
        position = offset_coordinate(
            self._anchor,
            self._rng.gauss(0, jitter),
            self._rng.gauss(0, jitter),
        )
        acc_mean, acc_std = p["accuracy"]
        accuracy = max(1.0, self._rng.gauss(acc_mean, acc_std))

        self._fix_count += 1
        logger.debug(
            f"Mock fix #{self._fix_count}: "
            f"{position.latitude:.6f}, {position.longitude:.6f} "
            f"(±{accuracy:.0f} m, preset={self._preset_name})"
        )
        return Fix(position, round(accuracy, 1))
