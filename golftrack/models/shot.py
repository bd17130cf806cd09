"""
Data models for GPS-tracked shots in GolfTrack.

Coordinate: A latitude/longitude pair.
Lie: Surface the ball came to rest on.
Shot: One recorded stroke on a hole.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from golftrack.utils.constants import GOOD_LIES


@dataclass(frozen=True)
class Coordinate:
    """A point on the Earth's surface, in decimal degrees.

    Attributes:
        latitude: Degrees north (negative = south).
        longitude: Degrees east (negative = west).
    """
    latitude: float
    longitude: float

    @classmethod
    def from_dict(cls, data: dict) -> "Coordinate":
        """Build from the stored {"lat": .., "lng": ..} shape."""
        try:
            return cls(float(data["lat"]), float(data["lng"]))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid coordinates: {data!r}") from e

    def to_dict(self) -> dict:
        return {"lat": self.latitude, "lng": self.longitude}


class Lie(str, Enum):
    """Surface condition at a shot's resting point."""
    TEE = "tee"
    FAIRWAY = "fairway"
    ROUGH = "rough"
    SAND = "sand"
    GREEN = "green"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, treating naive values as UTC."""
    ts = datetime.fromisoformat(value)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Shot:
    """A single stroke recorded on the course.

    Attributes:
        hole_number: Hole this shot was played on (1-based).
        shot_number: Position within the hole (1 = tee shot).
        coordinates: Where the ball came to rest.
        club: Club label, free text (e.g. "Driver", "7-Iron").
        distance: Yards attributed to this shot.
        lie: Surface at the resting point.
        timestamp: When the shot was recorded (UTC).
        id: Unique identifier, assigned at creation.
    """
    hole_number: int
    shot_number: int
    coordinates: Coordinate
    club: str
    distance: int = 0
    lie: Lie = Lie.FAIRWAY
    timestamp: datetime = field(default_factory=_utc_now)
    id: str = field(default_factory=_new_id)

    def __post_init__(self):
        if not isinstance(self.lie, Lie):
            self.lie = Lie(self.lie)
        # Naive timestamps are taken as UTC
        if self.timestamp.tzinfo is None:
            self.timestamp = self.timestamp.replace(tzinfo=timezone.utc)

    @property
    def is_good(self) -> bool:
        """True when the ball finished on the fairway or green."""
        return self.lie.value in GOOD_LIES

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "holeNumber": self.hole_number,
            "shotNumber": self.shot_number,
            "coordinates": self.coordinates.to_dict(),
            "club": self.club,
            "distance": self.distance,
            "lie": self.lie.value,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Shot":
        """Build a Shot from its stored JSON shape."""
        try:
            return cls(
                id=str(data["id"]),
                hole_number=int(data["holeNumber"]),
                shot_number=int(data["shotNumber"]),
                coordinates=Coordinate.from_dict(data["coordinates"]),
                club=str(data["club"]),
                distance=int(data.get("distance", 0)),
                lie=Lie(data["lie"]),
                timestamp=parse_timestamp(data["timestamp"]),
            )
        except KeyError as e:
            raise ValueError(f"Shot is missing required field '{e.args[0]}'") from e
