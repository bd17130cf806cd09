"""
Round model for GolfTrack.

A round is one trip around a course: the scorecard entries for each
hole plus the GPS-tracked shots recorded along the way.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from golftrack.analytics.derivation import derive_shot_distance, next_shot_number
from golftrack.analytics.stats import ShotStats, calculate_shot_stats
from golftrack.models.course import Hole
from golftrack.models.shot import Coordinate, Lie, Shot, parse_timestamp
from golftrack.utils.constants import (
    DEFAULT_APPROACH_CLUB,
    DEFAULT_APPROACH_LIE,
    DEFAULT_TEE_CLUB,
    DEFAULT_TEE_LIE,
    MAX_SHOT_DISTANCE,
)


@dataclass
class ScoreEntry:
    """Scorecard line for one hole."""
    hole_number: int
    par: int
    score: Optional[int] = None
    putts: Optional[int] = None
    fairway_hit: bool = False
    green_in_regulation: bool = False

    @property
    def to_par(self) -> Optional[int]:
        if self.score is None:
            return None
        return self.score - self.par

    def to_dict(self) -> dict:
        data = {
            "holeNumber": self.hole_number,
            "par": self.par,
            "fairwayHit": self.fairway_hit,
            "greenInRegulation": self.green_in_regulation,
        }
        if self.score is not None:
            data["score"] = self.score
        if self.putts is not None:
            data["putts"] = self.putts
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ScoreEntry":
        try:
            return cls(
                hole_number=int(data["holeNumber"]),
                par=int(data["par"]),
                score=data.get("score"),
                putts=data.get("putts"),
                fairway_hit=bool(data.get("fairwayHit", False)),
                green_in_regulation=bool(data.get("greenInRegulation", False)),
            )
        except KeyError as e:
            raise ValueError(f"Score entry is missing required field '{e.args[0]}'") from e


def format_to_par(value: int) -> str:
    """Scorecard notation: "E", "+3", "-1"."""
    if value == 0:
        return "E"
    return f"+{value}" if value > 0 else str(value)


@dataclass
class Round:
    """A round of golf with its scorecard and tracked shots.

    Attributes:
        course_name: Name of the course played.
        course_id: Identifier of the course.
        date: When the round was played.
        shots: GPS-tracked shots, in the order recorded.
        scores: Scorecard entries, one per hole.
        id: Unique identifier.
    """
    course_name: str
    course_id: str = ""
    date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    shots: list[Shot] = field(default_factory=list)
    scores: list[ScoreEntry] = field(default_factory=list)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    # -------------------------------------------------------------------------
    # Shot tracking
    # -------------------------------------------------------------------------

    def shots_for_hole(self, hole_number: int) -> list[Shot]:
        """Shots on a hole, ordered by shot number."""
        return sorted(
            (s for s in self.shots if s.hole_number == hole_number),
            key=lambda s: s.shot_number,
        )

    def record_shot(
        self,
        hole: Hole,
        coordinates: Coordinate,
        club: Optional[str] = None,
        lie: Optional[Lie | str] = None,
        max_distance: Optional[int] = MAX_SHOT_DISTANCE,
    ) -> Shot:
        """Record a shot that came to rest at `coordinates`.

        The shot number and distance are derived from the shots already
        on the hole. Without an explicit club/lie the tee shot defaults
        to Driver from the tee and later shots to 7-Iron from the fairway.
        """
        shot_number = next_shot_number(hole.hole_number, self.shots)
        distance = derive_shot_distance(hole, self.shots, coordinates, max_distance)
        if club is None:
            club = DEFAULT_TEE_CLUB if shot_number == 1 else DEFAULT_APPROACH_CLUB
        if lie is None:
            lie = DEFAULT_TEE_LIE if shot_number == 1 else DEFAULT_APPROACH_LIE

        shot = Shot(
            hole_number=hole.hole_number,
            shot_number=shot_number,
            coordinates=coordinates,
            club=club,
            distance=distance,
            lie=Lie(lie),
        )
        self.shots.append(shot)
        return shot

    def remove_shot(self, shot_id: str) -> bool:
        """Remove a shot by id, renumbering the later shots on its hole.

        Returns False if no such shot exists.
        """
        for i, shot in enumerate(self.shots):
            if shot.id == shot_id:
                del self.shots[i]
                # Keep the hole's shot numbers a contiguous run from 1
                for later in self.shots:
                    if (later.hole_number == shot.hole_number
                            and later.shot_number > shot.shot_number):
                        later.shot_number -= 1
                return True
        return False

    def get_stats(self) -> ShotStats:
        return calculate_shot_stats(self.shots)

    # -------------------------------------------------------------------------
    # Scorecard
    # -------------------------------------------------------------------------

    def get_score(self, hole_number: int) -> Optional[ScoreEntry]:
        for entry in self.scores:
            if entry.hole_number == hole_number:
                return entry
        return None

    def set_score(self, hole_number: int, par: int, **fields) -> ScoreEntry:
        """Create or update the scorecard entry for a hole.

        Accepts score, putts, fairway_hit and green_in_regulation.
        Scores below 1 are raised to 1.
        """
        entry = self.get_score(hole_number)
        if entry is None:
            entry = ScoreEntry(hole_number=hole_number, par=par)
            self.scores.append(entry)
            self.scores.sort(key=lambda e: e.hole_number)
        entry.par = par

        for name, value in fields.items():
            if not hasattr(entry, name) or name in ("hole_number", "par"):
                raise TypeError(f"Unknown score field '{name}'")
            if name == "score" and value is not None:
                value = max(1, int(value))
            setattr(entry, name, value)
        return entry

    @property
    def _played(self) -> list[ScoreEntry]:
        return [e for e in self.scores if e.score is not None]

    @property
    def holes_completed(self) -> int:
        return len(self._played)

    @property
    def total_score(self) -> int:
        return sum(e.score for e in self._played)

    @property
    def total_par(self) -> int:
        """Par of the holes that have a score."""
        return sum(e.par for e in self._played)

    @property
    def score_to_par(self) -> int:
        return self.total_score - self.total_par

    @property
    def to_par_label(self) -> str:
        return format_to_par(self.score_to_par)

    @property
    def total_putts(self) -> int:
        return sum(e.putts or 0 for e in self.scores)

    @property
    def fairways_hit(self) -> int:
        return sum(1 for e in self.scores if e.fairway_hit)

    @property
    def greens_in_regulation(self) -> int:
        return sum(1 for e in self.scores if e.green_in_regulation)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "courseId": self.course_id,
            "courseName": self.course_name,
            "date": self.date.isoformat(),
            "scores": [e.to_dict() for e in self.scores],
            "shots": [s.to_dict() for s in self.shots],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Round":
        try:
            return cls(
                id=str(data["id"]),
                course_id=str(data.get("courseId", "")),
                course_name=data["courseName"],
                date=parse_timestamp(data["date"]),
                scores=[ScoreEntry.from_dict(e) for e in data.get("scores", [])],
                shots=[Shot.from_dict(s) for s in data.get("shots", [])],
            )
        except KeyError as e:
            raise ValueError(f"Round is missing required field '{e.args[0]}'") from e
