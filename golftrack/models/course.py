"""
Course and hole definitions for GolfTrack.

A hole supplies the tee and green anchors that shot distances are
measured from. Courses are loaded from JSON in the same shape the
course downloader produced.
"""

from dataclasses import dataclass, field
from typing import Optional

from golftrack.models.shot import Coordinate


@dataclass(frozen=True)
class Hole:
    """A single hole on a course.

    Attributes:
        hole_number: 1-based hole number.
        par: Par for the hole.
        tee_coordinates: Tee box position.
        green_coordinates: Centre of the green (used as the pin).
        distance: Card yardage, if known.
    """
    hole_number: int
    par: int
    tee_coordinates: Coordinate
    green_coordinates: Coordinate
    distance: Optional[int] = None

    def to_dict(self) -> dict:
        data = {
            "holeNumber": self.hole_number,
            "par": self.par,
            "teeCoords": self.tee_coordinates.to_dict(),
            "greenCoords": self.green_coordinates.to_dict(),
        }
        if self.distance is not None:
            data["distance"] = self.distance
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Hole":
        try:
            return cls(
                hole_number=int(data["holeNumber"]),
                par=int(data["par"]),
                tee_coordinates=Coordinate.from_dict(data["teeCoords"]),
                green_coordinates=Coordinate.from_dict(data["greenCoords"]),
                distance=data.get("distance"),
            )
        except KeyError as e:
            raise ValueError(f"Hole is missing required field '{e.args[0]}'") from e


@dataclass
class Course:
    """A golf course: name, location and its holes."""
    name: str
    location: str = ""
    holes: list[Hole] = field(default_factory=list)

    def get_hole(self, hole_number: int) -> Optional[Hole]:
        """Look up a hole by number, or None if the course lacks it."""
        for hole in self.holes:
            if hole.hole_number == hole_number:
                return hole
        return None

    @property
    def total_par(self) -> int:
        return sum(h.par for h in self.holes)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "location": self.location,
            "holes": [h.to_dict() for h in self.holes],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Course":
        if "name" not in data:
            raise ValueError("Course is missing required field 'name'")
        return cls(
            name=data["name"],
            location=data.get("location", ""),
            holes=[Hole.from_dict(h) for h in data.get("holes", [])],
        )
