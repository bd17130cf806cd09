"""Shared pytest fixtures for GolfTrack tests."""

import os
from datetime import datetime, timezone

import pytest

from golftrack.models.course import Hole
from golftrack.models.shot import Coordinate, Shot

# Run Qt headless so the qapp fixture works without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def tee():
    return Coordinate(40.0, -73.0)


@pytest.fixture
def hole(tee):
    """Par 4 running due north; the green is ~365 yards from the tee."""
    return Hole(
        hole_number=1,
        par=4,
        tee_coordinates=tee,
        green_coordinates=Coordinate(40.003, -73.0),
        distance=365,
    )


@pytest.fixture
def make_shot():
    """Factory for shots with sensible defaults."""
    def _make(club="7-Iron", lie="fairway", distance=150, hole_number=1,
              shot_number=1, lat=40.0, lng=-73.0, timestamp=None):
        return Shot(
            hole_number=hole_number,
            shot_number=shot_number,
            coordinates=Coordinate(lat, lng),
            club=club,
            distance=distance,
            lie=lie,
            timestamp=timestamp or datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc),
        )
    return _make
