"""
Heat-map bucketing of shot positions.

The bounding box of all shot coordinates is split into a uniform
grid_size x grid_size grid. Each cell covers [min, min + step) on both
axes; the last row and column also take in the box's maximum edge so
that no shot falls outside the grid.
"""

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from golftrack.models.shot import Coordinate, Shot
from golftrack.utils.constants import DEFAULT_HEAT_MAP_GRID_SIZE
from golftrack.utils.rounding import round_half_up


@dataclass(frozen=True)
class HeatMapPoint:
    """One non-empty grid cell.

    Attributes:
        coordinates: Centre of the cell.
        intensity: Number of shots in the cell.
        shot_count: Number of shots in the cell.
        average_distance: Mean distance of those shots, whole yards.
    """
    coordinates: Coordinate
    intensity: int
    shot_count: int
    average_distance: int

    def to_dict(self) -> dict:
        return {
            "lat": self.coordinates.latitude,
            "lng": self.coordinates.longitude,
            "intensity": self.intensity,
            "shotCount": self.shot_count,
            "avgDistance": self.average_distance,
        }


def _cell_indices(values: np.ndarray, lo: float, step: float,
                  grid_size: int) -> np.ndarray:
    """Grid index along one axis. A zero-width axis puts everything in cell 0."""
    if step == 0:
        return np.zeros(len(values), dtype=int)
    idx = np.floor((values - lo) / step).astype(int)
    return np.clip(idx, 0, grid_size - 1)


def generate_heat_map_data(
    shots: Iterable[Shot], grid_size: int = DEFAULT_HEAT_MAP_GRID_SIZE
) -> list[HeatMapPoint]:
    """Bucket shots into grid cells and summarise each non-empty cell.

    Points are returned row by row (latitude), then by column (longitude).

    Raises:
        ValueError: If grid_size is less than 1.
    """
    if grid_size < 1:
        raise ValueError(f"grid_size must be at least 1, got {grid_size}")

    shots = list(shots)
    if not shots:
        return []

    lats = np.array([s.coordinates.latitude for s in shots], dtype=float)
    lngs = np.array([s.coordinates.longitude for s in shots], dtype=float)
    distances = np.array([s.distance for s in shots], dtype=float)

    min_lat, max_lat = float(lats.min()), float(lats.max())
    min_lng, max_lng = float(lngs.min()), float(lngs.max())
    lat_step = (max_lat - min_lat) / grid_size
    lng_step = (max_lng - min_lng) / grid_size

    rows = _cell_indices(lats, min_lat, lat_step, grid_size)
    cols = _cell_indices(lngs, min_lng, lng_step, grid_size)

    cells: dict[tuple[int, int], list[int]] = {}
    for shot_idx, cell in enumerate(zip(rows.tolist(), cols.tolist())):
        cells.setdefault(cell, []).append(shot_idx)

    points = []
    for (row, col) in sorted(cells):
        members = cells[(row, col)]
        points.append(HeatMapPoint(
            coordinates=Coordinate(
                min_lat + row * lat_step + lat_step / 2,
                min_lng + col * lng_step + lng_step / 2,
            ),
            intensity=len(members),
            shot_count=len(members),
            average_distance=round_half_up(float(distances[members].mean())),
        ))
    return points
