"""Grid fallback: synthesize a stable code from a fixed-size lat/lng grid."""

from __future__ import annotations

import math

from ...models.domain import Coordinate
from .base import ZoneFallback

DEFAULT_GRID_SIZE = 0.0225  # degrees, roughly 2.5 km at the equator


class GridFallback(ZoneFallback):
    """Partition the plane into square cells and name the cell a point falls in.

    Points sharing ``floor(lat / grid_size)`` and ``floor(lng / grid_size)``
    always receive the same code, so repeated lookups from one small area
    outside every named zone stay consistent.
    """

    name = "grid"

    def __init__(self, grid_size: float = DEFAULT_GRID_SIZE, prefix: str = "AREA"):
        if grid_size <= 0:
            raise ValueError("grid_size must be > 0")
        self.grid_size = grid_size
        self.prefix = prefix

    def cell(self, point: Coordinate) -> tuple[int, int]:
        return math.floor(point.lat / self.grid_size), math.floor(point.lng / self.grid_size)

    def code_for(self, point: Coordinate) -> str:
        grid_x, grid_y = self.cell(point)
        return f"{self.prefix}_{grid_x}_{grid_y}"
