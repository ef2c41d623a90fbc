from __future__ import annotations
import math
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .config import (
    MAP_WIDTH,
    MAP_HEIGHT,
    INTERIOR_WALLS,
    TILE_WALL,
    TILE_EMPTY,
    LIGHT_FALLOFF,
    LIGHT_FALLOFF_RANGE,
    MIN_LIGHT,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RayHit:
    """Where a ray crossed into a wall cell."""

    x: float
    y: float
    # Ray length from the origin to the hit point
    distance: float
    # Attenuation factor in (0, 1]
    light: float = 1.0

    @property
    def point(self) -> Tuple[float, float]:
        return (self.x, self.y)


def compute_light(distance: float) -> float:
    """
    Return the attenuation factor for a hit at the given distance.
    Falloff is disabled by default (LIGHT_FALLOFF), giving a constant 1.0.
    """
    if not LIGHT_FALLOFF or distance <= 0.0:
        return 1.0
    return max(MIN_LIGHT, min(1.0, LIGHT_FALLOFF_RANGE / distance))


class World:
    """Fixed-size tile grid stored as one flat array indexed by x + y * width."""

    def __init__(self, width: int = MAP_WIDTH, height: int = MAP_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Map dimensions must be positive, got {width}x{height}"
            )
        self.width = int(width)
        self.height = int(height)
        self.tiles = np.full(self.width * self.height, TILE_EMPTY, dtype=np.uint8)

    @classmethod
    def from_grid(cls, map_grid: Sequence[Sequence[int]]) -> World:
        """Build a world from rows of tile values (row index is y)."""
        height = len(map_grid)
        width = len(map_grid[0]) if height > 0 else 0
        world = cls(width, height)
        for y, row in enumerate(map_grid):
            if len(row) != width:
                raise ValueError(
                    f"Row {y} has {len(row)} tiles, expected {width}"
                )
            for x, tile in enumerate(row):
                world.set_tile(x, y, tile)
        return world

    @classmethod
    def populated(
        cls,
        width: int = MAP_WIDTH,
        height: int = MAP_HEIGHT,
        interior_walls: Iterable[Tuple[int, int]] = INTERIOR_WALLS,
    ) -> World:
        """Create a closed room with the given interior walls."""
        world = cls(width, height)
        world.populate(interior_walls)
        return world

    @property
    def size(self) -> int:
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def index(self, x: int, y: int) -> int:
        return x + y * self.width

    def at(self, x: int, y: int) -> Optional[int]:
        """Return the tile at cell (x, y), or None outside the grid."""
        if not self.in_bounds(x, y):
            return None
        return int(self.tiles[self.index(x, y)])

    def set_tile(self, x: int, y: int, tile: int) -> None:
        if not self.in_bounds(x, y):
            raise ValueError(f"Cell ({x}, {y}) is outside the map")
        if tile not in (TILE_EMPTY, TILE_WALL):
            raise ValueError(f"Unknown tile kind: {tile!r}")
        self.tiles[self.index(x, y)] = tile

    def populate(
        self, interior_walls: Iterable[Tuple[int, int]] = INTERIOR_WALLS
    ) -> None:
        """Wall off every border cell, then add the interior walls."""
        for x in range(self.width):
            self.set_tile(x, 0, TILE_WALL)
            self.set_tile(x, self.height - 1, TILE_WALL)
        for y in range(self.height):
            self.set_tile(0, y, TILE_WALL)
            self.set_tile(self.width - 1, y, TILE_WALL)
        for x, y in interior_walls:
            self.set_tile(x, y, TILE_WALL)
        logger.debug(
            "Populated %dx%d map with %d walls",
            self.width,
            self.height,
            len(self.wall_cells()),
        )

    def is_wall(self, x: float, y: float) -> bool:
        """Return True if (x, y) lies in a wall cell or out of bounds."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return True
        return bool(self.tiles[self.index(int(x), int(y))] == TILE_WALL)

    def wall_cells(self) -> List[Tuple[int, int]]:
        return [
            (int(i) % self.width, int(i) // self.width)
            for i in np.flatnonzero(self.tiles == TILE_WALL)
        ]

    def cast_ray(
        self,
        x: float,
        y: float,
        dir_x: float,
        dir_y: float,
        max_distance: float = math.inf,
    ) -> Optional[RayHit]:
        """
        Walk the grid cell by cell (DDA) from (x, y) along (dir_x, dir_y).
        Returns the first wall crossing, or None if the ray leaves the map
        or travels further than max_distance.
        The direction is expected to be unit length.
        """
        if dir_x == 0.0 and dir_y == 0.0:
            raise ValueError("Ray direction must be non-zero")
        # Ray length needed to cross one full cell along each axis.
        # An axis the ray never moves along is unreachable.
        step_len_x = math.hypot(1.0, dir_y / dir_x) if dir_x else math.inf
        step_len_y = math.hypot(1.0, dir_x / dir_y) if dir_y else math.inf
        map_x = int(x)
        map_y = int(y)
        frac_x = x - map_x
        frac_y = y - map_y

        if dir_x < 0.0:
            step_x = -1
            len_x = frac_x * step_len_x
        else:
            step_x = 1
            len_x = (1.0 - frac_x) * step_len_x
        if dir_y < 0.0:
            step_y = -1
            len_y = frac_y * step_len_y
        else:
            step_y = 1
            len_y = (1.0 - frac_y) * step_len_y

        while True:
            # Ties step along x
            if len_y < len_x:
                map_y += step_y
                dist = len_y
                len_y += step_len_y
            else:
                map_x += step_x
                dist = len_x
                len_x += step_len_x

            if not self.in_bounds(map_x, map_y):
                return None
            if dist > max_distance:
                return None
            if self.tiles[map_x + map_y * self.width] == TILE_WALL:
                return RayHit(
                    x + dir_x * dist,
                    y + dir_y * dist,
                    dist,
                    compute_light(dist),
                )
