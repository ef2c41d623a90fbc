"""
Column projection: per-column ray directions and the mapping from a wall
hit to the vertical span of screen rows it covers.
"""

from __future__ import annotations
import math
from typing import NamedTuple, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .player import Player

# Smallest view-axis distance used for projection, avoids division by zero
_MIN_DISTANCE = 1e-4


class ColumnData(NamedTuple):
    """Inclusive row span of one column's wall slice and its light factor."""

    top: int
    bottom: int
    light: float = 1.0
    wall: bool = True

    def contains(self, row: int) -> bool:
        return self.wall and self.top <= row <= self.bottom


# Column whose ray escaped the map: every row is ceiling or floor
NO_WALL = ColumnData(1, 0, 1.0, wall=False)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def view_distance(screen_width: int, fov: float) -> float:
    """Distance from the eye to the projection plane, in pixels."""
    return (screen_width // 2) / math.tan(fov / 2.0)


def column_ray(
    player: Player, column: int, screen_width: int, fov: float
) -> Tuple[float, float]:
    """
    Return the unit ray direction for a screen column.
    Column 0 is the left edge of the view, rotated counter-clockwise from
    the player's facing.
    """
    screen_x = column - (screen_width // 2)
    angle = math.atan2(view_distance(screen_width, fov), screen_x) - math.pi / 2
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    ray_x = player.dir_x * cos_a - player.dir_y * sin_a
    ray_y = player.dir_x * sin_a + player.dir_y * cos_a
    length = math.hypot(ray_x, ray_y)
    return ray_x / length, ray_y / length


def compute_column(
    hit_x: float, hit_y: float, player: Player, screen_height: int
) -> Tuple[int, int]:
    """
    Project a wall hit onto the screen and return the (top, bottom) rows.

    The distance used is the hit's projection onto the view axis
    (|diff| * cos(beta), beta being the angle between the hit offset and the
    facing), which removes fisheye distortion. Rows may fall outside the
    image; callers clip when shading.
    """
    diff_x = hit_x - player.x
    diff_y = hit_y - player.y
    magnitude = math.hypot(diff_x, diff_y)
    if magnitude == 0.0:
        dist = 0.0
    else:
        cos_beta = (diff_x * player.dir_x + diff_y * player.dir_y) / magnitude
        dist = magnitude * max(-1.0, min(1.0, cos_beta))
    dist = max(dist, _MIN_DISTANCE)
    half_height = (screen_height / dist) / 2.0
    mid = screen_height // 2
    return (
        _round_half_away(mid - half_height),
        _round_half_away(mid + half_height),
    )
