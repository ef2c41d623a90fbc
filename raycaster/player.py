from __future__ import annotations
import math
import logging
from typing import TYPE_CHECKING, Tuple
from .config import (
    MOVE_SPEED,
    ROT_SPEED,
    MOVE_EPSILON,
    CLEARANCE,
    COLLISION_PROBE_DISTANCE,
    PLAYER_START,
    PLAYER_DIRECTION,
)

if TYPE_CHECKING:
    from .world import World

logger = logging.getLogger(__name__)


class Player:
    """Player state and movement."""

    def __init__(
        self,
        x: float = PLAYER_START[0],
        y: float = PLAYER_START[1],
        dir_x: float = PLAYER_DIRECTION[0],
        dir_y: float = PLAYER_DIRECTION[1],
        move_speed: float = MOVE_SPEED,
        rot_speed: float = ROT_SPEED,
    ) -> None:
        """
        Initialize the player.
        x, y: starting position in map blocks (floats allowed).
        dir_x, dir_y: facing direction; normalized to unit length.
        move_speed: movement speed in blocks per second.
        rot_speed: rotation speed in radians per second.
        """
        length = math.hypot(dir_x, dir_y)
        if length == 0.0:
            raise ValueError("Player direction must be non-zero")
        self.x = float(x)
        self.y = float(y)
        self.dir_x = dir_x / length
        self.dir_y = dir_y / length
        self.move_speed = move_speed
        self.rot_speed = rot_speed

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def direction(self) -> Tuple[float, float]:
        return (self.dir_x, self.dir_y)

    @property
    def angle(self) -> float:
        """Heading in radians, measured from the +x axis."""
        return math.atan2(self.dir_y, self.dir_x)

    def rotate(self, direction: int, dt: float) -> None:
        """Rotate the player left (direction=1) or right (direction=-1)."""
        theta = self.rot_speed * dt * direction
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        new_x = self.dir_x * cos_t - self.dir_y * sin_t
        new_y = self.dir_x * sin_t + self.dir_y * cos_t
        # Renormalize so rounding error never accumulates
        length = math.hypot(new_x, new_y)
        self.dir_x = new_x / length
        self.dir_y = new_y / length

    def move(self, direction: int, world: World, dt: float) -> None:
        """
        Move the player forward (direction=1) or backward (direction=-1),
        stopping CLEARANCE short of any wall found along the way.
        """
        pos_d = self.move_speed * dt * direction
        if abs(pos_d) <= MOVE_EPSILON:
            return
        sign = 1.0 if pos_d > 0 else -1.0
        # Probe at least as far as this step travels so large dt cannot
        # carry the player through a wall
        probe = max(COLLISION_PROBE_DISTANCE, abs(pos_d) + CLEARANCE)
        hit = world.cast_ray(
            self.x,
            self.y,
            self.dir_x * sign,
            self.dir_y * sign,
            probe,
        )
        if hit is None:
            step = pos_d
        else:
            dist = math.hypot(hit.x - self.x, hit.y - self.y)
            allowed = min(max(dist - CLEARANCE, 0.0), probe)
            step = min(abs(pos_d), allowed) * sign
            if abs(step) < abs(pos_d):
                logger.debug(
                    "Movement clamped from %.3f to %.3f by wall at (%.2f, %.2f)",
                    pos_d,
                    step,
                    hit.x,
                    hit.y,
                )
        self.x += self.dir_x * step
        self.y += self.dir_y * step

    def clamp_to(self, world: World) -> None:
        """Keep the position inside [0, width] x [0, height]."""
        self.x = min(max(self.x, 0.0), float(world.width))
        self.y = min(max(self.y, 0.0), float(world.height))
