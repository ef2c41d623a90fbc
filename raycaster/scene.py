from __future__ import annotations
import logging
from typing import Optional, Protocol

from .config import SCREEN_WIDTH, SCREEN_HEIGHT
from .world import World
from .player import Player
from .renderer import Renderer

logger = logging.getLogger(__name__)


class InputQuery(Protocol):
    turn_left: bool
    turn_right: bool
    move_forward: bool
    move_backward: bool


def _axis(positive: bool, negative: bool) -> int:
    return int(bool(positive)) - int(bool(negative))


class Scene:
    """Owns the map and the player; advances movement and renders frames."""

    def __init__(
        self,
        world: Optional[World] = None,
        player: Optional[Player] = None,
        renderer: Optional[Renderer] = None,
        screen_width: int = SCREEN_WIDTH,
        screen_height: int = SCREEN_HEIGHT,
    ) -> None:
        self.world = world if world is not None else World.populated()
        self.player = player if player is not None else Player()
        self.renderer = renderer or Renderer(screen_width, screen_height)
        self.width = self.renderer.w
        self.height = self.renderer.h
        logger.info(
            "Scene ready: %dx%d map, player at (%.2f, %.2f)",
            self.world.width,
            self.world.height,
            self.player.x,
            self.player.y,
        )

    def update(self, input_state: InputQuery, dt: float) -> None:
        """Apply one frame of rotation and collision-checked movement."""
        turn = _axis(input_state.turn_left, input_state.turn_right)
        step = _axis(input_state.move_forward, input_state.move_backward)
        self.player.rotate(turn, dt)
        self.player.move(step, self.world, dt)
        self.player.clamp_to(self.world)

    def new_frame(self) -> bytearray:
        """Return a zeroed RGBA buffer sized for this scene."""
        return bytearray(self.renderer.frame_size)

    def render(self, frame) -> None:
        """Fill `frame` with the current view."""
        self.renderer.render(self.world, self.player, frame)

    def shutdown(self) -> None:
        self.renderer.shutdown()
