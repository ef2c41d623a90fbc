"""
Input handling abstraction to decouple Pygame input from scene logic.
"""

from __future__ import annotations
from dataclasses import dataclass

import pygame


@dataclass
class InputState:
    """Held movement keys for one frame."""

    turn_left: bool = False
    turn_right: bool = False
    move_forward: bool = False
    move_backward: bool = False


class InputHandler:
    """
    Processes Pygame events once per frame and exposes the held keys as an
    InputState plus a quit flag.
    """

    def __init__(self) -> None:
        self._quit = False
        self._state = InputState()

    def process_events(self) -> None:
        """Poll Pygame events and refresh the key state."""
        self._quit = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit = True
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._quit = True
        keys = pygame.key.get_pressed()
        self._state = InputState(
            turn_left=bool(keys[pygame.K_LEFT] or keys[pygame.K_a]),
            turn_right=bool(keys[pygame.K_RIGHT] or keys[pygame.K_d]),
            move_forward=bool(keys[pygame.K_UP] or keys[pygame.K_w]),
            move_backward=bool(keys[pygame.K_DOWN] or keys[pygame.K_s]),
        )

    def should_quit(self) -> bool:
        """Return True if a quit command was issued this frame."""
        return self._quit

    def get_state(self) -> InputState:
        return self._state
