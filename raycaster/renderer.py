"""
Software renderer: casts one ray per screen column, then shades the frame.
Both passes are spread over a thread pool; phase two only starts once the
full column table exists.
"""

from __future__ import annotations
import math
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, TYPE_CHECKING

from .config import FOV, RENDER_WORKERS, SHOW_CROSSHAIR
from .projection import ColumnData, NO_WALL, column_ray, compute_column
from .shading import shade_frame

if TYPE_CHECKING:
    from .world import World
    from .player import Player

logger = logging.getLogger(__name__)


class Renderer:
    """Ray-cast column renderer writing into a raw RGBA buffer."""

    def __init__(
        self,
        screen_width: int,
        screen_height: int,
        fov: float = FOV,
        workers: int = RENDER_WORKERS,
        show_crosshair: bool = SHOW_CROSSHAIR,
    ) -> None:
        if screen_width <= 0 or screen_height <= 0:
            raise ValueError(
                f"Screen size must be positive, got {screen_width}x{screen_height}"
            )
        self.w = screen_width
        self.h = screen_height
        self.fov = fov
        self.workers = max(1, int(workers))
        self.show_crosshair = show_crosshair
        self._executor: Optional[ThreadPoolExecutor] = None
        if self.workers > 1:
            self._executor = ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="raycast"
            )
        logger.info(
            "Renderer %dx%d ready with %d worker(s)",
            self.w,
            self.h,
            self.workers,
        )

    @property
    def frame_size(self) -> int:
        return self.w * self.h * 4

    def _cast_range(
        self, world: World, player: Player, start: int, end: int
    ) -> List[ColumnData]:
        columns = []
        for x in range(start, end):
            ray_x, ray_y = column_ray(player, x, self.w, self.fov)
            hit = world.cast_ray(player.x, player.y, ray_x, ray_y, math.inf)
            if hit is None:
                columns.append(NO_WALL)
                continue
            top, bottom = compute_column(*hit.point, player, self.h)
            columns.append(ColumnData(top, bottom, hit.light))
        return columns

    def cast_columns(self, world: World, player: Player) -> List[ColumnData]:
        """Cast one ray per screen column and return the column table."""
        if self._executor is None:
            return self._cast_range(world, player, 0, self.w)
        chunk = -(-self.w // self.workers)
        futures = [
            self._executor.submit(
                self._cast_range, world, player, start, min(start + chunk, self.w)
            )
            for start in range(0, self.w, chunk)
        ]
        # Futures are collected in submission order so columns stay in x order
        columns: List[ColumnData] = []
        for fut in futures:
            columns.extend(fut.result())
        return columns

    def render(self, world: World, player: Player, frame) -> None:
        """Render the scene into `frame` (width * height * 4 RGBA bytes)."""
        view = memoryview(frame)
        nbytes = view.nbytes
        if nbytes != self.frame_size:
            raise ValueError(
                f"Frame buffer holds {nbytes} bytes, expected {self.frame_size}"
            )
        if view.readonly:
            raise ValueError("Frame buffer must be writable")
        columns = self.cast_columns(world, player)
        if logger.isEnabledFor(logging.DEBUG):
            misses = sum(1 for col in columns if not col.wall)
            logger.debug(
                "Cast %d columns, %d without a wall", len(columns), misses
            )
        shade_frame(
            columns,
            frame,
            self.w,
            self.h,
            executor=self._executor,
            bands=self.workers,
            show_crosshair=self.show_crosshair,
        )

    def shutdown(self) -> None:
        """Stop the worker threads."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
            logger.info("Renderer workers stopped")
