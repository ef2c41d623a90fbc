"""
Shading pass: turns per-column wall spans into RGBA pixels.
"""

from __future__ import annotations
import math
from concurrent.futures import Executor
from typing import Sequence, Tuple

import numpy as np

from .config import (
    WALL_COLOR,
    CEILING_COLOR,
    FLOOR_COLOR,
    CROSSHAIR_COLOR,
)
from .projection import ColumnData

RGBA = Tuple[int, int, int, int]

BYTES_PER_PIXEL = 4


def wall_color(light: float, base: Tuple[int, int, int] = WALL_COLOR) -> RGBA:
    """Scale the base wall color by light (floored), fully opaque."""
    r, g, b = (int(math.floor(c * light)) for c in base)
    return (r, g, b, 0xFF)


def frame_view(frame, width: int, height: int) -> np.ndarray:
    """
    Wrap a raw RGBA buffer as a writable (height, width, 4) uint8 array
    sharing its memory.
    """
    expected = width * height * BYTES_PER_PIXEL
    view = np.frombuffer(frame, dtype=np.uint8)
    if view.size != expected:
        raise ValueError(
            f"Frame buffer holds {view.size} bytes, expected {expected} "
            f"for {width}x{height} RGBA"
        )
    if not view.flags.writeable:
        raise ValueError("Frame buffer must be writable")
    return view.reshape(height, width, BYTES_PER_PIXEL)


class ColumnTable:
    """Per-column wall spans and colors packed into arrays for shading."""

    def __init__(
        self,
        columns: Sequence[ColumnData],
        show_crosshair: bool = False,
    ) -> None:
        count = len(columns)
        self.tops = np.empty(count, dtype=np.int64)
        self.bottoms = np.empty(count, dtype=np.int64)
        self.colors = np.empty((count, BYTES_PER_PIXEL), dtype=np.uint8)
        for i, col in enumerate(columns):
            if col.wall:
                self.tops[i] = col.top
                self.bottoms[i] = col.bottom
            else:
                # Empty span, top past bottom
                self.tops[i] = 1
                self.bottoms[i] = 0
            self.colors[i] = wall_color(col.light)
        if show_crosshair and count:
            self.colors[count // 2] = (*CROSSHAIR_COLOR, 0xFF)


def shade_rows(
    view: np.ndarray, table: ColumnTable, row_start: int, row_end: int
) -> None:
    """Fill rows [row_start, row_end) of the frame view."""
    height = view.shape[0]
    mid = height // 2
    rows = np.arange(row_start, row_end, dtype=np.int64)[:, None]
    in_wall = (rows >= table.tops[None, :]) & (rows <= table.bottoms[None, :])
    background = np.where(
        rows <= mid,
        np.array((*CEILING_COLOR, 0xFF), dtype=np.uint8)[None, :],
        np.array((*FLOOR_COLOR, 0xFF), dtype=np.uint8)[None, :],
    )
    # background is (rows, 4); broadcast it across columns
    view[row_start:row_end] = np.where(
        in_wall[:, :, None], table.colors[None, :, :], background[:, None, :]
    )


def row_bands(height: int, bands: int) -> Sequence[Tuple[int, int]]:
    """Split [0, height) into at most `bands` contiguous row ranges."""
    bands = max(1, min(bands, height))
    edges = np.linspace(0, height, bands + 1).astype(int)
    return [
        (int(edges[i]), int(edges[i + 1]))
        for i in range(bands)
        if edges[i] < edges[i + 1]
    ]


def shade_frame(
    columns: Sequence[ColumnData],
    frame,
    width: int,
    height: int,
    executor: Executor | None = None,
    bands: int = 1,
    show_crosshair: bool = False,
) -> None:
    """
    Fill every pixel of `frame` from the per-column table.
    With an executor, disjoint row bands are shaded concurrently.
    """
    if len(columns) != width:
        raise ValueError(
            f"Expected {width} columns of data, got {len(columns)}"
        )
    view = frame_view(frame, width, height)
    table = ColumnTable(columns, show_crosshair)
    spans = row_bands(height, bands)
    if executor is None or len(spans) == 1:
        for start, end in spans:
            shade_rows(view, table, start, end)
        return
    futures = [
        executor.submit(shade_rows, view, table, start, end)
        for start, end in spans
    ]
    for fut in futures:
        fut.result()
