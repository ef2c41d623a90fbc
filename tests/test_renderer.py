import numpy as np
import pytest

from raycaster.config import WALL_COLOR, CEILING_COLOR, FLOOR_COLOR
from raycaster.player import Player
from raycaster.renderer import Renderer
from raycaster.world import World

WIDTH, HEIGHT = 64, 48


@pytest.fixture
def renderer():
    r = Renderer(WIDTH, HEIGHT, workers=4)
    yield r
    r.shutdown()


@pytest.fixture
def world():
    return World.populated(8, 8)


@pytest.fixture
def player():
    return Player(x=2.0, y=2.0, dir_x=1.0, dir_y=0.0)


def test_renderer_rejects_bad_screen_size():
    with pytest.raises(ValueError):
        Renderer(0, 10, workers=1)


def test_cast_columns_one_per_column(renderer, world, player):
    columns = renderer.cast_columns(world, player)
    assert len(columns) == WIDTH
    # Closed room: every ray hits a wall
    assert all(col.wall for col in columns)


def test_cast_columns_center_column_projects_far_wall(renderer, world, player):
    columns = renderer.cast_columns(world, player)
    center = columns[WIDTH // 2]
    # Right border face is 5 units ahead: half height 4.8 around row 24
    assert (center.top, center.bottom) == (19, 29)
    assert center.light == 1.0


def test_cast_columns_parallel_matches_serial(world, player):
    serial = Renderer(WIDTH, HEIGHT, workers=1)
    parallel = Renderer(WIDTH, HEIGHT, workers=3)
    try:
        assert parallel.cast_columns(world, player) == serial.cast_columns(
            world, player
        )
    finally:
        serial.shutdown()
        parallel.shutdown()


def test_cast_columns_open_map_has_no_wall(renderer, player):
    columns = renderer.cast_columns(World(8, 8), player)
    assert not any(col.wall for col in columns)


def test_render_fills_every_pixel(renderer, world, player):
    frame = bytearray(b"\x11" * renderer.frame_size)
    renderer.render(world, player, frame)
    pixels = np.frombuffer(bytes(frame), dtype=np.uint8).reshape(-1, 4)
    allowed = {
        (*WALL_COLOR, 0xFF),
        (*CEILING_COLOR, 0xFF),
        (*FLOOR_COLOR, 0xFF),
    }
    assert {tuple(int(c) for c in p) for p in np.unique(pixels, axis=0)} <= allowed


def test_render_is_idempotent(renderer, world, player):
    first = bytearray(renderer.frame_size)
    second = bytearray(b"\xff" * renderer.frame_size)
    renderer.render(world, player, first)
    renderer.render(world, player, second)
    assert first == second


def test_render_rejects_wrong_frame_size(renderer, world, player):
    with pytest.raises(ValueError):
        renderer.render(world, player, bytearray(renderer.frame_size + 4))


def test_shutdown_is_repeatable(world, player):
    r = Renderer(WIDTH, HEIGHT, workers=2)
    r.shutdown()
    r.shutdown()
    # Without workers the renderer falls back to the calling thread
    frame = bytearray(r.frame_size)
    r.render(world, player, frame)
    assert frame[3] == 0xFF


def test_render_rejects_read_only_frame_before_casting(
    renderer, world, player, monkeypatch
):
    def fail(*args):
        raise AssertionError("columns cast for an unusable frame")

    monkeypatch.setattr(renderer, "cast_columns", fail)
    with pytest.raises(ValueError):
        renderer.render(world, player, bytes(renderer.frame_size))
