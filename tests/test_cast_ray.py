import math

import pytest

import raycaster.world as world_mod
from raycaster.config import TILE_WALL
from raycaster.world import World, RayHit, compute_light


@pytest.fixture
def room():
    """6x6 closed room with the default interior wall at (3, 3)."""
    return World.populated(6, 6)


def test_cast_ray_empty_map_has_no_hit():
    world = World(6, 6)
    assert world.cast_ray(2.0, 2.0, 1.0, 0.0) is None


def test_cast_ray_hits_right_border(room):
    hit = room.cast_ray(2.0, 2.0, 1.0, 0.0)
    assert isinstance(hit, RayHit)
    assert 4.99 < hit.x < 5.01
    assert 1.99 < hit.y < 2.01
    assert math.isclose(hit.distance, 3.0)
    assert hit.light == 1.0
    assert hit.point == (hit.x, hit.y)


@pytest.mark.parametrize(
    "origin,direction,expected",
    [
        # Straight up (-y): only the y axis advances
        ((2.5, 2.5), (0.0, -1.0), (2.5, 1.0)),
        # Straight down (+y)
        ((2.5, 2.5), (0.0, 1.0), (2.5, 5.0)),
        # Left from a grid line: the boundary at x=2 is crossed immediately
        ((2.0, 2.5), (-1.0, 0.0), (1.0, 2.5)),
        # Right from a grid line: the next cell is entered after one full step
        ((4.0, 1.5), (1.0, 0.0), (5.0, 1.5)),
    ],
)
def test_cast_ray_axis_aligned(room, origin, direction, expected):
    hit = room.cast_ray(origin[0], origin[1], direction[0], direction[1])
    assert hit is not None
    assert hit.x == pytest.approx(expected[0])
    assert hit.y == pytest.approx(expected[1])
    assert not math.isnan(hit.distance)


def test_cast_ray_diagonal_hits_interior_wall_corner(room):
    d = 1.0 / math.sqrt(2.0)
    hit = room.cast_ray(1.5, 1.5, d, d)
    assert hit is not None
    assert hit.x == pytest.approx(3.0)
    assert hit.y == pytest.approx(3.0)
    assert hit.distance == pytest.approx(1.5 * math.sqrt(2.0))


def test_cast_ray_hit_point_is_not_snapped(room):
    dx, dy = math.cos(0.3), math.sin(0.3)
    hit = room.cast_ray(1.25, 1.75, dx, dy)
    assert hit is not None
    # Hit lies exactly on the ray
    assert hit.x == pytest.approx(1.25 + dx * hit.distance)
    assert hit.y == pytest.approx(1.75 + dy * hit.distance)
    # and on a cell boundary of a wall cell
    assert hit.x == pytest.approx(5.0) or hit.y == pytest.approx(5.0)


def test_cast_ray_respects_max_distance(room):
    assert room.cast_ray(2.0, 2.0, 1.0, 0.0, max_distance=1.0) is None
    assert room.cast_ray(2.0, 2.0, 1.0, 0.0, max_distance=2.5) is None
    hit = room.cast_ray(2.0, 2.0, 1.0, 0.0, max_distance=3.0)
    assert hit is not None and hit.x == pytest.approx(5.0)


def test_cast_ray_rejects_zero_direction(room):
    with pytest.raises(ValueError):
        room.cast_ray(2.0, 2.0, 0.0, 0.0)


def test_every_ray_inside_closed_room_hits(room):
    for i in range(64):
        angle = 2.0 * math.pi * i / 64
        hit = room.cast_ray(2.3, 1.6, math.cos(angle), math.sin(angle))
        assert hit is not None
        assert 0.0 <= hit.x <= 6.0 and 0.0 <= hit.y <= 6.0


def test_compute_light_is_constant_by_default():
    assert compute_light(0.5) == 1.0
    assert compute_light(50.0) == 1.0


def test_compute_light_falloff_when_enabled(monkeypatch):
    monkeypatch.setattr(world_mod, "LIGHT_FALLOFF", True)
    assert compute_light(5.0) == 1.0
    assert compute_light(20.0) == pytest.approx(0.5)
    assert compute_light(1000.0) == pytest.approx(world_mod.MIN_LIGHT)


@pytest.mark.parametrize("tiny", [1e-160, -1e-200])
def test_cast_ray_nearly_axis_aligned_does_not_overflow(room, tiny):
    hit = room.cast_ray(2.5, 2.5, 1.0, tiny)
    assert hit is not None
    assert hit.x == pytest.approx(5.0)
    assert hit.y == pytest.approx(2.5)
    hit = room.cast_ray(2.5, 2.5, tiny, 1.0)
    assert hit is not None
    assert hit.point == pytest.approx((2.5, 5.0))


def test_cast_ray_tie_steps_along_x_first():
    d = 1.0 / math.sqrt(2.0)
    # Only the cell above-left of the corner is walled: stepping x first
    # passes the corner without entering it
    world = World(6, 6)
    world.set_tile(1, 2, TILE_WALL)
    assert world.cast_ray(1.5, 1.5, d, d) is None
    # Mirror case: the x neighbour is entered first and hit at the corner
    world = World(6, 6)
    world.set_tile(2, 1, TILE_WALL)
    hit = world.cast_ray(1.5, 1.5, d, d)
    assert hit is not None
    assert hit.point == pytest.approx((2.0, 2.0))
    assert hit.distance == pytest.approx(d)
