import math

import pytest

from pineapple.collision import Solid, World
from pineapple.tilemap import Tile, TileMap


@pytest.fixture
def world():
    return World(TileMap())


def test_grid_position_round_trip(world):
    solid = Solid(16, world)
    solid.set_grid_position(10, 7)
    assert solid.grid_position() == (10, 7)
    assert (solid.x, solid.y) == world.tilemap.grid_to_absolute(10, 7)


def test_set_position_centres_on_pixel(world):
    solid = Solid(16, world)
    solid.set_position(3, 4)
    assert (solid.x, solid.y) == (3.5, 4.5)


def test_distance(world):
    solid = Solid(16, world)
    solid.x, solid.y = 0.0, 0.0
    assert solid.distance(3, 4) == pytest.approx(5)


def test_orientation_points_right_is_near_zero(world):
    solid = Solid(16, world)
    solid.x, solid.y = 100.0, 100.0
    assert solid.orientation(150, 100) == pytest.approx(0, abs=0.01)
    assert solid.orientation(100, 150) > solid.orientation(150, 100)


def test_contact_range(world):
    solid = Solid(16, world)
    solid.set_grid_position(10, 10)
    assert solid.contact(solid.x + 31, solid.y)
    assert not solid.contact(solid.x + 32, solid.y)


def test_no_collision_in_open_floor(world):
    solid = Solid(16, world)
    solid.set_grid_position(10, 10)
    before = (solid.x, solid.y)
    assert solid.resolve_collision() is False
    assert (solid.x, solid.y) == before


def test_far_edge_and_corner_leave_position(world):
    solid = Solid(16, world)
    assert solid.resolve_edge_collision(10, 200) == 200
    assert solid.resolve_corner_collision(10, 10, 200, 200) == (200, 200)


def test_wall_pushes_body_away(world):
    world.tilemap.set_tile(0, 1, Tile.WALL)
    solid = Solid(16, world)
    solid.set_grid_position(1, 1)
    solid.x = 37.0
    assert solid.resolve_collision() is True
    assert solid.x > 37.0
    assert solid.x - world.tilemap.tile_size >= 0


def test_edge_collision_moves_away_from_edge(world):
    solid = Solid(16, world)
    edge_px = 5 * world.tilemap.tile_size
    pushed = solid.resolve_edge_collision(5, edge_px + 4)
    assert pushed > edge_px + 4
    pushed_left = solid.resolve_edge_collision(5, edge_px - 4)
    assert pushed_left < edge_px - 4


def test_move_applies_and_clears_velocity(world):
    solid = Solid(16, world)
    solid.set_grid_position(10, 10)
    start_x, start_y = solid.x, solid.y
    solid.vx, solid.vy = 5.0, -3.0
    solid.move()
    assert (solid.x, solid.y) == (start_x + 5.0, start_y - 3.0)
    assert (solid.vx, solid.vy) == (0.0, 0.0)


def test_launch_sets_velocity_toward_target(world):
    solid = Solid(16, world)
    solid.set_grid_position(10, 10)
    solid.charge_duration = 1.0
    solid.launch(solid.x + 100, solid.y, 100, 0.1)
    assert solid.vx > 0
    assert solid.vy == pytest.approx(0)
    assert solid.charge_progress == pytest.approx(0.1)


def test_launch_moves_body_after_charge(world):
    solid = Solid(16, world)
    solid.set_grid_position(10, 10)
    start_x = solid.x
    solid.launch(solid.x + 100, solid.y, 100, 0.1)
    solid.launch(solid.x + 100, solid.y, 100, 0.1)
    assert solid.x > start_x
    assert not math.isnan(solid.x)


def test_launch_at_own_position_stays_still(world):
    solid = Solid(16, world)
    solid.set_grid_position(10, 10)
    solid.launch(solid.x, solid.y, 100, 0.1)
    assert (solid.vx, solid.vy) == (0.0, 0.0)


def test_solid_without_world_raises():
    with pytest.raises(RuntimeError):
        Solid(16).grid_position()