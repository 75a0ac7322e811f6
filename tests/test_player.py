import pygame
import pytest

from pineapple.collision import World
from pineapple.enemies import Melee
from pineapple.entity import EntityList
from pineapple.events import EventBus, InputState
from pineapple.files import LevelFile
from pineapple.player import LEFT_BUTTON, PLAYER_COLOUR, TORCH_FUEL, Player
from pineapple.projectile import Item
from pineapple.tilemap import Tile, TileMap


@pytest.fixture
def world():
    return World(
        tilemap=TileMap(),
        enemies=EntityList(),
        items=EntityList(),
        projectiles=EntityList(),
    )


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def player(world, bus, tmp_path):
    hero = Player(world, bus, LevelFile("player", "Test", tmp_path))
    world.player = hero
    hero.set_grid_position(5, 5)
    return hero


def test_save_writes_grid_position(player):
    player.save()
    assert player.file.path().read_text() == "5.000000 5.000000\n"


def test_save_load_round_trip(player, world, tmp_path):
    player.set_grid_position(7, 3)
    player.save()
    other = Player(world, None, LevelFile("player", "Test", tmp_path))
    other.load()
    assert (other.x, other.y) == (player.x, player.y)


def test_load_rejects_line_without_space(world, tmp_path):
    file = LevelFile("player", "Bad", tmp_path)
    file.write("12\n")
    with pytest.raises(ValueError):
        Player(world, None, file).load()


def test_in_hitbox_in_front_and_in_range(player):
    player.action(player.x + 124, player.y, LEFT_BUTTON)
    assert player.in_hitbox(player.x + 50, player.y)


def test_in_hitbox_out_of_range(player):
    player.action(player.x + 124, player.y, LEFT_BUTTON)
    assert not player.in_hitbox(player.x + 100, player.y)


def test_in_hitbox_behind(player):
    player.action(player.x + 124, player.y, LEFT_BUTTON)
    assert not player.in_hitbox(player.x - 50, player.y)


def test_slash_kills_enemy_in_front(player, world):
    enemy = Melee(6, 5, world)
    world.enemies.add(enemy)
    player.action(player.x + 124, player.y, LEFT_BUTTON)
    assert enemy.state == "dead"
    assert player.hit


def test_slash_misses_enemy_behind(player, world):
    enemy = Melee(4, 5, world)
    world.enemies.add(enemy)
    player.action(player.x + 124, player.y, LEFT_BUTTON)
    assert enemy.state == "passive"


def test_slash_alternates_direction(player):
    start = player.direction
    player.action(player.x + 124, player.y, LEFT_BUTTON)
    first = player.direction
    player.action(player.x + 124, player.y, LEFT_BUTTON)
    assert first == -start
    assert player.direction == start


def test_slashing_torch_refuels_and_saves(player, world):
    world.tilemap.set_tile(6, 5, Tile.TORCH)
    player.torch_fuel = 3.0
    player.action(player.x + 124, player.y, LEFT_BUTTON)
    assert player.torch_fuel == TORCH_FUEL
    assert player.file.path().exists()


def test_slashing_grail_emits_action(player, world, bus):
    world.tilemap.set_tile(6, 5, Tile.GRAIL)
    player.action(player.x + 124, player.y, LEFT_BUTTON)
    assert list(bus.drain_actions()) == ["Grail"]


def test_right_click_shoots_once(player, world):
    player.action(300, 176, 3)
    assert len(world.projectiles) == 1
    assert not player.loaded
    player.action(300, 176, 3)
    assert len(world.projectiles) == 1


def test_update_burns_torch(player):
    player.update(0.5, InputState())
    assert player.torch_fuel == pytest.approx(TORCH_FUEL - 0.5)


def test_update_walks_right(player):
    start_x, start_y = player.x, player.y
    player.update(0.1, InputState(keys=frozenset({"d"})))
    assert player.x > start_x
    assert player.y == start_y
    assert (player.vx, player.vy) == (0.0, 0.0)


def test_update_walks_up(player):
    start_x, start_y = player.x, player.y
    player.update(0.1, InputState(keys=frozenset({"w"})))
    assert player.y < start_y
    assert player.x == start_x


def test_update_picks_up_item(player, world):
    player.loaded = False
    world.items.add(Item(player.x, player.y, world))
    player.update(0.01, InputState())
    assert player.loaded
    assert len(world.items) == 0


def test_loaded_player_leaves_items(player, world):
    world.items.add(Item(player.x, player.y, world))
    player.update(0.01, InputState())
    assert len(world.items) == 1


def test_attack_ends_and_lunges(player):
    start_x = player.x
    player.action(player.x + 124, player.y, LEFT_BUTTON)
    for _ in range(5):
        player.update(0.1, InputState())
    assert not player.attacking
    assert player.x > start_x


def test_render_draws_player(player):
    surface = pygame.Surface((400, 400))
    player.render(surface, (0, 0))
    assert surface.get_at((round(player.x), round(player.y)))[:3] == PLAYER_COLOUR