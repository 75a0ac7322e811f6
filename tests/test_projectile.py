import pygame
import pytest

from pineapple.collision import Solid, World
from pineapple.entity import Entity, EntityList
from pineapple.events import EventBus
from pineapple.files import LevelFile
from pineapple.projectile import PELLET_COLOUR, Item, ItemFactory, Projectile
from pineapple.tilemap import TileMap


class Target(Entity):
    def __init__(self, world, x, y):
        super().__init__(14, world)
        self.set_position(x, y)

    def render(self, surface, offset):
        pass

    def set_state(self, state):
        self.state = state

    def serialise(self):
        return ""


@pytest.fixture
def world(tmp_path):
    world = World(TileMap())
    world.items = EntityList(LevelFile("items", "L", tmp_path), ItemFactory(world))
    world.enemies = EntityList()
    player = Solid(16, world)
    player.set_grid_position(18, 18)
    world.player = player
    return world


def test_item_serialise_format():
    item = Item(12, 7)
    assert item.serialise() == "12.500000 7.500000\n"


def test_item_round_trip():
    factory = ItemFactory()
    item = Item(40, 60)
    copy = factory.deserialise(item.serialise().rstrip("\n"))
    assert (copy.x, copy.y) == (item.x, item.y)


def test_item_factory_ignores_kind_suffix():
    item = ItemFactory().deserialise("5 9,any")
    assert (item.x, item.y) == (5.5, 9.5)


def test_item_factory_rejects_bad_line():
    with pytest.raises(ValueError):
        ItemFactory().deserialise("nonsense")


def test_item_render():
    surface = pygame.Surface((80, 80), 0, 32)
    Item(40, 40).render(surface, (0, 0))
    assert surface.get_at((40, 40))[:3] == PELLET_COLOUR


def test_projectile_flies_and_drops_an_item(world):
    projectile = Projectile(100, 100, 200, 100, None, world)
    projectile.update(1 / 60)
    assert projectile.x == 100.5
    for _ in range(300):
        if projectile.state == "dead":
            break
        projectile.update(1 / 60)
    assert projectile.state == "dead"
    assert projectile.active is False
    assert projectile.x > 100.5
    assert len(world.items) == 1
    item = world.items[0]
    assert (item.x, item.y) == (int(projectile.x) + 0.5, int(projectile.y) + 0.5)


def test_projectile_hitting_player_pushes_death(world):
    bus = EventBus()
    world.player.set_position(100, 100)
    projectile = Projectile(100, 100, 200, 100, None, world, bus)
    projectile.update(1 / 60)
    assert list(bus.drain_actions()) == ["Death"]
    assert projectile.state == "dead"


def test_projectile_spares_its_parent(world):
    bus = EventBus()
    world.player.set_position(100, 100)
    projectile = Projectile(100, 100, 200, 100, world.player, world, bus)
    projectile.update(1 / 60)
    assert list(bus.drain_actions()) == []
    assert projectile.state == "passive"


def test_projectile_stuns_enemy(world):
    target = Target(world, 100, 100)
    world.enemies.add(target)
    projectile = Projectile(100, 100, 200, 100, None, world)
    projectile.update(1 / 60)
    assert target.state == "stunned"
    assert projectile.state == "dead"
    assert len(world.items) >= 1


def test_toss_resets_flight(world):
    projectile = Projectile(100, 100, 200, 100, None, world)
    projectile.active = False
    projectile.charge_progress = 1.0
    projectile.toss(50, 60)
    assert (projectile.x, projectile.y) == (50.5, 60.5)
    assert projectile.active is True
    assert projectile.charge_progress == 0


def test_inactive_projectile_is_not_drawn(world):
    surface = pygame.Surface((80, 80), 0, 32)
    projectile = Projectile(40, 40, 60, 40, None, world)
    projectile.active = False
    projectile.render(surface, (0, 0))
    assert surface.get_at((40, 40))[:3] == (0, 0, 0)
    projectile.active = True
    projectile.render(surface, (0, 0))
    assert surface.get_at((40, 40))[:3] == PELLET_COLOUR


def test_projectile_serialises_to_nothing(world):
    assert Projectile(1, 1, 2, 2, None, world).serialise() == ""