"""Pellets that fly across the level and the items they turn into."""

from __future__ import annotations

import re

import pygame

from .collision import World
from .entity import Entity, EntityFactory
from .events import EventBus

PELLET_COLOUR = (250, 250, 250)
PELLET_RADIUS = 8
PROJECTILE_POWER = 900

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"no integer at the start of {text!r}")
    return int(match.group(1))


def _draw_pellet(surface: pygame.Surface, x: float, y: float, offset: tuple[float, float]) -> None:
    ox, oy = offset
    pygame.draw.circle(surface, PELLET_COLOUR, (round(x - ox), round(y - oy)), PELLET_RADIUS)


class Item(Entity):
    """A pellet lying on the floor, waiting to be picked up."""

    def __init__(
        self, x: float, y: float, world: World | None = None, events: EventBus | None = None
    ) -> None:
        super().__init__(PELLET_RADIUS, world, events)
        self.set_position(x, y)

    def render(self, surface: pygame.Surface, offset: tuple[float, float]) -> None:
        _draw_pellet(surface, self.x, self.y, offset)

    def serialise(self) -> str:
        return f"{self.x:.6f} {self.y:.6f}\n"


class ItemFactory(EntityFactory):
    """Builds items from ``"x y"`` lines; anything after ``y`` is ignored."""

    def deserialise(self, line: str) -> Item:
        space = line.find(" ")
        if space < 0:
            raise ValueError(f"item line has no space: {line!r}")
        x = _leading_int(line[: space + 1])
        y = _leading_int(line[space:])
        return Item(x, y, self.world, self.events)


class Projectile(Entity):
    """A pellet launched towards a target by the player or a ranged enemy."""

    def __init__(
        self,
        x: float,
        y: float,
        tx: int,
        ty: int,
        parent: object | None,
        world: World | None = None,
        events: EventBus | None = None,
    ) -> None:
        super().__init__(PELLET_RADIUS, world, events)
        self.tx = int(tx)
        self.ty = int(ty)
        self.parent = parent
        self.set_position(x, y)
        self.active = True
        self.charge_progress = 0.0

    def render(self, surface: pygame.Surface, offset: tuple[float, float]) -> None:
        if self.active:
            _draw_pellet(surface, self.x, self.y, offset)

    def drop(self) -> None:
        """Replace the pellet with an item where it lies."""
        self.active = False
        world = self.world
        if world is not None and world.items is not None:
            world.items.spawn("any", int(self.x), int(self.y))
        self.state = "dead"

    def toss(self, x: float, y: float) -> None:
        """Put the pellet back in flight from ``(x, y)``."""
        self.set_position(x, y)
        self.active = True
        self.charge_progress = 0.0

    def update(self, dt: float) -> None:
        self.launch(self.tx, self.ty, PROJECTILE_POWER, dt)
        world = self.world
        if world is not None and world.enemies is not None:
            for enemy in list(world.enemies):
                if self.contact(enemy.x, enemy.y) and enemy is not self.parent:
                    enemy.set_state("stunned")
                    self.drop()
        player = world.player if world is not None else None
        if player is not None and self.contact(player.x, player.y) and player is not self.parent:
            self._emit("Death")
            self.drop()
        collided = self.resolve_collision()
        if (collided and not self.contact(self.x, self.y)) or (self.vx == 0 and self.vy == 0):
            self.drop()

    def serialise(self) -> str:
        return ""