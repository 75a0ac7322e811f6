"""Enemies that chase the player: melee chargers and ranged shooters."""

from __future__ import annotations

import logging
import math
import re
from abc import abstractmethod
from collections.abc import Mapping

import pygame

from .collision import World
from .entity import Entity, EntityFactory
from .events import EventBus
from .projectile import Projectile

NORMAL_TINT = (255, 255, 255)
STUNNED_TINT = (100, 100, 100)
SIGHT_RANGE = 220
CHARGE_RANGE = 100
CHARGE_POWER = 3200
RECOIL_POWER = -50

_log = logging.getLogger(__name__)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"no integer at the start of {text!r}")
    return int(match.group(1))


def _round_away(value: float) -> float:
    return float(math.ceil(value) if value > 0 else math.floor(value))


class Enemy(Entity):
    """Common behaviour of every enemy kind."""

    colour = (200, 200, 200)

    def __init__(
        self,
        kind: str,
        world: World | None = None,
        events: EventBus | None = None,
        texture: pygame.Surface | None = None,
    ) -> None:
        super().__init__(14, world, events)
        self.kind = kind
        self.texture = texture
        self.stunned_duration = 2.0
        self.stunned_progress = 0.0

    def take_hit(self) -> None:
        self.state = "dead"

    def obstructed(self, player_x: float, player_y: float) -> bool:
        """Whether any solid tile lies in the box spanned by this enemy and the player."""
        tiles = self.tilemap
        gx, gy = self.grid_position()
        px = math.floor(player_x / tiles.tile_size)
        py = math.floor(player_y / tiles.tile_size)
        return any(
            tiles.is_solid(x, y)
            for x in range(min(gx, px), max(gx, px) + 1)
            for y in range(min(gy, py), max(gy, py) + 1)
        )

    def render(self, surface: pygame.Surface, offset: tuple[float, float]) -> None:
        tint = STUNNED_TINT if self.state == "stunned" else NORMAL_TINT
        ox, oy = offset
        cx, cy = self.x - ox, self.y - oy
        if self.texture is not None:
            image = self.texture.copy()
            image.fill(tint, special_flags=pygame.BLEND_RGB_MULT)
            surface.blit(image, (round(cx - 16), round(cy - 16)))
        else:
            colour = tuple(c * t // 255 for c, t in zip(self.colour, tint))
            pygame.draw.circle(surface, colour, (round(cx), round(cy)), self.contact_radius)

    def set_state(self, state: str) -> None:
        self.state = state

    def _set_velocity(self, dx: float, dy: float, dt: float) -> float:
        distance = math.hypot(dx, dy)
        if distance == 0:
            self.vx = self.vy = 0.0
        else:
            self.vx = _round_away(dx / distance * dt * self.speed)
            self.vy = _round_away(dy / distance * dt * self.speed)
        return distance

    def pathfind(self, dt: float) -> None:
        """Step towards the neighbouring tile with the lowest pathfinding cost."""
        tiles = self.tilemap
        gx, gy = self.grid_position()
        below = tiles.path_tile(gx, gy + 1)
        right = tiles.path_tile(gx + 1, gy)
        left = tiles.path_tile(gx - 1, gy)
        above = tiles.path_tile(gx, gy - 1)
        cheapest = min(below, right, left, above)
        if below == cheapest:
            tx, ty = gx, gy + 1
        elif right == cheapest:
            tx, ty = gx + 1, gy
        elif above == cheapest:
            tx, ty = gx, gy - 1
        else:
            tx, ty = gx - 1, gy
        target_x = int((tx + 0.5) * tiles.tile_size)
        target_y = int((ty + 0.5) * tiles.tile_size)
        self._set_velocity(target_x - self.x, target_y - self.y, dt)
        self.move()

    def serialise(self) -> str:
        gx, gy = self.grid_position()
        return f"{float(gx):.6f} {float(gy):.6f},{self.kind}\n"

    def _restore_if_in_wall(self, prev_x: float, prev_y: float) -> None:
        gx, gy = self.grid_position()
        if self.tilemap.is_solid(gx, gy):
            self.x, self.y = prev_x, prev_y

    @abstractmethod
    def update(self, dt: float) -> None:
        """Run the enemy's behaviour for ``dt`` seconds."""


class Melee(Enemy):
    """Walks towards the player and charges when close."""

    colour = (230, 200, 60)

    def __init__(
        self,
        x: int,
        y: int,
        world: World | None = None,
        events: EventBus | None = None,
        texture: pygame.Surface | None = None,
    ) -> None:
        super().__init__("Melee", world, events, texture)
        self.speed = 40
        self.charge_duration = 0.6
        self.set_grid_position(x, y)

    def update(self, dt: float) -> None:
        prev_x, prev_y = self.x, self.y
        player = self.world.player
        if self.state == "attacking":
            self.launch(player.x, player.y, CHARGE_POWER, dt)
            if self.resolve_collision():
                self.state = "stunned"
            if self.contact(player.x, player.y):
                self._emit("Death")
            if self.charge_progress > 2:
                self.state = "pathfinding"
        elif self.state == "pathfinding":
            if self.obstructed(player.x, player.y):
                self.pathfind(dt)
            else:
                distance = self._set_velocity(player.x - self.x, player.y - self.y, dt)
                self.move()
                if distance < CHARGE_RANGE and not self.resolve_collision():
                    self.state = "attacking"
                    self.charge_progress = 0.0
        elif self.state == "stunned":
            self.stunned_progress += dt
            if self.stunned_progress > self.stunned_duration:
                self.stunned_progress = 0.0
                self.state = "pathfinding"
        elif self.state == "passive":
            if self.distance(player.x, player.y) < SIGHT_RANGE and not self.obstructed(
                player.x, player.y
            ):
                self.state = "pathfinding"
        self._restore_if_in_wall(prev_x, prev_y)
        self.resolve_collision()


class Ranged(Enemy):
    """Keeps its distance and shoots pellets at the player."""

    colour = (240, 240, 90)

    def __init__(
        self,
        x: int,
        y: int,
        world: World | None = None,
        events: EventBus | None = None,
        texture: pygame.Surface | None = None,
    ) -> None:
        super().__init__("Ranged", world, events, texture)
        self.speed = 40
        self.charge_duration = 0.6
        self.cooldown_duration = 2.0
        self.cooldown_progress = 0.0
        self.loaded = True
        self.tx = 0.0
        self.ty = 0.0
        self.set_grid_position(x, y)

    def update(self, dt: float) -> None:
        prev_x, prev_y = self.x, self.y
        player = self.world.player
        if self.state == "attacking":
            self.loaded = False
            self.cooldown_progress = 0.0
            if self.world.projectiles is not None:
                self.world.projectiles.add(
                    Projectile(
                        prev_x, prev_y, int(player.x), int(player.y), self, self.world, self.events
                    )
                )
            self.state = "passive"
        elif self.state == "pathfinding":
            self.pathfind(dt)
            if not self.obstructed(player.x, player.y):
                self.state = "passive"
        elif self.state == "stunned":
            self.stunned_progress += dt
            if self.stunned_progress > self.stunned_duration:
                self.stunned_progress = 0.0
                self.state = "passive"
        elif self.state == "passive":
            self.cooldown_progress += dt
            if not self.loaded:
                self.launch(self.tx, self.ty, RECOIL_POWER, dt)
            if self.cooldown_progress > self.cooldown_duration and not self.obstructed(
                player.x, player.y
            ):
                self.cooldown_progress = 0.0
                self.loaded = True
                self.state = "attacking"
            elif self.cooldown_progress < self.cooldown_duration - 0.5:
                self.tx, self.ty = player.x, player.y
            if self.distance(player.x, player.y) < SIGHT_RANGE and self.obstructed(
                player.x, player.y
            ):
                self.state = "pathfinding"
        self._restore_if_in_wall(prev_x, prev_y)

    def render(self, surface: pygame.Surface, offset: tuple[float, float]) -> None:
        super().render(surface, offset)


class EnemyFactory(EntityFactory):
    """Builds enemies from ``"gx gy,Kind"`` lines."""

    def __init__(
        self,
        world: World | None = None,
        events: EventBus | None = None,
        textures: Mapping[str, pygame.Surface] | None = None,
    ) -> None:
        super().__init__(world, events)
        self.textures = dict(textures or {})

    def deserialise(self, line: str) -> Enemy:
        space = line.find(" ")
        if space < 0:
            raise ValueError(f"enemy line has no space: {line!r}")
        comma = line.find(",")
        x = _leading_int(line[: space + 1])
        y = _leading_int(line[space:])
        kind = line[comma + 1 :] if comma >= 0 else line
        if kind == "Ranged":
            return Ranged(x, y, self.world, self.events, self.textures.get("Ranged"))
        if kind != "Melee":
            _log.warning("%s is not a valid enemy type!", kind)
        return Melee(x, y, self.world, self.events, self.textures.get("Melee"))