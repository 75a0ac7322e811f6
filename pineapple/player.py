"""The player character: movement, sword slashes, pellets and torch fuel."""

from __future__ import annotations

import re

import pygame

from .collision import World
from .entity import Entity
from .events import EventBus, InputState
from .files import LevelFile
from .geometry import ArcSlash
from .projectile import Projectile
from .tilemap import Tile

LEFT_BUTTON = 1
PLAYER_COLOUR = (240, 200, 150)
PLAYER_RADIUS = 16
PLAYER_SPEED = 90
ATTACK_RANGE = 86
TORCH_FUEL = 60.0
SLASH_POWER = 200
RECALL_POWER = -200
SLASH_RADIUS = 24
SLASH_ARC = 3.14
SLASH_DURATION = 0.3
SLASH_SWEEP_END = 0.25

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"no integer at the start of {text!r}")
    return int(match.group(1))


class Player(Entity):
    """The character the user controls."""

    def __init__(
        self,
        world: World | None = None,
        events: EventBus | None = None,
        file: LevelFile | None = None,
        texture: pygame.Surface | None = None,
    ) -> None:
        super().__init__(PLAYER_RADIUS, world, events)
        self.speed = PLAYER_SPEED
        self.range = ATTACK_RANGE
        self.torch_fuel = TORCH_FUEL
        self.loaded = True
        self.file = file if file is not None else LevelFile("player")
        self.texture = texture
        self.charge_duration = 0.0
        self.charge_progress = 0.0
        self.attacking = False
        self.hit = False
        self.facing = 0
        self.direction = 1
        self.tx = 0.0
        self.ty = 0.0
        self.angle1 = 0.0
        self.angle2 = 0.0

    def load(self) -> None:
        """Place the player on the grid tile stored in the player file."""
        for line in self.file.read_lines():
            space = line.find(" ")
            if space < 0:
                raise ValueError(f"player line has no space: {line!r}")
            gx = _leading_int(line[: space + 1])
            gy = _leading_int(line[space:])
            self.set_grid_position(gx, gy)

    def save(self) -> None:
        gx, gy = self.grid_position()
        self.file.write(f"{float(gx):.6f} {float(gy):.6f}\n")

    def in_hitbox(self, tx: float, ty: float) -> bool:
        """Whether ``(tx, ty)`` lies within the arc swept by the sword."""
        angle = int(self.orientation(tx, ty))
        in_scope = self.facing - 3.14 / 3 < angle < self.facing + 3.14 / 3
        in_range = self.distance(tx, ty) < self.range
        return in_range and in_scope

    def action(self, mx: float, my: float, button: int) -> None:
        """Slash towards ``(mx, my)`` on a left click, otherwise shoot a pellet."""
        self.tx = mx
        self.ty = my
        world = self.world
        if button != LEFT_BUTTON:
            if self.loaded:
                self.loaded = False
                if world is not None and world.projectiles is not None:
                    world.projectiles.add(
                        Projectile(self.x, self.y, int(mx), int(my), self, world, self.events)
                    )
            return

        self.attacking = True
        self.charge_progress = 0.0
        self.facing = int(self.orientation(mx, my))
        self.direction = -self.direction

        tiles = self.tilemap
        gx, gy = self.grid_position()
        for i in (-1, 0, 1):
            for j in (-1, 0, 1):
                cx, cy = tiles.grid_to_absolute(gx + i, gy + j)
                tile = tiles.get_tile(gx + i, gy + j)
                if self.in_hitbox(cx, cy) and tiles.is_solid(gx + i, gy + j):
                    self.hit = True
                    if tile == Tile.TORCH:
                        self.save()
                        self.torch_fuel = TORCH_FUEL
                    elif tile == Tile.GRAIL:
                        self._emit("Grail")

        if world is not None and world.enemies is not None:
            for enemy in list(world.enemies):
                if self.in_hitbox(enemy.x, enemy.y):
                    self.hit = True
                    enemy.take_hit()

    def attack(self, dt: float) -> None:
        """Lunge towards the slash target and advance the slash animation."""
        self.launch(self.tx, self.ty, SLASH_POWER, dt)
        if self.charge_progress > SLASH_DURATION:
            self.attacking = False
            self.hit = False
        if self.charge_progress < SLASH_SWEEP_END:
            self.angle1 = SLASH_ARC * self.charge_progress / SLASH_DURATION
            self.angle2 = SLASH_ARC * self.charge_progress / SLASH_DURATION / 2

    def update(self, dt: float, inputs: InputState) -> None:
        """Burn torch fuel, attack or walk, and pick up pellets when empty-handed."""
        self.torch_fuel -= dt
        if self.attacking:
            self.attack(dt)
        else:
            if not self.loaded:
                self.launch(self.tx, self.ty, RECALL_POWER, dt)
            if self.vx == 0 and self.vy == 0:
                if inputs.is_pressed("w"):
                    self.vy = -self.speed * dt
                if inputs.is_pressed("a"):
                    self.vx = -self.speed * dt
                if inputs.is_pressed("s"):
                    self.vy = self.speed * dt
                if inputs.is_pressed("d"):
                    self.vx = self.speed * dt
                self.move()

        world = self.world
        if not self.loaded and world is not None and world.items is not None:
            for item in list(world.items):
                if self.contact(item.x, item.y):
                    self.loaded = True
                    world.items.remove(list(world.items).index(item))

    def render(self, surface: pygame.Surface, offset: tuple[float, float]) -> None:
        ox, oy = offset
        cx, cy = self.x - ox, self.y - oy
        if self.texture is not None:
            surface.blit(self.texture, (round(cx - 16), round(cy - 16)))
        else:
            pygame.draw.circle(surface, PLAYER_COLOUR, (round(cx), round(cy)), PLAYER_RADIUS)
        if self.attacking:
            arc = ArcSlash(
                self.x,
                self.y,
                SLASH_RADIUS,
                self.facing + self.direction * (self.angle2 - 3.14 / 4),
                self.facing + self.direction * (self.angle1 - 3.14 / 4),
            )
            arc.render(surface, offset)

    def serialise(self) -> str:
        return ""