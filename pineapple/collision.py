"""Round bodies that move through the tile map without passing through walls."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .tilemap import TileMap

_MAX_STEP = 2
_CONTACT_REACH = 16


def _cdiv(numerator: int, denominator: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


@dataclass
class World:
    """Everything in a level that bodies need to see."""

    tilemap: TileMap
    player: Any = None
    enemies: Any = None
    items: Any = None
    projectiles: Any = None


class Solid:
    """A circular body with a position, a velocity and a charge timer."""

    def __init__(self, contact_radius: int = 0, world: World | None = None) -> None:
        self.contact_radius = contact_radius
        self.world = world
        self.speed = 0
        self.x = 0.0
        self.y = 0.0
        self.vx = 0.0
        self.vy = 0.0
        self.charge_duration = 0.0
        self.charge_progress = 0.0
        self._collided = False

    @property
    def tilemap(self) -> TileMap:
        if self.world is None:
            raise RuntimeError("solid is not placed in a world")
        return self.world.tilemap

    def distance(self, tx: float, ty: float) -> float:
        return math.hypot(tx - self.x, ty - self.y)

    def orientation(self, tx: float, ty: float) -> float:
        """Angle from this body's centre towards ``(tx, ty)``."""
        return -math.atan2(tx - self.x, ty - self.y) + 3.14 / 2

    def resolve_corner_collision(
        self, ex: int, ey: int, tx: int, ty: int
    ) -> tuple[float, float]:
        """Push ``(tx, ty)`` out of the tile corner at grid ``(ex, ey)``."""
        ex, ey, tx, ty = int(ex), int(ey), int(tx), int(ty)
        size = self.tilemap.tile_size
        overlap_x = ex * size - tx
        overlap_y = ey * size - ty
        overlap = int(math.hypot(overlap_x, overlap_y) - self.contact_radius)
        if overlap > 0:
            return float(tx), float(ty)
        self._collided = True
        return (
            float(tx + _cdiv(overlap_x * overlap, self.contact_radius)),
            float(ty + _cdiv(overlap_y * overlap, self.contact_radius)),
        )

    def resolve_edge_collision(self, edge: int, self_pos: int) -> int:
        """Push a coordinate out of the tile edge at grid line ``edge``."""
        edge, self_pos = int(edge), int(self_pos)
        distance = edge * self.tilemap.tile_size - self_pos
        overlap = abs(distance) - self.contact_radius
        if overlap > 0:
            return self_pos
        self._collided = True
        return self_pos + _cdiv(distance * overlap, self.contact_radius)

    def resolve_collision(self) -> bool:
        """Keep the body out of the eight tiles around it; report any contact."""
        self._collided = False
        gx, gy = self.grid_position()
        tiles = self.tilemap

        if not tiles.is_floor(gx - 1, gy):
            self.x = float(self.resolve_edge_collision(gx, self.x))
        if not tiles.is_floor(gx - 1, gy - 1):
            self.x, self.y = self.resolve_corner_collision(gx, gy, self.x, self.y)
        if not tiles.is_floor(gx, gy - 1):
            self.y = float(self.resolve_edge_collision(gy, self.y))
        if not tiles.is_floor(gx + 1, gy - 1):
            self.x, self.y = self.resolve_corner_collision(gx + 1, gy, self.x, self.y)
        if not tiles.is_floor(gx + 1, gy):
            self.x = float(self.resolve_edge_collision(gx + 1, self.x))
        if not tiles.is_floor(gx + 1, gy + 1):
            self.x, self.y = self.resolve_corner_collision(gx + 1, gy + 1, self.x, self.y)
        if not tiles.is_floor(gx, gy + 1):
            self.y = float(self.resolve_edge_collision(gy + 1, self.y))
        if not tiles.is_floor(gx - 1, gy + 1):
            self.x, self.y = self.resolve_corner_collision(gx, gy + 1, self.x, self.y)
        return self._collided

    def set_grid_position(self, gx: float, gy: float) -> None:
        """Place the body at the centre of grid tile ``(gx, gy)``."""
        size = self.tilemap.tile_size
        self.x = (gx + 0.5) * size
        self.y = (gy + 0.5) * size

    def set_position(self, x: float, y: float) -> None:
        """Place the body at the centre of pixel ``(x, y)``."""
        self.x = x + 0.5
        self.y = y + 0.5

    def grid_position(self) -> tuple[int, int]:
        size = self.tilemap.tile_size
        return math.floor(self.x / size), math.floor(self.y / size)

    def launch(self, tx: float, ty: float, power: float, dt: float) -> None:
        """Dash towards ``(tx, ty)``, slowing as the charge goes on."""
        if self.charge_progress == 0:
            dx = tx - self.x
            dy = ty - self.y
            distance = math.hypot(dx, dy)
            if distance == 0:
                self.vx = self.vy = 0.0
            else:
                self.vx = dx * dt * power / distance
                self.vy = dy * dt * power / distance

        if self.charge_progress > self.charge_duration:
            damping = (self.charge_progress * 3 + 1) ** 2
            dx = self.vx / damping
            dy = self.vy / damping
            velocity = math.hypot(dx, dy)
            if velocity > _MAX_STEP:
                for _ in range(math.ceil(velocity / _MAX_STEP)):
                    self.x += dx * _MAX_STEP / velocity
                    self.y += dy * _MAX_STEP / velocity
                    self.resolve_collision()
            else:
                self.vx = self.vy = 0.0

        self.charge_progress += dt

    def contact(self, tx: float, ty: float) -> bool:
        """Whether another body centred at ``(tx, ty)`` touches this one."""
        return self.distance(tx, ty) < _CONTACT_REACH + self.contact_radius

    def move(self) -> None:
        """Apply the velocity once, resolve walls and stop."""
        self.x += self.vx
        self.y += self.vy
        self.resolve_collision()
        self.vx = self.vy = 0.0