"""The tile grid of a level, its persistence and its pathfinding overlay."""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Iterable
from enum import IntEnum

import pygame

from .files import LevelFile

UNREACHABLE = 2**31 - 1
"""Pathfinding cost of walls and of cells outside the map."""


class Tile(IntEnum):
    FLOOR = 0
    WALL = 1
    MARKED_FLOOR = 2
    GRAIL = 3
    TORCH = 4


FLOOR_TILES = frozenset({Tile.FLOOR, Tile.MARKED_FLOOR})
SOLID_TILES = frozenset({Tile.WALL, Tile.GRAIL, Tile.TORCH})

TILE_COLOURS = {
    Tile.FLOOR: (60, 60, 60),
    Tile.MARKED_FLOOR: (60, 60, 60),
    Tile.WALL: (120, 90, 60),
    Tile.GRAIL: (220, 190, 40),
    Tile.TORCH: (230, 110, 30),
}
_ATLAS_COLUMNS = {
    Tile.FLOOR: 0,
    Tile.MARKED_FLOOR: 0,
    Tile.WALL: 1,
    Tile.GRAIL: 2,
    Tile.TORCH: 3,
}
_DIMENSIONS = re.compile(r"\s*([+-]?\d+)\s+([+-]?\d+)")


class TileMap:
    """A rectangular grid of tiles; cells outside it read as walls."""

    def __init__(
        self,
        width: int = 20,
        height: int = 20,
        tile_size: int = 32,
        file: LevelFile | None = None,
        atlas: pygame.Surface | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.tile_size = tile_size
        self.file = file if file is not None else LevelFile("map")
        self.atlas = atlas
        self.grid = self._blank()
        self.pathfinding = self._blank()

    def _blank(self) -> list[list[int]]:
        return [[0] * self.width for _ in range(self.height)]

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> int:
        x, y = int(x), int(y)
        return self.grid[y][x] if self._inside(x, y) else int(Tile.WALL)

    def set_tile(self, x: int, y: int, value: int) -> None:
        x, y = int(x), int(y)
        if not self._inside(x, y):
            raise IndexError(f"tile ({x}, {y}) is outside the map")
        self.grid[y][x] = int(value)

    def is_floor(self, x: int, y: int) -> bool:
        return self.get_tile(x, y) in FLOOR_TILES

    def is_solid(self, x: int, y: int) -> bool:
        return self.get_tile(x, y) in SOLID_TILES

    def absolute_size(self) -> tuple[float, float]:
        """Size of the map in pixels, borders excluded."""
        return float(self.width * self.tile_size), float(self.height * self.tile_size)

    def grid_to_absolute(self, x: int, y: int) -> tuple[float, float]:
        """Pixel position of the centre of the tile at grid ``(x, y)``."""
        return (x + 0.5) * self.tile_size, (y + 0.5) * self.tile_size

    def serialise(self) -> str:
        digits = "".join(str(value) for row in self.grid for value in row)
        return f"{self.width} {self.height}\n{digits}"

    def deserialise(self, lines: Iterable[str]) -> None:
        """Read dimensions from the first line and tiles from the lines after it."""
        for index, line in enumerate(lines):
            if index == 0:
                match = _DIMENSIONS.match(line)
                if match is None:
                    raise ValueError(f"bad map dimensions: {line!r}")
                width, height = int(match.group(1)), int(match.group(2))
                if width <= 0 or height <= 0:
                    raise ValueError(f"map dimensions must be positive: {line!r}")
                self.width, self.height = width, height
                self.grid = self._blank()
                self.pathfinding = self._blank()
                continue
            count = self.width * self.height
            if len(line) < count:
                raise ValueError(f"map line holds {len(line)} tiles, expected {count}")
            values = [ord(char) - ord("0") for char in line[:count]]
            self.grid = [
                values[start : start + self.width]
                for start in range(0, count, self.width)
            ]

    def load(self) -> None:
        self.deserialise(self.file.read_lines())

    def save(self) -> None:
        self.file.write(self.serialise())

    def path_tile(self, x: int, y: int) -> int:
        x, y = int(x), int(y)
        return self.pathfinding[y][x] if self._inside(x, y) else UNREACHABLE

    def set_path_tile(self, x: int, y: int, value: int) -> None:
        x, y = int(x), int(y)
        if self._inside(x, y):
            self.pathfinding[y][x] = value

    def generate_pathfinding(self, tx: int, ty: int) -> None:
        """Fill the overlay with walking distances to ``(tx, ty)``.

        The target holds 1 and each step across floor adds 1. Cells that
        cannot be reached hold 0 and walls hold ``UNREACHABLE``.
        """
        tx, ty = int(tx), int(ty)
        self.pathfinding = self._blank()
        if self._inside(tx, ty):
            self.pathfinding[ty][tx] = 1
            frontier = deque([(tx, ty)])
            while frontier:
                x, y = frontier.popleft()
                cost = self.pathfinding[y][x] + 1
                for nx, ny in ((x + 1, y), (x, y + 1), (x - 1, y), (x, y - 1)):
                    if self.is_floor(nx, ny) and self.pathfinding[ny][nx] == 0:
                        self.pathfinding[ny][nx] = cost
                        frontier.append((nx, ny))
        for y, row in enumerate(self.grid):
            for x, value in enumerate(row):
                if value == Tile.WALL:
                    self.pathfinding[y][x] = UNREACHABLE

    def render(self, surface: pygame.Surface, offset: tuple[float, float]) -> None:
        """Draw every tile, plus a border of walls, shifted by ``-offset``."""
        ox, oy = offset
        size = self.tile_size
        atlas_row = 32 if self.file.level_name == "Arena" else 0
        for x in range(-1, self.width + 1):
            for y in range(-1, self.height + 1):
                value = self.get_tile(x, y)
                if value not in _ATLAS_COLUMNS:
                    continue
                tile = Tile(value)
                rect = pygame.Rect(round(x * size - ox), round(y * size - oy), size, size)
                if self.atlas is not None:
                    area = pygame.Rect(_ATLAS_COLUMNS[tile] * 32, atlas_row, 32, 32)
                    surface.blit(pygame.transform.scale(self.atlas.subsurface(area), (size, size)), rect)
                else:
                    surface.fill(TILE_COLOURS[tile], rect)