"""A view that follows a point while staying over the map."""

from __future__ import annotations

from .tilemap import TileMap


class Camera:
    """Keeps a window-sized view centred on a point, clamped to the map."""

    def __init__(self, tilemap: TileMap, window_size: tuple[int, int] = (600, 400)) -> None:
        self.tilemap = tilemap
        self.window_size = (int(window_size[0]), int(window_size[1]))
        self.x = 0.0
        self.y = 0.0

    def view_position(self, px: float, py: float) -> tuple[float, float]:
        """Where the view centre goes when following ``(px, py)``."""
        width, height = self.window_size
        map_width, map_height = self.tilemap.absolute_size()
        size = self.tilemap.tile_size
        view_x = min(max(px, width / 2 - size), map_width - width / 2 + size)
        view_y = min(max(py, height / 2 - size), map_height - height / 2 + size)
        return float(view_x), float(view_y)

    def set(self, px: float, py: float) -> None:
        self.x, self.y = self.view_position(px, py)

    @property
    def offset(self) -> tuple[float, float]:
        """World position of the top-left corner of the view."""
        width, height = self.window_size
        return self.x - width / 2, self.y - height / 2

    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        width, height = self.window_size
        return int(x - self.x + width // 2), int(y - self.y + height // 2)

    def screen_to_world(self, x: float, y: float) -> tuple[int, int]:
        width, height = self.window_size
        return int(self.x - width // 2 + x), int(self.y - height // 2 + y)