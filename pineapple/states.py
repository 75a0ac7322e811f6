"""Game states: playing a level, editing one, and full screen images."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from pathlib import Path

import pygame

from .camera import Camera
from .collision import World
from .enemies import EnemyFactory
from .entity import EntityList
from .events import EventBus, InputState
from .files import LevelFile
from .player import Player
from .projectile import ItemFactory
from .savegame import DEFAULT_LEVELS
from .tilemap import Tile, TileMap
from .ui import Menu, Screen, UIElement

LEFT_BUTTON = 1
MIDDLE_BUTTON = 2
RIGHT_BUTTON = 3
EXTRA_BUTTON = 6

_log = logging.getLogger(__name__)


def _load_texture(path: Path) -> pygame.Surface | None:
    try:
        return pygame.image.load(str(path))
    except (OSError, pygame.error):
        return None


class State(ABC):
    """A level with its map, player, enemies, items and overlays."""

    def __init__(
        self,
        events: EventBus | None = None,
        root: Path | str = ".",
        window_size: tuple[int, int] = (600, 400),
    ) -> None:
        self.events = events if events is not None else EventBus()
        self.root = Path(root)
        self.window_size = (int(window_size[0]), int(window_size[1]))
        content = self.content_dir
        self.tilemap = TileMap(
            file=LevelFile("map", root=self.root),
            atlas=_load_texture(content / "tile_atlas.png"),
        )
        self.world = World(self.tilemap)
        self.player = Player(
            self.world,
            self.events,
            LevelFile("player", root=self.root),
            _load_texture(content / "character_face.png"),
        )
        textures = {
            kind: texture
            for kind, texture in (
                ("Melee", _load_texture(content / "pineapple.png")),
                ("Ranged", _load_texture(content / "lemon.png")),
            )
            if texture is not None
        }
        self.enemies = EntityList(
            LevelFile("enemy", root=self.root), EnemyFactory(self.world, self.events, textures)
        )
        self.items = EntityList(
            LevelFile("items", root=self.root), ItemFactory(self.world, self.events)
        )
        self.projectiles = EntityList(
            LevelFile("projectiles", root=self.root), ItemFactory(self.world, self.events)
        )
        self.world.player = self.player
        self.world.enemies = self.enemies
        self.world.items = self.items
        self.world.projectiles = self.projectiles
        self.camera = Camera(self.tilemap, self.window_size)
        self.ui_elements: list[UIElement] = []
        self.pause_menu = Menu(self.events, self.window_size)

    @property
    def content_dir(self) -> Path:
        return self.root / "content"

    def _files(self) -> list[LevelFile]:
        return [
            self.tilemap.file,
            self.player.file,
            self.enemies.file,
            self.items.file,
            self.projectiles.file,
        ]

    @property
    def level_name(self) -> str:
        return self.tilemap.file.level_name

    @level_name.setter
    def level_name(self, name: str) -> None:
        for file in self._files():
            file.level_name = name

    def load_level(self, level_name: str) -> None:
        """Read the map, player, enemies and items of ``level_name``."""
        self.level_name = level_name
        _log.info("loading level %s", level_name)
        self.tilemap.load()
        self.player.load()
        self.enemies.load()
        self.items.load()

    def _render_world(self, surface: pygame.Surface, with_projectiles: bool) -> None:
        self.camera.set(self.player.x, self.player.y)
        offset = self.camera.offset
        self.tilemap.render(surface, offset)
        self.player.render(surface, offset)
        self.enemies.render(surface, offset)
        self.items.render(surface, offset)
        if with_projectiles:
            self.projectiles.render(surface, offset)

    @abstractmethod
    def update(self, dt: float, inputs: InputState) -> None:
        """Advance the state by ``dt`` seconds."""

    @abstractmethod
    def draw(self, surface: pygame.Surface) -> None:
        """Draw the state onto ``surface``."""

    @abstractmethod
    def click(self, x: int, y: int, button: int, inputs: InputState) -> None:
        """Handle a mouse click at window position ``(x, y)``."""

    def key_press(self, key: str) -> None:
        """Handle a key going down; ignored unless a subclass cares."""


def _add_pause_options(menu: Menu) -> None:
    menu.add_option("Resume")
    menu.add_option("Controls")
    menu.add_slider("Volume")
    menu.add_option("Quit")


class GameState(State):
    """Playing a level."""

    def __init__(
        self,
        level_name: str | None = None,
        events: EventBus | None = None,
        root: Path | str = ".",
        window_size: tuple[int, int] = (600, 400),
    ) -> None:
        super().__init__(events, root, window_size)
        self.load_level(level_name if level_name is not None else DEFAULT_LEVELS[0])
        _add_pause_options(self.pause_menu)

    def update(self, dt: float, inputs: InputState) -> None:
        if self.ui_elements:
            self.ui_elements[-1].update(inputs)
            return
        gx, gy = self.player.grid_position()
        self.player.update(dt, inputs)
        self.projectiles.update(dt)
        self.enemies.update(dt)
        self.tilemap.generate_pathfinding(gx, gy)

    def key_press(self, key: str) -> None:
        if key == "escape":
            if self.ui_elements:
                self.ui_elements.pop()
            else:
                self.ui_elements.append(self.pause_menu)

    def draw(self, surface: pygame.Surface) -> None:
        self._render_world(surface, with_projectiles=True)
        if self.ui_elements:
            self.ui_elements[-1].render(surface)

    def click(self, x: int, y: int, button: int, inputs: InputState) -> None:
        world_x, world_y = self.camera.screen_to_world(x, y)
        self.player.action(world_x, world_y, button)


class EditorState(State):
    """Walking around a level and placing tiles, enemies and items."""

    def __init__(
        self,
        level_name: str = "Dungeon",
        events: EventBus | None = None,
        root: Path | str = ".",
        window_size: tuple[int, int] = (600, 400),
    ) -> None:
        super().__init__(events, root, window_size)
        self.player.set_grid_position(2, 2)
        self.load_level(level_name)

    def _set_tile(self, map_x: int, map_y: int, tile: Tile) -> None:
        try:
            self.tilemap.set_tile(map_x, map_y, tile)
        except IndexError:
            _log.warning("tried setting a tile outside of the map domain")

    def click(self, x: int, y: int, button: int, inputs: InputState) -> None:
        world_x, world_y = self.camera.screen_to_world(x, y)
        size = self.tilemap.tile_size
        map_x = math.floor(world_x / size)
        map_y = math.floor(world_y / size)

        if inputs.is_pressed("lshift"):
            if button == RIGHT_BUTTON:
                self.items.spawn("any", world_x, world_y)
            else:
                self.items.remove(self.items.at_position(world_x, world_y))
        elif inputs.is_pressed("lctrl"):
            if button == RIGHT_BUTTON:
                self.enemies.spawn("Melee", map_x, map_y)
            elif button == EXTRA_BUTTON:
                self.enemies.spawn("Ranged", map_x, map_y)
            elif button == MIDDLE_BUTTON:
                self.enemies.remove(self.enemies.at_position(world_x, world_y))
        elif inputs.is_pressed("lalt"):
            placed = {
                RIGHT_BUTTON: Tile.MARKED_FLOOR,
                MIDDLE_BUTTON: Tile.TORCH,
                EXTRA_BUTTON: Tile.GRAIL,
            }.get(button)
            if placed is not None:
                self._set_tile(map_x, map_y, placed)
        else:
            self._set_tile(map_x, map_y, Tile.WALL if button == RIGHT_BUTTON else Tile.FLOOR)

    def draw(self, surface: pygame.Surface) -> None:
        self._render_world(surface, with_projectiles=False)

    def update(self, dt: float, inputs: InputState) -> None:
        self.player.update(dt, inputs)
        if inputs.is_pressed("m"):
            _log.info("save")
            self.level_name = "Dungeon"
            self.tilemap.save()
            self.player.save()
            self.enemies.save()
            self.items.save()


class TitleState(State):
    """The title image with the start menu over it."""

    def __init__(
        self,
        events: EventBus | None = None,
        root: Path | str = ".",
        window_size: tuple[int, int] = (600, 400),
    ) -> None:
        super().__init__(events, root, window_size)
        self.background = Screen("title_screen", self.events, self.content_dir)
        self.start_menu = Menu(self.events, self.window_size)
        self.start_menu.add_option("Play")
        self.start_menu.add_option("Quit")

    def draw(self, surface: pygame.Surface) -> None:
        self.camera.set(0, 0)
        self.background.render(surface)
        self.start_menu.render(surface)

    def update(self, dt: float, inputs: InputState) -> None:
        self.start_menu.update(inputs)

    def click(self, x: int, y: int, button: int, inputs: InputState) -> None:
        """Clicks are handled by the start menu."""


class ScreenState(State):
    """A single full screen image."""

    def __init__(
        self,
        screen_name: str = "default_screen",
        events: EventBus | None = None,
        root: Path | str = ".",
        window_size: tuple[int, int] = (600, 400),
    ) -> None:
        super().__init__(events, root, window_size)
        self.background = Screen(screen_name, self.events, self.content_dir)

    def draw(self, surface: pygame.Surface) -> None:
        self.camera.set(0, 0)
        self.background.render(surface)

    def update(self, dt: float, inputs: InputState) -> None:
        """Nothing moves on a screen."""

    def click(self, x: int, y: int, button: int, inputs: InputState) -> None:
        """Clicks do nothing on a screen."""


class EditorMenuState(ScreenState):
    """Placeholder screen for choosing a level to edit."""

    def __init__(
        self,
        events: EventBus | None = None,
        root: Path | str = ".",
        window_size: tuple[int, int] = (600, 400),
    ) -> None:
        super().__init__("default_screen", events, root, window_size)


class SaveMenuState(ScreenState):
    """Placeholder screen for choosing a save."""

    def __init__(
        self,
        events: EventBus | None = None,
        root: Path | str = ".",
        window_size: tuple[int, int] = (600, 400),
    ) -> None:
        super().__init__("default_screen", events, root, window_size)