"""Overlays drawn over a state: full screen images, menus, options and sliders."""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import pygame

from .events import EventBus, InputState

PADDING = 10.0
FONT_PATH = Path("content/impact.ttf")
SCREEN_BACKGROUND = (0, 0, 0)
OUTLINE_COLOUR = (255, 255, 255)
MENU_COLOUR = (100, 100, 100)
MENU_OUTLINE = (250, 250, 250)
BACKPANEL_COLOUR = (200, 200, 200)
CHECKBOX_COLOUR = (100, 100, 100)
TEXT_COLOUR = (255, 255, 255)
BAR_COLOUR = (255, 255, 255)


@functools.lru_cache(maxsize=None)
def _load_font(size: int) -> pygame.font.Font:
    try:
        return pygame.font.Font(str(FONT_PATH), size)
    except OSError:
        return pygame.font.Font(None, size)


def _draw_text(surface: pygame.Surface, text: str, size: float, pos: tuple[float, float]) -> None:
    if not pygame.font.get_init():
        pygame.font.init()
    image = _load_font(max(1, int(size))).render(text, True, TEXT_COLOUR)
    surface.blit(image, (round(pos[0]), round(pos[1])))


def _load_image(path: Path) -> pygame.Surface | None:
    try:
        return pygame.image.load(str(path))
    except (OSError, pygame.error):
        return None


@dataclass
class _Box:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def contains(self, px: float, py: float) -> bool:
        return self.x < px < self.x + self.width and self.y < py < self.y + self.height

    def rect(self) -> pygame.Rect:
        return pygame.Rect(round(self.x), round(self.y), round(self.width), round(self.height))


class UIElement(ABC):
    """Something drawn over a state that takes the input while it is shown."""

    def __init__(self, view_size: tuple[int, int] = (600, 600)) -> None:
        self.view_size = view_size

    @abstractmethod
    def render(self, surface: pygame.Surface) -> None:
        """Draw the element onto ``surface``."""

    @abstractmethod
    def update(self, inputs: InputState) -> None:
        """Handle one frame of input."""


class Screen(UIElement):
    """A full-window image; showing it reports its label as an action."""

    def __init__(
        self,
        image_name: str,
        events: EventBus | None = None,
        content_dir: Path | str = Path("content"),
    ) -> None:
        super().__init__()
        self.label = image_name
        self.events = events if events is not None else EventBus()
        self.texture = _load_image(Path(content_dir) / f"{image_name}.png")

    def render(self, surface: pygame.Surface) -> None:
        area = surface.get_rect()
        if self.texture is not None:
            surface.blit(pygame.transform.scale(self.texture, area.size), area)
        else:
            surface.fill(SCREEN_BACKGROUND)
        pygame.draw.rect(surface, OUTLINE_COLOUR, area, 2)

    def update(self, inputs: InputState) -> None:
        self.events.push_action(self.label)


class Checkbox:
    """A small box toggled by pressing and releasing the mouse over it."""

    def __init__(self, texture: pygame.Surface | None = None) -> None:
        self.texture = texture
        self.box = _Box()
        self.checked = False
        self.hover = False
        self._pressed_inside = False

    def update(self, x: float, y: float, pressed: bool) -> None:
        self.hover = False
        if self.selected(x, y):
            self.hover = True
            if pressed:
                self._pressed_inside = True
            elif self._pressed_inside:
                self._pressed_inside = False
                self.toggle()
        else:
            self._pressed_inside = False

    def render(self, surface: pygame.Surface, x: float, y: float, width: float, height: float) -> None:
        self.box = _Box(x, y, width, height)
        rect = self.box.rect()
        surface.fill(CHECKBOX_COLOUR, rect)
        if self.hover:
            pygame.draw.rect(surface, OUTLINE_COLOUR, rect, 2)
        if self.checked:
            if self.texture is not None:
                size = self.texture.get_size()
                image = pygame.transform.scale(self.texture, (size[0] // 2, size[1] // 2))
                surface.blit(image, rect.topleft)
            else:
                pygame.draw.line(surface, OUTLINE_COLOUR, rect.topleft, rect.bottomright, 2)
                pygame.draw.line(surface, OUTLINE_COLOUR, rect.bottomleft, rect.topright, 2)

    def toggle(self) -> None:
        self.checked = not self.checked

    def selected(self, x: float, y: float) -> bool:
        return self.box.contains(x, y)


class MenuOptionBackpanel:
    """The panel behind a menu option, outlined while the mouse is over it."""

    def __init__(self) -> None:
        self.hover = False
        self.box = _Box()

    def render(self, surface: pygame.Surface, x: float, y: float, width: float, height: float) -> None:
        self.box = _Box(x, y, width, height)
        rect = self.box.rect()
        surface.fill(BACKPANEL_COLOUR, rect)
        if self.hover:
            pygame.draw.rect(surface, OUTLINE_COLOUR, rect, 2)

    def update(self, x: float, y: float) -> None:
        self.hover = self.selected(x, y)

    def selected(self, x: float, y: float) -> bool:
        return self.box.contains(x, y)


class MenuOption:
    """A labelled button that reports its label as an action when clicked."""

    def __init__(self, label: str = "", events: EventBus | None = None) -> None:
        self.label = label
        self.events = events if events is not None else EventBus()
        self.backpanel = MenuOptionBackpanel()
        self.width = 100.0
        self.height = 40.0

    def render(self, surface: pygame.Surface, x: float, y: float, width: float, height: float) -> None:
        self.backpanel.render(surface, x, y, width, height)
        _draw_text(surface, self.label, height * 0.8, (x + 10, y))

    def update(self, x: float, y: float, pressed: bool) -> None:
        self.backpanel.update(x, y)
        if self.backpanel.selected(x, y) and pressed:
            self.events.push_action(self.label)


class MenuSlider(MenuOption):
    """A horizontal slider that reports a value in ``[0, 1]`` as a tweak.

    Its checkbox mutes the setting, pinning the value to zero.
    """

    def __init__(self, label: str, events: EventBus | None = None) -> None:
        super().__init__(label, events)
        self.checkbox = Checkbox()
        self.slider_position = 0.0

    def set_slider_position(self, mouse_x: float) -> None:
        """Move the dial under ``mouse_x`` within bounds and report the value."""
        relative = mouse_x - (self.backpanel.box.x + PADDING)
        position = min(relative, self.width + PADDING + self.backpanel.box.x)
        self.slider_position = max(0.0, position)
        self.events.push_tweak(self.label, self.slider_position / (self.width + PADDING))

    def update(self, x: float, y: float, pressed: bool) -> None:
        self.checkbox.update(x, y, pressed)
        self.backpanel.update(x, y)
        if not self.checkbox.selected(x, y) and self.backpanel.selected(x, y) and pressed:
            self.set_slider_position(x)
            self.checkbox.checked = False
        if self.checkbox.checked:
            self.set_slider_position(0)

    def render(self, surface: pygame.Surface, x: float, y: float, width: float, height: float) -> None:
        self.backpanel.render(surface, x, y, width, height)
        checkbox_x = int(x + width - PADDING - height / 6)
        checkbox_y = int(y + 0.7 * height - PADDING / 2)
        checkbox_size = int(height * 2 / 5)
        bar_width = int(width - 2 * PADDING - checkbox_size)
        bar = _Box(x + PADDING, y + 0.7 * height, bar_width, 2)
        surface.fill(BAR_COLOUR, bar.rect())
        dial = _Box(x + PADDING + self.slider_position, y + 0.7 * height - PADDING / 2, 2, PADDING)
        surface.fill(BAR_COLOUR, dial.rect())
        _draw_text(surface, self.label, height * 0.4, (x + 10, y + 2))
        self.checkbox.render(surface, checkbox_x, checkbox_y, checkbox_size, checkbox_size)


@dataclass(frozen=True)
class MenuLayout:
    """Where a menu panel sits in the window, in pixels."""

    x: float
    y: float
    width: float
    height: float


class Menu(UIElement):
    """A panel of options centred horizontally, a third of the way down."""

    def __init__(
        self, events: EventBus | None = None, window_size: tuple[int, int] = (600, 400)
    ) -> None:
        super().__init__()
        self.events = events if events is not None else EventBus()
        self.window_size = window_size
        self.options: list[MenuOption] = []
        self.relative_mouse_x = 0.0
        self.relative_mouse_y = 0.0
        self.option_width = 150.0
        self.option_height = 30.0

    def layout(self, window_size: tuple[int, int]) -> MenuLayout:
        window_width, window_height = window_size
        width = self.option_width + PADDING * 2
        height = len(self.options) * (self.option_height + PADDING) + PADDING
        return MenuLayout(
            (window_width - width) / 2, (window_height - height) / 3, width, height
        )

    def render(self, surface: pygame.Surface) -> None:
        self.window_size = surface.get_size()
        layout = self.layout(self.window_size)
        panel = pygame.Surface((max(1, round(layout.width)), max(1, round(layout.height))))
        panel.fill(MENU_COLOUR)
        pygame.draw.rect(panel, MENU_OUTLINE, panel.get_rect(), 2)
        for index, option in enumerate(self.options):
            option.render(
                panel,
                PADDING,
                index * (self.option_height + PADDING) + PADDING,
                self.option_width,
                self.option_height,
            )
        surface.blit(panel, (round(layout.x), round(layout.y)))

    def update(self, inputs: InputState) -> None:
        layout = self.layout(self.window_size)
        mouse_x, mouse_y = inputs.mouse_position
        self.relative_mouse_x = mouse_x - layout.x
        self.relative_mouse_y = mouse_y - layout.y
        for option in self.options:
            option.update(self.relative_mouse_x, self.relative_mouse_y, inputs.mouse_left)

    def add_option(self, label: str) -> None:
        self.options.append(MenuOption(label, self.events))

    def add_slider(self, label: str) -> None:
        self.options.append(MenuSlider(label, self.events))