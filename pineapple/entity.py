"""Entities that live in a level and the persistent lists that hold them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator

import pygame

from .collision import Solid, World
from .events import EventBus
from .files import LevelFile


class Entity(Solid, ABC):
    """A solid body with a behaviour state that can be drawn and saved."""

    def __init__(
        self,
        contact_radius: int,
        world: World | None = None,
        events: EventBus | None = None,
    ) -> None:
        super().__init__(contact_radius, world)
        self.events = events
        self.state = "passive"

    def _emit(self, action: str) -> None:
        if self.events is not None:
            self.events.push_action(action)

    def take_hit(self) -> None:
        """React to being struck; ignored unless a subclass cares."""

    @abstractmethod
    def render(self, surface: pygame.Surface, offset: tuple[float, float]) -> None:
        """Draw the entity shifted by ``-offset``."""

    def set_state(self, state: str) -> None:
        """Change the behaviour state; ignored unless a subclass cares."""

    def update(self, dt: float) -> None:
        """Advance the entity's behaviour by ``dt`` seconds."""

    @abstractmethod
    def serialise(self) -> str:
        """Return the line that stores this entity in its level file."""


class EntityFactory(ABC):
    """Builds entities from the lines of a level file."""

    def __init__(self, world: World | None = None, events: EventBus | None = None) -> None:
        self.world = world
        self.events = events

    @abstractmethod
    def deserialise(self, line: str) -> Entity:
        """Build the entity described by ``line``."""


class EntityList:
    """An ordered collection of entities stored in one level file."""

    def __init__(
        self,
        file: LevelFile | None = None,
        factory: EntityFactory | None = None,
    ) -> None:
        self.file = file if file is not None else LevelFile("dumb")
        self.factory = factory
        self._entities: list[Entity] = []

    def _require_factory(self) -> EntityFactory:
        if self.factory is None:
            raise RuntimeError("entity list has no factory")
        return self.factory

    def render(self, surface: pygame.Surface, offset: tuple[float, float]) -> None:
        for entity in self._entities:
            entity.render(surface, offset)

    def update(self, dt: float) -> None:
        """Update every entity and drop the ones that have died."""
        for entity in list(self._entities):
            entity.update(dt)
            if entity.state == "dead" and entity in self._entities:
                self._entities.remove(entity)

    def save(self) -> None:
        self.file.write("".join(entity.serialise() for entity in self._entities))

    def load(self) -> None:
        """Replace the contents with the entities stored in the file."""
        factory = self._require_factory()
        self._entities = [factory.deserialise(line) for line in self.file.read_lines()]

    def spawn(self, kind: str, map_x: int, map_y: int) -> Entity:
        """Create an entity of ``kind`` at ``(map_x, map_y)`` and add it."""
        entity = self._require_factory().deserialise(f"{int(map_x)} {int(map_y)},{kind}")
        self._entities.append(entity)
        return entity

    def add(self, entity: Entity) -> None:
        self._entities.append(entity)

    def at_position(self, x: float, y: float) -> int | None:
        """Index of the first entity touching ``(x, y)``, or ``None``."""
        return next(
            (index for index, entity in enumerate(self._entities) if entity.contact(x, y)),
            None,
        )

    def remove(self, index: int | None) -> None:
        """Remove the entity at ``index``; ``None`` removes nothing."""
        if index is None:
            return
        del self._entities[index]

    def __len__(self) -> int:
        return len(self._entities)

    def __getitem__(self, index: int) -> Entity:
        return self._entities[index]

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)