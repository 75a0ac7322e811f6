"""A small top-down action game with tile maps, enemies, quests and a level editor state."""

__version__ = "0.1.0"