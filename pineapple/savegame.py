"""Campaign progress: which level is current and how far the player has got."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from pathlib import Path

DEFAULT_LEVELS = ("Arena", "Ballerina", "Dungeon")

_log = logging.getLogger(__name__)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class SaveManager:
    """Tracks the current level and the highest unlocked one."""

    def __init__(
        self,
        path: Path | str = Path("saves/Original.txt"),
        levels: Sequence[str] = DEFAULT_LEVELS,
    ) -> None:
        self.path = Path(path)
        self.levels = list(levels)
        self.level_unlock = 0
        self.level_index = 0

    def new_game(self) -> None:
        self.level_index = 0

    def continue_game(self) -> None:
        """Read the unlocked level from the save file and start at the first level."""
        with self.path.open(encoding="utf-8") as handle:
            line = handle.readline()
        match = _LEADING_INT.match(line)
        if match is None:
            raise ValueError(f"save file holds no level number: {line!r}")
        self.level_unlock = int(match.group(1))
        self.level_index = 0

    def load_game(self, level: int) -> None:
        """Jump to ``level`` if it has been unlocked."""
        if level <= self.level_unlock:
            self.level_index = level

    def complete_level(self) -> None:
        """Advance to the next level and record progress in the save file."""
        self.level_index += 1
        self.level_unlock = max(self.level_unlock, self.level_index)
        if self.level_unlock == len(self.levels):
            _log.info("game complete!")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(str(self.level_unlock), encoding="utf-8")

    def is_win(self) -> bool:
        return self.level_unlock == len(self.levels)