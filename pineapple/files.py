"""Text files stored per level under ``levels/<level>/``."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class LevelFile:
    """A named text file belonging to one level."""

    file_name: str = "Dungeon"
    level_name: str = ""
    root: Path = field(default_factory=lambda: Path("."))

    def path(self) -> Path:
        return Path(self.root) / "levels" / self.level_name / f"{self.file_name}.txt"

    def read_lines(self) -> list[str]:
        """Return the file's lines, or no lines when the file does not exist."""
        try:
            text = self.path().read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        return text.splitlines()

    def write(self, data: str) -> None:
        """Replace the file's contents with ``data``."""
        target = self.path()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(data, encoding="utf-8")