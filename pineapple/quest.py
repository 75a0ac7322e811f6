"""Victory conditions that decide when a stage of the story is finished."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .entity import EntityList

CLEARED = "Cleared"
ITEM_ACQUIRED = "ItemAquired"
BUTTON = "Button"


class Quest:
    """A state to show and the conditions that must all hold to move on."""

    def __init__(self, state: Any, victory_conditions: Sequence[str]) -> None:
        self.state = state
        self.victory_conditions = list(victory_conditions)
        self._primed = False

    def is_cleared(self, enemies: EntityList) -> bool:
        return len(enemies) == 0

    def is_item_acquired(self, grail: bool) -> bool:
        return bool(grail)

    def is_button(self, pressed: bool) -> bool:
        """True once per press of the continue key, after it has been released."""
        if pressed:
            if self._primed:
                self._primed = False
                return True
            self._primed = False
        else:
            self._primed = True
        return False

    def is_complete(self, enemies: EntityList, grail: bool, pressed: bool) -> bool:
        """Check every condition; unknown conditions are ignored."""
        complete = True
        for condition in self.victory_conditions:
            if condition == CLEARED and not self.is_cleared(enemies):
                complete = False
            if condition == ITEM_ACQUIRED and not self.is_item_acquired(grail):
                complete = False
            if condition == BUTTON and not self.is_button(pressed):
                complete = False
        return complete