"""The story driver: quests, pending actions, settings and win or loss."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .events import EventBus, InputState
from .quest import Quest
from .savegame import SaveManager
from .states import (
    EditorMenuState,
    EditorState,
    GameState,
    SaveMenuState,
    ScreenState,
    State,
    TitleState,
)
from .ui import Screen

_log = logging.getLogger(__name__)


class Scripts:
    """Routes pending actions to responses and walks through the quests."""

    def __init__(
        self,
        events: EventBus | None = None,
        root: Path | str = ".",
        window_size: tuple[int, int] = (600, 400),
        save_manager: SaveManager | None = None,
    ) -> None:
        self.events = events if events is not None else EventBus()
        self.root = Path(root)
        self.window_size = (int(window_size[0]), int(window_size[1]))
        self.save_manager = (
            save_manager
            if save_manager is not None
            else SaveManager(self.root / "saves" / "Original.txt")
        )
        content = self.root / "content"
        self.death_screen = Screen("death_screen", self.events, content)
        self.control_screen = Screen("controls_screen", self.events, content)
        self.default_screen = Screen("default_screen", self.events, content)

        self.music_volume = 0.0
        self.sfx_volume = 0.5
        self.dead = False
        self.grail = False
        self.running = True
        self.quest_num = 0

        common = self._common()
        self.states: list[State] = [
            TitleState(**common),
            GameState(None, **common),
            EditorState("Dungeon", **common),
            EditorMenuState(**common),
            SaveMenuState(**common),
            ScreenState("death_screen", **common),
        ]
        self.quests: list[Quest] = []
        self.reset_quests()
        self.state: State = self.states[0]

    def _common(self) -> dict[str, Any]:
        return {"events": self.events, "root": self.root, "window_size": self.window_size}

    def reset_quests(self) -> None:
        """Rebuild the storyline from its first stage."""
        common = self._common()
        self.quests = [
            Quest(ScreenState("controls_screen", **common), ["Button"]),
            Quest(ScreenState("intro_screen", **common), ["Button"]),
            Quest(GameState("Arena", **common), ["Cleared"]),
            Quest(ScreenState("interlude_screen", **common), ["Button"]),
            Quest(GameState("Dungeon", **common), ["ItemAquired"]),
            Quest(ScreenState("win_screen", **common), ["Button"]),
        ]

    def update(self, inputs: InputState) -> None:
        """Advance the story and handle every pending tweak and action."""
        if self.dead and inputs.is_pressed("r"):
            self.state = self.states[0]
            self.dead = False
            self.quest_num = 0
            self.reset_quests()
        if self.dead:
            return

        quest = self.quests[self.quest_num]
        if quest.is_complete(self.state.enemies, self.grail, inputs.is_pressed("k")):
            self.quest_num += 1
            level_name = "Dungeon" if self.quest_num > 2 else "Arena"
            if self.quest_num == len(self.quests):
                self.state = self.states[0]
                self.state.level_name = level_name
                self.quest_num = 0
                self.reset_quests()
                self.grail = False
                return
            self.state = self.quests[self.quest_num].state
            self.state.level_name = level_name

        for name, value in self.events.drain_tweaks():
            if name == "Volume":
                self.music_volume = value

        for action in self.events.drain_actions():
            self._handle_action(action)

    def _handle_action(self, action: str) -> None:
        match action:
            case "Resume":
                if self.state.ui_elements:
                    self.state.ui_elements.pop()
            case "Controls":
                self.state.ui_elements.append(self.control_screen)
            case "Mute":
                self.music_volume = 0.0
            case "Death":
                _log.info("dead")
                self.dead = True
                self.state = self.states[5]
            case "Quit":
                self.running = False
            case "Grail":
                self.grail = True
            case "Play":
                self.state = self.quests[0].state
                self.save_manager.continue_game()
            case "New Game":
                self.state = self.quests[0].state
                self.save_manager.new_game()
            case "Load Game":
                self.state = self.states[3]
            case "Pause Menu":
                self.state.ui_elements.append(self.state.pause_menu)
            case _:
                pass