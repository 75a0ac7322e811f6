import pytest

from pineapple.events import InputState
from pineapple.scripts import Scripts
from pineapple.states import EditorMenuState, TitleState

NONE = InputState()
K = InputState(keys=frozenset({"k"}))
R = InputState(keys=frozenset({"r"}))


@pytest.fixture
def scripts(tmp_path):
    return Scripts(root=tmp_path)


def _tap(scripts):
    scripts.update(NONE)
    scripts.update(K)


def test_starts_on_title(scripts):
    assert isinstance(scripts.state, TitleState)
    assert scripts.state is scripts.states[0]
    assert scripts.quest_num == 0


def test_quest_conditions(scripts):
    assert [q.victory_conditions for q in scripts.quests] == [
        ["Button"],
        ["Button"],
        ["Cleared"],
        ["Button"],
        ["ItemAquired"],
        ["Button"],
    ]


def test_button_press_advances_quest(scripts):
    _tap(scripts)
    assert scripts.quest_num == 1
    assert scripts.state is scripts.quests[1].state
    assert scripts.state.level_name == "Arena"


def test_full_story_returns_to_title(scripts):
    _tap(scripts)
    _tap(scripts)
    assert scripts.quest_num == 2
    scripts.update(NONE)
    assert scripts.quest_num == 3
    assert scripts.state.level_name == "Dungeon"
    _tap(scripts)
    assert scripts.quest_num == 4
    scripts.events.push_action("Grail")
    scripts.update(NONE)
    assert scripts.grail is True
    scripts.update(NONE)
    assert scripts.quest_num == 5
    _tap(scripts)
    assert scripts.quest_num == 0
    assert scripts.state is scripts.states[0]
    assert scripts.grail is False


def test_death_and_restart(scripts):
    scripts.events.push_action("Death")
    scripts.update(NONE)
    assert scripts.dead is True
    assert scripts.state is scripts.states[5]
    scripts.update(K)
    assert scripts.state is scripts.states[5]
    scripts.update(R)
    assert scripts.dead is False
    assert scripts.state is scripts.states[0]
    assert scripts.quest_num == 0


def test_volume_tweak(scripts):
    scripts.events.push_tweak("Volume", 0.5)
    scripts.update(NONE)
    assert scripts.music_volume == 0.5
    scripts.events.push_action("Mute")
    scripts.update(NONE)
    assert scripts.music_volume == 0.0


def test_quit_stops_running(scripts):
    scripts.events.push_action("Quit")
    scripts.update(NONE)
    assert scripts.running is False


def test_controls_and_resume(scripts):
    scripts.events.push_action("Controls")
    scripts.update(NONE)
    assert scripts.state.ui_elements == [scripts.control_screen]
    scripts.events.push_action("Resume")
    scripts.update(NONE)
    assert scripts.state.ui_elements == []


def test_pause_menu_action(scripts):
    scripts.events.push_action("Pause Menu")
    scripts.update(NONE)
    assert scripts.state.ui_elements == [scripts.state.pause_menu]


def test_new_game_resets_index(scripts):
    scripts.save_manager.level_index = 2
    scripts.events.push_action("New Game")
    scripts.update(NONE)
    assert scripts.state is scripts.quests[0].state
    assert scripts.save_manager.level_index == 0


def test_play_continues_saved_game(tmp_path, scripts):
    save = tmp_path / "saves" / "Original.txt"
    save.parent.mkdir(parents=True)
    save.write_text("2")
    scripts.events.push_action("Play")
    scripts.update(NONE)
    assert scripts.save_manager.level_unlock == 2
    assert scripts.state is scripts.quests[0].state


def test_play_without_save_raises(scripts):
    scripts.events.push_action("Play")
    with pytest.raises(FileNotFoundError):
        scripts.update(NONE)


def test_load_game_shows_editor_menu(scripts):
    assert scripts.state is scripts.states[0]
    scripts.events.push_action("Load Game")
    scripts.update(NONE)
    assert scripts.state is scripts.states[3]
    assert isinstance(scripts.states[3], EditorMenuState)
    assert scripts.quest_num == 0


def test_reset_quests_builds_fresh_states(scripts):
    old = [q.state for q in scripts.quests]
    scripts.reset_quests()
    assert len(scripts.quests) == len(old)
    assert all(q.state is not o for q, o in zip(scripts.quests, old))