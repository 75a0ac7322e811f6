from pineapple.files import LevelFile


def test_path_is_under_level_directory(tmp_path):
    level_file = LevelFile("map", "Arena", tmp_path)
    assert level_file.path() == tmp_path / "levels" / "Arena" / "map.txt"


def test_write_then_read_round_trip(tmp_path):
    level_file = LevelFile("enemy", "Dungeon", tmp_path)
    level_file.write("1 2,Melee\n3 4,Ranged\n")
    assert level_file.read_lines() == ["1 2,Melee", "3 4,Ranged"]


def test_write_replaces_previous_contents(tmp_path):
    level_file = LevelFile("player", "Dungeon", tmp_path)
    level_file.write("first\nsecond\n")
    level_file.write("only\n")
    assert level_file.read_lines() == ["only"]


def test_missing_file_reads_as_no_lines(tmp_path):
    assert LevelFile("items", "Nowhere", tmp_path).read_lines() == []


def test_default_file_name():
    assert LevelFile().file_name == "Dungeon"
    assert LevelFile().path().name == "Dungeon.txt"