# pineapple

A small top-down action game built on pygame. You walk through tile-based
levels, slash at fruit-shaped enemies, throw and pick up a pellet, relight
torches and hunt for the grail. Maps, the player's starting tile, enemies
and items are plain text files.

## Installing

```
pip install .
```

This pulls in `pygame`, the only runtime dependency.

## Playing

```
pineapple
```

Options:

- `--root PATH`: folder holding `content/`, `levels/` and `saves/` (default: the current directory)
- `--width N`, `--height N`: window size in pixels (default 600 by 400)
- `--fps N`: frame rate limit (default 60)

The game looks in `content/` for `tile_atlas.png`, `character_face.png`,
`pineapple.png`, `lemon.png`, one PNG per screen (`title_screen.png`,
`controls_screen.png`, `intro_screen.png`, `interlude_screen.png`,
`win_screen.png`, `death_screen.png`, `default_screen.png`), the font
`impact.ttf` and the music `backgroundmusic.ogg`. Missing images are drawn
as plain coloured shapes or a black screen, a missing font falls back to
pygame's default font, and missing music is skipped with a warning.

Choosing **Play** on the title menu reads the unlocked level from
`saves/Original.txt`; that file must exist and start with a number. Any
error during play is printed as `Error! ...` and the command exits.

Controls:

- `W` `A` `S` `D`: move
- left mouse button: slash in an arc towards the cursor; enemies in the arc
  die, a torch tile in the arc refills your torch fuel and saves your tile to
  `player.txt`, a grail tile in the arc counts as finding the grail
- any other mouse button: throw your pellet; walk over it to pick it up again
- `Escape`: open or close the pause menu (Resume, Controls, a Volume slider
  with a mute checkbox, Quit)
- `K`: move on from a story screen
- `R`: restart from the title after dying

Music volume starts at zero; raise it with the Volume slider in the pause
menu.

Touching a charging melee enemy or being hit by a ranged enemy's pellet
shows the death screen.

## The story

`pineapple.scripts.Scripts` runs a fixed list of quests
(`pineapple.quest.Quest`): the controls screen, an intro screen, clearing
every enemy in the `Arena` level, an interlude screen, finding the grail in
the `Dungeon` level, and a win screen. Screens wait for `K`. When the last
quest is done, play goes back to the title screen.

## Level files

Each level has a directory under `levels/` (the story uses `Arena` and
`Dungeon`). A missing file reads as empty, so a missing map stays a 20 by 20
floor.

- `map.txt`: the first line is `width height`; the second line has one digit
  per tile, row by row (`0` floor, `1` wall, `2` marked floor, `3` grail,
  `4` torch). Cells outside the map count as walls.
- `player.txt`: the player's tile as `x y`.
- `enemy.txt`: one enemy per line as `x y,Melee` or `x y,Ranged` in tiles;
  an unknown kind is logged and becomes `Melee`.
- `items.txt`: one pellet per line as `x y` in pixels.

## Using it as a library

The parts run without opening a window:

```python
from pineapple.tilemap import TileMap

level = TileMap()
level.set_tile(3, 3, 1)
level.generate_pathfinding(0, 0)
print(level.path_tile(5, 5))
```

- `pineapple.tilemap.TileMap`: the grid, its text format
  (`serialise`/`deserialise`, `load`/`save`) and the distance map enemies
  follow (`generate_pathfinding`, `path_tile`).
- `pineapple.collision.Solid` and `World`: movement, dashes (`launch`) and
  wall collision.
- `pineapple.entity.EntityList`: an ordered, file-backed list of entities.
- `pineapple.enemies`: `Melee`, `Ranged` and `EnemyFactory`.
- `pineapple.player.Player`, `pineapple.projectile.Projectile` and `Item`.
- `pineapple.camera.Camera`: a view clamped to the map, with
  `screen_to_world` and `world_to_screen`.
- `pineapple.events`: `InputState` (a per-frame input snapshot) and
  `EventBus` (pending actions and tweaks).
- `pineapple.savegame.SaveManager`: current and unlocked level in a save file.
- `pineapple.states.EditorState`: a level editor. Clicks with `InputState`
  place walls and floor, with `lalt` held marked floor, torches and the
  grail, with `lctrl` held melee and ranged enemies (or remove one), with
  `lshift` held pellets (or remove one). Holding `m` during `update` saves the
  map, player, enemies and items to `levels/Dungeon/`.

## What it does not do

- The `pineapple` command never opens the editor; `EditorState` is only
  reachable from code.
- There is no level-select or save-select screen: the "Load Game" action
  shows a placeholder screen.
- The game does not record progress on its own: `SaveManager.complete_level`
  writes the save file, but nothing in the quest sequence calls it.
- Running out of torch fuel has no effect.

## Running the tests

```
pip install ".[test]"
pytest
```