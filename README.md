# cavecrawl

A small top-down cave crawler. Each level is a new cave grown by a
cellular automaton. A key lies somewhere in it and the exit is near the
top. Pick up the key and walk into the exit, and a new cave is generated.
Enemies patrol the tunnels and turn around at walls. If a fireball kills
one of them, the rest of the pack turns and chases you.

## Installing

```
pip install .
```

This installs `pygame`, which opens the window and draws the game.

## Playing

```
cavecrawl
```

Options:

| Option        | Meaning                                              |
|---------------|------------------------------------------------------|
| `--seed N`    | seed the random generator so the caves repeat        |
| `--log PATH`  | file for log messages (default `log.txt`, truncated at start) |

Controls:

| Key          | Action                                        |
|--------------|-----------------------------------------------|
| W A S D      | Move up, left, down or right (one at a time)  |
| Space        | Throw a fireball the way you face (at most one every half second) |
| Escape       | Pause or resume                               |
| Mouse (left) | Use the **Resume** and **Quit** buttons in the pause menu |

The camera stays centred on the player. The cave is 15 tiles wide and 30
tiles tall. You start three rows from the bottom and the exit is near the top.

## What it does not do

- Everything is drawn as plain coloured rectangles and ellipses. The game
  loads no images or fonts from disk.
- Enemies do not harm the player. There is no health loss, no game-over
  screen and no main menu. `GameState.MAIN_MENU` and `GameState.GAME_OVER`
  exist, but the game never enters them.
- The fireball picture in the pause menu does nothing when you click it.
- Nothing is saved between runs.

## Map tiles

A level is a grid of `cavecrawl.level.Tile` values, indexed as `grid[y][x]`:

| Tile    | Shown as | Meaning                                 |
|---------|----------|-----------------------------------------|
| `WALL`  | `#`      | solid rock, the only blocking tile      |
| `PATH`  | `.`      | open floor                              |
| `EDGE`  | `,`      | floor next to a wall                    |
| `SPAWN` | `@`      | where the player starts                 |
| `EXIT`  | `$`      | the way out; it needs a key             |
| `WORM`  | `*`      | a tunnel dug to join the spawn to the top |
| `KEY`   | `!`      | the key                                 |

## Using the pieces on their own

```python
import random
from cavecrawl.level import Level

level = Level(15, 30, random.Random(1))
print(level.render())
print(level.spawn_x, level.spawn_y, level.exit_x, level.exit_y, level.key_x, level.key_y)
level.generate()  # a fresh cave
```

`Level` generates a cave as soon as it is created. Each generation retries
until the spawn and the exit are joined. `Level.enemy_spawn_point()` returns
a random `(x, y)` whose whole 3x3 neighbourhood is open path, or `None` if
there is no such point.

`cavecrawl.level.is_path_available(grid, start_x, start_y, end_x, end_y)`
reports whether two cells are joined by non-wall tiles, moving in four
directions only. It raises `ValueError` if either cell is outside the grid.

The rest of the package:

- `cavecrawl.entities`: `Player`, `FireBall`, `Item`, `Enemy`, `EnemyKind`
  and `EnemyPack` (`spawn(level, count=10)` places a pack of one kind).
- `cavecrawl.collisions`: wall blocking, key pickup, exits, enemy patrol and
  chase, and fireball hits. `collisions(level, player, direction, pack, dt)`
  runs one frame of all of these.
- `cavecrawl.controls.InputState`: per-frame key and click flags.
- `cavecrawl.manager`: `GameManager.step(dt, controls, click_pos, now)`
  advances one frame and handles pausing. `Camera` converts between world and
  screen pixels.
- `cavecrawl.app.main`: the window and main loop behind the `cavecrawl` command.

## Running the tests

```
pip install .[test]
pytest
```