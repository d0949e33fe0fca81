import random

import pytest

from cavecrawl.level import Level, Tile, is_path_available

SEEDS = range(20)


def _make(seed):
    return Level(rng=random.Random(seed))


def _positions(level, tile):
    return [
        (x, y)
        for y, row in enumerate(level.grid)
        for x, value in enumerate(row)
        if value == tile
    ]


@pytest.mark.parametrize("seed", SEEDS)
def test_dimensions(seed):
    level = _make(seed)
    assert len(level.grid) == level.height == 30
    assert all(len(row) == level.width == 15 for row in level.grid)


@pytest.mark.parametrize("seed", SEEDS)
def test_top_and_bottom_rows_are_walls(seed):
    level = _make(seed)
    assert all(tile == Tile.WALL for tile in level.grid[0])
    assert all(tile == Tile.WALL for tile in level.grid[-1])


@pytest.mark.parametrize("seed", SEEDS)
def test_single_spawn_on_third_row_from_bottom(seed):
    level = _make(seed)
    assert _positions(level, Tile.SPAWN) == [(level.spawn_x, level.spawn_y)]
    assert level.spawn_y == level.height - 3


@pytest.mark.parametrize("seed", SEEDS)
def test_single_exit_near_top(seed):
    level = _make(seed)
    assert _positions(level, Tile.EXIT) == [(level.exit_x, level.exit_y)]
    assert level.exit_y == 2


@pytest.mark.parametrize("seed", SEEDS)
def test_spawn_reaches_exit(seed):
    level = _make(seed)
    assert is_path_available(
        level.grid, level.spawn_x, level.spawn_y, level.exit_x, level.exit_y
    )


@pytest.mark.parametrize("seed", SEEDS)
def test_key_placed_at_recorded_position(seed):
    level = _make(seed)
    assert _positions(level, Tile.KEY) == [(level.key_x, level.key_y)]
    assert 0 < level.key_x < level.width - 1
    assert 0 < level.key_y < level.height - 1


def test_same_seed_gives_same_map():
    first = _make(42)
    second = _make(42)
    assert first.grid == second.grid
    assert (first.spawn_x, first.spawn_y) == (second.spawn_x, second.spawn_y)
    assert (first.exit_x, first.exit_y) == (second.exit_x, second.exit_y)
    assert (first.key_x, first.key_y) == (second.key_x, second.key_y)
    text = first.render()
    assert text == second.render()
    assert text.count("@") == 1
    assert text.count("$") == 1


def test_generate_replaces_the_map():
    level = _make(3)
    level.generate()
    assert _positions(level, Tile.SPAWN) == [(level.spawn_x, level.spawn_y)]
    assert _positions(level, Tile.EXIT) == [(level.exit_x, level.exit_y)]


def test_render_symbols():
    level = _make(0)
    level.grid = [
        [Tile.WALL, Tile.PATH, Tile.EDGE, Tile.SPAWN],
        [Tile.EXIT, Tile.WORM, Tile.KEY, Tile.WALL],
    ]
    assert level.render() == "#.,@\n$*!#\n"


@pytest.mark.parametrize("seed", SEEDS)
def test_render_shape(seed):
    level = _make(seed)
    lines = level.render().splitlines()
    assert len(lines) == level.height
    assert all(len(line) == level.width for line in lines)
    assert lines[level.spawn_y][level.spawn_x] == "@"
    assert lines[level.exit_y][level.exit_x] == "$"


def test_neighbour_sum_excludes_centre():
    level = _make(0)
    level.grid = [[Tile.PATH] * 3 for _ in range(3)]
    level.grid[1][1] = Tile.KEY
    assert level.neighbour_sum(1, 1) == 8


def test_neighbour_sum_adds_tile_values():
    level = _make(0)
    level.grid = [
        [Tile.WALL, Tile.EDGE, Tile.WALL],
        [Tile.WALL, Tile.PATH, Tile.SPAWN],
        [Tile.WALL, Tile.WALL, Tile.WALL],
    ]
    assert level.neighbour_sum(1, 1) == Tile.EDGE + Tile.SPAWN


def test_enemy_spawn_point_single_candidate():
    level = _make(0)
    level.grid = [[Tile.WALL] * 5 for _ in range(5)]
    for y in range(1, 4):
        for x in range(1, 4):
            level.grid[y][x] = Tile.PATH
    assert level.enemy_spawn_point() == (2, 2)


def test_enemy_spawn_point_none_when_closed():
    level = _make(0)
    level.grid = [[Tile.WALL] * 5 for _ in range(5)]
    assert level.enemy_spawn_point() is None


@pytest.mark.parametrize("seed", SEEDS)
def test_enemy_spawn_point_surrounded_by_path(seed):
    level = _make(seed)
    point = level.enemy_spawn_point()
    assert point is None or all(
        level.grid[point[1] + dy][point[0] + dx] == Tile.PATH
        for dy in (-1, 0, 1)
        for dx in (-1, 0, 1)
    )


def test_path_available_open_corridor():
    grid = [
        [0, 0, 0, 0],
        [0, 1, 1, 0],
        [0, 0, 1, 0],
        [0, 0, 1, 0],
    ]
    assert is_path_available(grid, 1, 1, 2, 3)


def test_path_blocked():
    grid = [
        [1, 0, 1],
        [1, 0, 1],
        [1, 0, 1],
    ]
    assert not is_path_available(grid, 0, 0, 2, 2)


def test_path_no_diagonal_steps():
    grid = [
        [1, 0],
        [0, 1],
    ]
    assert not is_path_available(grid, 0, 0, 1, 1)


def test_path_from_wall_is_false():
    grid = [[0, 1, 1]]
    assert not is_path_available(grid, 0, 0, 2, 0)


def test_path_outside_grid_raises():
    with pytest.raises(ValueError):
        is_path_available([[1, 1]], 0, 0, 5, 0)


def test_too_small_level_raises():
    with pytest.raises(ValueError):
        Level(width=3, height=30, rng=random.Random(0))
    with pytest.raises(ValueError):
        Level(width=15, height=4, rng=random.Random(0))