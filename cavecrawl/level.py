"""Procedural cave levels: a tile grid with a spawn point, an exit and a key."""

from __future__ import annotations

import logging
import random
from collections import deque
from enum import IntEnum
from itertools import product
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 15
DEFAULT_HEIGHT = 30
GENERATIONS = 10
PATH_PROBABILITY = 63

_ORTHOGONAL = ((0, -1), (1, 0), (0, 1), (-1, 0))


class Tile(IntEnum):
    """Contents of one grid cell. Zero is the only blocking value."""

    WALL = 0
    PATH = 1
    EDGE = 2
    SPAWN = 3
    EXIT = 4
    WORM = 5
    KEY = 6

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    Tile.WALL: "#",
    Tile.PATH: ".",
    Tile.EDGE: ",",
    Tile.SPAWN: "@",
    Tile.EXIT: "$",
    Tile.WORM: "*",
    Tile.KEY: "!",
}


def is_path_available(
    grid: Sequence[Sequence[int]], start_x: int, start_y: int, end_x: int, end_y: int
) -> bool:
    """Return True if a four-connected walk over non-wall tiles joins start and end."""
    rows = len(grid)
    cols = len(grid[0]) if rows else 0

    def inside(px: int, py: int) -> bool:
        return 0 <= px < cols and 0 <= py < rows

    if not inside(start_x, start_y) or not inside(end_x, end_y):
        raise ValueError("start or end lies outside the grid")
    if grid[start_y][start_x] == Tile.WALL or grid[end_y][end_x] == Tile.WALL:
        return False

    visited = {(start_x, start_y)}
    queue = deque([(start_x, start_y)])
    while queue:
        cx, cy = queue.popleft()
        if (cx, cy) == (end_x, end_y):
            return True
        for dx, dy in _ORTHOGONAL:
            nx, ny = cx + dx, cy + dy
            if inside(nx, ny) and (nx, ny) not in visited and grid[ny][nx] != Tile.WALL:
                visited.add((nx, ny))
                queue.append((nx, ny))
    return False


class Level:
    """A cave map indexed as ``grid[y][x]``, generated by cellular automaton."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        rng: Optional[random.Random] = None,
    ) -> None:
        if width < 5 or height < 6:
            raise ValueError("a level needs at least 5 columns and 6 rows")
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.generations = GENERATIONS
        self.path_probability = PATH_PROBABILITY
        self.grid: list[list[Tile]] = []
        self.spawn_x = 0
        self.spawn_y = 0
        self.exit_x = 0
        self.exit_y = 0
        self.key_x = 0
        self.key_y = 0
        self.generate()

    def generate(self) -> None:
        """Build a fresh map, retrying until spawn and exit are connected."""
        while True:
            self._fill()
            self._smooth()
            self._frame_with_walls()
            self._mark_edges()

            exits = [col for col, tile in enumerate(self.grid[2]) if tile == Tile.PATH]
            if not exits:
                logger.info("No valid exit points found! Generating new grid.")
                continue
            self.exit_x = self.rng.choice(exits)
            self.exit_y = 2
            self.grid[self.exit_y][self.exit_x] = Tile.EXIT

            spawn_row = self.height - 3
            spawns = [
                col for col, tile in enumerate(self.grid[spawn_row]) if tile == Tile.PATH
            ]
            if not spawns:
                logger.info("No valid spawn points found! Generating new grid.")
                continue
            self.spawn_x = self.rng.choice(spawns)
            self.spawn_y = spawn_row
            self.grid[self.spawn_y][self.spawn_x] = Tile.SPAWN

            if not self._connected():
                self._run_worm(self.spawn_x, self.spawn_y)
                if not self._connected():
                    continue
            self.grid[self.spawn_y][self.spawn_x] = Tile.SPAWN
            self._place_key()
            return

    def neighbour_sum(self, x: int, y: int) -> int:
        """Sum of the eight tile values surrounding ``(x, y)``."""
        return sum(
            self.grid[y + dy][x + dx]
            for dy, dx in product((-1, 0, 1), repeat=2)
            if (dx, dy) != (0, 0)
        )

    def render(self) -> str:
        """Text picture of the grid, one line per row."""
        return "".join(
            "".join(Tile(tile).symbol for tile in row) + "\n" for row in self.grid
        )

    def enemy_spawn_point(self) -> Optional[tuple[int, int]]:
        """Random ``(x, y)`` whose whole 3x3 neighbourhood is open path, or None."""
        rows = len(self.grid)
        cols = len(self.grid[0]) if rows else 0
        candidates = [
            (col, row)
            for row in range(1, rows - 1)
            for col in range(1, cols - 1)
            if all(
                self.grid[row + dy][col + dx] == Tile.PATH
                for dy, dx in product((-1, 0, 1), repeat=2)
            )
        ]
        if not candidates:
            logger.warning("No valid enemy spawn points found!")
            return None
        return self.rng.choice(candidates)

    def _connected(self) -> bool:
        return is_path_available(
            self.grid, self.spawn_x, self.spawn_y, self.exit_x, self.exit_y
        )

    def _fill(self) -> None:
        self.grid = [
            [
                Tile.WALL
                if self.rng.randrange(100) > self.path_probability
                else Tile.PATH
                for _ in range(self.width)
            ]
            for _ in range(self.height)
        ]

    def _smooth(self) -> None:
        for _ in range(self.generations):
            for row in range(1, self.height - 1):
                for col in range(1, self.width - 1):
                    count = self.neighbour_sum(col, row)
                    if self.grid[row][col] == Tile.WALL and count >= 6:
                        self.grid[row][col] = Tile.PATH
                    if self.grid[row][col] == Tile.PATH and count <= 3:
                        self.grid[row][col] = Tile.WALL

    def _frame_with_walls(self) -> None:
        for row in self.grid:
            row[0] = Tile.WALL
            row[-1] = Tile.WALL
        self.grid[0] = [Tile.WALL] * self.width
        self.grid[-1] = [Tile.WALL] * self.width

    def _mark_edges(self) -> None:
        for row in range(1, self.height - 1):
            for col in range(1, self.width - 1):
                if self.grid[row][col] == Tile.PATH and any(
                    self.grid[row + dy][col + dx] == Tile.WALL for dx, dy in _ORTHOGONAL
                ):
                    self.grid[row][col] = Tile.EDGE

    def _run_worm(self, x: int, y: int) -> None:
        """Dig a wandering tunnel upwards from ``(x, y)``; its end becomes the exit."""
        while True:
            options = []
            if y > 1 and self.grid[y - 1][x] != Tile.WORM:
                options.append((0, -1))
            if x < self.width - 2 and self.grid[y][x + 1] != Tile.WORM:
                options.append((1, 0))
            if x > 1 and self.grid[y][x - 1] != Tile.WORM:
                options.append((-1, 0))
            if not options:
                return

            dx, dy = self.rng.choice(options)
            x += dx
            y += dy

            if y <= 2:
                self.grid[self.exit_y][self.exit_x] = Tile.EDGE
                self.exit_x, self.exit_y = x, y
                self.grid[y][x] = Tile.EXIT
                return

            for ny, nx in product((y - 1, y, y + 1), (x - 1, x, x + 1)):
                if self.grid[ny][nx] == Tile.WALL:
                    self.grid[ny][nx] = Tile.EDGE
            self.grid[y][x] = Tile.WORM

    def _place_key(self) -> None:
        candidates = [
            (col, row)
            for row in range(1, self.height - 1)
            for col in range(1, self.width - 1)
            if self.grid[row][col] == Tile.PATH
        ]
        if candidates:
            self.key_x, self.key_y = self.rng.choice(candidates)
            self.grid[self.key_y][self.key_x] = Tile.KEY