"""Game flow: playing and pause states, the pause menu and the camera."""

from __future__ import annotations

import random
from enum import Enum, auto
from typing import NamedTuple, Optional

from cavecrawl.collisions import collisions
from cavecrawl.controls import InputState
from cavecrawl.entities import (
    FIREBALL_HEIGHT_PX,
    FIREBALL_WIDTH_PX,
    EnemyPack,
    Player,
)
from cavecrawl.level import Level

SQUARE_SIZE = 100
VIEW_WIDTH = 800
VIEW_HEIGHT = 600
BUTTON_WIDTH = 150.0
BUTTON_HEIGHT = 40.0
MENU_MARGIN = 20.0


class GameState(Enum):
    """Top-level mode of the game."""

    PLAYING = auto()
    PAUSED = auto()
    MAIN_MENU = auto()
    GAME_OVER = auto()


class _Box(NamedTuple):
    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px < self.x + self.width and self.y <= py < self.y + self.height


class Camera:
    """A view of ``width`` x ``height`` pixels centred on a world point."""

    def __init__(self, width: int = VIEW_WIDTH, height: int = VIEW_HEIGHT) -> None:
        self.width = width
        self.height = height
        self.center_x = width / 2.0
        self.center_y = height / 2.0

    def center_on(self, x: float, y: float, square_size: int = SQUARE_SIZE) -> None:
        """Centre the view on tile coordinates ``(x, y)``."""
        self.center_x = x * square_size
        self.center_y = y * square_size

    def world_to_screen(self, x: float, y: float) -> tuple[float, float]:
        """Convert world pixels to screen pixels."""
        return (
            x - self.center_x + self.width / 2.0,
            y - self.center_y + self.height / 2.0,
        )

    def screen_to_world(self, x: float, y: float) -> tuple[float, float]:
        """Convert screen pixels to world pixels."""
        return (
            x + self.center_x - self.width / 2.0,
            y + self.center_y - self.height / 2.0,
        )


class GameManager:
    """Advances the game one frame at a time and handles the pause menu."""

    def __init__(
        self,
        level: Level,
        player: Player,
        pack: EnemyPack,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.level = level
        self.player = player
        self.pack = pack
        self.rng = rng if rng is not None else random.Random()
        self.state = GameState.PLAYING
        self.running = True
        self.view_width = VIEW_WIDTH
        self.view_height = VIEW_HEIGHT

    def step(
        self,
        dt: float,
        controls: InputState,
        click_pos: Optional[tuple[float, float]] = None,
        now: Optional[float] = None,
    ) -> GameState:
        """Run one frame; ``click_pos`` is in world pixels. Returns the new state."""
        if self.state is GameState.PLAYING:
            if controls.escape:
                self.state = GameState.PAUSED
                controls.escape = False
            else:
                self.player.update(
                    dt,
                    controls.left,
                    controls.right,
                    controls.up,
                    controls.down,
                    controls.fire,
                    now,
                )
                collisions(self.level, self.player, self.player.direction, self.pack, dt)
                self.pack.update(dt)
        elif self.state is GameState.PAUSED:
            if controls.escape:
                self.state = GameState.PLAYING
                controls.escape = False
            if controls.click_left and click_pos is not None:
                layout = self.menu_layout()
                if layout["resume"].contains(*click_pos):
                    self.state = GameState.PLAYING
                if layout["quit"].contains(*click_pos):
                    self.running = False
        return self.state

    def menu_layout(self) -> dict:
        """World-pixel boxes of the pause menu, centred on the player."""
        width = self.view_width / 2.0
        height = self.view_height - self.view_height / 4.0
        left = self.player.x * SQUARE_SIZE - width / 2.0
        top = self.player.y * SQUARE_SIZE - height / 2.0
        inner = left + MENU_MARGIN
        return {
            "panel": _Box(left, top, width, height),
            "title": (inner, top + MENU_MARGIN),
            "resume": _Box(inner, top + 70, BUTTON_WIDTH, BUTTON_HEIGHT),
            "quit": _Box(inner, top + 130, BUTTON_WIDTH, BUTTON_HEIGHT),
            "fireball": _Box(inner, top + 190, FIREBALL_WIDTH_PX, FIREBALL_HEIGHT_PX),
        }