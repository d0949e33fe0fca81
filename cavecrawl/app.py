"""Window, drawing and the main loop of the game."""

from __future__ import annotations

import argparse
import logging
import random
import time
from pathlib import Path
from typing import Optional, Sequence, Union

import pygame

from cavecrawl.controls import InputState
from cavecrawl.entities import EnemyPack, Player
from cavecrawl.level import Level, Tile
from cavecrawl.manager import SQUARE_SIZE, Camera, GameManager, GameState

BACKGROUND = (58, 9, 235)
TITLE = "MAP&GAME"
FPS = 60

_TILE_COLOURS = {
    Tile.WALL: (40, 34, 30),
    Tile.PATH: (150, 130, 100),
    Tile.EDGE: (120, 100, 75),
    Tile.SPAWN: (70, 160, 70),
    Tile.EXIT: (210, 170, 30),
    Tile.WORM: (160, 110, 80),
    Tile.KEY: (150, 130, 101),
}

_KEYMAP = (
    ("w", pygame.K_w),
    ("a", pygame.K_a),
    ("s", pygame.K_s),
    ("d", pygame.K_d),
    ("space", pygame.K_SPACE),
)


def configure_logging(path: Union[str, Path] = "log.txt") -> logging.Handler:
    """Send the package's log messages to ``path``, truncating it first."""
    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger = logging.getLogger("cavecrawl")
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    return handler


def tile_colour(tile: int) -> tuple[int, int, int]:
    """Fill colour used to draw a grid tile."""
    return _TILE_COLOURS[Tile(tile)]


def _rect(camera: Camera, x: float, y: float, w: float, h: float) -> pygame.Rect:
    sx, sy = camera.world_to_screen(x, y)
    return pygame.Rect(round(sx), round(sy), round(w), round(h))


def _draw_world(screen, camera: Camera, level: Level, player: Player, pack: EnemyPack) -> None:
    for row, tiles in enumerate(level.grid):
        for col, tile in enumerate(tiles):
            rect = _rect(camera, col * SQUARE_SIZE, row * SQUARE_SIZE, SQUARE_SIZE, SQUARE_SIZE)
            pygame.draw.rect(screen, tile_colour(tile), rect)
            pygame.draw.rect(screen, (0, 0, 255), rect, 2)

    pygame.draw.rect(
        screen,
        (230, 230, 230),
        _rect(camera, player.x * SQUARE_SIZE, player.y * SQUARE_SIZE,
              player.width_px, player.height_px),
    )
    for ball in player.fireballs:
        pygame.draw.ellipse(
            screen,
            (240, 90, 20),
            _rect(camera, ball.x * SQUARE_SIZE, ball.y * SQUARE_SIZE,
                  ball.width_px, ball.height_px),
        )
    for key in player.keys:
        pygame.draw.rect(
            screen,
            (250, 220, 40),
            _rect(camera, key.x * SQUARE_SIZE, key.y * SQUARE_SIZE,
                  key.width_px, key.height_px),
        )
    for enemy in pack:
        pygame.draw.rect(
            screen,
            (200, 30, 30),
            _rect(camera, enemy.x * SQUARE_SIZE, enemy.y * SQUARE_SIZE,
                  enemy.width_px, enemy.height_px),
        )


def _draw_menu(screen, camera: Camera, game: GameManager, fonts) -> None:
    title_font, button_font = fonts
    layout = game.menu_layout()

    panel = _rect(camera, *layout["panel"])
    overlay = pygame.Surface(panel.size, pygame.SRCALPHA)
    overlay.fill((255, 0, 0, 100))
    screen.blit(overlay, panel.topleft)
    pygame.draw.rect(screen, (255, 0, 0), panel, 3)

    tx, ty = camera.world_to_screen(*layout["title"])
    screen.blit(title_font.render("Game Paused", True, (255, 255, 255)), (tx, ty))

    for name, label in (("resume", "Resume"), ("quit", "Quit")):
        button = _rect(camera, *layout[name])
        pygame.draw.rect(screen, (100, 100, 250), button)
        screen.blit(
            button_font.render(label, True, (255, 255, 255)),
            (button.x + 20, button.y + 5),
        )

    fire = _rect(camera, *layout["fireball"])
    pygame.draw.ellipse(screen, (240, 90, 20), fire)
    pygame.draw.rect(screen, (0, 0, 255), fire, 3)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the game window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="cavecrawl", description="Cave crawling arcade game.")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--log", default="log.txt", help="log file path")
    args = parser.parse_args(argv)

    handler = configure_logging(args.log)
    rng = random.Random(args.seed if args.seed is not None else time.time_ns())

    level = Level(rng=rng)
    player = Player(level.spawn_x, level.spawn_y)
    pack = EnemyPack(rng)
    player.keys.append(player.create_key(level.key_x, level.key_y))
    pack.spawn(level)
    game = GameManager(level, player, pack, rng)

    pygame.init()
    try:
        screen = pygame.display.set_mode((game.view_width, game.view_height))
        pygame.display.set_caption(TITLE)
        clock = pygame.time.Clock()
        fonts = (pygame.font.Font(None, 24), pygame.font.Font(None, 18))
        camera = Camera(game.view_width, game.view_height)
        controls = InputState()

        while game.running:
            dt = clock.tick(FPS) / 1000.0
            escape = clicked = False
            click_screen = None
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    escape = True
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    clicked = True
                    click_screen = event.pos
            if not game.running:
                break

            pressed = pygame.key.get_pressed()
            controls.update({name for name, key in _KEYMAP if pressed[key]}, escape, clicked)

            screen.fill(BACKGROUND)
            camera.center_on(player.x, player.y, SQUARE_SIZE)
            click_pos = camera.screen_to_world(*click_screen) if click_screen else None
            game.step(dt, controls, click_pos, time.monotonic())

            _draw_world(screen, camera, level, player, pack)
            if game.state is GameState.PAUSED:
                _draw_menu(screen, camera, game, fonts)
            pygame.display.flip()
    finally:
        pygame.quit()
        logging.getLogger("cavecrawl").removeHandler(handler)
        handler.close()
    return 0