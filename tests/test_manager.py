import random

import pytest

from cavecrawl.controls import InputState
from cavecrawl.entities import Direction, EnemyPack, Player
from cavecrawl.level import Level
from cavecrawl.manager import SQUARE_SIZE, Camera, GameManager, GameState


@pytest.fixture
def game():
    level = Level(rng=random.Random(3))
    player = Player(level.spawn_x, level.spawn_y)
    pack = EnemyPack(random.Random(0))
    return GameManager(level, player, pack, random.Random(0))


def _centre(box):
    return (box.x + box.width / 2, box.y + box.height / 2)


def _pause(game):
    game.step(0.016, InputState(escape=True), None, 0.0)


def test_starts_playing(game):
    assert game.state is GameState.PLAYING
    assert game.running is True


def test_escape_pauses_and_skips_update(game):
    controls = InputState(left=True, escape=True)
    assert game.step(0.016, controls, None, 0.0) is GameState.PAUSED
    assert controls.escape is False
    assert game.player.direction == Direction.UP


def test_playing_step_applies_input(game):
    game.step(0.016, InputState(left=True), None, 0.0)
    assert game.player.direction == Direction.LEFT


def test_paused_ignores_movement(game):
    _pause(game)
    x, y = game.player.x, game.player.y
    game.step(0.016, InputState(right=True), None, 1.0)
    assert (game.player.x, game.player.y) == (x, y)
    assert game.player.direction == Direction.UP


def test_escape_unpauses(game):
    _pause(game)
    assert game.step(0.016, InputState(escape=True), None, 1.0) is GameState.PLAYING


def test_resume_button_resumes(game):
    _pause(game)
    pos = _centre(game.menu_layout()["resume"])
    assert game.step(0.016, InputState(click_left=True), pos, 1.0) is GameState.PLAYING


def test_quit_button_stops(game):
    _pause(game)
    pos = _centre(game.menu_layout()["quit"])
    game.step(0.016, InputState(click_left=True), pos, 1.0)
    assert game.running is False


def test_click_elsewhere_stays_paused(game):
    _pause(game)
    panel = game.menu_layout()["panel"]
    pos = (panel.x + panel.width - 1, panel.y + panel.height - 1)
    assert game.step(0.016, InputState(click_left=True), pos, 1.0) is GameState.PAUSED
    assert game.running is True


def test_menu_is_centred_on_player(game):
    panel = game.menu_layout()["panel"]
    cx, cy = _centre(panel)
    assert cx == pytest.approx(game.player.x * SQUARE_SIZE)
    assert cy == pytest.approx(game.player.y * SQUARE_SIZE)
    assert panel.width == pytest.approx(game.view_width / 2)


def test_buttons_do_not_overlap(game):
    layout = game.menu_layout()
    resume, quit_box = layout["resume"], layout["quit"]
    assert resume.y + resume.height <= quit_box.y
    assert not resume.contains(*_centre(quit_box))


def test_camera_centre_maps_to_screen_middle():
    camera = Camera(800, 600)
    camera.center_on(3.5, 7.0, SQUARE_SIZE)
    sx, sy = camera.world_to_screen(3.5 * SQUARE_SIZE, 7.0 * SQUARE_SIZE)
    assert (sx, sy) == pytest.approx((400, 300))


@pytest.mark.parametrize("point", [(0.0, 0.0), (123.5, -40.0), (799.0, 599.0)])
def test_camera_round_trip(point):
    camera = Camera(800, 600)
    camera.center_on(2.25, 11.0, SQUARE_SIZE)
    world = camera.screen_to_world(*point)
    assert camera.world_to_screen(*world) == pytest.approx(point)