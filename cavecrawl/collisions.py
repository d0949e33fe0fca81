"""Collision handling between the player, enemies, fireballs and cave walls."""

from __future__ import annotations

import logging
import math
from typing import Callable, NamedTuple

from cavecrawl.entities import Direction, EnemyPack, Player
from cavecrawl.level import Level, Tile

logger = logging.getLogger(__name__)

BUFFER = 0.02
EPSILON = 0.02
PIXELS_PER_TILE = 100.0


class _Probe(NamedTuple):
    x: int
    y: int
    active: bool
    touching: Callable[[], bool]


def _tile(level: Level, cx: int, cy: int) -> Tile:
    """Tile at ``(cx, cy)``; anything outside the grid counts as wall."""
    if 0 <= cy < len(level.grid) and 0 <= cx < len(level.grid[cy]):
        return level.grid[cy][cx]
    return Tile.WALL


def start_new_level(level: Level, player: Player, pack: EnemyPack) -> None:
    """Regenerate the map, put the player on the spawn and repopulate it."""
    player.keys.clear()
    level.generate()
    player.x = float(level.spawn_x)
    player.y = float(level.spawn_y)
    pack.spawn(level)
    player.keys.append(player.create_key(level.key_x, level.key_y))


def point_in_box(
    fx: float, fy: float, fh: float, fw: float,
    ex: float, ey: float, eh: float, ew: float,
) -> bool:
    """True if the point ``(fx, fy)`` lies strictly inside the box at ``(ex, ey)``."""
    min_x, max_x = min(ex, ex + ew), max(ex, ex + ew)
    min_y, max_y = min(ey, ey + eh), max(ey, ey + eh)
    return min_x < fx < max_x and min_y < fy < max_y


def _player_probes(
    level: Level, player: Player, heading: Direction, ix: int, iy: int
) -> tuple[list[_Probe], Callable[[], None]]:
    width = player.width_px / PIXELS_PER_TILE
    height = player.height_px / PIXELS_PER_TILE

    if heading is Direction.LEFT:
        def reach() -> bool:
            return player.x <= ix + EPSILON

        def block() -> None:
            player.x = ix + BUFFER

        low = iy + 1 != level.height - 1
        probes = [
            _Probe(ix - 1, iy, True, reach),
            _Probe(ix - 1, iy + 1, low, lambda: reach() and player.y + height >= iy + 1),
        ]
    elif heading is Direction.RIGHT:
        def reach() -> bool:
            return player.x + width >= ix + 1 - EPSILON

        def block() -> None:
            player.x = ix + (1 - width) - BUFFER

        low = iy + 1 != level.height - 1
        probes = [
            _Probe(ix + 1, iy, True, reach),
            _Probe(ix + 1, iy + 1, low, lambda: reach() and player.y + height >= iy + 1),
        ]
    elif heading is Direction.UP:
        def reach() -> bool:
            return player.y <= iy + EPSILON

        def block() -> None:
            player.y = iy + BUFFER

        wide = ix + 1 != level.width - 1
        probes = [
            _Probe(ix, iy - 1, True, reach),
            _Probe(ix + 1, iy - 1, wide, lambda: reach() and player.x + width >= ix + 1),
        ]
    else:
        def reach() -> bool:
            return player.y + height >= iy + 1 - EPSILON

        def block() -> None:
            player.y = iy + (1 - height) - BUFFER

        wide = ix + 1 != level.width - 1
        probes = [
            _Probe(ix, iy + 1, True, reach),
            _Probe(ix + 1, iy + 1, wide, lambda: reach() and player.x + width >= ix + 1),
        ]
    return probes, block


def check_player_wall(
    level: Level, player: Player, direction: int, pack: EnemyPack
) -> None:
    """Stop the player at walls, pick up keys and leave through the exit."""
    ix = int(player.x)
    iy = int(player.y)
    player.can_move = True

    try:
        heading = Direction(direction)
    except ValueError:
        player.can_move = False
        return

    probes, block = _player_probes(level, player, heading, ix, iy)

    for probe in probes:
        if probe.active and _tile(level, probe.x, probe.y) == Tile.WALL and probe.touching():
            block()
            player.can_move = False

    if player.key_count > 0:
        for probe in probes:
            if probe.active and _tile(level, probe.x, probe.y) == Tile.EXIT and probe.touching():
                player.key_count -= 1
                start_new_level(level, player, pack)

    for probe in probes:
        if probe.active and _tile(level, probe.x, probe.y) == Tile.KEY and probe.touching():
            level.grid[probe.y][probe.x] = Tile.PATH
            player.keys.clear()
            player.key_count += 1


def _chase(pack: EnemyPack, dt: float, player: Player) -> None:
    half_w = player.width_px / PIXELS_PER_TILE / 2.0
    half_h = player.height_px / PIXELS_PER_TILE / 2.0
    for enemy in pack:
        enemy.speed = 0.0
        target_x = player.x + (half_w - enemy.width_px / PIXELS_PER_TILE / 2.0)
        target_y = player.y + (half_h - enemy.height_px / PIXELS_PER_TILE / 2.0)
        vec_x = target_x - enemy.x
        vec_y = target_y - enemy.y
        distance = math.hypot(vec_x, vec_y)
        if distance != 0:
            enemy.x += vec_x / distance * dt
            enemy.y += vec_y / distance * dt


def _patrol(level: Level, pack: EnemyPack, dt: float) -> None:
    for enemy in pack:
        tx = int(enemy.x)
        ty = int(enemy.y)
        width = enemy.width_px / PIXELS_PER_TILE
        height = enemy.height_px / PIXELS_PER_TILE
        eps = enemy.epsilon

        def wall(cx: int, cy: int) -> bool:
            return _tile(level, cx, cy) == Tile.WALL

        heading = enemy.direction
        if heading == Direction.LEFT:
            enemy.x += enemy.speed * dt
            reverse_to = Direction.RIGHT
            if tx <= 0:
                hit = True
            else:
                reach = enemy.x <= tx + eps
                side = wall(tx - 1, ty) and reach
                corner = (
                    wall(tx - 1, ty + 1) and ty + 1 != level.height - 1
                    and reach and enemy.y + height >= ty + 1
                )
                hit = side or corner
        elif heading == Direction.RIGHT:
            enemy.x += enemy.speed * dt
            reverse_to = Direction.LEFT
            if tx >= level.width - 1:
                hit = True
            else:
                reach = enemy.x + width >= tx + 1 - eps
                side = wall(tx + 1, ty) and reach
                corner = (
                    wall(tx + 1, ty + 1) and ty + 1 != level.height - 1
                    and reach and enemy.y + height >= ty + 1
                )
                hit = side or corner
        elif heading == Direction.UP:
            enemy.y += enemy.speed * dt
            reverse_to = Direction.DOWN
            if ty <= 0:
                hit = True
            else:
                reach = enemy.y <= ty + eps
                side = wall(tx, ty - 1) and reach
                corner = (
                    wall(tx + 1, ty - 1) and tx + 1 != level.width - 1
                    and reach and enemy.x + width >= tx + 1
                )
                hit = side or corner
        elif heading == Direction.DOWN:
            enemy.y += enemy.speed * dt
            reverse_to = Direction.UP
            if ty >= level.height - 1:
                hit = True
            else:
                reach = enemy.y + height >= ty + 2 - eps
                side = wall(tx, ty + 2) and reach
                corner = (
                    wall(tx + 1, ty + 2) and tx + 1 != level.width - 1
                    and reach and enemy.x + width >= tx + 1
                )
                hit = side or corner
        else:
            continue

        if hit:
            enemy.speed = -enemy.speed
            enemy.direction = reverse_to


def move_enemies(level: Level, pack: EnemyPack, dt: float, player: Player) -> None:
    """Move the pack: patrol and bounce off walls, or chase the player when agro."""
    if not len(pack):
        return
    if pack.is_agro:
        _chase(pack, dt, player)
    else:
        _patrol(level, pack, dt)


def _fireball_hits_wall(level: Level, ball) -> bool:
    tx = int(ball.x)
    ty = int(ball.y)
    width = ball.width_px / PIXELS_PER_TILE
    height = ball.height_px / PIXELS_PER_TILE
    eps = ball.epsilon

    def wall(cx: int, cy: int) -> bool:
        return _tile(level, cx, cy) == Tile.WALL

    heading = ball.direction
    if heading == Direction.LEFT:
        reach = ball.x <= tx + eps
        return (
            tx <= 0
            or (wall(tx - 1, ty) and reach)
            or (wall(tx - 1, ty + 1) and ty + 1 != level.height - 1
                and reach and ball.y + height >= ty + 1)
        )
    if heading == Direction.RIGHT:
        reach = ball.x + width >= tx + 1 - eps
        return (
            tx >= level.width - 1
            or (wall(tx + 1, ty) and reach)
            or (wall(tx + 1, ty + 1) and ty + 1 != level.height - 1
                and reach and ball.y + height >= ty + 1)
        )
    if heading == Direction.UP:
        reach = ball.y <= ty + eps
        return (
            ty <= 0
            or (wall(tx, ty - 1) and reach)
            or (wall(tx + 1, ty - 1) and tx + 1 != level.width - 1
                and reach and ball.x + width >= tx + 1)
        )
    if heading == Direction.DOWN:
        reach = ball.y + height >= ty + 1 - eps
        return (
            ty + 1 >= level.height
            or (wall(tx, ty + 1) and reach)
            or (wall(tx + 1, ty + 1) and tx + 1 != level.width - 1
                and reach and ball.x + width >= tx + 1)
        )
    return False


def update_fireballs(level: Level, player: Player, pack: EnemyPack) -> None:
    """Move fireballs, drop those that hit walls, and let them kill enemies."""
    survivors = []
    for ball in player.fireballs:
        if _fireball_hits_wall(level, ball):
            continue
        if ball.direction in (Direction.LEFT, Direction.RIGHT):
            ball.x += ball.speed
        elif ball.direction in (Direction.UP, Direction.DOWN):
            ball.y += ball.speed

        fw = ball.width_px / PIXELS_PER_TILE
        fh = ball.height_px / PIXELS_PER_TILE
        victim = next(
            (
                enemy
                for enemy in pack.enemies
                if ball.x < enemy.x + enemy.width_px / PIXELS_PER_TILE
                and ball.x + fw > enemy.x
                and ball.y < enemy.y + enemy.height_px / PIXELS_PER_TILE
                and ball.y + fh > enemy.y
            ),
            None,
        )
        if victim is None:
            survivors.append(ball)
            continue
        logger.info("HIT")
        pack.enemies.remove(victim)
        pack.set_agro()
    player.fireballs[:] = survivors


def collisions(
    level: Level, player: Player, direction: int, pack: EnemyPack, dt: float
) -> None:
    """Run one frame of all collision handling."""
    check_player_wall(level, player, direction, pack)
    move_enemies(level, pack, dt, player)
    update_fireballs(level, player, pack)