"""Game actors: the player with fireballs and keys, and the enemy pack."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterator, Optional

from cavecrawl.level import Level

MOVE_STEP = 0.02
FRAME_TIME = 0.2
FIRE_COOLDOWN = 0.5
FIREBALL_SPEED = 0.1
FIREBALL_WIDTH_PX = 64.5
FIREBALL_HEIGHT_PX = 64.0
FIREBALL_FRAMES = 4
PLAYER_WIDTH_PX = 48
PLAYER_HEIGHT_PX = 68
PLAYER_FRAMES = 4
PLAYER_HEALTH = 100
KEY_SIZE_PX = 64.0
ENEMY_FRAMES = 8
ENEMY_SPEED = 0.5
ENEMY_EPSILON = 0.2
ENEMY_HEALTH = 100
DEFAULT_ENEMY_COUNT = 10


class Direction(IntEnum):
    """Facing of an actor; the numbering matches movement code throughout."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


@dataclass
class FireBall:
    """A projectile travelling in a straight line, in tile units."""

    x: float
    y: float
    direction: Direction = Direction.UP
    speed: float = 0.0
    epsilon: float = 0.1
    width_px: float = FIREBALL_WIDTH_PX
    height_px: float = FIREBALL_HEIGHT_PX
    frame: int = 0
    elapsed: float = 0.0

    def advance_animation(self, dt: float, frame_time: float) -> None:
        """Step the flame animation once enough time has passed."""
        self.elapsed += dt
        if self.elapsed >= frame_time:
            self.frame = (self.frame + 1) % FIREBALL_FRAMES
            self.elapsed = 0.0

    @property
    def texture_rect(self) -> tuple[float, float, float, float]:
        return (self.frame * self.width_px, 0.0, self.width_px, self.height_px)


@dataclass
class Item:
    """A pick-up lying on the map, such as the level key."""

    x: float
    y: float
    width_px: float = KEY_SIZE_PX
    height_px: float = KEY_SIZE_PX


class Player:
    """The hero: position in tile units, facing, keys held and live fireballs."""

    def __init__(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.health = PLAYER_HEALTH
        self.direction = Direction.UP
        self.facing = Direction.UP
        self.frame = 0
        self.frame_time = FRAME_TIME
        self.elapsed = 0.0
        self.idle = True
        self.can_move = False
        self.key_count = 0
        self.width_px = PLAYER_WIDTH_PX
        self.height_px = PLAYER_HEIGHT_PX
        self.fireballs: list[FireBall] = []
        self.keys: list[Item] = []
        self.last_fire: Optional[float] = None

    @property
    def texture_rect(self) -> tuple[int, int, int, int]:
        shown = 0 if self.idle else self.frame
        return (shown * self.width_px, 0, self.width_px, self.height_px)

    def create_fireball(self, x: float, y: float) -> FireBall:
        """A fireball resting at ``(x, y)``; direction and speed are set by the caller."""
        return FireBall(x=x, y=y)

    def create_key(self, x: float, y: float) -> Item:
        """A key item placed at ``(x, y)``."""
        return Item(x=x, y=y)

    def update(
        self,
        dt: float,
        left: bool,
        right: bool,
        up: bool,
        down: bool,
        fire: bool,
        now: Optional[float] = None,
    ) -> None:
        """Apply one frame of input: move, animate, fire and animate fireballs."""
        if now is None:
            now = time.monotonic()
        self.elapsed += dt

        for pressed, heading, dx, dy in (
            (left, Direction.LEFT, -MOVE_STEP, 0.0),
            (right, Direction.RIGHT, MOVE_STEP, 0.0),
            (up, Direction.UP, 0.0, -MOVE_STEP),
            (down, Direction.DOWN, 0.0, MOVE_STEP),
        ):
            if not pressed:
                continue
            self.direction = heading
            if self.can_move:
                self.x += dx
                self.y += dy
                self.facing = heading

        if left or right or up or down:
            self.idle = False
            if self.elapsed >= self.frame_time:
                self.frame = (self.frame + 1) % PLAYER_FRAMES
                self.elapsed = 0.0
        else:
            self.idle = True

        if fire and (self.last_fire is None or now - self.last_fire > FIRE_COOLDOWN):
            ball = self.create_fireball(self.x, self.y)
            ball.direction = Direction(self.direction)
            negative = ball.direction in (Direction.LEFT, Direction.UP)
            ball.speed = -FIREBALL_SPEED if negative else FIREBALL_SPEED
            self.fireballs.append(ball)
            self.last_fire = now

        for ball in self.fireballs:
            ball.advance_animation(dt, self.frame_time)


class EnemyKind(Enum):
    """Enemy species with their sprite frame size in pixels."""

    BRAIN = (60, 102)
    RED = (78, 105)
    TUSK = (66, 84)

    @property
    def width_px(self) -> int:
        return self.value[0]

    @property
    def height_px(self) -> int:
        return self.value[1]


_KINDS = list(EnemyKind)


@dataclass
class Enemy:
    """One monster patrolling the cave."""

    id: int
    x: float
    y: float
    kind: EnemyKind = EnemyKind.BRAIN
    direction: Direction = Direction.UP
    speed: float = ENEMY_SPEED
    epsilon: float = ENEMY_EPSILON
    health: int = ENEMY_HEALTH
    frame: int = 0
    frame_time: float = FRAME_TIME
    elapsed: float = 0.0
    agro: bool = False
    width_px: int = field(init=False)
    height_px: int = field(init=False)

    def __post_init__(self) -> None:
        self.width_px = self.kind.width_px
        self.height_px = self.kind.height_px

    def animate(self, dt: float) -> None:
        """Advance the walk cycle once enough time has passed."""
        self.elapsed += dt
        if self.elapsed >= self.frame_time:
            self.frame = (self.frame + 1) % ENEMY_FRAMES
            self.elapsed = 0.0

    @property
    def texture_rect(self) -> tuple[int, int, int, int]:
        return (self.frame * self.width_px, 0, self.width_px, self.height_px)


class EnemyPack:
    """All enemies on the current level; they share one kind."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.enemies: list[Enemy] = []
        self.kind = EnemyKind.BRAIN

    def __iter__(self) -> Iterator[Enemy]:
        return iter(self.enemies)

    def __len__(self) -> int:
        return len(self.enemies)

    @property
    def is_agro(self) -> bool:
        """True when the pack is hunting the player."""
        return bool(self.enemies) and self.enemies[0].agro

    def spawn(self, level: Level, count: int = DEFAULT_ENEMY_COUNT) -> None:
        """Replace the pack with ``count`` fresh enemies in open areas of ``level``."""
        self.kind = _KINDS[self.rng.randrange(len(_KINDS))]
        self.enemies = []
        while len(self.enemies) < count:
            point = level.enemy_spawn_point()
            if point is None:
                raise RuntimeError("level has no open area to spawn enemies in")
            x, y = point
            direction = Direction(self.rng.randrange(4))
            frame = self.rng.randrange(ENEMY_FRAMES)
            speed = ENEMY_SPEED
            if direction in (Direction.UP, Direction.LEFT):
                speed = -speed
            self.enemies.append(
                Enemy(
                    id=len(self.enemies),
                    x=float(x),
                    y=float(y),
                    kind=self.kind,
                    direction=direction,
                    speed=speed,
                    frame=frame,
                )
            )

    def update(self, dt: float) -> None:
        """Animate every enemy."""
        for enemy in self.enemies:
            enemy.animate(dt)

    def set_agro(self) -> None:
        """Turn every enemy towards the player."""
        for enemy in self.enemies:
            enemy.agro = True