"""
Game entity dataclasses and world constants
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

GAME_WIDTH = 320
GAME_HEIGHT = 320
TILE_SIZE = 16


class EnemyType(str, Enum):
    BASIC = 'basic'
    FAST = 'fast'
    TANK = 'tank'


class PowerUpKind(str, Enum):
    SPREAD = 'spread'
    RAPIDFIRE = 'rapidfire'
    PIERCE = 'pierce'
    NUKE = 'nuke'


class GamePhase(str, Enum):
    TITLE = 'title'
    PLAYING = 'playing'
    GAMEOVER = 'gameover'


@dataclass
class Vector2:
    x: float = 0.0
    y: float = 0.0

    def copy(self) -> 'Vector2':
        return Vector2(self.x, self.y)

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0


# eq=False keeps identity semantics so entities can be tracked in lists
@dataclass(eq=False)
class Entity:
    """Square bounding box with ``pos`` as the top-left corner"""
    pos: Vector2 = field(default_factory=Vector2)
    size: float = TILE_SIZE
    alive: bool = True


@dataclass
class ActivePowerUp:
    kind: PowerUpKind
    remaining: float


@dataclass(eq=False)
class Player(Entity):
    """Player-controlled gunslinger"""
    lives: int = 3
    speed: float = 80.0  # px/s
    fire_rate: float = 4.0  # shots/s
    fire_cooldown: float = 0.0  # seconds
    direction: Vector2 = field(default_factory=lambda: Vector2(0.0, 1.0))
    invincible_timer: float = 0.0  # seconds
    active_power_ups: List[ActivePowerUp] = field(default_factory=list)


@dataclass(eq=False)
class Bullet(Entity):
    """Bullet projectile entity"""
    velocity: Vector2 = field(default_factory=Vector2)
    damage: int = 1
    from_player: bool = True
    pierce: bool = False
    hits: List['Enemy'] = field(default_factory=list)  # enemies already damaged by a piercing bullet


@dataclass(eq=False)
class Enemy(Entity):
    """Enemy that walks straight at the player"""
    type: EnemyType = EnemyType.BASIC
    speed: float = 35.0
    hp: int = 1
    max_hp: int = 1
    score: int = 10


@dataclass(eq=False)
class PowerUp(Entity):
    """Collectible dropped by a killed enemy"""
    kind: PowerUpKind = PowerUpKind.SPREAD
    duration: float = 0.0  # 0 = instant


@dataclass
class WaveState:
    current: int = 0
    enemies_remaining: int = 0
    spawn_timer: float = 0.0
    spawn_interval: float = 1.2
    between_wave_timer: float = 0.0
    active: bool = False
