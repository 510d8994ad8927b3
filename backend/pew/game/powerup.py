"""
Power-up drops, pickup and timed effects
"""

import math
import random
from typing import Dict, List, Optional

from .bullet import create_bullet
from .collision import check_collision
from .entities import ActivePowerUp, Bullet, Player, PowerUp, PowerUpKind, Vector2
from .utils import decay, roll_table

POWERUP_SIZE = 10
POWERUP_DROP_CHANCE = 0.25  # per kill
POWERUP_MIN_WAVE = 3

POWERUP_DURATIONS: Dict[PowerUpKind, float] = {
    PowerUpKind.SPREAD: 6.0,
    PowerUpKind.RAPIDFIRE: 5.0,
    PowerUpKind.PIERCE: 6.0,
    PowerUpKind.NUKE: 0.0,  # instant
}

# (min_wave, threshold, kind), checked in order against a single roll
POWERUP_ROLL_TABLE = [
    (5, 0.1, PowerUpKind.NUKE),
    (0, 0.4, PowerUpKind.SPREAD),
    (0, 0.7, PowerUpKind.RAPIDFIRE),
]

SPREAD_ANGLE = math.pi / 8  # 22.5 degrees


def can_drop_power_up(wave: int) -> bool:
    return wave >= POWERUP_MIN_WAVE


def try_spawn_power_up(pos: Vector2, wave: int, rng=random) -> Optional[PowerUp]:
    """Roll for a drop at a kill position."""
    if not can_drop_power_up(wave):
        return None
    if rng.random() > POWERUP_DROP_CHANCE:
        return None
    return create_power_up(roll_power_up_kind(wave, rng), pos)


def roll_power_up_kind(wave: int, rng=random) -> PowerUpKind:
    return roll_table(rng.random(), wave, POWERUP_ROLL_TABLE, PowerUpKind.PIERCE)


def create_power_up(kind: PowerUpKind, pos: Vector2) -> PowerUp:
    return PowerUp(pos=pos.copy(), size=POWERUP_SIZE, kind=kind, duration=POWERUP_DURATIONS[kind])


def collect_power_ups(player: Player, power_ups: List[PowerUp]) -> List[PowerUp]:
    collected = []
    for pu in power_ups:
        if not pu.alive:
            continue
        if check_collision(player, pu):
            pu.alive = False
            collected.append(pu)
    return collected


def apply_power_up(player: Player, power_up: PowerUp) -> None:
    """Start (or refresh) a timed effect. Nuke is resolved by the engine."""
    if power_up.kind == PowerUpKind.NUKE:
        return
    player.active_power_ups = [ap for ap in player.active_power_ups if ap.kind != power_up.kind]
    player.active_power_ups.append(ActivePowerUp(kind=power_up.kind, remaining=power_up.duration))


def update_active_power_ups(player: Player, dt: float) -> None:
    for ap in player.active_power_ups:
        ap.remaining = decay(ap.remaining, dt)
    player.active_power_ups = [ap for ap in player.active_power_ups if ap.remaining > 0]


def has_active_power_up(player: Player, kind: PowerUpKind) -> bool:
    return any(ap.kind == kind for ap in player.active_power_ups)


def prune_dead_power_ups(power_ups: List[PowerUp]) -> List[PowerUp]:
    return [pu for pu in power_ups if pu.alive]


def create_player_bullets(player: Player, fire_dir: Vector2) -> List[Bullet]:
    """Bullets for one shot, shaped by the spread and pierce effects."""
    pierce = has_active_power_up(player, PowerUpKind.PIERCE)

    if has_active_power_up(player, PowerUpKind.SPREAD):
        angle = math.atan2(fire_dir.y, fire_dir.x)
        bullets = []
        for offset in (-SPREAD_ANGLE, 0.0, SPREAD_ANGLE):
            a = angle + offset
            bullets.append(create_bullet(player.pos, Vector2(math.cos(a), math.sin(a)), True, pierce))
        return bullets

    return [create_bullet(player.pos, fire_dir, True, pierce)]
