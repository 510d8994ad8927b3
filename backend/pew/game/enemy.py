"""
Enemy stats table, spawning and homing movement
"""

import math
import random
from collections import namedtuple
from typing import Dict, List

from .entities import GAME_HEIGHT, GAME_WIDTH, TILE_SIZE, Enemy, EnemyType, Vector2

EnemyStats = namedtuple('EnemyStats', ['speed', 'hp', 'score'])

ENEMY_STATS: Dict[EnemyType, EnemyStats] = {
    EnemyType.BASIC: EnemyStats(speed=35.0, hp=1, score=10),
    EnemyType.FAST: EnemyStats(speed=65.0, hp=1, score=15),
    EnemyType.TANK: EnemyStats(speed=20.0, hp=3, score=30),
}

# Highest per-kill score of any enemy type
MAX_ENEMY_SCORE = max(s.score for s in ENEMY_STATS.values())


def create_enemy(enemy_type: EnemyType, rng=random) -> Enemy:
    """Spawn an enemy just outside a uniformly chosen board edge."""
    stats = ENEMY_STATS[enemy_type]
    return Enemy(
        pos=random_edge_position(rng),
        size=TILE_SIZE,
        type=enemy_type,
        speed=stats.speed,
        hp=stats.hp,
        max_hp=stats.hp,
        score=stats.score,
    )


def random_edge_position(rng=random) -> Vector2:
    edge = rng.randrange(4)
    if edge == 0:  # top
        return Vector2(rng.random() * (GAME_WIDTH - TILE_SIZE), -TILE_SIZE)
    if edge == 1:  # bottom
        return Vector2(rng.random() * (GAME_WIDTH - TILE_SIZE), GAME_HEIGHT)
    if edge == 2:  # left
        return Vector2(-TILE_SIZE, rng.random() * (GAME_HEIGHT - TILE_SIZE))
    return Vector2(GAME_WIDTH, rng.random() * (GAME_HEIGHT - TILE_SIZE))


def update_enemies(enemies: List[Enemy], player_pos: Vector2, dt: float) -> None:
    """Walk every live enemy straight at the player's current position."""
    for e in enemies:
        if not e.alive:
            continue

        dx = player_pos.x - e.pos.x
        dy = player_pos.y - e.pos.y
        dist = math.hypot(dx, dy)
        # Already on top of the player
        if dist <= 1:
            continue

        e.pos.x += dx / dist * e.speed * dt
        e.pos.y += dy / dist * e.speed * dt


def damage_enemy(enemy: Enemy, damage: int) -> bool:
    """Apply damage; returns True if this hit killed the enemy."""
    enemy.hp -= damage
    if enemy.hp <= 0:
        enemy.alive = False
        return True
    return False


def prune_dead_enemies(enemies: List[Enemy]) -> List[Enemy]:
    return [e for e in enemies if e.alive]
