"""
Wave scheduler.

Two states: between waves (``active`` False) where a lull timer runs, and an
active wave where enemies are released one at a time on a fixed interval.
A wave ends once everything it spawned has been killed.
"""

import logging
import random

from .entities import EnemyType, WaveState
from .utils import roll_table

logger = logging.getLogger(__name__)

BASE_ENEMIES = 5
ENEMIES_PER_WAVE = 3
SPAWN_INTERVAL_BASE = 1.2  # seconds between spawns
SPAWN_INTERVAL_STEP = 0.05
SPAWN_INTERVAL_MIN = 0.3
BETWEEN_WAVE_DELAY = 2.0  # seconds between waves

# (min_wave, threshold, type), checked in order against a single roll
ENEMY_ROLL_TABLE = [
    (5, 0.15, EnemyType.TANK),
    (3, 0.35, EnemyType.FAST),
]


def enemies_in_wave(wave_number: int) -> int:
    return BASE_ENEMIES + wave_number * ENEMIES_PER_WAVE


def create_wave_state() -> WaveState:
    # The lull timer starts full so the first wave begins on the first tick
    return WaveState(
        current=0,
        enemies_remaining=0,
        spawn_timer=0.0,
        spawn_interval=SPAWN_INTERVAL_BASE,
        between_wave_timer=BETWEEN_WAVE_DELAY,
        active=False,
    )


def start_next_wave(wave: WaveState) -> None:
    wave.current += 1
    wave.enemies_remaining = enemies_in_wave(wave.current)
    wave.spawn_interval = max(SPAWN_INTERVAL_MIN, SPAWN_INTERVAL_BASE - wave.current * SPAWN_INTERVAL_STEP)
    wave.spawn_timer = 0.0
    wave.between_wave_timer = 0.0
    wave.active = True
    logger.info(f"[wave-start] wave={wave.current} enemies={wave.enemies_remaining} interval={wave.spawn_interval:.2f}s")


def get_enemy_type_for_wave(wave_number: int, rng=random) -> EnemyType:
    return roll_table(rng.random(), wave_number, ENEMY_ROLL_TABLE, EnemyType.BASIC)


def update_wave(wave: WaveState, active_enemy_count: int, dt: float) -> bool:
    """Advance the scheduler by ``dt``. Returns True when one enemy should spawn now.

    At most one spawn is signalled per call; any surplus time stays in
    ``spawn_timer`` and is paid out on following calls.
    """
    if not wave.active:
        wave.between_wave_timer += dt
        if wave.between_wave_timer >= BETWEEN_WAVE_DELAY:
            start_next_wave(wave)
        return False

    if wave.enemies_remaining <= 0:
        # Everything spawned; wait for the field to clear
        if active_enemy_count <= 0:
            wave.active = False
            wave.between_wave_timer = 0.0
            logger.info(f"[wave-clear] wave={wave.current}")
        return False

    wave.spawn_timer += dt
    if wave.spawn_timer >= wave.spawn_interval:
        wave.spawn_timer -= wave.spawn_interval
        wave.enemies_remaining -= 1
        return True
    return False
