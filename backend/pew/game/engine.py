"""
GameEngine - headless frame loop for the arena shooter
------------------------------------------------------
- One ``update(dt)`` per rendered frame, dt capped at 50 ms
- Phases: title -> playing -> gameover -> playing ...
- Player auto-fires along its facing; enemies home in on the player
- Waves release enemies on a timer; kills from wave 3 on may drop power-ups

Rendering lives in the browser; this module only owns the state.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .bullet import prune_dead_bullets, update_bullets
from .collision import check_collision
from .enemy import create_enemy, damage_enemy, prune_dead_enemies, update_enemies
from .entities import Bullet, Enemy, GamePhase, Player, PowerUp, PowerUpKind, WaveState
from .input import START_KEYS, InputState
from .player import create_player, hit_player, update_player
from .powerup import (
    apply_power_up,
    collect_power_ups,
    create_player_bullets,
    prune_dead_power_ups,
    try_spawn_power_up,
    update_active_power_ups,
)
from .wave import create_wave_state, get_enemy_type_for_wave, update_wave

logger = logging.getLogger(__name__)

MAX_FRAME_DT = 0.05  # seconds


@dataclass
class GameState:
    phase: GamePhase = GamePhase.TITLE
    player: Player = field(default_factory=create_player)
    bullets: List[Bullet] = field(default_factory=list)
    enemies: List[Enemy] = field(default_factory=list)
    power_ups: List[PowerUp] = field(default_factory=list)
    wave: WaveState = field(default_factory=create_wave_state)
    score: int = 0
    time: float = 0.0  # seconds spent in the playing phase


class GameEngine:
    """Owns one game session's state and steps it frame by frame."""

    def __init__(self, rng: Optional[random.Random] = None, input_state: Optional[InputState] = None):
        self.rng = rng or random.Random()
        self.input = input_state or InputState()
        self.state = GameState()
        self._last_time: Optional[float] = None

        self.on_score_change: Optional[Callable[[int], None]] = None
        self.on_lives_change: Optional[Callable[[int], None]] = None
        self.on_wave_change: Optional[Callable[[int], None]] = None
        self.on_game_over: Optional[Callable[[int], None]] = None

    def set_callbacks(self, on_score_change=None, on_lives_change=None, on_wave_change=None, on_game_over=None) -> None:
        self.on_score_change = on_score_change
        self.on_lives_change = on_lives_change
        self.on_wave_change = on_wave_change
        self.on_game_over = on_game_over

    # ----------------------------
    # Loop control
    # ----------------------------

    def start_game(self) -> None:
        self.state.phase = GamePhase.PLAYING
        self._emit(self.on_lives_change, self.state.player.lives)
        self._emit(self.on_wave_change, 1)

    def restart(self) -> None:
        """Throw away the finished session and begin a new one."""
        self.state = GameState(phase=GamePhase.PLAYING)
        self._emit(self.on_score_change, 0)
        self._emit(self.on_lives_change, self.state.player.lives)
        self._emit(self.on_wave_change, 1)

    def frame(self, now: float) -> float:
        """Run one frame at wall-clock time ``now`` (seconds). Returns the dt used."""
        dt = 0.0 if self._last_time is None else min(now - self._last_time, MAX_FRAME_DT)
        self._last_time = now
        self.update(dt)
        self.input.end_frame()
        return dt

    def update(self, dt: float) -> None:
        phase = self.state.phase
        if phase == GamePhase.TITLE:
            if self.input.any_just_down(START_KEYS):
                self.start_game()
            return
        if phase == GamePhase.GAMEOVER:
            if self.input.any_just_down(START_KEYS):
                self.restart()
            return
        self._step(min(dt, MAX_FRAME_DT))

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _step(self, dt: float) -> None:
        state = self.state
        state.time += dt

        fire_dir = update_player(state.player, self.input.direction(), dt)
        if fire_dir is not None:
            state.bullets.extend(create_player_bullets(state.player, fire_dir))
        update_active_power_ups(state.player, dt)

        update_bullets(state.bullets, dt)

        prev_wave = state.wave.current
        if update_wave(state.wave, len(state.enemies), dt):
            enemy_type = get_enemy_type_for_wave(state.wave.current, self.rng)
            state.enemies.append(create_enemy(enemy_type, self.rng))
        if state.wave.current != prev_wave:
            self._emit(self.on_wave_change, state.wave.current)

        update_enemies(state.enemies, state.player.pos, dt)

        # Contact first: a shot fired this frame must not save the player from an enemy already on it
        self._handle_enemy_contact()
        if state.phase == GamePhase.PLAYING:
            self._handle_bullet_hits()
            self._handle_pickups()

        state.bullets = prune_dead_bullets(state.bullets)
        state.enemies = prune_dead_enemies(state.enemies)
        state.power_ups = prune_dead_power_ups(state.power_ups)

    def _handle_enemy_contact(self) -> None:
        state = self.state
        for e in state.enemies:
            if not e.alive or not check_collision(e, state.player):
                continue
            if not hit_player(state.player):
                continue
            # The enemy is spent on contact but awards nothing
            e.alive = False
            self._emit(self.on_lives_change, state.player.lives)
            if not state.player.alive:
                state.phase = GamePhase.GAMEOVER
                logger.info(f"[game-over] score={state.score} wave={state.wave.current} time={state.time:.1f}s")
                self._emit(self.on_game_over, state.score)
                return

    def _handle_bullet_hits(self) -> None:
        state = self.state
        for b in state.bullets:
            if not b.alive or not b.from_player:
                continue
            for e in state.enemies:
                if not e.alive:
                    continue
                if b.pierce and e in b.hits:
                    continue
                if not check_collision(b, e):
                    continue
                if b.pierce:
                    b.hits.append(e)
                else:
                    b.alive = False
                if damage_enemy(e, b.damage):
                    self._award_kill(e)
                    drop = try_spawn_power_up(e.pos, state.wave.current, self.rng)
                    if drop is not None:
                        state.power_ups.append(drop)
                if not b.pierce:
                    break

    def _handle_pickups(self) -> None:
        state = self.state
        for pu in collect_power_ups(state.player, state.power_ups):
            if pu.kind == PowerUpKind.NUKE:
                self._nuke()
            else:
                apply_power_up(state.player, pu)

    def _nuke(self) -> None:
        killed = 0
        for e in self.state.enemies:
            if e.alive:
                e.alive = False
                self._award_kill(e)
                killed += 1
        logger.info(f"[nuke] cleared={killed} score={self.state.score}")

    def _award_kill(self, enemy: Enemy) -> None:
        self.state.score += enemy.score
        self._emit(self.on_score_change, self.state.score)

    @staticmethod
    def _emit(callback, value) -> None:
        if callback is not None:
            callback(value)
