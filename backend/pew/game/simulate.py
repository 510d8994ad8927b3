"""Headless scripted play, used by the ``flask simulate`` command."""

import random
from typing import Optional

from .engine import GameEngine, GameState
from .entities import GamePhase
from .input import InputState

FRAME_DT = 1 / 60
# Strafe pattern: hold each key this many frames, clockwise
STRAFE_KEYS = ('d', 's', 'a', 'w')
STRAFE_HOLD_FRAMES = 90


def run_scripted_game(frames: int = 3600, rng: Optional[random.Random] = None) -> GameState:
    """Play up to ``frames`` frames and return the final state.

    Stops early on game over.
    """
    engine = GameEngine(rng=rng, input_state=InputState())
    engine.start_game()

    held = None
    for i in range(frames):
        key = STRAFE_KEYS[(i // STRAFE_HOLD_FRAMES) % len(STRAFE_KEYS)]
        if key != held:
            if held is not None:
                engine.input.release(held)
            engine.input.press(key)
            held = key
        engine.update(FRAME_DT)
        engine.input.end_frame()
        if engine.state.phase == GamePhase.GAMEOVER:
            break
    return engine.state
