"""
Small math helpers shared by the simulation
"""

from __future__ import annotations
import math
from typing import Sequence, Tuple, TypeVar

T = TypeVar('T')


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def normalize(x: float, y: float) -> Tuple[float, float]:
    """Normalize a vector to unit length; the zero vector stays zero"""
    length = math.hypot(x, y)
    if length == 0:
        return 0.0, 0.0
    return x / length, y / length


def decay(remaining: float, dt: float) -> float:
    """Tick a countdown timer, never going below zero"""
    return max(0.0, remaining - dt)


def roll_table(roll: float, wave: int, table: Sequence[Tuple[int, float, T]], default: T) -> T:
    """Pick a variant from a cumulative threshold table using one uniform roll.

    Rows are ``(min_wave, threshold, variant)`` and are checked in order; the
    first row whose wave gate is open and whose threshold exceeds the roll wins.
    The same roll is compared against every row.
    """
    for min_wave, threshold, variant in table:
        if wave >= min_wave and roll < threshold:
            return variant
    return default
