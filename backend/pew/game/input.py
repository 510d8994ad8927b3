"""
Keyboard state tracked per frame.

Key names are lowercased ``KeyboardEvent.key`` values as sent by the client
("w", "arrowup", " ", "enter", ...). Capturing the events is the client's job.
"""

from typing import Iterable, Set

from .entities import Vector2
from .utils import normalize

UP_KEYS = ('w', 'arrowup')
DOWN_KEYS = ('s', 'arrowdown')
LEFT_KEYS = ('a', 'arrowleft')
RIGHT_KEYS = ('d', 'arrowright')
START_KEYS = (' ', 'enter')


class InputState:
    def __init__(self):
        self._pressed: Set[str] = set()
        self._just_pressed: Set[str] = set()

    def press(self, key: str) -> None:
        key = key.lower()
        if key not in self._pressed:
            self._just_pressed.add(key)
        self._pressed.add(key)

    def release(self, key: str) -> None:
        self._pressed.discard(key.lower())

    def end_frame(self) -> None:
        """Forget just-pressed keys; call once after each frame."""
        self._just_pressed.clear()

    def is_down(self, key: str) -> bool:
        return key.lower() in self._pressed

    def is_just_down(self, key: str) -> bool:
        return key.lower() in self._just_pressed

    def any_just_down(self, keys: Iterable[str]) -> bool:
        return any(self.is_just_down(k) for k in keys)

    def direction(self) -> Vector2:
        """Normalized movement vector from WASD / arrow keys."""
        x = 0.0
        y = 0.0
        if any(self.is_down(k) for k in UP_KEYS):
            y -= 1
        if any(self.is_down(k) for k in DOWN_KEYS):
            y += 1
        if any(self.is_down(k) for k in LEFT_KEYS):
            x -= 1
        if any(self.is_down(k) for k in RIGHT_KEYS):
            x += 1
        return Vector2(*normalize(x, y))
