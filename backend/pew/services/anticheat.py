"""Score submission anti-cheat.

A client asks for a signed session token when a game starts and sends it
back with its final score. The validator checks the HMAC signature, refuses
sessions that already produced a score, and rejects results that the game
rules make implausible (too short, too many points for the wave reached, or
points earned faster than the game allows).

This is a deterrent, not a proof: a fully instrumented client can still lie
within the bounds.
"""

import hashlib
import hmac
import logging
import re
import secrets
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from pew.game.enemy import MAX_ENEMY_SCORE
from pew.game.wave import BASE_ENEMIES, ENEMIES_PER_WAVE

logger = logging.getLogger(__name__)

MAX_USED_SESSIONS = 10_000
MIN_GAME_DURATION_SEC = 2.0
MAX_SCORE_RATE = 200  # points per second
NUKE_BUFFER_NUM, NUKE_BUFFER_DEN = 3, 2  # x1.5
NAME_MIN_LEN = 3
NAME_MAX_LEN = 8

_NAME_RE = re.compile(r'[A-Za-z0-9]+')
# Largest value the scores table can hold in an INTEGER column
MAX_STORED_INT = 2**31 - 1

ERR_INVALID_TOKEN = 'invalid token'
ERR_SESSION_USED = 'session already used'
ERR_NAME_LENGTH = 'name must be 3-8 characters'
ERR_NAME_CHARSET = 'name must be alphanumeric'
ERR_RANGE = 'invalid score or wave'
ERR_TOO_SHORT = 'game too short'
ERR_SCORE_FOR_WAVE = 'score too high for wave'
ERR_SCORE_RATE = 'score rate too high'


class MalformedSubmission(ValueError):
    """Raised when a submission body does not have the expected shape."""


@dataclass(frozen=True)
class SessionToken:
    session_id: str
    start_time: int  # epoch milliseconds
    token: str

    def to_dict(self) -> Dict[str, Any]:
        return {'sessionId': self.session_id, 'startTime': self.start_time, 'token': self.token}


@dataclass(frozen=True)
class ScoreSubmission:
    name: str
    score: int
    wave: int
    session_id: str
    start_time: int
    token: str

    @classmethod
    def from_dict(cls, data: Any) -> 'ScoreSubmission':
        """Build a submission from a decoded JSON body (camelCase keys)."""
        if not isinstance(data, dict):
            raise MalformedSubmission('body must be an object')
        fields = {
            'name': ('name', str),
            'score': ('score', int),
            'wave': ('wave', int),
            'session_id': ('sessionId', str),
            'start_time': ('startTime', int),
            'token': ('token', str),
        }
        values = {}
        for attr, (key, kind) in fields.items():
            value = data.get(key)
            # bool is an int subclass; never accept it as a number
            if value is None or isinstance(value, bool) or not isinstance(value, kind):
                raise MalformedSubmission(f'{key} must be of type {kind.__name__}')
            if attr in ('score', 'wave') and value > MAX_STORED_INT:
                raise MalformedSubmission(f'{key} is out of range')
            values[attr] = value
        return cls(**values)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: Optional[str] = None
    duration: Optional[float] = None  # seconds


def sign(secret: str, session_id: str, start_time: int) -> str:
    """HMAC-SHA256 of ``"{session_id}:{start_time}"`` as lowercase hex."""
    message = f'{session_id}:{start_time}'.encode('utf-8')
    return hmac.new(secret.encode('utf-8'), message, hashlib.sha256).hexdigest()


def max_plausible_score(wave: int) -> int:
    """Upper bound on the score reachable by the end of ``wave``.

    Every enemy of every wave so far is counted at the best per-kill score,
    then padded for enemies cleared by a nuke.
    """
    # Closed form of sum((BASE_ENEMIES + ENEMIES_PER_WAVE * w) * MAX_ENEMY_SCORE for w in 1..wave)
    enemies = BASE_ENEMIES * wave + ENEMIES_PER_WAVE * wave * (wave + 1) // 2
    return enemies * MAX_ENEMY_SCORE * NUKE_BUFFER_NUM // NUKE_BUFFER_DEN


class UsedSessions:
    """Bounded set of consumed session ids; evicts the oldest insert when full."""

    def __init__(self, capacity: int = MAX_USED_SESSIONS):
        self.capacity = capacity
        self._ids: 'OrderedDict[str, None]' = OrderedDict()

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def add(self, session_id: str) -> None:
        self._ids[session_id] = None
        while len(self._ids) > self.capacity:
            self._ids.popitem(last=False)


class SubmissionValidator:
    """Issues session tokens and validates score submissions against them.

    ``clock`` returns wall-clock seconds (``time.time`` by default).
    """

    def __init__(
        self,
        secret: str,
        used_sessions: Optional[UsedSessions] = None,
        clock: Callable[[], float] = time.time,
        min_duration: float = MIN_GAME_DURATION_SEC,
        max_score_rate: float = MAX_SCORE_RATE,
    ):
        self._secret = secret
        self.used_sessions = used_sessions if used_sessions is not None else UsedSessions()
        self.clock = clock
        self.min_duration = min_duration
        self.max_score_rate = max_score_rate
        # Replay check and insert must not interleave across request threads
        self._lock = threading.Lock()

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def create_session_token(self) -> SessionToken:
        session_id = secrets.token_hex(16)
        start_time = self._now_ms()
        return SessionToken(session_id, start_time, sign(self._secret, session_id, start_time))

    def validate(self, sub: ScoreSubmission) -> ValidationResult:
        with self._lock:
            result = self._check(sub)
            if result.valid:
                self.used_sessions.add(sub.session_id)
        if result.valid:
            logger.info(f"[anticheat-accept] session={sub.session_id[:8]} score={sub.score} wave={sub.wave} duration={result.duration:.1f}s")
        else:
            logger.info(f"[anticheat-reject] session={sub.session_id[:8]} reason={result.error}")
        return result

    def _check(self, sub: ScoreSubmission) -> ValidationResult:
        expected = sign(self._secret, sub.session_id, sub.start_time)
        if not hmac.compare_digest(sub.token.encode('utf-8'), expected.encode('ascii')):
            return ValidationResult(False, ERR_INVALID_TOKEN)

        if sub.session_id in self.used_sessions:
            return ValidationResult(False, ERR_SESSION_USED)

        name = sub.name.strip()
        if not NAME_MIN_LEN <= len(name) <= NAME_MAX_LEN:
            return ValidationResult(False, ERR_NAME_LENGTH)
        if not _NAME_RE.fullmatch(name):
            return ValidationResult(False, ERR_NAME_CHARSET)

        if sub.score < 0 or sub.wave < 1:
            return ValidationResult(False, ERR_RANGE)

        duration = (self._now_ms() - sub.start_time) / 1000
        if duration < self.min_duration:
            return ValidationResult(False, ERR_TOO_SHORT)

        if sub.score > max_plausible_score(sub.wave):
            return ValidationResult(False, ERR_SCORE_FOR_WAVE)

        if sub.score > duration * self.max_score_rate:
            return ValidationResult(False, ERR_SCORE_RATE)

        return ValidationResult(True, duration=duration)
