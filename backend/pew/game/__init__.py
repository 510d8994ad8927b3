"""Arena shooter simulation core (framework-free)"""

from .engine import GameEngine, GameState, MAX_FRAME_DT
from .entities import EnemyType, GamePhase, PowerUpKind, Vector2
from .input import InputState

__all__ = ['GameEngine', 'GameState', 'MAX_FRAME_DT', 'EnemyType', 'GamePhase', 'PowerUpKind', 'Vector2', 'InputState']
