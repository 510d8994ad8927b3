from typing import Optional

from .entities import GAME_HEIGHT, GAME_WIDTH, TILE_SIZE, Player, PowerUpKind, Vector2
from .utils import clamp, decay

PLAYER_SPEED = 80.0  # px/s
BASE_FIRE_RATE = 4.0  # shots/s
MOVING_FIRE_BONUS = 1.1
RAPIDFIRE_MULTIPLIER = 2.0
INVINCIBLE_DURATION = 1.5  # seconds after being hit
STARTING_LIVES = 3


def create_player() -> Player:
    """Fresh player in the middle of the board, facing down."""
    return Player(
        pos=Vector2((GAME_WIDTH - TILE_SIZE) / 2, (GAME_HEIGHT - TILE_SIZE) / 2),
        size=TILE_SIZE,
        lives=STARTING_LIVES,
        speed=PLAYER_SPEED,
        fire_rate=BASE_FIRE_RATE,
        fire_cooldown=0.0,
        direction=Vector2(0.0, 1.0),
    )


def get_effective_fire_rate(player: Player, is_moving: bool) -> float:
    rate = player.fire_rate
    if is_moving:
        rate *= MOVING_FIRE_BONUS
    if any(ap.kind == PowerUpKind.RAPIDFIRE for ap in player.active_power_ups):
        rate *= RAPIDFIRE_MULTIPLIER
    return rate


def update_player(player: Player, direction: Vector2, dt: float) -> Optional[Vector2]:
    """Move the player and run the auto-fire cooldown.

    ``direction`` is the already-normalized input vector (zero when idle).
    Returns the shot direction when the player fires this tick, else None.
    The player fires even when standing still, along its last facing.
    """
    if not player.alive:
        return None

    is_moving = not direction.is_zero()
    if is_moving:
        player.direction = direction.copy()
        player.pos.x += direction.x * player.speed * dt
        player.pos.y += direction.y * player.speed * dt
        player.pos.x = clamp(player.pos.x, 0, GAME_WIDTH - player.size)
        player.pos.y = clamp(player.pos.y, 0, GAME_HEIGHT - player.size)

    player.fire_cooldown = decay(player.fire_cooldown, dt)
    player.invincible_timer = decay(player.invincible_timer, dt)

    if player.fire_cooldown <= 0:
        player.fire_cooldown = 1 / get_effective_fire_rate(player, is_moving)
        return player.direction.copy()
    return None


def hit_player(player: Player) -> bool:
    """Consume a life unless invincible. Returns True when a life was lost."""
    if player.invincible_timer > 0:
        return False
    player.lives -= 1
    if player.lives <= 0:
        player.alive = False
    else:
        player.invincible_timer = INVINCIBLE_DURATION
    return True
