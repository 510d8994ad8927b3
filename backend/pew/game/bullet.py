from typing import List

from .entities import GAME_HEIGHT, GAME_WIDTH, TILE_SIZE, Bullet, Vector2

BULLET_SPEED = 200.0  # px/s
BULLET_SIZE = 3


def create_bullet(origin: Vector2, direction: Vector2, from_player: bool = True, pierce: bool = False) -> Bullet:
    """Spawn a bullet centered on the tile whose top-left corner is ``origin``."""
    half_tile = TILE_SIZE / 2
    return Bullet(
        pos=Vector2(origin.x + half_tile - BULLET_SIZE / 2, origin.y + half_tile - BULLET_SIZE / 2),
        size=BULLET_SIZE,
        velocity=Vector2(direction.x * BULLET_SPEED, direction.y * BULLET_SPEED),
        damage=1,
        from_player=from_player,
        pierce=pierce,
    )


def update_bullets(bullets: List[Bullet], dt: float) -> None:
    for b in bullets:
        if not b.alive:
            continue

        b.pos.x += b.velocity.x * dt
        b.pos.y += b.velocity.y * dt

        # Out of bounds -> kill
        if (b.pos.x < -b.size or b.pos.x > GAME_WIDTH + b.size
                or b.pos.y < -b.size or b.pos.y > GAME_HEIGHT + b.size):
            b.alive = False


def prune_dead_bullets(bullets: List[Bullet]) -> List[Bullet]:
    return [b for b in bullets if b.alive]
