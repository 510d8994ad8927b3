import math
import random

import pytest

from pew.game.entities import GAME_HEIGHT, GAME_WIDTH, TILE_SIZE, EnemyType, Vector2
from pew.game.enemy import ENEMY_STATS, create_enemy, damage_enemy, prune_dead_enemies, update_enemies


@pytest.mark.parametrize('enemy_type,speed,hp,score', [
    (EnemyType.BASIC, 35, 1, 10),
    (EnemyType.FAST, 65, 1, 15),
    (EnemyType.TANK, 20, 3, 30),
])
def test_create_enemy_uses_stats_table(rng, enemy_type, speed, hp, score):
    e = create_enemy(enemy_type, rng)
    assert e.type == enemy_type
    assert (e.speed, e.hp, e.max_hp, e.score) == (speed, hp, hp, score)
    assert e.alive
    assert ENEMY_STATS[enemy_type].score == score


def test_enemies_spawn_on_board_edges():
    rng = random.Random(99)
    edges = set()
    for _ in range(200):
        p = create_enemy(EnemyType.BASIC, rng).pos
        if p.y == -TILE_SIZE:
            edges.add('top')
            assert 0 <= p.x <= GAME_WIDTH - TILE_SIZE
        elif p.y == GAME_HEIGHT:
            edges.add('bottom')
            assert 0 <= p.x <= GAME_WIDTH - TILE_SIZE
        elif p.x == -TILE_SIZE:
            edges.add('left')
            assert 0 <= p.y <= GAME_HEIGHT - TILE_SIZE
        else:
            assert p.x == GAME_WIDTH
            assert 0 <= p.y <= GAME_HEIGHT - TILE_SIZE
            edges.add('right')
    assert edges == {'top', 'bottom', 'left', 'right'}


def test_enemy_moves_toward_player(rng):
    e = create_enemy(EnemyType.FAST, rng)
    e.pos = Vector2(0.0, 0.0)
    target = Vector2(30.0, 40.0)
    update_enemies([e], target, 0.1)
    step = e.speed * 0.1
    assert e.pos.x == pytest.approx(step * 0.6)
    assert e.pos.y == pytest.approx(step * 0.8)
    assert math.hypot(e.pos.x, e.pos.y) == pytest.approx(step)


def test_enemy_on_top_of_player_stays_put(rng):
    e = create_enemy(EnemyType.BASIC, rng)
    e.pos = Vector2(100.0, 100.0)
    update_enemies([e], Vector2(100.5, 100.5), 0.1)
    assert e.pos == Vector2(100.0, 100.0)


def test_damage_kills_basic(rng):
    e = create_enemy(EnemyType.BASIC, rng)
    assert damage_enemy(e, 1) is True
    assert not e.alive


def test_damage_wounds_tank(rng):
    e = create_enemy(EnemyType.TANK, rng)
    assert damage_enemy(e, 1) is False
    assert e.hp == 2
    assert e.alive


def test_prune_dead_enemies(rng):
    enemies = [create_enemy(EnemyType.BASIC, rng) for _ in range(3)]
    enemies[0].alive = False
    assert prune_dead_enemies(enemies) == enemies[1:]
