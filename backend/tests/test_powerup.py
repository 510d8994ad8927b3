import math

import pytest

from pew.game.entities import ActivePowerUp, PowerUpKind, Vector2
from pew.game.player import create_player
from pew.game.powerup import (
    POWERUP_DURATIONS,
    apply_power_up,
    can_drop_power_up,
    collect_power_ups,
    create_player_bullets,
    create_power_up,
    has_active_power_up,
    prune_dead_power_ups,
    roll_power_up_kind,
    try_spawn_power_up,
    update_active_power_ups,
)


class ScriptedRolls:
    """Returns the given values from ``random()`` in order."""

    def __init__(self, *values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


def test_can_drop_from_wave_three():
    assert not can_drop_power_up(1)
    assert not can_drop_power_up(2)
    assert can_drop_power_up(3)


def test_no_drop_before_wave_three():
    assert try_spawn_power_up(Vector2(10, 10), 2, ScriptedRolls(0.0, 0.0)) is None


def test_drop_chance_miss():
    assert try_spawn_power_up(Vector2(10, 10), 4, ScriptedRolls(0.26, 0.0)) is None


def test_drop_at_kill_position():
    pos = Vector2(42, 17)
    pu = try_spawn_power_up(pos, 4, ScriptedRolls(0.1, 0.5))
    assert pu is not None
    assert pu.kind == PowerUpKind.RAPIDFIRE
    assert (pu.pos.x, pu.pos.y) == (42, 17)
    assert pu.pos is not pos
    assert pu.duration == 5.0


@pytest.mark.parametrize('wave,roll,expected', [
    (4, 0.05, PowerUpKind.SPREAD),
    (5, 0.05, PowerUpKind.NUKE),
    (5, 0.1, PowerUpKind.SPREAD),
    (5, 0.39, PowerUpKind.SPREAD),
    (5, 0.4, PowerUpKind.RAPIDFIRE),
    (3, 0.69, PowerUpKind.RAPIDFIRE),
    (3, 0.7, PowerUpKind.PIERCE),
    (8, 0.99, PowerUpKind.PIERCE),
])
def test_kind_thresholds(wave, roll, expected):
    assert roll_power_up_kind(wave, ScriptedRolls(roll)) == expected


def test_durations():
    assert POWERUP_DURATIONS == {
        PowerUpKind.SPREAD: 6.0,
        PowerUpKind.RAPIDFIRE: 5.0,
        PowerUpKind.PIERCE: 6.0,
        PowerUpKind.NUKE: 0.0,
    }


def test_collect_only_overlapping_live_power_ups():
    player = create_player()
    near = create_power_up(PowerUpKind.SPREAD, player.pos)
    far = create_power_up(PowerUpKind.PIERCE, Vector2(0, 0))
    dead = create_power_up(PowerUpKind.RAPIDFIRE, player.pos)
    dead.alive = False
    also_near = create_power_up(PowerUpKind.NUKE, Vector2(player.pos.x + 5, player.pos.y + 5))

    collected = collect_power_ups(player, [near, far, dead, also_near])
    assert collected == [near, also_near]
    assert not near.alive and not also_near.alive
    assert far.alive
    assert prune_dead_power_ups([near, far, dead, also_near]) == [far]


def test_apply_refreshes_instead_of_stacking():
    player = create_player()
    apply_power_up(player, create_power_up(PowerUpKind.SPREAD, player.pos))
    update_active_power_ups(player, 4.0)
    apply_power_up(player, create_power_up(PowerUpKind.SPREAD, player.pos))
    assert len(player.active_power_ups) == 1
    assert player.active_power_ups[0].remaining == 6.0


def test_apply_nuke_is_noop():
    player = create_player()
    apply_power_up(player, create_power_up(PowerUpKind.NUKE, player.pos))
    assert player.active_power_ups == []


def test_active_power_ups_expire():
    player = create_player()
    player.active_power_ups = [
        ActivePowerUp(PowerUpKind.RAPIDFIRE, 1.0),
        ActivePowerUp(PowerUpKind.PIERCE, 3.0),
    ]
    update_active_power_ups(player, 1.0)
    assert [ap.kind for ap in player.active_power_ups] == [PowerUpKind.PIERCE]
    assert player.active_power_ups[0].remaining == pytest.approx(2.0)
    assert has_active_power_up(player, PowerUpKind.PIERCE)
    assert not has_active_power_up(player, PowerUpKind.RAPIDFIRE)


def test_single_bullet_without_effects():
    player = create_player()
    bullets = create_player_bullets(player, Vector2(1, 0))
    assert len(bullets) == 1
    assert not bullets[0].pierce


def test_spread_fires_three_bullets():
    player = create_player()
    player.active_power_ups.append(ActivePowerUp(PowerUpKind.SPREAD, 6.0))
    bullets = create_player_bullets(player, Vector2(1, 0))
    assert len(bullets) == 3
    angles = sorted(math.degrees(math.atan2(b.velocity.y, b.velocity.x)) for b in bullets)
    assert angles == pytest.approx([-22.5, 0.0, 22.5])
    assert not any(b.pierce for b in bullets)


def test_pierce_applies_to_every_spread_bullet():
    player = create_player()
    player.active_power_ups.append(ActivePowerUp(PowerUpKind.SPREAD, 6.0))
    player.active_power_ups.append(ActivePowerUp(PowerUpKind.PIERCE, 6.0))
    bullets = create_player_bullets(player, Vector2(0, 1))
    assert len(bullets) == 3
    assert all(b.pierce for b in bullets)
