import random

import pytest

from neoflappy.game import generator
from neoflappy.game.entities import Obstacle, PowerUpType


class StubRng:
    """Deterministic stand-in for random.Random."""

    def __init__(self, roll=0.0, pick=0):
        self.roll = roll
        self.pick = pick

    def random(self):
        return self.roll

    def uniform(self, a, b):
        return a

    def choice(self, seq):
        return seq[self.pick % len(seq)]


def test_gap_invariant_holds_for_every_obstacle(tuning):
    rng = random.Random(7)
    for _ in range(200):
        obstacle = generator.make_obstacle(0, 600, tuning, rng)
        assert obstacle.gap_bottom - obstacle.gap_top == pytest.approx(tuning.gap_size)
        assert tuning.min_margin <= obstacle.gap_top <= 600 - tuning.gap_size - tuning.min_margin
        assert obstacle.color in tuning.obstacle_palette


def test_initial_obstacles_are_evenly_spaced(tuning, rng):
    obstacles = generator.initial_obstacles(800, 600, tuning, rng)
    assert [o.x for o in obstacles] == [800, 1100, 1400]
    assert not any(o.passed for o in obstacles)


def test_recycle_places_new_obstacle_after_current_rightmost(world, tuning, rng):
    world.obstacles = [
        Obstacle(x=-81, gap_top=200, gap_bottom=380, passed=True),
        Obstacle(x=219, gap_top=200, gap_bottom=380),
        Obstacle(x=519, gap_top=200, gap_bottom=380),
    ]

    assert generator.recycle(world, tuning, rng) == 1

    assert len(world.obstacles) == 3
    assert [o.x for o in world.obstacles] == [219, 519, 819]
    assert not world.obstacles[-1].passed


def test_obstacle_touching_left_edge_is_kept(world, tuning, rng):
    world.obstacles = [
        Obstacle(x=-80, gap_top=200, gap_bottom=380),
        Obstacle(x=220, gap_top=200, gap_bottom=380),
        Obstacle(x=520, gap_top=200, gap_bottom=380),
    ]
    assert generator.recycle(world, tuning, rng) == 0
    assert world.obstacles[0].x == -80


def test_recycle_uses_current_playfield_height(world, tuning, rng):
    world.playfield.height = 300
    world.obstacles = [
        Obstacle(x=-100, gap_top=200, gap_bottom=380),
        Obstacle(x=200, gap_top=200, gap_bottom=380),
        Obstacle(x=500, gap_top=200, gap_bottom=380),
    ]
    generator.recycle(world, tuning, rng)
    fresh = world.obstacles[-1]
    assert fresh.gap_top == pytest.approx(60)
    assert fresh.gap_bottom == pytest.approx(240)


@pytest.mark.parametrize("height, expected", [
    (600, (100, 320)),
    (380, (100, 100)),
    (300, (60, 60)),
    (100, (0, 0)),
])
def test_gap_range_collapses_for_short_playfields(tuning, height, expected):
    assert generator.gap_range(height, tuning) == pytest.approx(expected)


def test_spawn_trial_success(world, tuning):
    obstacle = Obstacle(x=10, gap_top=200, gap_bottom=380)
    power_up = generator.spawn_trial(world, obstacle, tuning, StubRng(roll=0.29, pick=1))

    assert power_up is not None
    assert power_up.x == pytest.approx(10 + 80 + 50)
    assert power_up.y == pytest.approx(50)
    assert power_up.kind == PowerUpType.SHIELD
    assert world.power_ups == [power_up]


def test_spawn_trial_failure(world, tuning):
    obstacle = Obstacle(x=10, gap_top=200, gap_bottom=380)
    assert generator.spawn_trial(world, obstacle, tuning, StubRng(roll=0.3)) is None
    assert world.power_ups == []


def test_spawn_rate_is_roughly_thirty_percent(world, tuning):
    rng = random.Random(99)
    obstacle = Obstacle(x=10, gap_top=200, gap_bottom=380)
    spawned = sum(
        1 for _ in range(2000)
        if generator.spawn_trial(world, obstacle, tuning, rng) is not None
    )
    assert 500 < spawned < 700
    assert {p.kind for p in world.power_ups} == set(PowerUpType)
    assert all(50 <= p.y <= 550 for p in world.power_ups)
