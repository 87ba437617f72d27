import pytest

from neoflappy.game import effects
from neoflappy.game.entities import ActiveEffect, PowerUpType


def test_acquire_starts_full_timer():
    effect = effects.acquire(PowerUpType.SHIELD)
    assert effect.kind == PowerUpType.SHIELD
    assert effect.remaining == 300


def test_effect_expires_after_duration():
    effect = effects.acquire(PowerUpType.SPEED, duration=3)
    effect = effects.tick(effect)
    effect = effects.tick(effect)
    assert effect is not None and effect.remaining == 1
    assert effects.tick(effect) is None


def test_tick_without_effect():
    assert effects.tick(None) is None


def test_remaining_percent():
    assert effects.remaining_percent(None) == 0.0
    assert effects.remaining_percent(ActiveEffect(PowerUpType.POINTS, 150)) == pytest.approx(50.0)
    assert effects.remaining_percent(ActiveEffect(PowerUpType.POINTS, 30), 60) == pytest.approx(50.0)
