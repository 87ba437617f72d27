"""Active power-up effect: at most one, counted down in ticks."""

import logging
from typing import Optional

from neoflappy.game.entities import ActiveEffect, PowerUpType

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 300


def acquire(kind: PowerUpType, duration: int = DEFAULT_DURATION) -> ActiveEffect:
    """A new pickup always replaces whatever is held and restarts the timer.

    Points also occupies the slot for the full duration even though its
    bonus is paid once at pickup, so it blocks other effects meanwhile.
    """
    logger.info(f"Power-up acquired: {kind.value} ({duration} ticks)")
    return ActiveEffect(kind=kind, remaining=duration)


def tick(effect: Optional[ActiveEffect]) -> Optional[ActiveEffect]:
    """Count down one tick. Returns None once the effect expires."""
    if effect is None:
        return None
    effect.remaining -= 1
    if effect.remaining <= 0:
        logger.info(f"Power-up expired: {effect.kind.value}")
        return None
    return effect


def remaining_percent(
    effect: Optional[ActiveEffect], duration: int = DEFAULT_DURATION
) -> float:
    if effect is None:
        return 0.0
    return effect.remaining / duration * 100
