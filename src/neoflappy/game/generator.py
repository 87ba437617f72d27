"""Procedural obstacle placement, recycling and power-up spawning."""

import logging
import random
from typing import List, Optional, Tuple

from neoflappy.game.entities import Obstacle, PowerUp, PowerUpType, World
from neoflappy.settings import TuningSettings

logger = logging.getLogger(__name__)

POWERUP_TYPES = [PowerUpType.SPEED, PowerUpType.SHIELD, PowerUpType.POINTS]


def gap_range(playfield_height: float, tuning: TuningSettings) -> Tuple[float, float]:
    """Allowed interval for gap_top. Collapses to a centered point when the
    playfield is too short for the gap plus both margins."""
    low = tuning.min_margin
    high = playfield_height - tuning.gap_size - tuning.min_margin
    if high < low:
        low = high = max(0.0, (playfield_height - tuning.gap_size) / 2)
    return low, high


def powerup_y_range(playfield_height: float, tuning: TuningSettings) -> Tuple[float, float]:
    low = tuning.powerup_margin
    high = playfield_height - tuning.powerup_margin
    if high < low:
        low = high = max(0.0, playfield_height / 2)
    return low, high


def make_obstacle(
    x: float,
    playfield_height: float,
    tuning: TuningSettings,
    rng: random.Random,
) -> Obstacle:
    low, high = gap_range(playfield_height, tuning)
    gap_top = rng.uniform(low, high)
    return Obstacle(
        x=x,
        gap_top=gap_top,
        gap_bottom=gap_top + tuning.gap_size,
        width=tuning.obstacle_width,
        color=rng.choice(tuning.obstacle_palette),
    )


def initial_obstacles(
    playfield_width: float,
    playfield_height: float,
    tuning: TuningSettings,
    rng: random.Random,
) -> List[Obstacle]:
    """The starting course: evenly spaced from the right edge."""
    return [
        make_obstacle(
            playfield_width + i * tuning.obstacle_interval,
            playfield_height,
            tuning,
            rng,
        )
        for i in range(tuning.obstacle_count)
    ]


def recycle(world: World, tuning: TuningSettings, rng: random.Random) -> int:
    """
    Replace obstacles that scrolled past the left edge.

    Each replacement is placed one interval beyond the rightmost obstacle
    still in the list at that moment, which keeps spacing exact.

    Returns:
        Number of obstacles recycled
    """
    recycled = 0
    index = 0
    while index < len(world.obstacles):
        obstacle = world.obstacles[index]
        if obstacle.right >= 0:
            index += 1
            continue

        world.obstacles.pop(index)
        if world.obstacles:
            anchor = max(o.x for o in world.obstacles)
        else:
            anchor = world.playfield.width - tuning.obstacle_interval
        world.obstacles.append(
            make_obstacle(
                anchor + tuning.obstacle_interval,
                world.playfield.height,
                tuning,
                rng,
            )
        )
        recycled += 1

    if recycled:
        logger.debug(f"Recycled {recycled} obstacle(s)")
    return recycled


def spawn_trial(
    world: World,
    obstacle: Obstacle,
    tuning: TuningSettings,
    rng: random.Random,
) -> Optional[PowerUp]:
    """Single Bernoulli draw for a power-up after an obstacle is passed."""
    if rng.random() >= tuning.powerup_chance:
        return None

    low, high = powerup_y_range(world.playfield.height, tuning)
    power_up = PowerUp(
        x=obstacle.x + obstacle.width + tuning.powerup_offset,
        y=rng.uniform(low, high),
        kind=rng.choice(POWERUP_TYPES),
        size=tuning.powerup_size,
    )
    world.power_ups.append(power_up)
    logger.debug(f"Spawned {power_up.kind.value} power-up at x={power_up.x:.0f}")
    return power_up
