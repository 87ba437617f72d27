"""Overlap tests, scoring and pickup resolution."""

import logging
from dataclasses import dataclass, field
from typing import List

from neoflappy.game.entities import (
    Obstacle,
    PlayerCharacter,
    PowerUp,
    PowerUpType,
    World,
)
from neoflappy.settings import TuningSettings

logger = logging.getLogger(__name__)


@dataclass
class CollisionReport:
    """What happened during one collision/scoring pass."""

    passed: List[Obstacle] = field(default_factory=list)
    collected: List[PowerUp] = field(default_factory=list)
    obstacle_hit: bool = False
    shielded: bool = False
    out_of_bounds: bool = False
    bonus: int = 0

    @property
    def fatal(self) -> bool:
        return self.out_of_bounds or (self.obstacle_hit and not self.shielded)


def overlaps_x(player: PlayerCharacter, left: float, right: float) -> bool:
    return player.x < right and player.right > left


def hits_obstacle(player: PlayerCharacter, obstacle: Obstacle) -> bool:
    """Player overlaps the top or bottom barrier of a pipe pair."""
    if not overlaps_x(player, obstacle.x, obstacle.right):
        return False
    return player.y < obstacle.gap_top or player.bottom > obstacle.gap_bottom


def touches_power_up(player: PlayerCharacter, power_up: PowerUp) -> bool:
    return (
        overlaps_x(player, power_up.x, power_up.right)
        and player.y < power_up.y + power_up.size
        and player.bottom > power_up.y
    )


def score_passes(world: World) -> List[Obstacle]:
    """Mark obstacles whose right edge went behind the player. One point each."""
    passed = []
    for obstacle in world.obstacles:
        if not obstacle.passed and obstacle.right < world.player.x:
            obstacle.passed = True
            world.session.score += 1
            passed.append(obstacle)
    return passed


def resolve(world: World, tuning: TuningSettings, out_of_bounds: bool = False) -> CollisionReport:
    """
    Run scoring, obstacle collision and pickups for the current tick.

    A boundary exit is always fatal. An obstacle hit is fatal unless the
    shield is held; the shield is not consumed by the hit. A fatal tick
    skips pickups.
    """
    report = CollisionReport(out_of_bounds=out_of_bounds)
    report.passed = score_passes(world)

    if out_of_bounds:
        return report

    shield = world.has_effect(PowerUpType.SHIELD)
    for obstacle in world.obstacles:
        if hits_obstacle(world.player, obstacle):
            report.obstacle_hit = True
            report.shielded = shield
            if not shield:
                logger.debug(f"Obstacle hit at x={obstacle.x:.0f}")
                return report
            break

    remaining = []
    for power_up in world.power_ups:
        if touches_power_up(world.player, power_up):
            power_up.collected = True
            report.collected.append(power_up)
            if power_up.kind == PowerUpType.POINTS:
                world.session.score += tuning.points_bonus
                report.bonus += tuning.points_bonus
        else:
            remaining.append(power_up)
    world.power_ups = remaining

    return report
