"""Per-tick integration for every moving entity."""

import logging

from neoflappy.game.entities import PlayerCharacter, PowerUpType, World
from neoflappy.settings import TuningSettings

logger = logging.getLogger(__name__)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def is_out_of_bounds(player: PlayerCharacter, playfield_height: float) -> bool:
    """Top exit at y < 0, bottom exit when the player's bottom edge passes the floor."""
    return player.y < 0 or player.y + player.height > playfield_height


def step_player(player: PlayerCharacter, tuning: TuningSettings) -> None:
    player.velocity += tuning.gravity
    player.y += player.velocity
    player.rotation = clamp(
        player.velocity * tuning.rotation_factor,
        -tuning.max_rotation,
        tuning.max_rotation,
    )


def obstacle_speed(world: World, tuning: TuningSettings) -> float:
    """Scroll speed for obstacles, halved while the speed effect is held."""
    if world.has_effect(PowerUpType.SPEED):
        return tuning.base_speed * tuning.speed_effect_factor
    return tuning.base_speed


def step_particles(world: World, tuning: TuningSettings) -> None:
    alive = []
    for particle in world.particles:
        particle.x += particle.vx
        particle.y += particle.vy
        particle.vy += tuning.particle_gravity
        particle.life -= 1
        particle.alpha = max(0.0, particle.life / particle.max_life)
        if not particle.is_dead:
            alive.append(particle)
    world.particles = alive


def step(world: World, tuning: TuningSettings) -> bool:
    """
    Advance the world by one tick of movement.

    Power-ups scroll at the base speed; only obstacles feel the speed effect.
    Power-ups that scroll fully off the left edge are dropped here.

    Returns:
        True if the player has left the playfield
    """
    step_player(world.player, tuning)

    speed = obstacle_speed(world, tuning)
    for obstacle in world.obstacles:
        obstacle.x -= speed

    remaining = []
    for power_up in world.power_ups:
        power_up.x -= tuning.base_speed
        power_up.rotation += tuning.powerup_spin
        if power_up.right >= 0:
            remaining.append(power_up)
    world.power_ups = remaining

    step_particles(world, tuning)

    world.background_offset += tuning.background_speed
    if world.background_offset >= world.playfield.width:
        world.background_offset = 0.0

    out = is_out_of_bounds(world.player, world.playfield.height)
    if out:
        logger.debug(f"Player left playfield at y={world.player.y:.1f}")
    return out
