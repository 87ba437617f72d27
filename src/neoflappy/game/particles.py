"""Particle bursts for gameplay feedback and per-variant ambient trails."""

from typing import Optional, List, Tuple
from dataclasses import dataclass
import colorsys
import random

from neoflappy.game.entities import CharacterVariant, Particle, PlayerCharacter, Playfield


@dataclass
class BurstConfig:
    """Configuration for a one-shot particle burst."""

    count: int = 10
    life: int = 30

    # Spawn area offset from the anchor point (0 = point)
    dx_min: float = 0.0
    dx_max: float = 0.0
    dy_min: float = 0.0
    dy_max: float = 0.0

    # Velocity ranges, pixels per tick
    vx_min: float = -2.0
    vx_max: float = 2.0
    vy_min: float = -2.0
    vy_max: float = 2.0

    size_min: float = 2.0
    size_max: float = 4.0
    color: Optional[Tuple[int, int, int]] = (255, 255, 255)  # None = random hue

    # Per-call emission probability, for ambient trails
    chance: float = 1.0


def random_hue(rng: random.Random) -> Tuple[int, int, int]:
    r, g, b = colorsys.hls_to_rgb(rng.random(), 0.5, 1.0)
    return (int(r * 255), int(g * 255), int(b * 255))


def emit(
    particles: List[Particle],
    config: BurstConfig,
    x: float,
    y: float,
    rng: random.Random,
) -> int:
    """Append a burst anchored at (x, y). Returns the number emitted."""
    if config.chance < 1.0 and rng.random() >= config.chance:
        return 0

    for _ in range(config.count):
        particles.append(Particle(
            x=x + rng.uniform(config.dx_min, config.dx_max),
            y=y + rng.uniform(config.dy_min, config.dy_max),
            vx=rng.uniform(config.vx_min, config.vx_max),
            vy=rng.uniform(config.vy_min, config.vy_max),
            size=rng.uniform(config.size_min, config.size_max),
            color=config.color if config.color is not None else random_hue(rng),
            life=config.life,
            max_life=config.life,
        ))
    return config.count


class ParticlePresets:
    """Factory for the game's particle effects."""

    @staticmethod
    def jump() -> BurstConfig:
        """White puff dropping from under the player."""
        return BurstConfig(
            count=5, life=30,
            vx_min=-2, vx_max=2, vy_min=1, vy_max=3,
            size_min=2, size_max=6,
            color=(255, 255, 255),
        )

    @staticmethod
    def score() -> BurstConfig:
        return BurstConfig(
            count=10, life=60,
            vx_min=-3, vx_max=3, vy_min=-3, vy_max=3,
            size_min=1, size_max=4,
            color=(0, 255, 0),
        )

    @staticmethod
    def pickup() -> BurstConfig:
        return BurstConfig(
            count=15, life=40,
            vx_min=-4, vx_max=4, vy_min=-4, vy_max=4,
            size_min=2, size_max=6,
            color=(255, 0, 255),
        )

    @staticmethod
    def game_over() -> BurstConfig:
        return BurstConfig(
            count=20, life=60,
            vx_min=-5, vx_max=5, vy_min=-5, vy_max=5,
            size_min=2, size_max=6,
            color=(255, 0, 0),
        )

    @staticmethod
    def celebration(playfield: Playfield) -> BurstConfig:
        """Rainbow confetti scattered over the whole playfield."""
        return BurstConfig(
            count=50, life=120,
            dx_max=playfield.width, dy_max=playfield.height,
            vx_min=-3, vx_max=3, vy_min=-3, vy_max=3,
            size_min=2, size_max=8,
            color=None,
        )

    @staticmethod
    def fire_trail(player: PlayerCharacter) -> BurstConfig:
        return BurstConfig(
            count=1, life=20, chance=0.3,
            dy_max=player.height,
            vx_min=-4, vx_max=-1, vy_min=-1, vy_max=1,
            size_min=1, size_max=4,
            color=(255, 69, 0),
        )

    @staticmethod
    def ice_trail(player: PlayerCharacter) -> BurstConfig:
        return BurstConfig(
            count=1, life=30, chance=0.2,
            dx_max=player.width, dy_max=player.height,
            vx_min=-1, vx_max=1, vy_min=-3, vy_max=-1,
            size_min=1, size_max=3,
            color=(255, 255, 255),
        )

    @staticmethod
    def electric_trail(player: PlayerCharacter) -> BurstConfig:
        return BurstConfig(
            count=1, life=10, chance=0.4,
            dx_max=player.width, dy_max=player.height,
            vx_min=-2, vx_max=2, vy_min=-2, vy_max=2,
            size_min=1, size_max=1,
            color=(255, 255, 0),
        )


def emit_ambient(
    particles: List[Particle],
    variant: CharacterVariant,
    player: PlayerCharacter,
    rng: random.Random,
) -> int:
    """Per-tick cosmetic trail for the selected character variant."""
    if variant == CharacterVariant.FIRE:
        return emit(particles, ParticlePresets.fire_trail(player), player.x - 10, player.y, rng)
    if variant == CharacterVariant.ICE:
        return emit(particles, ParticlePresets.ice_trail(player), player.x, player.y, rng)
    if variant == CharacterVariant.ELECTRIC:
        return emit(particles, ParticlePresets.electric_trail(player), player.x, player.y, rng)
    return 0
