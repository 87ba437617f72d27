"""Entity model: player, obstacle pairs, power-ups, particles and the world."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

Color = Tuple[int, int, int]


class PowerUpType(Enum):
    """Collectible power-up kinds."""
    SPEED = "speed"
    SHIELD = "shield"
    POINTS = "points"


class CharacterVariant(Enum):
    """Cosmetic player variants. Never affects physics or collision."""
    CLASSIC = "classic"
    FIRE = "fire"
    ICE = "ice"
    ELECTRIC = "electric"


def parse_color(value: str) -> Color:
    """Convert '#RRGGBB' to an RGB tuple."""
    value = value.lstrip("#")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


@dataclass
class Playfield:
    """Visible simulation bounds."""

    width: float = 800.0
    height: float = 600.0


@dataclass
class PlayerCharacter:
    """The controllable character. x is fixed after spawn."""

    x: float
    y: float
    width: float = 40.0
    height: float = 40.0
    velocity: float = 0.0
    rotation: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


@dataclass
class Obstacle:
    """A pipe pair sharing one x and a vertical gap."""

    x: float
    gap_top: float
    gap_bottom: float
    width: float = 80.0
    passed: bool = False
    color: str = "#228B22"

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def gap_size(self) -> float:
        return self.gap_bottom - self.gap_top


@dataclass
class PowerUp:
    """A collectible that scrolls with the course."""

    x: float
    y: float
    kind: PowerUpType
    size: float = 30.0
    collected: bool = False
    rotation: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.size


@dataclass
class Particle:
    """A cosmetic particle counting down its life in ticks."""

    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    size: float = 2.0
    color: Color = (255, 255, 255)
    life: int = 30
    max_life: int = 30
    alpha: float = 1.0

    @property
    def is_dead(self) -> bool:
        return self.life <= 0


@dataclass
class ActiveEffect:
    """The single held power-up effect and its remaining ticks."""

    kind: PowerUpType
    remaining: int


@dataclass
class GameSession:
    """Score bookkeeping for the current run."""

    score: int = 0
    best_score: int = 0


@dataclass
class World:
    """All mutable simulation state, owned by the controller's tick."""

    playfield: Playfield
    player: PlayerCharacter
    obstacles: List[Obstacle] = field(default_factory=list)
    power_ups: List[PowerUp] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    effect: Optional[ActiveEffect] = None
    session: GameSession = field(default_factory=GameSession)
    variant: CharacterVariant = CharacterVariant.CLASSIC
    background_offset: float = 0.0

    def has_effect(self, kind: PowerUpType) -> bool:
        return self.effect is not None and self.effect.kind == kind
