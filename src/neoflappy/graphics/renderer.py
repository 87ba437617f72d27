"""Renders the World into an RGB numpy buffer."""

import math
from typing import Dict, Tuple

import numpy as np
from numpy.typing import NDArray

from neoflappy.game.entities import (
    CharacterVariant,
    Obstacle,
    PowerUp,
    PowerUpType,
    World,
    parse_color,
)
from neoflappy.graphics.primitives import (
    Color,
    draw_circle,
    draw_glyph,
    draw_rect,
    draw_ring,
    draw_rotated_rect,
    hsl,
    vertical_gradient,
)

WHITE: Color = (255, 255, 255)
BLACK: Color = (0, 0, 0)

CAP_HEIGHT = 30
CAP_OVERHANG = 5
EDGE_WIDTH = 5

BODY_COLORS: Dict[CharacterVariant, Color] = {
    CharacterVariant.CLASSIC: (255, 255, 0),
    CharacterVariant.FIRE: (255, 69, 0),
    CharacterVariant.ICE: (135, 206, 235),
    CharacterVariant.ELECTRIC: (255, 255, 0),
}

POWERUP_COLORS: Dict[PowerUpType, Color] = {
    PowerUpType.SPEED: (0, 255, 255),
    PowerUpType.SHIELD: (255, 255, 0),
    PowerUpType.POINTS: (255, 0, 255),
}

GLYPHS: Dict[PowerUpType, Tuple[Tuple[str, ...], Color]] = {
    PowerUpType.SPEED: ((
        " ###",
        "#   ",
        " ## ",
        "   #",
        "### ",
    ), WHITE),
    PowerUpType.SHIELD: ((
        "#####",
        "#####",
        "#####",
        " ### ",
        "  #  ",
    ), BLACK),
    PowerUpType.POINTS: ((
        "  #  ",
        "#####",
        " ### ",
        " # # ",
        "#   #",
    ), WHITE),
}


class GameRenderer:
    """Draws background, obstacles, power-ups, player and particles, in that order."""

    def __init__(self) -> None:
        self._gradient_key: Tuple[int, int, int] | None = None
        self._gradient: NDArray[np.uint8] | None = None

    def new_buffer(self, world: World) -> NDArray[np.uint8]:
        width = int(world.playfield.width)
        height = int(world.playfield.height)
        return np.zeros((height, width, 3), dtype=np.uint8)

    def render(self, world: World, buffer: NDArray[np.uint8]) -> None:
        self.draw_background(world, buffer)
        for obstacle in world.obstacles:
            self.draw_obstacle(obstacle, buffer)
        for power_up in world.power_ups:
            self.draw_power_up(power_up, buffer)
        self.draw_player(world, buffer)
        self.draw_particles(world, buffer)

    # Background

    def draw_background(self, world: World, buffer: NDArray[np.uint8]) -> None:
        hue = (world.session.score * 10) % 360
        h, w = buffer.shape[:2]
        key = (hue, h, w)
        if key != self._gradient_key or self._gradient is None:
            gradient = np.empty_like(buffer)
            vertical_gradient(
                gradient,
                hsl(200 + hue * 0.1, 0.7, 0.8),
                hsl(120 + hue * 0.1, 0.6, 0.7),
            )
            self._gradient = gradient
            self._gradient_key = key
        buffer[:, :] = self._gradient
        self.draw_clouds(world, buffer)

    def draw_clouds(self, world: World, buffer: NDArray[np.uint8]) -> None:
        span = world.playfield.width + 100
        for i in range(5):
            # JS-style remainder keeps the sign of the dividend
            x = math.fmod(i * 200 - world.background_offset * 0.5, span)
            y = 50 + math.sin(i) * 30
            draw_circle(buffer, x, y, 30, WHITE, alpha=0.3)
            draw_circle(buffer, x + 25, y, 35, WHITE, alpha=0.3)
            draw_circle(buffer, x + 50, y, 30, WHITE, alpha=0.3)

    # Obstacles

    def draw_obstacle(self, obstacle: Obstacle, buffer: NDArray[np.uint8]) -> None:
        height = buffer.shape[0]
        color = parse_color(obstacle.color)
        self._draw_pipe(buffer, obstacle.x, 0, obstacle.width, obstacle.gap_top, color, top=True)
        self._draw_pipe(
            buffer, obstacle.x, obstacle.gap_bottom, obstacle.width,
            height - obstacle.gap_bottom, color, top=False,
        )

    def _draw_pipe(
        self,
        buffer: NDArray[np.uint8],
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color,
        top: bool,
    ) -> None:
        if height <= 0:
            return
        draw_rect(buffer, x, y, width, height, color)
        draw_rect(buffer, x, y, EDGE_WIDTH, height, WHITE, alpha=0.3)
        draw_rect(buffer, x + width - EDGE_WIDTH, y, EDGE_WIDTH, height, BLACK, alpha=0.3)
        cap_y = height - CAP_HEIGHT if top else y
        draw_rect(buffer, x - CAP_OVERHANG, cap_y, width + CAP_OVERHANG * 2, CAP_HEIGHT, color)

    # Power-ups

    def draw_power_up(self, power_up: PowerUp, buffer: NDArray[np.uint8]) -> None:
        half = power_up.size / 2
        cx, cy = power_up.x + half, power_up.y + half
        color = POWERUP_COLORS[power_up.kind]
        if power_up.kind == PowerUpType.SPEED:
            draw_rotated_rect(buffer, cx, cy, power_up.size, power_up.size, power_up.rotation, color)
        else:
            draw_circle(buffer, cx, cy, half, color)
        glyph, glyph_color = GLYPHS[power_up.kind]
        draw_glyph(buffer, glyph, cx, cy, 3, glyph_color)

    # Player

    def draw_player(self, world: World, buffer: NDArray[np.uint8]) -> None:
        player = world.player
        cx, cy = player.center
        angle = player.rotation
        half_w = player.width / 2
        half_h = player.height / 2

        if world.has_effect(PowerUpType.SHIELD):
            draw_ring(buffer, cx, cy, 30, (255, 255, 0), thickness=3, dashes=19)

        body = BODY_COLORS[world.variant]
        draw_rotated_rect(buffer, cx, cy, player.width, player.height, angle, body)

        if world.variant == CharacterVariant.CLASSIC:
            # Beak
            draw_rotated_rect(buffer, cx, cy, 10, 10, angle, (255, 136, 0), offset=(-half_w + 30, 0))

        # Eye
        draw_rotated_rect(buffer, cx, cy, 8, 8, angle, WHITE, offset=(-half_w + 9, -half_h + 9))
        draw_rotated_rect(buffer, cx, cy, 4, 4, angle, BLACK, offset=(-half_w + 9, -half_h + 9))

    # Particles

    def draw_particles(self, world: World, buffer: NDArray[np.uint8]) -> None:
        for particle in world.particles:
            draw_rect(
                buffer, particle.x, particle.y, particle.size, particle.size,
                particle.color, alpha=particle.alpha,
            )
