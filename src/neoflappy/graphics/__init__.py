"""Graphics module for the NEO FLAPPY rendering pipeline."""

from neoflappy.graphics.renderer import GameRenderer
from neoflappy.graphics.primitives import (
    draw_rect,
    draw_circle,
    draw_ring,
    draw_rotated_rect,
    draw_glyph,
    fill,
    hsl,
    vertical_gradient,
)

__all__ = [
    # Renderer
    "GameRenderer",
    # Primitives
    "draw_rect",
    "draw_circle",
    "draw_ring",
    "draw_rotated_rect",
    "draw_glyph",
    "fill",
    "hsl",
    "vertical_gradient",
]
