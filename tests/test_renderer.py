import numpy as np
import pytest

from neoflappy.game.entities import (
    ActiveEffect,
    CharacterVariant,
    Obstacle,
    PowerUp,
    PowerUpType,
)
from neoflappy.graphics.primitives import (
    draw_circle,
    draw_rect,
    draw_rotated_rect,
    hsl,
)
from neoflappy.graphics.renderer import GameRenderer


def blank(h=20, w=20):
    return np.zeros((h, w, 3), dtype=np.uint8)


def test_hsl_matches_css():
    assert hsl(0, 1.0, 0.5) == (255, 0, 0)
    assert hsl(120, 1.0, 0.5) == (0, 255, 0)
    assert hsl(360, 0.0, 1.0) == (255, 255, 255)


def test_rect_is_clipped():
    buffer = blank()
    draw_rect(buffer, -5, -5, 10, 10, (255, 0, 0))
    assert tuple(buffer[0, 0]) == (255, 0, 0)
    assert tuple(buffer[4, 4]) == (255, 0, 0)
    assert tuple(buffer[5, 5]) == (0, 0, 0)

    draw_rect(buffer, 100, 100, 10, 10, (0, 255, 0))
    assert buffer[:, :, 1].max() == 0


def test_rect_alpha_blends():
    buffer = blank()
    draw_rect(buffer, 0, 0, 4, 4, (200, 100, 0), alpha=0.5)
    assert tuple(buffer[1, 1]) == (100, 50, 0)


def test_circle_mask():
    buffer = blank()
    draw_circle(buffer, 10, 10, 3, (255, 255, 255))
    assert tuple(buffer[10, 10]) == (255, 255, 255)
    assert tuple(buffer[10, 13]) == (255, 255, 255)
    assert tuple(buffer[14, 14]) == (0, 0, 0)


def test_rotated_rect_at_zero_degrees_is_axis_aligned():
    buffer = blank()
    draw_rotated_rect(buffer, 10, 10, 4, 4, 0, (255, 0, 0))
    assert buffer[:, :, 0].sum() // 255 == 16
    assert tuple(buffer[8, 8]) == (255, 0, 0)
    assert tuple(buffer[12, 12]) == (0, 0, 0)


def test_new_buffer_follows_playfield(world):
    renderer = GameRenderer()
    world.playfield.width = 320
    world.playfield.height = 240
    assert renderer.new_buffer(world).shape == (240, 320, 3)


def test_background_top_row(world):
    renderer = GameRenderer()
    buffer = renderer.new_buffer(world)
    renderer.render(world, buffer)
    assert tuple(buffer[0, 400]) == hsl(200, 0.7, 0.8)


def test_player_and_obstacle_are_drawn(world):
    renderer = GameRenderer()
    world.obstacles = [Obstacle(x=500, gap_top=200, gap_bottom=380, color="#228B22")]
    buffer = renderer.new_buffer(world)
    renderer.render(world, buffer)

    # Pipe body away from its shaded edges and cap
    assert tuple(buffer[100, 540]) == (0x22, 0x8B, 0x22)
    # Classic body color at the player's lower half
    assert tuple(buffer[335, 110]) == (255, 255, 0)


@pytest.mark.parametrize("variant", list(CharacterVariant))
def test_every_variant_renders_with_effects(world, variant):
    renderer = GameRenderer()
    world.variant = variant
    world.effect = ActiveEffect(PowerUpType.SHIELD, 100)
    world.power_ups = [
        PowerUp(x=300, y=100, kind=kind, rotation=45) for kind in PowerUpType
    ]
    buffer = renderer.new_buffer(world)
    renderer.render(world, buffer)
    assert buffer.dtype == np.uint8
