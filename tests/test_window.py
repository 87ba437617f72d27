import pygame
import pytest

from neoflappy.core.events import EventType
from neoflappy.core.state import State
from neoflappy.simulator.window import playfield_size, request_for_key


@pytest.mark.parametrize("state, key, expected", [
    (State.MENU, pygame.K_SPACE, EventType.START_REQUESTED),
    (State.PLAYING, pygame.K_SPACE, EventType.JUMP_REQUESTED),
    (State.PLAYING, pygame.K_ESCAPE, EventType.PAUSE_REQUESTED),
    (State.PAUSED, pygame.K_p, EventType.RESUME_REQUESTED),
    (State.PAUSED, pygame.K_m, EventType.MENU_REQUESTED),
    (State.GAME_OVER, pygame.K_r, EventType.RESTART_REQUESTED),
    (State.MENU, pygame.K_r, None),
])
def test_key_bindings_depend_on_state(state, key, expected):
    assert request_for_key(state, key) == expected


def test_playfield_fits_window():
    assert playfield_size(840, 640, 800, 600, 40) == (800, 600)
    assert playfield_size(1920, 1080, 800, 600, 40) == (800, 600)
    assert playfield_size(500, 400, 800, 600, 40) == (460, 360)
    assert playfield_size(20, 20, 800, 600, 40) == (1, 1)
