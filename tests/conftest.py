import random

import pytest

from neoflappy.core.events import EventBus
from neoflappy.game.controller import GameController
from neoflappy.game.entities import Playfield, PlayerCharacter, World
from neoflappy.settings import TuningSettings
from neoflappy.utils.score_store import MemoryScoreStore


class RecordingAudio:
    def __init__(self):
        self.jumps = 0

    def play_jump_cue(self):
        self.jumps += 1


@pytest.fixture
def tuning():
    return TuningSettings()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def store():
    return MemoryScoreStore()


@pytest.fixture
def controller(tuning, bus, store, audio, rng):
    return GameController(
        tuning=tuning,
        event_bus=bus,
        store=store,
        audio=audio,
        rng=rng,
        playfield=Playfield(800, 600),
    )


@pytest.fixture
def world():
    field = Playfield(800, 600)
    return World(playfield=field, player=PlayerCharacter(x=100, y=300))
