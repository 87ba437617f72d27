"""Simulation: entities, per-tick systems and the state controller."""

from neoflappy.game.entities import (
    ActiveEffect,
    CharacterVariant,
    GameSession,
    Obstacle,
    Particle,
    PlayerCharacter,
    Playfield,
    PowerUp,
    PowerUpType,
    World,
)
from neoflappy.game.controller import GameController

__all__ = [
    "ActiveEffect",
    "CharacterVariant",
    "GameController",
    "GameSession",
    "Obstacle",
    "Particle",
    "PlayerCharacter",
    "Playfield",
    "PowerUp",
    "PowerUpType",
    "World",
]
