"""Utility modules for NEO FLAPPY."""

from .score_store import (
    ScoreStore,
    MemoryScoreStore,
    JsonScoreStore,
    BEST_SCORE_KEY,
)

__all__ = [
    "ScoreStore",
    "MemoryScoreStore",
    "JsonScoreStore",
    "BEST_SCORE_KEY",
]
