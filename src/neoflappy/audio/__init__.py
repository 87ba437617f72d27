"""
NEO FLAPPY Audio System.

Synthesized arcade cues played through pygame.mixer.
"""

from .engine import AudioEngine, get_audio_engine

__all__ = ["AudioEngine", "get_audio_engine"]
