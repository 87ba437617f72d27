"""
Synthesized sound cues.

Every cue is rendered once from oscillators when the mixer comes up, so
the game ships no audio files. Without a mixer every call is a no-op.
"""

import pygame
import array
import math
import random
import logging
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
PEAK = 32767


def square(t: float, freq: float) -> float:
    return 1 if (t * freq) % 1 < 0.5 else -1


def sine(t: float, freq: float) -> float:
    return math.sin(2 * math.pi * freq * t)


def noise() -> float:
    return random.random() * 2 - 1


def exp_ramp(t: float, duration: float, start: float, end: float) -> float:
    """Exponential gain glide from start to end, held at end afterwards."""
    if t >= duration:
        return end
    return start * (end / start) ** (t / duration)


def render(duration: float, voice: Callable[[float], float]) -> List[int]:
    """Sample voice(t) over duration seconds as signed 16-bit values."""
    return [int(voice(i / SAMPLE_RATE) * PEAK) for i in range(int(SAMPLE_RATE * duration))]


def beep_samples(
    freq: float = 800.0,
    duration: float = 0.1,
    gain_start: float = 0.1,
    gain_end: float = 0.01,
) -> List[int]:
    """The jump cue: a sine beep decaying exponentially."""
    return render(duration, lambda t: sine(t, freq) * exp_ramp(t, duration, gain_start, gain_end))


def score_samples() -> List[int]:
    # Rising square chirp
    return render(0.08, lambda t: square(t, 800 + t * 4000) * 0.12 * max(0.0, 1 - t * 15))


def powerup_samples() -> List[int]:
    notes = (523, 659, 784)

    def voice(t: float) -> float:
        step = min(int(t * 10), len(notes) - 1)
        env = max(0.0, 1 - (t - step * 0.1) * 8)
        return square(t, notes[step]) * 0.15 * env

    return render(0.3, voice)


def crash_samples() -> List[int]:
    def voice(t: float) -> float:
        env = max(0.0, 1 - t * 2.5)
        return (square(t, max(60, 300 - t * 500)) * 0.15 + noise() * 0.1) * env

    return render(0.4, voice)


CUES: Dict[str, Callable[[], List[int]]] = {
    "jump": beep_samples,
    "score_up": score_samples,
    "powerup": powerup_samples,
    "crash": crash_samples,
}


class AudioEngine:
    """Plays the game's cues through pygame.mixer."""

    def __init__(self, muted: bool = False):
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._volume = 1.0
        self._muted = muted

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def init(self) -> bool:
        """Open the mixer and render all cues. False when there is no audio device."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 512)
            pygame.mixer.init()
            for name, make in CUES.items():
                self._sounds[name] = self._to_sound(make())
            self._initialized = True
            logger.info(f"Audio ready with {len(self._sounds)} cues")
            return True
        except Exception as e:
            logger.warning(f"Audio unavailable, continuing silently: {e}")
            self._sounds.clear()
            self._initialized = False
            return False

    @staticmethod
    def _to_sound(mono: List[int]) -> pygame.mixer.Sound:
        # Mixer is opened in stereo; duplicate each sample into both channels
        stereo = array.array('h', (s for s in mono for _ in range(2)))
        return pygame.mixer.Sound(buffer=stereo)

    def play(self, name: str, volume: float = 1.0) -> Optional[pygame.mixer.Channel]:
        """Fire and forget. Never raises."""
        if not self._initialized or self._muted:
            return None
        sound = self._sounds.get(name)
        if sound is None:
            logger.warning(f"Unknown cue: {name}")
            return None
        try:
            sound.set_volume(volume * self._volume)
            return sound.play()
        except pygame.error as e:
            logger.debug(f"Playback failed for {name}: {e}")
            return None

    def play_jump_cue(self) -> None:
        self.play("jump")

    def play_score_up(self) -> None:
        self.play("score_up")

    def play_powerup(self) -> None:
        self.play("powerup")

    def play_crash(self) -> None:
        self.play("crash")

    def set_master_volume(self, volume: float) -> None:
        self._volume = max(0.0, min(1.0, volume))

    def is_muted(self) -> bool:
        return self._muted

    def toggle_mute(self) -> bool:
        """Returns the new muted state."""
        self._muted = not self._muted
        logger.info(f"Audio {'muted' if self._muted else 'unmuted'}")
        return self._muted

    def cleanup(self) -> None:
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            logger.info("Audio shut down")


_audio_engine: Optional[AudioEngine] = None


def get_audio_engine() -> AudioEngine:
    """Process-wide engine shared by the entry point and the window."""
    global _audio_engine
    if _audio_engine is None:
        _audio_engine = AudioEngine()
    return _audio_engine
