"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Gameplay constants are expressed per tick at the nominal 60 ticks/second.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TuningSettings(BaseSettings):
    """Gameplay constants."""

    model_config = SettingsConfigDict(env_prefix="NEOFLAPPY_TUNING_", extra="ignore")

    # Player
    player_x: float = 100.0
    player_size: float = 40.0
    gravity: float = 0.6
    jump_impulse: float = -12.0
    max_rotation: float = 30.0
    rotation_factor: float = 3.0

    # Obstacles
    obstacle_count: int = Field(default=3, ge=1)
    obstacle_width: float = 80.0
    gap_size: float = 180.0
    min_margin: float = 100.0
    obstacle_interval: float = 300.0
    base_speed: float = 3.0
    speed_effect_factor: float = 0.5
    obstacle_palette: list[str] = Field(
        default=["#228B22", "#32CD32", "#006400", "#90EE90"]
    )

    # Power-ups
    powerup_size: float = 30.0
    powerup_chance: float = Field(default=0.3, ge=0.0, le=1.0)
    powerup_offset: float = 50.0
    powerup_margin: float = 50.0
    powerup_spin: float = 2.0
    powerup_duration: int = Field(default=300, ge=1)
    points_bonus: int = 5

    # Particles and background
    particle_gravity: float = 0.1
    background_speed: float = 1.0


class DisplaySettings(BaseSettings):
    """Window and playfield settings."""

    model_config = SettingsConfigDict(env_prefix="NEOFLAPPY_DISPLAY_", extra="ignore")

    window_width: int = 840
    window_height: int = 640
    max_playfield_width: int = 800
    max_playfield_height: int = 600
    window_margin: int = 40
    fps: int = 60
    title: str = "NEO FLAPPY"
    resizable: bool = True


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="NEOFLAPPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False

    # Where the best score lives
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".neoflappy")

    # Loop timing: False keeps one tick per rendered frame
    fixed_timestep: bool = False
    tick_rate: int = 60
    max_ticks_per_frame: int = 5

    mute: bool = False
    volume: float = Field(default=1.0, ge=0.0, le=1.0)
    variant: Literal["classic", "fire", "ice", "electric"] = "classic"

    # Nested settings
    tuning: TuningSettings = Field(default_factory=TuningSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @property
    def best_score_path(self) -> Path:
        """Path to the persisted best score."""
        return self.data_dir / "best_score.json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
