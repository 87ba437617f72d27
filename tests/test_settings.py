from pathlib import Path

from neoflappy.settings import DisplaySettings, Settings, TuningSettings


def test_defaults_match_classic_tuning():
    tuning = TuningSettings()
    assert tuning.gravity == 0.6
    assert tuning.jump_impulse == -12
    assert tuning.gap_size == 180
    assert tuning.obstacle_interval == 300
    assert tuning.powerup_chance == 0.3
    assert tuning.powerup_duration == 300


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("NEOFLAPPY_FIXED_TIMESTEP", "true")
    monkeypatch.setenv("NEOFLAPPY_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("NEOFLAPPY_TUNING_GRAVITY", "0.4")
    monkeypatch.setenv("NEOFLAPPY_DISPLAY_FPS", "30")

    settings = Settings(_env_file=None)

    assert settings.fixed_timestep is True
    assert settings.tuning.gravity == 0.4
    assert settings.display.fps == 30
    assert settings.best_score_path == Path(tmp_path) / "best_score.json"


def test_display_defaults_leave_margin():
    display = DisplaySettings()
    assert display.window_width - display.window_margin == display.max_playfield_width
    assert display.window_height - display.window_margin == display.max_playfield_height
