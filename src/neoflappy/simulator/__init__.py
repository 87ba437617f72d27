"""Desktop front end: pygame window and HUD."""

from .hud import HudModel
from .window import GameWindow, WindowConfig

__all__ = ["GameWindow", "HudModel", "WindowConfig"]
