"""
HUD view model.

Listens to the controller's outbound events and keeps exactly what the
screens need to draw: which screen is up, the live score, the power-up
indicator and the final results.
"""

from dataclasses import dataclass
from typing import Callable, Optional
import logging

from ..core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)

POWERUP_NAMES = {
    "speed": "SLOW-MO",
    "shield": "SHIELD",
    "points": "BONUS POINTS",
}


@dataclass
class HudModel:
    """Presentation state derived purely from bus events."""

    screen: str = "menu"
    score: int = 0
    best_score: int = 0
    final_score: int = 0
    new_best: bool = False
    power_up: Optional[str] = None
    power_up_percent: float = 0.0

    def attach(self, bus: EventBus) -> Callable[[], None]:
        """Subscribe to the bus. Returns a function that detaches again."""
        unsubscribers = [
            bus.subscribe(EventType.STATE_CHANGED, self._on_state),
            bus.subscribe(EventType.SCORE_CHANGED, self._on_score),
            bus.subscribe(EventType.POWERUP_ACTIVATED, self._on_power_up),
            bus.subscribe(EventType.POWERUP_TIMER, self._on_timer),
            bus.subscribe(EventType.POWERUP_CLEARED, self._on_cleared),
            bus.subscribe(EventType.GAME_OVER, self._on_game_over),
        ]

        def detach() -> None:
            for unsubscribe in unsubscribers:
                unsubscribe()

        return detach

    @property
    def power_up_label(self) -> str:
        if self.power_up is None:
            return ""
        return POWERUP_NAMES.get(self.power_up, self.power_up.upper())

    def _on_state(self, event: Event) -> None:
        self.screen = event.data.get("new", self.screen)
        logger.debug(f"HUD screen: {self.screen}")

    def _on_score(self, event: Event) -> None:
        self.score = event.data.get("score", self.score)

    def _on_power_up(self, event: Event) -> None:
        self.power_up = event.data.get("kind")
        self.power_up_percent = 100.0

    def _on_timer(self, event: Event) -> None:
        self.power_up_percent = event.data.get("percent", self.power_up_percent)

    def _on_cleared(self, event: Event) -> None:
        self.power_up = None
        self.power_up_percent = 0.0

    def _on_game_over(self, event: Event) -> None:
        self.final_score = event.data.get("score", self.score)
        self.best_score = event.data.get("best", self.best_score)
        self.new_best = bool(event.data.get("new_best", False))
