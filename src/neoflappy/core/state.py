"""
Top-level game flow.

    MENU       title screen and character selection
    PLAYING    a run is in progress, the tick driver is active
    PAUSED     a run is frozen with every entity kept as is
    GAME_OVER  the run has ended, final score shown
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    """Values double as the screen names shown to the HUD."""
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


@dataclass
class StateContext:
    """Score summary carried along with the state."""
    score: int = 0
    best_score: int = 0
    data: dict[str, Any] = field(default_factory=dict)

    def update(self, **values: Any) -> None:
        for key, value in values.items():
            if key == "data":
                self.data.update(value)
            elif hasattr(self, key):
                setattr(self, key, value)
            else:
                logger.debug(f"Ignoring unknown context field: {key}")


StateListener = Callable[[State, State, StateContext], None]


class StateMachine:
    """
    Table-driven state holder for the controller.

    A move that is not in VALID_TRANSITIONS logs a warning and returns False.
    Listeners run after the state has changed, in registration order.
    """

    VALID_TRANSITIONS: dict[State, frozenset[State]] = {
        State.MENU: frozenset({State.PLAYING}),
        State.PLAYING: frozenset({State.PAUSED, State.GAME_OVER, State.MENU}),
        State.PAUSED: frozenset({State.PLAYING, State.MENU}),
        # PLAYING here is a restart
        State.GAME_OVER: frozenset({State.PLAYING, State.MENU}),
    }

    def __init__(self, initial_state: State = State.MENU) -> None:
        self._state = initial_state
        self._context = StateContext()
        self._listeners: list[StateListener] = []
        logger.debug(f"StateMachine starts in {initial_state.name}")

    @property
    def state(self) -> State:
        return self._state

    @property
    def context(self) -> StateContext:
        return self._context

    def can_transition(self, to_state: State) -> bool:
        return to_state in self.VALID_TRANSITIONS.get(self._state, frozenset())

    def transition(self, to_state: State, **context_updates: Any) -> bool:
        """
        Move to to_state if the table allows it.

        Args:
            to_state: Target state
            **context_updates: score, best_score or data to record

        Returns:
            True if the state changed
        """
        if not self.can_transition(to_state):
            logger.warning(f"Refused transition {self._state.name} -> {to_state.name}")
            return False

        previous, self._state = self._state, to_state
        self._context.update(**context_updates)
        logger.info(f"State: {previous.name} -> {to_state.name}")

        for listener in list(self._listeners):
            try:
                listener(previous, to_state, self._context)
            except Exception as e:
                logger.error(f"State listener failed on {to_state.name}: {e}")
        return True

    def add_listener(self, callback: StateListener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)
