"""
Event bus for the game.

Requests flow in from the window (jump, pause, resize, ...) and the
controller answers with notifications (state, score, power-up timer, game
over). Emission is synchronous so a request is fully applied before the
frame renders; the optional queue lets async handlers run once per frame.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Awaitable, Callable, Iterable
import asyncio
import inspect
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Everything that travels over the bus."""
    # Requests from the window
    JUMP_REQUESTED = auto()
    START_REQUESTED = auto()
    PAUSE_REQUESTED = auto()
    RESUME_REQUESTED = auto()
    MENU_REQUESTED = auto()
    RESTART_REQUESTED = auto()
    VARIANT_SELECTED = auto()
    VIEWPORT_RESIZED = auto()

    # Notifications from the controller
    STATE_CHANGED = auto()
    SCORE_CHANGED = auto()
    OBSTACLE_PASSED = auto()
    POWERUP_ACTIVATED = auto()
    POWERUP_TIMER = auto()
    POWERUP_CLEARED = auto()
    JUMP = auto()
    GAME_OVER = auto()

    # Frame loop
    TICK = auto()
    SHUTDOWN = auto()


@dataclass
class Event:
    """A single bus message. `source` names the emitter: input, game, window, ..."""
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None] | Callable[[Event], Awaitable[None]]


class EventBus:
    """
    Pub/sub hub shared by the controller, the HUD and the window.

    emit() calls plain handlers right away and skips coroutine handlers;
    queue_event() defers an event to process_queue(), which runs both kinds.
    A failing handler is logged and never stops delivery to the others.
    """

    def __init__(self, history_size: int = 100) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._wildcard: list[Handler] = []
        self._history: deque[Event] = deque(maxlen=history_size)
        self._pending: asyncio.Queue[Event] | None = None

    @property
    def queue(self) -> asyncio.Queue[Event]:
        if self._pending is None:
            self._pending = asyncio.Queue()
        return self._pending

    # Subscription

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Register a handler for one event type.

        Returns:
            A function that removes the handler again
        """
        bucket = self._handlers[event_type]
        bucket.append(handler)
        logger.debug(f"Subscribed {getattr(handler, '__name__', handler)} to {event_type.name}")
        return lambda: self._detach(bucket, handler)

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Register a handler that sees every event."""
        self._wildcard.append(handler)
        return lambda: self._detach(self._wildcard, handler)

    @staticmethod
    def _detach(bucket: list[Handler], handler: Handler) -> None:
        if handler in bucket:
            bucket.remove(handler)

    # Delivery

    def emit(self, event: Event) -> None:
        """Deliver now to plain handlers. Coroutine handlers need queue_event()."""
        self._history.append(event)
        for handler in self._targets(event):
            if not inspect.iscoroutinefunction(handler):
                self._call(handler, event)

    def queue_event(self, event: Event) -> None:
        self.queue.put_nowait(event)

    async def process_queue(self) -> None:
        """Drain the queue, awaiting coroutine handlers of each event together."""
        queue = self.queue
        while not queue.empty():
            event = queue.get_nowait()
            self._history.append(event)

            pending = []
            for handler in self._targets(event):
                if inspect.iscoroutinefunction(handler):
                    pending.append(handler(event))
                else:
                    self._call(handler, event)
            for result in await asyncio.gather(*pending, return_exceptions=True):
                if isinstance(result, Exception):
                    logger.error(f"Async handler failed on {event.type.name}: {result}")
            queue.task_done()

    def _targets(self, event: Event) -> Iterable[Handler]:
        # Snapshot, so handlers may unsubscribe while being called
        return list(self._handlers.get(event.type, ())) + list(self._wildcard)

    @staticmethod
    def _call(handler: Handler, event: Event) -> None:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Handler failed on {event.type.name}: {e}")

    # History

    def get_history(self, event_type: EventType | None = None, limit: int = 10) -> list[Event]:
        """Most recent events, oldest first."""
        events = [e for e in self._history if event_type is None or e.type == event_type]
        return events[-limit:]

    def clear_history(self) -> None:
        self._history.clear()


def jump_request(source: str = "input") -> Event:
    return Event(EventType.JUMP_REQUESTED, source=source)


def variant_selected(variant: str, source: str = "menu") -> Event:
    return Event(EventType.VARIANT_SELECTED, data={"variant": variant}, source=source)


def viewport_resized(width: int, height: int, source: str = "window") -> Event:
    return Event(EventType.VIEWPORT_RESIZED, data={"width": width, "height": height}, source=source)


def tick_event(delta: float, frame: int) -> Event:
    """Once per rendered frame; delta in seconds."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame}, source="window")
