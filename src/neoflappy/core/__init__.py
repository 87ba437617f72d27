"""Core framework components for NEO FLAPPY."""

from .state import State, StateMachine
from .events import EventBus, Event, EventType
from .loop import TickDriver

__all__ = ["State", "StateMachine", "EventBus", "Event", "EventType", "TickDriver"]
