from .event_bus import ALL_EVENTS, Event, EventBus
from .types import EventType

__all__ = [
    "ALL_EVENTS",
    "Event",
    "EventBus",
    "EventType",
]
