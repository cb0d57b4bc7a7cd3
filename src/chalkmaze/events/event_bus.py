from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Callable, DefaultDict, Dict, List

logger = logging.getLogger(__name__)

# Subscribing to this name receives every published event.
ALL_EVENTS = "*"

Listener = Callable[["Event"], None]


@dataclass(frozen=True)
class Event:
    """A named session event; ``payload`` holds plain JSON-friendly values."""

    name: str
    payload: Dict[str, Any] = field(default_factory=dict)


class EventBus:
    """Synchronous publish/subscribe for session events.

    Listeners run on the publishing thread, in subscription order, exact-name
    listeners before ``ALL_EVENTS`` ones. A listener that raises is logged and
    the remaining listeners still run.
    """

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)
        self._lock = RLock()

    def subscribe(self, event_name: str, callback: Listener) -> Callable[[], None]:
        """Register ``callback`` for ``event_name``; returns a function that
        removes it again."""
        if not callable(callback):
            raise TypeError("callback must be callable")
        with self._lock:
            self._listeners[event_name].append(callback)
        logger.debug("Subscribed %s to '%s'", getattr(callback, "__name__", callback), event_name)

        def _unsubscribe() -> None:
            self.unsubscribe(event_name, callback)

        return _unsubscribe

    def unsubscribe(self, event_name: str, callback: Listener) -> None:
        with self._lock:
            listeners = self._listeners.get(event_name)
            if listeners and callback in listeners:
                listeners.remove(callback)

    def clear(self) -> None:
        with self._lock:
            self._listeners.clear()

    def publish(self, event_name: str, payload: Dict[str, Any]) -> Event:
        event = Event(name=event_name, payload=payload)
        with self._lock:
            targets = list(self._listeners.get(event_name, ()))
            if event_name != ALL_EVENTS:
                targets.extend(self._listeners.get(ALL_EVENTS, ()))
        logger.debug("Event '%s' -> %d listener(s): %s", event_name, len(targets), payload)
        for cb in targets:
            try:
                cb(event)
            except Exception:
                logger.exception("Event listener failed for '%s'", event_name)
        return event


__all__ = [
    "ALL_EVENTS",
    "Event",
    "EventBus",
]
