"""Process-wide, synchronous event bus.

Handlers run inline on the publishing thread, in subscription order.  The
subscriber table is guarded by a lock; dispatch happens outside it on a
snapshot, so handlers may subscribe or unsubscribe while an event is being
delivered.
"""

import threading
from typing import Any

from dbmetrics.core.protocols.event_bus import EventBus, EventHandler


class InMemoryEventBus(EventBus):
    """Thread-safe in-process EventBus."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handlers: dict[str, tuple[EventHandler, ...]] = {}

    def subscribe(self, channel: str, handler: EventHandler) -> None:
        with self._lock:
            self._handlers[channel] = (*self._handlers.get(channel, ()), handler)

    def unsubscribe(self, channel: str, handler: EventHandler) -> None:
        with self._lock:
            remaining = tuple(h for h in self._handlers.get(channel, ()) if h != handler)
            if remaining:
                self._handlers[channel] = remaining
            else:
                self._handlers.pop(channel, None)

    def publish(self, channel: str, event: Any) -> None:
        with self._lock:
            handlers = self._handlers.get(channel, ())
        for handler in handlers:
            handler(event)

    def has_subscribers(self, channel: str) -> bool:
        """True when at least one handler listens on *channel*."""
        with self._lock:
            return bool(self._handlers.get(channel))
