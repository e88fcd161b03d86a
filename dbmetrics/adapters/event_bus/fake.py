"""Fake EventBus for testing.

Keeps subscriptions and every published event in memory.  Delivery is
synchronous like the real bus, so tests can publish and assert immediately.
"""

from typing import Any

from dbmetrics.core.protocols.event_bus import EventBus, EventHandler


class FakeEventBus(EventBus):
    """In-memory spy implementing the EventBus protocol."""

    def __init__(self) -> None:
        self.handlers: dict[str, list[EventHandler]] = {}
        self.published: list[tuple[str, Any]] = []

    def subscribe(self, channel: str, handler: EventHandler) -> None:
        self.handlers.setdefault(channel, []).append(handler)

    def unsubscribe(self, channel: str, handler: EventHandler) -> None:
        handlers = self.handlers.get(channel, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, channel: str, event: Any) -> None:
        self.published.append((channel, event))
        for handler in list(self.handlers.get(channel, [])):
            handler(event)

    # -- test helpers --

    def events_on(self, channel: str) -> list[Any]:
        return [event for published_channel, event in self.published if published_channel == channel]

    def clear(self) -> None:
        """Reset all recorded state."""
        self.handlers.clear()
        self.published.clear()
