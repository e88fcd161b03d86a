"""EventBus protocol for in-process event delivery.

The database layer publishes one event per executed statement; subscribers
are invoked synchronously on the publishing thread.
"""

from typing import Any, Callable, Protocol, runtime_checkable

EventHandler = Callable[[Any], None]


@runtime_checkable
class EventBus(Protocol):
    """Protocol for a named-channel publish/subscribe bus."""

    def subscribe(self, channel: str, handler: EventHandler) -> None:
        """Register *handler* for events published on *channel*."""
        ...

    def unsubscribe(self, channel: str, handler: EventHandler) -> None:
        """Remove *handler* from *channel*.  Unknown handlers are ignored."""
        ...

    def publish(self, channel: str, event: Any) -> None:
        """Deliver *event* to every handler subscribed to *channel*."""
        ...
