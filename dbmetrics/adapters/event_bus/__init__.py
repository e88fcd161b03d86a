"""Event bus adapters."""

from dbmetrics.adapters.event_bus.fake import FakeEventBus
from dbmetrics.adapters.event_bus.in_memory import InMemoryEventBus

__all__ = ["InMemoryEventBus", "FakeEventBus"]
