"""Fake metrics service for testing."""

from typing import Any


class FakeMetricsService:
    """In-memory MetricsService stand-in for testing.

    Structurally satisfies the ``MetricsService`` protocol; records which
    engines were instrumented and whether the service is running.
    """

    def __init__(self, queries: Any, db_pool: Any, renderer: Any) -> None:
        self.queries = queries
        self.db_pool = db_pool
        self.renderer = renderer
        self.engines: dict[str, Any] = {}
        self.started = False

    def instrument(self, name: str, engine: Any) -> None:
        self.engines[name] = engine

    def uninstrument(self, name: str) -> None:
        self.engines.pop(name, None)

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.started = False
