"""Prometheus-backed MetricsService implementation.

Composes the metrics adapters, the query event recorder and the pool
snapshot collector behind a single lifecycle API so callers only deal with
one object instead of three adapters and two pipeline components.
"""

from typing import Any

from dbmetrics.adapters.metrics_renderer.prometheus import PrometheusMetricsRenderer
from dbmetrics.adapters.sqlalchemy.connection_manager import SqlAlchemyConnectionManager
from dbmetrics.adapters.sqlalchemy.query_events import SqlAlchemyQueryEventSource
from dbmetrics.core.logging import logger
from dbmetrics.core.pool_collector import PoolSnapshotCollector
from dbmetrics.core.protocols.db_pool_metrics import DbPoolMetrics
from dbmetrics.core.protocols.event_bus import EventBus
from dbmetrics.core.protocols.query_metrics import QueryMetrics
from dbmetrics.core.query_recorder import QueryEventRecorder


class PrometheusMetricsService:
    """Facade that owns the metrics adapters and both instrumentation paths.

    Satisfies the ``MetricsService`` protocol structurally.  ``start()``
    subscribes the recorder to the bus and installs the collector as a
    renderer hook; ``stop()`` reverses both and detaches every engine.
    """

    queries: QueryMetrics
    db_pool: DbPoolMetrics
    renderer: PrometheusMetricsRenderer

    def __init__(
        self,
        queries: QueryMetrics,
        db_pool: DbPoolMetrics,
        renderer: PrometheusMetricsRenderer,
        bus: EventBus,
        manager: SqlAlchemyConnectionManager,
        channel: str | None = None,
    ) -> None:
        self.queries = queries
        self.db_pool = db_pool
        self.renderer = renderer
        self._bus = bus
        self._manager = manager
        self._recorder = QueryEventRecorder(queries, channel=channel)
        self._collector = PoolSnapshotCollector(manager, db_pool)
        self._source = SqlAlchemyQueryEventSource(bus, manager, channel=self._recorder.channel)
        self._started = False
        self._logger = logger.with_context(component="metrics_service")

    @property
    def manager(self) -> SqlAlchemyConnectionManager:
        return self._manager

    @property
    def collector(self) -> PoolSnapshotCollector:
        return self._collector

    def instrument(self, name: str, engine: Any) -> None:
        """Register *engine* as connection config *name* and time its statements."""
        self._manager.register(name, engine)
        self._source.instrument(engine)

    def start(self) -> None:
        if self._started:
            return
        self._recorder.subscribe(self._bus)
        self.renderer.add_hook(self._collector.collect)
        self._started = True
        self._logger.info("Database metrics instrumentation started")

    def uninstrument(self, name: str) -> None:
        """Stop timing and collecting the engine registered as *name*."""
        engine = self._manager.unregister(name)
        if engine is not None:
            self._source.uninstrument(engine)

    def stop(self) -> None:
        if not self._started:
            return
        self._recorder.unsubscribe(self._bus)
        self.renderer.remove_hook(self._collector.collect)
        self._started = False
        self._logger.info("Database metrics instrumentation stopped")
