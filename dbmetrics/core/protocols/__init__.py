"""Core protocols for dependency injection."""

from dbmetrics.core.protocols.connection_pools import ConnectionManager, ConnectionPool, HasConfigName
from dbmetrics.core.protocols.db_pool_metrics import DbPoolMetrics
from dbmetrics.core.protocols.event_bus import EventBus, EventHandler
from dbmetrics.core.protocols.metrics_renderer import MetricsRenderer
from dbmetrics.core.protocols.metrics_service import MetricsService
from dbmetrics.core.protocols.query_metrics import QueryMetrics

__all__ = [
    "ConnectionManager",
    "ConnectionPool",
    "DbPoolMetrics",
    "EventBus",
    "EventHandler",
    "HasConfigName",
    "MetricsRenderer",
    "MetricsService",
    "QueryMetrics",
]
