"""Wire the Prometheus-backed metrics service.

``build_metrics_service`` constructs every adapter on one shared
``CollectorRegistry`` so a single renderer exposes query and pool metrics
together.
"""

from prometheus_client import CollectorRegistry

from dbmetrics.adapters.db_pool_metrics.prometheus import PrometheusDbPoolMetrics
from dbmetrics.adapters.event_bus.in_memory import InMemoryEventBus
from dbmetrics.adapters.metrics_renderer.prometheus import PrometheusMetricsRenderer
from dbmetrics.adapters.query_metrics.prometheus import PrometheusQueryMetrics
from dbmetrics.adapters.sqlalchemy.connection_manager import SqlAlchemyConnectionManager
from dbmetrics.core.config import Settings, settings
from dbmetrics.core.metrics_service import PrometheusMetricsService
from dbmetrics.core.protocols.event_bus import EventBus

# Process-wide bus shared by every service that does not bring its own.
default_event_bus = InMemoryEventBus()


def build_metrics_service(
    registry: CollectorRegistry | None = None,
    *,
    bus: EventBus | None = None,
    manager: SqlAlchemyConnectionManager | None = None,
    config: Settings | None = None,
) -> PrometheusMetricsService:
    """Build a ``PrometheusMetricsService``.

    Args:
        registry: Registry to declare metrics on; a fresh one by default.
        bus: Event bus carrying query events; ``default_event_bus`` by default.
        manager: Engine registry; a fresh one by default.
        config: Settings overriding the environment-derived ``settings``.
    """
    config = config or settings
    registry = registry or CollectorRegistry()

    return PrometheusMetricsService(
        queries=PrometheusQueryMetrics(registry=registry, namespace=config.METRICS_NAMESPACE),
        db_pool=PrometheusDbPoolMetrics(registry=registry, namespace=config.METRICS_NAMESPACE),
        renderer=PrometheusMetricsRenderer(registry),
        bus=bus or default_event_bus,
        manager=manager or SqlAlchemyConnectionManager(),
        channel=config.QUERY_EVENT_CHANNEL,
    )
