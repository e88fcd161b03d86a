"""MetricsService protocol for the metrics facade.

Abstracts the facade so host applications depend on a protocol rather than
the concrete Prometheus-backed class.  Production uses
``PrometheusMetricsService``; tests inject ``FakeMetricsService``.
"""

from typing import Any, Protocol, runtime_checkable

from dbmetrics.core.protocols.db_pool_metrics import DbPoolMetrics
from dbmetrics.core.protocols.metrics_renderer import MetricsRenderer
from dbmetrics.core.protocols.query_metrics import QueryMetrics


@runtime_checkable
class MetricsService(Protocol):
    """Protocol for the metrics facade."""

    queries: QueryMetrics
    db_pool: DbPoolMetrics
    renderer: MetricsRenderer

    def instrument(self, name: str, engine: Any) -> None:
        """Register *engine* as connection config *name* and time its statements."""
        ...

    def uninstrument(self, name: str) -> None:
        """Stop timing and collecting the engine registered as *name*."""
        ...

    def start(self) -> None:
        """Subscribe the query recorder and install the pool collection hook."""
        ...

    def stop(self) -> None:
        """Unsubscribe the query recorder and remove the collection hook."""
        ...
