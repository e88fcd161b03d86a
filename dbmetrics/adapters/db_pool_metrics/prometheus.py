"""Prometheus implementation of the DbPoolMetrics protocol.

Seven gauges, each labeled by ``config``, expose connection pool state for
Prometheus scraping.  Values are overwritten on every collection cycle.
"""

from prometheus_client import CollectorRegistry, Gauge

from dbmetrics.core.config import settings
from dbmetrics.core.pool_stats import PoolStats
from dbmetrics.core.protocols.db_pool_metrics import DbPoolMetrics


class PrometheusDbPoolMetrics(DbPoolMetrics):
    """Prometheus-backed DB connection pool metrics."""

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        namespace: str | None = None,
    ) -> None:
        self._registry = registry or CollectorRegistry()
        prefix = f"{namespace or settings.METRICS_NAMESPACE}_connection_pool"

        self._size = Gauge(
            f"{prefix}_size",
            "Connection pool size",
            ["config"],
            registry=self._registry,
        )

        self._connections = Gauge(
            f"{prefix}_connections",
            "Total number of connections currently created in the pool (sum of busy, dead, and idle)",
            ["config"],
            registry=self._registry,
        )

        self._busy = Gauge(
            f"{prefix}_busy",
            "Number of connections checked out and in use",
            ["config"],
            registry=self._registry,
        )

        self._dead = Gauge(
            f"{prefix}_dead",
            "Number of checked-out connections that were invalidated and not yet returned",
            ["config"],
            registry=self._registry,
        )

        self._idle = Gauge(
            f"{prefix}_idle",
            "Number of free connections available for checkout",
            ["config"],
            registry=self._registry,
        )

        self._waiting = Gauge(
            f"{prefix}_waiting",
            "Number of threads waiting for a connection to become available for checkout",
            ["config"],
            registry=self._registry,
        )

        self._checkout_timeout = Gauge(
            f"{prefix}_checkout_timeout_seconds",
            "Checkout waiting timeout in seconds",
            ["config"],
            registry=self._registry,
        )

    # -- DbPoolMetrics protocol method --

    def update(self, *, config: str, stats: PoolStats) -> None:
        self._size.labels(config=config).set(stats.size)
        self._connections.labels(config=config).set(stats.connections)
        self._busy.labels(config=config).set(stats.busy)
        self._dead.labels(config=config).set(stats.dead)
        self._idle.labels(config=config).set(stats.idle)
        self._waiting.labels(config=config).set(stats.waiting)
        self._checkout_timeout.labels(config=config).set(stats.checkout_timeout)
