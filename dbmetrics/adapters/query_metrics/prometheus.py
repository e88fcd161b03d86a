"""Prometheus implementation of the QueryMetrics protocol.

A counter and a histogram share the ``config``/``kind``/``cached``/``async``
label schema.  The histogram uses the long-running query buckets so that
queries of up to six hours still land in a finite bucket.
"""

from prometheus_client import CollectorRegistry, Counter, Histogram

from dbmetrics.core.config import settings
from dbmetrics.core.protocols.query_metrics import QueryMetrics
from dbmetrics.core.query_labels import QueryLabels
from dbmetrics.core.query_recorder import LONG_RUNNING_QUERY_BUCKETS

QUERY_LABELS = ("config", "kind", "cached", "async")


class PrometheusQueryMetrics(QueryMetrics):
    """Prometheus-backed query metrics."""

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        namespace: str | None = None,
    ) -> None:
        self._registry = registry or CollectorRegistry()
        namespace = namespace or settings.METRICS_NAMESPACE

        self._queries_total = Counter(
            f"{namespace}_queries_total",
            "Total number of SQL queries issued by the application",
            QUERY_LABELS,
            registry=self._registry,
        )

        self._query_duration = Histogram(
            f"{namespace}_query_duration_seconds",
            "Duration of SQL queries in seconds",
            QUERY_LABELS,
            buckets=LONG_RUNNING_QUERY_BUCKETS,
            registry=self._registry,
        )

    # -- QueryMetrics protocol methods --

    def inc_queries(self, labels: QueryLabels) -> None:
        self._queries_total.labels(**labels.as_prometheus()).inc()

    def observe_duration(self, labels: QueryLabels, seconds: float) -> None:
        self._query_duration.labels(**labels.as_prometheus()).observe(seconds)
