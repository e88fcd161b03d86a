"""Query metrics adapters."""

from dbmetrics.adapters.query_metrics.fake import FakeQueryMetrics
from dbmetrics.adapters.query_metrics.prometheus import PrometheusQueryMetrics

__all__ = ["PrometheusQueryMetrics", "FakeQueryMetrics"]
