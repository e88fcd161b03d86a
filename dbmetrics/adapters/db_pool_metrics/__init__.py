"""DB pool metrics adapters."""

from dbmetrics.adapters.db_pool_metrics.fake import FakeDbPoolMetrics
from dbmetrics.adapters.db_pool_metrics.prometheus import PrometheusDbPoolMetrics

__all__ = ["PrometheusDbPoolMetrics", "FakeDbPoolMetrics"]
