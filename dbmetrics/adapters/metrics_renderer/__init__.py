"""Metrics renderer adapters."""

from dbmetrics.adapters.metrics_renderer.fake import FakeMetricsRenderer
from dbmetrics.adapters.metrics_renderer.prometheus import PrometheusMetricsRenderer

__all__ = ["PrometheusMetricsRenderer", "FakeMetricsRenderer"]
