"""QueryMetrics protocol for per-query instrumentation.

Abstracts the query counter and duration histogram so the recorder depends
on a protocol rather than a concrete library.  Production uses Prometheus;
tests inject a fake that records calls in memory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from dbmetrics.core.query_labels import QueryLabels


@runtime_checkable
class QueryMetrics(Protocol):
    """Protocol for query counter and latency histogram updates."""

    def inc_queries(self, labels: QueryLabels) -> None:
        """Count one executed query under *labels*."""
        ...

    def observe_duration(self, labels: QueryLabels, seconds: float) -> None:
        """Record one query duration observation.

        Args:
            labels: Label set produced by ``extract_labels``.
            seconds: Query duration in seconds, millisecond precision.
        """
        ...
