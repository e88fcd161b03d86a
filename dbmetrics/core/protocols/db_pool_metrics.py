"""DbPoolMetrics protocol for database connection pool instrumentation.

Abstracts pool-gauge publication so the collector depends on a protocol
rather than a concrete library.  Production uses Prometheus; tests inject a
fake that records every update in memory.
"""

from typing import Protocol, runtime_checkable

from dbmetrics.core.pool_stats import PoolStats


@runtime_checkable
class DbPoolMetrics(Protocol):
    """Protocol for database connection pool metrics collection."""

    def update(self, *, config: str, stats: PoolStats) -> None:
        """Publish one pool's snapshot from a single collection cycle.

        Args:
            config: Connection configuration name, used as the ``config`` label.
            stats: Statistics read from the pool in this cycle.
        """
        ...
