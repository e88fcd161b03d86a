"""Collect connection pool gauges at scrape time.

``collect()`` is the collection hook: the metrics renderer calls it right
before serializing, so gauges always reflect the pools as of the scrape.
Every pool is read before any gauge is written; a failure anywhere aborts
the cycle without publishing a partial snapshot.
"""

from dbmetrics.core.exceptions import PoolCollectionError
from dbmetrics.core.logging import logger
from dbmetrics.core.pool_names import resolve_pool_name
from dbmetrics.core.pool_stats import PoolStats
from dbmetrics.core.protocols.connection_pools import ConnectionManager
from dbmetrics.core.protocols.db_pool_metrics import DbPoolMetrics


class PoolSnapshotCollector:
    """Snapshot every live connection pool into the pool gauges."""

    def __init__(self, manager: ConnectionManager, metrics: DbPoolMetrics) -> None:
        self._manager = manager
        self._metrics = metrics
        self._logger = logger.with_context(component="pool_collector")

    def collect(self) -> None:
        """Read each pool once and publish its gauges.

        Raises:
            PoolCollectionError: A pool exposes no name or its ``stat()`` failed.
            Exception: Whatever ``list_pools()`` raised.
        """
        snapshots: list[tuple[str, PoolStats]] = []

        for pool in self._manager.list_pools():
            try:
                name = resolve_pool_name(pool)
            except Exception as e:
                raise PoolCollectionError(f"Failed to resolve config name of pool {pool!r}") from e
            if name is None:
                raise PoolCollectionError(f"Connection pool {pool!r} exposes no config name")
            try:
                stats = pool.stat()
            except Exception as e:
                self._logger.error(f"Failed to read stats for pool '{name}': {e}")
                raise PoolCollectionError(
                    f"Failed to read stats for pool '{name}'", config=name
                ) from e
            snapshots.append((name, stats))

        for name, stats in snapshots:
            self._metrics.update(config=name, stats=stats)

        self._logger.debug(f"Collected {len(snapshots)} connection pool snapshot(s)")

    def __call__(self) -> None:
        self.collect()
