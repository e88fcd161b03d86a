"""Exceptions raised by the metrics instrumentation."""


class DbMetricsError(Exception):
    """Base class for all dbmetrics errors."""


class PoolCollectionError(DbMetricsError):
    """A collection cycle could not read a connection pool.

    Raised out of ``PoolSnapshotCollector.collect()``; no gauges are
    published for the failed cycle.
    """

    def __init__(self, message: str, *, config: str | None = None) -> None:
        super().__init__(message)
        self.config = config


class UnsupportedPoolError(DbMetricsError):
    """An engine's pool class cannot report connection statistics."""


class DuplicatePoolError(DbMetricsError):
    """A connection configuration name is already registered."""
