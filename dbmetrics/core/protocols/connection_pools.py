"""Protocols for the connection pools the collector reads.

A pool names its connection configuration through one of two shapes:
``pool.db_config.name`` (structured config) or ``pool.spec.name`` (legacy
spec).  ``dbmetrics.core.pool_names`` hides the difference behind
``HasConfigName``.
"""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from dbmetrics.core.pool_stats import PoolStats


@runtime_checkable
class HasConfigName(Protocol):
    """Anything that can report a connection configuration name."""

    def name(self) -> str: ...


@runtime_checkable
class ConnectionPool(Protocol):
    """Read surface of a connection pool."""

    def stat(self) -> PoolStats:
        """Return a point-in-time statistics snapshot.

        Raises:
            Any exception on failure; the collector propagates it.
        """
        ...


@runtime_checkable
class ConnectionManager(Protocol):
    """Enumerates the live connection pools of the process."""

    def list_pools(self) -> Sequence[Any]:
        """Return every live pool that can report ``stat()``."""
        ...
