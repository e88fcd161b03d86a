"""Point-in-time connection pool statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PoolStats:
    """Snapshot returned by ``ConnectionPool.stat()``.

    Only valid at the instant it was read; collectors must not keep it
    across cycles.

    Attributes:
        size: Maximum number of persistent connections the pool holds.
        connections: Connections currently created (busy + dead + idle).
        busy: Connections checked out and in use.
        dead: Connections checked out but invalidated and not yet returned.
        idle: Connections available for checkout.
        waiting: Threads blocked waiting for a connection.
        checkout_timeout: Seconds a checkout waits before giving up.
    """

    size: int
    connections: int
    busy: int
    dead: int
    idle: int
    waiting: int
    checkout_timeout: float
