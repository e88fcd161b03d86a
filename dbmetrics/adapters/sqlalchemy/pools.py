"""ConnectionPool adapter over a SQLAlchemy ``QueuePool``.

``QueuePool`` reports checked-in and checked-out counts directly.  It has no
notion of a dead connection, so the adapter counts connections that were
invalidated (usually softly) while still checked out, using pool events.
Waiting threads are read from the pool's internal queue when it exposes them.
"""

import threading
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from dbmetrics.core.exceptions import UnsupportedPoolError
from dbmetrics.core.pool_names import DbConfig
from dbmetrics.core.pool_stats import PoolStats


def _waiting_threads(pool: QueuePool) -> int:
    """Best-effort count of threads blocked on checkout; 0 when not exposed."""
    queue = getattr(pool, "_pool", None)
    condition = getattr(queue, "not_empty", None)
    waiters = getattr(condition, "_waiters", None)
    if waiters is None:
        return 0
    return len(waiters)


class SqlAlchemyConnectionPool:
    """Named ``ConnectionPool`` over an engine's ``QueuePool``.

    The engine's current pool is read on every ``stat()``; ``Engine.dispose()``
    swaps in a new pool that inherits the event listeners, so the adapter
    survives it.
    """

    def __init__(self, name: str, engine: Engine) -> None:
        if not isinstance(engine.pool, QueuePool):
            raise UnsupportedPoolError(
                f"Engine for '{name}' uses {type(engine.pool).__name__}, "
                "which does not report connection statistics"
            )
        self.db_config = DbConfig(name=name)
        self.engine = engine
        self._lock = threading.Lock()
        self._checked_out: set[int] = set()
        self._dead: set[int] = set()
        self._listeners = (
            ("checkout", self._on_checkout),
            ("checkin", self._on_checkin),
            ("invalidate", self._on_invalidate),
            ("soft_invalidate", self._on_invalidate),
            ("detach", self._on_detach),
        )
        self._attached = False

    @property
    def pool(self) -> QueuePool:
        return self.engine.pool

    def attach(self) -> None:
        """Start tracking checkouts and invalidations."""
        if self._attached:
            return
        for identifier, fn in self._listeners:
            event.listen(self.engine, identifier, fn)
        self._attached = True

    def detach(self) -> None:
        """Stop tracking and forget tracked connections."""
        if not self._attached:
            return
        for identifier, fn in self._listeners:
            event.remove(self.engine, identifier, fn)
        self._attached = False
        with self._lock:
            self._checked_out.clear()
            self._dead.clear()

    def stat(self) -> PoolStats:
        pool = self.pool
        checked_out = pool.checkedout()
        idle = pool.checkedin()
        with self._lock:
            dead = min(len(self._dead), checked_out)
        return PoolStats(
            size=pool.size(),
            connections=checked_out + idle,
            busy=checked_out - dead,
            dead=dead,
            idle=idle,
            waiting=_waiting_threads(pool),
            checkout_timeout=float(pool.timeout()),
        )

    # -- pool event listeners --

    def _on_checkout(self, dbapi_connection: Any, connection_record: Any, connection_proxy: Any) -> None:
        with self._lock:
            self._checked_out.add(id(connection_record))

    def _on_checkin(self, dbapi_connection: Any, connection_record: Any) -> None:
        self._forget(connection_record)

    def _on_detach(self, dbapi_connection: Any, connection_record: Any) -> None:
        self._forget(connection_record)

    def _on_invalidate(self, dbapi_connection: Any, connection_record: Any, exception: Any) -> None:
        key = id(connection_record)
        with self._lock:
            if key in self._checked_out:
                self._dead.add(key)

    def _forget(self, connection_record: Any) -> None:
        key = id(connection_record)
        with self._lock:
            self._checked_out.discard(key)
            self._dead.discard(key)

    def __repr__(self) -> str:
        return f"SqlAlchemyConnectionPool({self.db_config.name!r})"
