"""Registry of named SQLAlchemy engines.

Each registered engine becomes one connection configuration.  Engines using
``NullPool`` are registered with the ``NullConnectionPool`` sentinel: their
queries are not attributed and they are not listed for collection.
"""

import threading
from typing import Any

from sqlalchemy.engine import Engine
from sqlalchemy.engine.base import OptionEngine
from sqlalchemy.pool import NullPool

from dbmetrics.adapters.sqlalchemy.pools import SqlAlchemyConnectionPool
from dbmetrics.core.exceptions import DuplicatePoolError
from dbmetrics.core.logging import logger
from dbmetrics.core.null_pool import NullConnectionPool

RegisteredPool = SqlAlchemyConnectionPool | NullConnectionPool


def sync_engine_of(engine: Any) -> Engine:
    """Return the base synchronous ``Engine`` behind *engine*.

    Unwraps ``AsyncEngine`` and derived engines created by
    ``Engine.execution_options()``, which proxy their parent.
    """
    engine = getattr(engine, "sync_engine", engine)
    while isinstance(engine, OptionEngine):
        engine = engine._proxied
    return engine


class SqlAlchemyConnectionManager:
    """Thread-safe ``ConnectionManager`` over named engines."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pools: dict[str, RegisteredPool] = {}
        self._by_engine: dict[Engine, RegisteredPool] = {}
        self._logger = logger.with_context(component="connection_manager")

    def register(self, name: str, engine: Any) -> RegisteredPool:
        """Register *engine* (sync or async) under configuration *name*.

        Raises:
            DuplicatePoolError: *name* or *engine* is already registered.
            UnsupportedPoolError: The engine's pool cannot report statistics.
        """
        sync_engine = sync_engine_of(engine)
        with self._lock:
            if name in self._pools:
                raise DuplicatePoolError(f"Connection config '{name}' is already registered")
            if sync_engine in self._by_engine:
                raise DuplicatePoolError(
                    f"Engine is already registered as '{self._by_engine[sync_engine].db_config.name}'"
                )

            pool: RegisteredPool
            if isinstance(sync_engine.pool, NullPool):
                pool = NullConnectionPool(name)
            else:
                pool = SqlAlchemyConnectionPool(name, sync_engine)
                pool.attach()

            self._pools[name] = pool
            self._by_engine[sync_engine] = pool

        self._logger.info(f"Registered connection config '{name}' ({type(pool).__name__})")
        return pool

    def unregister(self, name: str) -> Engine | None:
        """Forget configuration *name* and return its engine (``None`` if unknown)."""
        with self._lock:
            pool = self._pools.pop(name, None)
            if pool is None:
                return None
            engine = next(e for e, p in self._by_engine.items() if p is pool)
            del self._by_engine[engine]
        if isinstance(pool, SqlAlchemyConnectionPool):
            pool.detach()
        self._logger.info(f"Unregistered connection config '{name}'")
        return engine

    def pool_for(self, engine: Any) -> RegisteredPool | None:
        """Return the pool registered for *engine*, or ``None``."""
        with self._lock:
            return self._by_engine.get(sync_engine_of(engine))

    def list_pools(self) -> list[SqlAlchemyConnectionPool]:
        with self._lock:
            return [p for p in self._pools.values() if isinstance(p, SqlAlchemyConnectionPool)]

    def engines(self) -> list[Engine]:
        """Every registered synchronous engine."""
        with self._lock:
            return list(self._by_engine)
