"""Null-pool sentinel.

A null pool holds no connections of its own, so queries that run through it
cannot be attributed to a connection pool and are not recorded.
"""

from typing import Any

from sqlalchemy.pool import NullPool

from dbmetrics.core.pool_names import DbConfig


class NullConnectionPool:
    """Stand-in pool for configurations that keep no pooled connections."""

    def __init__(self, name: str) -> None:
        self.db_config = DbConfig(name=name)

    def __repr__(self) -> str:
        return f"NullConnectionPool({self.db_config.name!r})"


def is_null_pool(pool: Any) -> bool:
    """True for the ``NullConnectionPool`` sentinel and raw SQLAlchemy ``NullPool``."""
    return isinstance(pool, (NullConnectionPool, NullPool))
