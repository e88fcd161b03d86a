"""Resolve a pool's connection configuration name across both pool shapes.

Pools expose their name either through a structured config
(``pool.db_config.name``) or through a legacy spec (``pool.spec.name``).
``config_name_for`` probes for the structured shape first and returns a
``HasConfigName`` adapter, so callers never branch on the shape themselves.
"""

from dataclasses import dataclass
from typing import Any

from dbmetrics.core.protocols.connection_pools import HasConfigName


@dataclass(frozen=True)
class DbConfig:
    """Structured connection configuration attached to a pool."""

    name: str


class DbConfigName:
    """``HasConfigName`` over ``pool.db_config.name``."""

    def __init__(self, pool: Any) -> None:
        self._pool = pool

    def name(self) -> str:
        return self._pool.db_config.name


class SpecName:
    """``HasConfigName`` over the legacy ``pool.spec.name``."""

    def __init__(self, pool: Any) -> None:
        self._pool = pool

    def name(self) -> str:
        return self._pool.spec.name


def config_name_for(pool: Any) -> HasConfigName | None:
    """Pick the name adapter matching *pool*'s shape, or ``None`` if it has neither."""
    if hasattr(pool, "db_config"):
        return DbConfigName(pool)
    if hasattr(pool, "spec"):
        return SpecName(pool)
    return None


def resolve_pool_name(pool: Any) -> str | None:
    """Return *pool*'s configuration name, or ``None`` when it exposes no name."""
    accessor = config_name_for(pool)
    if accessor is None:
        return None
    return accessor.name()
