"""Label extraction for executed-query events."""

from dataclasses import dataclass
from typing import Any

from dbmetrics.core.events import QueryEvent
from dbmetrics.core.logging import logger
from dbmetrics.core.null_pool import is_null_pool
from dbmetrics.core.pool_names import resolve_pool_name

_logger = logger.with_context(component="query_labels")


@dataclass(frozen=True)
class QueryLabels:
    """Label set shared by the query counter and the duration histogram."""

    config: str
    kind: str
    cached: bool
    async_: bool

    def as_prometheus(self) -> dict[str, str]:
        """Render as Prometheus label values."""
        return {
            "config": self.config,
            "kind": self.kind,
            "cached": _bool_label(self.cached),
            "async": _bool_label(self.async_),
        }


def _bool_label(value: bool) -> str:
    return "true" if value else "false"


def extract_labels(event: QueryEvent) -> QueryLabels | None:
    """Derive the label set for *event*.

    Returns ``None`` when the event cannot be attributed to a connection
    pool: no connection, no pool, a null pool, a pool without a resolvable
    name, or any error while resolving it.  ``cached`` and ``async`` are
    true whenever the payload carries a non-``None`` value for them, whatever
    that value is.
    """
    try:
        payload = event.payload
        pool = getattr(payload.get("connection"), "pool", None)
        if pool is None or is_null_pool(pool):
            return None

        config = resolve_pool_name(pool)
        if config is None:
            _logger.debug(f"Dropping query event: pool {pool!r} exposes no config name")
            return None

        return QueryLabels(
            config=config,
            kind=_kind(payload.get("name")),
            cached=payload.get("cached") is not None,
            async_=payload.get("async") is not None,
        )
    except Exception as e:
        _logger.debug(f"Dropping unattributable query event: {e}")
        return None


def _kind(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
