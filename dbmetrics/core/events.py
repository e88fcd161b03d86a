"""Executed-query event published by the database layer."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

QUERY_EVENT = "sql.query"


@dataclass(frozen=True)
class QueryEvent:
    """One executed SQL statement.

    ``payload`` carries ``connection`` (an object exposing ``.pool``),
    ``name`` (free-text query kind), the optional ``cached`` and ``async``
    flags, and ``duration`` in milliseconds.  Publishers may omit any key;
    consumers must treat a missing key as absent.
    """

    name: str = QUERY_EVENT
    payload: Mapping[str, Any] = field(default_factory=dict)
