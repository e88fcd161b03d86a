"""SQLAlchemy integration: pool adapters, engine registry and query events."""

from dbmetrics.adapters.sqlalchemy.connection_manager import SqlAlchemyConnectionManager
from dbmetrics.adapters.sqlalchemy.pools import SqlAlchemyConnectionPool
from dbmetrics.adapters.sqlalchemy.query_events import ConnectionRef, SqlAlchemyQueryEventSource

__all__ = [
    "ConnectionRef",
    "SqlAlchemyConnectionManager",
    "SqlAlchemyConnectionPool",
    "SqlAlchemyQueryEventSource",
]
