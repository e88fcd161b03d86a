"""Publish one ``QueryEvent`` per statement executed on an instrumented engine.

Cursor-execute listeners time each statement on the executing thread and
publish the event synchronously.  Statements that fail are published too,
with the exception class in the payload.  Publishing never raises into the
query: a failing subscriber is logged and ignored.
"""

import threading
import time
from dataclasses import dataclass
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Connection, Engine

from dbmetrics.adapters.sqlalchemy.connection_manager import SqlAlchemyConnectionManager, sync_engine_of
from dbmetrics.core.config import settings
from dbmetrics.core.events import QueryEvent
from dbmetrics.core.logging import logger
from dbmetrics.core.protocols.event_bus import EventBus

_START_TIMES_KEY = "dbmetrics_query_start_times"

# Execution options an application can set to describe a statement.
QUERY_NAME_OPTION = "query_name"
QUERY_CACHED_OPTION = "query_cached"


@dataclass(frozen=True)
class ConnectionRef:
    """Handle to the pool that served a statement (``None`` if unregistered)."""

    pool: Any


def statement_kind(statement: str | None) -> str:
    """First SQL keyword of *statement*, upper-cased (``"SELECT"``, ``"INSERT"``, ...)."""
    if not statement:
        return ""
    words = statement.lstrip().split(None, 1)
    return words[0].upper() if words else ""


class SqlAlchemyQueryEventSource:
    """Instruments engines so every executed statement is published on the bus."""

    def __init__(
        self,
        bus: EventBus,
        manager: SqlAlchemyConnectionManager,
        channel: str | None = None,
    ) -> None:
        self._bus = bus
        self._manager = manager
        self._channel = channel or settings.QUERY_EVENT_CHANNEL
        self._lock = threading.Lock()
        self._instrumented: set[Engine] = set()
        self._logger = logger.with_context(component="query_events", channel=self._channel)

    def instrument(self, engine: Any) -> None:
        """Attach listeners to *engine* (sync or async).  Idempotent."""
        sync_engine = sync_engine_of(engine)
        with self._lock:
            if sync_engine in self._instrumented:
                return
            event.listen(sync_engine, "before_cursor_execute", self._before_cursor_execute)
            event.listen(sync_engine, "after_cursor_execute", self._after_cursor_execute)
            event.listen(sync_engine, "handle_error", self._handle_error)
            self._instrumented.add(sync_engine)

    def uninstrument(self, engine: Any) -> None:
        """Detach listeners from *engine*.  Engines never instrumented are ignored."""
        sync_engine = sync_engine_of(engine)
        with self._lock:
            if sync_engine not in self._instrumented:
                return
            event.remove(sync_engine, "before_cursor_execute", self._before_cursor_execute)
            event.remove(sync_engine, "after_cursor_execute", self._after_cursor_execute)
            event.remove(sync_engine, "handle_error", self._handle_error)
            self._instrumented.discard(sync_engine)

    def uninstrument_all(self) -> None:
        with self._lock:
            engines = list(self._instrumented)
        for sync_engine in engines:
            self.uninstrument(sync_engine)

    def is_instrumented(self, engine: Any) -> bool:
        with self._lock:
            return sync_engine_of(engine) in self._instrumented

    # -- engine event listeners --

    def _before_cursor_execute(
        self,
        conn: Connection,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        conn.info.setdefault(_START_TIMES_KEY, []).append(time.perf_counter())

    def _after_cursor_execute(
        self,
        conn: Connection,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        self._publish(conn, statement, context)

    def _handle_error(self, exception_context: Any) -> None:
        conn = exception_context.connection
        if conn is None:
            return
        self._publish(
            conn,
            exception_context.statement,
            exception_context.execution_context,
            exception=exception_context.original_exception,
        )

    def _publish(
        self,
        conn: Connection,
        statement: str | None,
        context: Any,
        exception: BaseException | None = None,
    ) -> None:
        start_times = conn.info.get(_START_TIMES_KEY)
        if not start_times:
            return
        duration_ms = (time.perf_counter() - start_times.pop()) * 1000

        try:
            options = context.execution_options if context is not None else conn.get_execution_options()
            payload: dict[str, Any] = {
                "connection": ConnectionRef(pool=self._manager.pool_for(conn.engine)),
                "name": options.get(QUERY_NAME_OPTION) or statement_kind(statement),
                "sql": statement,
                "duration": duration_ms,
            }
            if options.get(QUERY_CACHED_OPTION):
                payload["cached"] = True
            if conn.dialect.is_async:
                payload["async"] = True
            if exception is not None:
                payload["exception"] = type(exception).__name__

            self._bus.publish(self._channel, QueryEvent(name=self._channel, payload=payload))
        except Exception as e:
            self._logger.warning(f"Failed to publish query event: {e}")
