"""Bridge executed-query events to the query counter and duration histogram."""

from numbers import Real

from dbmetrics.core.config import settings
from dbmetrics.core.events import QueryEvent
from dbmetrics.core.logging import logger
from dbmetrics.core.protocols.event_bus import EventBus
from dbmetrics.core.protocols.query_metrics import QueryMetrics
from dbmetrics.core.query_labels import extract_labels

# Prometheus default latency buckets, extended up to six hours for
# pathologically slow queries.
LONG_RUNNING_QUERY_BUCKETS = (
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1,
    2.5,
    5,
    10,
    30,
    60,
    120,
    300,
    1800,
    3600,
    21_600,
)


def duration_seconds(duration_ms: float) -> float:
    """Convert a millisecond duration to seconds at millisecond precision."""
    return round(float(duration_ms) / 1000, 3)


class QueryEventRecorder:
    """Event handler recording one count and one duration per attributable query.

    Instances hold no mutable state and may be invoked concurrently from any
    number of threads; thread safety of the updates is the metrics backend's.
    """

    def __init__(self, metrics: QueryMetrics, channel: str | None = None) -> None:
        self._metrics = metrics
        self._channel = channel or settings.QUERY_EVENT_CHANNEL
        self._logger = logger.with_context(component="query_recorder", channel=self._channel)

    @property
    def channel(self) -> str:
        return self._channel

    def subscribe(self, bus: EventBus) -> None:
        """Start receiving events from *bus*."""
        bus.subscribe(self._channel, self)

    def unsubscribe(self, bus: EventBus) -> None:
        """Stop receiving events from *bus*."""
        bus.unsubscribe(self._channel, self)

    def __call__(self, event: QueryEvent) -> None:
        self.record(event)

    def record(self, event: QueryEvent) -> None:
        """Record *event*; unattributable or malformed events are dropped."""
        labels = extract_labels(event)
        if labels is None:
            return

        duration = event.payload.get("duration")
        if isinstance(duration, bool) or not isinstance(duration, Real):
            self._logger.debug(f"Dropping query event with invalid duration {duration!r}")
            return

        try:
            self._metrics.inc_queries(labels)
            self._metrics.observe_duration(labels, duration_seconds(duration))
        except Exception as e:
            self._logger.warning(f"Failed to record query metrics: {e}")
