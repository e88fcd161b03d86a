"""Fake QueryMetrics for testing.

Records all calls in memory so tests can assert on recorder behaviour
without reaching into prometheus-client internals.
"""

from dataclasses import dataclass

from dbmetrics.core.query_labels import QueryLabels


@dataclass
class DurationRecord:
    """Single observed query duration."""

    labels: QueryLabels
    seconds: float


class FakeQueryMetrics:
    """In-memory spy implementing the QueryMetrics protocol.

    Usage:
        fake = FakeQueryMetrics()
        recorder = QueryEventRecorder(fake)
        recorder(event)
        assert fake.counts == {labels: 1}
    """

    def __init__(self) -> None:
        self.counts: dict[QueryLabels, int] = {}
        self.durations: list[DurationRecord] = []

    def inc_queries(self, labels: QueryLabels) -> None:
        self.counts[labels] = self.counts.get(labels, 0) + 1

    def observe_duration(self, labels: QueryLabels, seconds: float) -> None:
        self.durations.append(DurationRecord(labels, seconds))

    # -- test helpers --

    @property
    def total_queries(self) -> int:
        return sum(self.counts.values())

    def clear(self) -> None:
        """Reset all recorded state."""
        self.counts.clear()
        self.durations.clear()
