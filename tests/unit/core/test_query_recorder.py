"""Unit tests for the query event recorder."""

import threading
from types import SimpleNamespace

import pytest

from dbmetrics.adapters.event_bus import FakeEventBus
from dbmetrics.adapters.query_metrics import FakeQueryMetrics
from dbmetrics.core.events import QUERY_EVENT, QueryEvent
from dbmetrics.core.null_pool import NullConnectionPool
from dbmetrics.core.query_labels import QueryLabels
from dbmetrics.core.query_recorder import (
    LONG_RUNNING_QUERY_BUCKETS,
    QueryEventRecorder,
    duration_seconds,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def pool_named(name: str) -> SimpleNamespace:
    return SimpleNamespace(db_config=SimpleNamespace(name=name))


def make_event(pool, **payload) -> QueryEvent:
    return QueryEvent(payload={"connection": SimpleNamespace(pool=pool), **payload})


class BrokenQueryMetrics:
    """QueryMetrics whose backend is gone."""

    def inc_queries(self, labels):
        raise RuntimeError("registry gone")

    def observe_duration(self, labels, seconds):
        raise RuntimeError("registry gone")


@pytest.fixture
def fake_metrics():
    return FakeQueryMetrics()


@pytest.fixture
def recorder(fake_metrics):
    return QueryEventRecorder(fake_metrics, channel=QUERY_EVENT)


# ---------------------------------------------------------------------------
# duration_seconds
# ---------------------------------------------------------------------------


class TestDurationSeconds:
    def test_rounds_to_milliseconds(self):
        assert duration_seconds(1234.5678) == 1.235

    def test_sub_millisecond_rounds_to_zero(self):
        assert duration_seconds(0.2) == 0.0

    def test_whole_milliseconds(self):
        assert duration_seconds(12.0) == 0.012


# ---------------------------------------------------------------------------
# QueryEventRecorder
# ---------------------------------------------------------------------------


class TestQueryEventRecorder:
    """Tests for the recorder using FakeQueryMetrics."""

    def test_scenario_user_load(self, recorder, fake_metrics):
        recorder(make_event(pool_named("A"), name="User Load", cached=None, duration=12.0))

        labels = QueryLabels(config="A", kind="User Load", cached=False, async_=False)
        assert fake_metrics.counts == {labels: 1}
        assert len(fake_metrics.durations) == 1
        assert fake_metrics.durations[0].labels == labels
        assert fake_metrics.durations[0].seconds == 0.012

    def test_one_count_and_one_observation_per_event(self, recorder, fake_metrics):
        for _ in range(3):
            recorder(make_event(pool_named("A"), name="User Load", duration=5.0))

        assert fake_metrics.total_queries == 3
        assert len(fake_metrics.durations) == 3

    def test_cached_false_still_labels_cached(self, recorder, fake_metrics):
        recorder(make_event(pool_named("A"), name="User Load", cached=False, duration=1.0))

        (labels,) = fake_metrics.counts
        assert labels.cached is True

    def test_duration_rounding(self, recorder, fake_metrics):
        recorder(make_event(pool_named("A"), name="x", duration=1234.5678))

        assert fake_metrics.durations[0].seconds == 1.235

    def test_distinct_labels_counted_separately(self, recorder, fake_metrics):
        recorder(make_event(pool_named("primary"), name="User Load", duration=1.0))
        recorder(make_event(pool_named("replica"), name="User Load", duration=1.0))
        recorder(make_event(pool_named("primary"), name="User Load", duration=1.0))

        assert {labels.config: count for labels, count in fake_metrics.counts.items()} == {
            "primary": 2,
            "replica": 1,
        }

    def test_null_pool_records_nothing(self, recorder, fake_metrics):
        recorder(make_event(NullConnectionPool("primary"), name="x", duration=1.0))

        assert fake_metrics.counts == {}
        assert fake_metrics.durations == []

    def test_missing_pool_records_nothing(self, recorder, fake_metrics):
        recorder(make_event(None, name="x", duration=1.0))
        recorder(QueryEvent(payload={"name": "x", "duration": 1.0}))

        assert fake_metrics.total_queries == 0

    @pytest.mark.parametrize("duration", [None, "12", True])
    def test_invalid_duration_records_nothing(self, recorder, fake_metrics, duration):
        recorder(make_event(pool_named("A"), name="x", duration=duration))

        assert fake_metrics.total_queries == 0
        assert fake_metrics.durations == []

    def test_backend_failure_does_not_raise(self):
        recorder = QueryEventRecorder(BrokenQueryMetrics())

        recorder(make_event(pool_named("A"), name="x", duration=1.0))

    def test_concurrent_events(self, recorder, fake_metrics):
        """Events from many threads are each recorded once."""
        lock = threading.Lock()
        original = fake_metrics.inc_queries

        def locked_inc(labels):
            with lock:
                original(labels)

        fake_metrics.inc_queries = locked_inc

        def worker():
            for _ in range(50):
                recorder(make_event(pool_named("A"), name="x", duration=1.0))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert fake_metrics.total_queries == 400


class TestQueryEventRecorderSubscription:
    """Subscription lifecycle against the event bus."""

    def test_subscribe_receives_published_events(self, recorder, fake_metrics):
        bus = FakeEventBus()
        recorder.subscribe(bus)

        bus.publish(QUERY_EVENT, make_event(pool_named("A"), name="x", duration=1.0))

        assert fake_metrics.total_queries == 1

    def test_other_channels_are_ignored(self, recorder, fake_metrics):
        bus = FakeEventBus()
        recorder.subscribe(bus)

        bus.publish("cache.read", make_event(pool_named("A"), name="x", duration=1.0))

        assert fake_metrics.total_queries == 0

    def test_unsubscribe_stops_recording(self, recorder, fake_metrics):
        bus = FakeEventBus()
        recorder.subscribe(bus)
        recorder.unsubscribe(bus)

        bus.publish(QUERY_EVENT, make_event(pool_named("A"), name="x", duration=1.0))

        assert fake_metrics.total_queries == 0


def test_bucket_boundaries():
    assert LONG_RUNNING_QUERY_BUCKETS == (
        0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10,
        30, 60, 120, 300, 1800, 3600, 21600,
    )
