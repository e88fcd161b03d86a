"""Unit tests for the pool snapshot collector."""

from types import SimpleNamespace

import pytest

from dbmetrics.adapters.db_pool_metrics import FakeDbPoolMetrics
from dbmetrics.core.exceptions import PoolCollectionError
from dbmetrics.core.pool_collector import PoolSnapshotCollector
from dbmetrics.core.pool_stats import PoolStats

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

PRIMARY_STATS = PoolStats(
    size=5, connections=3, busy=2, dead=0, idle=1, waiting=0, checkout_timeout=5.0
)


class FakePool:
    """Pool stub that fails if ``stat()`` is read more than once per cycle."""

    def __init__(self, name: str, stats: PoolStats = PRIMARY_STATS, shape: str = "db_config") -> None:
        setattr(self, shape, SimpleNamespace(name=name))
        self._stats = stats
        self.stat_calls = 0

    def stat(self) -> PoolStats:
        self.stat_calls += 1
        if self.stat_calls > 1:
            raise AssertionError("stat() read more than once in a cycle")
        return self._stats

    def new_cycle(self) -> None:
        self.stat_calls = 0


class BrokenPool(FakePool):
    """Pool whose stats cannot be read."""

    def stat(self) -> PoolStats:
        raise RuntimeError("pool gone")


class FakeConnectionManager:
    def __init__(self, pools) -> None:
        self.pools = list(pools)

    def list_pools(self):
        return list(self.pools)


class BrokenConnectionManager:
    def list_pools(self):
        raise RuntimeError("connection handler unavailable")


# ---------------------------------------------------------------------------
# PoolSnapshotCollector
# ---------------------------------------------------------------------------


class TestPoolSnapshotCollector:
    """Tests for the collector using FakeDbPoolMetrics."""

    def test_scenario_primary(self):
        fake = FakeDbPoolMetrics()
        collector = PoolSnapshotCollector(FakeConnectionManager([FakePool("primary")]), fake)

        collector.collect()

        assert fake.updates == [("primary", PRIMARY_STATS)]

    def test_one_update_and_one_stat_per_pool(self):
        pools = [FakePool(f"db{i}") for i in range(4)]
        fake = FakeDbPoolMetrics()
        collector = PoolSnapshotCollector(FakeConnectionManager(pools), fake)

        collector.collect()

        assert fake.update_count == 4
        assert sorted(fake.latest) == ["db0", "db1", "db2", "db3"]
        assert all(pool.stat_calls == 1 for pool in pools)

    def test_legacy_spec_pool_name(self):
        fake = FakeDbPoolMetrics()
        pool = FakePool("legacy", shape="spec")
        collector = PoolSnapshotCollector(FakeConnectionManager([pool]), fake)

        collector.collect()

        assert list(fake.latest) == ["legacy"]

    def test_no_pools_publishes_nothing(self):
        fake = FakeDbPoolMetrics()
        PoolSnapshotCollector(FakeConnectionManager([]), fake).collect()

        assert fake.update_count == 0

    def test_repeated_cycles_publish_latest(self):
        pool = FakePool("primary")
        fake = FakeDbPoolMetrics()
        manager = FakeConnectionManager([pool])
        collector = PoolSnapshotCollector(manager, fake)

        collector.collect()
        pool.new_cycle()
        pool._stats = PoolStats(
            size=5, connections=5, busy=5, dead=0, idle=0, waiting=2, checkout_timeout=5.0
        )
        collector.collect()

        assert fake.update_count == 2
        assert fake.latest["primary"].waiting == 2

    def test_callable_as_collection_hook(self):
        fake = FakeDbPoolMetrics()
        collector = PoolSnapshotCollector(FakeConnectionManager([FakePool("primary")]), fake)

        collector()

        assert fake.update_count == 1


class TestPoolSnapshotCollectorFailures:
    """Failures abort the whole cycle."""

    def test_stat_failure_propagates_without_partial_publish(self):
        fake = FakeDbPoolMetrics()
        pools = [FakePool("primary"), BrokenPool("replica")]
        collector = PoolSnapshotCollector(FakeConnectionManager(pools), fake)

        with pytest.raises(PoolCollectionError) as exc_info:
            collector.collect()

        assert exc_info.value.config == "replica"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert fake.update_count == 0

    def test_list_pools_failure_propagates(self):
        fake = FakeDbPoolMetrics()
        collector = PoolSnapshotCollector(BrokenConnectionManager(), fake)

        with pytest.raises(RuntimeError, match="connection handler unavailable"):
            collector.collect()

        assert fake.update_count == 0

    def test_unnamed_pool_is_an_error(self):
        class Unnamed:
            def stat(self):
                return PRIMARY_STATS

        fake = FakeDbPoolMetrics()
        collector = PoolSnapshotCollector(FakeConnectionManager([Unnamed()]), fake)

        with pytest.raises(PoolCollectionError):
            collector.collect()

        assert fake.update_count == 0

    def test_name_resolution_failure_is_a_collection_error(self):
        fake = FakeDbPoolMetrics()
        pool = FakePool("primary")
        pool.db_config = None
        collector = PoolSnapshotCollector(FakeConnectionManager([pool]), fake)

        with pytest.raises(PoolCollectionError) as exc_info:
            collector.collect()

        assert isinstance(exc_info.value.__cause__, AttributeError)
        assert pool.stat_calls == 0
        assert fake.update_count == 0
