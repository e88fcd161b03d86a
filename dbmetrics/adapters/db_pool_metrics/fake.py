"""Fake DbPoolMetrics for testing.

Records every ``update()`` so tests can assert on pool gauge values without
reaching into prometheus-client internals.
"""

from dbmetrics.core.pool_stats import PoolStats


class FakeDbPoolMetrics:
    """In-memory spy implementing the DbPoolMetrics protocol.

    Usage:
        fake = FakeDbPoolMetrics()
        fake.update(config="primary", stats=stats)
        assert fake.latest["primary"] == stats
    """

    def __init__(self) -> None:
        self.updates: list[tuple[str, PoolStats]] = []

    def update(self, *, config: str, stats: PoolStats) -> None:
        self.updates.append((config, stats))

    # -- test helpers --

    @property
    def latest(self) -> dict[str, PoolStats]:
        """Most recent snapshot per config name."""
        return dict(self.updates)

    @property
    def update_count(self) -> int:
        return len(self.updates)

    def clear(self) -> None:
        """Reset all recorded state."""
        self.updates.clear()
