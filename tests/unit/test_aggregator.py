"""Tests for the window owner component."""

import threading
from decimal import Decimal

from processor.aggregator import StatisticsAggregator
from processor.statistics import Statistics
from tests.factories import tick


class TestStatisticsAggregator:
    def test_starts_empty(self):
        agg = StatisticsAggregator()
        assert agg.statistics(0) == Statistics.EMPTY
        assert agg.snapshot.start_timestamp == 0

    def test_add_fresh_tick(self):
        agg = StatisticsAggregator()
        assert agg.add(tick(1000, 10), 1000) is True
        assert agg.statistics(1000).count == 1

    def test_add_stale_tick_rejected(self):
        agg = StatisticsAggregator()
        assert agg.add(tick(1000, 10), 100_000) is False
        assert agg.statistics(100_000) == Statistics.EMPTY

    def test_snapshot_replaced_on_update(self):
        agg = StatisticsAggregator()
        before = agg.snapshot
        agg.add(tick(1000, 10), 1000)
        assert agg.snapshot is not before

    def test_statistics_expire_without_new_ticks(self):
        agg = StatisticsAggregator()
        agg.add(tick(0, 10), 0)
        agg.add(tick(30_000, 4), 30_000)
        assert agg.statistics(30_000) == Statistics.of(Decimal(4), Decimal(10), Decimal(14), 2)
        assert agg.statistics(70_000) == Statistics.of(Decimal(4), Decimal(4), Decimal(4), 1)
        assert agg.statistics(200_000) == Statistics.EMPTY

    def test_refresh_returns_current_snapshot(self):
        agg = StatisticsAggregator()
        agg.add(tick(0, 10), 0)
        snapshot = agg.refresh(61_000)
        assert snapshot is agg.snapshot
        assert len(snapshot.ticks) == 0

    def test_concurrent_writers(self):
        agg = StatisticsAggregator()
        now = 1_000_000

        def writer(offset):
            for i in range(500):
                agg.add(tick(now - i * 10 - offset, i % 17), now)

        threads = [threading.Thread(target=writer, args=(o,)) for o in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        stats = agg.statistics(now)
        assert stats == Statistics.calculate(agg.snapshot.ticks)
        assert stats.count == len({now - i * 10 - o for i in range(500) for o in range(4)})

    def test_window_metrics(self):
        agg = StatisticsAggregator()
        agg.add(tick(0, 10), 0)
        agg.add(tick(30_000, 4), 30_000)
        assert agg.window_metrics(30_000) == (2, True)
        assert agg.window_metrics(70_000) == (2, False)

    def test_window_metrics_waits_for_writer(self):
        agg = StatisticsAggregator()
        agg.add(tick(0, 10), 0)
        result = []

        with agg._lock:
            reader = threading.Thread(target=lambda: result.append(agg.window_metrics(0)))
            reader.start()
            reader.join(timeout=0.2)
            assert reader.is_alive()
            assert result == []

        reader.join(timeout=5)
        assert result == [(1, True)]
