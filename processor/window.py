"""
Sliding 60s window over ticks with incrementally maintained statistics.

Every update returns a new StatisticsSnapshot. The ordered tick collection is
handed from the old snapshot to the new one and mutated in place, so a
superseded snapshot must not be used again.
"""

import bisect
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator

from processor.statistics import EXACT, Statistics
from processor.tick import WINDOW_MS, Tick


class TickSeries:
    """Ticks ordered by timestamp, one per timestamp (last write wins)."""

    __slots__ = ("_timestamps", "_ticks")

    def __init__(self):
        self._timestamps: list[int] = []
        self._ticks: dict[int, Tick] = {}

    def add(self, tick: Tick) -> Tick | None:
        """Insert `tick`, returning the tick it replaced at the same timestamp, if any."""
        replaced = self._ticks.get(tick.timestamp)
        if replaced is None:
            bisect.insort(self._timestamps, tick.timestamp)
        self._ticks[tick.timestamp] = tick
        return replaced

    def evict_before(self, threshold: int) -> list[Tick]:
        """Remove and return, oldest first, every tick with timestamp < threshold."""
        cut = bisect.bisect_left(self._timestamps, threshold)
        if cut == 0:
            return []
        expired = [self._ticks.pop(ts) for ts in self._timestamps[:cut]]
        del self._timestamps[:cut]
        return expired

    def first(self) -> Tick | None:
        if not self._timestamps:
            return None
        return self._ticks[self._timestamps[0]]

    def __len__(self) -> int:
        return len(self._timestamps)

    def __iter__(self) -> Iterator[Tick]:
        return (self._ticks[ts] for ts in self._timestamps)

    def __repr__(self) -> str:
        return f"TickSeries(size={len(self)})"


@dataclass(frozen=True)
class StatisticsSnapshot:
    statistics: Statistics
    ticks: TickSeries
    start_timestamp: int

    @classmethod
    def _of(cls, statistics: Statistics, ticks: TickSeries) -> "StatisticsSnapshot":
        first = ticks.first()
        return cls(
            statistics=statistics,
            ticks=ticks,
            start_timestamp=0 if first is None else first.timestamp,
        )

    def is_fresh(self, current_timestamp: int) -> bool:
        """True if non-empty and the oldest live tick has not expired yet."""
        return len(self.ticks) > 0 and current_timestamp - WINDOW_MS <= self.start_timestamp

    def with_tick(self, current_timestamp: int, tick: Tick | None) -> "StatisticsSnapshot":
        """Admit one tick. Missing or stale ticks leave the snapshot untouched."""
        if tick is None or not tick.is_fresh(current_timestamp):
            return self

        replaced = self.ticks.add(tick)

        # both evaluated against the statistics before eviction
        was_fresh = self.is_fresh(current_timestamp)
        tick_is_edge = self.statistics.is_edge(tick)

        evicted_sum, force_recalculation = self._evict(current_timestamp)

        if force_recalculation or replaced is not None:
            statistics = Statistics.calculate(self.ticks)
        elif was_fresh or tick_is_edge:
            statistics = self.statistics.with_tick(tick, evicted_sum, len(self.ticks))
        else:
            # TODO: evicting only non-edge ticks leaves min/max valid here too;
            # subtract evicted_sum like recalculate() does instead of rescanning.
            statistics = Statistics.calculate(self.ticks)

        return StatisticsSnapshot._of(statistics, self.ticks)

    def recalculate(self, current_timestamp: int) -> "StatisticsSnapshot":
        """Evict expired ticks without admitting a new one."""
        if len(self.ticks) == 0 or self.is_fresh(current_timestamp):
            return self

        evicted_sum, force_recalculation = self._evict(current_timestamp)

        if force_recalculation:
            statistics = Statistics.calculate(self.ticks)
        else:
            statistics = Statistics.of(
                self.statistics.min_val,
                self.statistics.max_val,
                EXACT.subtract(self.statistics.total, evicted_sum),
                len(self.ticks),
            )

        return StatisticsSnapshot._of(statistics, self.ticks)

    def _evict(self, current_timestamp: int) -> tuple[Decimal, bool]:
        """Drop expired ticks; returns (sum of their prices, whether any was a min/max edge)."""
        evicted_sum = Decimal(0)
        force_recalculation = False
        for expired in self.ticks.evict_before(current_timestamp - WINDOW_MS):
            evicted_sum = EXACT.add(evicted_sum, expired.price)
            force_recalculation = force_recalculation or self.statistics.is_edge(expired)
        return evicted_sum, force_recalculation


def new_instance() -> StatisticsSnapshot:
    """Empty snapshot: no ticks, empty statistics, start timestamp 0."""
    return StatisticsSnapshot(statistics=Statistics.EMPTY, ticks=TickSeries(), start_timestamp=0)
