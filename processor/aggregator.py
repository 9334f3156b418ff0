"""Owner of the live statistics window for the tracked tick series."""

import threading

from config import configure_logging
from processor.statistics import Statistics
from processor.tick import Tick
from processor.window import StatisticsSnapshot, new_instance


class StatisticsAggregator:
    """
    Holds the one current StatisticsSnapshot and replaces it on every update.

    All updates run under a single lock: the window's tick collection is mutated
    in place, so admissions and refreshes for the series must never interleave.
    """

    def __init__(self, log_level: str = "INFO"):
        self.log = configure_logging("aggregator", log_level)
        self._lock = threading.Lock()
        self._snapshot = new_instance()

    def add(self, tick: Tick, current_timestamp: int) -> bool:
        """Offer a tick to the window. Returns False if it was too old to count."""
        if not tick.is_fresh(current_timestamp):
            self.log.debug(
                "stale_tick_dropped",
                tick_timestamp=tick.timestamp,
                current_timestamp=current_timestamp,
            )
            return False

        with self._lock:
            self._snapshot = self._snapshot.with_tick(current_timestamp, tick)
        return True

    def refresh(self, current_timestamp: int) -> StatisticsSnapshot:
        """Expire ticks that fell out of the window and return the resulting snapshot."""
        with self._lock:
            self._snapshot = self._snapshot.recalculate(current_timestamp)
            return self._snapshot

    def statistics(self, current_timestamp: int) -> Statistics:
        return self.refresh(current_timestamp).statistics

    @property
    def snapshot(self) -> StatisticsSnapshot:
        return self._snapshot

    def window_metrics(self, current_timestamp: int) -> tuple[int, bool]:
        """(live tick count, freshness) read together under the lock."""
        with self._lock:
            snapshot = self._snapshot
            return len(snapshot.ticks), snapshot.is_fresh(current_timestamp)
