"""Stream processor: orchestrates the tick consumer, the statistics window and Redis publishing."""

import threading
import time

from config import Settings, configure_logging
from processor.aggregator import StatisticsAggregator
from processor.consumer import StreamConsumer
from processor.tick import Tick
from producers.schemas import StatisticsView
from storage.cache import StatisticsCache
from storage.redis_client import RedisClient
from storage.tick_store import create_tick_store


def now_ms() -> int:
    return int(time.time() * 1000)


class TickProcessor:
    """
    Wires together: Kafka Consumer → Tick store + Statistics window → Redis.
    A refresh timer expires old ticks even when the feed goes quiet and
    publishes the current statistics.
    """

    def __init__(self, settings: Settings, clock=now_ms):
        self.settings = settings
        self.log = configure_logging("tick-processor", settings.log_level)
        self._clock = clock

        self._aggregator = StatisticsAggregator(settings.log_level)

        # Storage
        self._redis = RedisClient(settings)
        self._store = create_tick_store(settings, self._redis)
        self._cache = StatisticsCache(self._redis)

        # Consumer
        self._consumer = StreamConsumer(settings, handler=self.process_tick)

        # Refresh timer
        self._refresh_running = True
        self._refresh_thread = threading.Thread(
            target=self._refresh_loop, daemon=True
        )

    def process_tick(self, tick: Tick):
        """Persist the tick and offer it to the window."""
        self._store.save(tick)
        if not self._aggregator.add(tick, self._clock()):
            self.log.debug("tick_outside_window", timestamp=tick.timestamp)

    def _refresh_loop(self):
        interval = self.settings.refresh_interval_ms / 1000.0
        while self._refresh_running:
            time.sleep(interval)
            try:
                self.publish_statistics()
            except Exception as e:
                self.log.error("refresh_error", error=str(e))

    def publish_statistics(self) -> StatisticsView:
        """Refresh the window at the current time and push the result to Redis."""
        snapshot = self._aggregator.refresh(self._clock())
        view = StatisticsView.from_statistics(snapshot.statistics, snapshot.start_timestamp)
        self._cache.update_latest(view.to_message())
        self.log.debug("statistics_published", count=view.count)
        return view

    def run(self):
        """Start the processor: refresh thread + consumer loop."""
        self.log.info("tick_processor_starting", tick_store=self.settings.tick_store)
        self._refresh_thread.start()
        try:
            self._consumer.run()
        finally:
            self._refresh_running = False
            self._redis.close()
            self.log.info("tick_processor_stopped")


if __name__ == "__main__":
    settings = Settings()
    processor = TickProcessor(settings)
    processor.run()
