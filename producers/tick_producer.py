"""Tick producer: publishes a simulated single-instrument price feed, with occasional late ticks."""

import random
import signal
import time
from decimal import Decimal

import msgpack
from kafka import KafkaProducer
from kafka.errors import KafkaError

from config import Settings, configure_logging
from producers.noise import PriceWalk, late_offset_ms
from producers.schemas import TickEvent

# One series, so every tick shares a key and stays in order on one partition
PARTITION_KEY = "ticks"


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


class TickProducer:
    """
    Random-walk price feed on the ticks topic, MessagePack encoded.
    A configurable share of ticks is backdated, some past the 60s window,
    so downstream stale-tick handling gets exercised.
    """

    def __init__(self, settings: Settings, rng: random.Random | None = None, clock=wall_clock_ms):
        self.settings = settings
        self.log = configure_logging("tick-producer", settings.log_level)
        self._rng = rng or random.Random()
        self._clock = clock
        self._walk = PriceWalk(
            Decimal(settings.producer_start_price),
            settings.producer_volatility,
            self._rng,
        )
        self._interval = settings.producer_interval_ms / 1000.0
        self._running = True
        self._sent = 0
        self._late = 0
        self._errors = 0
        self._producer: KafkaProducer | None = None

        signal.signal(signal.SIGTERM, self._shutdown)
        signal.signal(signal.SIGINT, self._shutdown)
        self.log.info("price_walk_initialized", start_price=settings.producer_start_price)

    def next_tick(self, now_ms: int) -> TickEvent:
        delay = late_offset_ms(self._rng, self.settings.producer_late_tick_rate)
        if delay:
            self._late += 1
        return TickEvent(timestamp=now_ms - delay, price=self._walk.step())

    def _connect(self) -> KafkaProducer:
        self.log.info(
            "connecting_to_kafka",
            servers=self.settings.kafka_bootstrap_servers,
            topic=self.settings.topic_ticks_raw,
        )
        return KafkaProducer(
            bootstrap_servers=self.settings.kafka_bootstrap_servers,
            value_serializer=lambda v: msgpack.packb(v, use_bin_type=True),
            key_serializer=lambda k: k.encode("utf-8"),
            batch_size=self.settings.kafka_producer_batch_size,
            linger_ms=self.settings.kafka_producer_linger_ms,
            compression_type=self.settings.kafka_producer_compression,
            acks="all",
            retries=3,
            retry_backoff_ms=200,
        )

    def publish(self, event: TickEvent):
        self._producer.send(
            self.settings.topic_ticks_raw,
            key=PARTITION_KEY,
            value=event.to_message(),
        ).add_callback(self._on_success).add_errback(self._on_error)

    def run(self):
        """Publish ticks until a shutdown signal arrives."""
        self._producer = self._connect()
        self.log.info("producer_started")

        try:
            while self._running:
                self.publish(self.next_tick(self._clock()))
                # jitter keeps the feed from being perfectly regular
                time.sleep(self._interval * (0.8 + self._rng.random() * 0.4))
        except KeyboardInterrupt:
            pass
        finally:
            self._cleanup()

    def _on_success(self, metadata):
        self._sent += 1
        if self._sent % 1000 == 0:
            self.log.info(
                "producer_progress",
                sent=self._sent,
                late=self._late,
                errors=self._errors,
                last_price=str(self._walk.price),
            )

    def _on_error(self, exc: KafkaError):
        self._errors += 1
        self.log.error("tick_publish_error", error=str(exc))

    def _shutdown(self, signum, frame):
        self.log.info("shutdown_signal_received", signal=signum)
        self._running = False

    def _cleanup(self):
        if self._producer:
            self._producer.flush(timeout=10)
            self._producer.close(timeout=10)
        self.log.info(
            "producer_stopped",
            total_sent=self._sent,
            total_late=self._late,
            total_errors=self._errors,
        )


if __name__ == "__main__":
    settings = Settings()
    producer = TickProducer(settings)
    producer.run()
