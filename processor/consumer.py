"""Kafka tick consumer with manual offset commits and graceful shutdown."""

import signal
from typing import Callable

import msgpack
from kafka import KafkaConsumer

from config import Settings, configure_logging
from processor.dead_letter import DeadLetterQueue
from processor.tick import Tick
from producers.schemas import TickEvent


class StreamConsumer:
    """
    Polls tick batches, decodes MessagePack, validates each message into a Tick,
    hands it to the handler and commits offsets after each batch.
    Messages that fail validation or handling go to the dead letter queue.
    """

    def __init__(self, settings: Settings, handler: Callable[[Tick], None]):
        self.settings = settings
        self.log = configure_logging("consumer", settings.log_level)
        self._handler = handler
        self._running = True
        self._dlq = DeadLetterQueue(settings)
        self._processed = 0
        self._errors = 0

        self._consumer = KafkaConsumer(
            settings.topic_ticks_raw,
            bootstrap_servers=settings.kafka_bootstrap_servers,
            group_id=settings.kafka_consumer_group,
            auto_offset_reset=settings.kafka_auto_offset_reset,
            enable_auto_commit=False,
            value_deserializer=lambda m: msgpack.unpackb(m, raw=False),
            max_poll_records=settings.kafka_max_poll_records,
            session_timeout_ms=settings.kafka_session_timeout_ms,
        )

        signal.signal(signal.SIGTERM, self._shutdown)
        signal.signal(signal.SIGINT, self._shutdown)
        self.log.info(
            "consumer_started",
            topic=settings.topic_ticks_raw,
            group=settings.kafka_consumer_group,
        )

    def run(self):
        """Main consumption loop with batch processing and manual commits."""
        try:
            while self._running:
                batch = self._consumer.poll(timeout_ms=1000)
                if not batch:
                    continue

                for messages in batch.values():
                    for msg in messages:
                        self._handle(msg)

                self._commit()

                if self._processed % 5000 == 0 and self._processed > 0:
                    self.log.info(
                        "consumer_progress",
                        processed=self._processed,
                        errors=self._errors,
                    )
        except KeyboardInterrupt:
            pass
        finally:
            self._cleanup()

    def _handle(self, msg):
        try:
            tick = TickEvent.model_validate(msg.value).to_tick()
            self._handler(tick)
            self._processed += 1
        except Exception as e:
            self._errors += 1
            self.log.error(
                "message_processing_error",
                topic=msg.topic,
                partition=msg.partition,
                offset=msg.offset,
                error=str(e),
            )
            self._dlq.send(
                original_value=msg.value,
                error=e,
                source_topic=msg.topic,
                source_partition=msg.partition,
                source_offset=msg.offset,
            )

    def _commit(self):
        try:
            self._consumer.commit()
        except Exception as e:
            self.log.error("commit_error", error=str(e))

    def _shutdown(self, signum, frame):
        self.log.info("shutdown_signal", signal=signum)
        self._running = False

    def _cleanup(self):
        self.log.info("consumer_closing", processed=self._processed, errors=self._errors)
        self._consumer.close()
        self._dlq.close()
