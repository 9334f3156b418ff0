"""Centralized configuration using pydantic-settings. All values are env-configurable."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TICKSTATS_")

    # Kafka
    kafka_bootstrap_servers: str = "kafka:9092"
    kafka_producer_batch_size: int = 16384
    kafka_producer_linger_ms: int = 20
    kafka_producer_compression: str = "lz4"
    kafka_consumer_group: str = "tick-statistics"
    kafka_auto_offset_reset: str = "latest"
    kafka_max_poll_records: int = 500
    kafka_session_timeout_ms: int = 30000

    # Redis
    redis_url: str = "redis://redis:6379/0"
    redis_pool_size: int = 20

    # Processing
    refresh_interval_ms: int = 1000
    tick_store: Literal["memory", "redis"] = "memory"

    # Producer
    producer_interval_ms: int = 100
    producer_start_price: str = "100.00"
    producer_volatility: float = 0.05
    producer_late_tick_rate: float = 0.02

    # Topics
    topic_ticks_raw: str = "ticks.raw"
    topic_dlq: str = "ticks.dlq"

    # Monitoring
    enable_prometheus: bool = True
    log_level: str = "INFO"
