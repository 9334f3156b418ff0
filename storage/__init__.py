from .redis_client import RedisClient, CircuitOpenError
from .tick_store import InMemoryTickStore, RedisTickStore, create_tick_store
from .cache import StatisticsCache

__all__ = [
    "RedisClient",
    "CircuitOpenError",
    "InMemoryTickStore",
    "RedisTickStore",
    "create_tick_store",
    "StatisticsCache",
]
