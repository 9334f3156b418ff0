"""Tick storage keyed by timestamp: an in-process map or a Redis hash."""

import json
import threading
from decimal import Decimal

from config import Settings
from processor.tick import Tick
from storage.redis_client import RedisClient


class InMemoryTickStore:
    """Dict-backed store. Each save/lookup is atomic per key; last write wins."""

    def __init__(self):
        self._ticks: dict[int, Tick] = {}
        self._lock = threading.Lock()

    def save(self, tick: Tick):
        with self._lock:
            self._ticks[tick.timestamp] = tick

    def find_by_timestamp(self, timestamp: int) -> Tick | None:
        with self._lock:
            return self._ticks.get(timestamp)

    def __len__(self) -> int:
        return len(self._ticks)


class RedisTickStore:
    """
    Stores each tick as one field of a Redis hash (field = timestamp).
    Prices are kept as decimal strings.
    """

    TICKS_KEY = "ticks:by_timestamp"

    def __init__(self, client: RedisClient):
        self._client = client

    def save(self, tick: Tick):
        payload = json.dumps({"timestamp": tick.timestamp, "price": str(tick.price)})

        def _op(r):
            r.hset(self.TICKS_KEY, str(tick.timestamp), payload)
        self._client.execute_with_retry(_op)

    def find_by_timestamp(self, timestamp: int) -> Tick | None:
        def _op(r):
            return r.hget(self.TICKS_KEY, str(timestamp))

        raw = self._client.execute_with_retry(_op)
        if raw is None:
            return None
        data = json.loads(raw)
        return Tick(timestamp=int(data["timestamp"]), price=Decimal(data["price"]))


def create_tick_store(settings: Settings, redis_client: RedisClient | None = None):
    """Build the store selected by `settings.tick_store`."""
    if settings.tick_store == "redis":
        if redis_client is None:
            redis_client = RedisClient(settings)
        return RedisTickStore(redis_client)
    return InMemoryTickStore()
