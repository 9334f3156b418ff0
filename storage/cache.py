"""Latest window statistics in Redis, for dashboards and other readers."""

import json

from storage.redis_client import RedisClient


class StatisticsCache:
    """
    Keeps the most recent statistics in a Redis hash and announces each
    refresh on a pub/sub channel.
    """

    LATEST_KEY = "stats:latest"
    CHANNEL = "channel:statistics"

    def __init__(self, client: RedisClient):
        self._client = client

    def update_latest(self, data: dict):
        def _op(r):
            pipe = r.pipeline()
            pipe.hset(self.LATEST_KEY, mapping={k: json.dumps(v) for k, v in data.items()})
            pipe.publish(self.CHANNEL, json.dumps(data))
            pipe.execute()
        self._client.execute_with_retry(_op)
