"""Tests for the statistics cache."""

import json
from unittest.mock import MagicMock

from storage.cache import StatisticsCache


class TestStatisticsCache:
    def setup_method(self):
        self.conn = MagicMock()
        self.client = MagicMock()
        self.client.execute_with_retry.side_effect = lambda func: func(self.conn)

    def test_update_latest_sets_hash_and_publishes(self):
        data = {"min": "5", "max": "20", "sum": "35", "avg": "11.67", "count": 3, "start_timestamp": 0}
        StatisticsCache(self.client).update_latest(data)

        pipe = self.conn.pipeline.return_value
        pipe.hset.assert_called_once()
        assert pipe.hset.call_args.kwargs["mapping"]["count"] == "3"
        pipe.publish.assert_called_once_with(StatisticsCache.CHANNEL, json.dumps(data))
        pipe.execute.assert_called_once()

