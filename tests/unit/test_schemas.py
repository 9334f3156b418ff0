"""Tests for tick and statistics schemas."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from processor.statistics import Statistics
from producers.schemas import StatisticsView, TickEvent
from tests.factories import tick


class TestTickEvent:
    def test_valid_event(self):
        e = TickEvent(timestamp=1700000000000, price="123.45")
        assert e.price == Decimal("123.45")
        assert e.to_tick() == tick(1700000000000, "123.45")

    def test_missing_price(self):
        with pytest.raises(ValidationError):
            TickEvent(timestamp=1700000000000)

    def test_invalid_price(self):
        with pytest.raises(ValidationError):
            TickEvent(timestamp=1700000000000, price="not-a-number")

    def test_invalid_timestamp(self):
        with pytest.raises(ValidationError):
            TickEvent(timestamp="yesterday", price="1.0")

    def test_message_keeps_price_exact(self):
        e = TickEvent(timestamp=1, price=Decimal("0.10"))
        assert e.to_message() == {"timestamp": 1, "price": "0.10"}
        assert TickEvent.model_validate(e.to_message()).price == Decimal("0.10")

    def test_from_tick(self):
        e = TickEvent.from_tick(tick(5, "9.99"))
        assert e.timestamp == 5
        assert e.price == Decimal("9.99")


class TestStatisticsView:
    def test_empty(self):
        view = StatisticsView.from_statistics(Statistics.EMPTY)
        assert view.min is None
        assert view.max is None
        assert view.sum == Decimal(0)
        assert view.avg == Decimal(0)
        assert view.count == 0

    def test_from_statistics(self):
        stats = Statistics.calculate([tick(0, 10), tick(1, 5), tick(2, 21)])
        view = StatisticsView.from_statistics(stats, start_timestamp=0)
        assert view.to_message() == {
            "min": "5",
            "max": "21",
            "sum": "36",
            "avg": "12",
            "count": 3,
            "start_timestamp": 0,
        }
