"""Tests for tick freshness."""

from decimal import Decimal

import pytest

from processor.tick import WINDOW_MS, Tick


class TestTick:
    def test_fresh_inside_window(self):
        t = Tick(timestamp=10_000, price=Decimal("1.5"))
        assert t.is_fresh(10_000)
        assert t.is_fresh(30_000)

    def test_fresh_exactly_at_window_boundary(self):
        t = Tick(timestamp=10_000, price=Decimal("1.5"))
        assert t.is_fresh(10_000 + WINDOW_MS)

    def test_stale_one_ms_past_boundary(self):
        t = Tick(timestamp=10_000, price=Decimal("1.5"))
        assert not t.is_fresh(10_000 + WINDOW_MS + 1)

    def test_future_tick_is_fresh(self):
        t = Tick(timestamp=90_000, price=Decimal("1.5"))
        assert t.is_fresh(10_000)

    def test_immutable(self):
        t = Tick(timestamp=1, price=Decimal("1"))
        with pytest.raises(AttributeError):
            t.price = Decimal("2")
