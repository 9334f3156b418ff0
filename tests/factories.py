"""Small builders shared across test modules."""

from decimal import Decimal

from processor.tick import Tick


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int):
        self.now += ms


def tick(timestamp: int, price) -> Tick:
    return Tick(timestamp=timestamp, price=Decimal(str(price)))
